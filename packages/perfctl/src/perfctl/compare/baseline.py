from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum

from ..core.errors import ConfigurationError, MissingBaselineError, NoHistoryError
from ..metrics.snapshot import SnapshotFile

DEFAULT_MAX_HISTORY = 5


class SelectionMode(str, Enum):
    EXPLICIT_LIST = "explicit_list"
    MOST_RECENT_N = "most_recent_n"


@dataclass(frozen=True)
class BaselineSelection:
    mode: SelectionMode
    count: int = DEFAULT_MAX_HISTORY
    names: tuple[str, ...] = ()

    @classmethod
    def build(cls, names: Sequence[str] | None, count: int = DEFAULT_MAX_HISTORY) -> "BaselineSelection":
        if count < 1:
            raise ConfigurationError(f"history count must be a positive integer, got {count}")
        if names:
            return cls(mode=SelectionMode.EXPLICIT_LIST, count=count, names=tuple(names))
        return cls(mode=SelectionMode.MOST_RECENT_N, count=count)


@dataclass(frozen=True)
class BaselineSet:
    mode: SelectionMode
    current: SnapshotFile
    baselines: tuple[SnapshotFile, ...]

    @property
    def most_recent(self) -> SnapshotFile:
        return self.baselines[0]


def select_baselines(
    history: Sequence[SnapshotFile],
    selection: BaselineSelection,
    resolve: Callable[[str], SnapshotFile | None],
) -> BaselineSet:
    """Pick the current snapshot and the baselines it is compared against.

    `history` is ordered most recent first; its head is the current snapshot.
    Explicit names are resolved through `resolve` and must all exist.
    """
    if not history:
        raise NoHistoryError("no results available to compare")
    current = history[0]
    if selection.mode is SelectionMode.EXPLICIT_LIST:
        resolved: list[SnapshotFile] = []
        for name in selection.names:
            found = resolve(name)
            if found is None:
                raise MissingBaselineError(name, str(current.path.parent))
            resolved.append(found)
        baselines = tuple(resolved)
    else:
        count = min(selection.count, len(history) - 1)
        baselines = tuple(history[1 : count + 1])
    if not baselines:
        raise NoHistoryError("no previous results to compare; run the test at least twice to enable comparison")
    return BaselineSet(mode=selection.mode, current=current, baselines=baselines)
