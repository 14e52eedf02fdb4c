from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..core.errors import ConfigurationError, NoHistoryError
from ..metrics.snapshot import SnapshotFile

DEFAULT_SNAPSHOT_GLOB = "k6-output-*.json"
_SCRIPT_SUFFIXES = (".ts", ".js")


@dataclass(frozen=True)
class TestIdentity:
    __test__ = False

    client: str
    test: str

    @classmethod
    def from_args(cls, client: str | None, test: str | None) -> "TestIdentity":
        client_name = (client or "").strip()
        test_name = (test or "").strip()
        if not client_name or not test_name:
            raise ConfigurationError("--client and --test are required")
        for suffix in _SCRIPT_SUFFIXES:
            if test_name.endswith(suffix):
                test_name = test_name[: -len(suffix)]
                break
        for part in (client_name, test_name):
            if not part or part in {".", ".."} or "/" in part or "\\" in part:
                raise ConfigurationError(f"invalid test identity component: {part!r}")
        return cls(client=client_name, test=test_name)

    def __str__(self) -> str:
        return f"{self.client}/{self.test}"


@dataclass(frozen=True)
class ResultStore:
    reports_root: Path
    snapshot_glob: str = DEFAULT_SNAPSHOT_GLOB

    def directory(self, identity: TestIdentity) -> Path:
        return self.reports_root / identity.client / identity.test

    def list_snapshots(self, identity: TestIdentity) -> list[SnapshotFile]:
        """All snapshot files for `identity`, most recent first.

        Ordering is by modification time, then by file name, both descending, so
        snapshots written within the same clock tick still follow the creation
        order embedded in their names.
        """
        root = self.directory(identity)
        found = [SnapshotFile.from_path(p) for p in root.glob(self.snapshot_glob) if p.is_file()] if root.is_dir() else []
        if not found:
            raise NoHistoryError(f"no previous results found for {identity}; this appears to be the first execution")
        return sorted(found, key=lambda s: (s.mtime, s.name), reverse=True)

    def resolve(self, identity: TestIdentity, name: str) -> SnapshotFile | None:
        if not name or Path(name).name != name:
            return None
        candidate = self.directory(identity) / name
        if not candidate.is_file():
            return None
        return SnapshotFile.from_path(candidate)
