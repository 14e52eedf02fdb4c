from __future__ import annotations

import os
import tempfile
from pathlib import Path

from .errors import FileReadError


def resolve_under(base: Path, path: str | Path) -> Path:
    raw = Path(path)
    return raw.resolve() if raw.is_absolute() else (base / raw).resolve()


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as exc:
        raise FileReadError(f"unable to read {path}: {exc.strerror or exc}") from exc
    except UnicodeDecodeError as exc:
        raise FileReadError(f"unable to decode {path} as utf-8: {exc.reason} at byte {exc.start}") from exc


def write_text_atomic(path: Path, content: str, encoding: str = "utf-8", overwrite: bool = True) -> Path:
    """Write `content` to `path` in one step.

    The document goes to a temporary sibling first and is renamed over the
    target only after it is fully flushed, so readers never observe a partial
    file and a failed write leaves nothing behind.

    With `overwrite=False` an existing target is left alone and
    `FileExistsError` is raised.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding=encoding) as handle:
            handle.write(content)
            handle.flush()
            os.fsync(handle.fileno())
        if overwrite:
            os.replace(tmp, path)
        else:
            os.link(tmp, path)
            tmp.unlink()
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return path
