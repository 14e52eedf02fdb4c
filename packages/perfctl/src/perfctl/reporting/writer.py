from __future__ import annotations

from pathlib import Path

from ..core.fs import write_text_atomic
from ..core.runtime.clock import utc_stamp
from ..core.runtime.serialize import dumps_json
from .document import ComparisonReport, build_report_payload, validate_report_payload
from .markdown import render_markdown

_EXTENSIONS = {"markdown": "md", "json": "json"}


def report_path(directory: Path, report: ComparisonReport, fmt: str) -> Path:
    return directory / f"comparison-{utc_stamp(report.generated_at)}.{_EXTENSIONS[fmt]}"


def render_document(report: ComparisonReport, fmt: str) -> str:
    if fmt == "json":
        return dumps_json(validate_report_payload(build_report_payload(report)), pretty=True) + "\n"
    return render_markdown(report)


def write_report(directory: Path, report: ComparisonReport, fmt: str = "markdown") -> Path:
    """Render the whole document, then write it once.

    An earlier report with the same stamp is never replaced; the new one gets a
    `-1`, `-2`, ... suffix instead.
    """
    content = render_document(report, fmt)
    base = report_path(directory, report, fmt)
    target, attempt = base, 0
    while True:
        try:
            return write_text_atomic(target, content, overwrite=False)
        except FileExistsError:
            attempt += 1
            target = base.with_name(f"{base.stem}-{attempt}{base.suffix}")
