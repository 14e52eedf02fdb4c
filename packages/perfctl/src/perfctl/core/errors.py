from __future__ import annotations

from dataclasses import dataclass

from .exit_codes import ERR_ARTIFACT, ERR_CONFIG, ERR_VALIDATION, OK


@dataclass
class ScriptError(Exception):
    message: str
    code: int
    kind: str = "generic_error"

    def __str__(self) -> str:
        return self.message


class ConfigurationError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_CONFIG, kind="configuration_error")


class NoHistoryError(ScriptError):
    """Nothing to compare against yet. Callers report it and exit successfully."""

    def __init__(self, message: str) -> None:
        super().__init__(message, OK, kind="no_history")


class MissingBaselineError(ScriptError):
    def __init__(self, name: str, directory: str) -> None:
        super().__init__(f"baseline not found: {name} (in {directory})", ERR_CONFIG, kind="missing_baseline")
        self.name = name


class FileReadError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_ARTIFACT, kind="file_read_error")


class ReportValidationError(ScriptError):
    def __init__(self, message: str) -> None:
        super().__init__(message, ERR_VALIDATION, kind="report_validation_error")


class MetricMissingError(LookupError):
    """A statistic is absent from one side of a comparison; the pair is skipped."""

    def __init__(self, metric: str, statistic: str | None) -> None:
        path = metric if statistic is None else f"{metric}.{statistic}"
        super().__init__(f"metric not present: {path}")
        self.metric = metric
        self.statistic = statistic
