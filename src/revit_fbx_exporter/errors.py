# File: src/revit_fbx_exporter/errors.py
"""
Error model and run outcome for the FBX export pipeline.

Stages never raise for expected failures. They record an ExportFailure on
the run's ExportOutcome and return None/False, and the caller checks the
outcome. Every failure kind is terminal for the run.

Usage:
    from revit_fbx_exporter.errors import ErrorKind, ExportOutcome

    outcome = ExportOutcome()
    outcome.fail(ErrorKind.CONFIGURATION, "params.json not found")
    assert not outcome.succeeded
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from revit_fbx_exporter.utils.logging_config import get_logger

logger = get_logger(__name__)


class ErrorKind(Enum):
    """Category of a terminal run failure."""
    CONFIGURATION = "configuration"
    INVALID_HOST_CONTEXT = "invalid_host_context"
    DIRECTORY_CREATION = "directory_creation"
    VIEW_RESOLUTION = "view_resolution"
    EMPTY_SELECTION = "empty_selection"
    EXPORT_CALL = "export_call"


class RunState(Enum):
    """Lifecycle of a single export run."""
    IDLE = "idle"
    PARAMS_LOADED = "params_loaded"
    VIEWS_RESOLVED = "views_resolved"
    EXPORTING = "exporting"
    COMPLETED = "completed"
    FAILED = "failed"


def describe_cause(exc: Optional[BaseException]) -> Optional[str]:
    """Return the message of an exception and of the exception it wraps.

    Host exceptions usually carry the useful detail one level down, so the
    chained ``__cause__``/``__context__`` message is appended when present.
    """
    if exc is None:
        return None
    message = str(exc) or type(exc).__name__
    inner = exc.__cause__ or exc.__context__
    if inner is not None and str(inner):
        message = f"{message} (caused by: {inner})"
    return message


@dataclass
class ExportFailure:
    """A single tagged failure.

    Attributes:
        kind: Failure category
        message: Human-readable description
        cause: Message of the underlying exception, if any
        view_id: View the failure belongs to, for per-view export failures
    """
    kind: ErrorKind
    message: str
    cause: Optional[str] = None
    view_id: Optional[str] = None

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


@dataclass
class ExportOutcome:
    """Aggregate result of one export run.

    Attributes:
        state: Current (or final) run state
        failure: First terminal failure, None while the run is healthy
        view_failures: Per-view export failures collected in best-effort mode
        exported: Filenames written, in export order
        export_path: Output directory, once known
        log: Ordered list of trace and error messages
    """
    state: RunState = RunState.IDLE
    failure: Optional[ExportFailure] = None
    view_failures: List[ExportFailure] = field(default_factory=list)
    exported: List[str] = field(default_factory=list)
    export_path: Optional[str] = None
    log: List[str] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return self.state == RunState.COMPLETED and self.failure is None

    def trace(self, message: str) -> None:
        """Record an informational line and echo it to the log stream."""
        self.log.append(message)
        logger.info(message)

    def advance(self, state: RunState) -> None:
        """Move to the next run state unless the run already failed."""
        if self.state != RunState.FAILED:
            self.state = state

    def fail(
        self,
        kind: ErrorKind,
        message: str,
        exc: Optional[BaseException] = None,
    ) -> ExportFailure:
        """Record a terminal failure and move the run to FAILED.

        Only the first failure is kept as ``failure``; later calls are still
        logged.
        """
        failure = ExportFailure(kind=kind, message=message, cause=describe_cause(exc))
        if kind == ErrorKind.EMPTY_SELECTION:
            self.log.append(str(failure))
            logger.warning(str(failure))
        else:
            self.log.append(f"Error occurred: {failure}")
            logger.error("Error occurred: %s", failure)
        if self.failure is None:
            self.failure = failure
        self.state = RunState.FAILED
        return failure

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dict for JSON output."""
        return {
            "succeeded": self.succeeded,
            "state": self.state.value,
            "error_kind": self.failure.kind.value if self.failure else None,
            "error": str(self.failure) if self.failure else None,
            "exported_count": len(self.exported),
            "exported": self.exported,
            "failed_views": [f.view_id for f in self.view_failures],
            "export_path": self.export_path,
        }
