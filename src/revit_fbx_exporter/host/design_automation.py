# File: src/revit_fbx_exporter/host/design_automation.py
"""
Design Automation entry point.

The Revit engine fires ``DesignAutomationReadyEvent`` once the input model
is open. The handler checks the host context, then runs an ExportCoordinator
against the open document and reports the result through ``e.Succeeded``.
Everything printed to stdout ends up in the work item report.

Usage (add-in startup, inside the Revit engine):
    from DesignAutomationFramework import DesignAutomationBridge
    from revit_fbx_exporter.host.design_automation import FbxExportApplication

    app = FbxExportApplication()
    app.on_startup(DesignAutomationBridge)
"""

from dataclasses import dataclass
from typing import Any, Callable, Optional

from revit_fbx_exporter.config import ExporterConfig
from revit_fbx_exporter.coordinator import ExportCoordinator
from revit_fbx_exporter.errors import ErrorKind, ExportOutcome, RunState
from revit_fbx_exporter.host.revit_document import RevitDocument
from revit_fbx_exporter.utils.logging_config import ExporterLogger, get_logger

logger = get_logger(__name__)

# Model name used when the add-in is debugged outside Design Automation
LOCAL_INPUT_FILE = "InputFile.rvt"

# Failure kind for an unexpected exception, by the stage the run had reached
UNEXPECTED_FAILURE_KINDS = {
    RunState.IDLE: ErrorKind.CONFIGURATION,
    RunState.PARAMS_LOADED: ErrorKind.VIEW_RESOLUTION,
    RunState.VIEWS_RESOLVED: ErrorKind.EXPORT_CALL,
    RunState.EXPORTING: ErrorKind.EXPORT_CALL,
}


@dataclass
class DesignAutomationData:
    """Python-side mirror of the host's DesignAutomationData.

    Attributes:
        revit_app: Revit Application
        file_path: Path of the opened model
        revit_doc: The opened Revit Document
    """
    revit_app: Any
    file_path: Optional[str]
    revit_doc: Any

    @classmethod
    def from_host(cls, data: Any) -> Optional["DesignAutomationData"]:
        """Convert the .NET DesignAutomationData object, if there is one."""
        if data is None:
            return None
        return cls(
            revit_app=getattr(data, "RevitApp", None),
            file_path=getattr(data, "FilePath", None),
            revit_doc=getattr(data, "RevitDoc", None),
        )


class FbxExportApplication:
    """Add-in application object.

    Args:
        config: Exporter configuration. Defaults to environment settings.
        document_factory: Builds the HostDocument/SceneExporter for a Revit
            document. Defaults to RevitDocument.
        working_dir: Working directory override, mainly for tests
    """

    def __init__(
        self,
        config: Optional[ExporterConfig] = None,
        document_factory: Optional[Callable[[Any], Any]] = None,
        working_dir: Optional[str] = None,
    ) -> None:
        self._config = config or ExporterConfig.from_env()
        self._document_factory = document_factory or RevitDocument
        self._working_dir = working_dir

    @property
    def config(self) -> ExporterConfig:
        return self._config

    def on_startup(self, bridge: Any) -> bool:
        """Configure logging and subscribe to the ready event.

        Args:
            bridge: The host's DesignAutomationBridge (or any object exposing
                a ``DesignAutomationReadyEvent`` supporting ``+=``)
        """
        ExporterLogger.configure(
            debug_mode=self._config.debug,
            log_dir=self._config.log_dir,
        )
        self._config.validate()
        bridge.DesignAutomationReadyEvent += self.handle_ready_event
        return True

    def on_shutdown(self, bridge: Any = None) -> bool:
        if bridge is not None:
            bridge.DesignAutomationReadyEvent -= self.handle_ready_event
        return True

    def handle_ready_event(self, sender: Any, e: Any) -> None:
        """DesignAutomationReadyEvent handler."""
        logger.info("Design Automation Ready event triggered...")
        data = DesignAutomationData.from_host(getattr(e, "DesignAutomationData", None))
        e.Succeeded = False
        try:
            outcome = self.export_fbx(data)
        except Exception as ex:
            logger.error("Error occurred: unexpected failure in export: %s", ex)
            return
        e.Succeeded = outcome.succeeded

    def handle_application_initialized(self, sender: Any, e: Any) -> bool:
        """ApplicationInitialized handler for local debugging.

        Opens ``InputFile.rvt`` from the working directory with the sending
        application and runs the same export.
        """
        app = sender
        try:
            doc = app.OpenDocumentFile(LOCAL_INPUT_FILE)
        except Exception as ex:
            outcome = ExportOutcome()
            outcome.fail(
                ErrorKind.INVALID_HOST_CONTEXT,
                f"Could not open {LOCAL_INPUT_FILE}",
                ex,
            )
            return False
        data = DesignAutomationData(revit_app=app, file_path=LOCAL_INPUT_FILE, revit_doc=doc)
        return self.export_fbx(data).succeeded

    def _check_context(self, data: Optional[DesignAutomationData], outcome: ExportOutcome) -> bool:
        if data is None:
            outcome.fail(ErrorKind.INVALID_HOST_CONTEXT, "No Design Automation data supplied")
            return False
        if data.revit_app is None:
            outcome.fail(ErrorKind.INVALID_HOST_CONTEXT, "Revit application is not available")
            return False
        if not data.file_path or not str(data.file_path).strip():
            outcome.fail(ErrorKind.INVALID_HOST_CONTEXT, "Model file path is empty")
            return False
        if data.revit_doc is None:
            outcome.fail(ErrorKind.INVALID_HOST_CONTEXT, "Revit document is not available")
            return False
        return True

    def export_fbx(self, data: Optional[DesignAutomationData]) -> ExportOutcome:
        """Run one export against the host context.

        Returns:
            ExportOutcome of the run
        """
        outcome = ExportOutcome()
        if not self._check_context(data, outcome):
            return outcome

        outcome.trace(f"Model: {data.file_path}")

        try:
            document = self._document_factory(data.revit_doc)
        except (RuntimeError, ValueError) as ex:
            outcome.fail(ErrorKind.INVALID_HOST_CONTEXT, "Cannot access the Revit document", ex)
            return outcome

        coordinator = ExportCoordinator(
            document=document,
            exporter=document,
            working_dir=self._working_dir,
            config=self._config,
        )
        try:
            coordinator.run(outcome)
        except Exception as ex:
            kind = UNEXPECTED_FAILURE_KINDS.get(outcome.state, ErrorKind.EXPORT_CALL)
            outcome.fail(kind, "Unexpected error during export", ex)

        if outcome.succeeded:
            logger.info("Export completed: %d file(s) in %s", len(outcome.exported), outcome.export_path)
        else:
            logger.info("Export failed: %s", outcome.failure)
        return outcome
