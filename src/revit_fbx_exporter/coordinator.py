# File: src/revit_fbx_exporter/coordinator.py
"""
Export Coordinator: the main entry point for one FBX export run.

Coordinates the parameter loader, view selector and host exporter, and
tracks the run on an ExportOutcome.

Pipeline steps:
1. Load and validate ``params.json`` from the working directory
2. Select the views to export
3. Create the output directory
4. Export each view to ``<sanitized view name>.fbx``

Usage:
    from revit_fbx_exporter.coordinator import ExportCoordinator

    coordinator = ExportCoordinator(document=revit_doc, exporter=revit_doc)
    outcome = coordinator.run()
    if outcome.succeeded:
        ...
"""

import os
from typing import List, Optional

from revit_fbx_exporter.config import ExporterConfig
from revit_fbx_exporter.errors import ErrorKind, ExportFailure, ExportOutcome, RunState, describe_cause
from revit_fbx_exporter.host.base import FbxExportOptions, HostDocument, SceneExporter
from revit_fbx_exporter.naming import fbx_filename
from revit_fbx_exporter.parameters import ExportConfiguration, load_parameters
from revit_fbx_exporter.views import ResolvedView, select_views
from revit_fbx_exporter.utils.logging_config import get_logger

logger = get_logger(__name__)

EXPORT_OPTIONS = FbxExportOptions(stop_on_error=True, without_boundary_edges=True)


class ExportCoordinator:
    """Runs the export pipeline against injected host collaborators.

    Args:
        document: Open host document to select views from
        exporter: FBX export capability
        working_dir: Directory holding params.json and receiving the output
            directory. Defaults to the process working directory at run time.
        config: Exporter configuration. Defaults to environment settings.
    """

    def __init__(
        self,
        document: HostDocument,
        exporter: SceneExporter,
        working_dir: Optional[str] = None,
        config: Optional[ExporterConfig] = None,
    ) -> None:
        self._document = document
        self._exporter = exporter
        self._working_dir = working_dir
        self._config = config or ExporterConfig.from_env()

    @property
    def working_dir(self) -> str:
        return self._working_dir or os.getcwd()

    @property
    def params_path(self) -> str:
        return os.path.join(self.working_dir, self._config.params_filename)

    @property
    def export_path(self) -> str:
        return os.path.join(self.working_dir, self._config.export_dir_name)

    def run(self, outcome: Optional[ExportOutcome] = None) -> ExportOutcome:
        """Execute the full pipeline.

        Args:
            outcome: Outcome to continue recording on (e.g., one that already
                holds host-context trace lines). A fresh one by default.

        Returns:
            ExportOutcome; ``succeeded`` is True only if every selected view
            was exported
        """
        outcome = outcome or ExportOutcome()

        config = load_parameters(self.params_path, outcome)
        if config is None:
            return outcome

        views = select_views(config, self._document, outcome)
        if views is None:
            return outcome

        self.export_views(views, outcome, config)
        return outcome

    def _ensure_export_path(self, outcome: ExportOutcome) -> Optional[str]:
        export_path = self.export_path
        if not os.path.isdir(export_path):
            try:
                os.makedirs(export_path, exist_ok=True)
            except OSError as e:
                outcome.fail(
                    ErrorKind.DIRECTORY_CREATION,
                    f"Could not create export directory {export_path}",
                    e,
                )
                return None

        outcome.export_path = export_path
        outcome.trace(f"Export Path: {export_path}")
        return export_path

    def export_views(
        self,
        views: List[ResolvedView],
        outcome: ExportOutcome,
        config: Optional[ExportConfiguration] = None,
    ) -> bool:
        """Export each view to its own FBX file.

        Args:
            views: Ordered views to export
            outcome: Run outcome to record progress and failures on
            config: Supplies the failure policy; abort on first error when None

        Returns:
            True if every view was exported
        """
        stop_on_first_error = config.stop_on_first_error if config else True

        if not views:
            outcome.fail(ErrorKind.EMPTY_SELECTION, "No 3D views to be exported...")
            return False

        export_path = self._ensure_export_path(outcome)
        if export_path is None:
            return False

        outcome.advance(RunState.EXPORTING)
        outcome.trace("Starting the export task...")

        for index, view in enumerate(views, start=1):
            filename = None
            try:
                filename = fbx_filename(view.name, fallback=view.view_id)
                outcome.trace(f"Exporting {filename}...")
                self._exporter.export_views(export_path, filename, [view.element], EXPORT_OPTIONS)
            except Exception as e:
                target = filename or "a file name"
                message = f"Export of view '{view.name}' ({view.view_id}) to {target} failed"
                if stop_on_first_error:
                    outcome.fail(ErrorKind.EXPORT_CALL, message, e)
                    skipped = len(views) - index
                    if skipped:
                        outcome.trace(f"Skipping {skipped} remaining view(s)")
                    return False

                failure = ExportFailure(
                    kind=ErrorKind.EXPORT_CALL,
                    message=message,
                    cause=describe_cause(e),
                    view_id=view.view_id,
                )
                outcome.view_failures.append(failure)
                outcome.log.append(f"Error occurred: {failure}")
                logger.error("Error occurred: %s", failure)
                continue

            outcome.exported.append(filename)

        if outcome.view_failures:
            outcome.fail(
                ErrorKind.EXPORT_CALL,
                f"{len(outcome.view_failures)} of {len(views)} view(s) failed to export",
            )
            return False

        outcome.advance(RunState.COMPLETED)
        outcome.trace(f"Exported {len(outcome.exported)} view(s)")
        return True
