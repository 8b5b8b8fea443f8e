# File: src/revit_fbx_exporter/views.py
"""
View selection: turns an ExportConfiguration into the ordered list of views
to export.

Selection by id is all-or-nothing. One id that is unknown, not a 3D view, or
a template fails the run, and no subset is exported.
"""

from dataclasses import dataclass
from typing import List, Optional

from revit_fbx_exporter.errors import ErrorKind, ExportOutcome, RunState
from revit_fbx_exporter.host.base import HostDocument, HostElement
from revit_fbx_exporter.parameters import ExportConfiguration
from revit_fbx_exporter.utils.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class ResolvedView:
    """A view chosen for export."""
    view_id: str
    name: str
    element: HostElement


def _to_resolved(element: HostElement) -> ResolvedView:
    return ResolvedView(view_id=element.element_id, name=element.name, element=element)


def _describe_rejection(view_id: str, element: Optional[HostElement]) -> Optional[str]:
    if element is None:
        return f"'{view_id}' does not exist in the document"
    if not element.is_3d_view:
        return f"'{view_id}' ({element.name}) is not a 3D view"
    if element.is_template:
        return f"'{view_id}' ({element.name}) is a view template"
    return None


def collect_all_views(document: HostDocument) -> List[ResolvedView]:
    """All non-template 3D views, in document order."""
    return [
        _to_resolved(element)
        for element in document.enumerate_elements(lambda e: e.is_exportable_view)
    ]


def resolve_view_ids(document: HostDocument, view_ids: List[str]):
    """Resolve requested ids.

    Returns:
        Tuple of (resolved views in request order, list of rejection reasons)
    """
    resolved: List[ResolvedView] = []
    rejected: List[str] = []
    for view_id in view_ids:
        element = document.get_element(view_id)
        reason = _describe_rejection(view_id, element)
        if reason:
            rejected.append(reason)
            continue
        logger.trace("Resolved view %s -> %s", view_id, element.name)
        resolved.append(_to_resolved(element))
    return resolved, rejected


def select_views(
    config: ExportConfiguration,
    document: HostDocument,
    outcome: ExportOutcome,
) -> Optional[List[ResolvedView]]:
    """Select the views to export.

    Args:
        config: Resolved export configuration
        document: Open host document
        outcome: Run outcome to record progress and failures on

    Returns:
        Non-empty ordered list of ResolvedView, or None after recording a
        VIEW_RESOLUTION or EMPTY_SELECTION failure
    """
    outcome.trace("Collecting 3D views...")

    rejected: List[str] = []
    try:
        if config.export_all:
            views = collect_all_views(document)
        else:
            views, rejected = resolve_view_ids(document, config.view_ids)
    except Exception as e:
        outcome.fail(ErrorKind.VIEW_RESOLUTION, "Could not query views from the document", e)
        return None

    if not config.export_all:
        if rejected:
            outcome.fail(
                ErrorKind.VIEW_RESOLUTION,
                f"{len(rejected)} of {len(config.view_ids)} requested view(s) "
                f"cannot be exported: " + "; ".join(rejected),
            )
            return None

    if not views:
        outcome.fail(ErrorKind.EMPTY_SELECTION, "No 3D views to be exported...")
        return None

    outcome.trace(f"Selected {len(views)} 3D view(s) for export")
    outcome.advance(RunState.VIEWS_RESOLVED)
    return views
