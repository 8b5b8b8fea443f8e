# File: src/revit_fbx_exporter/host/revit_document.py
"""
Revit API adapter for the export pipeline.

This module isolates all Revit-specific API calls behind the HostDocument
and SceneExporter interfaces, keeping the rest of the pipeline testable
without a Revit environment. Revit imports are conditional; constructing a
RevitDocument without the Revit API raises RuntimeError.

Usage (inside the Design Automation Revit engine only):
    from revit_fbx_exporter.host.revit_document import RevitDocument

    document = RevitDocument(doc)
    views = list(document.enumerate_elements(lambda e: e.is_exportable_view))
"""

import re
from typing import Any, Callable, Iterator, Optional, Sequence

from revit_fbx_exporter.host.base import (
    FbxExportOptions,
    HostDocument,
    HostElement,
    SceneExporter,
    SceneExportError,
)
from revit_fbx_exporter.utils.logging_config import get_logger

logger = get_logger(__name__)

# =============================================================================
# Conditional Revit Imports
# =============================================================================

REVIT_AVAILABLE = False
REVIT_ERROR: Optional[str] = None

try:
    import clr
    clr.AddReference("RevitAPI")
    from Autodesk.Revit.DB import (
        ElementId,
        FBXExportOptions,
        FilteredElementCollector,
        View,
        View3D,
        ViewSet,
    )
    REVIT_AVAILABLE = True
except ImportError as e:
    REVIT_ERROR = str(e)
except Exception as e:
    REVIT_ERROR = str(e)


_INTEGER_ID = re.compile(r"^-?\d+$")


def element_id_value(element_id: Any) -> str:
    """String form of a Revit ElementId.

    Revit 2024 replaced ``IntegerValue`` with the 64-bit ``Value``.
    """
    value = getattr(element_id, "Value", None)
    if value is None:
        value = element_id.IntegerValue
    return str(value)


def wrap_element(element: Any) -> HostElement:
    """Describe a Revit element as a HostElement."""
    return HostElement(
        element_id=element_id_value(element.Id),
        name=element.Name,
        is_3d_view=isinstance(element, View3D),
        is_template=bool(getattr(element, "IsTemplate", False)),
        native=element,
    )


class RevitDocument(HostDocument, SceneExporter):
    """HostDocument and SceneExporter over a Revit ``Document``.

    Only view elements are enumerated. Ids are accepted either as integer
    element ids or as Revit unique ids.

    Args:
        doc: Revit Document object
    """

    def __init__(self, doc: Any) -> None:
        if not REVIT_AVAILABLE:
            raise RuntimeError(f"Revit API not available: {REVIT_ERROR}")
        if doc is None:
            raise ValueError("A Revit document is required")
        self._doc = doc

    @property
    def doc(self) -> Any:
        return self._doc

    def enumerate_elements(
        self, predicate: Callable[[HostElement], bool]
    ) -> Iterator[HostElement]:
        collector = (
            FilteredElementCollector(self._doc)
            .WhereElementIsNotElementType()
            .OfClass(View)
        )
        for view in collector:
            element = wrap_element(view)
            if predicate(element):
                logger.trace("Found view %s (%s)", element.element_id, element.name)
                yield element

    def get_element(self, element_id: str) -> Optional[HostElement]:
        element = None
        text = element_id.strip()
        if _INTEGER_ID.match(text):
            element = self._doc.GetElement(ElementId(int(text)))
        else:
            element = self._doc.GetElement(text)

        if element is None:
            logger.debug("No element found for id %s", element_id)
            return None
        return wrap_element(element)

    def export_views(
        self,
        folder: str,
        filename: str,
        views: Sequence[HostElement],
        options: FbxExportOptions,
    ) -> None:
        view_set = ViewSet()
        for view in views:
            view_set.Insert(view.native)

        export_options = FBXExportOptions()
        export_options.StopOnError = options.stop_on_error
        export_options.WithoutBoundaryEdges = options.without_boundary_edges

        if not self._doc.Export(folder, filename, view_set, export_options):
            raise SceneExportError(
                f"Revit reported failure exporting {len(views)} view(s) to {filename}"
            )
