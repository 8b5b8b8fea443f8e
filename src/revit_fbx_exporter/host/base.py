# File: src/revit_fbx_exporter/host/base.py
"""
Host abstractions consumed by the export pipeline.

The pipeline never talks to the Revit API directly. It sees the open model
as a HostDocument (element enumeration and lookup) and the FBX writer as a
SceneExporter. RevitDocument implements both for a live Revit session;
tests implement them in memory.

Usage:
    from revit_fbx_exporter.host.base import HostDocument, SceneExporter

    class MyDocument(HostDocument, SceneExporter):
        ...
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Optional, Sequence


@dataclass
class HostElement:
    """A host element as seen by the pipeline.

    Attributes:
        element_id: Opaque identifier, as written in ``viewIds``
        name: Display name
        is_3d_view: Whether the element is a 3D view
        is_template: Whether the element is a view template
        native: The underlying host object (e.g., a Revit View3D)
    """
    element_id: str
    name: str
    is_3d_view: bool = False
    is_template: bool = False
    native: Any = None

    @property
    def is_exportable_view(self) -> bool:
        return self.is_3d_view and not self.is_template


@dataclass(frozen=True)
class FbxExportOptions:
    """Options forwarded to every FBX export call."""
    stop_on_error: bool = True
    without_boundary_edges: bool = True


class SceneExportError(RuntimeError):
    """Raised by a SceneExporter when the host reports a failed export."""


class HostDocument(ABC):
    """Read-only view of an open host document."""

    @abstractmethod
    def enumerate_elements(
        self, predicate: Callable[[HostElement], bool]
    ) -> Iterator[HostElement]:
        """Yield elements matching ``predicate`` in the host's natural order."""
        ...

    @abstractmethod
    def get_element(self, element_id: str) -> Optional[HostElement]:
        """Resolve an element id, or return None if nothing matches."""
        ...


class SceneExporter(ABC):
    """The host's "export views to FBX" capability."""

    @abstractmethod
    def export_views(
        self,
        folder: str,
        filename: str,
        views: Sequence[HostElement],
        options: FbxExportOptions,
    ) -> None:
        """Export ``views`` to ``folder/filename``.

        Raises:
            SceneExportError: If the host reports failure. Host-specific
                exceptions may propagate as well.
        """
        ...
