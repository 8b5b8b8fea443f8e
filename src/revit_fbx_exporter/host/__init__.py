# File: src/revit_fbx_exporter/host/__init__.py
"""
Host integration: abstract document/exporter interfaces, the Revit adapter
and the Design Automation entry point.
"""

from .base import (
    FbxExportOptions,
    HostDocument,
    HostElement,
    SceneExporter,
    SceneExportError,
)

__all__ = [
    "FbxExportOptions",
    "HostDocument",
    "HostElement",
    "SceneExporter",
    "SceneExportError",
]
