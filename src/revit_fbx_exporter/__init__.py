# File: src/revit_fbx_exporter/__init__.py
"""
Revit FBX exporter for Autodesk Design Automation.

Reads ``params.json`` from the work item folder, selects 3D views from the
open model and exports each one to ``exportedFBXs/<view name>.fbx``.

Usage:
    from revit_fbx_exporter import ExportCoordinator, ExportOutcome
"""

from .errors import ErrorKind, ExportFailure, ExportOutcome, RunState
from .parameters import ExportConfiguration, ExportParameters, ParameterError, load_parameters, parse_parameters
from .naming import fbx_filename, sanitize_view_name
from .views import ResolvedView, select_views
from .coordinator import ExportCoordinator

__all__ = [
    # Errors and outcome
    "ErrorKind",
    "ExportFailure",
    "ExportOutcome",
    "RunState",
    # Parameters
    "ExportConfiguration",
    "ExportParameters",
    "ParameterError",
    "load_parameters",
    "parse_parameters",
    # Naming
    "fbx_filename",
    "sanitize_view_name",
    # Views
    "ResolvedView",
    "select_views",
    # Coordinator
    "ExportCoordinator",
]
