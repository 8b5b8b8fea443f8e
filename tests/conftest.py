# tests/conftest.py
import sys
import os

# Add src directory to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../src')))

import json
import pytest
from typing import Callable, Iterator, List, Optional, Sequence

from revit_fbx_exporter.config import ExporterConfig
from revit_fbx_exporter.host.base import (
    FbxExportOptions,
    HostDocument,
    HostElement,
    SceneExporter,
    SceneExportError,
)


class InMemoryDocument(HostDocument, SceneExporter):
    """Host document backed by a list of elements.

    Exports write a small placeholder file so tests can inspect the output
    directory. ``fail_on`` names views whose export raises.
    """

    def __init__(self, elements: List[HostElement], fail_on: Sequence[str] = ()):
        self.elements = list(elements)
        self.fail_on = set(fail_on)
        self.export_calls = []

    def enumerate_elements(self, predicate: Callable[[HostElement], bool]) -> Iterator[HostElement]:
        for element in self.elements:
            if predicate(element):
                yield element

    def get_element(self, element_id: str) -> Optional[HostElement]:
        for element in self.elements:
            if element.element_id == element_id:
                return element
        return None

    def export_views(self, folder: str, filename: str, views: Sequence[HostElement],
                     options: FbxExportOptions) -> None:
        self.export_calls.append((folder, filename, [v.element_id for v in views], options))
        for view in views:
            if view.name in self.fail_on or view.element_id in self.fail_on:
                raise SceneExportError(f"Mock export failure for {view.name}")
        with open(os.path.join(folder, filename), "wb") as f:
            f.write(b"Kaydara FBX Binary")


def view_3d(element_id: str, name: str, template: bool = False) -> HostElement:
    return HostElement(element_id=element_id, name=name, is_3d_view=True, is_template=template)


def plan_view(element_id: str, name: str) -> HostElement:
    return HostElement(element_id=element_id, name=name, is_3d_view=False, is_template=False)


@pytest.fixture
def sample_elements():
    """Two exportable 3D views, one 3D template and a floor plan."""
    return [
        view_3d("1001", "Default 3D View"),
        view_3d("1002", "3D Template", template=True),
        plan_view("1003", "Level 1"),
        view_3d("1004", "{3D}"),
    ]


@pytest.fixture
def make_document():
    """Factory for InMemoryDocument."""
    def _make(elements, fail_on=()):
        return InMemoryDocument(elements, fail_on=fail_on)
    return _make


@pytest.fixture
def config():
    """Exporter configuration independent of the test process environment."""
    return ExporterConfig(environ={})


@pytest.fixture
def workdir(tmp_path):
    """Job working directory."""
    return tmp_path


@pytest.fixture
def write_params(workdir):
    """Write params.json into the working directory."""
    def _write(data, raw: bool = False):
        path = workdir / "params.json"
        path.write_text(data if raw else json.dumps(data), encoding="utf-8")
        return str(path)
    return _write
