# File: tests/unit/test_views.py
"""
Unit tests for view selection.

Tests cover:
- Export-all selection (templates and non-3D views excluded, order kept)
- Selection by id (order and duplicates kept)
- All-or-nothing rejection of bad ids
- Empty selections
"""

import pytest

from revit_fbx_exporter.errors import ErrorKind, ExportOutcome, RunState
from revit_fbx_exporter.parameters import ExportConfiguration
from revit_fbx_exporter.views import collect_all_views, resolve_view_ids, select_views

from conftest import plan_view, view_3d


def by_id(*ids):
    return ExportConfiguration(export_all=False, view_ids=list(ids))


EXPORT_ALL = ExportConfiguration(export_all=True)


class TestExportAll:
    """Test selection of every exportable view."""

    def test_templates_and_plans_excluded(self, make_document, sample_elements):
        views = collect_all_views(make_document(sample_elements))
        assert [v.view_id for v in views] == ["1001", "1004"]

    @pytest.mark.parametrize("n_views,n_templates", [(1, 0), (5, 2), (8, 8), (0, 0)])
    def test_count_is_views_minus_templates(self, make_document, n_views, n_templates):
        elements = [
            view_3d(str(i), f"View {i}", template=i < n_templates)
            for i in range(n_views)
        ]
        views = collect_all_views(make_document(elements))
        assert len(views) == n_views - n_templates

    def test_enumeration_order_preserved(self, make_document):
        elements = [view_3d("c", "C"), view_3d("a", "A"), view_3d("b", "B")]
        views = collect_all_views(make_document(elements))
        assert [v.name for v in views] == ["C", "A", "B"]

    def test_select_views_advances_state(self, make_document, sample_elements):
        outcome = ExportOutcome(state=RunState.PARAMS_LOADED)
        views = select_views(EXPORT_ALL, make_document(sample_elements), outcome)
        assert len(views) == 2
        assert outcome.state == RunState.VIEWS_RESOLVED

    def test_no_views_is_empty_selection(self, make_document):
        outcome = ExportOutcome()
        document = make_document([view_3d("1", "T", template=True), plan_view("2", "Level 1")])
        assert select_views(EXPORT_ALL, document, outcome) is None
        assert outcome.failure.kind == ErrorKind.EMPTY_SELECTION
        assert not outcome.succeeded


class TestSelectById:
    """Test selection from an explicit id list."""

    def test_requested_order_kept(self, make_document, sample_elements):
        outcome = ExportOutcome()
        views = select_views(by_id("1004", "1001"), make_document(sample_elements), outcome)
        assert [v.view_id for v in views] == ["1004", "1001"]
        assert [v.name for v in views] == ["{3D}", "Default 3D View"]

    def test_duplicates_preserved(self, make_document, sample_elements):
        outcome = ExportOutcome()
        views = select_views(by_id("1001", "1001"), make_document(sample_elements), outcome)
        assert [v.view_id for v in views] == ["1001", "1001"]

    def test_resolved_view_carries_element(self, make_document, sample_elements):
        views, rejected = resolve_view_ids(make_document(sample_elements), ["1001"])
        assert rejected == []
        assert views[0].element is sample_elements[0]

    @pytest.mark.parametrize("bad_id,reason", [
        ("9999", "does not exist"),
        ("1003", "is not a 3D view"),
        ("1002", "is a view template"),
    ])
    def test_single_bad_id_fails_whole_run(self, make_document, sample_elements, bad_id, reason):
        outcome = ExportOutcome()
        views = select_views(by_id("1001", bad_id, "1004"), make_document(sample_elements), outcome)
        assert views is None
        assert outcome.failure.kind == ErrorKind.VIEW_RESOLUTION
        assert reason in outcome.failure.message
        assert outcome.state == RunState.FAILED

    def test_every_bad_id_reported(self, make_document, sample_elements):
        outcome = ExportOutcome()
        select_views(by_id("9999", "1003"), make_document(sample_elements), outcome)
        assert "'9999'" in outcome.failure.message
        assert "'1003'" in outcome.failure.message
        assert outcome.failure.message.startswith("2 of 2")

    def test_empty_id_list_is_empty_selection(self, make_document, sample_elements):
        outcome = ExportOutcome()
        assert select_views(by_id(), make_document(sample_elements), outcome) is None
        assert outcome.failure.kind == ErrorKind.EMPTY_SELECTION


class FailingDocument:
    """Document whose lookups raise like a host API error."""

    def __init__(self, exc):
        self.exc = exc

    def enumerate_elements(self, predicate):
        raise self.exc

    def get_element(self, element_id):
        raise self.exc


class TestHostLookupErrors:
    """Exceptions from the host during selection become VIEW_RESOLUTION failures."""

    def test_get_element_raises(self):
        outcome = ExportOutcome()
        document = FailingDocument(OverflowError("value too large for Int32"))

        assert select_views(by_id("99999999999999"), document, outcome) is None
        assert outcome.failure.kind == ErrorKind.VIEW_RESOLUTION
        assert "Int32" in outcome.failure.cause
        assert outcome.state == RunState.FAILED

    def test_enumerate_elements_raises(self):
        outcome = ExportOutcome()
        document = FailingDocument(RuntimeError("collector failed"))

        assert select_views(EXPORT_ALL, document, outcome) is None
        assert outcome.failure.kind == ErrorKind.VIEW_RESOLUTION
        assert outcome.log[-1].startswith("Error occurred:")
