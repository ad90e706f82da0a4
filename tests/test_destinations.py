"""
Unit tests for pdf_outline.destinations.
"""
import pytest

from pdf_outline.destinations import DestinationRecord, page_index_map, resolve_destination
from pdf_outline.models import ExactPosition, WholePage
from pdf_outline.pdf_graph import pdf_number


class TestResolveDestination:
    def test_whole_page(self, graph):
        refs = graph.page_refs()
        record = resolve_destination(WholePage(2), refs, graph.page_size)

        assert record == DestinationRecord(page_ref=refs[2], kind="Fit")
        assert record.to_pdf() == f"[{refs[2]} 0 R /Fit]"

    def test_exact_position_uses_that_page_size(self, mixed_graph):
        refs = mixed_graph.page_refs()
        record = resolve_destination(ExactPosition(1, 0.5, 0.25), refs, mixed_graph.page_size)

        assert record.kind == "XYZ"
        assert record.left == pytest.approx(150)
        assert record.top == pytest.approx(100)
        assert record.to_pdf() == f"[{refs[1]} 0 R /XYZ 150 100 null]"

    def test_page_size_asked_per_call(self):
        calls = []

        def page_size(i):
            calls.append(i)
            return (100.0, 200.0)

        refs = [10, 11]
        resolve_destination(ExactPosition(0, 0.5, 0.5), refs, page_size)
        resolve_destination(ExactPosition(0, 0.1, 0.1), refs, page_size)
        resolve_destination(WholePage(1), refs, page_size)

        assert calls == [0, 0]

    @pytest.mark.parametrize("index", [5, 99, -1])
    def test_out_of_range_gives_none(self, graph, index, caplog):
        refs = graph.page_refs()
        assert resolve_destination(WholePage(index), refs, graph.page_size) is None
        assert "out of range" in caplog.text


class TestHelpers:
    def test_page_index_map_first_wins(self):
        assert page_index_map([7, 8, 7]) == {7: 0, 8: 1}

    @pytest.mark.parametrize(
        "value,expected",
        [(0, "0"), (612.0, "612"), (203.796, "203.796"), (0.00001, "0"), (1.5, "1.5")],
    )
    def test_pdf_number(self, value, expected):
        assert pdf_number(value) == expected
