"""
Unit tests for pdf_outline.merge.
"""
import pytest

from pdf_outline.decoder import decode_outline
from pdf_outline.encoder import encode_outline
from pdf_outline.merge import merge_outlines, merge_pdfs, offset_forest
from pdf_outline.models import ExactPosition, OutlineBranch, OutlineLeaf, WholePage
from pdf_outline.pdf_graph import PdfGraph
from pdf_outline.tree import flatten, iter_depth

from conftest import make_doc, reopen


class TestOffsetForest:
    def test_single_leaf(self):
        result = offset_forest([OutlineLeaf(title="S", destination=WholePage(0))], 5)
        assert result == [OutlineLeaf(title="S", destination=WholePage(5))]

    @pytest.mark.parametrize("k", [0, 1, 7])
    def test_offset_law(self, deep_forest, k):
        result = offset_forest(deep_forest, k)

        before = list(iter_depth(deep_forest))
        after = list(iter_depth(result))
        assert [d for d, _ in after] == [d for d, _ in before]
        for (_, old), (_, new) in zip(before, after):
            assert type(new) is type(old)
            assert (new.title, new.bold, new.italic) == (old.title, old.bold, old.italic)
            if old.destination is None:
                assert new.destination is None
            else:
                assert new.destination.page_index == old.destination.page_index + k
            if isinstance(old, OutlineBranch):
                assert new.is_expanded == old.is_expanded
                assert len(new.children) == len(old.children)

    def test_fractions_untouched(self):
        result = offset_forest([OutlineLeaf(title="p", destination=ExactPosition(1, 0.3, 0.7))], 4)
        assert result[0].destination == ExactPosition(5, 0.3, 0.7)

    def test_input_not_modified(self, sample_forest):
        offset_forest(sample_forest, 10)
        assert sample_forest[0].destination == WholePage(0)
        assert sample_forest[1].children[0].destination == WholePage(2)


class TestMergeOutlines:
    def test_appends_after_target_outline(self, graph, sample_forest):
        encode_outline(graph, sample_forest)
        encoded = merge_outlines(graph, [OutlineLeaf(title="S", destination=WholePage(0))], 3)

        titles = [o.title for o in encoded.objects]
        assert titles == ["A", "B", "B1", "S"]
        assert decode_outline(graph)[-1] == OutlineLeaf(title="S", destination=WholePage(3))
        # target branches were decoded, so they are collapsed now
        assert encoded.root.count == 3


class TestMergePdfs:
    def test_pages_and_outlines_concatenated(self, sample_forest):
        target = PdfGraph(make_doc(3))
        encode_outline(target, sample_forest)
        source = PdfGraph(make_doc(2))
        encode_outline(source, [
            OutlineLeaf(title="S1", destination=WholePage(0)),
            OutlineLeaf(title="S2", destination=WholePage(1), bold=True),
        ])

        merge_pdfs(target, source)

        assert target.page_count == 5
        forest = decode_outline(target)
        assert [n.title for n in forest] == ["A", "B", "S1", "S2"]
        assert forest[2].destination == WholePage(3)
        assert forest[3].destination == WholePage(4)
        assert forest[3].bold is True

        toc = reopen(target.doc).get_toc(simple=True)
        assert [(t, p) for _, t, p in toc] == [("A", 1), ("B", 2), ("B1", 3), ("S1", 4), ("S2", 5)]

    def test_several_sources(self):
        target = PdfGraph(make_doc(1))
        sources = []
        for n in (2, 3):
            g = PdfGraph(make_doc(n))
            encode_outline(g, [OutlineLeaf(title=f"doc{n}", destination=WholePage(n - 1))])
            sources.append(g)

        merge_pdfs(target, *sources)

        forest = decode_outline(target)
        assert [(n.title, n.destination.page_index) for n in forest] == [("doc2", 2), ("doc3", 5)]

    def test_source_without_outline(self, sample_forest):
        target = PdfGraph(make_doc(3))
        encode_outline(target, sample_forest)

        merge_pdfs(target, PdfGraph(make_doc(2)))

        assert target.page_count == 5
        assert [n.title for n in flatten(decode_outline(target))] == ["A", "B", "B1"]

    def test_needs_a_source(self, graph):
        with pytest.raises(ValueError):
            merge_pdfs(graph)
