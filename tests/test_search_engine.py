"""
Tests for PDFSearchEngine over a small generated PDF.
"""
import fitz
import pytest

from waypoint.core.document import PDFDocumentReader
from waypoint.core.search import PDFSearchEngine
from waypoint.core.search.search_engine import merge_line_fragments


@pytest.fixture
def reader(tmp_path):
    path = tmp_path / "search.pdf"
    doc = fitz.open()
    first = doc.new_page(width=400, height=400)
    first.insert_text((50, 300), "alpha at the bottom")
    first.insert_text((50, 100), "alpha beta alpha")
    second = doc.new_page(width=400, height=400)
    second.insert_text((50, 60), "Alpha again")
    doc.new_page(width=400, height=400).insert_text((50, 60), "nothing here")
    doc.save(str(path))
    doc.close()

    reader = PDFDocumentReader()
    reader.load_pdf(str(path))
    yield reader
    reader.close_document()


@pytest.fixture
def engine(reader):
    return PDFSearchEngine(reader)


class TestExecuteSearch:

    def test_finds_every_match_in_reading_order(self, engine):
        assert engine.execute_search("alpha") == 4

        positions = [(r.page_index, round(r.y), round(r.x)) for r in engine.search_results]
        assert positions == sorted(positions)
        assert [r.page_index for r in engine.search_results] == [0, 0, 0, 1]

    def test_hits_on_one_line_stay_separate(self, engine):
        engine.execute_search("alpha")
        top_line = engine.search_results[:2]
        assert top_line[0].rect.x1 < top_line[1].rect.x0

    def test_ignores_case(self, engine):
        assert engine.execute_search("ALPHA") == 4

    def test_no_match(self, engine):
        assert engine.execute_search("gamma") == 0
        assert engine.status_text() == "0 results"

    def test_blank_term_clears(self, engine):
        engine.execute_search("alpha")
        assert engine.execute_search("   ") == 0
        assert engine.search_results == []
        assert engine.status_text() == ""

    def test_repeated_term_keeps_position(self, engine):
        engine.execute_search("alpha")
        engine.next_result()
        engine.next_result()

        assert engine.execute_search(" alpha ") == 4
        assert engine.current_search_index == 1

    def test_without_document(self):
        assert PDFSearchEngine(PDFDocumentReader()).execute_search("alpha") == 0

    def test_results_on_page(self, engine):
        engine.execute_search("alpha")
        assert len(engine.results_on_page(0)) == 3
        assert len(engine.results_on_page(2)) == 0

    def test_redacted_text_is_not_found_after_clearing(self, engine, reader):
        engine.execute_search("beta")
        reader.apply_redactions([(0, (40, 80, 300, 110))])

        engine.clear_search()

        assert engine.execute_search("beta") == 0


class TestStepping:

    def test_next_wraps(self, engine):
        engine.execute_search("alpha")
        pages = [engine.next_result().page_index for _ in range(5)]
        assert pages == [0, 0, 0, 1, 0]

    def test_previous_from_start_goes_to_last(self, engine):
        engine.execute_search("alpha")
        assert engine.previous_result().page_index == 1
        assert engine.current_search_index == 3

    def test_previous_wraps_from_first(self, engine):
        engine.execute_search("alpha")
        engine.next_result()
        engine.previous_result()
        assert engine.current_search_index == 3

    def test_stepping_without_results(self, engine):
        assert engine.next_result() is None
        assert engine.previous_result() is None
        assert engine.current_result is None

    def test_status_text(self, engine):
        engine.execute_search("alpha")
        assert engine.status_text() == "4 results"
        engine.next_result()
        assert engine.status_text() == "1 of 4"


class TestMergeLineFragments:

    def test_touching_pieces_on_one_line_merge(self):
        merged = merge_line_fragments([fitz.Rect(10, 10, 30, 20), fitz.Rect(30.5, 10, 50, 20)])
        assert merged == [fitz.Rect(10, 10, 50, 20)]

    def test_separate_lines_stay_apart(self):
        rects = [fitz.Rect(10, 30, 50, 40), fitz.Rect(10, 10, 50, 20)]
        assert merge_line_fragments(rects) == [fitz.Rect(10, 10, 50, 20), fitz.Rect(10, 30, 50, 40)]

    def test_distant_pieces_on_one_line_stay_apart(self):
        rects = [fitz.Rect(10, 10, 30, 20), fitz.Rect(80, 10, 100, 20)]
        assert len(merge_line_fragments(rects)) == 2

    def test_empty(self):
        assert merge_line_fragments([]) == []
