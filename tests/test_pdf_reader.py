"""
Tests for PDFDocumentReader against small PDFs generated with PyMuPDF.
"""
import fitz
import pytest

from waypoint.core.document import PDFDocumentReader
from waypoint.utils.exceptions import DocumentLoadError


@pytest.fixture
def sample_pdf(tmp_path):
    path = tmp_path / "sample.pdf"
    doc = fitz.open()
    for text in ("secret on page one", "page two"):
        page = doc.new_page(width=300, height=400)
        page.insert_text((50, 100), text)
    doc.save(str(path))
    doc.close()
    return str(path)


@pytest.fixture
def reader(sample_pdf):
    reader = PDFDocumentReader()
    reader.load_pdf(sample_pdf)
    yield reader
    reader.close_document()


class TestLoading:

    def test_load_reports_pages(self, sample_pdf):
        reader = PDFDocumentReader()
        assert reader.load_pdf(sample_pdf) == 2
        assert reader.is_loaded()
        assert reader.current_file_path == sample_pdf
        reader.close_document()

    def test_missing_file(self, tmp_path):
        missing = str(tmp_path / "missing.pdf")
        with pytest.raises(DocumentLoadError) as excinfo:
            PDFDocumentReader().load_pdf(missing)
        assert excinfo.value.file_path == missing

    def test_not_a_pdf(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("plain text")
        with pytest.raises(DocumentLoadError):
            PDFDocumentReader().load_pdf(str(path))

    def test_close_resets_state(self, reader):
        reader.close_document()
        assert not reader.is_loaded()
        assert reader.get_page_count() == 0
        assert reader.current_file_path is None


class TestPages:

    def test_get_page(self, reader):
        assert reader.get_page(1).rect.height == 400
        assert reader.get_page(2) is None
        assert reader.get_page(-1) is None

    def test_render_scales_with_zoom(self, qapp, reader):
        pixmap = reader.render_page(0, 2.0)
        assert (pixmap.width(), pixmap.height()) == (600, 800)

    def test_render_dark_mode(self, qapp, reader):
        light = reader.render_page(0, 1.0).toImage()
        dark = reader.render_page(0, 1.0, dark_mode=True).toImage()
        # The blank corner is white normally and black when inverted
        assert light.pixelColor(0, 0).lightness() == 255
        assert dark.pixelColor(0, 0).lightness() == 0

    def test_render_invalid_page(self, qapp, reader):
        assert reader.render_page(5, 1.0) is None


class TestRedaction:

    def test_text_under_region_is_removed(self, reader):
        applied = reader.apply_redactions([(0, (40, 80, 250, 110))])

        assert applied == 1
        assert "secret" not in reader.get_page(0).get_text()
        assert "page two" in reader.get_page(1).get_text()

    def test_missing_pages_are_skipped(self, reader):
        assert reader.apply_redactions([(0, (40, 80, 250, 110)), (12, (0, 0, 5, 5))]) == 1

    def test_save_redacted_copy(self, reader, tmp_path):
        reader.apply_redactions([(0, (40, 80, 250, 110))])
        output = str(tmp_path / "redacted.pdf")

        reader.save_as(output)

        with fitz.open(output) as saved:
            assert "secret" not in saved[0].get_text()

    def test_nothing_loaded(self):
        assert PDFDocumentReader().apply_redactions([(0, (0, 0, 1, 1))]) == 0
