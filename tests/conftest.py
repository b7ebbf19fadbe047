import io

import openpyxl
import pytest
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

ESG_SENTENCE = (
    "Total carbon emissions were 125.3 tonnes CO2e and water consumption "
    "was 45,670 cubic meters."
)


def _pdf(*pages: str) -> bytes:
    buf = io.BytesIO()
    c = canvas.Canvas(buf, pagesize=letter)
    for text in pages:
        if text:
            lines = c.beginText(72, 720)
            for line in text.split("\n"):
                lines.textLine(line)
            c.drawText(lines)
        c.showPage()
    c.save()
    return buf.getvalue()


@pytest.fixture()
def sample_pdf_bytes() -> bytes:
    """Single-page PDF carrying a known ESG sentence, wrapped to fit the page."""
    return _pdf(ESG_SENTENCE.replace(" and water", "\nand water"))


@pytest.fixture()
def three_page_pdf_bytes() -> bytes:
    return _pdf("Page one content", "Page two content", "Page three content")


@pytest.fixture()
def empty_pdf_bytes() -> bytes:
    """Valid PDF with a blank page and no text layer."""
    return _pdf("")


@pytest.fixture()
def sample_xlsx_bytes() -> bytes:
    """Workbook whose first sheet has a header row and three data rows."""
    workbook = openpyxl.Workbook()
    sheet = workbook.active
    sheet.title = "Metrics"
    sheet.append(["Metric", "Value", "Unit"])
    sheet.append(["Carbon emissions", 125.3, "tonnes CO2e"])
    sheet.append(["Water consumption", 45670, "cubic meters"])
    sheet.append(["Board independence", 60, "%"])
    other = workbook.create_sheet("Notes")
    other.append(["ignored"])
    buf = io.BytesIO()
    workbook.save(buf)
    return buf.getvalue()
