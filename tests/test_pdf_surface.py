import pytest

from folio.canvas.pdf import PdfSurface, font_name
from folio.data.memory import ListCursor
from folio.engine.report import ReportEngine
from folio.engine.settings import BarcodeSettings, FillSettings, FontSettings, LineSettings, PageSettings
from folio.errors import TemplateError


def test_empty_document_still_has_a_page():
    surface = PdfSurface()
    data = surface.finish()
    assert data.startswith(b"%PDF")
    assert surface.page_count == 1
    assert surface.finish() == data


def test_pages_and_primitives():
    surface = PdfSurface(PageSettings("A4", "P"))
    surface.set_info(title="Test", author="folio")
    surface.add_page(PageSettings("A4", "L"))
    surface.set_line_style(LineSettings(0.5, "FF0000", dash="2,1", cap="round"))
    surface.draw_line(10, 10, 100, 10)
    surface.set_fill(FillSettings("L", "FF0000", "0000FF"))
    surface.draw_rectangle(10, 20, 60, 40, 3, "1010")
    surface.set_fill(FillSettings("S", "00FF00"))
    surface.draw_box(10, 50, 60, 60, "Hello\nworld", "C", "M", "LTRB", fill=True)
    surface.draw_circle(100, 100, 10, 0, 90, fill=True)
    surface.draw_pie_sector(150, 100, 20, 0, 360)
    surface.draw_pie_sector(150, 150, 20, 45, 45)
    surface.add_page(PageSettings("A5", "P"))
    surface.set_opacity(0.5)
    surface.draw_box(0, 0, 50, 10, "right", "R", "B", "1")
    assert surface.page_count == 2
    assert surface.finish().startswith(b"%PDF")


def test_barcodes():
    surface = PdfSurface()
    surface.draw_barcode(BarcodeSettings(x=10, y=10, type="C128", value="INV-0042"))
    surface.draw_barcode(BarcodeSettings(x=10, y=30, width=20, height=20, type="QR", value="https://x.test"))
    surface.draw_barcode(BarcodeSettings(type="C39", value=""))
    assert surface.finish().startswith(b"%PDF")


def test_unknown_barcode_type_raises():
    with pytest.raises(TemplateError):
        PdfSurface().draw_barcode(BarcodeSettings(type="NOPE", value="1"))


def test_unknown_page_format_raises():
    with pytest.raises(TemplateError):
        PdfSurface(PageSettings("B9"))
    surface = PdfSurface()
    surface.add_page(PageSettings("A4", "P", "furlong"))
    with pytest.raises(TemplateError):
        surface.draw_line(0, 0, 10, 10)


def test_fit_text_truncates_to_box():
    surface = PdfSurface()
    surface.set_font(FontSettings(size=12))
    long_text = "word " * 100
    fitted = surface.fit_text(long_text, 40, 6)
    assert 0 < len(fitted) < len(long_text)
    assert surface.string_fits(fitted, 40, 6)
    assert surface.fit_text("short", 40, 6) == "short"


def test_font_name():
    assert font_name("times", "BI") == "Times-BoldItalic"
    assert font_name("Courier", "i") == "Courier-Oblique"
    assert font_name("comic", "") == "Helvetica"


def test_engine_builds_real_pdf(tmp_path):
    xml = """
    <pdf>
      <default format="A4" orientation="P"/>
      <info title="Orders" author="folio"/>
      <content id="header">
        <box x1="10" y1="10" x2="200" y2="20" text="Orders - page {PAGEINDEX}" border="B">
          <font size="14" style="B"/>
        </box>
      </content>
      <content id="row">
        <box x1="10" y1="30" x2="100" y2="36" text="{id} {name}"/>
        <line x1="10" y1="36" x2="200" y2="36" orientation="HT"/>
      </content>
      <content id="chart">
        <piechart x1="10" y1="200" x2="90" y2="260" style="RING">
          <datalist><data label="a" value="2" color="FF0000"/><data label="b" value="1" color="0000FF"/></datalist>
          <legend x1="100" y1="200" x2="190" y2="230" visible="true"/>
        </piechart>
      </content>
      <section id="report" page="A4,P">
        <print_content>header</print_content>
        <section id="orders" y_start="30" row_height="6" y_end="190">
          <print_content>row</print_content>
        </section>
        <print_content>chart</print_content>
      </section>
    </pdf>
    """
    engine = ReportEngine()
    engine.set_template(xml)
    engine.set_section("orders", ListCursor([{"id": i, "name": f"order {i}"} for i in range(1, 61)]))
    target = engine.save(tmp_path / "orders.pdf")
    data = target.read_bytes()
    assert data.startswith(b"%PDF")
    assert engine.page_count == 3
