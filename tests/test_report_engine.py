import random
from datetime import datetime

import pytest

from folio.data.memory import CallbackCursor, ListCursor
from folio.engine.report import ReportEngine
from folio.errors import DataAccessError, RunawayTemplateError, TemplateError


def _engine(surface, xml):
    engine = ReportEngine(surface=surface)
    engine.set_template(xml)
    engine.now = datetime(2024, 1, 2, 3, 4, 5)
    engine.rng = random.Random(0)
    return engine


def _rows(n, **extra):
    return [dict(n=i, **extra) for i in range(1, n + 1)]


INVOICE = """
<pdf>
  <default format="A4" orientation="P"/>
  <info title="Invoice {customer}" author="Billing"/>
  <content id="header">
    <box x1="10" y1="2" x2="100" y2="8" text="Page {PAGEINDEX} of {invoice.name}"/>
  </content>
  <content id="row">
    <box x1="10" y1="10" x2="100" y2="16" text="Row {n}"/>
  </content>
  <section id="invoice" page="A4,P">
    <print_content>header</print_content>
    <section id="lines" y_start="10" row_height="6" y_end="40">
      <print_content>row</print_content>
    </section>
  </section>
</pdf>
"""


# ---- Pagination -----------------------------------------------------------------

def test_header_repeats_on_every_child_page(surface):
    engine = _engine(surface, INVOICE)
    engine.set_var("customer", "ACME")
    engine.set_section("invoice", ListCursor([{"name": "INV-1"}]))
    engine.set_section("lines", ListCursor(_rows(7)))

    assert engine.build() == b"%PDF-recorded"

    assert surface.of("page") == [("page", "A4", "P"), ("page", "A4", "P")]
    texts = surface.texts()
    assert texts == ["Page 1 of INV-1", "Row 1", "Row 2", "Row 3", "Row 4", "Row 5",
                     "Page 2 of INV-1", "Row 6", "Row 7"]
    rows = {b[5]: b for b in surface.of("box")}
    assert rows["Row 1"][2] == 10
    assert rows["Row 5"][2] == 34
    assert rows["Row 6"][2] == 10
    assert rows["Row 7"][2] == 16
    assert engine.page_count == 2
    assert surface.info["title"] == "Invoice ACME"
    assert surface.info["author"] == "Billing"


def test_static_parent_keeps_paging_child(surface):
    xml = INVOICE.replace(" of {invoice.name}", "")
    engine = _engine(surface, xml)
    engine.set_section("lines", ListCursor(_rows(12)))
    engine.build()
    assert len(surface.of("page")) == 3
    assert surface.texts().count("Page 3") == 1
    assert surface.texts()[-1] == "Row 12"


def test_each_parent_record_starts_a_page(surface):
    engine = _engine(surface, INVOICE)
    engine.set_section("invoice", ListCursor([{"name": "A"}, {"name": "B"}]))
    engine.set_section("lines", ListCursor(_rows(2)))
    engine.build()
    texts = surface.texts()
    assert texts == ["Page 1 of A", "Row 1", "Row 2", "Page 2 of B", "Row 1", "Row 2"]


def test_zero_row_section_emits_only_its_page(surface):
    xml = """
    <pdf>
      <content id="row"><box x1="0" y1="0" x2="10" y2="5" text="{n}"/></content>
      <section id="empty" page="A4,L"><print_content>row</print_content></section>
    </pdf>
    """
    engine = _engine(surface, xml)
    engine.set_section("empty", ListCursor([]))
    engine.build()
    assert surface.calls == [("page", "A4", "L")]


def test_top_level_section_continues_on_a_new_page(surface):
    xml = """
    <pdf>
      <content id="row"><box x1="0" y1="10" x2="50" y2="16" text="A{n}"/></content>
      <content id="footer"><box x1="0" y1="280" x2="50" y2="286" text="B"/></content>
      <section id="a" y_start="10" row_height="6" y_end="40"><print_content>row</print_content></section>
      <section id="b"><print_content>footer</print_content></section>
    </pdf>
    """
    engine = _engine(surface, xml)
    a = engine.set_section("a", ListCursor(_rows(7)))
    engine.build()
    assert surface.texts() == ["A1", "A2", "A3", "A4", "A5", "A6", "A7", "B"]
    assert surface.of("page") == [("page", "A4", "P")]
    rows = {b[5]: b for b in surface.of("box")}
    assert rows["A5"][2] == 34
    assert rows["A6"][2] == 10
    assert rows["A7"][2] == 16
    assert a.end_of_data() is True
    assert a.page_index == 2


def test_sibling_data_sections_both_print_all_rows(surface):
    xml = """
    <pdf>
      <default format="A5" orientation="L"/>
      <content id="a_row"><box x1="0" y1="10" x2="50" y2="16" text="A{n}"/></content>
      <content id="b_row"><box x1="0" y1="50" x2="50" y2="56" text="B{n}"/></content>
      <section id="a" y_start="10" row_height="6" y_end="40"><print_content>a_row</print_content></section>
      <section id="b" y_start="50" row_height="6" y_end="100"><print_content>b_row</print_content></section>
    </pdf>
    """
    engine = _engine(surface, xml)
    engine.set_section("a", ListCursor(_rows(7)))
    b = engine.set_section("b", ListCursor(_rows(3)))
    engine.build()
    assert surface.texts() == ["A1", "A2", "A3", "A4", "A5", "A6", "A7", "B1", "B2", "B3"]
    assert surface.of("page") == [("page", "A5", "L")]
    rows = {box[5]: box for box in surface.of("box")}
    assert rows["B1"][2] == 50
    assert rows["B3"][2] == 62
    assert b.end_of_data() is True
    assert b.record_index == 3


def test_correlated_child_query(surface):
    calls = []

    def orders(query):
        calls.append(query)
        return [{"item": f"{query}/x"}]

    xml = """
    <pdf>
      <content id="customer"><box x1="0" y1="0" x2="50" y2="5" text="{customers.name}"/></content>
      <content id="order"><box x1="0" y1="10" x2="50" y2="15" text="{item}"/></content>
      <section id="customers" page="A4">
        <print_content>customer</print_content>
        <section id="orders" y_start="10" row_height="5" y_end="200">
          <print_content>order</print_content>
        </section>
      </section>
    </pdf>
    """
    engine = _engine(surface, xml)
    engine.set_section("customers", ListCursor([{"id": 1, "name": "Ann"}, {"id": 2, "name": "Bob"}]))
    engine.set_section("orders", CallbackCursor(orders, "orders for {customers.id}"))
    engine.build()
    assert calls == ["orders for 1", "orders for 2"]
    assert surface.texts() == ["Ann", "orders for 1/x", "Bob", "orders for 2/x"]
    assert engine.sections["orders"].query_raw == "orders for {customers.id}"


def test_fixed_page_section_adds_a_page_per_record(surface):
    xml = """
    <pdf>
      <content id="card"><box x1="0" y1="0" x2="50" y2="5" text="{n}"/></content>
      <section id="cards" page="A5,L"><print_content>card</print_content></section>
    </pdf>
    """
    engine = _engine(surface, xml)
    engine.set_section("cards", ListCursor(_rows(3)))
    engine.build()
    assert surface.of("page") == [("page", "A5", "L")] * 3
    assert surface.texts() == ["1", "2", "3"]


# ---- Template errors ------------------------------------------------------------

def test_nesting_deeper_than_one_level_raises(surface):
    xml = """
    <pdf>
      <section id="a" page="A4">
        <section id="b"><section id="c"/></section>
      </section>
    </pdf>
    """
    with pytest.raises(TemplateError, match="nested one level"):
        _engine(surface, xml).build()


def test_multiple_child_sections_raise(surface):
    xml = """
    <pdf>
      <section id="a" page="A4"><section id="b"/><section id="c"/></section>
    </pdf>
    """
    with pytest.raises(TemplateError, match="Multiple nested sections"):
        _engine(surface, xml).build()


def test_runaway_loop_raises(surface):
    xml = """
    <pdf>
      <content id="c"><box x1="0" y1="0" x2="10" y2="5" text="{n}"/></content>
      <section id="many" page="A4"><print_content>c</print_content></section>
    </pdf>
    """
    engine = _engine(surface, xml)
    engine.set_section("many", ListCursor(_rows(600)))
    with pytest.raises(RunawayTemplateError):
        engine.build()


@pytest.mark.parametrize("body,message", [
    ('<content id="c"><wibble/></content><section id="s"><print_content>c</print_content></section>',
     "Unsupported XML content element"),
    ('<section id="s"><print_content>nothing</print_content></section>', "Missing XML content"),
    ('<section><print_content>c</print_content></section>', "missing id"),
    ('<section id="s"><wobble/></section>', "Unsupported XML section element"),
    ('<content id="c"><box x1="0" y1="0" x2="10"/></content>'
     '<section id="s"><print_content>c</print_content></section>', "y2"),
    ('<content id="c"><line x1="a" y1="0" x2="10" y2="0"/></content>'
     '<section id="s"><print_content>c</print_content></section>', "must be a number"),
])
def test_template_errors(surface, body, message):
    with pytest.raises(TemplateError, match=message):
        _engine(surface, f"<pdf>{body}</pdf>").build()


def test_build_without_template_raises(surface):
    with pytest.raises(TemplateError):
        ReportEngine(surface=surface).build()


def test_data_errors_propagate(surface):
    def broken(query):
        raise RuntimeError("connection refused")

    xml = '<pdf><section id="s" page="A4"/></pdf>'
    engine = _engine(surface, xml)
    engine.set_section("s", CallbackCursor(broken, "select 1"))
    with pytest.raises(DataAccessError, match="connection refused"):
        engine.build()


# ---- Contents -------------------------------------------------------------------

def _content(surface, body, **variables):
    xml = f'<pdf><content id="c">{body}</content><section id="s"><print_content>c</print_content></section></pdf>'
    engine = _engine(surface, xml)
    for key, value in variables.items():
        engine.set_var(key, value)
    engine.build()
    return engine


def test_print_content_offsets(surface):
    xml = """
    <pdf>
      <content id="c"><box x1="10" y1="20" x2="30" y2="25" text="x"/></content>
      <section id="s"><print_content x="5" y="3">c</print_content></section>
    </pdf>
    """
    _engine(surface, xml).build()
    assert surface.of("box")[0][1:5] == (15, 23, 35, 28)


def test_numeric_attributes_resolve_tags(surface):
    _content(surface, '<line x1="{left}" y1="5" x2="{right}" y2="5"/>', left=10, right=90)
    assert surface.of("line") == [("line", 10, 5, 90, 5, 0.2)]


def test_line_orientation(surface):
    _content(surface, '<line x1="0" y1="0" x2="10" y2="20" orientation="VR">'
                      '<linestyle width="1.5" color="FF0000"/></line>')
    assert surface.of("line") == [("line", 10, 0, 10, 20, 1.5)]
    assert surface.line.width == 0.2


def test_font_persists_until_changed(surface):
    _content(surface, """
        <font size="14"/>
        <box x1="0" y1="0" x2="10" y2="5" text="a"/>
        <box x1="0" y1="0" x2="10" y2="5" text="b"><font size="20"/></box>
        <box x1="0" y1="0" x2="10" y2="5" text="c"/>
    """)
    assert [(b[5], b[8]) for b in surface.of("box")] == [("a", 14), ("b", 20), ("c", 14)]


def test_box_alignment_names(surface):
    _content(surface, '<box x1="0" y1="0" x2="10" y2="5" align="right" vertalign="middle">t</box>')
    box = surface.of("box")[0]
    assert box[6:8] == ("R", "M")


def test_rectangle_uses_fill_and_line(surface):
    _content(surface, '<rectangle x1="0" y1="0" x2="10" y2="5" r="2" border="1001">'
                      '<fill color="00FF00"/><linestyle color="0000FF"/></rectangle>')
    assert surface.of("rect") == [("rect", 0, 0, 10, 5, 2, "00FF00", "0000FF")]


def test_circle_and_page(surface):
    _content(surface, '<page format="A5" orientation="L"/><circle x="20" y="30" r="5" angstart="0" angend="90"/>')
    assert surface.calls == [("page", "A5", "L"), ("circle", 20, 30, 5, 0, 90, False)]


def test_barcode_value_is_resolved(surface):
    _content(surface, '<barcode x="5" y="6" type="C128" value="INV-{number}"/>', number=7)
    assert surface.of("barcode") == [("barcode", "C128", "INV-7", 5, 6)]


def test_var_does_not_override_caller_value(surface):
    _content(surface, """
        <var name="title" value="From template"/>
        <var name="other" value="Set by template"/>
        <box x1="0" y1="0" x2="10" y2="5" text="{title} / {other}"/>
    """, title="From code")
    assert surface.texts() == ["From code / Set by template"]


def test_opacity_is_clamped(surface):
    _content(surface, '<opacity value="1.7"/>')
    assert surface.opacity == 1.0


def test_output_name(surface, tmp_path, monkeypatch):
    xml = '<pdf><section id="s"><output name="invoice_{number}.pdf"/></section></pdf>'
    engine = _engine(surface, xml)
    engine.set_var("number", 42)
    monkeypatch.chdir(tmp_path)
    target = engine.save()
    assert engine.output_name == "invoice_42.pdf"
    assert (tmp_path / "invoice_42.pdf").read_bytes() == b"%PDF-recorded"
    assert target.name == "invoice_42.pdf"

    explicit = engine.save(tmp_path / "other.pdf")
    assert explicit.read_bytes() == b"%PDF-recorded"


# ---- Images ---------------------------------------------------------------------

def test_image_relative_to_template_dir(surface, tmp_path):
    (tmp_path / "logo.png").write_bytes(b"not really a png")
    xml = ('<pdf><content id="c"><image file="logo.png" x="1" y="2" width="30" height="10"/></content>'
           '<section id="s"><print_content>c</print_content></section></pdf>')
    template = tmp_path / "t.xml"
    template.write_text(xml, encoding="utf-8")
    engine = ReportEngine(template, surface=surface)
    engine.build()
    assert surface.of("image") == [("image", str(tmp_path.resolve() / "logo.png"), 1, 2, 30, 10)]


def test_image_size_from_corners(surface, tmp_path):
    (tmp_path / "logo.jpg").write_bytes(b"")
    engine = _engine(surface, '<pdf><content id="c"><image file="logo.jpg" x1="5" y1="5" x2="25" y2="15"/>'
                              '</content><section id="s"><print_content>c</print_content></section></pdf>')
    engine.base_dir = tmp_path
    engine.build()
    assert surface.of("image")[0][2:] == (5, 5, 20, 10)


@pytest.mark.parametrize("name", ["logo.svg", "missing.png"])
def test_image_errors(surface, tmp_path, name):
    (tmp_path / "logo.svg").write_text("<svg/>")
    engine = _engine(surface, f'<pdf><content id="c"><image file="{name}" x="0" y="0" width="1" height="1"/>'
                              '</content><section id="s"><print_content>c</print_content></section></pdf>')
    engine.base_dir = tmp_path
    with pytest.raises(TemplateError):
        engine.build()


# ---- Charts ---------------------------------------------------------------------

def test_pie_from_bound_datalist(surface):
    _xml = """
    <pdf>
      <content id="c">
        <piechart x1="0" y1="0" x2="100" y2="100" style="PIE">
          <datalist id="sales"><data label="{sales.region}" value="{sales.amount}" color="{sales.color}"/></datalist>
          <legend x1="0" y1="110" x2="100" y2="140" visible="1" orientation="vertical"/>
        </piechart>
      </content>
      <section id="s"><print_content>c</print_content></section>
    </pdf>
    """
    engine = _engine(surface, _xml)
    engine.set_datalist("sales", ListCursor([
        {"region": "North", "amount": 30, "color": "FF0000"},
        {"region": "South", "amount": 10, "color": "00FF00"},
    ]))
    engine.build()
    assert [(s[4], s[5], s[6]) for s in surface.of("sector")] == [(0, 270, "FF0000"), (270, 360, "00FF00")]
    assert "North (30)" in surface.texts()
    assert "TOTAL 40" in surface.texts()


def test_bound_datalist_query_is_resolved(surface):
    seen = []
    xml = """
    <pdf>
      <content id="c">
        <singlebarchart x1="0" y1="0" x2="100" y2="10" title="Usage">
          <datalist id="usage"><data label="{usage.k}" value="{usage.v}" color="AAAAAA"/></datalist>
        </singlebarchart>
      </content>
      <section id="s"><print_content>c</print_content></section>
    </pdf>
    """
    engine = _engine(surface, xml)
    engine.set_var("year", 2024)
    engine.set_datalist("usage", CallbackCursor(lambda q: seen.append(q) or [{"k": "a", "v": 5}],
                                                "usage in {year}"))
    engine.build()
    assert seen == ["usage in 2024"]
    bars = surface.of("rect")
    assert bars[1][1:5] == (0, 0, 100, 10)


def test_static_datalist_and_missing_data(surface):
    engine = _content(surface, """
        <piechart x1="0" y1="0" x2="50" y2="50">
          <datalist><data label="a" value="1" color="111111"/><data label="b" value="3" color="222222"/></datalist>
        </piechart>
    """)
    assert len(surface.of("sector")) == 2
    assert engine.page_count == 0

    with pytest.raises(TemplateError, match="No data set"):
        _content(surface, '<piechart x1="0" y1="0" x2="50" y2="50"><datalist id="nope"><data/></datalist></piechart>')


def test_gauge_and_kpi(surface):
    _content(surface, """
        <gaugechart x1="0" y1="0" x2="100" y2="60" value="{load}" maxvalue="200" title="Load">
          <segmentlist>
            <segment startvalue="0" endvalue="100" fillcolor="00AA00" label="ok"/>
            <segment startvalue="100" endvalue="200" fillcolor="AA0000" label="high"/>
          </segmentlist>
        </gaugechart>
        <kpichart x1="0" y1="70" x2="40" y2="90" value="12" title="KPI"/>
    """, load=150)
    sectors = surface.of("sector")
    assert sectors[1][4:] == (-90, 45, "AA0000")
    assert "150.0\nhigh" in surface.texts()
    kpi_rect = surface.of("rect")[0]
    assert kpi_rect[6:] == ("009999", "008f8f")


def test_gauge_without_value_raises(surface):
    with pytest.raises(TemplateError):
        _content(surface, '<gaugechart x1="0" y1="0" x2="100" y2="60"/>')
