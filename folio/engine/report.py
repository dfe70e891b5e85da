"""Report engine — walks an XML template and drives sections, tags and the drawing surface.

Template layout::

    <pdf>
      <default format="A4" orientation="P" unit="mm"/>
      <info title="..." author="..."/>
      <content id="header"> ...drawing elements... </content>
      <section id="invoice" page="A4,P">
        <print_content>header</print_content>
        <section id="rows" y_start="60" row_height="6" y_end="270">
          <print_content>row</print_content>
        </section>
      </section>
    </pdf>

A section loops once per record of its cursor. Each pass prints its contents
shifted by the section's current offset, then advances the cursor; the loop
ends at a page break or at the end of data. One level of nested section is
supported: while a nested section still has rows for the next page its parent
does not advance, so the parent contents repeat as a page header.
"""

import logging
import random
from datetime import datetime
from pathlib import Path
from typing import Any, Callable

from folio.canvas.base import DrawingSurface
from folio.charts.gauge import GaugeChart
from folio.charts.items import ChartItem, ChartSegment, default_segment_fill, default_segment_font
from folio.charts.kpi import KpiChart
from folio.charts.legend import LegendSettings
from folio.charts.pie import PieChart
from folio.charts.singlebar import SingleBarChart
from folio.data.base import RowCursor
from folio.engine.datalist import Datalist
from folio.engine.section import Section
from folio.engine.settings import (
    BarcodeSettings, FillSettings, FontSettings, LineSettings, PageSettings, hex_to_rgb, random_hex_color,
)
from folio.engine.tags import resolve_tags
from folio.engine.variables import Variables
from folio.errors import RunawayTemplateError, TemplateError
from folio.template.tree import Element, load_template, load_template_file

logger = logging.getLogger(__name__)

# section passes allowed per build
MAX_LOOPS = 500

IMAGE_TYPES = ("png", "gif", "jpg", "jpeg", "bmp")

_h_align = {
    "l": "L", "left": "L",
    "c": "C", "center": "C", "m": "C", "mid": "C", "middle": "C",
    "r": "R", "right": "R",
    "j": "J", "justify": "J", "justification": "J",
}
_v_align = {
    "t": "T", "top": "T",
    "m": "M", "mid": "M", "middle": "M", "cen": "M", "center": "M",
    "b": "B", "bot": "B", "bottom": "B",
}

_ignored = ("rem", "comment", "id")
_section_attributes = ("id", "y_start", "row_height", "y_end", "page")


def _flag(value: Any) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class ReportEngine:
    """Builds one PDF from a template, registered sections, datalists and variables."""

    def __init__(self, template_path: str | Path | None = None, surface: DrawingSurface | None = None):
        self.surface = surface
        self.variables = Variables()
        self.template: Element | None = None
        self.base_dir = Path.cwd()
        self.rng: random.Random | None = None
        self.now: datetime | None = None
        self._sections: dict[str, Section] = {}
        self._datalists: dict[str, Datalist] = {}
        self._contents: dict[str, Element] = {}
        self._canvas: DrawingSurface | None = None
        self._page = PageSettings()
        self._barcode = BarcodeSettings()
        self._current: Section | None = None
        self._prev: Section | None = None
        self._loop_count = 0
        self._page_index = 0
        self._page_count = 0
        self._output_name: str | None = None
        if template_path:
            self.load_template(template_path)

    # ---- Registration -----------------------------------------------------------

    def set_var(self, key: str, value: Any, overwrite: bool = True) -> bool:
        return self.variables.set(key, value, overwrite)

    def get_var(self, key: str, default: Any = None) -> Any:
        return self.variables.get(key, default)

    def set_section(self, section_id: str, cursor: RowCursor | None = None,
                    page: PageSettings | str | None = None) -> Section:
        """Register (or replace) a section and its cursor."""
        if isinstance(page, str):
            page = PageSettings.from_spec(page)
        section = Section(section_id, cursor, page)
        self._sections[section_id] = section
        logger.debug("Section '%s' registered", section_id)
        return section

    def set_datalist(self, list_id: str, cursor: RowCursor | None = None) -> Datalist:
        datalist = Datalist(list_id, cursor)
        self._datalists[list_id] = datalist
        logger.debug("Datalist '%s' registered", list_id)
        return datalist

    def set_template(self, xml: str | bytes) -> None:
        self.template = load_template(xml)

    def load_template(self, path: str | Path) -> None:
        path = Path(path)
        self.template = load_template_file(path)
        self.base_dir = path.resolve().parent

    @property
    def sections(self) -> dict[str, Section]:
        return dict(self._sections)

    @property
    def datalists(self) -> dict[str, Datalist]:
        return dict(self._datalists)

    @property
    def page_index(self) -> int:
        return self._page_index

    @property
    def page_count(self) -> int:
        return self._page_count

    @property
    def output_name(self) -> str | None:
        return self._output_name

    def resolve(self, text: Any) -> str:
        return resolve_tags(
            text, self.variables, self._current, self._sections, self._datalists,
            page_index=self._page_index, page_count=self._page_count, now=self.now, rng=self.rng,
        )

    # ---- Build ------------------------------------------------------------------

    def build(self) -> bytes:
        """Render the template and return the PDF bytes."""
        if self.template is None:
            raise TemplateError("Missing XML template, call set_template() or load_template() first")
        template = self.template
        logger.info("Building report")

        self._loop_count = 0
        self._current = None
        self._prev = None
        self._page_index = 0
        self._page_count = 0
        self._barcode = BarcodeSettings()

        default = template.first("default")
        self._page = PageSettings()
        if default is not None:
            self._page = PageSettings(
                format=default.get("format", "A4"),
                orientation=default.get("orientation", "P"),
                unit=default.get("unit", "mm"),
            )
        if self.surface is not None:
            self._canvas = self.surface
            self._canvas.page = self._page
        else:
            from folio.canvas.pdf import PdfSurface
            self._canvas = PdfSurface(self._page)

        info = template.first("info")
        if info is not None:
            self._canvas.set_info(
                creator=self.resolve(info.get("creator", "")),
                author=self.resolve(info.get("author", "")),
                title=self.resolve(info.get("title", "")),
                subject=self.resolve(info.get("subject", "")),
                keywords=self.resolve(info.get("keywords", "")),
            )

        self._contents = {}
        for content in template.elements("content"):
            content_id = str(content.get("id", "")).strip().lower()
            if content_id:
                self._contents[content_id] = content

        for section_el in template.elements("section"):
            self._process_section(section_el, depth=0)
            section_id = str(section_el.get("id", "")).strip()
            # a top-level section that broke carries on with the current page format
            while (self._prev is not None and self._prev.id == section_id
                   and not self._prev.end_of_data()):
                self._add_page(self._page)
                self._process_section(section_el, depth=0)

        data = self._canvas.finish()
        logger.info("Report built: %d pages, %d bytes", self._page_count, len(data))
        return data

    def save(self, path: str | Path | None = None) -> Path:
        """Build and write the PDF; defaults to the template's ``<output name>``."""
        data = self.build()
        target = Path(path or self._output_name or f"document_{datetime.now():%Y%m%d_%H%M%S}.pdf")
        target.write_bytes(data)
        logger.info("Report saved to %s", target)
        return target

    # ---- Sections ---------------------------------------------------------------

    def _start_section(self, el: Element) -> Section:
        section_id = el.get("id", "")
        if not isinstance(section_id, str) or not section_id.strip():
            raise TemplateError("Invalid XML section format, missing id attribute")
        section_id = section_id.strip()

        section = self._sections.get(section_id)
        if section is None:
            section = self.set_section(section_id)
        self._current = section

        section.y_start = self._num(el, "y_start", 0.0)
        section.row_height = self._num(el, "row_height", 6.0)
        section.y_end = self._num(el, "y_end", 290.0)
        page = el.get("page", "")
        if isinstance(page, str) and page.strip():
            self._page = PageSettings.from_spec(page, self._page)
            section.page = self._page

        if section.row is None:
            section.query = self.resolve(section.query_raw)
            section.execute_query()
        return section

    def _process_section(self, el: Element, depth: int) -> None:
        if depth > 1:
            raise TemplateError(f"Sections can be nested one level only [{el.get('id', '')}]")
        children = el.elements("section")
        if len(children) > 1:
            raise TemplateError(
                f"Multiple nested sections are not allowed, only one section allowed within [{el.get('id', '')}]")
        child_ids = {str(c.get("id", "")).strip() for c in children}

        parent = self._current
        try:
            sec = self._start_section(el)
            logger.debug("Start %r", sec)
            if self._prev is not None and self._prev.id == sec.id:
                self._prev = None

            if sec.has_cursor and sec.row is None:
                # no rows: only the declared page is emitted
                self._add_page(sec.page)
                self._prev = None
                return

            while True:
                self._loop_count += 1
                if self._loop_count > MAX_LOOPS:
                    raise RunawayTemplateError(f"Section loop limit exceeded in [{sec.id}]")

                self._add_page(sec.page)
                for child in el.elements():
                    self._dispatch_section_child(child, depth)

                if self._prev is None or self._prev.id not in child_ids:
                    sec.next_record()

                child_pending = (self._prev is not None and self._prev.id in child_ids
                                 and not self._prev.end_of_data())
                if sec.end_of_page() and not child_pending:
                    break

            if sec.end_of_data():
                self._prev = None
            else:
                sec.reset_page_break()
                self._prev = sec
            logger.debug("End %r", sec)
        finally:
            self._current = parent

    def _dispatch_section_child(self, child: Element, depth: int) -> None:
        name = child.name
        if name in ("rem", "comment") or name in _section_attributes:
            return
        if name == "print_content":
            self._process_content(child)
        elif name == "section":
            self._process_section(child, depth + 1)
        elif name in ("var", "setvar"):
            self._process_var(child)
        elif name == "output":
            self._output_name = self.resolve(child.get("name|filename", f"document_{datetime.now():%Y%m%d_%H%M%S}.pdf"))
        else:
            raise TemplateError(f"Unsupported XML section element [{name}]")

    def _add_page(self, page: PageSettings | None) -> None:
        if page is None:
            return
        self._canvas.add_page(page)
        self._page_index += 1
        self._page_count += 1
        logger.info("Page %d (%s,%s)", self._page_index, page.format, page.orientation)

    # ---- Contents ---------------------------------------------------------------

    def _process_content(self, print_content: Element) -> None:
        content_id = str(print_content.get("value", required=True)).strip().lower()
        content = self._contents.get(content_id)
        if content is None:
            raise TemplateError(f"Missing XML content element [{content_id}]")
        x_offset = self._num(print_content, "x", 0.0)
        y_offset = self._num(print_content, "y", 0.0)
        if self._current is not None:
            y_offset += self._current.offset_y()

        handlers: dict[str, Callable[[Element, float, float], None]] = {
            "page": self._process_page,
            "line": self._process_line,
            "box": self._process_box,
            "rectangle": self._process_rectangle,
            "rect": self._process_rectangle,
            "circle": self._process_circle,
            "barcode": self._process_barcode,
            "image": self._process_image,
            "piechart": self._process_pie_chart,
            "singlebarchart": self._process_single_bar_chart,
            "gaugechart": self._process_gauge_chart,
            "kpichart": self._process_kpi_chart,
            "font": lambda e, x, y: self._canvas.set_font(self._font(e)),
            "linestyle": lambda e, x, y: self._canvas.set_line_style(self._line_style(e)),
            "fill": lambda e, x, y: self._canvas.set_fill(self._fill(e)),
            "opacity": self._process_opacity,
            "alpha": self._process_opacity,
            "alphacolor": self._process_opacity,
            "var": lambda e, x, y: self._process_var(e),
            "setvar": lambda e, x, y: self._process_var(e),
        }
        for element in content.elements():
            if element.name in _ignored or element.name == "text":
                continue
            handler = handlers.get(element.name)
            if handler is None:
                raise TemplateError(f"Unsupported XML content element [{element.name}]")
            handler(element, x_offset, y_offset)

    # ---- Value helpers ----------------------------------------------------------

    def _num(self, el: Element, names: str, default: float = 0.0, required: bool = False) -> float:
        return el.get_float(names, default, required=required, resolve=self.resolve)

    def _text(self, el: Element, names: str, default: str = "", required: bool = False) -> str:
        value = el.get(names, default, required=required)
        return default if isinstance(value, Element) else str(value)

    def _sub(self, el: Element, name: str) -> Element | None:
        value = el.get(name)
        return value if isinstance(value, Element) else None

    def _coords(self, el: Element, x_offset: float, y_offset: float) -> tuple[float, float, float, float]:
        return (self._num(el, "x1", required=True) + x_offset,
                self._num(el, "y1", required=True) + y_offset,
                self._num(el, "x2", required=True) + x_offset,
                self._num(el, "y2", required=True) + y_offset)

    def _font(self, el: Element | None, base: FontSettings | None = None) -> FontSettings:
        base = base or self._canvas.font
        if el is None:
            return FontSettings(base.family, base.style, base.size, base.color)
        font = FontSettings(
            family=self._text(el, "fontfamily|family", base.family),
            style=self._text(el, "fontstyle|style", base.style),
            size=self._num(el, "fontsize|size", base.size),
            color=self._text(el, "fontcolor|color", base.color),
        )
        hex_to_rgb(font.color)
        return font

    def _line_style(self, el: Element) -> LineSettings:
        base = self._canvas.line
        line = LineSettings(
            width=self._num(el, "linewidth|width", base.width),
            color=self._text(el, "linecolor|color", base.color),
            dash=self._text(el, "linedash|dash", base.dash),
            cap=self._text(el, "linecap|cap", base.cap),
            join=self._text(el, "linejoin|join", base.join),
            phase=int(self._num(el, "linephase|phase", base.phase)),
        )
        hex_to_rgb(line.color)
        line.dash_pattern()
        return line

    def _fill(self, el: Element) -> FillSettings:
        base = self._canvas.fill
        return FillSettings(
            type=self._text(el, "type", base.type),
            color1=self._text(el, "startcolor|color|color1", base.color1),
            color2=self._text(el, "endcolor|color2", base.color2),
        )

    def _overrides(self, el: Element) -> dict[str, Any]:
        """Optional per-element ``font``/``linestyle``/``fill`` for ``surface.styled()``."""
        font_el, line_el, fill_el = self._sub(el, "font"), self._sub(el, "linestyle"), self._sub(el, "fill")
        return {
            "font": self._font(font_el) if font_el is not None else None,
            "line": self._line_style(line_el) if line_el is not None else None,
            "fill": self._fill(fill_el) if fill_el is not None else None,
        }

    # ---- Drawing elements -------------------------------------------------------

    def _process_page(self, el: Element, x_offset: float, y_offset: float) -> None:
        self._page = PageSettings(
            format=self._text(el, "format", self._page.format),
            orientation=self._text(el, "orientation", self._page.orientation),
            unit=self._page.unit,
        )
        self._add_page(self._page)

    def _process_line(self, el: Element, x_offset: float, y_offset: float) -> None:
        x1, y1, x2, y2 = self._coords(el, x_offset, y_offset)
        orientation = self._text(el, "orientation", "DB").strip().lower()
        points = {
            "ht": (x1, y1, x2, y1), "horizontallytop": (x1, y1, x2, y1),
            "hb": (x1, y2, x2, y2), "horizontallybottom": (x1, y2, x2, y2),
            "vl": (x1, y1, x1, y2), "verticallyleft": (x1, y1, x1, y2),
            "vr": (x2, y1, x2, y2), "verticallyright": (x2, y1, x2, y2),
            "df": (x1, y2, x2, y1), "diagonallyforward": (x1, y2, x2, y1),
        }.get(orientation, (x1, y1, x2, y2))
        line_el = self._sub(el, "linestyle")
        with self._canvas.styled(line=self._line_style(line_el) if line_el is not None else None):
            self._canvas.draw_line(*points)

    def _process_box(self, el: Element, x_offset: float, y_offset: float) -> None:
        x1, y1, x2, y2 = self._coords(el, x_offset, y_offset)
        text = self.resolve(self._text(el, "text", ""))
        align = _h_align.get(self._text(el, "align|textalign|texthorizalign", "L").strip().lower(), "L")
        valign = _v_align.get(self._text(el, "vertalign|textvertalign", "T").strip().lower(), "T")
        border = self._text(el, "border", "1")
        overrides = self._overrides(el)
        with self._canvas.styled(**overrides):
            self._canvas.draw_box(x1, y1, x2, y2, text, align, valign, border, fill=overrides["fill"] is not None)

    def _process_rectangle(self, el: Element, x_offset: float, y_offset: float) -> None:
        x1, y1, x2, y2 = self._coords(el, x_offset, y_offset)
        r = self._num(el, "r|radius", 0.0)
        corners = self._text(el, "border", "1111")
        overrides = self._overrides(el)
        overrides.pop("font")
        with self._canvas.styled(**overrides):
            self._canvas.draw_rectangle(x1, y1, x2, y2, r, corners)

    def _process_circle(self, el: Element, x_offset: float, y_offset: float) -> None:
        x = self._num(el, "x", required=True) + x_offset
        y = self._num(el, "y", required=True) + y_offset
        r = self._num(el, "r", required=True)
        start = self._num(el, "angstart", 0.0)
        end = self._num(el, "angend", 360.0)
        line_el = self._sub(el, "linestyle")
        with self._canvas.styled(line=self._line_style(line_el) if line_el is not None else None):
            self._canvas.draw_circle(x, y, r, start, end)

    def _process_barcode(self, el: Element, x_offset: float, y_offset: float) -> None:
        bc = self._barcode
        bc.x = self._num(el, "x", 0.0) + x_offset
        bc.y = self._num(el, "y", 0.0) + y_offset
        bc.width = self._num(el, "width", bc.width)
        bc.height = self._num(el, "height", bc.height)
        bc.xres = self._num(el, "xres", bc.xres)
        bc.align = self._text(el, "align", bc.align)
        bc.type = self._text(el, "type", bc.type)
        bc.value = self.resolve(self._text(el, "value", bc.value))
        self._canvas.draw_barcode(bc)

    def _process_image(self, el: Element, x_offset: float, y_offset: float) -> None:
        file = self.resolve(self._text(el, "file", required=True))
        x = self._num(el, "x|x1", required=True) + x_offset
        y = self._num(el, "y|y1", required=True) + y_offset
        if el.has("width") and el.has("height"):
            width = self._num(el, "width", 30.0)
            height = self._num(el, "height", 20.0)
        elif el.has("x2") and el.has("y2"):
            width = self._num(el, "x2") + x_offset - x
            height = self._num(el, "y2") + y_offset - y
        else:
            raise TemplateError("<image>: missing required arguments [width,height or x2,y2]")

        path = Path(file)
        ext = path.suffix.lower().lstrip(".")
        if ext not in IMAGE_TYPES:
            raise TemplateError(f"Unsupported image format [{ext}]")
        if not path.is_absolute():
            path = self.base_dir / path
        if not path.is_file():
            raise TemplateError(f"Image file not found [{path}]")
        self._canvas.draw_image(str(path), x, y, width, height)

    def _process_opacity(self, el: Element, x_offset: float, y_offset: float) -> None:
        self._canvas.set_opacity(self._num(el, "value", 1.0))

    def _process_var(self, el: Element) -> None:
        name = self._text(el, "name", required=True)
        value = self._text(el, "value", required=True)
        self.set_var(name, value, overwrite=False)

    # ---- Charts -----------------------------------------------------------------

    def _legend(self, el: Element, x_offset: float, y_offset: float,
                x1: float, y1: float, x2: float, y2: float) -> LegendSettings | None:
        legend_el = self._sub(el, "legend")
        if legend_el is None:
            return None
        overrides = self._overrides(legend_el)
        return LegendSettings(
            x1=self._num(legend_el, "x1", x1) + x_offset,
            y1=self._num(legend_el, "y1", y1) + y_offset,
            x2=self._num(legend_el, "x2", x2) + x_offset,
            y2=self._num(legend_el, "y2", y2) + y_offset,
            radius=self._num(legend_el, "r|radius", 0.0),
            visible=_flag(self._text(legend_el, "visible|visibile", "true")),
            opacity=max(0.0, min(1.0, self._num(legend_el, "opacity", 1.0))),
            title=self.resolve(self._text(legend_el, "title", "")),
            font=overrides["font"] or self._font(None),
            vertical=self._text(legend_el, "orientation", "HORIZ").strip().upper().startswith("V"),
            line=overrides["line"],
            fill=overrides["fill"],
        )

    def _color(self, text: str) -> str:
        return text.strip() or random_hex_color(self.rng)

    def _load_items(self, el: Element) -> list[ChartItem]:
        """Chart series from a static ``<datalist>`` or one bound to a registered datalist."""
        items: list[ChartItem] = []
        data_list = self._sub(el, "datalist")
        list_id = self._text(data_list, "id", "").strip() if data_list is not None else ""

        if data_list is not None and not list_id:
            for data in data_list.elements("data"):
                items.append(ChartItem(
                    label=self.resolve(self._text(data, "label", required=True)),
                    value=self._num(data, "value", required=True),
                    fill=FillSettings("S", self._color(self.resolve(self._text(data, "color", "")))),
                ))
        elif data_list is not None:
            datalist = self._datalists.get(list_id)
            data = data_list.first("data")
            if datalist is not None and data is not None:
                datalist.reset()
                datalist.query = self.resolve(datalist.query_raw)
                datalist.execute_query()
                while not datalist.end_of_data():
                    items.append(ChartItem(
                        label=self.resolve(self._text(data, "label", required=True)),
                        value=self._num(data, "value", required=True),
                        fill=FillSettings("S", self._color(self.resolve(self._text(data, "color", ""))))))
                    datalist.next_record()

        if not items:
            raise TemplateError("No data set found, missing datalist or valid data tag")
        return items

    def _segments(self, el: Element) -> list[ChartSegment]:
        segments = []
        segment_list = self._sub(el, "segmentlist")
        for seg in segment_list.elements() if segment_list is not None else []:
            segments.append(ChartSegment(
                label=self.resolve(self._text(seg, "label", "")),
                start_value=self._num(seg, "startvalue", 0.0),
                end_value=self._num(seg, "endvalue", 100.0),
                fill=FillSettings("S", self._color(self._text(seg, "fillcolor", ""))),
                font=self._font(self._sub(seg, "font")),
                symbol=self._text(seg, "symbol", ""),
            ))
        return segments

    def _process_pie_chart(self, el: Element, x_offset: float, y_offset: float) -> None:
        x1, y1, x2, y2 = self._coords(el, 0.0, 0.0)
        legend = self._legend(el, x_offset, y_offset, x1, y1, x2, y2)
        chart = PieChart(
            x1 + x_offset, y1 + y_offset, x2 + x_offset, y2 + y_offset,
            radius=self._num(el, "r|radius", 0.0),
            border=bool(self._num(el, "border", 0.0)),
            style=self._text(el, "style", "DONUTS"),
            items=self._load_items(el),
            legend=legend,
        )
        chart.render(self._canvas)

    def _process_single_bar_chart(self, el: Element, x_offset: float, y_offset: float) -> None:
        x1, y1, x2, y2 = self._coords(el, 0.0, 0.0)
        legend = self._legend(el, x_offset, y_offset, x1, y1, x2, y2)
        chart = SingleBarChart(
            x1 + x_offset, y1 + y_offset, x2 + x_offset, y2 + y_offset,
            vertical=self._text(el, "orientation", "horizontal").strip().lower().startswith("v"),
            min_value=self._num(el, "minvalue", 0.0),
            max_value=self._num(el, "maxvalue", 0.0),
            title=self.resolve(self._text(el, "title", "")),
            title_font=self._font(self._sub(el, "font")),
            items=self._load_items(el),
            legend=legend,
        )
        chart.render(self._canvas)

    def _process_gauge_chart(self, el: Element, x_offset: float, y_offset: float) -> None:
        x1, y1, x2, y2 = self._coords(el, x_offset, y_offset)
        min_value = self._num(el, "minvalue", 0.0)
        max_value = self._num(el, "maxvalue", 100.0)
        segments = self._segments(el) or [
            ChartSegment("", min_value, max_value, default_segment_fill(), default_segment_font())]
        chart = GaugeChart(
            x1, y1, x2, y2,
            title=self.resolve(self._text(el, "title", "")),
            title_font=self._font(self._sub(el, "titlefont")),
            radius=self._num(el, "r|radius", 0.0),
            border=bool(self._num(el, "border", 0.0)),
            style=self._text(el, "style", "DONUTS"),
            min_value=min_value,
            max_value=max_value,
            value=self._num(el, "value", required=True),
            segments=segments,
        )
        chart.render(self._canvas)

    def _process_kpi_chart(self, el: Element, x_offset: float, y_offset: float) -> None:
        x1, y1, x2, y2 = self._coords(el, x_offset, y_offset)
        chart = KpiChart(
            x1, y1, x2, y2,
            title=self.resolve(self._text(el, "title", "")),
            title_font=self._font(self._sub(el, "titlefont")),
            radius=self._num(el, "r|radius", 0.0),
            border=self._text(el, "border", "1111"),
            value=self._num(el, "value", required=True),
            segments=self._segments(el),
        )
        chart.render(self._canvas)
