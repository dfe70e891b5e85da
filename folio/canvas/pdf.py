"""PDF surface — DrawingSurface on a reportlab canvas."""

import io
import logging

from reportlab.graphics import renderPDF
from reportlab.graphics.barcode import createBarcodeDrawing
from reportlab.lib import colors
from reportlab.lib.pagesizes import A3, A4, A5, landscape, legal, letter, portrait
from reportlab.lib.units import cm, inch, mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas as rl_canvas

from folio.canvas.base import DrawingSurface
from folio.engine.settings import BarcodeSettings, PageSettings, hex_to_rgb
from folio.errors import TemplateError

logger = logging.getLogger(__name__)

page_sizes = {"A3": A3, "A4": A4, "A5": A5, "LETTER": letter, "LEGAL": legal}
units = {"mm": mm, "cm": cm, "in": inch, "pt": 1.0}

# family -> (regular, bold, italic, bold italic)
fonts = {
    "helvetica": ("Helvetica", "Helvetica-Bold", "Helvetica-Oblique", "Helvetica-BoldOblique"),
    "times": ("Times-Roman", "Times-Bold", "Times-Italic", "Times-BoldItalic"),
    "courier": ("Courier", "Courier-Bold", "Courier-Oblique", "Courier-BoldOblique"),
    "symbol": ("Symbol",) * 4,
    "zapfdingbats": ("ZapfDingbats",) * 4,
}

barcode_types = {
    "C39": "Standard39",
    "C39+": "Extended39",
    "C39E": "Extended39",
    "C93": "Standard93",
    "C128": "Code128",
    "C128A": "Code128",
    "C128B": "Code128",
    "C128C": "Code128",
    "EAN8": "EAN8",
    "EAN13": "EAN13",
    "UPCA": "UPCA",
    "I25": "I2of5",
    "MSI": "MSI",
    "CODABAR": "Codabar",
    "POSTNET": "POSTNET",
    "QR": "QR",
    "QRCODE": "QR",
}

_caps = {"butt": 0, "round": 1, "square": 2}
_joins = {"miter": 0, "round": 1, "bevel": 2}

# line height as a multiple of the font size
LINE_RATIO = 1.25
# horizontal text padding inside a box, in page units
CELL_PADDING = 1.0


def font_name(family: str, style: str) -> str:
    faces = fonts.get(family.strip().lower())
    if faces is None:
        logger.warning("Unknown font family '%s', using helvetica", family)
        faces = fonts["helvetica"]
    s = style.upper()
    return faces[("B" in s) + 2 * ("I" in s)]


def _color(hex_color: str) -> colors.Color:
    r, g, b = hex_to_rgb(hex_color)
    return colors.Color(r / 255, g / 255, b / 255)


class PdfSurface(DrawingSurface):
    """Draws onto a reportlab canvas held in memory.

    A page is opened implicitly if drawing starts before ``add_page()``.
    """

    def __init__(self, page: PageSettings | None = None):
        super().__init__()
        if page is not None:
            self.page = page
        self._buffer = io.BytesIO()
        size = self._page_size(self.page)
        self._height = size[1]
        self._canvas = rl_canvas.Canvas(self._buffer, pagesize=size)
        self._started = False
        self._finished = False
        self.page_count = 0

    # ---- Geometry ---------------------------------------------------------------

    def _page_size(self, page: PageSettings) -> tuple[float, float]:
        size = page_sizes.get(page.format.strip().upper())
        if size is None:
            raise TemplateError(f"Unsupported page format '{page.format}'")
        return landscape(size) if page.landscape else portrait(size)

    @property
    def _k(self) -> float:
        unit = units.get(self.page.unit.strip().lower())
        if unit is None:
            raise TemplateError(f"Unsupported page unit '{self.page.unit}'")
        return unit

    def _x(self, x: float) -> float:
        return x * self._k

    def _y(self, y: float) -> float:
        """Top-left page units to reportlab's bottom-left points."""
        return self._height - y * self._k

    def _ensure_page(self) -> None:
        if not self._started:
            self.add_page(self.page)

    # ---- Style ------------------------------------------------------------------

    def _apply_line(self) -> None:
        c = self._canvas
        c.setLineWidth(self.line.width * self._k)
        c.setStrokeColor(_color(self.line.color))
        c.setStrokeAlpha(self.opacity)
        c.setDash([d * self._k for d in self.line.dash_pattern()], self.line.phase)
        c.setLineCap(_caps.get(str(self.line.cap).lower(), 0))
        c.setLineJoin(_joins.get(str(self.line.join).lower(), 0))

    def _apply_fill(self, hex_color: str | None = None) -> None:
        self._canvas.setFillColor(_color(hex_color or self.fill.color1))
        self._canvas.setFillAlpha(self.opacity)

    def _apply_font(self) -> None:
        c = self._canvas
        c.setFont(font_name(self.font.family, self.font.style), self.font.size)
        c.setFillColor(_color(self.font.color))
        c.setFillAlpha(self.opacity)

    def _paint_gradient(self, path, x: float, y: float, w: float, h: float) -> None:
        """Fill *path* with the current linear or radial gradient."""
        c = self._canvas
        start, end = _color(self.fill.color1), _color(self.fill.color2)
        c.saveState()
        c.setFillAlpha(self.opacity)
        c.clipPath(path, stroke=0, fill=0)
        if self.fill.type == "R":
            c.radialGradient(x + w / 2, y + h / 2, max(w, h) / 2, (start, end))
        else:
            c.linearGradient(x, y + h / 2, x + w, y + h / 2, (start, end))
        c.restoreState()

    # ---- Document ---------------------------------------------------------------

    def add_page(self, page: PageSettings) -> None:
        if self._started:
            self._canvas.showPage()
        self.page = page
        size = self._page_size(page)
        self._height = size[1]
        self._canvas.setPageSize(size)
        self._started = True
        self.page_count += 1
        logger.debug("Page %d added (%s,%s)", self.page_count, page.format, page.orientation)

    def set_info(self, creator: str = "", author: str = "", title: str = "",
                 subject: str = "", keywords: str = "") -> None:
        c = self._canvas
        c.setCreator(creator)
        c.setAuthor(author)
        c.setTitle(title)
        c.setSubject(subject)
        c.setKeywords(keywords)

    def finish(self) -> bytes:
        if not self._finished:
            self._ensure_page()
            self._canvas.save()
            self._finished = True
        return self._buffer.getvalue()

    # ---- Primitives -------------------------------------------------------------

    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._ensure_page()
        self._apply_line()
        self._canvas.line(self._x(x1), self._y(y1), self._x(x2), self._y(y2))

    def _rect_path(self, x1: float, y1: float, x2: float, y2: float, r: float, corners: str):
        left, right = sorted((self._x(x1), self._x(x2)))
        bottom, top = sorted((self._y(y1), self._y(y2)))
        r = max(0.0, min(r * self._k, (right - left) / 2, (top - bottom) / 2))
        flags = (str(corners) + "0000")[:4]
        rtr, rbr, rbl, rtl = (r if f == "1" else 0.0 for f in flags)

        p = self._canvas.beginPath()
        p.moveTo(left + rbl, bottom)
        p.lineTo(right - rbr, bottom)
        if rbr:
            p.arcTo(right - 2 * rbr, bottom, right, bottom + 2 * rbr, -90, 90)
        p.lineTo(right, top - rtr)
        if rtr:
            p.arcTo(right - 2 * rtr, top - 2 * rtr, right, top, 0, 90)
        p.lineTo(left + rtl, top)
        if rtl:
            p.arcTo(left, top - 2 * rtl, left + 2 * rtl, top, 90, 90)
        p.lineTo(left, bottom + rbl)
        if rbl:
            p.arcTo(left, bottom, left + 2 * rbl, bottom + 2 * rbl, 180, 90)
        p.close()
        return p, left, bottom, right - left, top - bottom

    def draw_rectangle(self, x1: float, y1: float, x2: float, y2: float, r: float = 0.0,
                       corners: str = "1111", stroke: bool = True, fill: bool = True) -> None:
        self._ensure_page()
        stroke = stroke and self.line.width > 0
        path, x, y, w, h = self._rect_path(x1, y1, x2, y2, r, corners)
        if fill and self.fill.type != "S":
            self._paint_gradient(path, x, y, w, h)
            fill = False
        if not (stroke or fill):
            return
        self._apply_line()
        self._apply_fill()
        path, *_ = self._rect_path(x1, y1, x2, y2, r, corners)
        self._canvas.drawPath(path, stroke=int(stroke), fill=int(fill))

    def draw_box(self, x1: float, y1: float, x2: float, y2: float, text: str = "",
                 align: str = "L", valign: str = "T", border: str = "0", fill: bool = False) -> None:
        self._ensure_page()
        c = self._canvas
        left, right = sorted((x1, x2))
        top, bottom = sorted((y1, y2))
        width, height = right - left, bottom - top

        if fill:
            self.draw_rectangle(left, top, right, bottom, 0, "0000", stroke=False, fill=True)

        border = str(border).strip().upper()
        if border == "1":
            self.draw_rectangle(left, top, right, bottom, 0, "0000", stroke=True, fill=False)
        elif border not in ("", "0"):
            edges = {"L": (left, top, left, bottom), "T": (left, top, right, top),
                     "R": (right, top, right, bottom), "B": (left, bottom, right, bottom)}
            for side in border:
                if side in edges:
                    self.draw_line(*edges[side])

        text = self.fit_text(text or "", width, height)
        if not text:
            return
        lines = self._wrap(text, width)
        leading = self.font.size * LINE_RATIO / self._k
        block = leading * len(lines)
        if valign == "M":
            y = top + (height - block) / 2
        elif valign == "B":
            y = bottom - block
        else:
            y = top

        self._apply_font()
        for line in lines:
            y += leading
            baseline = self._y(y - (leading - self.font.size / self._k) / 2 - self.font.size * 0.2 / self._k)
            if align == "C":
                c.drawCentredString(self._x((left + right) / 2), baseline, line)
            elif align == "R":
                c.drawRightString(self._x(right - CELL_PADDING), baseline, line)
            else:
                c.drawString(self._x(left + CELL_PADDING), baseline, line)

    def draw_circle(self, x: float, y: float, r: float, start: float = 0.0, end: float = 360.0,
                    stroke: bool = True, fill: bool = False) -> None:
        self._ensure_page()
        self._apply_line()
        self._apply_fill()
        c = self._canvas
        k = self._k
        if end - start >= 360 or (start == 0 and end == 360):
            c.circle(self._x(x), self._y(y), r * k, stroke=int(stroke), fill=int(fill))
            return
        x1, y1 = self._x(x - r), self._y(y + r)
        x2, y2 = self._x(x + r), self._y(y - r)
        if fill:
            c.wedge(x1, y1, x2, y2, 90 - end, end - start, stroke=int(stroke), fill=1)
        else:
            c.arc(x1, y1, x2, y2, 90 - end, end - start)

    def draw_pie_sector(self, xc: float, yc: float, r: float, start: float, end: float,
                        stroke: bool = False) -> None:
        extent = end - start
        if extent <= 0:
            return
        if extent >= 360:
            self.draw_circle(xc, yc, r, stroke=stroke, fill=True)
            return
        self._ensure_page()
        self._apply_line()
        self._apply_fill()
        self._canvas.wedge(self._x(xc - r), self._y(yc + r), self._x(xc + r), self._y(yc - r),
                           90 - end, extent, stroke=int(stroke), fill=1)

    def draw_barcode(self, barcode: BarcodeSettings) -> None:
        if not barcode.value:
            logger.warning("Empty barcode value at (%s, %s), skipped", barcode.x, barcode.y)
            return
        kind = barcode_types.get(barcode.type.strip().upper())
        if kind is None:
            raise TemplateError(f"Unsupported barcode type '{barcode.type}'")
        self._ensure_page()
        k = self._k
        options = {"width": barcode.width * k, "height": barcode.height * k}
        if kind != "QR":
            options["barWidth"] = barcode.xres * k
        try:
            drawing = createBarcodeDrawing(kind, value=str(barcode.value), **options)
        except (ValueError, TypeError) as exc:
            raise TemplateError(f"Invalid {barcode.type} barcode value '{barcode.value}': {exc}") from exc
        renderPDF.draw(drawing, self._canvas, self._x(barcode.x), self._y(barcode.y + barcode.height))

    def draw_image(self, path: str, x: float, y: float, width: float, height: float) -> None:
        self._ensure_page()
        k = self._k
        self._canvas.drawImage(str(path), self._x(x), self._y(y + height), width * k, height * k,
                               mask="auto")

    def _wrap(self, text: str, width: float) -> list[str]:
        name = font_name(self.font.family, self.font.style)
        avail = max(0.0, (width - 2 * CELL_PADDING) * self._k)
        lines: list[str] = []
        for para in text.split("\n"):
            lines.extend(simpleSplit(para, name, self.font.size, avail) or [""])
        return lines

    def string_fits(self, text: str, width: float, height: float) -> bool:
        leading = self.font.size * LINE_RATIO / self._k
        return len(self._wrap(text, width)) * leading <= height + 1e-6
