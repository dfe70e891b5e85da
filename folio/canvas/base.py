"""Drawing surface — the page canvas the report engine draws on.

Coordinates are page units (mm unless the page says otherwise) measured from
the top-left corner. Angles are degrees clockwise from 12 o'clock.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import replace
from typing import Iterator

from folio.engine.settings import BarcodeSettings, FillSettings, FontSettings, LineSettings, PageSettings


class DrawingSurface(ABC):
    """Base class for drawing targets.

    The current font, line style, fill and opacity persist between calls;
    drawing primitives always use the current values. Subclasses implement
    the primitives, ``string_fits()`` and ``finish()``.
    """

    def __init__(self):
        self.page = PageSettings()
        self.font = FontSettings()
        self.line = LineSettings()
        self.fill = FillSettings()
        self.opacity = 1.0

    # ---- Current style ----------------------------------------------------------

    def set_font(self, font: FontSettings) -> None:
        self.font = replace(font)

    def set_line_style(self, line: LineSettings) -> None:
        self.line = replace(line)

    def set_fill(self, fill: FillSettings) -> None:
        self.fill = replace(fill)

    def set_opacity(self, opacity: float) -> None:
        self.opacity = max(0.0, min(1.0, float(opacity)))

    @contextmanager
    def styled(self, font: FontSettings | None = None, line: LineSettings | None = None,
               fill: FillSettings | None = None, opacity: float | None = None) -> Iterator["DrawingSurface"]:
        """Apply temporary style overrides, restoring the previous style on exit."""
        saved = (self.font, self.line, self.fill, self.opacity)
        try:
            if font is not None:
                self.set_font(font)
            if line is not None:
                self.set_line_style(line)
            if fill is not None:
                self.set_fill(fill)
            if opacity is not None:
                self.set_opacity(opacity)
            yield self
        finally:
            self.font, self.line, self.fill, self.opacity = saved

    def fit_text(self, text: str, width: float, height: float) -> str:
        """Drop trailing characters until *text* fits in the box."""
        while text and not self.string_fits(text, width, height):
            text = text[:-1]
        return text

    # ---- Document ---------------------------------------------------------------

    @abstractmethod
    def add_page(self, page: PageSettings) -> None:
        """Start a new page with the given format and orientation."""

    @abstractmethod
    def set_info(self, creator: str = "", author: str = "", title: str = "",
                 subject: str = "", keywords: str = "") -> None:
        """Record document metadata."""

    @abstractmethod
    def finish(self) -> bytes:
        """Close the document and return its bytes."""

    # ---- Primitives -------------------------------------------------------------

    @abstractmethod
    def draw_line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        ...

    @abstractmethod
    def draw_box(self, x1: float, y1: float, x2: float, y2: float, text: str = "",
                 align: str = "L", valign: str = "T", border: str = "0", fill: bool = False) -> None:
        """Text box. *border* is ``0``, ``1`` or any of ``LTRB``."""

    @abstractmethod
    def draw_rectangle(self, x1: float, y1: float, x2: float, y2: float, r: float = 0.0,
                       corners: str = "1111", stroke: bool = True, fill: bool = True) -> None:
        """Rectangle; *corners* flags which corners are rounded (TR, BR, BL, TL)."""

    @abstractmethod
    def draw_circle(self, x: float, y: float, r: float, start: float = 0.0, end: float = 360.0,
                    stroke: bool = True, fill: bool = False) -> None:
        ...

    @abstractmethod
    def draw_pie_sector(self, xc: float, yc: float, r: float, start: float, end: float,
                        stroke: bool = False) -> None:
        """Filled sector swept clockwise from *start* to *end*."""

    @abstractmethod
    def draw_barcode(self, barcode: BarcodeSettings) -> None:
        ...

    @abstractmethod
    def draw_image(self, path: str, x: float, y: float, width: float, height: float) -> None:
        ...

    @abstractmethod
    def string_fits(self, text: str, width: float, height: float) -> bool:
        """True if *text*, wrapped to *width* in the current font, fits in *height*."""
