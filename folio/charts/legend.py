"""Colour swatches with labels, laid out in a row or a column."""

from dataclasses import dataclass

from folio.canvas.base import DrawingSurface
from folio.charts.items import ChartItem
from folio.engine.settings import FillSettings, FontSettings, LineSettings
from folio.engine.tags import format_value


@dataclass
class LegendSettings:
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    radius: float = 0.0         # background corner radius
    visible: bool = False
    opacity: float = 1.0
    title: str = ""
    font: FontSettings | None = None
    vertical: bool = True
    line: LineSettings | None = None
    fill: FillSettings | None = None
    padding: float = 2.0
    item_spacing: float = 1.0
    box_size: float = 5.0
    title_height: float = 6.0
    label_height: float = 6.0
    show_values: bool = True


class Legend:
    def __init__(self, settings: LegendSettings, items: list[ChartItem]):
        self.settings = settings
        self.items = items

    def _label(self, item: ChartItem) -> str:
        if self.settings.show_values:
            return f"{item.label} ({format_value(item.value)})"
        return item.label

    def _swatch(self, surface: DrawingSurface, x: float, y: float, item: ChartItem) -> None:
        s = self.settings
        with surface.styled(fill=item.fill):
            surface.draw_rectangle(x, y, x + s.box_size, y + s.box_size, 0, "0000")

    def render(self, surface: DrawingSurface) -> None:
        s = self.settings
        if not s.visible or not self.items:
            return
        with surface.styled(font=s.font, line=s.line, fill=s.fill, opacity=s.opacity):
            surface.draw_rectangle(s.x1, s.y1, s.x2, s.y2, s.radius, "1111")
            if s.vertical:
                self._render_vertical(surface)
            else:
                self._render_horizontal(surface)

    def _render_horizontal(self, surface: DrawingSurface) -> None:
        s = self.settings
        x = s.x1 + s.padding
        y = s.y1 + s.padding
        count = len(self.items) + (1 if s.title else 0)
        width = max(10.0, (s.x2 - s.x1 - (count - 1) * s.padding) / (count + 1))
        if s.title:
            surface.draw_box(x, y, x + width, y + s.title_height, s.title, "L", "M")
            x += width + s.padding
        for item in self.items:
            self._swatch(surface, x, y, item)
            x += s.box_size + s.padding
            surface.draw_box(x, y, x + width, y + s.label_height, self._label(item), "L", "M")
            x += width + s.padding

    def _render_vertical(self, surface: DrawingSurface) -> None:
        s = self.settings
        y = s.y1 + s.padding
        if s.title:
            surface.draw_box(s.x1 + s.padding, y, s.x2 - s.padding, y + s.title_height, s.title, "L", "M")
            y += s.title_height
        for item in self.items:
            x = s.x1 + s.padding
            self._swatch(surface, x, y, item)
            x += s.box_size + s.padding
            surface.draw_box(x, y, s.x2 - s.padding, y + s.label_height, self._label(item), "L", "M")
            y += s.label_height + s.item_spacing
