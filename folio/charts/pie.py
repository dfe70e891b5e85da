"""Pie and ring charts."""

from folio.canvas.base import DrawingSurface
from folio.charts.items import ChartItem
from folio.charts.legend import Legend, LegendSettings
from folio.engine.settings import FillSettings
from folio.engine.tags import format_value
from folio.errors import TemplateError

RING_STYLES = ("RING", "DONUTS")


class PieChart:
    """Sectors sweep clockwise from 12 o'clock, each sized by its share of the total."""

    def __init__(self, x1: float, y1: float, x2: float, y2: float, radius: float, border: bool,
                 style: str, items: list[ChartItem], legend: LegendSettings | None = None):
        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2
        self.border = bool(border)
        self.style = style.upper()
        self.items = items
        max_radius = min((x2 - x1) / 2.0, (y2 - y1) / 2.0)
        self.radius = max_radius if radius <= 0 or radius > max_radius else radius
        self.xc = x1 + (x2 - x1) / 2
        self.yc = y1 + (y2 - y1) / 2
        self.total = 0.0
        self._calculate_sectors()
        self.legend = Legend(legend, items) if legend is not None and legend.visible else None

    def _calculate_sectors(self) -> None:
        total = sum(item.value for item in self.items)
        if total <= 0:
            raise TemplateError("Pie chart total is 0, invalid data source")
        self.total = total
        start = 0.0
        for item in self.items:
            item.x1, item.y1 = self.xc, self.yc
            item.radius = self.radius
            item.percentage = item.value / total
            end = start + 360 * item.percentage
            item.start_angle, item.end_angle = start, end
            start = end

    def render(self, surface: DrawingSurface) -> None:
        for sector in self.items:
            with surface.styled(fill=sector.fill):
                surface.draw_pie_sector(sector.x1, sector.y1, sector.radius, sector.start_angle,
                                        sector.end_angle, stroke=self.border)
        if self.style in RING_STYLES:
            with surface.styled(fill=FillSettings("S", "FFFFFF")):
                surface.draw_circle(self.xc, self.yc, self.radius / 1.5, stroke=self.border, fill=True)
        surface.draw_box(self.xc - self.radius, self.yc - self.radius, self.xc + self.radius,
                         self.yc + self.radius, f"TOTAL {format_value(self.total)}", "C", "M")
        if self.legend is not None:
            self.legend.render(surface)
