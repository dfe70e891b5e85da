"""Gauge chart — a half dial from -90 to +90 degrees."""

from folio.canvas.base import DrawingSurface
from folio.charts.items import ChartSegment, format_number, select_segment
from folio.engine.settings import FillSettings, FontSettings
from folio.errors import TemplateError

START_ANGLE = -90.0
END_ANGLE = 90.0
TOTAL_ANGLE = 180.0

GAUGE_STYLES = ("RING", "GAUGE", "DONUTS")


class GaugeChart:
    def __init__(self, x1: float, y1: float, x2: float, y2: float, title: str,
                 title_font: FontSettings, radius: float, border: bool, style: str,
                 min_value: float, max_value: float, value: float,
                 segments: list[ChartSegment], background: FillSettings | None = None):
        if max_value <= min_value:
            raise TemplateError("Gauge max value must be greater than min value")
        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2
        self.title = title
        self.title_font = title_font
        self.border = bool(border)
        self.style = style.upper()
        self.min_value = min_value
        self.max_value = max_value
        self.value = value
        self.segments = segments
        self.background = background or FillSettings("S", "DCDCDC")
        max_radius = min((x2 - x1) / 2.0, (y2 - y1) / 2.0)
        self.radius = max_radius if radius <= 0 or radius > max_radius else radius
        self.xc = x1 + (x2 - x1) / 2
        self.yc = y1 + (y2 - y1) / 2
        self._calculate()

    def _calculate(self) -> None:
        clamped = max(self.min_value, min(self.value, self.max_value))
        self.percentage = (clamped - self.min_value) / (self.max_value - self.min_value)
        self.angle = START_ANGLE + TOTAL_ANGLE * self.percentage
        self.segment = select_segment(self.segments, self.value)

    def set_value(self, value: float) -> None:
        self.value = value
        self._calculate()

    def is_over_limit(self) -> bool:
        return self.value > self.max_value

    def render(self, surface: DrawingSurface) -> None:
        with surface.styled(font=self.title_font):
            surface.draw_box(self.x1, self.y1 - 8, self.x2, self.y1, self.title, "C", "T")
        with surface.styled(fill=self.background):
            surface.draw_pie_sector(self.xc, self.yc, self.radius, START_ANGLE, END_ANGLE, stroke=self.border)
        if self.percentage > 0:
            with surface.styled(fill=self.segment.fill):
                surface.draw_pie_sector(self.xc, self.yc, self.radius, START_ANGLE, self.angle,
                                        stroke=self.border)
        if self.style in GAUGE_STYLES:
            with surface.styled(fill=FillSettings("S", "FFFFFF")):
                surface.draw_circle(self.xc, self.yc, self.radius * 0.6, stroke=False, fill=True)

        text = format_number(self.value) + self.segment.symbol
        if self.segment.label:
            text += "\n" + self.segment.label
        with surface.styled(font=self.segment.font):
            surface.draw_box(self.x1, self.y1, self.x2, self.yc, text, "C", "B")
