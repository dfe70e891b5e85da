"""KPI tile: a rounded box coloured by the segment its value falls in."""

from folio.canvas.base import DrawingSurface
from folio.charts.items import ChartSegment, format_number, select_segment
from folio.engine.settings import FontSettings, LineSettings, adjust_brightness


class KpiChart:
    def __init__(self, x1: float, y1: float, x2: float, y2: float, title: str,
                 title_font: FontSettings, radius: float, border: str, value: float,
                 segments: list[ChartSegment]):
        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2
        self.title = title
        self.title_font = title_font
        self.radius = radius
        self.border = border
        self.value = value
        self.segment = select_segment(segments, value)

    def render(self, surface: DrawingSurface) -> None:
        seg = self.segment
        border_line = LineSettings(0.75, adjust_brightness(seg.fill.color1, -10))
        with surface.styled(line=border_line, fill=seg.fill):
            surface.draw_rectangle(self.x1, self.y1, self.x2, self.y2, self.radius, self.border)
        with surface.styled(font=self.title_font):
            surface.draw_box(self.x1, self.y1, self.x2, self.y2, self.title, "C", "T")
        with surface.styled(font=seg.font):
            surface.draw_box(self.x1, self.y1, self.x2, self.y2, format_number(self.value) + seg.symbol,
                             "C", "M" if seg.label else "B")
        if seg.label:
            with surface.styled(font=self.title_font):
                surface.draw_box(self.x1, self.y1, self.x2, self.y2, seg.label, "C", "B")
