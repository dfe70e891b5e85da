"""Single stacked bar chart."""

from folio.canvas.base import DrawingSurface
from folio.charts.items import ChartItem, text_height
from folio.charts.legend import Legend, LegendSettings
from folio.engine.settings import FillSettings, FontSettings
from folio.errors import TemplateError


class SingleBarChart:
    """Items stacked left to right (horizontal) or bottom up (vertical).

    ``max_value = 0`` scales the bar to the series total.
    """

    def __init__(self, x1: float, y1: float, x2: float, y2: float, vertical: bool,
                 min_value: float, max_value: float, title: str, title_font: FontSettings,
                 items: list[ChartItem], legend: LegendSettings | None = None):
        self.x1, self.y1, self.x2, self.y2 = x1, y1, x2, y2
        self.vertical = vertical
        self.min_value = min_value
        self.max_value = max_value
        self.title = title
        self.title_font = title_font
        self.items = items
        self.total = 0.0
        self._calculate_bars()
        self.legend = Legend(legend, items) if legend is not None and legend.visible else None

    def _calculate_bars(self) -> None:
        self.total = sum(item.value for item in self.items)
        if self.max_value == 0:
            self.max_value = self.total
        if self.max_value <= 0:
            raise TemplateError("Single bar chart full scale is 0, invalid data source")

        if self.vertical:
            bottom = self.y2
            for item in self.items:
                item.percentage = item.value / self.max_value
                height = (self.y2 - self.y1) * item.percentage
                item.x1, item.x2 = self.x1, self.x2
                item.y1 = bottom - height
                if item.y1 < self.y1:
                    item.y1 = self.y1
                    height = 0
                item.y2 = bottom
                bottom -= height
        else:
            left = self.x1
            for item in self.items:
                item.percentage = item.value / self.max_value
                width = (self.x2 - self.x1) * item.percentage
                item.x1, item.x2 = left, left + width
                item.y1, item.y2 = self.y1, self.y2
                left += width

    def render(self, surface: DrawingSurface) -> None:
        with surface.styled(fill=FillSettings("S", "EEEEEE")):
            surface.draw_rectangle(self.x1, self.y1, self.x2, self.y2, 0, "0000", stroke=False)
        for bar in self.items:
            with surface.styled(fill=bar.fill):
                surface.draw_rectangle(bar.x1, bar.y1, bar.x2, bar.y2, 0, "0000", stroke=False)
        if self.title and not self.vertical:
            with surface.styled(font=self.title_font):
                surface.draw_box(self.x1, self.y1 - text_height(self.title_font), self.x2, self.y1,
                                 self.title, "C", "M")
        if self.legend is not None:
            self.legend.render(surface)
