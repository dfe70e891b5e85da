"""Chart data items and value segments."""

from dataclasses import dataclass, field

from folio.engine.settings import FillSettings, FontSettings

# points to mm
PT = 25.4 / 72


@dataclass
class ChartItem:
    label: str = ""
    value: float = 0.0
    percentage: float = 0.0     # value / total (or / full scale)
    fill: FillSettings | None = None
    x1: float = 0.0
    y1: float = 0.0
    x2: float = 0.0
    y2: float = 0.0
    radius: float = 0.0
    start_angle: float = 0.0
    end_angle: float = 360.0


def default_segment_fill() -> FillSettings:
    return FillSettings("S", "009999")


def default_segment_font() -> FontSettings:
    return FontSettings("helvetica", "B", 14, "006666")


@dataclass
class ChartSegment:
    """A value range with the fill, font and unit symbol used to display it."""
    label: str = ""
    start_value: float = 0.0
    end_value: float = 100.0
    fill: FillSettings = field(default_factory=default_segment_fill)
    font: FontSettings = field(default_factory=default_segment_font)
    symbol: str = ""


def select_segment(segments: list[ChartSegment], value: float) -> ChartSegment:
    """Pick the segment that displays *value*.

    The first segment takes everything up to its end, middle segments take
    ``[start, end)`` and the last one everything from its start upwards.
    """
    last = len(segments) - 1
    for i, seg in enumerate(segments):
        if ((i == 0 and value <= seg.end_value)
                or (i > 0 and seg.start_value <= value < seg.end_value)
                or (i == last and value >= seg.start_value)):
            return seg
    return ChartSegment("", value, value)


def format_number(value: float) -> str:
    return f"{value:,.1f}"


def text_height(font: FontSettings) -> float:
    """Height of one text line in mm."""
    return font.size * 1.25 * PT
