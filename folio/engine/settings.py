"""Style settings — page, font, line, fill and barcode values used while drawing."""

import random
import re
from dataclasses import dataclass

from folio.errors import TemplateError

_HEX = re.compile(r"^[0-9a-fA-F]{6}$")


def hex_to_rgb(hex_color: str) -> tuple[int, int, int]:
    """Convert ``RRGGBB`` (optionally ``#``-prefixed) to a 0..255 triple."""
    h = str(hex_color).strip().lstrip("#")
    if not _HEX.match(h):
        raise TemplateError(f"Colour must be 6 hexadecimal digits, got '{hex_color}'")
    return int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16)


def adjust_brightness(hex_color: str, amount: int) -> str:
    """Lighten (amount > 0) or darken (amount < 0) a colour, clamping each channel."""
    h = str(hex_color).strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    r, g, b = hex_to_rgb(h)
    return "".join(f"{max(0, min(255, c + amount)):02x}" for c in (r, g, b))


def random_hex_color(rng: random.Random | None = None) -> str:
    rng = rng or random
    return "".join(f"{rng.randint(0, 255):02x}" for _ in range(3))


@dataclass
class PageSettings:
    format: str = "A4"
    orientation: str = "P"      # P-portrait, L-landscape
    unit: str = "mm"

    @classmethod
    def from_spec(cls, spec: str, base: "PageSettings | None" = None) -> "PageSettings":
        """Build settings from ``"A4,L[,mm]"``; missing parts come from *base*."""
        base = base or cls()
        parts = [p.strip() for p in spec.split(",")]
        fmt = parts[0] if len(parts) > 0 and parts[0] else base.format
        orientation = parts[1] if len(parts) > 1 and parts[1] else base.orientation
        unit = parts[2] if len(parts) > 2 and parts[2] else base.unit
        return cls(fmt, orientation, unit)

    @property
    def landscape(self) -> bool:
        return self.orientation.upper().startswith("L")


@dataclass
class FontSettings:
    family: str = "helvetica"   # helvetica, times, courier, symbol, zapfdingbats
    style: str = ""             # "" regular, B bold, I italic, BI
    size: float = 9.0           # points
    color: str = "000000"

    def rgb(self) -> tuple[int, int, int]:
        return hex_to_rgb(self.color)


@dataclass
class LineSettings:
    width: float = 0.2
    color: str = "000000"
    dash: str = "0"             # "0" solid, "2" or "2,1" on/off lengths
    cap: str = "butt"           # butt, round, square
    join: str = "miter"         # miter, round, bevel
    phase: int = 0

    def rgb(self) -> tuple[int, int, int]:
        return hex_to_rgb(self.color)

    def dash_pattern(self) -> list[float]:
        parts = [p.strip() for p in str(self.dash).split(",") if p.strip()]
        try:
            values = [float(p) for p in parts]
        except ValueError:
            raise TemplateError(f"Invalid dash pattern '{self.dash}'")
        if not values or values == [0.0]:
            return []
        return values


@dataclass
class FillSettings:
    type: str = "S"             # S-solid, L-linear gradient, R-radial gradient
    color1: str = "FFFFFF"
    color2: str = "FFFFFF"

    def __post_init__(self):
        t = str(self.type).strip().upper()[:1]
        self.type = t if t in ("S", "L", "R") else "S"
        hex_to_rgb(self.color1)
        hex_to_rgb(self.color2)

    def start_rgb(self) -> tuple[int, int, int]:
        return hex_to_rgb(self.color1)

    def end_rgb(self) -> tuple[int, int, int]:
        return hex_to_rgb(self.color2)


@dataclass
class BarcodeSettings:
    x: float = 0.0
    y: float = 0.0
    width: float = 30.0
    height: float = 10.0
    xres: float = 0.4
    align: str = "C"            # C-center, L-left, R-right
    type: str = "C39"           # C39, C128, EAN8, EAN13, I25, QR ...
    value: str = ""
    font_family: str = "helvetica"
    font_size: float = 9.0
    color: str = "000000"
    back_color: str = "FFFFFF"
