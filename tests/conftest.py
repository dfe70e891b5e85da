import pytest

from folio.canvas.base import DrawingSurface


class RecordingSurface(DrawingSurface):
    """Surface that records drawing calls instead of rendering them."""

    def __init__(self):
        super().__init__()
        self.calls: list[tuple] = []
        self.info: dict = {}

    def of(self, kind: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == kind]

    def texts(self) -> list[str]:
        return [c[5] for c in self.of("box")]

    def add_page(self, page):
        self.page = page
        self.calls.append(("page", page.format, page.orientation))

    def set_info(self, creator="", author="", title="", subject="", keywords=""):
        self.info = {"creator": creator, "author": author, "title": title,
                     "subject": subject, "keywords": keywords}

    def finish(self) -> bytes:
        return b"%PDF-recorded"

    def draw_line(self, x1, y1, x2, y2):
        self.calls.append(("line", x1, y1, x2, y2, self.line.width))

    def draw_box(self, x1, y1, x2, y2, text="", align="L", valign="T", border="0", fill=False):
        self.calls.append(("box", x1, y1, x2, y2, text, align, valign, self.font.size))

    def draw_rectangle(self, x1, y1, x2, y2, r=0.0, corners="1111", stroke=True, fill=True):
        self.calls.append(("rect", x1, y1, x2, y2, r, self.fill.color1, self.line.color))

    def draw_circle(self, x, y, r, start=0.0, end=360.0, stroke=True, fill=False):
        self.calls.append(("circle", x, y, r, start, end, fill))

    def draw_pie_sector(self, xc, yc, r, start, end, stroke=False):
        self.calls.append(("sector", xc, yc, r, start, end, self.fill.color1))

    def draw_barcode(self, barcode):
        self.calls.append(("barcode", barcode.type, barcode.value, barcode.x, barcode.y))

    def draw_image(self, path, x, y, width, height):
        self.calls.append(("image", path, x, y, width, height))

    def string_fits(self, text, width, height):
        return True


@pytest.fixture
def surface():
    return RecordingSurface()
