"""Template tree — a small tagged tree built from the XML report template.

Every node is either a ``Scalar`` (text) or an ``Element`` carrying an
ordered list of attributes and an ordered list of children. Names and
attribute keys are lower-cased. Lookups accept ``"a|b"`` alternatives and
return the first match, attributes first, then the element's own text (for
``value``), then child elements.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Union

from lxml import etree

from folio.errors import TemplateError

_MISSING = object()


@dataclass
class Scalar:
    text: str


@dataclass
class Element:
    name: str
    attributes: list[tuple[str, str]] = field(default_factory=list)
    children: list["Node"] = field(default_factory=list)

    @property
    def text(self) -> str:
        return "".join(c.text for c in self.children if isinstance(c, Scalar)).strip()

    @property
    def is_simple(self) -> bool:
        """No attributes and no child elements: the element stands for its text."""
        return not self.attributes and not any(isinstance(c, Element) for c in self.children)

    def elements(self, name: str | None = None) -> list["Element"]:
        names = _split(name) if name else None
        return [c for c in self.children
                if isinstance(c, Element) and (names is None or c.name in names)]

    def first(self, names: str) -> "Element | None":
        wanted = _split(names)
        for c in self.children:
            if isinstance(c, Element) and c.name in wanted:
                return c
        return None

    def attribute(self, names: str, default: Any = None) -> Any:
        wanted = _split(names)
        for key, value in self.attributes:
            if key in wanted:
                return value
        return default

    def has(self, names: str) -> bool:
        return self._lookup(_split(names)) is not _MISSING

    def get(self, names: str, default: Any = None, required: bool = False) -> Any:
        """Return the text or sub-element registered under *names*."""
        found = self._lookup(_split(names))
        if found is _MISSING or found == "":
            if required and (default is None or default == ""):
                raise TemplateError(f"<{self.name}>: missing required element [{names}]")
            return default
        return found

    def get_float(self, names: str, default: float = 0.0, required: bool = False,
                  resolve: Callable[[str], str] | None = None) -> float:
        """Numeric lookup; *resolve* rewrites the text first and a blank result means *default*."""
        value = self.get(names, None, required=required)
        if value is None:
            return default
        if isinstance(value, Element):
            raise TemplateError(f"<{self.name}>: [{names}] must be a number")
        text = (resolve(value) if resolve is not None else str(value)).strip()
        if not text:
            return default
        try:
            return float(text)
        except ValueError:
            raise TemplateError(f"<{self.name}>: [{names}] must be a number, got '{text}'")

    def _lookup(self, wanted: tuple[str, ...]) -> Any:
        for key, value in self.attributes:
            if key in wanted:
                return value
        if "value" in wanted and self.text:
            return self.text
        for c in self.children:
            if isinstance(c, Element) and c.name in wanted:
                return c.text if c.is_simple else c
        return _MISSING


Node = Union[Scalar, Element]


def _split(names: str) -> tuple[str, ...]:
    return tuple(n.strip().lower() for n in names.split("|") if n.strip())


# ---- Loader -------------------------------------------------------------------

def _local(tag: str) -> str:
    return tag.split("}")[-1] if "}" in tag else tag


def _convert(el) -> Element:
    node = Element(
        name=_local(el.tag).lower(),
        attributes=[(_local(k).lower(), v) for k, v in el.attrib.items()],
    )
    if el.text and el.text.strip():
        node.children.append(Scalar(el.text))
    for child in el:
        # comments and processing instructions carry a non-string tag
        if isinstance(child.tag, str):
            node.children.append(_convert(child))
        if child.tail and child.tail.strip():
            node.children.append(Scalar(child.tail))
    return node


def load_template(xml: str | bytes) -> Element:
    """Parse an XML report template and return its ``<pdf>`` root element."""
    if isinstance(xml, str):
        xml = xml.strip().encode("utf-8")
    if not xml:
        raise TemplateError("Missing XML template")
    parser = etree.XMLParser(remove_comments=True, resolve_entities=False)
    try:
        root = etree.fromstring(xml, parser)
    except etree.XMLSyntaxError as exc:
        raise TemplateError(f"Invalid XML template: {exc}") from exc
    tree = _convert(root)
    if tree.name != "pdf":
        raise TemplateError("Invalid XML template format, missing main [pdf] root tag")
    return tree


def load_template_file(path: str | Path) -> Element:
    path = Path(path)
    if not path.is_file():
        raise TemplateError(f"XML template file not found or not readable [{path}]")
    return load_template(path.read_bytes())
