"""Tag resolver — substitutes ``{tag}`` placeholders from layered data contexts.

Layers run in order and each layer rewrites the output of the previous one,
so earlier layers win on collisions:

1. constants: CURRENTDATE, CURRENTTIME, PAGEINDEX, PAGECOUNT, RAND1..RAND8
2. user variables
3. the active section: ``{Y}`` and bare ``{field}``
4. ``{section.field}`` of any section
5. ``{list.field}`` of any datalist
6. ``{section.PAGEINDEX}``

Matching ignores case. Tags nobody knows are left as they are.
"""

import random
import re
from datetime import datetime
from typing import Any, Mapping

from folio.engine.datalist import Datalist
from folio.engine.section import Section
from folio.engine.variables import Variables


def has_tags(text: str) -> bool:
    return "{" in text and "}" in text


def format_value(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _replace(text: str, tag: str, value: Any) -> str:
    pattern = re.compile(re.escape("{" + tag + "}"), re.IGNORECASE)
    if not pattern.search(text):
        return text
    rendered = format_value(value)
    return pattern.sub(lambda _m: rendered, text)


def _replace_random(text: str, rng: random.Random) -> str:
    for digits in range(1, 9):
        pattern = re.compile(re.escape(f"{{RAND{digits}}}"), re.IGNORECASE)
        if pattern.search(text):
            value = str(rng.randint(10 ** (digits - 1), 10 ** digits - 1))
            text = pattern.sub(lambda _m: value, text)
    return text


def resolve_tags(
    text: str,
    variables: Variables | Mapping[str, Any],
    active_section: Section | None,
    sections: Mapping[str, Section],
    datalists: Mapping[str, Datalist],
    *,
    page_index: int = 0,
    page_count: int = 0,
    now: datetime | None = None,
    rng: random.Random | None = None,
) -> str:
    if text is None:
        return ""
    result = str(text)
    if not has_tags(result):
        return result

    now = now or datetime.now()
    result = _replace(result, "CURRENTDATE", now.strftime("%d/%m/%Y"))
    result = _replace(result, "CURRENTTIME", now.strftime("%H:%M:%S"))
    result = _replace(result, "PAGEINDEX", page_index)
    result = _replace(result, "PAGECOUNT", page_count)
    result = _replace_random(result, rng or random.Random())
    if not has_tags(result):
        return result

    for key, value in variables.items():
        result = _replace(result, key, value)
        if not has_tags(result):
            return result

    if active_section is not None:
        result = _replace(result, "Y", active_section.current_y())
        for key, value in (active_section.row or {}).items():
            result = _replace(result, key, value)
        if not has_tags(result):
            return result

    for section_id, section in sections.items():
        for key, value in (section.row or {}).items():
            result = _replace(result, f"{section_id}.{key}", value)
    if not has_tags(result):
        return result

    for list_id, datalist in datalists.items():
        for key, value in (datalist.row or {}).items():
            result = _replace(result, f"{list_id}.{key}", value)
    if not has_tags(result):
        return result

    for section_id, section in sections.items():
        result = _replace(result, f"{section_id}.PAGEINDEX", section.page_index)
    return result
