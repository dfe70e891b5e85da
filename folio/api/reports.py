"""Reports API — render a template with posted data into a PDF."""

import logging
from typing import Any

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response
from pydantic import BaseModel, Field

from folio.api.templates import read_template
from folio.data.base import RowCursor
from folio.data.http import HttpJsonCursor
from folio.data.memory import ListCursor
from folio.engine.report import ReportEngine
from folio.errors import DataAccessError, TemplateError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["reports"])


class DataSource(BaseModel):
    """Inline rows, or a URL returning JSON rows."""
    rows: list[dict[str, Any]] | None = None
    url: str | None = None
    json_path: str | None = None
    method: str = "GET"
    headers: dict[str, str] = Field(default_factory=dict)
    page: str | None = None


class RenderPayload(BaseModel):
    template: str | None = None
    template_name: str | None = None
    variables: dict[str, Any] = Field(default_factory=dict)
    sections: dict[str, DataSource] = Field(default_factory=dict)
    datalists: dict[str, DataSource] = Field(default_factory=dict)
    filename: str | None = None


def _cursor(source: DataSource) -> RowCursor | None:
    if source.rows is not None:
        return ListCursor(source.rows)
    if source.url:
        return HttpJsonCursor(source.url, json_path=source.json_path, method=source.method,
                              headers=source.headers)
    return None


def build_engine(payload: RenderPayload) -> ReportEngine:
    if payload.template:
        xml = payload.template
    elif payload.template_name:
        xml = read_template(payload.template_name)
    else:
        raise HTTPException(status_code=422, detail="Either 'template' or 'template_name' is required")

    engine = ReportEngine()
    engine.set_template(xml)
    for key, value in payload.variables.items():
        engine.set_var(key, value)
    for section_id, source in payload.sections.items():
        engine.set_section(section_id, _cursor(source), source.page)
    for list_id, source in payload.datalists.items():
        engine.set_datalist(list_id, _cursor(source))
    return engine


@router.post("/render")
def render_report(payload: RenderPayload):
    """Render the report and return it as ``application/pdf``."""
    try:
        engine = build_engine(payload)
        pdf = engine.build()
    except TemplateError as exc:
        logger.warning("Template error: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc))
    except DataAccessError as exc:
        logger.error("Data access error: %s", exc)
        raise HTTPException(status_code=502, detail=str(exc))

    filename = payload.filename or engine.output_name or "report.pdf"
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'inline; filename="{filename}"'},
    )
