"""Templates API — list and read XML report templates from the data directory."""

import os
import re
from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

router = APIRouter(prefix="/api/templates", tags=["templates"])

_NAME = re.compile(r"^[A-Za-z0-9_\-\.]+$")


def templates_dir() -> Path:
    data_dir = Path(os.environ.get("FOLIO_DATA_DIR", "folio_data"))
    return data_dir / "templates"


def read_template(name: str) -> str:
    """Return the XML of a stored template; 404 if it does not exist."""
    if not name.endswith(".xml"):
        name += ".xml"
    if not _NAME.match(name) or ".." in name:
        raise HTTPException(status_code=404, detail=f"Template '{name}' not found")
    path = templates_dir() / name
    if not path.is_file():
        raise HTTPException(status_code=404, detail=f"Template '{name}' not found")
    return path.read_text(encoding="utf-8")


@router.get("")
def list_templates():
    """List the template files available for rendering."""
    path = templates_dir()
    if not path.is_dir():
        return {"templates": []}
    return {"templates": sorted(p.name for p in path.glob("*.xml") if p.is_file())}


@router.get("/{name}")
def get_template(name: str):
    return Response(content=read_template(name), media_type="application/xml")
