from unittest.mock import patch

import pytest
from starlette.testclient import TestClient

from folio import __version__
from folio.app import app
from folio.data.base import RowCursor
from folio.errors import DataAccessError

TEMPLATE = """
<pdf>
  <content id="row"><box x1="10" y1="10" x2="100" y2="16" text="{title}: {n}"/></content>
  <section id="rows" page="A4,P" y_start="10" row_height="6" y_end="280">
    <output name="rows.pdf"/>
    <print_content>row</print_content>
  </section>
</pdf>
"""


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("FOLIO_DATA_DIR", str(tmp_path))
    return tmp_path


@pytest.fixture
def client(data_dir):
    with TestClient(app) as c:
        yield c


def test_health(client):
    resp = client.get("/api/health")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok", "version": __version__}


def test_startup_creates_templates_dir(client, data_dir):
    assert (data_dir / "templates").is_dir()


def test_list_and_read_templates(client, data_dir):
    (data_dir / "templates" / "invoice.xml").write_text(TEMPLATE, encoding="utf-8")
    (data_dir / "templates" / "notes.txt").write_text("ignored")

    resp = client.get("/api/templates")
    assert resp.json() == {"templates": ["invoice.xml"]}

    resp = client.get("/api/templates/invoice")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    assert "<pdf>" in resp.text

    assert client.get("/api/templates/missing").status_code == 404


def test_render_inline_template(client):
    resp = client.post("/api/reports/render", json={
        "template": TEMPLATE,
        "variables": {"title": "Row"},
        "sections": {"rows": {"rows": [{"n": 1}, {"n": 2}]}},
    })
    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert resp.headers["content-disposition"] == 'inline; filename="rows.pdf"'
    assert resp.content.startswith(b"%PDF")


def test_render_stored_template_with_filename(client, data_dir):
    (data_dir / "templates" / "rows.xml").write_text(TEMPLATE, encoding="utf-8")
    resp = client.post("/api/reports/render", json={
        "template_name": "rows",
        "sections": {"rows": {"rows": [{"n": 1}]}},
        "filename": "custom.pdf",
    })
    assert resp.status_code == 200
    assert 'filename="custom.pdf"' in resp.headers["content-disposition"]


def test_render_unknown_template_name(client):
    resp = client.post("/api/reports/render", json={"template_name": "nope"})
    assert resp.status_code == 404


def test_render_requires_a_template(client):
    resp = client.post("/api/reports/render", json={"variables": {"a": 1}})
    assert resp.status_code == 422


def test_render_bad_template(client):
    resp = client.post("/api/reports/render", json={"template": "<pdf><section id='s'><bogus/></section></pdf>"})
    assert resp.status_code == 422
    assert "bogus" in resp.json()["detail"]


def test_render_invalid_xml(client):
    resp = client.post("/api/reports/render", json={"template": "<pdf>"})
    assert resp.status_code == 422


class FailingCursor(RowCursor):
    adapter = "HttpJsonCursor"

    def __init__(self, url, **kwargs):
        super().__init__(url)

    def execute(self):
        raise DataAccessError(self.adapter, "GET failed: 503")

    def fetch_next(self):
        return None

    def reset(self):
        pass


def test_render_data_source_failure(client):
    with patch("folio.api.reports.HttpJsonCursor", FailingCursor):
        resp = client.post("/api/reports/render", json={
            "template": TEMPLATE,
            "sections": {"rows": {"url": "https://api.test/rows"}},
        })
    assert resp.status_code == 502
    assert "503" in resp.json()["detail"]
