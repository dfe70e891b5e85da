"""FastAPI entry point for Folio."""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from folio import __version__
from folio.api.reports import router as reports_router
from folio.api.templates import router as templates_router, templates_dir

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    path = templates_dir()
    path.mkdir(parents=True, exist_ok=True)
    logger.info("Serving templates from %s", path)
    yield


app = FastAPI(title="Folio", version=__version__, lifespan=lifespan)

app.include_router(reports_router)
app.include_router(templates_router)


@app.get("/api/health")
async def health():
    return {"status": "ok", "version": __version__}


def main():
    import uvicorn

    level = os.environ.get("FOLIO_LOG_LEVEL", "info").lower()
    logging.basicConfig(level=level.upper(), format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    uvicorn.run(
        "folio.app:app",
        host=os.environ.get("FOLIO_HOST", "0.0.0.0"),
        port=int(os.environ.get("FOLIO_PORT", "8000")),
        log_level=level,
    )


if __name__ == "__main__":
    main()
