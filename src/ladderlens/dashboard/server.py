# Copyright (c) Syntropy Systems
"""ladderlens dashboard - FastAPI server with Jinja2 + Tailwind."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Annotated, Protocol, cast

from fastapi import FastAPI, File, Form, Query, Request, UploadFile
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from fastapi.templating import Jinja2Templates

import ladderlens
from ladderlens.config import LadderlensConfig, load_config
from ladderlens.errors import ShareDecodeError, UnsupportedInputError
from ladderlens.fields import field_label
from ladderlens.ingest import load_upload, parse_json_text
from ladderlens.metrics import stage_width
from ladderlens.share import build_share_url, decode_token, encode_record
from ladderlens.view import build_record_view

if TYPE_CHECKING:
    from ladderlens.models import Record

logger = logging.getLogger(__name__)

# Setup paths
DASHBOARD_DIR = Path(__file__).parent
TEMPLATES_DIR = DASHBOARD_DIR / "templates"
NO_RECORDS_MESSAGE = "No records found in the uploaded data."

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def format_percent(value: float | None) -> str:
    """Format a percentage with one decimal place."""
    if value is None:
        return "-"
    return f"{value:.1f}%"


def is_multiline_json(item: str) -> bool:
    """True for items that hold pretty-printed JSON."""
    return "\n" in item and ("{" in item or "[" in item)


class _TemplateEnv(Protocol):
    filters: dict[str, object]
    globals: dict[str, object]


# Add custom filters to Jinja2
templates_env = cast("_TemplateEnv", templates.env)
templates_env.filters["format_percent"] = format_percent
templates_env.filters["field_label"] = field_label
templates_env.filters["is_multiline_json"] = is_multiline_json

# Add global template variables
templates_env.globals["version"] = ladderlens.__version__
templates_env.globals["stage_width"] = stage_width


def _records(request: Request) -> list[Record]:
    return cast("list[Record]", request.app.state.records)


def _config(request: Request) -> LadderlensConfig:
    return cast("LadderlensConfig", request.app.state.config)


def _error_page(request: Request, message: str, status_code: int) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "error.html",
        {"error": message},
        status_code=status_code,
    )


def _index_page(
    request: Request,
    error: str | None = None,
    status_code: int = 200,
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"error": error, "record_count": len(_records(request))},
        status_code=status_code,
    )


def _load(request: Request, records: list[Record], source: str) -> RedirectResponse:
    request.app.state.records = records
    request.app.state.source = source
    logger.info("Loaded %d records from %s", len(records), source)
    return RedirectResponse(url="/records/0", status_code=303)


def create_app(config: LadderlensConfig | None = None) -> FastAPI:
    """Create the dashboard app with an empty dataset."""
    app = FastAPI(title="ladderlens dashboard", docs_url=None, redoc_url=None)
    app.state.config = config or load_config()
    app.state.records = []
    app.state.source = None

    @app.get("/", response_class=HTMLResponse, response_model=None)
    async def index(request: Request) -> HTMLResponse | RedirectResponse:
        """Render the upload view, or jump to the first record once loaded."""
        if _records(request):
            return RedirectResponse(url="/records/0", status_code=303)
        return _index_page(request)

    @app.post("/upload", response_model=None)
    async def upload(
        request: Request,
        file: Annotated[UploadFile, File()],
    ) -> HTMLResponse | RedirectResponse:
        """Load records from an uploaded workbook or JSON file."""
        filename = file.filename or ""
        try:
            records = load_upload(filename, await file.read())
        except UnsupportedInputError as e:
            logger.info("Rejected upload %r: %s", filename, e)
            return _index_page(request, error=str(e), status_code=400)
        if not records:
            return _index_page(request, error=NO_RECORDS_MESSAGE, status_code=400)
        return _load(request, records, filename)

    @app.post("/paste", response_model=None)
    async def paste(
        request: Request,
        text: Annotated[str, Form()],
    ) -> HTMLResponse | RedirectResponse:
        """Load records from pasted JSON."""
        try:
            records = parse_json_text(text)
        except UnsupportedInputError as e:
            return _index_page(request, error=str(e), status_code=400)
        if not records:
            return _index_page(request, error=NO_RECORDS_MESSAGE, status_code=400)
        return _load(request, records, "pasted JSON")

    @app.get("/records/{index}", response_class=HTMLResponse, response_model=None)
    async def record_detail(
        request: Request,
        index: int,
        full_settings: Annotated[bool, Query()] = False,
    ) -> HTMLResponse | RedirectResponse:
        """Render one record with navigation to its neighbours."""
        records = _records(request)
        if not records:
            return RedirectResponse(url="/", status_code=303)
        if index < 0 or index >= len(records):
            return _error_page(request, f"Record {index + 1} not found", 404)

        view = build_record_view(records[index], show_nulls=full_settings)
        return templates.TemplateResponse(
            request,
            "record.html",
            {
                "view": view,
                "index": index,
                "total": len(records),
                "source": request.app.state.source,
                "full_settings": full_settings,
            },
        )

    @app.get("/records/{index}/share")
    async def share_record(request: Request, index: int) -> JSONResponse:
        """Return a share link for one record."""
        records = _records(request)
        if index < 0 or index >= len(records):
            return JSONResponse(
                {"detail": f"Record {index + 1} not found"}, status_code=404
            )
        config = _config(request)
        record = records[index]
        return JSONResponse(
            {
                "url": build_share_url(
                    record, config.share_base_url, config.share_route
                ),
                "token": encode_record(record),
            }
        )

    @app.get("/shared", response_class=HTMLResponse)
    async def shared(
        request: Request,
        data: Annotated[str | None, Query()] = None,
    ) -> HTMLResponse:
        """Render a record decoded from a share token."""
        try:
            record = decode_token(data)
        except ShareDecodeError as e:
            logger.info("Could not open shared record: %s", e)
            return _error_page(request, e.reason.message, 400)

        view = build_record_view(record, shared=True)
        return templates.TemplateResponse(request, "shared.html", {"view": view})

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy"}

    return app
