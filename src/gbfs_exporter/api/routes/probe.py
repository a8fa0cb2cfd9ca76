from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST

from ...errors import ExporterError
from ...services.probe_service import probe_target


router = APIRouter()


@router.get("/probe")
def probe(request: Request, target: str | None = None) -> Response:
    settings = request.app.state.settings
    try:
        output = probe_target(
            target,
            fields=request.app.state.fields,
            timeout=settings.fetch_timeout,
            max_stations=settings.max_stations,
        )
    except ExporterError as exc:
        return PlainTextResponse(str(exc), status_code=exc.status_code)
    return Response(content=output, media_type=CONTENT_TYPE_LATEST)
