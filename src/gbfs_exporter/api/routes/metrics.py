from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest


router = APIRouter()


@router.get("/metrics")
def get_metrics(request: Request) -> Response:
    return Response(
        content=generate_latest(request.app.state.registry),
        media_type=CONTENT_TYPE_LATEST,
    )
