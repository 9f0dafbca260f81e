from fastapi import APIRouter
from fastapi.responses import Response

from services.metrics import render_prometheus

router = APIRouter(tags=["metrics"])

PROMETHEUS_CONTENT_TYPE = "text/plain; version=0.0.4"


@router.get("/metrics")
def metrics():
    return Response(content=render_prometheus(), media_type=PROMETHEUS_CONTENT_TYPE)
