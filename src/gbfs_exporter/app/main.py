from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import REGISTRY, CollectorRegistry

from ..api.routes import metrics, probe
from ..core.metric_set import MetricSet, fields_for
from ..ingest.config import ExporterSettings
from ..ingest.poller import PollWorker


def create_app(
    settings: ExporterSettings | None = None,
    registry: CollectorRegistry | None = None,
) -> FastAPI:
    """Build the exporter app for ``settings.mode``.

    Probe mode serves ``/probe`` plus the process registry on ``/metrics``.
    Poll mode registers a shared metric set in ``registry``, serves it on
    ``/metrics`` and keeps it current from a background poller while the
    app's lifespan is running.
    """
    if settings is None:
        settings = ExporterSettings()
    if registry is None:
        registry = REGISTRY
    fields = fields_for(settings.metric_fields)

    metric_set: MetricSet | None = None
    worker: PollWorker | None = None
    if settings.mode == "poll":
        metric_set = MetricSet(fields, isolated=False, registry=registry)
        worker = PollWorker(metric_set.populate, settings)

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if worker is not None:
            worker.start()
        try:
            yield
        finally:
            if worker is not None:
                worker.stop()

    app = FastAPI(title="GBFS Exporter", lifespan=lifespan)
    app.state.settings = settings
    app.state.registry = registry
    app.state.fields = fields
    app.state.metric_set = metric_set
    app.state.poll_worker = worker

    app.include_router(metrics.router)
    if settings.mode == "probe":
        app.include_router(probe.router)

    @app.get("/")
    def root() -> dict[str, str]:
        return {"status": "ok", "service": "gbfs-exporter", "mode": settings.mode}

    return app
