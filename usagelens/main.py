import logging
from datetime import datetime, timedelta, timezone

from fastapi import FastAPI, Query, Request
from fastapi.responses import JSONResponse

from usagelens.adapters.config.settings_loader import load_settings
from usagelens.adapters.store.memory import InMemorySeriesStore
from usagelens.adapters.store.prometheus import PrometheusSeriesStore
from usagelens.api.schemas import AggregateRequest, AnomalyRequest, TrendRequest
from usagelens.core.domain.errors import AnalyticsError
from usagelens.core.domain.series import Resolution
from usagelens.core.domain.settings import SystemSettings
from usagelens.core.ports.series_store import SeriesStore
from usagelens.core.services.aggregator import aggregate
from usagelens.core.services.analytics_loop import AnalyticsService
from usagelens.core.services.anomaly import detect_anomaly
from usagelens.core.services.trend import fit_trend

logger = logging.getLogger(__name__)

VERSION = "0.1.0"
DEFAULT_LOOKBACK = timedelta(days=90)


def build_store(settings: SystemSettings) -> SeriesStore:
    """Instantiate the configured series store adapter."""
    if settings.series_store_type == "prometheus":
        return PrometheusSeriesStore(
            read_url=settings.prometheus_url,
            metric=settings.prometheus_metric,
            entity_label=settings.prometheus_entity_label,
            step=settings.prometheus_step,
            timeout=settings.timeout,
        )
    return InMemorySeriesStore()


def _naive_utc(ts: datetime) -> datetime:
    """Stores keep naive UTC timestamps; aware query params are converted."""
    if ts.tzinfo is None:
        return ts
    return ts.astimezone(timezone.utc).replace(tzinfo=None)


def _window(start: datetime | None, end: datetime | None) -> tuple[datetime, datetime]:
    end = _naive_utc(end or datetime.now(timezone.utc))
    start = _naive_utc(start) if start else end - DEFAULT_LOOKBACK
    return start, end


def create_app(settings: SystemSettings | None = None, store: SeriesStore | None = None) -> FastAPI:
    """
    Build the HTTP application around the analytics core.

    Analyzer failures become 422 responses carrying the error kind and
    its context; everything else propagates.
    """
    settings = settings or load_settings()
    logging.basicConfig(level=settings.log_level.upper())

    store = store or build_store(settings)
    analytics = settings.analytics
    service = AnalyticsService(store, analytics)

    app = FastAPI(title="UsageLens", version=VERSION)
    app.state.settings = settings
    app.state.store = store
    app.state.service = service

    @app.exception_handler(AnalyticsError)
    async def analytics_error_handler(request: Request, exc: AnalyticsError):
        logger.info(f"{request.url.path} rejected: {exc}")
        return JSONResponse(
            status_code=422,
            content={"error": exc.kind, "detail": str(exc), "context": exc.context()},
        )

    @app.get("/health")
    def health_check():
        return {"status": "ok", "version": VERSION, "store": settings.series_store_type}

    @app.get("/series/{entity_id}/consumption")
    async def consumption(
        entity_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        resolution: Resolution = analytics.default_resolution,
    ):
        start, end = _window(start, end)
        return await service.consumption(entity_id, start, end, resolution)

    @app.get("/series/{entity_id}/trend")
    async def trend(
        entity_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        resolution: Resolution = analytics.default_resolution,
    ):
        start, end = _window(start, end)
        return await service.trend(entity_id, start, end, resolution)

    @app.get("/series/{entity_id}/anomaly")
    async def anomaly(
        entity_id: str,
        start: datetime | None = None,
        end: datetime | None = None,
        resolution: Resolution = analytics.default_resolution,
        window_size: int | None = Query(default=None, ge=2),
    ):
        start, end = _window(start, end)
        return await service.anomaly(entity_id, start, end, resolution, window_size)

    @app.post("/analyze/aggregate")
    def analyze_aggregate(body: AggregateRequest):
        """Aggregate the posted samples without touching the store."""
        samples = [s.to_sample() for s in body.samples]
        return aggregate(samples, body.resolution, mode=body.mode or analytics.aggregation_mode)

    @app.post("/analyze/trend")
    def analyze_trend(body: TrendRequest):
        return fit_trend([(p.x, p.y) for p in body.points])

    @app.post("/analyze/anomaly")
    def analyze_anomaly(body: AnomalyRequest):
        return detect_anomaly(
            [(p.timestamp, p.value) for p in body.points],
            window_size=body.window_size or analytics.window_size,
            sigma_multiplier=body.sigma_multiplier or analytics.sigma_multiplier,
            direction=body.direction or analytics.anomaly_direction,
        )

    return app


app = create_app()
