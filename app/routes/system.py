from fastapi import APIRouter, Depends, Request
from datetime import datetime
from typing import List

from app.core.exceptions import CatalogError
from app.database.connection import get_store
from app.database.document_store import DocumentStore
from app.dependencies.auth import require_admin, require_editor
from app.dependencies.catalog import get_category_refs, get_databases
from app.routes.errors import to_http_exception
from app.schemas.catalog import CategoryRef
from app.schemas.dashboard import DashboardResponse
from app.schemas.system import HealthCheckResponse, SystemMetricsResponse
from app.services.catalog.paths import DRAFTS
from app.services.dashboard_service import dashboard_summary

router = APIRouter(tags=["System"])


def _uptime(request: Request, now: datetime) -> float:
    start_time = getattr(request.app.state, "start_time", now)
    return (now - start_time).total_seconds()


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(request: Request, store: DocumentStore = Depends(get_store)):
    """
    Lightweight public health check.
    Returns ok + document store connectivity (SELECT 1).
    """
    now = datetime.utcnow()

    store_ok = True
    extra = {}
    try:
        await store.ping()
    except CatalogError as e:
        store_ok = False
        extra["store_error"] = str(e)

    return HealthCheckResponse(
        status="ok" if store_ok else "degraded",
        now=now,
        uptime_seconds=_uptime(request, now),
        store_ok=store_ok,
        extra=extra or None,
    )


@router.get("/metrics", response_model=SystemMetricsResponse, dependencies=[Depends(require_admin)])
async def system_metrics(request: Request, store: DocumentStore = Depends(get_store)):
    """
    Admin-only system metrics in JSON form.
    Uses in-process counters stored on app.state.metrics and document counts.
    """
    now = datetime.utcnow()

    metrics = getattr(request.app.state, "metrics", None) or {}
    requests_count = int(metrics.get("requests", 0))
    total_response_ms = float(metrics.get("total_response_ms", 0.0))
    avg_response_ms = (total_response_ms / requests_count) if requests_count > 0 else None

    try:
        total_documents = await store.count()
        draft_documents = await store.count(DRAFTS)
    except CatalogError as exc:
        raise to_http_exception(exc)

    return SystemMetricsResponse(
        uptime_seconds=_uptime(request, now),
        now=now,
        requests_count=requests_count,
        error_count=int(metrics.get("errors", 0)),
        avg_response_ms=avg_response_ms,
        total_documents=total_documents,
        draft_documents=draft_documents,
    )


@router.get("/dashboard", response_model=DashboardResponse, dependencies=[Depends(require_editor)])
async def dashboard(
    store: DocumentStore = Depends(get_store),
    categories: List[CategoryRef] = Depends(get_category_refs),
    databases: List[str] = Depends(get_databases),
):
    try:
        return await dashboard_summary(store, categories, databases)
    except CatalogError as exc:
        raise to_http_exception(exc)
