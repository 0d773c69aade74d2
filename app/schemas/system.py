from pydantic import BaseModel
from typing import Optional, Dict, Any
from datetime import datetime


class HealthCheckResponse(BaseModel):
    status: str
    now: datetime
    uptime_seconds: float
    store_ok: bool
    extra: Optional[Dict[str, Any]] = None


class SystemMetricsResponse(BaseModel):
    uptime_seconds: float
    now: datetime

    # middleware counters
    requests_count: int
    error_count: int = 0
    avg_response_ms: Optional[float] = None

    # store metrics
    total_documents: int
    draft_documents: int

    # optional arbitrary metrics map
    extra: Optional[Dict[str, Any]] = None
