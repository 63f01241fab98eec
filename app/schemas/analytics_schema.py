from pydantic import BaseModel
from typing import Optional, Literal
from datetime import datetime


DeviceType = Literal["mobile", "tablet", "desktop", "unknown"]


# ---------------------------------------------------------
# TRACKING
# ---------------------------------------------------------
class PageVisitCreate(BaseModel):
    path: str
    session_id: str
    device_type: DeviceType
    referrer: Optional[str] = None
    user_agent: Optional[str] = None
    language: Optional[str] = None
    screen_resolution: Optional[str] = None


class PageVisitCreated(BaseModel):
    id: int


# ---------------------------------------------------------
# SUMMARIES
# ---------------------------------------------------------
class WindowCounts(BaseModel):
    real: int
    synthetic: int
    total: int


class AnalyticsSummaryOut(BaseModel):
    today: WindowCounts
    last_7_days: WindowCounts
    last_30_days: WindowCounts
    all_time: WindowCounts


class DailyStatOut(BaseModel):
    date: str
    real: int
    synthetic: int
    total: int
    page_views: int


class PageStatOut(BaseModel):
    path: str
    views: int
    unique_visitors: int


class DeviceStatOut(BaseModel):
    device: DeviceType
    count: int


# ---------------------------------------------------------
# SYNTHETIC VISITS
# ---------------------------------------------------------
class SyntheticVisitOut(BaseModel):
    id: int
    date: str
    count: int
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class SyntheticVisitCreate(BaseModel):
    date: Optional[str] = None


class SyntheticVisitResult(BaseModel):
    success: bool
    count: Optional[int] = None
    id: Optional[int] = None
    message: Optional[str] = None
    existing: Optional[SyntheticVisitOut] = None
