from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth import get_current_admin
from app.core import analytics
from app.database import get_db
from app.schemas.analytics_schema import (
    AnalyticsSummaryOut,
    DailyStatOut,
    DeviceStatOut,
    PageStatOut,
    PageVisitCreate,
    PageVisitCreated,
    SyntheticVisitCreate,
    SyntheticVisitOut,
    SyntheticVisitResult,
)


router = APIRouter(prefix="/analytics", tags=["Analytics"])


def to_synthetic_result(result: dict) -> SyntheticVisitResult:
    existing = result.get("existing")
    return SyntheticVisitResult(
        success=result["success"],
        count=result.get("count"),
        id=result.get("id"),
        message=result.get("message"),
        existing=SyntheticVisitOut.model_validate(existing) if existing is not None else None,
    )


# =====================================================================
# PUBLIC TRACKING
# =====================================================================
@router.post("/visit", response_model=PageVisitCreated)
def track_page_visit(payload: PageVisitCreate, db: Session = Depends(get_db)):
    visit = analytics.track_page_visit(db, payload)
    return {"id": visit.id}


# =====================================================================
# ADMIN DASHBOARD
# =====================================================================
@router.get("/summary", response_model=AnalyticsSummaryOut)
def analytics_summary(
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return analytics.get_analytics_summary(db)


@router.get("/daily", response_model=List[DailyStatOut])
def daily_stats(
    days: int = Query(30, ge=1, le=366),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return analytics.get_daily_stats(db, days)


@router.get("/pages", response_model=List[PageStatOut])
def page_stats(
    path: Optional[str] = None,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return analytics.get_page_stats(db, path)


@router.get("/devices", response_model=List[DeviceStatOut])
def device_stats(
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return analytics.get_device_stats(db)


# =====================================================================
# SYNTHETIC VISITS
# =====================================================================
@router.post("/synthetic", response_model=SyntheticVisitResult)
def create_daily_synthetic_visits(
    payload: Optional[SyntheticVisitCreate] = None,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    # No body means today
    date_str = payload.date if payload else None
    result = analytics.create_daily_synthetic_visits(db, date_str)
    return to_synthetic_result(result)


@router.get("/synthetic", response_model=List[SyntheticVisitOut])
def all_synthetic_visits(
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return analytics.get_all_synthetic_visits(db)
