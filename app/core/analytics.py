import random
from collections import defaultdict
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo

from fastapi import HTTPException
from sqlalchemy import distinct, func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.config import settings
from app.models.page_visit import PageVisit
from app.models.synthetic_visit import SyntheticVisit
from app.schemas.analytics_schema import PageVisitCreate
from app.utils.logging import get_logger

logger = get_logger(__name__)

# Daily booster bounds, both inclusive
SYNTHETIC_MIN = 20
SYNTHETIC_MAX = 30

DEVICE_TYPES = ("mobile", "tablet", "desktop", "unknown")


# ============================================================
# CLOCK
# ============================================================

def analytics_timezone() -> tzinfo:
    name = settings.ANALYTICS_TIMEZONE
    if name.upper() == "UTC":
        return timezone.utc
    return ZoneInfo(name)


def _local_now(now: datetime | None = None) -> datetime:
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(analytics_timezone())


def local_date(days_ago: int = 0, now: datetime | None = None) -> date:
    return _local_now(now).date() - timedelta(days=days_ago)


def date_string(days_ago: int = 0, now: datetime | None = None) -> str:
    return local_date(days_ago, now).isoformat()


def start_of_day(days_ago: int = 0, now: datetime | None = None) -> datetime:
    """Local midnight `days_ago` days back, as naive UTC to match stored timestamps."""
    midnight = datetime.combine(local_date(days_ago, now), time.min, tzinfo=analytics_timezone())
    return midnight.astimezone(timezone.utc).replace(tzinfo=None)


def _visit_date(timestamp: datetime) -> str:
    return timestamp.replace(tzinfo=timezone.utc).astimezone(analytics_timezone()).date().isoformat()


# ============================================================
# TRACKING
# ============================================================

def track_page_visit(db: Session, payload: PageVisitCreate, now: datetime | None = None) -> PageVisit:
    if now is not None and now.tzinfo is not None:
        now = now.astimezone(timezone.utc).replace(tzinfo=None)

    visit = PageVisit(
        **payload.model_dump(),
        timestamp=now or datetime.utcnow(),
    )

    db.add(visit)
    db.commit()
    db.refresh(visit)
    return visit


# ============================================================
# SUMMARIES
# ============================================================

def _count_sessions(db: Session, since: datetime | None = None) -> int:
    query = db.query(func.count(distinct(PageVisit.session_id)))
    if since is not None:
        query = query.filter(PageVisit.timestamp >= since)
    return query.scalar() or 0


def _synthetic_sum(db: Session, first: str | None = None, last: str | None = None) -> int:
    query = db.query(func.coalesce(func.sum(SyntheticVisit.count), 0))
    if first is not None and last is not None:
        # YYYY-MM-DD strings sort chronologically
        query = query.filter(SyntheticVisit.date.between(first, last))
    return int(query.scalar() or 0)


def _window(real: int, synthetic: int) -> dict:
    return {"real": real, "synthetic": synthetic, "total": real + synthetic}


def _trailing_window(db: Session, days: int, now: datetime | None) -> dict:
    """Today plus the previous `days - 1` days."""
    back = days - 1
    real = _count_sessions(db, since=start_of_day(back, now))
    synthetic = _synthetic_sum(db, date_string(back, now), date_string(0, now))
    return _window(real, synthetic)


def get_analytics_summary(db: Session, now: datetime | None = None) -> dict:
    return {
        "today": _trailing_window(db, 1, now),
        "last_7_days": _trailing_window(db, 7, now),
        "last_30_days": _trailing_window(db, 30, now),
        "all_time": _window(_count_sessions(db), _synthetic_sum(db)),
    }


def get_daily_stats(db: Session, days: int = 30, now: datetime | None = None) -> list[dict]:
    days = days or 30

    visits = (
        db.query(PageVisit.timestamp, PageVisit.session_id)
        .filter(PageVisit.timestamp >= start_of_day(days - 1, now))
        .all()
    )

    sessions: dict[str, set[str]] = defaultdict(set)
    views: dict[str, int] = defaultdict(int)
    for timestamp, session_id in visits:
        key = _visit_date(timestamp)
        sessions[key].add(session_id)
        views[key] += 1

    synthetic = dict(
        db.query(SyntheticVisit.date, SyntheticVisit.count)
        .filter(SyntheticVisit.date.between(date_string(days - 1, now), date_string(0, now)))
        .all()
    )

    stats = []
    for days_ago in range(days - 1, -1, -1):
        key = date_string(days_ago, now)
        real = len(sessions.get(key, ()))
        boost = synthetic.get(key, 0)
        stats.append({
            "date": key,
            "real": real,
            "synthetic": boost,
            "total": real + boost,
            "page_views": views.get(key, 0),
        })

    return stats


def get_page_stats(db: Session, path: str | None = None) -> list[dict]:
    views = func.count(PageVisit.id)
    query = db.query(
        PageVisit.path,
        views,
        func.count(distinct(PageVisit.session_id)),
    )
    if path:
        query = query.filter(PageVisit.path == path)

    rows = query.group_by(PageVisit.path).order_by(views.desc(), PageVisit.path.asc()).all()

    return [
        {"path": row_path, "views": row_views, "unique_visitors": unique}
        for row_path, row_views, unique in rows
    ]


def get_device_stats(db: Session) -> list[dict]:
    counts = dict(
        db.query(PageVisit.device_type, func.count(PageVisit.id))
        .group_by(PageVisit.device_type)
        .all()
    )

    return [
        {"device": device, "count": counts[device]}
        for device in DEVICE_TYPES
        if counts.get(device)
    ]


# ============================================================
# SYNTHETIC VISITS
# ============================================================

def _normalise_date(value: str) -> str:
    try:
        return date.fromisoformat(value).isoformat()
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date, expected YYYY-MM-DD")


def _already_exists(existing: SyntheticVisit) -> dict:
    return {
        "success": False,
        "message": "Synthetic visits already exist for this date",
        "existing": existing,
    }


def create_daily_synthetic_visits(
    db: Session,
    date_str: str | None = None,
    rng: Optional[random.Random] = None,
    now: datetime | None = None,
) -> dict:
    """
    Inserts the booster row for a day (today by default). A second call for
    the same day reports the existing row instead of failing.
    """
    date_str = _normalise_date(date_str) if date_str else date_string(0, now)

    existing = db.query(SyntheticVisit).filter(SyntheticVisit.date == date_str).first()
    if existing:
        return _already_exists(existing)

    count = (rng or random).randint(SYNTHETIC_MIN, SYNTHETIC_MAX)

    visit = SyntheticVisit(date=date_str, count=count)
    db.add(visit)

    try:
        db.commit()
    except IntegrityError:
        # Another run inserted the same date first
        db.rollback()
        existing = db.query(SyntheticVisit).filter(SyntheticVisit.date == date_str).one()
        return _already_exists(existing)

    db.refresh(visit)
    logger.info("Created %d synthetic visits for %s", count, date_str)

    return {"success": True, "count": count, "id": visit.id}


def get_all_synthetic_visits(db: Session) -> list[SyntheticVisit]:
    return db.query(SyntheticVisit).order_by(SyntheticVisit.date.asc()).all()
