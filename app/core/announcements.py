import re
from datetime import datetime
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.models.announcement import Announcement
from app.schemas.announcement_schema import (
    AnnouncementCreate,
    AnnouncementUpdate,
    SortOrderItem,
)
from app.utils.pagination import paginate


# ============================================================
# SLUGS
# ============================================================

def generate_slug(title: str) -> str:
    slug = title.lower()
    slug = re.sub(r"[^\w\s-]", "", slug)
    slug = re.sub(r"\s+", "-", slug)
    slug = re.sub(r"-+", "-", slug)
    return slug.strip("-") or "announcement"


def unique_slug(db: Session, title: str, exclude_id: int | None = None) -> str:
    base = generate_slug(title)
    slug = base
    counter = 1

    while True:
        clash = db.query(Announcement).filter(Announcement.slug == slug).first()
        if not clash or clash.id == exclude_id:
            return slug
        slug = f"{base}-{counter}"
        counter += 1


# ============================================================
# READS
# ============================================================

def get_announcement_or_404(db: Session, announcement_id: int) -> Announcement:
    announcement = (
        db.query(Announcement)
        .filter(Announcement.id == announcement_id)
        .first()
    )
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return announcement


def _published(db: Session):
    return (
        db.query(Announcement)
        .filter(Announcement.is_published.is_(True))
        .order_by(Announcement.published_at.desc(), Announcement.id.desc())
    )


def _by_sort_order(db: Session):
    return db.query(Announcement).order_by(Announcement.sort_order.asc(), Announcement.id.asc())


def list_all(db: Session) -> list[Announcement]:
    return _by_sort_order(db).all()


def list_published(db: Session) -> list[Announcement]:
    return _published(db).all()


def latest(db: Session, limit: int = 3) -> list[Announcement]:
    return _published(db).limit(limit or 3).all()


def get_by_slug(db: Session, slug: str) -> Optional[Announcement]:
    return (
        db.query(Announcement)
        .filter(
            Announcement.slug == slug,
            Announcement.is_published.is_(True),
        )
        .first()
    )


def paginated(db: Session, cursor: str | None, num_items: int, published_only: bool = False) -> dict:
    query = _published(db) if published_only else _by_sort_order(db)
    return paginate(query, cursor, num_items)


def summaries(db: Session, limit: int = 10, published_only: bool = False) -> list[Announcement]:
    if published_only:
        query = _published(db)
    else:
        query = db.query(Announcement).order_by(Announcement.id.desc())
    return query.limit(limit or 10).all()


# ============================================================
# WRITES
# ============================================================

def create_announcement(db: Session, payload: AnnouncementCreate) -> Announcement:
    now = datetime.utcnow()

    announcement = Announcement(
        **payload.model_dump(),
        slug=unique_slug(db, payload.title),
        published_at=now if payload.is_published else None,
        updated_at=now,
    )

    db.add(announcement)
    db.commit()
    db.refresh(announcement)
    return announcement


def update_announcement(db: Session, announcement_id: int, payload: AnnouncementUpdate) -> Announcement:
    announcement = get_announcement_or_404(db, announcement_id)
    now = datetime.utcnow()

    if payload.title != announcement.title:
        announcement.slug = unique_slug(db, payload.title, exclude_id=announcement.id)

    for key, value in payload.model_dump().items():
        setattr(announcement, key, value)

    if payload.is_published:
        announcement.published_at = announcement.published_at or now
    else:
        announcement.published_at = None

    announcement.updated_at = now

    db.commit()
    db.refresh(announcement)
    return announcement


def delete_announcement(db: Session, announcement_id: int) -> None:
    announcement = get_announcement_or_404(db, announcement_id)
    db.delete(announcement)
    db.commit()


def toggle_publication(db: Session, announcement_id: int) -> Announcement:
    announcement = get_announcement_or_404(db, announcement_id)
    now = datetime.utcnow()

    announcement.is_published = not announcement.is_published
    announcement.published_at = (announcement.published_at or now) if announcement.is_published else None
    announcement.updated_at = now

    db.commit()
    db.refresh(announcement)
    return announcement


def update_sort_order(db: Session, updates: list[SortOrderItem]) -> list[Announcement]:
    now = datetime.utcnow()
    changed = []

    for item in updates:
        announcement = db.query(Announcement).filter(Announcement.id == item.id).first()
        if not announcement:
            continue
        announcement.sort_order = item.sort_order
        announcement.updated_at = now
        changed.append(announcement)

    db.commit()
    for announcement in changed:
        db.refresh(announcement)
    return changed
