from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.auth import get_current_admin
from app.core import announcements as announcement_service
from app.database import get_db
from app.schemas.announcement_schema import (
    AnnouncementCreate,
    AnnouncementOut,
    AnnouncementPageOut,
    AnnouncementSummaryOut,
    AnnouncementUpdate,
    SortOrderItem,
)


router = APIRouter(prefix="/announcements", tags=["Announcements"])


# ------------------------------------------------------
# PUBLIC
# ------------------------------------------------------
@router.get("/published", response_model=List[AnnouncementOut])
def published_announcements(db: Session = Depends(get_db)):
    return announcement_service.list_published(db)


@router.get("/latest")
def latest_announcements(
    limit: int = Query(3, ge=1, le=50),
    include_content: bool = True,
    db: Session = Depends(get_db),
):
    items = announcement_service.latest(db, limit=limit)

    # List views skip the body
    schema = AnnouncementOut if include_content else AnnouncementSummaryOut
    return [schema.model_validate(a) for a in items]


@router.get("/slug/{slug}", response_model=AnnouncementOut)
def announcement_by_slug(slug: str, db: Session = Depends(get_db)):
    announcement = announcement_service.get_by_slug(db, slug)
    if not announcement:
        raise HTTPException(status_code=404, detail="Announcement not found")
    return announcement


# ------------------------------------------------------
# ADMIN
# ------------------------------------------------------
@router.get("", response_model=List[AnnouncementOut])
def all_announcements(
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return announcement_service.list_all(db)


@router.get("/page", response_model=AnnouncementPageOut)
def paginated_announcements(
    cursor: Optional[str] = None,
    num_items: int = Query(10, ge=1, le=100),
    published_only: bool = False,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return announcement_service.paginated(db, cursor, num_items, published_only)


@router.get("/summaries", response_model=List[AnnouncementSummaryOut])
def announcement_summaries(
    limit: int = Query(10, ge=1, le=100),
    published_only: bool = False,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return announcement_service.summaries(db, limit=limit, published_only=published_only)


@router.post("", response_model=AnnouncementOut)
def create_announcement(
    payload: AnnouncementCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return announcement_service.create_announcement(db, payload)


@router.put("/sort-order", response_model=List[AnnouncementOut])
def update_sort_order(
    updates: List[SortOrderItem],
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return announcement_service.update_sort_order(db, updates)


@router.put("/{announcement_id}", response_model=AnnouncementOut)
def update_announcement(
    announcement_id: int,
    payload: AnnouncementUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return announcement_service.update_announcement(db, announcement_id, payload)


@router.post("/{announcement_id}/toggle-publication", response_model=AnnouncementOut)
def toggle_publication(
    announcement_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return announcement_service.toggle_publication(db, announcement_id)


@router.delete("/{announcement_id}")
def delete_announcement(
    announcement_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    announcement_service.delete_announcement(db, announcement_id)
    return {"status": "deleted", "id": announcement_id}


# ------------------------------------------------------
# SINGLE (public)
# ------------------------------------------------------
@router.get("/{announcement_id}", response_model=AnnouncementOut)
def get_announcement(announcement_id: int, db: Session = Depends(get_db)):
    return announcement_service.get_announcement_or_404(db, announcement_id)
