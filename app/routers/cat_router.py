from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth import get_current_admin
from app.core import cats as cat_service
from app.database import get_db
from app.schemas.cat_schema import (
    BulkCategoryUpdate,
    BulkDisplayUpdate,
    CatCreate,
    CatDeleteOut,
    CatMinimalOut,
    CatOut,
    CatPageOut,
    CatPublicOut,
    CatStatisticsOut,
    CatUpdate,
    Category,
    Gender,
    Section,
)


router = APIRouter(prefix="/cats", tags=["Cats"])


# =====================================================================
# PUBLIC
# =====================================================================
@router.get("/displayed", response_model=List[CatPublicOut])
def list_displayed_cats(db: Session = Depends(get_db)):
    return cat_service.list_displayed_cats(db)


@router.get("/displayed/category/{category}", response_model=List[CatPublicOut])
def displayed_cats_by_category(
    category: Category,
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_db),
):
    return cat_service.displayed_cats_by_category(db, category, limit=limit)


@router.get("/displayed/section/{section}", response_model=List[CatPublicOut])
def displayed_cats_by_section(
    section: Section,
    db: Session = Depends(get_db),
):
    return cat_service.displayed_cats_by_section(db, section)


# =====================================================================
# ADMIN READS
# =====================================================================
@router.get("", response_model=List[CatOut])
def list_cats(
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.list_cats(db)


@router.get("/search", response_model=List[CatOut])
def search_cats(
    search_term: Optional[str] = None,
    gender: Optional[Gender] = None,
    is_displayed: Optional[bool] = None,
    category: Optional[Category] = None,
    limit: int = Query(cat_service.DEFAULT_SEARCH_LIMIT, ge=1, le=500),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.search_cats(
        db,
        search_term=search_term,
        gender=gender,
        is_displayed=is_displayed,
        category=category,
        limit=limit,
    )


@router.get("/stats", response_model=CatStatisticsOut)
def cat_statistics(
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.cat_statistics(db)


@router.get("/recent", response_model=List[CatOut])
def recent_cats(
    limit: int = Query(10, ge=1, le=100),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.recent_cats(db, limit=limit)


@router.get("/gender/{gender}", response_model=List[CatOut])
def cats_by_gender(
    gender: Gender,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.cats_by_gender(db, gender)


@router.get("/category/{category}", response_model=List[CatOut])
def cats_by_category(
    category: Category,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.cats_by_category(db, category)


@router.get("/page", response_model=CatPageOut)
def paginated_cats(
    cursor: Optional[str] = None,
    num_items: int = Query(20, ge=1, le=100),
    is_displayed: Optional[bool] = None,
    gender: Optional[Gender] = None,
    category: Optional[Category] = None,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.paginated_cats(
        db,
        cursor,
        num_items,
        is_displayed=is_displayed,
        gender=gender,
        category=category,
    )


@router.get("/minimal", response_model=List[CatMinimalOut])
def cats_minimal(
    is_displayed: Optional[bool] = None,
    limit: int = Query(20, ge=1, le=200),
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.cats_minimal(db, is_displayed=is_displayed, limit=limit)


# =====================================================================
# ADMIN WRITES
# =====================================================================
@router.post("", response_model=CatOut)
def create_cat(
    payload: CatCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.create_cat(db, payload)


@router.post("/bulk/display", response_model=List[CatOut])
def bulk_update_display(
    payload: BulkDisplayUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.bulk_update_display(db, payload.cat_ids, payload.is_displayed)


@router.post("/bulk/category", response_model=List[CatOut])
def bulk_update_category(
    payload: BulkCategoryUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.bulk_update_category(db, payload.cat_ids, payload.category)


@router.patch("/{cat_id}", response_model=CatOut)
def update_cat(
    cat_id: str,
    payload: CatUpdate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.update_cat(db, cat_id, payload)


@router.post("/{cat_id}/toggle-display", response_model=CatOut)
def toggle_cat_display(
    cat_id: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.toggle_cat_display(db, cat_id)


@router.delete("/{cat_id}", response_model=CatDeleteOut)
def delete_cat(
    cat_id: str,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return cat_service.delete_cat(db, cat_id)


# =====================================================================
# SINGLE CAT (public, null when unknown)
# =====================================================================
@router.get("/{cat_id}", response_model=Optional[CatPublicOut])
def get_cat(cat_id: str, db: Session = Depends(get_db)):
    return cat_service.get_cat(db, cat_id)
