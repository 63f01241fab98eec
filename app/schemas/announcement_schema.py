from pydantic import BaseModel
from typing import Optional, List
from datetime import datetime


# ------------------------------------------------------
# CREATE / UPDATE (update replaces every editable field)
# ------------------------------------------------------
class AnnouncementBase(BaseModel):
    title: str
    content: str
    featured_image: Optional[str] = None
    gallery: List[str] = []
    is_published: bool
    sort_order: int
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None


class AnnouncementCreate(AnnouncementBase):
    pass


class AnnouncementUpdate(AnnouncementBase):
    pass


class SortOrderItem(BaseModel):
    id: int
    sort_order: int


# ------------------------------------------------------
# OUTPUT
# ------------------------------------------------------
class AnnouncementOut(AnnouncementBase):
    id: int
    slug: Optional[str] = None
    published_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class AnnouncementSummaryOut(BaseModel):
    id: int
    title: str
    featured_image: Optional[str] = None
    is_published: bool
    published_at: Optional[datetime] = None
    slug: Optional[str] = None
    meta_description: Optional[str] = None
    sort_order: int
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class AnnouncementPageOut(BaseModel):
    page: List[AnnouncementOut]
    continue_cursor: Optional[str] = None
    is_done: bool
