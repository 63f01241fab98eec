from pydantic import BaseModel, Field
from typing import Optional, List, Literal
from datetime import datetime


Gender = Literal["male", "female"]
Category = Literal["kitten", "adult", "all"]
Section = Literal["male", "female", "kitten"]


# ---------------------------------------------------------
# CREATE
# ---------------------------------------------------------
class CatCreate(BaseModel):
    name: str
    subtitle: str
    image: str
    description: str
    age: str
    color: str
    status: str
    gallery: List[str] = []
    gender: Gender
    birth_date: str
    registration_number: Optional[str] = None

    # Defaults to True when omitted
    is_displayed: Optional[bool] = None

    free_text: Optional[str] = None
    internal_notes: Optional[str] = None
    category: Optional[Category] = None


# ---------------------------------------------------------
# UPDATE (partial, only fields sent are applied)
# ---------------------------------------------------------
class CatUpdate(BaseModel):
    name: Optional[str] = None
    subtitle: Optional[str] = None
    image: Optional[str] = None
    description: Optional[str] = None
    age: Optional[str] = None
    color: Optional[str] = None
    status: Optional[str] = None
    gallery: Optional[List[str]] = None
    gender: Optional[Gender] = None
    birth_date: Optional[str] = None
    registration_number: Optional[str] = None
    is_displayed: Optional[bool] = None
    free_text: Optional[str] = None
    internal_notes: Optional[str] = None
    category: Optional[Category] = None


# ---------------------------------------------------------
# OUTPUT
# ---------------------------------------------------------
class CatPublicOut(BaseModel):
    id: str
    name: str
    subtitle: str
    image: str
    description: str
    age: str
    color: str
    status: str
    gallery: List[str]
    gender: Gender
    birth_date: str
    registration_number: Optional[str] = None
    is_displayed: bool
    free_text: Optional[str] = None
    category: Optional[Category] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


class CatOut(CatPublicOut):
    internal_notes: Optional[str] = None


class CatMinimalOut(BaseModel):
    id: str
    name: str
    subtitle: str
    image: str
    gender: Gender
    is_displayed: bool
    category: Optional[Category] = None

    model_config = {
        "from_attributes": True
    }


class CatStatisticsOut(BaseModel):
    total: int
    displayed: int
    hidden: int
    males: int
    females: int
    average_age: float


class CatPageOut(BaseModel):
    page: List[CatOut]
    continue_cursor: Optional[str] = None
    is_done: bool


# ---------------------------------------------------------
# BULK
# ---------------------------------------------------------
class BulkDisplayUpdate(BaseModel):
    cat_ids: List[str] = Field(default_factory=list)
    is_displayed: bool


class BulkCategoryUpdate(BaseModel):
    cat_ids: List[str] = Field(default_factory=list)
    category: Optional[Category] = None


class CatDeleteOut(BaseModel):
    success: bool
