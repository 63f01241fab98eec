from __future__ import annotations

from pydantic import BaseModel, Field
from typing import Optional, Literal
from datetime import datetime


ParentType = Literal["mother", "father"]


# --------------------------------------------------
# CONNECTIONS
# --------------------------------------------------
class ConnectionCreate(BaseModel):
    parent_id: str
    child_id: str
    type: ParentType


class ConnectionOut(BaseModel):
    id: int
    parent_id: str
    child_id: str
    type: ParentType
    created_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }


# --------------------------------------------------
# ANCESTOR TREE
# --------------------------------------------------
class PedigreeCat(BaseModel):
    """Compact cat reference carried by every tree node."""

    id: str
    name: str
    subtitle: str = ""
    image: str = ""
    gender: str
    color: str = ""
    birth_date: str = ""
    registration_number: Optional[str] = None

    model_config = {
        "from_attributes": True
    }


class PedigreeNode(BaseModel):
    cat: PedigreeCat
    mother: Optional[PedigreeNode] = None
    father: Optional[PedigreeNode] = None


PedigreeNode.model_rebuild()


# --------------------------------------------------
# SAVED TREES
# --------------------------------------------------
class PedigreeTreeCreate(BaseModel):
    root_cat_id: str
    name: str
    description: str = ""
    depth: int = Field(default=3, ge=0, le=6)


class PedigreeTreeReplace(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None
    depth: Optional[int] = Field(default=None, ge=0, le=6)


class PedigreeTreeOut(BaseModel):
    id: int
    root_cat_id: str
    name: str
    description: str
    depth: int
    tree: PedigreeNode
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
