from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.auth import get_current_admin
from app.core import pedigree
from app.database import get_db
from app.schemas.pedigree_schema import (
    ConnectionCreate,
    ConnectionOut,
    PedigreeNode,
    PedigreeTreeCreate,
    PedigreeTreeOut,
    PedigreeTreeReplace,
)


router = APIRouter(prefix="/pedigree", tags=["Pedigree"])


# ============================================================
# CONNECTIONS
# ============================================================

@router.post("/connections", response_model=ConnectionOut)
def connect_parent(
    payload: ConnectionCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return pedigree.connect(db, payload.parent_id, payload.child_id, payload.type)


@router.delete("/connections/{connection_id}")
def disconnect(
    connection_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    pedigree.disconnect(db, connection_id)
    return {"status": "deleted", "id": connection_id}


@router.get("/connections/parent/{cat_id}", response_model=List[ConnectionOut])
def list_connections_by_parent(cat_id: str, db: Session = Depends(get_db)):
    return pedigree.list_by_parent(db, cat_id)


@router.get("/connections/child/{cat_id}", response_model=List[ConnectionOut])
def list_connections_by_child(cat_id: str, db: Session = Depends(get_db)):
    return pedigree.list_by_child(db, cat_id)


# ============================================================
# ANCESTOR TREE (public, cat detail page)
# ============================================================

@router.get("/ancestors/{cat_id}", response_model=PedigreeNode)
def build_ancestor_tree(
    cat_id: str,
    depth: int = Query(pedigree.DEFAULT_TREE_DEPTH, ge=0, le=6),
    db: Session = Depends(get_db),
):
    return pedigree.build_ancestor_tree(db, cat_id, depth)


# ============================================================
# SAVED TREES
# ============================================================

@router.post("/trees", response_model=PedigreeTreeOut)
def save_tree(
    payload: PedigreeTreeCreate,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    tree = pedigree.save_tree(db, payload)
    return pedigree.serialize_saved_tree(tree)


@router.get("/trees", response_model=List[PedigreeTreeOut])
def list_trees(
    root_cat_id: Optional[str] = None,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    return [pedigree.serialize_saved_tree(t) for t in pedigree.list_trees(db, root_cat_id)]


@router.get("/trees/root/{cat_id}", response_model=Optional[PedigreeTreeOut])
def get_tree_by_root(cat_id: str, db: Session = Depends(get_db)):
    tree = pedigree.get_tree_by_root(db, cat_id)
    if tree is None:
        return None
    return pedigree.serialize_saved_tree(tree)


@router.get("/trees/{tree_id}", response_model=PedigreeTreeOut)
def get_tree(tree_id: int, db: Session = Depends(get_db)):
    return pedigree.serialize_saved_tree(pedigree.get_tree_or_404(db, tree_id))


@router.put("/trees/{tree_id}", response_model=PedigreeTreeOut)
def replace_tree(
    tree_id: int,
    payload: PedigreeTreeReplace,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    tree = pedigree.replace_tree(db, tree_id, payload)
    return pedigree.serialize_saved_tree(tree)


@router.delete("/trees/{tree_id}")
def delete_tree(
    tree_id: int,
    db: Session = Depends(get_db),
    admin: dict = Depends(get_current_admin),
):
    pedigree.delete_tree(db, tree_id)
    return {"status": "deleted", "id": tree_id}
