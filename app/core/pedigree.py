from __future__ import annotations

from typing import Any, Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from app.core.cats import get_cat_or_404
from app.models.cat import Cat
from app.models.pedigree_connection import PedigreeConnection
from app.models.pedigree_tree import PedigreeTree
from app.schemas.pedigree_schema import (
    PedigreeCat,
    PedigreeNode,
    PedigreeTreeCreate,
    PedigreeTreeReplace,
)
from app.utils.logging import get_logger

logger = get_logger(__name__)

PARENT_TYPES = ("mother", "father")
DEFAULT_TREE_DEPTH = 3


# ============================================================
# CONNECTIONS
# ============================================================

def connect(db: Session, parent_id: str, child_id: str, parent_type: str) -> PedigreeConnection:
    """
    Adds a parent -> child edge. Duplicate roles and cycles are not
    rejected here; the tree walk copes with both.
    """
    if parent_type not in PARENT_TYPES:
        raise HTTPException(status_code=400, detail="Invalid connection type")

    if parent_id == child_id:
        raise HTTPException(status_code=400, detail="A cat cannot be its own parent")

    get_cat_or_404(db, parent_id)
    get_cat_or_404(db, child_id)

    conn = PedigreeConnection(
        parent_id=parent_id,
        child_id=child_id,
        type=parent_type,
    )

    db.add(conn)
    db.commit()
    db.refresh(conn)
    return conn


def disconnect(db: Session, connection_id: int) -> None:
    conn = (
        db.query(PedigreeConnection)
        .filter(PedigreeConnection.id == connection_id)
        .first()
    )
    if not conn:
        raise HTTPException(status_code=404, detail="Connection not found")

    db.delete(conn)
    db.commit()


def list_by_parent(db: Session, cat_id: str) -> list[PedigreeConnection]:
    return (
        db.query(PedigreeConnection)
        .filter(PedigreeConnection.parent_id == cat_id)
        .order_by(PedigreeConnection.id.asc())
        .all()
    )


def list_by_child(db: Session, cat_id: str) -> list[PedigreeConnection]:
    return (
        db.query(PedigreeConnection)
        .filter(PedigreeConnection.child_id == cat_id)
        .order_by(PedigreeConnection.id.asc())
        .all()
    )


# ============================================================
# ANCESTOR TREE
# ============================================================

def _parent_slots(db: Session, cat_id: str) -> dict[str, PedigreeConnection]:
    """
    One edge per role. When a child carries two edges of the same role
    the earliest one wins.
    """
    slots: dict[str, PedigreeConnection] = {}

    for edge in list_by_child(db, cat_id):
        if edge.type in slots:
            logger.warning(
                "Cat %s has more than one %s edge, keeping connection %s",
                cat_id,
                edge.type,
                slots[edge.type].id,
            )
            continue
        slots[edge.type] = edge

    return slots


def _build_node(
    db: Session,
    cat: Cat,
    remaining: int,
    path: frozenset[str],
) -> PedigreeNode:
    node = PedigreeNode(cat=PedigreeCat.model_validate(cat))

    if remaining <= 0:
        return node

    # Cats on the way down from the root; the same ancestor may still
    # appear on separate branches.
    path = path | {cat.id}

    for role, edge in _parent_slots(db, cat.id).items():
        if edge.parent_id in path:
            logger.warning(
                "Pedigree cycle at cat %s via connection %s, branch skipped",
                cat.id,
                edge.id,
            )
            continue

        parent = db.query(Cat).filter(Cat.id == edge.parent_id).first()
        if parent is None:
            logger.warning(
                "Connection %s points at missing cat %s, branch skipped",
                edge.id,
                edge.parent_id,
            )
            continue

        setattr(node, role, _build_node(db, parent, remaining - 1, path))

    return node


def build_ancestor_tree(db: Session, root_id: str, max_depth: int = DEFAULT_TREE_DEPTH) -> PedigreeNode:
    """
    Walks parent edges from the root for up to max_depth generations.
    Depth 0 is the root alone, depth 1 adds its parents, and so on.
    """
    root = get_cat_or_404(db, root_id)
    return _build_node(db, root, max_depth, frozenset())


def serialize_tree(tree: PedigreeNode) -> str:
    return tree.model_dump_json()


def deserialize_tree(blob: str) -> PedigreeNode:
    return PedigreeNode.model_validate_json(blob)


def count_nodes(tree: Optional[PedigreeNode]) -> int:
    if tree is None:
        return 0
    return 1 + count_nodes(tree.mother) + count_nodes(tree.father)


# ============================================================
# SAVED TREES
# ============================================================

def get_tree_or_404(db: Session, tree_id: int) -> PedigreeTree:
    tree = db.query(PedigreeTree).filter(PedigreeTree.id == tree_id).first()
    if not tree:
        raise HTTPException(status_code=404, detail="Tree not found")
    return tree


def serialize_saved_tree(tree: PedigreeTree) -> dict[str, Any]:
    return {
        "id": tree.id,
        "root_cat_id": tree.root_cat_id,
        "name": tree.name,
        "description": tree.description,
        "depth": tree.depth,
        "tree": deserialize_tree(tree.tree_data),
        "created_at": tree.created_at,
        "updated_at": tree.updated_at,
    }


def save_tree(db: Session, payload: PedigreeTreeCreate) -> PedigreeTree:
    assembled = build_ancestor_tree(db, payload.root_cat_id, payload.depth)

    tree = PedigreeTree(
        root_cat_id=payload.root_cat_id,
        name=payload.name,
        description=payload.description,
        depth=payload.depth,
        tree_data=serialize_tree(assembled),
    )

    db.add(tree)
    db.commit()
    db.refresh(tree)

    logger.info(
        "Saved pedigree tree %s for cat %s (%d cats)",
        tree.id,
        tree.root_cat_id,
        count_nodes(assembled),
    )
    return tree


def replace_tree(db: Session, tree_id: int, payload: PedigreeTreeReplace) -> PedigreeTree:
    """Rebuilds a snapshot from the current pedigree."""
    tree = get_tree_or_404(db, tree_id)

    data = payload.model_dump(exclude_unset=True)
    depth = data.get("depth") if data.get("depth") is not None else tree.depth

    assembled = build_ancestor_tree(db, tree.root_cat_id, depth)

    if data.get("name") is not None:
        tree.name = data["name"]
    if data.get("description") is not None:
        tree.description = data["description"]

    tree.depth = depth
    tree.tree_data = serialize_tree(assembled)

    db.commit()
    db.refresh(tree)
    return tree


def get_tree_by_root(db: Session, root_cat_id: str) -> Optional[PedigreeTree]:
    """Most recently saved tree for the cat."""
    return (
        db.query(PedigreeTree)
        .filter(PedigreeTree.root_cat_id == root_cat_id)
        .order_by(PedigreeTree.id.desc())
        .first()
    )


def list_trees(db: Session, root_cat_id: str | None = None) -> list[PedigreeTree]:
    query = db.query(PedigreeTree)
    if root_cat_id:
        query = query.filter(PedigreeTree.root_cat_id == root_cat_id)
    return query.order_by(PedigreeTree.id.asc()).all()


def delete_tree(db: Session, tree_id: int) -> None:
    tree = get_tree_or_404(db, tree_id)
    db.delete(tree)
    db.commit()
