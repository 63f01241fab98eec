import re
from datetime import date
from typing import Optional

from fastapi import HTTPException
from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.cat import Cat
from app.models.pedigree_connection import PedigreeConnection
from app.models.pedigree_tree import PedigreeTree
from app.schemas.cat_schema import CatCreate, CatUpdate
from app.utils.logging import get_logger
from app.utils.pagination import paginate

logger = get_logger(__name__)

DEFAULT_SEARCH_LIMIT = 100

# Columns that can never be null-cleared through a partial update
_REQUIRED_FIELDS = {
    "name",
    "subtitle",
    "image",
    "description",
    "age",
    "color",
    "status",
    "gallery",
    "gender",
    "birth_date",
    "is_displayed",
}

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+))")


# ============================================================
# HELPERS
# ============================================================

def get_cat_or_404(db: Session, cat_id: str) -> Cat:
    cat = db.query(Cat).filter(Cat.id == cat_id).first()
    if not cat:
        raise HTTPException(status_code=404, detail="Cat not found")
    return cat


def _ordered(query):
    return query.order_by(Cat.created_at.asc(), Cat.id.asc())


def parse_age(age: str | None) -> float:
    """Leading number of a free text age ("2.5 years" -> 2.5), 0 when absent."""
    if not age:
        return 0.0
    match = _LEADING_NUMBER.match(age)
    return float(match.group(1)) if match else 0.0


def age_in_years(birth_date: str | None, today: date | None = None) -> Optional[float]:
    """Age from an ISO birth date, None when missing or unparseable."""
    if not birth_date:
        return None
    try:
        born = date.fromisoformat(birth_date[:10])
    except ValueError:
        return None
    today = today or date.today()
    return (today - born).days / 365.25


# ============================================================
# READS
# ============================================================

def list_cats(db: Session) -> list[Cat]:
    return _ordered(db.query(Cat)).all()


def list_displayed_cats(db: Session) -> list[Cat]:
    return _ordered(db.query(Cat).filter(Cat.is_displayed.is_(True))).all()


def get_cat(db: Session, cat_id: str | None) -> Optional[Cat]:
    if not cat_id:
        return None
    return db.query(Cat).filter(Cat.id == cat_id).first()


def _escape_like(term: str) -> str:
    # Match the term literally
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def search_cats(
    db: Session,
    search_term: str | None = None,
    gender: str | None = None,
    is_displayed: bool | None = None,
    category: str | None = None,
    limit: int | None = DEFAULT_SEARCH_LIMIT,
) -> list[Cat]:
    """
    Equality filters are combined with AND. The text filter runs in the
    query before the limit, so a match is never lost to truncation.
    """
    if limit is None:
        limit = DEFAULT_SEARCH_LIMIT
    if limit < 1:
        raise HTTPException(status_code=400, detail="limit must be at least 1")

    query = db.query(Cat)

    if gender:
        query = query.filter(Cat.gender == gender)

    if is_displayed is not None:
        query = query.filter(Cat.is_displayed.is_(is_displayed))

    if category and category != "all":
        query = query.filter(Cat.category == category)

    term = (search_term or "").strip()
    if term:
        pattern = f"%{_escape_like(term)}%"
        query = query.filter(
            or_(
                Cat.name.ilike(pattern, escape="\\"),
                Cat.subtitle.ilike(pattern, escape="\\"),
                Cat.color.ilike(pattern, escape="\\"),
                Cat.registration_number.ilike(pattern, escape="\\"),
                Cat.description.ilike(pattern, escape="\\"),
            )
        )

    return _ordered(query).limit(limit).all()


def cats_by_gender(db: Session, gender: str) -> list[Cat]:
    return _ordered(db.query(Cat).filter(Cat.gender == gender)).all()


def recent_cats(db: Session, limit: int = 10) -> list[Cat]:
    return (
        db.query(Cat)
        .order_by(Cat.created_at.desc(), Cat.id.desc())
        .limit(limit or 10)
        .all()
    )


def cat_statistics(db: Session) -> dict:
    total = db.query(Cat).count()
    displayed = db.query(Cat).filter(Cat.is_displayed.is_(True)).all()
    males = db.query(Cat).filter(Cat.gender == "male").count()
    females = db.query(Cat).filter(Cat.gender == "female").count()

    # Average over displayed cats only
    if displayed:
        average_age = sum(parse_age(c.age) for c in displayed) / len(displayed)
    else:
        average_age = 0.0

    return {
        "total": total,
        "displayed": len(displayed),
        "hidden": total - len(displayed),
        "males": males,
        "females": females,
        "average_age": round(average_age, 2),
    }


def cats_by_category(db: Session, category: str) -> list[Cat]:
    query = db.query(Cat)
    if category != "all":
        query = query.filter(Cat.category == category)
    return _ordered(query).all()


def displayed_cats_by_category(
    db: Session,
    category: str,
    limit: int = 50,
    today: date | None = None,
) -> list[Cat]:
    """
    Displayed cats in a gallery bucket. Cats without an explicit category
    are bucketed by birth date (under one year is a kitten).
    """
    limit = limit or 50
    displayed = db.query(Cat).filter(Cat.is_displayed.is_(True))

    if category == "all":
        return _ordered(displayed).limit(limit).all()

    from_index = _ordered(displayed.filter(Cat.category == category)).limit(limit).all()

    if len(from_index) >= min(limit, 10):
        return from_index

    candidates = _ordered(displayed).limit(limit * 2).all()

    def matches(cat: Cat) -> bool:
        if cat.category == category:
            return True
        if cat.category:
            return False
        years = age_in_years(cat.birth_date, today)
        if years is None:
            return False
        if category == "kitten":
            return years < 1
        return years >= 1

    combined = list(from_index)
    seen = {c.id for c in combined}
    for cat in candidates:
        if cat.id not in seen and matches(cat):
            combined.append(cat)
            seen.add(cat.id)

    return combined[:limit]


def displayed_cats_by_section(
    db: Session,
    section: str,
    today: date | None = None,
) -> list[Cat]:
    """
    Public three-section layout: kittens of either gender, then adult
    males and adult females. Unknown age falls back to the category.
    """
    result = []
    for cat in list_displayed_cats(db):
        years = age_in_years(cat.birth_date, today)

        if years is None:
            is_kitten = cat.category == "kitten"
        else:
            is_kitten = years < 1

        if section == "kitten":
            if is_kitten:
                result.append(cat)
        elif cat.gender == section and not is_kitten:
            result.append(cat)

    return result


def paginated_cats(
    db: Session,
    cursor: str | None,
    num_items: int,
    is_displayed: bool | None = None,
    gender: str | None = None,
    category: str | None = None,
) -> dict:
    query = db.query(Cat)
    if is_displayed is not None:
        query = query.filter(Cat.is_displayed.is_(is_displayed))
    if gender:
        query = query.filter(Cat.gender == gender)
    if category and category != "all":
        query = query.filter(Cat.category == category)

    return paginate(_ordered(query), cursor, num_items)


def cats_minimal(db: Session, is_displayed: bool | None = None, limit: int = 20) -> list[Cat]:
    query = db.query(Cat)
    if is_displayed is not None:
        query = query.filter(Cat.is_displayed.is_(is_displayed))
    return _ordered(query).limit(limit or 20).all()


# ============================================================
# WRITES
# ============================================================

def create_cat(db: Session, payload: CatCreate) -> Cat:
    data = payload.model_dump()
    if data.get("is_displayed") is None:
        data["is_displayed"] = True

    cat = Cat(**data)
    db.add(cat)
    db.commit()
    db.refresh(cat)

    logger.info("Created cat %s (%s)", cat.id, cat.name)
    return cat


def update_cat(db: Session, cat_id: str, payload: CatUpdate) -> Cat:
    cat = get_cat_or_404(db, cat_id)

    data = payload.model_dump(exclude_unset=True)

    for key, value in data.items():
        if value is None and key in _REQUIRED_FIELDS:
            continue
        setattr(cat, key, value)

    db.commit()
    db.refresh(cat)
    return cat


def delete_cat(db: Session, cat_id: str) -> dict:
    """
    Removes the cat with every pedigree edge touching it and every saved
    tree rooted at it. One transaction: all rows go or none do.
    """
    cat = get_cat_or_404(db, cat_id)

    try:
        as_parent = (
            db.query(PedigreeConnection)
            .filter(PedigreeConnection.parent_id == cat_id)
            .delete(synchronize_session=False)
        )
        as_child = (
            db.query(PedigreeConnection)
            .filter(PedigreeConnection.child_id == cat_id)
            .delete(synchronize_session=False)
        )
        trees = (
            db.query(PedigreeTree)
            .filter(PedigreeTree.root_cat_id == cat_id)
            .delete(synchronize_session=False)
        )

        db.delete(cat)
        db.commit()
    except Exception:
        db.rollback()
        raise

    logger.info(
        "Deleted cat %s with %d parent edges, %d child edges, %d saved trees",
        cat_id,
        as_parent,
        as_child,
        trees,
    )
    return {"success": True}


def toggle_cat_display(db: Session, cat_id: str) -> Cat:
    cat = get_cat_or_404(db, cat_id)
    cat.is_displayed = not cat.is_displayed
    db.commit()
    db.refresh(cat)
    return cat


def bulk_update_display(db: Session, cat_ids: list[str], is_displayed: bool) -> list[Cat]:
    cats = [c for c in (get_cat(db, cat_id) for cat_id in cat_ids) if c is not None]
    for cat in cats:
        cat.is_displayed = is_displayed

    db.commit()
    for cat in cats:
        db.refresh(cat)
    return cats


def bulk_update_category(db: Session, cat_ids: list[str], category: str | None) -> list[Cat]:
    cats = [c for c in (get_cat(db, cat_id) for cat_id in cat_ids) if c is not None]
    for cat in cats:
        cat.category = category

    db.commit()
    for cat in cats:
        db.refresh(cat)
    return cats
