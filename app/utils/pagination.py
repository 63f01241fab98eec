from fastapi import HTTPException
from sqlalchemy.orm import Query


def paginate(query: Query, cursor: str | None, num_items: int) -> dict:
    """
    Offset pagination with an opaque string cursor.

    Returns {"page", "continue_cursor", "is_done"}; continue_cursor is None
    once the last page has been served.
    """
    if cursor:
        try:
            offset = int(cursor)
        except ValueError:
            raise HTTPException(status_code=400, detail="Invalid cursor")
        if offset < 0:
            raise HTTPException(status_code=400, detail="Invalid cursor")
    else:
        offset = 0

    rows = query.offset(offset).limit(num_items + 1).all()
    is_done = len(rows) <= num_items
    page = rows[:num_items]

    return {
        "page": page,
        "continue_cursor": None if is_done else str(offset + num_items),
        "is_done": is_done,
    }
