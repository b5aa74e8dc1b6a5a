"""
Common utility functions used across multiple routes.
"""

import math
from uuid import uuid4

from fastapi import HTTPException, status
from sqlalchemy.orm import Query, Session

from api.schemas.page_schemas import PageRequest


def new_id() -> str:
    return str(uuid4())


def paginate(query: Query, req: PageRequest, schema) -> dict:
    """Slice an ordered query into the page envelope (data + pagination)."""
    records = query.count()
    rows = query.offset((req.page - 1) * req.limit).limit(req.limit).all()
    return {
        "data": [schema.model_validate(r) for r in rows],
        "pagination": {
            "current": req.page,
            "limit": req.limit,
            "records": records,
            "pages": math.ceil(records / req.limit) if records else 0,
        },
    }


def get_or_404(db: Session, model, entity_id: str, *, include_deleted: bool = False, label: str | None = None):
    """Fetch by primary key; soft-deleted rows count as missing unless ``include_deleted``."""
    entity = db.get(model, entity_id)
    if entity is None or (not include_deleted and getattr(entity, "deleted_at", None) is not None):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"{label or model.__name__} not found")
    return entity


def ensure_owner(owner_id: str | None, actor_id: str | None, what: str) -> None:
    if owner_id is None or owner_id != actor_id:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=f"Only the owner may modify this {what}")


def search_filter(column, term: str | None):
    """Case-insensitive substring match, or None when there is nothing to match."""
    if not term:
        return None
    return column.ilike(f"%{term}%")
