# app/repositories/base.py
from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Generic, Iterable, Optional, TypeVar

from sqlalchemy import String, cast, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Query, Session

from app.db.base import Base

log = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


class DuplicateError(Exception):
    """A unique index rejected the write."""


@dataclass
class Page(Generic[ModelT]):
    items: list[ModelT]
    total: int
    page: int
    limit: int


def clamp_page(page: Optional[int], limit: Optional[int], default_limit: int = 20, max_limit: int = 100):
    page = page if page and page > 0 else 1
    limit = limit if limit and limit > 0 else default_limit
    return page, min(limit, max_limit)


def escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


def text_search(columns: Iterable, q: Optional[str]):
    """Case-insensitive substring match over (JSON or plain) columns."""
    term = (q or "").strip()
    if not term:
        return None
    pattern = f"%{escape_like(term)}%"
    return or_(*[cast(col, String).ilike(pattern, escape="\\") for col in columns])


def json_list_contains(column, value: str):
    # JSON lists are stored as text like ["a", "b"]; match one encoded element
    element = json.dumps(value, ensure_ascii=False)
    return cast(column, String).like(f"%{escape_like(element)}%", escape="\\")


class Repository(Generic[ModelT]):
    model: type[ModelT]

    def __init__(self, db: Session):
        self.db = db

    def query(self) -> Query:
        return self.db.query(self.model)

    def get_by_id(self, item_id: int) -> Optional[ModelT]:
        return self.db.get(self.model, item_id)

    def create(self, data: dict[str, Any]) -> ModelT:
        obj = self.model(**data)
        self.db.add(obj)
        self.commit()
        self.db.refresh(obj)
        return obj

    def update(self, obj: ModelT, data: dict[str, Any]) -> ModelT:
        for key, val in data.items():
            if hasattr(obj, key):
                setattr(obj, key, val)
        self.db.add(obj)
        self.commit()
        self.db.refresh(obj)
        return obj

    def delete(self, obj: ModelT) -> None:
        self.db.delete(obj)
        self.commit()

    def commit(self) -> None:
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            log.info("unique constraint rejected write on %s: %s", self.model.__tablename__, e.orig)
            raise DuplicateError(str(e.orig)) from e

    def exists(self, *criteria, exclude_id: Optional[int] = None) -> bool:
        q = self.query().filter(*criteria)
        if exclude_id is not None:
            q = q.filter(self.model.id != exclude_id)
        return self.db.query(q.exists()).scalar()

    def paginate(self, query: Query, page: int, limit: int, with_count: bool = True) -> Page[ModelT]:
        items = query.offset((page - 1) * limit).limit(limit).all()
        total = query.order_by(None).count() if with_count else len(items)
        return Page(items=items, total=total, page=page, limit=limit)
