from typing import Any, Type, TypeVar

from sqlalchemy.orm import Session

from core.exceptions import AlertNotFoundException

T = TypeVar('T')


class BaseRepository:
    """
    Session-bound repository. Writes are flushed so generated ids and
    counters are visible at once; the surrounding session scope decides
    when to commit.
    """

    def __init__(self, db: Session):
        self.db = db

    def _save(self, obj: T) -> T:
        self.db.add(obj)
        self.db.flush()
        return obj

    def _remove(self, obj: Any) -> None:
        self.db.delete(obj)
        self.db.flush()

    def _get_owned(self, model: Type[T], obj_id: str, owner_field: str, owner_id: str, label: str) -> T:
        """Load a row only if it belongs to ``owner_id``; otherwise it does not exist."""
        obj = self.db.get(model, obj_id)
        if obj is None or getattr(obj, owner_field) != str(owner_id):
            raise AlertNotFoundException(f"{label} not found or not yours")
        return obj
