from abc import ABC, abstractmethod
from copy import deepcopy
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from ..infrastructure.database.tables import TreeStateDBModel


class KeyValueStore(ABC):
    """
    Generic JSON key-value persistence used for session state.
    Mirrors page-scoped browser storage: get / set / remove by key.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Dict[str, Any]]:
        """Returns the stored value, or None when the key is absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: Dict[str, Any]):
        """Stores the value, overwriting any previous one."""
        pass

    @abstractmethod
    def remove(self, key: str) -> bool:
        """Removes the key. Returns True if it was present."""
        pass


class InMemoryKeyValueStore(KeyValueStore):
    """
    Uses in-memory dictionary for storage. Lives as long as the process.
    """

    def __init__(self):
        self._store: Dict[str, Dict[str, Any]] = {}

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        value = self._store.get(key)
        # Hand out copies so callers cannot mutate what is persisted
        return deepcopy(value) if value is not None else None

    def set(self, key: str, value: Dict[str, Any]):
        self._store[key] = deepcopy(value)

    def remove(self, key: str) -> bool:
        if key in self._store:
            del self._store[key]
            return True
        return False


class SqlKeyValueStore(KeyValueStore):
    """
    SQL storage ('tree_state' table, JSON column).
    """

    def __init__(self, engine: Optional[Engine] = None):
        if engine is None:
            from ..infrastructure.database.connection import engine
        self.engine = engine

    def _find(self, db: Session, key: str) -> Optional[TreeStateDBModel]:
        statement = select(TreeStateDBModel).where(TreeStateDBModel.key == key)
        return db.exec(statement).first()

    def get(self, key: str) -> Optional[Dict[str, Any]]:
        with Session(self.engine) as db:
            result = self._find(db, key)
            if not result:
                return None
            return dict(result.value)

    def set(self, key: str, value: Dict[str, Any]):
        with Session(self.engine) as db:
            result = self._find(db, key)
            if result:
                # Update the JSON blob and the timestamp
                result.value = dict(value)
                result.updated_at = datetime.now(timezone.utc)
            else:
                result = TreeStateDBModel(key=key, value=dict(value))
            db.add(result)
            db.commit()

    def remove(self, key: str) -> bool:
        with Session(self.engine) as db:
            result = self._find(db, key)
            if result:
                db.delete(result)
                db.commit()
                return True
            return False
