from abc import ABC, abstractmethod
from typing import Dict, Optional

from pydantic import TypeAdapter
from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from ..domain.models import DecisionTree
from ..infrastructure.database.tables import TreeDBModel
from ..services.exceptions import TreeNotFoundError

tree_adapter = TypeAdapter(DecisionTree)


# The Interface
class TreeRepository(ABC):
    """
    Defines how the application accesses tree definitions.
    The NavigationEngine never knows where a definition came from.
    """

    @abstractmethod
    def get_tree(self, tree_id: str) -> DecisionTree:
        """
        Retrieves a tree by ID.
        Raises TreeNotFoundError if not found.
        """
        pass


class StaticTreeRepository(TreeRepository):
    """
    Get trees from a hardcoded dict in memory.
    """

    def __init__(self, trees: Optional[Dict[str, DecisionTree]] = None):
        if trees is None:
            from ..data.sample_trees import SAMPLE_TREES
            trees = SAMPLE_TREES
        # Index for O(1) lookup
        self._index: Dict[str, DecisionTree] = dict(trees)

    def get_tree(self, tree_id: str) -> DecisionTree:
        if tree_id not in self._index:
            raise TreeNotFoundError(f"Tree '{tree_id}' not found.")
        return self._index[tree_id]


class SqlTreeRepository(TreeRepository):
    """
    Reads from the 'trees' table (JSON).
    """

    def __init__(self, engine: Optional[Engine] = None):
        if engine is None:
            from ..infrastructure.database.connection import engine
        self.engine = engine

    def get_tree(self, tree_id: str) -> DecisionTree:
        with Session(self.engine) as db:
            statement = select(TreeDBModel).where(TreeDBModel.tree_id == tree_id)
            result = db.exec(statement).first()

            if not result:
                raise TreeNotFoundError(f"Tree '{tree_id}' not found in database.")

            # Deserialize JSON -> nested dataclasses
            return tree_adapter.validate_python(result.tree_data)
