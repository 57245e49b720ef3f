"""
Database Table Definitions.

This module defines the SQL schema using SQLModel.
We use the 'DBModel' suffix to distinguish these persistence models
from the Pydantic domain models (HistoryState, DecisionTree).
"""

from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TreeStateDBModel(SQLModel, table=True):
    """
    Generic key-value row backing the KeyValueStore.
    One row per tree identifier.
    """

    __tablename__ = "tree_state"

    key: str = Field(primary_key=True)

    # The persisted record ({active, history, first_step}) as an opaque JSON blob.
    value: Dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))

    updated_at: datetime = Field(default_factory=_utcnow)


class TreeDBModel(SQLModel, table=True):
    """
    Persistence model for tree definitions.
    """

    __tablename__ = "trees"

    tree_id: str = Field(primary_key=True)
    title: str

    # Store the entire nested tree definition (Steps, Answers, Summary) as JSON.
    tree_data: Dict[str, Any] = Field(sa_column=Column(JSON, nullable=False))

    version: int = Field(default=1)
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)
