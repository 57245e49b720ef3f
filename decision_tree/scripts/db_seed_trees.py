"""
Database Seeder.

Run this script to populate the database with the sample trees defined in
data/sample_trees.py.

Usage:
    python -m decision_tree.scripts.db_seed_trees
"""

import logging
from datetime import datetime, timezone
from typing import Dict, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from decision_tree.app.dependencies import configure_logging
from decision_tree.data.sample_trees import SAMPLE_TREES
from decision_tree.domain.models import DecisionTree
from decision_tree.infrastructure.database.connection import engine as default_engine, init_db
from decision_tree.infrastructure.database.tables import TreeDBModel
from decision_tree.repositories.tree import tree_adapter

logger = logging.getLogger(__name__)


def seed_trees(trees: Optional[Dict[str, DecisionTree]] = None, engine: Optional[Engine] = None) -> int:
    """Upserts every tree. Returns how many were written."""
    trees = SAMPLE_TREES if trees is None else trees
    engine = default_engine if engine is None else engine

    logger.info("Initializing Database Connection...")
    init_db(engine)

    with Session(engine) as session:
        logger.info(f"Found {len(trees)} trees to seed.")

        for tree_id, tree in trees.items():
            # Serialize the tree to a JSON-compatible dict.
            tree_data = tree_adapter.dump_python(tree, mode="json")
            title = tree.title or tree.id.replace("_", " ").title()

            # Upsert logic: update existing records or insert new ones.
            statement = select(TreeDBModel).where(TreeDBModel.tree_id == tree_id)
            existing = session.exec(statement).first()

            if existing:
                logger.info(f"Updating existing record for tree {tree_id}.")
                existing.title = title
                existing.tree_data = tree_data
                existing.version += 1
                existing.updated_at = datetime.now(timezone.utc)
                session.add(existing)
            else:
                logger.info(f"Creating new record for tree {tree_id}.")
                session.add(TreeDBModel(tree_id=tree_id, title=title, tree_data=tree_data))

        session.commit()
        logger.info("Tree seeding complete.")

    return len(trees)


if __name__ == "__main__":
    configure_logging()
    seed_trees()
