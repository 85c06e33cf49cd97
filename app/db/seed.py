import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.db.models.todo import Label
from app.db.session import transaction

logger = logging.getLogger(__name__)

DEFAULT_LABELS = [
    {"name": "Work", "color": "#0A84FF"},
    {"name": "Personal", "color": "#30D158"},
    {"name": "Urgent", "color": "#FF453A"},
    {"name": "Learning", "color": "#FF9F0A"},
    {"name": "Health", "color": "#64D2FF"},
]


def seed_default_labels(db: Session) -> int:
    """Insert the default labels, but only into an empty labels table."""
    with transaction(db):
        count = db.scalar(select(func.count(Label.id)))
        if count:
            return 0
        # 🏷️ Default label set
        db.add_all([Label(**label) for label in DEFAULT_LABELS])

    logger.info("Seeded %d default labels", len(DEFAULT_LABELS))
    return len(DEFAULT_LABELS)
