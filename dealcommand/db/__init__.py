"""SQLAlchemy persistence for saved records and daily activity."""

from dealcommand.db.repository import (
    CHECKLIST_ITEMS,
    DAILY_TARGETS,
    KPI_FIELDS,
    Repository,
    daily_progress,
)
