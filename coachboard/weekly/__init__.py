# -*- coding: utf-8 -*-
"""Weekly summaries: check-in averages reconciled against program targets.

A summary is persisted once per (client, week start); the save path in
`service.py` recovers from concurrent writers racing on that key.
"""

from .aggregation import compute_weekly_averages, resolve_targets, week_bounds
from .errors import StorageFailure, TransientConflict, WeeklySummaryError
from .service import LastSavedWeekCache, WeeklySummaryService
from .storage import WeeklySummaryStore

__all__ = [
    "LastSavedWeekCache",
    "StorageFailure",
    "TransientConflict",
    "WeeklySummaryError",
    "WeeklySummaryService",
    "WeeklySummaryStore",
    "compute_weekly_averages",
    "resolve_targets",
    "week_bounds",
]
