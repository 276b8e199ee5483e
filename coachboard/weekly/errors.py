# -*- coding: utf-8 -*-
"""Weekly summary failures."""

from __future__ import annotations


class WeeklySummaryError(Exception):
    """Base class for weekly summary persistence errors."""


class TransientConflict(WeeklySummaryError):
    """Insert lost the race on (client_id, week_start_date). Recovered by the service."""

    def __init__(self, client_id: str, week_start: str) -> None:
        super().__init__(f"Weekly summary already exists for {client_id} / {week_start}")
        self.client_id = client_id
        self.week_start = week_start


class StorageFailure(WeeklySummaryError):
    """Any other read/write failure of the underlying store."""

    def __init__(self, operation: str, message: str) -> None:
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.message = message
