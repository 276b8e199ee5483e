# -*- coding: utf-8 -*-
"""Program change history: snapshot diffing and readable change lists."""

from .diff import diff_snapshots, diff_weekly_schedule
from .formatting import format_value, readable_changes

__all__ = ["diff_snapshots", "diff_weekly_schedule", "format_value", "readable_changes"]
