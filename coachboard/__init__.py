# -*- coding: utf-8 -*-
"""Coachboard backend: program change history and weekly check-in summaries."""
