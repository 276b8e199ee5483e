# -*- coding: utf-8 -*-
"""Daily check-ins (one row per customer per calendar day)."""
