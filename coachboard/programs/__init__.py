# -*- coding: utf-8 -*-
"""Programs (budgets), their templates, client assignments and change history rows."""
