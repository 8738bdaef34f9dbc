"""
stats_api
=========

Public, unauthenticated read side of the trade counter:

• GET /stats/widget        – rolling 7 d / 30 d totals (Cache-Control: 5 s)
• GET /stats/trades?days=N – total + per-day breakdown (diagnostics)
• GET /health

Every /stats route is capped per client (default 120 req / 60 s).
"""
