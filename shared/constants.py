"""
constants.py – single source of hard-coded names
"""

from .config import env

# Daily trade buckets
KEY_TRADES_DAILY = env("TRADE_COUNTER_PREFIX", "stats:trades:daily")
BUCKET_TTL_DAYS  = 35
BUCKET_TTL_SEC   = BUCKET_TTL_DAYS * 24 * 60 * 60     # = 3 024 000

WINDOW_SHORT = 7              # trades_7d
WINDOW_LONG  = 30             # trades_30d
MAX_WINDOW   = BUCKET_TTL_DAYS  # older buckets have expired anyway

# Trade book
KEY_TRADES_ACTIVE = "live:trades:active"
KEY_TICKET_SEQ    = "live:trades:ticket_seq"

# Public stats endpoint
CACHE_MAX_AGE     = env("STATS_CACHE_MAX_AGE", 5, cast=int)      # s
RATE_LIMIT        = env("STATS_RATE_LIMIT", 120, cast=int)       # requests
RATE_WINDOW       = env("STATS_RATE_WINDOW", 60.0, cast=float)   # s
RATE_LIMIT_MSG    = "Too many requests, please try again later"
