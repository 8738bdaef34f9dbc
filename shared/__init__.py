"""
shared – tiny helpers imported by every service
-----------------------------------------------
Modules
-------
config.py         → loads `.env` once per process
logging.py        → consistent JSON/stdout logger
constants.py      → key names, windows, limits
errors.py         → StoreUnavailable / RateLimited
redis_client.py   → lazy singleton Redis connection
dates.py          → UTC-fixed day buckets
"""
