#!/usr/bin/env python3
"""
app.py – public trade-stats API
------------------------------
Environment
-----------
REDIS_URL            redis://host:port/db     (default: redis://redis:6379/0)
STATS_RATE_LIMIT     requests per client      (default: 120)
STATS_RATE_WINDOW    rolling window, seconds  (default: 60)
STATS_CACHE_MAX_AGE  Cache-Control max-age    (default: 5)
API_PORT             listen port              (default: 8000)
FORWARDED_ALLOW_IPS  proxies trusted for X-Forwarded-For (default: 127.0.0.1)
"""

from __future__ import annotations

import math
from typing import Any, Dict

import uvicorn
from fastapi import Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from shared.config import env
from shared.constants import CACHE_MAX_AGE, MAX_WINDOW, WINDOW_LONG
from shared.errors import RateLimited, StoreUnavailable
from shared.logging import get_logger
from trade_counter import Aggregator, CounterStore

from .ratelimit import RateLimitConfig, SlidingWindowLimiter

# ───── CONFIG ──────────────────────────────────────────────────────────
API_PORT = env("API_PORT", 8000, cast=int)
FORWARDED_ALLOW_IPS = env("FORWARDED_ALLOW_IPS", "127.0.0.1")
CACHE_CONTROL = f"public, max-age={CACHE_MAX_AGE}, s-maxage={CACHE_MAX_AGE}"

log = get_logger("stats_api")

_limiter = SlidingWindowLimiter(RateLimitConfig())


# ───── DEPENDENCIES ───────────────────────────────────────────────────
def get_aggregator() -> Aggregator:
    return Aggregator(CounterStore())


def get_limiter() -> SlidingWindowLimiter:
    return _limiter


def client_identity(request: Request) -> str:
    """Peer address; uvicorn rewrites it from X-Forwarded-For for trusted proxies only."""
    return request.client.host if request.client else "unknown"


def rate_limit(
    request: Request,
    limiter: SlidingWindowLimiter = Depends(get_limiter),
) -> None:
    limiter.check(client_identity(request))


def envelope(data: Any, message: str) -> Dict[str, Any]:
    return {"success": True, "data": data, "message": message}


# ───── APP ────────────────────────────────────────────────────────────
app = FastAPI(title="Trade Stats", docs_url=None, redoc_url=None)


@app.exception_handler(RateLimited)
async def _rate_limited(request: Request, exc: RateLimited) -> JSONResponse:
    log.warning("rate limit hit – %s %s", client_identity(request), request.url.path)
    return JSONResponse(
        status_code=429,
        content={"success": False, "message": str(exc)},
        headers={"Retry-After": str(max(1, math.ceil(exc.retry_after)))},
    )


@app.exception_handler(StoreUnavailable)
async def _store_down(request: Request, exc: StoreUnavailable) -> JSONResponse:
    log.error("stats read failed – %s", exc)
    return JSONResponse(
        status_code=503,
        content={"success": False, "message": "Failed to fetch stats"},
    )


@app.exception_handler(RequestValidationError)
async def _bad_request(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"success": False, "message": "Invalid request parameters"},
    )


@app.exception_handler(Exception)
async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    log.exception("unhandled error on %s", request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"success": False, "message": "Failed to fetch stats"},
    )


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/stats/widget", dependencies=[Depends(rate_limit)])
def widget_stats(
    response: Response,
    aggregator: Aggregator = Depends(get_aggregator),
) -> Dict[str, Any]:
    stats = aggregator.widget_stats()
    response.headers["Cache-Control"] = CACHE_CONTROL
    return envelope(stats.to_dict(), "Stats retrieved successfully")


@app.get("/stats/trades", dependencies=[Depends(rate_limit)])
def trade_count(
    response: Response,
    days: int = Query(default=WINDOW_LONG, ge=1, le=MAX_WINDOW),
    aggregator: Aggregator = Depends(get_aggregator),
) -> Dict[str, Any]:
    count = aggregator.trade_count(days)
    response.headers["Cache-Control"] = CACHE_CONTROL
    return envelope(count.to_dict(), f"Trade count for the last {days} days")


def main() -> None:
    log.info("stats API listening on :%d", API_PORT)
    uvicorn.run(
        app,
        host="0.0.0.0",
        port=API_PORT,
        log_level="warning",
        proxy_headers=True,
        forwarded_allow_ips=FORWARDED_ALLOW_IPS,
    )


if __name__ == "__main__":
    main()
