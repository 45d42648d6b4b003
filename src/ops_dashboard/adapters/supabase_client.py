"""Supabase client helpers."""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from functools import lru_cache
from typing import Any, Dict, Iterator, List, Mapping, Optional

from supabase import Client, create_client

from ops_dashboard.domain.metrics import Period
from ops_dashboard.errors import DataFetchError, OpsDashboardError
from ops_dashboard.logging_config import get_logger

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def get_supabase_client(url: str, key: str) -> Client:
    """Return a cached Supabase client for the given credentials."""
    return create_client(url, key)


def apply_period(query, period: Optional[Period], column: str = "created_at"):
    """Restrict ``query`` to ``[period.start, period.end)`` on ``column``."""
    if period is None:
        return query
    if period.start is not None:
        query = query.gte(column, period.start.isoformat())
    if period.end is not None:
        query = query.lt(column, period.end.isoformat())
    return query


def apply_scope(query, scope: Optional[Mapping[str, Any]]):
    """Add one equality predicate per ``scope`` entry (tenant, status, ...)."""
    for column, value in (scope or {}).items():
        query = query.eq(column, value)
    return query


def count_rows(
    supabase: Client,
    table: str,
    *,
    period: Optional[Period] = None,
    scope: Optional[Mapping[str, Any]] = None,
) -> int:
    query = supabase.table(table).select("id", count="exact")
    query = apply_scope(apply_period(query, period), scope)
    result = query.execute()
    return result.count or 0


def select_rows(
    supabase: Client,
    table: str,
    columns: str = "*",
    *,
    period: Optional[Period] = None,
    scope: Optional[Mapping[str, Any]] = None,
) -> List[Dict[str, Any]]:
    query = supabase.table(table).select(columns)
    query = apply_scope(apply_period(query, period), scope)
    result = query.execute()
    return result.data or []


def first_row(result) -> Optional[Dict[str, Any]]:
    data = getattr(result, "data", None) or []
    if isinstance(data, dict):
        return data
    return data[0] if data else None


@contextmanager
def supabase_errors(action: str) -> Iterator[None]:
    """Convert client/transport failures raised inside the block into ``DataFetchError``."""
    try:
        yield
    except OpsDashboardError:
        raise
    except Exception as exc:  # postgrest APIError, httpx errors, storage errors
        logger.error("%s failed: %s", action, exc)
        raise DataFetchError(f"{action} failed") from exc


async def gather_reads(*calls, action: str = "Data fetch") -> List[Any]:
    """Run blocking client calls in worker threads and wait for all of them.

    Each call is a ``(func, args, kwargs)`` triple. Results keep call order.
    """
    with supabase_errors(action):
        return await asyncio.gather(
            *(asyncio.to_thread(func, *args, **kwargs) for func, args, kwargs in calls)
        )
