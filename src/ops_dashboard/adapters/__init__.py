"""Adapter layer exports."""

from .pdf_renderer import PlaywrightPdfRenderer, RenderOptions
from .supabase_client import (
    apply_period,
    apply_scope,
    count_rows,
    first_row,
    gather_reads,
    get_supabase_client,
    select_rows,
    supabase_errors,
)

__all__ = [
    "PlaywrightPdfRenderer",
    "RenderOptions",
    "apply_period",
    "apply_scope",
    "count_rows",
    "first_row",
    "gather_reads",
    "get_supabase_client",
    "select_rows",
    "supabase_errors",
]
