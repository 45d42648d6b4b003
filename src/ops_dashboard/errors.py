"""Domain errors shared by the services, the API and the Streamlit UI."""

from __future__ import annotations

from typing import Dict, Optional


class OpsDashboardError(Exception):
    """Base class for every error raised by the ops dashboard services."""

    code = "error"


class DataFetchError(OpsDashboardError):
    """A read or write against Supabase failed (transport or authorization)."""

    code = "data_fetch_failed"


class ValidationFailed(OpsDashboardError):
    """One or more input fields are invalid. Raised before any network call."""

    code = "validation_failed"

    def __init__(self, errors: Dict[str, str], message: Optional[str] = None) -> None:
        self.errors = dict(errors)
        super().__init__(message or "; ".join(f"{k}: {v}" for k, v in self.errors.items()))


class RenderError(OpsDashboardError):
    """The PDF rendering service failed; no partial document is returned."""

    code = "render_failed"


class NotFound(OpsDashboardError):
    code = "not_found"


class Conflict(OpsDashboardError):
    code = "conflict"


class AuthenticationFailed(OpsDashboardError):
    """Wrong email or password."""

    code = "authentication_failed"
