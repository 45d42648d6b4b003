"""Account signup and sign-in against Supabase Auth."""

from __future__ import annotations

from typing import Any, Dict

from supabase import Client

from ..adapters.supabase_client import first_row, supabase_errors
from ..domain.models import SignupInput
from ..errors import AuthenticationFailed, Conflict, DataFetchError, ValidationFailed
from ..logging_config import get_logger

logger = get_logger(__name__)


def sign_up(supabase: Client, payload: SignupInput) -> str:
    """Create the auth user and its ``users`` row. Returns the new user id."""
    try:
        response = supabase.auth.sign_up(
            {
                "email": payload.email,
                "password": payload.password,
                "options": {"data": {"full_name": payload.full_name}},
            }
        )
    except Exception as exc:  # AuthApiError and transport errors
        if "already registered" in str(exc).lower():
            raise Conflict("User already registered") from exc
        logger.error("Signup failed for %s: %s", payload.email, exc)
        raise DataFetchError("Signup failed") from exc

    user = getattr(response, "user", None)
    if user is None:
        raise DataFetchError("Signup failed")

    with supabase_errors("User profile creation"):
        role = first_row(
            supabase.table("user_roles").select("id").eq("name", payload.role).limit(1).execute()
        )
        if role is None:
            raise ValidationFailed({"role": "Invalid role"})
        try:
            supabase.table("users").insert(
                {
                    "id": user.id,
                    "auth_user_id": user.id,
                    "email": payload.email,
                    "full_name": payload.full_name,
                    "phone": payload.phone,
                    "role_id": role["id"],
                    "school_id": payload.school_id if payload.role == "school_manager" else None,
                    "is_active": True,
                }
            ).execute()
        except Exception:
            supabase.auth.sign_out()
            raise

    logger.info("Created account %s (%s)", payload.email, payload.role)
    return user.id


def sign_in(supabase: Client, email: str, password: str) -> Dict[str, Any]:
    """Password sign-in; returns the user id, email and role name."""
    try:
        response = supabase.auth.sign_in_with_password(
            {"email": email.strip().lower(), "password": password}
        )
    except Exception as exc:  # AuthApiError and transport errors
        if "invalid login credentials" in str(exc).lower():
            logger.info("Rejected sign-in for %s", email.strip().lower())
            raise AuthenticationFailed("Invalid email or password") from exc
        logger.error("Sign-in failed for %s: %s", email, exc)
        raise DataFetchError("Sign-in failed") from exc

    user = response.user
    with supabase_errors("Sign-in"):
        profile = first_row(
            supabase.table("users")
            .select("id, full_name, role_id")
            .eq("auth_user_id", user.id)
            .limit(1)
            .execute()
        ) or {}
        role = None
        if profile.get("role_id") is not None:
            role_row = first_row(
                supabase.table("user_roles").select("name").eq("id", profile["role_id"]).limit(1).execute()
            )
            role = (role_row or {}).get("name")
    return {"id": user.id, "email": user.email, "full_name": profile.get("full_name"), "role": role}
