"""Unit tests for signup and sign-in."""

import pytest

from ops_dashboard.domain.models import SignupInput
from ops_dashboard.errors import AuthenticationFailed, Conflict, DataFetchError, ValidationFailed
from ops_dashboard.services.auth import sign_in, sign_up
from tests.conftest import FakeSupabase


@pytest.fixture
def auth_client() -> FakeSupabase:
    return FakeSupabase({"user_roles": [{"id": 3, "name": "trip_planner"}, {"id": 4, "name": "employee"}]})


def signup(**overrides) -> SignupInput:
    values = dict(
        email=" Planner@Example.com ",
        password="secret1",
        confirm_password="secret1",
        full_name="Dana Levi",
        role="trip_planner",
    )
    values.update(overrides)
    return SignupInput(**values)


def test_sign_up_creates_profile(auth_client):
    user_id = sign_up(auth_client, signup())

    profile = auth_client.rows("users")[0]
    assert profile["id"] == user_id
    assert profile["auth_user_id"] == user_id
    assert profile["email"] == "planner@example.com"
    assert profile["role_id"] == 3
    assert profile["is_active"] is True
    assert profile["school_id"] is None


def test_sign_up_duplicate_email(auth_client):
    sign_up(auth_client, signup())
    with pytest.raises(Conflict):
        sign_up(auth_client, signup())


def test_sign_up_unknown_role_row(auth_client):
    auth_client.tables["user_roles"] = []
    with pytest.raises(ValidationFailed) as exc_info:
        sign_up(auth_client, signup())
    assert exc_info.value.errors == {"role": "Invalid role"}


def test_sign_up_profile_failure_signs_out(auth_client):
    auth_client.failing_tables.add("users")
    with pytest.raises(DataFetchError):
        sign_up(auth_client, signup())
    assert auth_client.auth.signed_out


def test_signup_input_validation():
    with pytest.raises(ValueError):
        signup(email="not-an-email")
    with pytest.raises(ValueError):
        signup(confirm_password="other1")
    with pytest.raises(ValueError):
        signup(role="admin")


def test_sign_in_returns_role(auth_client):
    user_id = sign_up(auth_client, signup(full_name="Noa"))
    account = sign_in(auth_client, "PLANNER@example.com", "secret1")
    assert account == {"id": user_id, "email": "planner@example.com", "full_name": "Noa", "role": "trip_planner"}


def test_sign_in_bad_credentials(auth_client):
    sign_up(auth_client, signup())
    with pytest.raises(AuthenticationFailed):
        sign_in(auth_client, "planner@example.com", "wrong")
    with pytest.raises(AuthenticationFailed):
        sign_in(auth_client, "nobody@example.com", "secret1")
