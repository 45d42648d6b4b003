"""Signup and login routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ops_dashboard.domain.models import SignupInput
from ops_dashboard.services.auth import sign_in, sign_up

from ..config import get_supabase
from ..schemas.auth import LoginRequest, LoginResponse, SignupResponse

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/signup", response_model=SignupResponse, status_code=201, summary="Create an account")
async def signup(payload: SignupInput, supabase=Depends(get_supabase)):
    return SignupResponse(userId=sign_up(supabase, payload))


@router.post("/login", response_model=LoginResponse, summary="Password login")
async def login(payload: LoginRequest, supabase=Depends(get_supabase)):
    user = sign_in(supabase, payload.email, payload.password)
    return LoginResponse(id=user["id"], email=user["email"], fullName=user["full_name"], role=user["role"])
