"""API schemas for signup and login."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class LoginRequest(BaseModel):
    email: str
    password: str


class SignupResponse(BaseModel):
    userId: str


class LoginResponse(BaseModel):
    id: str
    email: Optional[str] = None
    fullName: Optional[str] = None
    role: Optional[str] = None
