"""API schemas for car and shop endpoints."""

from __future__ import annotations

from typing import Any, Dict, List

from pydantic import BaseModel


class CarListResponse(BaseModel):
    cars: List[Dict[str, Any]]
    total: int


class CarResponse(BaseModel):
    car: Dict[str, Any]


class ShopResponse(BaseModel):
    shop: Dict[str, Any]
