"""API schemas for booking quotes."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from ops_dashboard.domain.pricing import DestinationPricing, ServiceSelection


class QuoteRequest(BaseModel):
    destinationPricing: Optional[DestinationPricing] = None
    numberOfStudents: int = 0
    numberOfCrew: int = 0
    services: List[ServiceSelection] = Field(default_factory=list)
