"""API schemas for the explore catalog."""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel

from ops_dashboard.services.explore import CatalogItem, DestinationProperty


class CatalogFacets(BaseModel):
    zones: List[str]
    properties: List[DestinationProperty]
    suitableFor: List[str]


class ExploreResponse(BaseModel):
    items: List[CatalogItem]
    counts: Dict[str, int]
    facets: CatalogFacets
