"""Explore catalog routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ops_dashboard.services.explore import (
    CatalogCriteria,
    catalog_facets,
    category_counts,
    filter_catalog,
    load_catalog,
)

from ..config import get_supabase
from ..schemas.explore import CatalogFacets, ExploreResponse

router = APIRouter(prefix="/explore", tags=["explore"])


@router.post("/search", response_model=ExploreResponse, summary="Search destinations and providers")
async def search_catalog(criteria: CatalogCriteria, supabase=Depends(get_supabase)):
    """Counts and facets describe the whole catalog; ``items`` are the filtered rows."""
    items = await load_catalog(supabase)
    facets = catalog_facets(items)
    return ExploreResponse(
        items=filter_catalog(items, criteria),
        counts=category_counts(items),
        facets=CatalogFacets(
            zones=facets["zones"],
            properties=facets["properties"],
            suitableFor=facets["suitable_for"],
        ),
    )
