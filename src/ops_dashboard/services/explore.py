"""Explore catalog: every bookable destination and service provider in one list."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Mapping, Optional, Union

from pydantic import BaseModel, Field
from supabase import Client

from ..adapters.supabase_client import gather_reads, select_rows

CatalogCategory = Literal[
    "destinations", "guides", "paramedics", "security", "entertainment", "travel", "education"
]

# category -> (table, active filter, display type)
CATALOG_SOURCES: Dict[str, tuple] = {
    "destinations": ("destinations_with_details", {"is_active": True}, "Destination"),
    "guides": ("guides", {"status": "active"}, "Tour guide"),
    "paramedics": ("paramedics", {"status": "active"}, "Paramedic"),
    "security": ("security_companies", {"status": "active"}, "Security company"),
    "entertainment": ("external_entertainment_companies", {"status": "active"}, "Entertainment company"),
    "travel": ("travel_companies", {"status": "active"}, "Travel company"),
    "education": ("education_programs", {"status": "active"}, "Education program"),
}


class DestinationProperty(BaseModel):
    value: str
    icon: Optional[str] = None


class CatalogItem(BaseModel):
    id: str
    name: str
    category: CatalogCategory
    type: str
    description: Optional[str] = None
    image: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    price: Optional[float] = None
    hourly_rate: Optional[float] = None
    daily_rate: Optional[float] = None
    zone: Optional[str] = None
    properties: List[DestinationProperty] = Field(default_factory=list)
    suitable_for: List[str] = Field(default_factory=list)

    @property
    def effective_price(self) -> float:
        return self.price or self.daily_rate or 0


class CatalogCriteria(BaseModel):
    category: Union[Literal["all"], CatalogCategory] = "all"
    search: str = ""
    min_price: float = 0
    max_price: Optional[float] = None
    zones: List[str] = Field(default_factory=list)
    properties: List[str] = Field(default_factory=list)
    suitable_for: List[str] = Field(default_factory=list)


def _number(value: Any) -> Optional[float]:
    return float(value) if value not in (None, "") else None


def normalize_row(
    category: str, row: Mapping[str, Any], zones: Optional[Mapping[Any, str]] = None
) -> CatalogItem:
    """Map a raw table row onto the shared catalog shape."""
    zones = zones or {}
    item: Dict[str, Any] = {
        "id": str(row["id"]),
        "name": row.get("name") or "",
        "category": category,
        "type": CATALOG_SOURCES[category][2],
        "description": row.get("description"),
        "image": row.get("image"),
        "address": row.get("address"),
        "phone": row.get("phone"),
        "email": row.get("email"),
        "price": _number(row.get("price")),
        "hourly_rate": _number(row.get("hourly_rate")),
        "daily_rate": _number(row.get("daily_rate")),
    }
    if category == "destinations":
        item["image"] = row.get("thumbnail_path")
        item["zone"] = zones.get(row.get("zone_id")) if row.get("zone_id") else None
        item["properties"] = [
            {"value": prop.get("value"), "icon": prop.get("icon")}
            for prop in row.get("properties_details") or []
            if prop.get("value")
        ]
        item["suitable_for"] = [
            entry.get("value") for entry in row.get("suitable_for_details") or [] if entry.get("value")
        ]
    return CatalogItem(**item)


async def load_catalog(supabase: Client) -> List[CatalogItem]:
    """Fetch every active catalog table plus zones and normalize the rows."""
    categories = list(CATALOG_SOURCES)
    results = await gather_reads(
        *[
            (select_rows, (supabase, table, "*"), {"scope": active})
            for table, active, _ in CATALOG_SOURCES.values()
        ],
        (select_rows, (supabase, "zones", "id, name"), {}),
        action="Catalog fetch",
    )
    zones = {zone["id"]: zone.get("name") for zone in results[-1]}
    return [
        normalize_row(category, row, zones)
        for category, rows in zip(categories, results[:-1])
        for row in rows
    ]


def _matches_search(item: CatalogItem, query: str) -> bool:
    haystack = (item.name, item.type, item.description, item.address)
    return any(query in value.lower() for value in haystack if value)


def filter_catalog(items: List[CatalogItem], criteria: CatalogCriteria) -> List[CatalogItem]:
    """Apply the explore filters. Property and suitable-for filters only keep destinations."""
    query = criteria.search.strip().lower()
    selected = []
    for item in items:
        if criteria.category != "all" and item.category != criteria.category:
            continue
        if query and not _matches_search(item, query):
            continue
        price = item.effective_price
        if price < criteria.min_price:
            continue
        if criteria.max_price is not None and price > criteria.max_price:
            continue
        if criteria.zones and item.zone not in criteria.zones:
            continue
        if criteria.properties:
            values = {prop.value for prop in item.properties}
            if item.category != "destinations" or not values.intersection(criteria.properties):
                continue
        if criteria.suitable_for:
            if item.category != "destinations" or not set(item.suitable_for).intersection(
                criteria.suitable_for
            ):
                continue
        selected.append(item)
    return selected


def category_counts(items: List[CatalogItem]) -> Dict[str, int]:
    counts = {"all": len(items)}
    for category in CATALOG_SOURCES:
        counts[category] = sum(1 for item in items if item.category == category)
    return counts


def catalog_facets(items: List[CatalogItem]) -> Dict[str, list]:
    """Distinct filter values present in ``items``, in first-seen order."""
    zones: List[str] = []
    properties: Dict[str, Optional[str]] = {}
    suitable: List[str] = []
    for item in items:
        if item.zone and item.zone not in zones:
            zones.append(item.zone)
        if item.category != "destinations":
            continue
        for prop in item.properties:
            properties.setdefault(prop.value, prop.icon)
        for value in item.suitable_for:
            if value not in suitable:
                suitable.append(value)
    return {
        "zones": zones,
        "properties": [DestinationProperty(value=value, icon=icon) for value, icon in properties.items()],
        "suitable_for": suitable,
    }
