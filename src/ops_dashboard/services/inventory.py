"""Cars and shops: create, edit, list and filter."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Any, Dict, List, Optional, Sequence

from supabase import Client

from ..adapters.supabase_client import first_row, supabase_errors
from ..domain.constants import ACTIVITY_TYPES, CAR_SORT_FIELDS, MAX_CAR_IMAGES
from ..domain.models import CarInput, CarUpdate, ShopInput
from ..errors import DataFetchError, NotFound, ValidationFailed
from ..logging_config import get_logger
from .storage import (
    file_extension,
    remove_files,
    sanitize_segment,
    store_public_file,
    unique_name,
    upload_file,
)

logger = get_logger(__name__)


@dataclass(slots=True)
class UploadedFile:
    filename: str
    content: bytes
    content_type: Optional[str] = None


def log_activity(supabase: Client, log_type: str, **payload: Any) -> None:
    """Append an entry to the ``logs`` table.

    Activity logging never blocks the change it describes: a failed insert
    is logged and the caller carries on.
    """
    if log_type not in ACTIVITY_TYPES:
        raise ValueError(f"Unknown activity type {log_type!r}")
    try:
        with supabase_errors(f"Logging {log_type}"):
            supabase.table("logs").insert({"type": log_type, **payload}).execute()
    except DataFetchError as exc:
        logger.warning("Activity %s not recorded: %s", log_type, exc)


def load_activity_logs(
    supabase: Client,
    *,
    start: Optional[date] = None,
    end: Optional[date] = None,
    log_type: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """``logs`` entries, newest first. ``start`` and ``end`` are inclusive days."""
    if log_type is not None and log_type not in ACTIVITY_TYPES:
        raise ValidationFailed({"type": f"Unknown activity type {log_type!r}"})
    if start and end and start > end:
        raise ValidationFailed({"end": "End date must not be before start date"})

    with supabase_errors("Activity log fetch"):
        query = supabase.table("logs").select("*")
        if start:
            query = query.gte("created_at", start.isoformat())
        if end:
            query = query.lt("created_at", (end + timedelta(days=1)).isoformat())
        if log_type:
            query = query.eq("type", log_type)
        result = query.order("created_at", desc=True).execute()
    return result.data or []


def create_car(
    supabase: Client,
    car: CarInput,
    images: Sequence[UploadedFile] = (),
    *,
    bucket: str = "cars",
) -> Dict[str, Any]:
    """Upload the car images, then insert the car row holding their storage paths."""
    if len(images) > MAX_CAR_IMAGES:
        raise ValidationFailed({"images": f"Maximum {MAX_CAR_IMAGES} images allowed"})

    folder = sanitize_segment(car.title)
    paths: List[str] = []
    with supabase_errors("Car creation"):
        try:
            for index, image in enumerate(images, start=1):
                paths.append(
                    upload_file(
                        supabase=supabase,
                        bucket=bucket,
                        file_path=f"{folder}/image_{index}.{file_extension(image.filename)}",
                        content=image.content,
                        content_type=image.content_type,
                    )
                )
            result = supabase.table("cars").insert({**car.model_dump(), "images": paths}).execute()
        except Exception:
            # no car row, so every stored image is an orphan
            remove_files(supabase=supabase, bucket=bucket, file_paths=paths)
            raise

    row = first_row(result) or {**car.model_dump(), "images": paths}
    logger.info("Car %r created with %d images", car.title, len(paths))
    log_activity(supabase, "car_added", car=row)
    return row


def update_car(supabase: Client, car_id: str, patch: CarUpdate) -> Dict[str, Any]:
    updates = patch.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise ValidationFailed({"form": "No fields to update"})
    if len(updates.get("images", [])) > MAX_CAR_IMAGES:
        raise ValidationFailed({"images": f"Maximum {MAX_CAR_IMAGES} images allowed"})

    with supabase_errors("Car update"):
        existing = first_row(supabase.table("cars").select("*").eq("id", car_id).limit(1).execute())
        if existing is None:
            raise NotFound("Car not found")
        result = supabase.table("cars").update(updates).eq("id", car_id).execute()

    row = first_row(result) or {**existing, **updates}
    log_activity(supabase, "car_updated", car=row)
    return row


def list_cars(supabase: Client) -> List[Dict[str, Any]]:
    with supabase_errors("Car list fetch"):
        result = supabase.table("cars").select("*").order("created_at", desc=True).execute()
    return result.data or []


def _sort_key(field: str):
    def key(row: Dict[str, Any]):
        value = row[field]
        return value.lower() if isinstance(value, str) else value

    return key


def filter_cars(
    rows: List[Dict[str, Any]],
    *,
    search: str = "",
    status: Optional[str] = None,
    brand: Optional[str] = None,
    sort_by: str = "created_at",
    descending: bool = True,
) -> List[Dict[str, Any]]:
    """Client-side search, status/brand filters and sorting over listed cars."""
    if sort_by not in CAR_SORT_FIELDS:
        raise ValidationFailed({"sort_by": f"sort_by must be one of {', '.join(CAR_SORT_FIELDS)}"})

    query = search.strip().lower()
    selected = []
    for row in rows:
        if status and row.get("status") != status:
            continue
        if brand and (row.get("brand") or "").lower() != brand.lower():
            continue
        if query:
            haystack = " ".join(
                str(row.get(column) or "") for column in ("title", "brand", "car_number", "provider")
            ).lower()
            if query not in haystack and query != str(row.get("year") or ""):
                continue
        selected.append(row)

    present = [row for row in selected if row.get(sort_by) is not None]
    missing = [row for row in selected if row.get(sort_by) is None]
    present.sort(key=_sort_key(sort_by), reverse=descending)
    return present + missing


def create_shop(
    supabase: Client,
    shop: ShopInput,
    gallery: Sequence[UploadedFile] = (),
    *,
    bucket: str = "shop-gallery",
) -> Dict[str, Any]:
    """Insert the shop, upload its gallery under ``<shop id>/`` and store the public URLs."""
    with supabase_errors("Shop creation"):
        created = first_row(supabase.table("shops").insert(shop.model_dump()).execute())
        if created is None:
            raise DataFetchError("Unable to create shop")

        urls = [
            store_public_file(
                supabase=supabase,
                bucket=bucket,
                file_path=f"{created['id']}/{unique_name(image.filename)}",
                content=image.content,
                content_type=image.content_type,
            ).url
            for image in gallery
        ]
        if urls:
            supabase.table("shops").update({"gallery": urls}).eq("id", created["id"]).execute()
            created = {**created, "gallery": urls}

    logger.info("Shop %r created with %d gallery images", shop.shop_name, len(urls))
    log_activity(supabase, "shop_added", shop=created)
    return created
