"""Car inventory routes."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError

from ops_dashboard.domain.models import CarInput, CarUpdate, collect_errors
from ops_dashboard.errors import ValidationFailed
from ops_dashboard.services.inventory import (
    UploadedFile,
    create_car,
    filter_cars,
    list_cars,
    update_car,
)

from ..config import Settings, get_settings, get_supabase
from ..schemas.inventory import CarListResponse, CarResponse

router = APIRouter(prefix="/cars", tags=["cars"])


async def read_uploads(files: Optional[List[UploadFile]]) -> List[UploadedFile]:
    uploads = []
    for upload in files or []:
        content = await upload.read()
        if content:
            uploads.append(
                UploadedFile(
                    filename=upload.filename or "image.jpg",
                    content=content,
                    content_type=upload.content_type,
                )
            )
    return uploads


@router.get("", response_model=CarListResponse, summary="List cars")
async def get_cars(
    search: str = "",
    status: Optional[str] = None,
    brand: Optional[str] = None,
    sortBy: str = "created_at",
    descending: bool = True,
    supabase=Depends(get_supabase),
):
    rows = list_cars(supabase)
    cars = filter_cars(
        rows, search=search, status=status, brand=brand, sort_by=sortBy, descending=descending
    )
    return CarListResponse(cars=cars, total=len(cars))


@router.post("", response_model=CarResponse, status_code=201, summary="Add a car")
async def add_car(
    *,
    metadata: str = Form(...),
    images: Optional[List[UploadFile]] = File(default=None),
    supabase=Depends(get_supabase),
    settings: Settings = Depends(get_settings),
):
    try:
        car = CarInput.model_validate_json(metadata)
    except ValidationError as exc:
        raise ValidationFailed(collect_errors(exc)) from exc

    uploads = await read_uploads(images)
    row = create_car(supabase, car, uploads, bucket=settings.cars_bucket)
    return CarResponse(car=row)


@router.patch("/{car_id}", response_model=CarResponse, summary="Edit a car")
async def edit_car(car_id: str, patch: CarUpdate, supabase=Depends(get_supabase)):
    return CarResponse(car=update_car(supabase, car_id, patch))
