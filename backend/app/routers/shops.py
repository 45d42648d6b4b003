"""Shop routes."""

from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile
from pydantic import ValidationError

from ops_dashboard.domain.models import ShopInput, collect_errors
from ops_dashboard.errors import ValidationFailed
from ops_dashboard.services.inventory import create_shop

from ..config import Settings, get_settings, get_supabase
from ..schemas.inventory import ShopResponse
from .cars import read_uploads

router = APIRouter(prefix="/shops", tags=["shops"])


@router.post("", response_model=ShopResponse, status_code=201, summary="Add a shop")
async def add_shop(
    *,
    metadata: str = Form(...),
    gallery: Optional[List[UploadFile]] = File(default=None),
    supabase=Depends(get_supabase),
    settings: Settings = Depends(get_settings),
):
    try:
        shop = ShopInput.model_validate_json(metadata)
    except ValidationError as exc:
        raise ValidationFailed(collect_errors(exc)) from exc

    uploads = await read_uploads(gallery)
    row = create_shop(supabase, shop, uploads, bucket=settings.shop_gallery_bucket)
    return ShopResponse(shop=row)
