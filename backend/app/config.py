"""Application configuration and dependency factories."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

from ops_dashboard.adapters.pdf_renderer import PlaywrightPdfRenderer
from ops_dashboard.adapters.supabase_client import get_supabase_client
from ops_dashboard.documents.i18n import normalize_language
from ops_dashboard.domain.metrics import WEEK_START_DAYS, parse_week_start

load_dotenv()


@dataclass(slots=True)
class Settings:
    supabase_url: str
    supabase_key: str
    api_key: str | None = None
    cars_bucket: str = "cars"
    shop_gallery_bucket: str = "shop-gallery"
    default_language: str = "he"
    week_start: int = WEEK_START_DAYS["sunday"]
    log_level: str = "INFO"
    pdf_render_timeout_ms: int = 30_000
    cors_origins: List[str] | None = None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    try:
        cors_raw = os.environ.get(
            "CORS_ALLOW_ORIGINS", "http://localhost:3000,http://localhost:8501"
        )
        cors_origins = [origin.strip() for origin in cors_raw.split(",") if origin.strip()]
        if not cors_origins:
            cors_origins = ["*"]

        return Settings(
            supabase_url=os.environ["SUPABASE_URL"],
            supabase_key=os.environ["SUPABASE_KEY"],
            api_key=os.environ.get("API_KEY"),
            cars_bucket=os.environ.get("SUPABASE_CARS_BUCKET", "cars"),
            shop_gallery_bucket=os.environ.get("SUPABASE_SHOP_GALLERY_BUCKET", "shop-gallery"),
            default_language=normalize_language(os.environ.get("DEFAULT_LANGUAGE", "he")),
            week_start=parse_week_start(os.environ.get("WEEK_START")),
            log_level=os.environ.get("LOG_LEVEL", "INFO"),
            pdf_render_timeout_ms=int(os.environ.get("PDF_RENDER_TIMEOUT_MS", "30000")),
            cors_origins=cors_origins,
        )
    except KeyError as exc:
        missing = ", ".join(sorted({key for key in exc.args}))
        raise RuntimeError(f"Missing required environment variables: {missing}") from exc
    except ValueError as exc:
        raise RuntimeError(str(exc)) from exc


def get_supabase():
    settings = get_settings()
    return get_supabase_client(settings.supabase_url, settings.supabase_key)


def get_pdf_renderer() -> PlaywrightPdfRenderer:
    settings = get_settings()
    return PlaywrightPdfRenderer(timeout_ms=settings.pdf_render_timeout_ms)
