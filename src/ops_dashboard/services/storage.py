"""Storage helpers for interacting with Supabase buckets."""

from __future__ import annotations

import mimetypes
import re
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import PurePosixPath
from typing import List

from supabase import Client

DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(slots=True)
class StoredFile:
    path: str
    url: str


def sanitize_segment(value: str) -> str:
    """Make ``value`` safe as a storage folder name (``[^a-zA-Z0-9]`` -> ``_``)."""
    return re.sub(r"[^a-zA-Z0-9]", "_", value)


def file_extension(filename: str, default: str = "jpg") -> str:
    suffix = PurePosixPath(filename or "").suffix.lstrip(".").lower()
    return suffix or default


def unique_name(filename: str) -> str:
    """``<timestamp>-<random>.<ext>``, used for gallery uploads."""
    stamp = int(datetime.now().timestamp() * 1000)
    return f"{stamp}-{uuid.uuid4().hex[:8]}.{file_extension(filename)}"


def upload_file(
    *,
    supabase: Client,
    bucket: str,
    file_path: str,
    content: bytes,
    content_type: str | None = None,
    upsert: bool = False,
) -> str:
    """Upload ``content`` to ``bucket/file_path`` and return the stored path."""
    content_type = content_type or mimetypes.guess_type(file_path)[0] or DEFAULT_CONTENT_TYPE
    supabase.storage.from_(bucket).upload(
        path=file_path,
        file=content,
        file_options={"content_type": content_type, "upsert": str(upsert).lower()},
    )
    return file_path


def public_url(*, supabase: Client, bucket: str, file_path: str) -> str:
    url = supabase.storage.from_(bucket).get_public_url(file_path)
    if not url:
        raise RuntimeError(f"Unable to build public URL for {file_path}")
    # Some client versions append a bare "?" to public URLs
    return url.rstrip("?")


def store_public_file(
    *, supabase: Client, bucket: str, file_path: str, content: bytes, content_type: str | None = None
) -> StoredFile:
    path = upload_file(
        supabase=supabase,
        bucket=bucket,
        file_path=file_path,
        content=content,
        content_type=content_type,
    )
    return StoredFile(path=path, url=public_url(supabase=supabase, bucket=bucket, file_path=path))


def remove_files(*, supabase: Client, bucket: str, file_paths: List[str]) -> None:
    if file_paths:
        supabase.storage.from_(bucket).remove(list(file_paths))
