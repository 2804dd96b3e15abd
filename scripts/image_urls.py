"""Helpers for deterministic CDN image URLs."""

import os
from typing import Iterable, Optional
from urllib.parse import quote

# Matches the widths produced by builder.py
THUMB_WIDTHS = (480, 720, 960, 1200)
DETAIL_WIDTHS = (800, 1200, 1600)  # max detail = 1600

GALLERY_SIZES = "(min-width: 900px) 33vw, 100vw"  # 3-col on desktop
DETAIL_SIZES = "(min-width: 980px) 980px, 100vw"


def cdn_base() -> str:
    """Return PUBLIC_IMAGE_CDN_BASE without trailing slashes."""
    return os.getenv("PUBLIC_IMAGE_CDN_BASE", "").rstrip("/")


def _base(base: Optional[str]) -> str:
    return cdn_base() if base is None else base.rstrip("/")


def image_url(slug: str, width: int, base: Optional[str] = None) -> str:
    """Build the URL of one derivative width."""
    return f"{_base(base)}/{quote(slug)}/{width}.webp"


def placeholder_url(slug: str, base: Optional[str] = None) -> str:
    """Build the URL of the blurred loading placeholder."""
    return f"{_base(base)}/{quote(slug)}/placeholder.webp"


def srcset(slug: str, widths: Iterable[int], base: Optional[str] = None) -> str:
    """Build a responsive srcset string, e.g. '<url> 480w, <url> 720w'."""
    return ", ".join(f"{image_url(slug, w, base)} {w}w" for w in widths)
