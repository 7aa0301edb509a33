# src/store/assets.py - v1
"""Image to asset conversion for avatars and banners.

Requires 'Pillow': images are re-encoded as JPEG before upload so that
every stored avatar has the same format regardless of what was picked.
"""

from __future__ import annotations

import io
import logging

from PIL import Image, UnidentifiedImageError

from jurados.core.models import Asset

logger = logging.getLogger(__name__)

DEFAULT_JPEG_QUALITY = 80


def image_to_asset(image_bytes: bytes, quality: int = DEFAULT_JPEG_QUALITY) -> Asset | None:
    """Re-encode image bytes as a JPEG asset.

    Returns:
        The JPEG asset, or None if the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            buffer = io.BytesIO()
            img.convert("RGB").save(buffer, format="JPEG", quality=quality)
    except (UnidentifiedImageError, OSError, ValueError) as e:
        logger.warning("Cannot convert image to asset: %s", e)
        return None
    return Asset(data=buffer.getvalue(), content_type="image/jpeg")


def asset_bytes(asset: Asset | None) -> bytes | None:
    """Raw bytes of an asset, or None when there is no asset."""
    if asset is None or not asset.data:
        return None
    return asset.data
