"""
media_service.py — Post image handling
Canonical image lists on the write path, tolerant parsing on the read path,
and a stub upload that hands back a placeholder URL without storing bytes.
"""

import json
import logging
import uuid

from config import PLACEHOLDER_IMAGE_HOST
from errors import ValidationError

logger = logging.getLogger(__name__)


def upload_image(image: str) -> str:
    """Accept a data:image URI and return the URL it would be served from."""
    if not isinstance(image, str) or not image.startswith("data:image"):
        raise ValidationError("Invalid image format")
    return f"{PLACEHOLDER_IMAGE_HOST}/{uuid.uuid4().hex}.jpg"


def normalize_images(value) -> list[str]:
    """Coerce incoming images to an ordered list of strings, or reject the shape."""
    if value is None:
        return []
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, (list, tuple)):
        raise ValidationError("Images must be a list of strings")

    images = []
    for item in value:
        if not isinstance(item, str):
            raise ValidationError("Images must be a list of strings")
        item = item.strip()
        if item:
            images.append(item)
    return images


def prepare_images(value) -> list[str]:
    """Normalize, then upload data URIs and keep existing http(s) URLs."""
    prepared = []
    for image in normalize_images(value):
        if image.startswith("data:image"):
            prepared.append(upload_image(image))
        elif image.startswith(("http://", "https://")):
            prepared.append(image)
        else:
            raise ValidationError("Images must be data:image URIs or http(s) URLs")
    return prepared


def serialize_images(images: list[str]) -> str | None:
    return json.dumps(images) if images else None


def parse_images(raw) -> list[str]:
    """Read whatever is stored and always return a list. Never raises."""
    if raw is None:
        return []
    if isinstance(raw, (list, tuple)):
        return [i for i in raw if isinstance(i, str) and i]
    if not isinstance(raw, str) or not raw.strip():
        return []

    try:
        decoded = json.loads(raw)
    except (ValueError, TypeError):
        # A bare URL stored without JSON encoding
        if raw.startswith(("http://", "https://", "/", "data:image")):
            return [raw]
        logger.warning("Discarding malformed images value")
        return []

    if isinstance(decoded, str):
        return [decoded] if decoded else []
    if isinstance(decoded, list):
        return [i for i in decoded if isinstance(i, str) and i]
    return []
