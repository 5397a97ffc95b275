"""Admin media uploads: base64 data URLs in, public storage URLs out."""

import base64
import binascii
import io
import logging
import mimetypes
import re
import uuid
from dataclasses import dataclass

from django.conf import settings
from django.core.files.base import ContentFile
from django.core.files.storage import default_storage
from django.utils.text import get_valid_filename
from PIL import Image, UnidentifiedImageError
from rest_framework.exceptions import ValidationError

logger = logging.getLogger(__name__)

VIDEO_TYPES = {"video/mp4", "video/webm", "video/quicktime", "video/ogg"}
_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(?:;[\w=-]+)*;base64,(?P<payload>.*)$", re.DOTALL)


@dataclass(frozen=True)
class StoredMedia:
    url: str
    media_type: str
    name: str


def decode_data_url(value: str, filename: str) -> tuple[bytes, str]:
    """Split a ``data:<mime>;base64,...`` string (or bare base64) into bytes and a mime type."""
    match = _DATA_URL.match(value.strip())
    payload = match.group("payload") if match else value
    mime = (match.group("mime") if match else None) or mimetypes.guess_type(filename)[0] or ""
    try:
        raw = base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise ValidationError({"media": "Payload is not valid base64."}) from exc
    if not raw:
        raise ValidationError({"media": "Payload is empty."})
    return raw, mime


def _verify_image(raw: bytes) -> str:
    try:
        with Image.open(io.BytesIO(raw)) as img:
            fmt = img.format
            img.verify()
    except (UnidentifiedImageError, OSError, SyntaxError) as exc:
        raise ValidationError({"image": "File is not a readable image."}) from exc
    return Image.MIME.get(fmt, "image/" + (fmt or "png").lower())


def _storage_name(filename: str) -> str:
    safe = get_valid_filename(filename.rsplit("/", 1)[-1]) or "upload"
    return f"projects/{uuid.uuid4().hex[:12]}-{safe}"


def _store(raw: bytes, filename: str, content_type: str) -> str:
    content = ContentFile(raw)
    content.content_type = content_type
    name = default_storage.save(_storage_name(filename), content)
    logger.info("Stored upload %s (%s, %d bytes)", name, content_type, len(raw))
    return name


def store_image(data: str, filename: str) -> StoredMedia:
    raw, _ = decode_data_url(data, filename)
    if len(raw) > settings.MAX_IMAGE_UPLOAD_BYTES:
        raise ValidationError({"image": "Image is too large."})
    mime = _verify_image(raw)
    name = _store(raw, filename, mime)
    return StoredMedia(url=default_storage.url(name), media_type="image", name=name)


def store_media(data: str, filename: str) -> StoredMedia:
    """Store an image or a short video clip, detecting which from the mime type."""
    raw, mime = decode_data_url(data, filename)
    if mime in VIDEO_TYPES:
        if len(raw) > settings.MAX_VIDEO_UPLOAD_BYTES:
            raise ValidationError({"media": "Video is too large."})
        name = _store(raw, filename, mime)
        return StoredMedia(url=default_storage.url(name), media_type="video", name=name)
    if mime and not mime.startswith("image/"):
        raise ValidationError({"media": f"Unsupported media type '{mime}'."})
    return store_image(data, filename)
