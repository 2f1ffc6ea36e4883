"""Translate an inbound chat payload into Gemini prompt parts."""

import base64
import binascii
from typing import List, Optional

from google.genai import types
from loguru import logger

from relay.schemas import ChatRequest

# Every image is labelled PNG; Gemini accepts JPEG/WEBP bytes under this hint.
IMAGE_MIME_TYPE = "image/png"


def strip_data_url_header(image: str) -> str:
    """Return the payload of a data-URL, or *image* unchanged if it has no comma."""
    _, sep, payload = image.partition(",")
    return payload if sep else image


def decode_image_data(image: str) -> Optional[bytes]:
    """Decode a data-URL or bare base64 string.

    Returns ``None`` instead of raising when the payload is not valid standard
    base64; callers drop the image in that case. CR and LF are skipped, so
    line-wrapped payloads decode.
    """
    payload = strip_data_url_header(image).replace("\r", "").replace("\n", "")
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        logger.warning(f"Dropping undecodable image payload ({len(payload)} chars): {e}")
        return None


def build_prompt_parts(request: ChatRequest) -> List[types.Part]:
    """Assemble the text part (if any) followed by the image part (if any)."""
    parts: List[types.Part] = []

    if request.message:
        parts.append(types.Part(text=request.message))

    if request.image:
        image_bytes = decode_image_data(request.image)
        if image_bytes is not None:
            parts.append(
                types.Part(
                    inline_data=types.Blob(mime_type=IMAGE_MIME_TYPE, data=image_bytes)
                )
            )

    return parts
