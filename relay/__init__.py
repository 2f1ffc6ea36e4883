"""Browser chat relay for the Gemini text/vision API."""

from .errors import BadRequestError, GenerationError, ProviderConnectionError, RelayError  # noqa: F401
from .llm import generate_reply, reduce_response  # noqa: F401
from .prompt import IMAGE_MIME_TYPE, build_prompt_parts, decode_image_data  # noqa: F401
from .schemas import ChatRequest, ChatResponse  # noqa: F401

__all__ = [
    "BadRequestError",
    "ChatRequest",
    "ChatResponse",
    "GenerationError",
    "IMAGE_MIME_TYPE",
    "ProviderConnectionError",
    "RelayError",
    "build_prompt_parts",
    "decode_image_data",
    "generate_reply",
    "reduce_response",
]
