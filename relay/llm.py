"""Gemini client access, the generation call and response reduction."""

import asyncio
import threading
from typing import List, Optional

from google import genai
from google.genai import types
from loguru import logger

from relay.errors import GenerationError, ProviderConnectionError
from relay.settings import settings

_client: Optional[genai.Client] = None
_client_lock = threading.Lock()


def get_client() -> genai.Client:
    """Return the process-wide Gemini client, creating it on first use.

    The client holds no per-request state, so every handler shares it.
    Raises ProviderConnectionError when no key is configured or the SDK
    rejects the configuration.
    """
    global _client
    if _client is not None:
        return _client

    with _client_lock:
        if _client is None:
            if not settings.GEMINI_API_KEY:
                logger.error("GEMINI_API_KEY is not set; refusing to create the Gemini client")
                raise ProviderConnectionError(data={"reason": "GEMINI_API_KEY is not set"})
            try:
                _client = genai.Client(api_key=settings.GEMINI_API_KEY)
            except Exception as e:
                logger.error(f"Failed to create Gemini client: {e}")
                raise ProviderConnectionError(data={"reason": str(e)}) from e
            logger.info(f"Gemini client ready (model: {settings.GEMINI_MODEL})")
    return _client


def reduce_response(result: types.GenerateContentResponse) -> str:
    """Concatenate the text parts of the first candidate.

    No candidates, or a candidate without content, reduces to an empty string.
    """
    if not result.candidates:
        return ""
    content = result.candidates[0].content
    if content is None or not content.parts:
        return ""
    return "".join(part.text for part in content.parts if part.text)


async def generate_reply(parts: List[types.Part]) -> str:
    """Send *parts* as one user turn and return the reduced reply text.

    The call is bounded by ``settings.REQUEST_TIMEOUT``; cancelling the
    awaiting task cancels the upstream request as well.
    """
    client = get_client()
    contents = [types.Content(role="user", parts=parts)]

    logger.debug(f"Calling {settings.GEMINI_MODEL} with {len(parts)} part(s)")
    try:
        result = await asyncio.wait_for(
            client.aio.models.generate_content(model=settings.GEMINI_MODEL, contents=contents),
            timeout=settings.REQUEST_TIMEOUT,
        )
    except asyncio.TimeoutError:
        logger.error(f"Gemini call timed out after {settings.REQUEST_TIMEOUT}s")
        raise GenerationError(f"request timed out after {settings.REQUEST_TIMEOUT:g}s") from None
    except Exception as e:
        logger.error(f"Gemini call failed: {e}")
        raise GenerationError(str(e)) from e

    reply = reduce_response(result)
    logger.debug(f"Gemini returned {len(result.candidates or [])} candidate(s), {len(reply)} chars")
    return reply
