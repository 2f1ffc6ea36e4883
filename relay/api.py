import asyncio
import json
from pathlib import Path
from typing import Any, Awaitable, TypeVar

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates
from loguru import logger
from pydantic import ValidationError

from relay.errors import BadRequestError, ClientDisconnectedError
from relay.llm import generate_reply
from relay.prompt import build_prompt_parts
from relay.schemas import ChatRequest, ChatResponse, ErrorResponse
from relay.settings import settings

T = TypeVar("T")

router = APIRouter()
templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))


def parse_chat_request(body: bytes) -> ChatRequest:
    """Decode a raw request body, raising BadRequestError on anything malformed."""
    try:
        payload: Any = json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Rejecting /chat body that is not JSON: {e}")
        raise BadRequestError() from e

    if not isinstance(payload, dict):
        logger.warning(f"Rejecting /chat body of type {type(payload).__name__}")
        raise BadRequestError()

    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as e:
        logger.warning(f"Rejecting /chat body with invalid fields: {e.error_count()} error(s)")
        raise BadRequestError() from e


async def run_until_disconnect(request: Request, awaitable: Awaitable[T]) -> T:
    """Await *awaitable*, cancelling it if the HTTP client goes away first."""
    task = asyncio.ensure_future(awaitable)
    try:
        while True:
            done, _ = await asyncio.wait({task}, timeout=settings.DISCONNECT_POLL_INTERVAL)
            if done:
                return task.result()
            if await request.is_disconnected():
                logger.info("Client disconnected, cancelling upstream call")
                raise ClientDisconnectedError()
    finally:
        if not task.done():
            task.cancel()


@router.get("/", response_class=HTMLResponse)
def index(request: Request):
    return templates.TemplateResponse(request, "index.html", {"model": settings.GEMINI_MODEL})


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def chat(request: Request) -> ChatResponse:
    chat_request = parse_chat_request(await request.body())
    logger.info(
        f"Received /chat request: text_present={bool(chat_request.message)}, "
        f"image_present={bool(chat_request.image)}"
    )

    parts = build_prompt_parts(chat_request)
    if not parts:
        logger.warning("No usable text or image in /chat request; forwarding an empty prompt")

    reply = await run_until_disconnect(request, generate_reply(parts))
    return ChatResponse(response=reply)


@router.get("/health")
def health_check():
    logger.debug("Health check endpoint called.")
    return {"status": "ok"}
