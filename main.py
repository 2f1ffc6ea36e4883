from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from relay.api import router as relay_router
from relay.errors import RelayError
from relay.llm import get_client
from relay.logging import setup_logger
from relay.settings import settings

setup_logger()

app = FastAPI(title="gemini-relay")
app.include_router(relay_router)


@app.exception_handler(RelayError)
async def relay_error_handler(request: Request, exc: RelayError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.to_dict()}")
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


@app.on_event("startup")
async def startup_event():
    # Fail fast: a missing or rejected key stops the server here.
    get_client()
    logger.info(f"Server running on port {settings.PORT}")


def run():
    import uvicorn

    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
