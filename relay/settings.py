from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Relay configuration loaded from environment variables (.env optional)."""

    # HTTP server
    HOST: str = Field("0.0.0.0", description="Bind address for uvicorn")
    PORT: int = Field(8080, description="HTTP port for the relay server")
    LOG_LEVEL: str = Field("INFO", description="Level of the stderr Loguru sink")
    LOG_DIR: str = Field("logs", description="Directory for rotating log files; empty disables file sinks")

    # Gemini
    # No default on purpose: the startup hook refuses to run without a key.
    GEMINI_API_KEY: str | None = Field(None, description="Credential for the Gemini API")
    GEMINI_MODEL: str = Field("gemini-2.5-flash", description="Model identifier passed to generate_content")
    REQUEST_TIMEOUT: float = Field(120.0, gt=0, description="Upper bound in seconds for one upstream call")
    DISCONNECT_POLL_INTERVAL: float = Field(
        0.5, gt=0, description="Seconds between checks for a disconnected HTTP client"
    )

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }


settings = Settings()
