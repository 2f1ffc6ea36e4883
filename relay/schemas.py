from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr


class ChatRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: Optional[StrictStr] = Field(None, description="User text input")
    image: Optional[StrictStr] = Field(
        None, description="Image as a data-URL (data:<mime>;base64,<payload>) or bare base64"
    )


class ChatResponse(BaseModel):
    response: str = Field(..., description="Concatenated text of the first candidate")


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Human readable failure reason")
