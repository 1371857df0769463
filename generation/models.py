from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


@dataclass(frozen=True)
class GenerationOptions:
    max_output_tokens: int = 800
    temperature: float = 0.7
    top_p: float = 0.9


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    session_id: Optional[str] = Field(None, alias="sessionId")
    prompt: Optional[str] = None


class ChatResponse(BaseModel):
    response: str


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str = "ok"
    chunks: int = 0
    sessions: int = 0
