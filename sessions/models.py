from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Role(str, Enum):
    USER = "user"
    MODEL = "model"


class Turn(BaseModel):
    """One message of a conversation."""
    model_config = ConfigDict(frozen=True)

    role: Role = Field(..., description="Who produced the message")
    text: str = Field("", description="Message text")

    @classmethod
    def user(cls, text: str) -> "Turn":
        return cls(role=Role.USER, text=text)

    @classmethod
    def model(cls, text: str) -> "Turn":
        return cls(role=Role.MODEL, text=text)
