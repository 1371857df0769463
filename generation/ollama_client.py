from __future__ import annotations

from typing import Any, Sequence

import ollama

from common.exceptions import GenerationError
from sessions.models import Role, Turn

from .models import GenerationOptions

_OLLAMA_ROLES = {Role.USER: "user", Role.MODEL: "assistant"}


def build_messages(
    system_prompt: str,
    history: Sequence[Turn],
    new_message: str,
) -> list[dict[str, str]]:
    messages = [{"role": "system", "content": system_prompt}]
    for turn in history:
        messages.append({"role": _OLLAMA_ROLES[turn.role], "content": turn.text})
    messages.append({"role": "user", "content": new_message})
    return messages


class OllamaChatGenerator:
    """Text-completion collaborator backed by an Ollama chat model."""

    def __init__(
        self,
        model: str = "llama3.1:latest",
        base_url: str = "http://localhost:11434",
    ):
        self.model = model
        self.base_url = base_url
        self._client = ollama.AsyncClient(host=base_url)

    async def generate(
        self,
        system_prompt: str,
        history: Sequence[Turn],
        new_message: str,
        options: GenerationOptions | None = None,
    ) -> str:
        options = options or GenerationOptions()
        payload: dict[str, Any] = {
            "num_predict": options.max_output_tokens,
            "temperature": options.temperature,
            "top_p": options.top_p,
        }
        try:
            response = await self._client.chat(
                model=self.model,
                messages=build_messages(system_prompt, history, new_message),
                options=payload,
                stream=False,
            )
        except ollama.ResponseError as e:
            raise GenerationError(
                f"Ollama chat failed for model '{self.model}'", e
            ) from e
        except Exception as e:
            if "Connect" in type(e).__name__ or "refused" in str(e).lower():
                raise GenerationError(
                    f"Cannot connect to Ollama at {self.base_url}. "
                    f"Is Ollama running? Start it with: ollama serve",
                    e,
                ) from e
            raise GenerationError("Chat generation failed", e) from e

        message = response["message"]
        return (message["content"] if message else "") or ""
