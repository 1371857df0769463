"""
Conversation Orchestrator - one grounded chat turn

handle_turn() reads the session history, retrieves the closest corpus chunks,
asks the chat model for a reply grounded in them, and writes the new user and
model turns back to session memory. Nothing is written when retrieval or
generation fails.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, Sequence

from common.exceptions import ClientInputError
from common.logging_config import get_logger
from retrieval.retriever import SemanticRetriever
from sessions.memory import SessionMemory
from sessions.models import Turn

from .config import ChatConfig
from .models import GenerationOptions
from .prompts import (
    CLARIFICATION_RESPONSE,
    CONTEXT_SEPARATOR,
    SYSTEM_PROMPT,
    USER_PROMPT_TEMPLATE,
)

logger = get_logger(__name__)


class Generator(Protocol):
    async def generate(
        self,
        system_prompt: str,
        history: Sequence[Turn],
        new_message: str,
        options: GenerationOptions | None = None,
    ) -> str: ...


def build_context(chunks: Sequence[str]) -> str:
    return CONTEXT_SEPARATOR.join(chunks)


def build_user_message(context: str, prompt: str) -> str:
    return USER_PROMPT_TEMPLATE.format(context=context, prompt=prompt)


class ConversationService:
    def __init__(
        self,
        retriever: SemanticRetriever,
        generator: Generator,
        memory: SessionMemory,
        config: Optional[ChatConfig] = None,
        log: Optional[logging.Logger] = None,
    ):
        self.config = config or ChatConfig()
        self.retriever = retriever
        self.generator = generator
        self.memory = memory
        self.options = GenerationOptions(
            max_output_tokens=self.config.max_output_tokens,
            temperature=self.config.temperature,
            top_p=self.config.top_p,
        )
        self._log = log or logger

    async def handle_turn(self, session_id: str, prompt: str) -> str:
        if not _non_empty(session_id) or not _non_empty(prompt):
            raise ClientInputError()

        history = self.memory.get(session_id)
        chunks = await self.retriever.retrieve(prompt, history, top_k=self.config.top_k)
        context = build_context(chunks)

        text = await self.generator.generate(
            SYSTEM_PROMPT,
            history,
            build_user_message(context, prompt),
            self.options,
        )
        if not text or not text.strip():
            self._log.info("Empty generation for session %s; asking for clarification", session_id)
            text = CLARIFICATION_RESPONSE

        self.memory.set(session_id, [*history, Turn.user(prompt), Turn.model(text)])
        return text


def _non_empty(value: object) -> bool:
    return isinstance(value, str) and bool(value.strip())
