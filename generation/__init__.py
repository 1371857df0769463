"""
Generation component: grounded chat turns over the retrieved corpus context.

Uses session memory and the semantic retriever to build a grounded request
for an Ollama chat model, and serves it over FastAPI (POST /chat).
"""

__version__ = "1.0.0"

from .config import ChatConfig
from .models import ChatRequest, ChatResponse, ErrorResponse, GenerationOptions
from .ollama_client import OllamaChatGenerator
from .prompts import CLARIFICATION_RESPONSE, SYSTEM_PROMPT
from .service import ConversationService

__all__ = [
    "__version__",
    "ChatConfig",
    "ChatRequest",
    "ChatResponse",
    "ErrorResponse",
    "GenerationOptions",
    "OllamaChatGenerator",
    "ConversationService",
    "CLARIFICATION_RESPONSE",
    "SYSTEM_PROMPT",
]
