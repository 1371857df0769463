import asyncio
import uuid

from common.logging_config import setup_logging
from retrieval.retriever import SemanticRetriever
from sessions.memory import SessionMemory
from vector_store.embedder import OllamaEmbedder
from vector_store.store import CorpusStore

from .config import ChatConfig
from .ollama_client import OllamaChatGenerator
from .service import ConversationService


def build_service(config: ChatConfig) -> ConversationService:
    store = CorpusStore.load(config.embeddings_path)
    embedder = OllamaEmbedder(model=config.embedding_model, base_url=config.ollama_base_url)
    retriever = SemanticRetriever(store, embedder, history_turns=config.history_turns)
    generator = OllamaChatGenerator(model=config.ollama_model, base_url=config.ollama_base_url)
    memory = SessionMemory(
        ttl_seconds=config.session_ttl_seconds,
        check_period_seconds=0,
    )
    return ConversationService(retriever, generator, memory, config)


async def chat_loop(service: ConversationService, session_id: str) -> None:
    while True:
        prompt = (await asyncio.to_thread(input, "\n> ")).strip()
        if not prompt:
            continue
        if prompt.lower() in {"exit", "quit"}:
            break
        print(await service.handle_turn(session_id, prompt))


def main() -> None:
    config = ChatConfig.from_env()
    setup_logging("WARNING")
    service = build_service(config)

    print("Gita Guide CLI (Ollama + Retrieval)")
    print("Type a question, or 'exit' to quit.")
    asyncio.run(chat_loop(service, uuid.uuid4().hex))


if __name__ == "__main__":
    main()
