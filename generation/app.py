import asyncio
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from common.exceptions import ClientInputError, format_error_chain
from common.logging_config import get_logger, setup_logging
from retrieval.retriever import SemanticRetriever
from sessions.memory import SessionMemory
from vector_store.embedder import OllamaEmbedder
from vector_store.store import CorpusStore

from .config import ChatConfig
from .models import ChatRequest, ChatResponse, ErrorResponse, HealthResponse
from .ollama_client import OllamaChatGenerator
from .service import ConversationService, Generator

logger = get_logger(__name__)

INTERNAL_ERROR = "An internal server error occurred."


def create_app(
    config: Optional[ChatConfig] = None,
    store: Optional[CorpusStore] = None,
    embedder: Optional[OllamaEmbedder] = None,
    generator: Optional[Generator] = None,
    memory: Optional[SessionMemory] = None,
) -> FastAPI:
    cfg = config or ChatConfig.from_env()
    embedder = embedder or OllamaEmbedder(
        model=cfg.embedding_model,
        base_url=cfg.ollama_base_url,
    )
    generator = generator or OllamaChatGenerator(
        model=cfg.ollama_model,
        base_url=cfg.ollama_base_url,
    )
    if memory is None:
        memory = SessionMemory(
            ttl_seconds=cfg.session_ttl_seconds,
            check_period_seconds=cfg.session_check_period_seconds,
        )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(cfg.log_level, log_file=cfg.log_file or None)
        corpus = store
        if corpus is None:
            logger.info("Loading pre-computed embeddings from %s...", cfg.embeddings_path)
            try:
                corpus = await asyncio.to_thread(CorpusStore.load, cfg.embeddings_path)
            except Exception as exc:
                logger.critical(
                    "FATAL: Could not load embeddings file:\n%s", format_error_chain(exc)
                )
                raise
        retriever = SemanticRetriever(corpus, embedder, history_turns=cfg.history_turns)
        app.state.store = corpus
        app.state.memory = memory
        app.state.service = ConversationService(retriever, generator, memory, cfg)

        await memory.start()
        logger.info("%d chunks ready. Accepting requests.", len(corpus))
        try:
            yield
        finally:
            await memory.stop()

    app = FastAPI(
        title="Gita Guide",
        version="1.0.0",
        description="Retrieval-augmented chat grounded in a single document.",
        lifespan=lifespan,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def invalid_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=ClientInputError().message).model_dump(),
        )

    @app.get("/health", response_model=HealthResponse)
    def health(request: Request) -> HealthResponse:
        return HealthResponse(
            chunks=len(request.app.state.store),
            sessions=len(request.app.state.memory),
        )

    @app.post("/chat", response_model=ChatResponse, responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}})
    async def chat(payload: ChatRequest, request: Request):
        service: ConversationService = request.app.state.service
        try:
            text = await service.handle_turn(payload.session_id, payload.prompt)
        except ClientInputError as exc:
            return JSONResponse(
                status_code=400,
                content=ErrorResponse(error=exc.message).model_dump(),
            )
        except Exception:
            logger.exception("Error in /chat endpoint")
            return JSONResponse(
                status_code=500,
                content=ErrorResponse(error=INTERNAL_ERROR).model_dump(),
            )
        return ChatResponse(response=text)

    static_dir = Path(cfg.static_dir) if cfg.static_dir else None
    if static_dir is not None and static_dir.is_dir():
        app.mount("/", StaticFiles(directory=str(static_dir), html=True), name="static")

    return app


app = create_app()
