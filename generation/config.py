from dataclasses import dataclass, field
import os

from dotenv import load_dotenv


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class ChatConfig:
    ollama_base_url: str = "http://localhost:11434"
    ollama_model: str = "llama3.1:latest"
    embedding_model: str = "nomic-embed-text"
    embeddings_path: str = "data/embeddings.json"
    top_k: int = 3
    history_turns: int = 4
    max_output_tokens: int = 800
    temperature: float = 0.7
    top_p: float = 0.9
    session_ttl_seconds: int = 3600
    session_check_period_seconds: int = 600
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    static_dir: str = "public"
    log_level: str = "INFO"
    log_file: str = ""

    @classmethod
    def from_env(cls, env_file: str | None = None) -> "ChatConfig":
        load_dotenv(env_file)

        def _int(name: str, default: int) -> int:
            value = os.environ.get(name)
            return int(value) if value else default

        def _float(name: str, default: float) -> float:
            value = os.environ.get(name)
            return float(value) if value else default

        cors = os.environ.get("CORS_ORIGINS")
        return cls(
            ollama_base_url=os.environ.get("OLLAMA_BASE_URL", cls.ollama_base_url),
            ollama_model=os.environ.get("OLLAMA_MODEL", cls.ollama_model),
            embedding_model=os.environ.get("OLLAMA_EMBEDDING_MODEL", cls.embedding_model),
            embeddings_path=os.environ.get("EMBEDDINGS_PATH", cls.embeddings_path),
            top_k=_int("CHAT_TOP_K", cls.top_k),
            history_turns=_int("CHAT_HISTORY_TURNS", cls.history_turns),
            max_output_tokens=_int("CHAT_MAX_OUTPUT_TOKENS", cls.max_output_tokens),
            temperature=_float("CHAT_TEMPERATURE", cls.temperature),
            top_p=_float("CHAT_TOP_P", cls.top_p),
            session_ttl_seconds=_int("SESSION_TTL_SECONDS", cls.session_ttl_seconds),
            session_check_period_seconds=_int(
                "SESSION_CHECK_PERIOD_SECONDS", cls.session_check_period_seconds
            ),
            host=os.environ.get("HOST", cls.host),
            port=_int("PORT", cls.port),
            cors_origins=_split_csv(cors) if cors else ["*"],
            static_dir=os.environ.get("STATIC_DIR", cls.static_dir),
            log_level=os.environ.get("LOG_LEVEL", cls.log_level),
            log_file=os.environ.get("LOG_FILE", cls.log_file),
        )
