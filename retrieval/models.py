from pydantic import BaseModel, Field

from vector_store.models import Chunk


class ScoredChunk(BaseModel):
    chunk: Chunk
    score: float = Field(..., ge=-1.0, le=1.0)
    rank: int = Field(..., ge=1)

    @property
    def text(self) -> str:
        return self.chunk.text
