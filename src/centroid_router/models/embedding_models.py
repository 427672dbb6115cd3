"""
Embedding-provider data models.

Internal to the embeddings layer: they carry the raw vectors plus the
metadata used for logging and metrics. The core only sees the vectors.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EmbeddingResponse(BaseModel):
    """
    Vectors returned by one provider request, in input order.
    """
    model_config = ConfigDict(frozen=True)
    
    vectors: list[list[float]] = Field(..., description="One vector per input text, same order")
    model: str = Field(..., description="Model that produced the vectors")
    prompt_tokens: Optional[int] = Field(default=None, description="Tokens billed for the input")
    latency_ms: int = Field(default=0, ge=0, description="Request latency in milliseconds")
