"""
Shared HTTP machinery for embedding providers.

Communicates with embedding servers using httpx AsyncClient:
- Connection pooling via a persistent client
- Optional retry with exponential backoff on timeouts, network errors and 5xx
- Mapping of HTTP failures onto the EmbeddingProviderError hierarchy
"""

import asyncio
import json
import time
from typing import Any, Optional

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from centroid_router.embeddings.base_provider import BaseEmbeddingProvider
from centroid_router.embeddings.exceptions import (
    EmbeddingAuthenticationError,
    EmbeddingConnectionError,
    EmbeddingModelNotAvailableError,
    EmbeddingProviderError,
    EmbeddingRateLimitError,
    EmbeddingResponseError,
    EmbeddingTimeoutError,
)
from centroid_router.models.embedding_models import EmbeddingResponse
from centroid_router.monitoring.metrics import embedding_latency_seconds


logger = structlog.get_logger(__name__)


class HTTPEmbeddingProvider(BaseEmbeddingProvider):
    """
    Base for providers reached over HTTP.
    
    Subclasses build the payload and parse the body; this class owns the
    client, the timeout, the attempt loop and the error mapping.
    
    max_attempts=1 (the default) sends each request once and lets the first
    failure propagate.
    """
    
    def __init__(
        self,
        base_url: str,
        model: str,
        timeout: int = 30,
        max_attempts: int = 1,
        batch_size: int = 512,
        connection_limits: Optional[httpx.Limits] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP provider.
        
        Args:
            base_url: Server base URL
            model: Embedding model identifier
            timeout: Request timeout in seconds
            max_attempts: Total attempts per request (1 = no retry)
            batch_size: Maximum texts per request
            connection_limits: httpx connection pool limits
            transport: Custom httpx transport (tests use httpx.MockTransport)
        """
        super().__init__(model=model, batch_size=batch_size)
        if max_attempts < 1:
            raise ValueError("max_attempts must be >= 1")
        
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.max_attempts = max_attempts
        
        if connection_limits is None:
            connection_limits = httpx.Limits(
                max_keepalive_connections=5,
                max_connections=10,
                keepalive_expiry=30.0
            )
        
        self._client: Optional[httpx.AsyncClient] = None
        self._connection_limits = connection_limits
        self._transport = transport
        
        logger.info(
            "Initialized embedding provider",
            provider_class=self.__class__.__name__,
            base_url=self.base_url,
            model=model,
            timeout=timeout,
            max_attempts=max_attempts,
        )
    
    def _headers(self) -> dict[str, str]:
        """Extra request headers (auth etc.)."""
        return {}
    
    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                limits=self._connection_limits,
                transport=self._transport,
                headers=self._headers(),
                follow_redirects=True
            )
            logger.debug("Created new httpx AsyncClient", base_url=self.base_url)
        return self._client
    
    async def _post_json(self, path: str, payload: dict[str, Any]) -> tuple[dict[str, Any], int]:
        """
        POST a JSON payload and return the decoded body with latency in ms.
        
        Raises:
            EmbeddingTimeoutError: Request timed out on the last attempt
            EmbeddingConnectionError: Network failure on the last attempt
            EmbeddingAuthenticationError: HTTP 401/403
            EmbeddingModelNotAvailableError: HTTP 404
            EmbeddingRateLimitError: HTTP 429
            EmbeddingProviderError: Other HTTP errors
            EmbeddingResponseError: Body is not a JSON object
        """
        start_time = time.time()
        attempt = 0

        while True:
            attempt += 1
            try:
                client = await self._get_client()
                response = await client.post(path, json=payload)
                response.raise_for_status()
                data = response.json()
                if not isinstance(data, dict):
                    self._observe_failure(start_time)
                    raise EmbeddingResponseError(
                        "Embedding response is not a JSON object",
                        details={"type": type(data).__name__}
                    )

                latency_ms = int((time.time() - start_time) * 1000)
                embedding_latency_seconds.labels(
                    backend=self.backend, success="true"
                ).observe(latency_ms / 1000.0)
                return data, latency_ms
            
            except httpx.TimeoutException as e:
                logger.warning(
                    "Embedding request timeout",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    timeout=self.timeout,
                    error=str(e)
                )
                last_error = EmbeddingTimeoutError(
                    f"Request timeout after {self.timeout}s",
                    details={"attempt": attempt, "timeout": self.timeout}
                )
            
            except httpx.HTTPStatusError as e:
                status_code = e.response.status_code
                error_text = e.response.text
                
                logger.error(
                    "Embedding HTTP error",
                    status_code=status_code,
                    error_text=error_text[:500],
                    attempt=attempt
                )
                
                details = {"status": status_code, "error": error_text[:500]}
                if status_code >= 500:
                    last_error = EmbeddingProviderError(
                        f"Embedding server error: {status_code}", details=details
                    )
                else:
                    self._observe_failure(start_time)
                    if status_code in (401, 403):
                        raise EmbeddingAuthenticationError(
                            "Embedding provider rejected the credentials", details=details
                        )
                    if status_code == 404:
                        raise EmbeddingModelNotAvailableError(
                            f"Model not found: {self.model}", details={**details, "model": self.model}
                        )
                    if status_code == 429:
                        raise EmbeddingRateLimitError(
                            "Embedding provider rate limit exceeded", details=details
                        )
                    raise EmbeddingProviderError(
                        f"Embedding client error: {status_code}", details=details
                    )
            
            except httpx.TransportError as e:
                logger.warning(
                    "Embedding network error",
                    attempt=attempt,
                    max_attempts=self.max_attempts,
                    error=str(e)
                )
                last_error = EmbeddingConnectionError(
                    f"Network error: {str(e)}",
                    details={"attempt": attempt, "error_type": type(e).__name__}
                )
            
            except json.JSONDecodeError as e:
                self._observe_failure(start_time)
                logger.error("Failed to parse embedding response JSON", error=str(e))
                raise EmbeddingResponseError(
                    "Invalid JSON response from embedding provider",
                    details={"parse_error": str(e)}
                )
            
            if attempt >= self.max_attempts:
                self._observe_failure(start_time)
                raise last_error

            backoff = 2 ** attempt  # Exponential backoff: 2s, 4s, 8s
            logger.info("Retrying embedding request", backoff_seconds=backoff, attempt=attempt)
            await asyncio.sleep(backoff)

    def _embedding_response(self, **fields: Any) -> EmbeddingResponse:
        """Build an EmbeddingResponse, mapping malformed vectors onto EmbeddingResponseError."""
        try:
            return EmbeddingResponse(**fields)
        except PydanticValidationError as e:
            logger.error("Embedding response failed validation", error=str(e)[:500])
            raise EmbeddingResponseError(
                "Embedding response contains malformed vectors",
                details={"error": str(e)[:500]}
            ) from e

    def _observe_failure(self, start_time: float) -> None:
        embedding_latency_seconds.labels(
            backend=self.backend, success="false"
        ).observe(time.time() - start_time)
    
    async def _get_ok(self, path: str) -> bool:
        """GET a path and report whether it answered 2xx. Never raises."""
        try:
            client = await self._get_client()
            response = await client.get(path, timeout=5.0)
            response.raise_for_status()
            return True
        except Exception as e:
            logger.warning(
                "Embedding provider health check failed",
                provider_class=self.__class__.__name__,
                error=str(e),
            )
            return False
    
    async def close(self):
        """Close the HTTP client connection."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            logger.debug("Closed embedding provider connection", base_url=self.base_url)
    
    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"base_url={self.base_url}, "
            f"model={self.model}, "
            f"timeout={self.timeout}s)"
        )
