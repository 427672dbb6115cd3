"""
Custom exceptions for the embedding provider layer.

The routing core never catches these: any embedding failure propagates
unmodified to the transport, which maps the subclass to a response.
"""


class EmbeddingProviderError(Exception):
    """
    Base exception for all embedding provider errors.
    
    All provider-specific exceptions inherit from this to allow catching
    any embedding failure with a single except clause.
    """
    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmbeddingConnectionError(EmbeddingProviderError):
    """
    Raised when the embedding server cannot be reached.
    
    Network errors, DNS failures, refused connections.
    """
    pass


class EmbeddingTimeoutError(EmbeddingConnectionError):
    """
    Raised when an embedding request exceeds the configured timeout.
    """
    pass


class EmbeddingAuthenticationError(EmbeddingProviderError):
    """
    Raised when the provider rejects the credentials (HTTP 401/403),
    or when no API key is configured at all.
    """
    pass


class EmbeddingRateLimitError(EmbeddingProviderError):
    """
    Raised when the provider rate-limits the request (HTTP 429).
    """
    pass


class EmbeddingModelNotAvailableError(EmbeddingProviderError):
    """
    Raised when the configured embedding model does not exist on the server.
    """
    pass


class EmbeddingResponseError(EmbeddingProviderError):
    """
    Raised when the provider answers with an unusable body.
    
    Covers malformed JSON, missing fields and, most importantly, responses
    whose vectors cannot be aligned one-to-one with the input texts.
    """
    pass
