"""
Exceptions raised by the routing core.

Every error is terminal for the build or classify call that raised it:
there is no partial result and no degraded mode. Transports map these to
their own error surfaces (HTTP status codes, CLI exit codes).
"""

from typing import Any


class RouterError(Exception):
    """
    Base exception for all routing-core errors.
    """
    
    def __init__(self, message: str, details: dict[str, Any] | None = None):
        """
        Initialize router error.
        
        Args:
            message: Human-readable error description
            details: Structured error data for logging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}
    
    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class EmptyInputError(RouterError):
    """
    Raised when a build is requested with zero training examples.
    """
    
    def __init__(self, message: str = "No training examples provided"):
        super().__init__(message)


class CentroidsUnavailableError(RouterError):
    """
    Raised when classification is requested but no centroid table exists.
    
    A build has to run before anything can be classified.
    """
    
    def __init__(self, message: str = "Centroids not found. Run the build command first"):
        super().__init__(message)


class InvalidRequestError(RouterError):
    """
    Raised when the text to classify is missing, empty or not a string.
    
    Detected before any embedding call is made.
    """
    
    def __init__(self, message: str = "Text is required", details: dict[str, Any] | None = None):
        super().__init__(message, details)


class DimensionMismatchError(RouterError):
    """
    Raised when vectors of different dimensions are combined.
    
    Usually means the centroid table was built with a different embedding
    model than the one currently configured.
    """
    
    def __init__(self, expected: int, actual: int):
        super().__init__(
            f"Vector dimension mismatch: expected {expected}, got {actual}",
            details={"expected": expected, "actual": actual},
        )
        self.expected = expected
        self.actual = actual


class InvalidTrainingDataError(RouterError):
    """
    Raised when the training data is not a list of {text, label} records.
    """
    pass
