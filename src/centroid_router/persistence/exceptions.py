"""
Persistence-layer exceptions.
"""

from centroid_router.core.exceptions import RouterError


class PersistenceError(RouterError):
    """
    Raised when the centroid table (or training data) cannot be read or written.
    """
    pass


class CentroidsNotFoundError(PersistenceError):
    """
    Raised by CentroidStore.load() when no table has been saved yet.
    """
    pass
