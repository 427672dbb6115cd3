"""
In-process centroid store.
"""

import copy
from typing import Optional

from centroid_router.models.output_models import CentroidTable
from centroid_router.persistence.base_store import CentroidStore
from centroid_router.persistence.exceptions import CentroidsNotFoundError


class InMemoryCentroidStore(CentroidStore):
    """
    Keeps the table in memory. Used by tests and single-process embedding.
    
    Tables are copied on the way in and out, so callers can never mutate
    the stored table in place.
    """
    
    def __init__(self, table: Optional[CentroidTable] = None):
        self._table = copy.deepcopy(table) if table is not None else None
    
    def load(self) -> CentroidTable:
        if self._table is None:
            raise CentroidsNotFoundError("No centroids saved in memory")
        return copy.deepcopy(self._table)
    
    def save(self, table: CentroidTable) -> None:
        self._table = copy.deepcopy(table)
    
    def exists(self) -> bool:
        return self._table is not None
