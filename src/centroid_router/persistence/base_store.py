"""
Abstract centroid store.

The routing core only needs to load and save a whole label -> vector
table. Physical encoding is up to each implementation, as long as float
vectors survive a round trip closely enough to stay unit length.
"""

from abc import ABC, abstractmethod

from centroid_router.models.output_models import CentroidTable


class CentroidStore(ABC):
    """
    Persists and retrieves the CentroidTable.
    
    Contract:
    - load() returns the complete table saved last, or raises CentroidsNotFoundError
    - save() replaces the previous table entirely; concurrent readers see
      either the old or the new table, never a partial one
    """
    
    @abstractmethod
    def load(self) -> CentroidTable:
        """
        Load the current table.
        
        Raises:
            CentroidsNotFoundError: No table has been saved
            PersistenceError: Table exists but cannot be read
        """
        pass
    
    @abstractmethod
    def save(self, table: CentroidTable) -> None:
        """
        Replace the stored table.
        
        Raises:
            PersistenceError: Write failed
        """
        pass
    
    @abstractmethod
    def exists(self) -> bool:
        """Whether a table has been saved. Must not raise."""
        pass
    
    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
