"""
JSON-file centroid store.

File format (pretty-printed so rebuilds can be diffed):
{
  "billing": [0.0123, -0.0456, ...],
  "support": [...]
}
"""

import json
import os
import tempfile
from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

from centroid_router.models.output_models import CentroidTable, centroid_table_adapter
from centroid_router.persistence.base_store import CentroidStore
from centroid_router.persistence.exceptions import CentroidsNotFoundError, PersistenceError


logger = structlog.get_logger(__name__)


class FileCentroidStore(CentroidStore):
    """
    Stores the table as a JSON object in a single file.
    
    save() writes a temporary file next to the target and renames it over
    the target, so readers never observe a half-written table.
    """
    
    def __init__(self, path: str | Path):
        self.path = Path(path)
    
    def load(self) -> CentroidTable:
        if not self.path.exists():
            raise CentroidsNotFoundError(
                f"Centroid file not found: {self.path}",
                details={"path": str(self.path)}
            )
        
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            table = centroid_table_adapter.validate_python(raw)
        except OSError as e:
            raise PersistenceError(
                f"Failed to read centroid file: {e}",
                details={"path": str(self.path)}
            ) from e
        except (json.JSONDecodeError, PydanticValidationError) as e:
            raise PersistenceError(
                "Centroid file is not a JSON object of label -> number array",
                details={"path": str(self.path), "error": str(e)[:500]}
            ) from e
        
        logger.debug("Loaded centroids", path=str(self.path), labels=len(table))
        return table
    
    def save(self, table: CentroidTable) -> None:
        directory = self.path.parent
        tmp_path = None
        replaced = False
        try:
            directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(table, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
            replaced = True
        except OSError as e:
            raise PersistenceError(
                f"Failed to write centroid file: {e}",
                details={"path": str(self.path)}
            ) from e
        except (TypeError, ValueError) as e:
            raise PersistenceError(
                f"Centroid table is not JSON serializable: {e}",
                details={"path": str(self.path)}
            ) from e
        finally:
            if not replaced and tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)
        
        logger.info("Saved centroids", path=str(self.path), labels=list(table))
    
    def exists(self) -> bool:
        return self.path.is_file()
    
    def __repr__(self) -> str:
        return f"FileCentroidStore(path={self.path})"
