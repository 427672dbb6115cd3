"""
Training data loader.

Expected file format, a JSON array of records:
[
  {"text": "Hi, my invoice is wrong ...", "label": "billing"},
  {"text": "The app crashes on login ...", "label": "support"}
]
"""

import json
from pathlib import Path

import structlog
from pydantic import ValidationError as PydanticValidationError

from centroid_router.core.exceptions import InvalidTrainingDataError
from centroid_router.models.input_models import TrainingExample, training_examples_adapter
from centroid_router.persistence.exceptions import PersistenceError


logger = structlog.get_logger(__name__)


def load_training_examples(path: str | Path) -> list[TrainingExample]:
    """
    Read labeled training examples from a JSON file.
    
    Args:
        path: Path to the training file
    
    Returns:
        Examples in file order (may be empty; the builder rejects that)
    
    Raises:
        PersistenceError: File missing or unreadable
        InvalidTrainingDataError: Not valid JSON, or records lack text/label
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except FileNotFoundError as e:
        raise PersistenceError(
            f"Training data not found: {path}",
            details={"path": str(path)}
        ) from e
    except OSError as e:
        raise PersistenceError(
            f"Failed to read training data: {e}",
            details={"path": str(path)}
        ) from e
    except json.JSONDecodeError as e:
        raise InvalidTrainingDataError(
            f"Training data is not valid JSON: {e.msg}",
            details={"path": str(path), "line": e.lineno}
        ) from e
    
    try:
        examples = training_examples_adapter.validate_python(raw)
    except PydanticValidationError as e:
        raise InvalidTrainingDataError(
            "Training data must be a list of {text, label} records",
            details={"path": str(path), "errors": e.errors(include_url=False)[:10]}
        ) from e
    
    logger.info(
        "Loaded training examples",
        path=str(path),
        examples=len(examples),
        labels=len({example.label for example in examples}),
    )
    return examples
