"""
Input data models consumed by the build phase.

Training examples are transient: they are read from the training file,
embedded and aggregated into centroids, never persisted by the router.
"""

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class TrainingExample(BaseModel):
    """
    One unit of supervision: a text and the label it should route to.
    
    The set of valid labels is whatever the training set contains; there is
    no closed taxonomy.
    """
    model_config = ConfigDict(frozen=True)
    
    text: str = Field(..., min_length=1, description="Example text (e.g. e-mail body)")
    label: str = Field(..., min_length=1, description="Routing label for this example")


training_examples_adapter = TypeAdapter(list[TrainingExample])
