"""
Output data models produced by the build and classify phases.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic.alias_generators import to_camel


UNCLASSIFIED = "unclassified"

Vector = list[float]

# label -> unit-length centroid vector. The only artifact shared between
# build and classify; always replaced wholesale.
CentroidTable = dict[str, Vector]

centroid_table_adapter = TypeAdapter(CentroidTable)


class ClassificationResult(BaseModel):
    """
    Result of classifying one text against a centroid table.
    
    Serialized with camelCase keys (bestLabel, bestScore) to match the
    public HTTP contract. best_label/best_score always describe the top
    match, even when routed is "unclassified".
    """
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )
    
    routed: str = Field(..., description='Best label, or "unclassified" below the threshold')
    best_label: str = Field(..., description="Label with the highest similarity")
    best_score: float = Field(..., description="Similarity of the best label (3 decimals)")
    similarities: dict[str, float] = Field(
        ...,
        description="Every label's similarity (3 decimals), in descending rank order"
    )
    
    @property
    def is_unclassified(self) -> bool:
        return self.routed == UNCLASSIFIED


class BuildSummary(BaseModel):
    """Summary of one centroid build, returned by the CLI and the rebuild task."""
    
    labels: list[str] = Field(..., description="Labels written, in first-seen order")
    example_count: int = Field(..., ge=1, description="Number of training examples embedded")
    dimension: int = Field(..., ge=0, description="Embedding dimension of the centroids")
    built_at: datetime = Field(default_factory=datetime.utcnow, description="Build timestamp (UTC)")
    duration_ms: int = Field(default=0, ge=0, description="Build duration in milliseconds")
