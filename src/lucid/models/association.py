"""Association model - directed, doubly-weighted edges between memory nodes."""

from pydantic import BaseModel, Field


class Association(BaseModel):
    """A directed edge in the association graph.

    Nodes are dense integer indices. Strengths are typically in [0, 1] but
    are not clamped: edge weighting happens upstream and whatever arrives
    here propagates arithmetically.
    """
    source: int = Field(description="Source node index")
    target: int = Field(description="Target node index")
    forward_strength: float = Field(description="Strength of source -> target")
    backward_strength: float = Field(
        description="Strength of the return path target -> source, used "
                    "only when spreading bidirectionally"
    )


class AssociationGraph(BaseModel):
    """A node count plus its edge list, as exchanged in JSON graph files."""
    num_nodes: int = Field(ge=0)
    associations: list[Association] = Field(default_factory=list)
