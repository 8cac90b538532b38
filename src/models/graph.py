"""Character relationship graph models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class GraphNode(BaseModel):
    """A character; ``type`` is protagonist, antagonist, supporting or minor."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    type: str = ""
    description: str = ""
    traits: list[str] = Field(default_factory=list)
    group: str = ""

    @field_validator("traits", mode="before")
    @classmethod
    def _null_traits(cls, value: object) -> object:
        return [] if value is None else value


class GraphEdge(BaseModel):
    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    relation: str = ""
    description: str = ""
    weight: int = 0


class GraphSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    chapter_number: int
    summary: str = ""
    nodes_count: int = 0
    edges_count: int = 0


class GraphData(BaseModel):
    model_config = ConfigDict(frozen=True)

    nodes: list[GraphNode] = Field(default_factory=list)
    edges: list[GraphEdge] = Field(default_factory=list)
    snapshots: list[GraphSnapshot] = Field(default_factory=list)

    @field_validator("nodes", "edges", "snapshots", mode="before")
    @classmethod
    def _null_lists(cls, value: object) -> object:
        return [] if value is None else value

    def neighbours(self, node_id: str) -> list[str]:
        """Return ids of nodes sharing an edge with *node_id*."""
        found: list[str] = []
        for edge in self.edges:
            if edge.source == node_id and edge.target not in found:
                found.append(edge.target)
            elif edge.target == node_id and edge.source not in found:
                found.append(edge.source)
        return found
