"""Id correspondence between domain graph elements and rendered SVG elements."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class BiMap:
    """Two-way map between visual ids and domain ids."""

    to_domain: dict[str, str] = field(default_factory=dict)  # visual id -> domain id
    to_visual: dict[str, str] = field(default_factory=dict)  # domain id -> visual id

    def put(self, visual_id: str, domain_id: str) -> None:
        self.to_domain[visual_id] = domain_id
        self.to_visual[domain_id] = visual_id

    def domain_id(self, visual_id: str) -> str | None:
        return self.to_domain.get(visual_id)

    def visual_id(self, domain_id: str) -> str | None:
        return self.to_visual.get(domain_id)

    def visual_ids(self) -> list[str]:
        return list(self.to_domain)

    def __contains__(self, domain_id: object) -> bool:
        return domain_id in self.to_visual

    def __len__(self) -> int:
        return len(self.to_domain)


@dataclass
class Correspondence:
    """Node and edge id maps for one render cycle.

    Built by the serializer and replaced as a whole on the next render.
    """

    nodes: BiMap = field(default_factory=BiMap)
    edges: BiMap = field(default_factory=BiMap)

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Visual id -> domain id maps, as embedded in HTML exports."""
        return {"nodes": dict(self.nodes.to_domain), "edges": dict(self.edges.to_domain)}

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges
