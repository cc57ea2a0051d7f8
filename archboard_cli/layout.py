"""Layout policies: ordered module names in, positions out."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Sequence, Set, Tuple

from .config import DEFAULT_SPACING
from .models import LayoutPosition


def _centered_row(count: int, spacing: float) -> List[float]:
    start = -((count - 1) * spacing) / 2
    return [start + i * spacing for i in range(count)]


class LayoutEngine(ABC):
    """Assigns a 2-D position to every node."""

    @abstractmethod
    def arrange(self, names: Sequence[str]) -> Dict[str, LayoutPosition]:
        ...


class HorizontalLayout(LayoutEngine):
    """Single row centered on the origin, fixed spacing."""

    def __init__(self, spacing: float = DEFAULT_SPACING):
        self.spacing = spacing

    def arrange(self, names: Sequence[str]) -> Dict[str, LayoutPosition]:
        xs = _centered_row(len(names), self.spacing)
        return {name: LayoutPosition(name, x, 0) for name, x in zip(names, xs)}


class LayeredLayout(LayoutEngine):
    """Rows by dependency depth; modules nothing depends on sit on top.

    Depth is the longest import chain starting at a module, with cycles cut
    at the first revisit. Each row is centered like ``HorizontalLayout``.
    """

    def __init__(
        self,
        edges: Sequence[Tuple[str, str]] = (),
        spacing: float = DEFAULT_SPACING,
        layer_gap: float = 250,
    ):
        self.edges = list(edges)
        self.spacing = spacing
        self.layer_gap = layer_gap

    def arrange(self, names: Sequence[str]) -> Dict[str, LayoutPosition]:
        known = set(names)
        targets: Dict[str, List[str]] = {name: [] for name in names}
        for src, dst in self.edges:
            if src in known and dst in known and src != dst:
                targets[src].append(dst)

        heights: Dict[str, int] = {}

        def height(name: str, visiting: Set[str]) -> int:
            if name in heights:
                return heights[name]
            visiting.add(name)
            best = 0
            for dst in targets[name]:
                if dst in visiting:
                    continue
                best = max(best, height(dst, visiting) + 1)
            visiting.discard(name)
            heights[name] = best
            return best

        for name in names:
            height(name, set())

        # Deepest chains on top, leaves at the bottom.
        top = max(heights.values(), default=0)
        rows: Dict[int, List[str]] = {}
        for name in names:
            rows.setdefault(top - heights[name], []).append(name)

        positions: Dict[str, LayoutPosition] = {}
        for row, members in rows.items():
            y = row * self.layer_gap
            for name, x in zip(members, _centered_row(len(members), self.spacing)):
                positions[name] = LayoutPosition(name, x, y)
        return {name: positions[name] for name in names}


LAYOUTS = ("horizontal", "layered")


def get_layout(
    name: str = "horizontal",
    spacing: float = DEFAULT_SPACING,
    edges: Optional[Sequence[Tuple[str, str]]] = None,
) -> LayoutEngine:
    """Return the layout policy registered under *name*."""
    if name == "horizontal":
        return HorizontalLayout(spacing)
    if name == "layered":
        return LayeredLayout(edges or (), spacing=spacing)
    raise ValueError(f"Unknown layout '{name}'. Choose from: {', '.join(LAYOUTS)}")
