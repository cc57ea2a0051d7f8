"""Pipeline orchestrator: scan -> extract -> assemble -> layout -> emit."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Optional, Union

from .config import DEFAULT_SPACING
from .emitter import BoardAdapter, DiagramEmitter, DiagramStyle
from .graph import build_graph
from .layout import get_layout
from .models import DependencyGraph, DiagramResult, LayoutPosition
from .parser import ModuleParser, RegexModuleParser
from .scanner import load_modules

logger = logging.getLogger(__name__)


class ArchitectureOrchestrator:
    """Runs one diagram generation against a board adapter."""

    def __init__(
        self,
        adapter: Optional[BoardAdapter] = None,
        parser: Optional[ModuleParser] = None,
        style: Optional[DiagramStyle] = None,
        layout: str = "horizontal",
        spacing: float = DEFAULT_SPACING,
    ):
        self.adapter = adapter
        self.parser = parser or RegexModuleParser()
        self.style = style or DiagramStyle()
        self.layout_name = layout
        self.spacing = spacing

    def analyze(self, source_dir: Union[str, Path]) -> DependencyGraph:
        records = load_modules(source_dir, self.parser)
        graph = build_graph(records)
        logger.info(
            "Found %d modules, %d edges (%d references dropped)",
            len(graph.nodes), len(graph.edges), len(graph.dropped_references),
        )
        return graph

    def layout(self, graph: DependencyGraph) -> Dict[str, LayoutPosition]:
        engine = get_layout(self.layout_name, spacing=self.spacing, edges=graph.edges)
        return engine.arrange(graph.module_names())

    def publish(
        self,
        graph: DependencyGraph,
        title: str,
        link_url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> DiagramResult:
        if self.adapter is None:
            raise ValueError("publish() needs a board adapter")
        emitter = DiagramEmitter(self.adapter, self.style)
        return emitter.emit(graph, self.layout(graph), title, link_url, description)

    def run(
        self,
        source_dir: Union[str, Path],
        title: str,
        link_url: Optional[str] = None,
    ) -> DiagramResult:
        # Scanning errors surface here, before any remote call.
        graph = self.analyze(source_dir)
        return self.publish(graph, title, link_url)
