"""Diagram emission: graph + layout -> ordered board commands.

A run goes board, title (and link), module nodes with their export
annotations, then connectors. Connectors are only issued once every module
node has been created and its identifier captured, since they reference
those identifiers.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from .models import (
    BoardRef,
    CreateAnnotationNode,
    CreateBoard,
    CreateConnector,
    CreateLinkNode,
    CreateModuleNode,
    CreateTitleNode,
    DependencyGraph,
    DiagramCommand,
    DiagramResult,
    LayoutPosition,
    NodeCommand,
)

logger = logging.getLogger(__name__)

DEFAULT_PALETTE: Dict[str, str] = {
    "server": "#a6ccf5",   # entry point
    "auth": "#f16c7f",     # security
    "routes": "#93d275",   # routing
}
DEFAULT_COLOR = "#fff9b1"


class BoardAdapter(ABC):
    """Translates abstract diagram commands into calls on a concrete board service."""

    @abstractmethod
    def create_board(self, name: str, description: str) -> BoardRef:
        ...

    @abstractmethod
    def create_node(self, board_id: str, command: NodeCommand) -> str:
        ...

    @abstractmethod
    def create_connector(self, board_id: str, command: CreateConnector) -> str:
        ...


@dataclass
class DiagramStyle:
    palette: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_PALETTE))
    default_color: str = DEFAULT_COLOR
    node_width: float = 220
    node_height: float = 60
    title_y: float = -250
    link_y: float = -180
    annotation_offset: float = 90
    annotation_base_height: float = 30
    annotation_line_height: float = 22

    def color_for(self, module_name: str) -> str:
        return self.palette.get(module_name, self.default_color)

    @classmethod
    def with_overrides(cls, overrides: Optional[Mapping[str, str]] = None) -> "DiagramStyle":
        style = cls()
        style.palette.update(overrides or {})
        return style


def board_description(link_url: Optional[str] = None) -> str:
    text = "Auto-generated architecture diagram"
    return f"{text} for {link_url}" if link_url else text


class DiagramEmitter:
    """Replays diagram commands against a ``BoardAdapter``, one at a time."""

    def __init__(self, adapter: BoardAdapter, style: Optional[DiagramStyle] = None):
        self.adapter = adapter
        self.style = style or DiagramStyle()

    # ------------------------------------------------------------------
    # Command construction
    # ------------------------------------------------------------------

    def title_node(self, title: str) -> CreateTitleNode:
        return CreateTitleNode(
            content=f"<strong>{title}</strong>",
            style={
                "fillColor": "#1a1a1a",
                "color": "#ffffff",
                "fontSize": "24",
                "textAlign": "center",
                "textAlignVertical": "middle",
                "borderOpacity": "0",
            },
            x=0,
            y=self.style.title_y,
            width=500,
            height=70,
        )

    def link_node(self, url: str) -> CreateLinkNode:
        return CreateLinkNode(
            content=f'<a href="{url}">View Pull Request on GitHub</a>',
            style={
                "fillColor": "#f5f6f8",
                "fontSize": "14",
                "textAlign": "center",
                "textAlignVertical": "middle",
                "borderOpacity": "0",
            },
            x=0,
            y=self.style.link_y,
            width=500,
            height=40,
            url=url,
        )

    def module_node(self, file_name: str, module_name: str, position: LayoutPosition) -> CreateModuleNode:
        return CreateModuleNode(
            content=f"<strong>{file_name}</strong>",
            style={
                "fillColor": self.style.color_for(module_name),
                "fontSize": "18",
                "textAlign": "center",
                "textAlignVertical": "middle",
                "borderColor": "#1a1a1a",
                "borderWidth": "2",
                "borderOpacity": "1",
            },
            x=position.x,
            y=position.y,
            width=self.style.node_width,
            height=self.style.node_height,
            module_name=module_name,
        )

    def annotation_node(self, module_name: str, symbols, position: LayoutPosition) -> CreateAnnotationNode:
        symbols = tuple(symbols)
        bullets = "\n".join(f"• {symbol}" for symbol in symbols)
        return CreateAnnotationNode(
            content=f"<strong>Exports:</strong>\n{bullets}",
            style={
                "fillColor": "#f5f6f8",
                "fontSize": "12",
                "textAlign": "left",
                "textAlignVertical": "top",
                "borderColor": self.style.color_for(module_name),
                "borderWidth": "1",
                "borderOpacity": "1",
            },
            x=position.x,
            y=position.y + self.style.annotation_offset,
            width=self.style.node_width,
            height=self.style.annotation_base_height + len(symbols) * self.style.annotation_line_height,
            module_name=module_name,
            symbols=symbols,
        )

    def connector(self, from_id: str, to_id: str, from_module: str = "", to_module: str = "") -> CreateConnector:
        return CreateConnector(
            from_node_id=from_id,
            to_node_id=to_id,
            style={
                "strokeColor": "#1a1a1a",
                "strokeWidth": "2",
                "endStrokeCap": "stealth",
                "startStrokeCap": "none",
                "fontSize": "12",
            },
            caption="imports",
            from_module=from_module,
            to_module=to_module,
        )

    def plan(
        self,
        graph: DependencyGraph,
        positions: Mapping[str, LayoutPosition],
        title: str,
        link_url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> List[DiagramCommand]:
        """Every command up to the connector phase, without dispatching.

        Connectors need identifiers issued by the adapter, so they are not
        part of the plan.
        """
        commands: List[DiagramCommand] = [
            CreateBoard(name=title, description=description or board_description(link_url)),
            self.title_node(title),
        ]
        if link_url:
            commands.append(self.link_node(link_url))

        for name, position in positions.items():
            record = graph.nodes.get(name)
            if record is None:
                logger.debug("Position for unknown module '%s' ignored", name)
                continue
            commands.append(self.module_node(record.file_name, name, position))
            if record.exported_symbols:
                commands.append(self.annotation_node(name, record.exported_symbols, position))
        return commands

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def emit(
        self,
        graph: DependencyGraph,
        positions: Mapping[str, LayoutPosition],
        title: str,
        link_url: Optional[str] = None,
        description: Optional[str] = None,
    ) -> DiagramResult:
        """Create the full diagram through the adapter.

        Adapter errors propagate unchanged; nothing already created is
        rolled back.
        """
        planned = self.plan(graph, positions, title, link_url, description)
        board_cmd, node_cmds = planned[0], planned[1:]

        board = self.adapter.create_board(board_cmd.name, board_cmd.description)
        logger.info("Board created: %s", board.view_url)
        result = DiagramResult(board=board, commands=[board_cmd])

        for command in node_cmds:
            node_id = self.adapter.create_node(board.board_id, command)
            result.commands.append(command)
            if isinstance(command, CreateModuleNode):
                result.node_ids[command.module_name] = node_id

        # Barrier: every module node exists before the first connector.
        node_ids = dict(result.node_ids)

        for src, dst in graph.edges:
            if src not in node_ids or dst not in node_ids:
                logger.debug("Skipping connector %s -> %s: endpoint not created", src, dst)
                result.skipped_edges.append((src, dst))
                continue
            command = self.connector(node_ids[src], node_ids[dst], src, dst)
            result.connector_ids.append(self.adapter.create_connector(board.board_id, command))
            result.commands.append(command)

        return result
