"""Offline outputs: Graphviz DOT and a recorded command stream."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

from .emitter import BoardAdapter
from .models import (
    BoardRef,
    CreateBoard,
    CreateConnector,
    DependencyGraph,
    DiagramCommand,
    NodeCommand,
    command_to_dict,
)


def render_dot(graph: DependencyGraph) -> str:
    lines = ["digraph Architecture {"]
    lines.append("  rankdir=LR;")

    for name, record in graph.nodes.items():
        # \n is DOT's line break, so only the file name is escaped
        label = f"{_esc(record.file_name)}\\n{record.line_count} lines"
        lines.append(f'  "{_esc(name)}" [label="{label}"];')

    for src, dst in graph.edges:
        lines.append(f'  "{_esc(src)}" -> "{_esc(dst)}" [label="imports"];')

    lines.append("}")
    return "\n".join(lines) + "\n"


def export_dot(graph: DependencyGraph, output_file: Path) -> None:
    output_file.write_text(render_dot(graph), encoding="utf-8")


class RecordingAdapter(BoardAdapter):
    """Dry-run adapter: hands out sequential ids and keeps every command."""

    def __init__(self, view_url_prefix: str = "dry-run://boards/"):
        self.view_url_prefix = view_url_prefix
        self.commands: List[DiagramCommand] = []
        self.ids: List[str] = []
        self._counters: Dict[str, int] = {}

    def _next_id(self, prefix: str) -> str:
        self._counters[prefix] = self._counters.get(prefix, 0) + 1
        new_id = f"{prefix}-{self._counters[prefix]}"
        self.ids.append(new_id)
        return new_id

    def create_board(self, name: str, description: str) -> BoardRef:
        self.commands.append(CreateBoard(name=name, description=description))
        board_id = self._next_id("board")
        return BoardRef(board_id=board_id, view_url=f"{self.view_url_prefix}{board_id}")

    def create_node(self, board_id: str, command: NodeCommand) -> str:
        self.commands.append(command)
        return self._next_id("node")

    def create_connector(self, board_id: str, command: CreateConnector) -> str:
        self.commands.append(command)
        return self._next_id("connector")

    def to_json(self) -> str:
        return json.dumps([command_to_dict(c) for c in self.commands], indent=2, ensure_ascii=False)

    def write(self, output_file: Path) -> None:
        output_file.write_text(self.to_json() + "\n", encoding="utf-8")


def _esc(text: str) -> str:
    return text.replace("\\", "\\\\").replace('"', '\\"')
