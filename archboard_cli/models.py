"""Core data models shared by scanning, layout, and diagram emission."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, ClassVar, Dict, List, Optional, Tuple, Union


@dataclass(frozen=True)
class ModuleRecord:
    file_name: str
    module_name: str
    imported_names: Tuple[str, ...] = ()
    exported_symbols: Tuple[str, ...] = ()
    line_count: int = 0


@dataclass(frozen=True)
class DroppedReference:
    """An import whose target is not among the scanned modules."""

    source: str
    target: str


@dataclass
class DependencyGraph:
    # Insertion order is scan order.
    nodes: Dict[str, ModuleRecord] = field(default_factory=dict)
    edges: List[Tuple[str, str]] = field(default_factory=list)
    dropped_references: List[DroppedReference] = field(default_factory=list)
    # Later files whose module name was already taken; their imports are ignored.
    shadowed_records: List[ModuleRecord] = field(default_factory=list)

    def module_names(self) -> List[str]:
        return list(self.nodes)

    def outgoing(self, name: str) -> List[str]:
        return [dst for src, dst in self.edges if src == name]

    def incoming(self, name: str) -> List[str]:
        return [src for src, dst in self.edges if dst == name]


@dataclass(frozen=True)
class LayoutPosition:
    module_name: str
    x: float
    y: float


@dataclass(frozen=True)
class BoardRef:
    board_id: str
    view_url: str


# ---------------------------------------------------------------------------
# Diagram commands
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CreateBoard:
    kind: ClassVar[str] = "create_board"
    name: str
    description: str


@dataclass(frozen=True)
class NodeCommand:
    """Fields shared by every shape placed on the board."""

    kind: ClassVar[str] = "create_node"
    content: str
    style: Dict[str, str]
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class CreateTitleNode(NodeCommand):
    kind: ClassVar[str] = "create_title_node"


@dataclass(frozen=True)
class CreateLinkNode(NodeCommand):
    kind: ClassVar[str] = "create_link_node"
    url: str = ""


@dataclass(frozen=True)
class CreateModuleNode(NodeCommand):
    kind: ClassVar[str] = "create_module_node"
    module_name: str = ""


@dataclass(frozen=True)
class CreateAnnotationNode(NodeCommand):
    kind: ClassVar[str] = "create_annotation_node"
    module_name: str = ""
    symbols: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CreateConnector:
    kind: ClassVar[str] = "create_connector"
    from_node_id: str
    to_node_id: str
    style: Dict[str, str]
    caption: str = ""
    shape: str = "curved"
    from_module: str = ""
    to_module: str = ""


DiagramCommand = Union[
    CreateBoard,
    CreateTitleNode,
    CreateLinkNode,
    CreateModuleNode,
    CreateAnnotationNode,
    CreateConnector,
]


def command_to_dict(command: DiagramCommand) -> Dict[str, Any]:
    """Serialize a command with its kind tag first."""
    payload: Dict[str, Any] = {"kind": command.kind}
    payload.update(asdict(command))
    return payload


@dataclass
class DiagramResult:
    board: BoardRef
    node_ids: Dict[str, str] = field(default_factory=dict)
    connector_ids: List[str] = field(default_factory=list)
    commands: List[DiagramCommand] = field(default_factory=list)
    skipped_edges: List[Tuple[str, str]] = field(default_factory=list)

    @property
    def view_url(self) -> str:
        return self.board.view_url

    def count(self, kind: str) -> int:
        return sum(1 for cmd in self.commands if cmd.kind == kind)

    def summary(self) -> Optional[str]:
        if not self.commands:
            return None
        return (
            f"{self.count(CreateModuleNode.kind)} modules, "
            f"{self.count(CreateAnnotationNode.kind)} annotations, "
            f"{len(self.connector_ids)} connectors"
        )
