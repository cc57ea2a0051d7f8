"""Module dependency graph assembly."""

from __future__ import annotations

import logging
from typing import Iterable

from .models import DependencyGraph, DroppedReference, ModuleRecord

logger = logging.getLogger(__name__)


def build_graph(records: Iterable[ModuleRecord]) -> DependencyGraph:
    """Build a ``DependencyGraph`` from records in scan order.

    An import becomes an edge only when it names a scanned module. Other
    references are dropped and recorded on ``graph.dropped_references``.
    Self references and repeated imports are kept as-is.
    """
    graph = DependencyGraph()

    for record in records:
        if record.module_name in graph.nodes:
            logger.warning(
                "Duplicate module name '%s' (%s); keeping %s",
                record.module_name,
                record.file_name,
                graph.nodes[record.module_name].file_name,
            )
            graph.shadowed_records.append(record)
            continue
        graph.nodes[record.module_name] = record

    for name, record in graph.nodes.items():
        for imported in record.imported_names:
            if imported not in graph.nodes:
                graph.dropped_references.append(DroppedReference(name, imported))
                logger.debug("Dropped reference: %s -> %s (not scanned)", name, imported)
                continue
            if imported == name:
                logger.debug("Self reference kept: %s", name)
            graph.edges.append((name, imported))

    return graph
