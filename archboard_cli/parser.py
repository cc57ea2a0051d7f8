"""Pattern-based relationship extraction for JS/TS modules.

Reads a module's raw text and pulls out:
- local imports of the form ``from './name'``
- public declarations of the form ``export function|class|const|default Name``
- the line count

This is deliberately not a parser: string concatenation, template imports,
re-exports and declarations split over several lines are not resolved.
Anything that does not match is ignored.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from typing import Sequence

from .config import SOURCE_SUFFIXES
from .models import ModuleRecord
from .scanner import matched_suffix

LOCAL_IMPORT = re.compile(r"""from\s+['"]\./(\w+)['"]""")
PUBLIC_EXPORT = re.compile(r"export\s+(?:function|class|const|default)\s+(\w+)")


class ModuleParser(ABC):
    """Abstract base class for module relationship extractors."""

    suffixes: Sequence[str] = SOURCE_SUFFIXES

    @abstractmethod
    def parse(self, file_name: str, content: str) -> ModuleRecord:
        """Extract a ``ModuleRecord`` from one file's text."""
        ...

    def module_name(self, file_name: str) -> str:
        suffix = matched_suffix(file_name, self.suffixes)
        return file_name[: -len(suffix)] if suffix else file_name


class RegexModuleParser(ModuleParser):
    """Regex extractor; matches in occurrence order, duplicates kept."""

    def parse(self, file_name: str, content: str) -> ModuleRecord:
        return ModuleRecord(
            file_name=file_name,
            module_name=self.module_name(file_name),
            imported_names=tuple(m.group(1) for m in LOCAL_IMPORT.finditer(content)),
            exported_symbols=tuple(m.group(1) for m in PUBLIC_EXPORT.finditer(content)),
            line_count=content.count("\n") + 1,
        )


def extract_module(file_name: str, content: str) -> ModuleRecord:
    return RegexModuleParser().parse(file_name, content)
