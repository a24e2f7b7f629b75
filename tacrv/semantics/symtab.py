from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, List, Optional


class SymbolTableKeyError(Exception):
    def __init__(self, key):
        self.key = key
        self.msg = f"Unrecognized symbol '{key}'!"


class SourceCodeType(enum.Enum):
    INT = "Int"

    def __str__(self):
        return self.value


@dataclass
class SymbolTableEntry:
    text: str
    type: Optional[SourceCodeType] = None

    def set_type(self, type: SourceCodeType):
        self.type = type

    def __str__(self):
        type = "null" if self.type is None else str(self.type)
        return f"({self.text}, {type})"


@dataclass
class SymbolTable:
    entries: Dict[str, SymbolTableEntry] = field(default_factory=dict)

    def has(self, name: str) -> bool:
        return name in self.entries

    def add(self, name: str) -> SymbolTableEntry:
        if self.has(name):
            raise ValueError(f"Symbol '{name}' is already in the table!")
        entry = SymbolTableEntry(name)
        self.entries[name] = entry
        return entry

    def get(self, name: str) -> SymbolTableEntry:
        try:
            return self.entries[name]
        except KeyError:
            raise SymbolTableKeyError(name)

    def dump_lines(self) -> List[str]:
        return [str(entry) for entry in self.entries.values()]
