from __future__ import annotations
import sys
from typing import Iterator


class SymbolTable:
    """Ordered interning of atom names; an atom's index is its first occurrence."""

    __slots__ = ("names", "_index")

    def __init__(self, names: list[str] | None = None):
        self.names: list[str] = []
        self._index: dict[str, int] = {}
        for name in names or ():
            self.intern(name)

    def intern(self, name: str) -> int:
        index = self._index.get(name)
        if index is None:
            # Intern to ensure fast equality/hash of the stored names
            name = sys.intern(name)
            index = len(self.names)
            self.names.append(name)
            self._index[name] = index
        return index

    def name(self, index: int) -> str:
        return self.names[index]

    def index(self, name: str) -> int:
        return self._index[name]

    def __contains__(self, name: object) -> bool:
        return name in self._index

    def __len__(self) -> int:
        return len(self.names)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __repr__(self):
        return f"SymbolTable({self.names!r})"
