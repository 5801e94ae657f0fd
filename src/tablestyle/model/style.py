"""Resolved style: the merged attribute set of a single cell."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator

BACKGROUND = "background"
FOREGROUND = "foreground"


@dataclass
class ResolvedStyle:
    """Ordered attribute mapping for one cell.

    Later writes to an existing key replace its value (last writer wins).
    """

    attributes: dict[str, str] = field(default_factory=dict)

    def set(self, key: str, value: str) -> None:
        self.attributes[key] = value

    def extend(self, pairs: Iterable[tuple[str, str]]) -> None:
        for key, value in pairs:
            self.attributes[key] = value

    def get(self, key: str, default: str | None = None) -> str | None:
        return self.attributes.get(key, default)

    @property
    def background(self) -> str | None:
        return self.attributes.get(BACKGROUND)

    @property
    def foreground(self) -> str | None:
        return self.attributes.get(FOREGROUND)

    def as_pairs(self) -> tuple[tuple[str, str], ...]:
        return tuple(self.attributes.items())

    def __contains__(self, key: str) -> bool:
        return key in self.attributes

    def __iter__(self) -> Iterator[str]:
        return iter(self.attributes)

    def __len__(self) -> int:
        return len(self.attributes)

    def __bool__(self) -> bool:
        return bool(self.attributes)
