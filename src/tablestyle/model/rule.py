"""Rule model: Rule, RuleSet and the declared table attributes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Union


class ContentMatch(Enum):
    """Special content pattern values."""

    ANY = "any"  # matches any non-empty cell text


ANY = ContentMatch.ANY

# None = empty text only, ANY = non-empty text, str = regular expression.
ContentPattern = Union[None, ContentMatch, str]

# None = every index, int = one index, frozenset = any of the indices.
IndexFilter = Union[None, int, frozenset]

AttributePairs = tuple[tuple[str, str], ...]

Snippet = Callable[[int, int, str], list[tuple[str, str]]]


@dataclass(frozen=True)
class Rule:
    """A conditional styling directive.

    For background and foreground rules ``style_value`` is a color name; for
    custom rules it is an ordered tuple of ``(key, value)`` attribute pairs.
    """

    content_pattern: ContentPattern
    style_value: str | AttributePairs
    column_filter: IndexFilter = None
    row_filter: IndexFilter = None


@dataclass(frozen=True)
class RuleSet:
    """The parsed rule collections and computed snippets of one table."""

    background: tuple[Rule, ...] = ()
    foreground: tuple[Rule, ...] = ()
    custom: tuple[Rule, ...] = ()
    snippets: tuple[Snippet, ...] = ()

    def __len__(self) -> int:
        return (
            len(self.background)
            + len(self.foreground)
            + len(self.custom)
            + len(self.snippets)
        )


@dataclass
class TableAttributes:
    """Raw styling attributes declared on a table, read once per restyle."""

    background: str = ""
    foreground: str = ""
    custom: str = ""
    computed: str = ""
    striped: bool = False
    extra: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict) -> TableAttributes:
        """Build attributes from a mapping, keeping unknown keys in ``extra``."""
        known = {"background", "foreground", "custom", "computed", "striped"}
        extra = {k: str(v) for k, v in data.items() if k not in known}
        return cls(
            background=str(data.get("background") or ""),
            foreground=str(data.get("foreground") or ""),
            custom=str(data.get("custom") or ""),
            computed=str(data.get("computed") or ""),
            striped=_as_bool(data.get("striped", False)),
            extra=extra,
        )


def _as_bool(value: object) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "1", "yes", "t")
    return bool(value)
