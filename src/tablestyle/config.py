from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class StylerConfig:
    tag: str = "tablestyle"
    stripe_color: str = "gray90"
    strict_snippets: bool = False  # abort the restyle on a failing snippet
    keep_stale_on_error: bool = False  # parse before clearing old markers
