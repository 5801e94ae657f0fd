"""Computed-rule evaluation: sandboxed snippets and the striping snippet."""

from tablestyle.snippets.evaluator import evaluate_snippets
from tablestyle.snippets.interpreter import EvaluationError, evaluate
from tablestyle.snippets.snippet import (
    ComputedSnippet,
    StripedSnippet,
    striped_snippet,
    to_attributes,
)

__all__ = [
    "ComputedSnippet",
    "EvaluationError",
    "StripedSnippet",
    "evaluate",
    "evaluate_snippets",
    "striped_snippet",
    "to_attributes",
]
