"""Loading JSON table documents for the command-line tools.

Document shape::

    {
      "header": ["Name", "Qty"],
      "rows": [["apple", "3"], ["pear", ""]],
      "attributes": {
        "background": "((\"^apple$\" \"green\"))",
        "striped": true
      }
    }
"""

from __future__ import annotations

import json
from pathlib import Path

from tablestyle.host.memory import InMemoryGrid
from tablestyle.model.rule import TableAttributes


class DocumentError(Exception):
    """Raised when a table document is not valid JSON of the expected shape."""


def load_document(path: Path) -> tuple[InMemoryGrid, TableAttributes]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DocumentError(f"{path.name}: invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise DocumentError(f"{path.name}: top level must be an object")

    rows = data.get("rows", [])
    if not isinstance(rows, list) or not all(isinstance(r, list) for r in rows):
        raise DocumentError(f"{path.name}: 'rows' must be a list of lists")
    header = data.get("header")
    if header is not None and not isinstance(header, list):
        raise DocumentError(f"{path.name}: 'header' must be a list")
    attributes = data.get("attributes", {})
    if not isinstance(attributes, dict):
        raise DocumentError(f"{path.name}: 'attributes' must be an object")

    grid = InMemoryGrid(
        rows=[[str(cell) for cell in r] for r in rows],
        header=[str(cell) for cell in header] if header is not None else None,
    )
    return grid, TableAttributes.from_dict(attributes)
