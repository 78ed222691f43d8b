# renderer.py
# QueryResult -> rows of display strings. Row widths are not trusted.
from dataclasses import dataclass
from typing import List

from query_plugins_ui.models import CellKind, CellValue, QueryResult


@dataclass
class Grid:
    header: List[str]
    rows: List[List[str]]
    message: str = ""


def cell_text(cell: CellValue) -> str:
    if cell.kind is CellKind.NULL:
        return ""
    if cell.kind is CellKind.BOOLEAN:
        return "true" if cell.value else "false"
    return str(cell.value)


def render_grid(result: QueryResult) -> Grid:
    """
    Header is `names` in order; each row keeps its cells positionally.
    Short rows are padded with empty cells, long rows keep their extra cells.
    """
    width = len(result.names)
    rows = []
    for row in result.values:
        cells = [cell_text(c) for c in row]
        if len(cells) < width:
            cells.extend([""] * (width - len(cells)))
        rows.append(cells)
    return Grid(header=list(result.names), rows=rows, message=result.message or "")
