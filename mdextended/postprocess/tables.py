"""colspan/rowspan merging for tables marked up with > and ^ cells."""

from dataclasses import dataclass, field
from typing import Any, Optional

COLSPAN_MARKER = ">"
ROWSPAN_MARKER = "^"


@dataclass
class TableCell:
    """one table cell as seen by the span merger."""

    text: str
    attributes: dict[str, str] = field(default_factory=dict)
    colspan: int = 1
    rowspan: int = 1
    absorbed_by: Optional["TableCell"] = None
    payload: Any = None

    @property
    def merged(self) -> bool:
        return self.absorbed_by is not None

    def survivor(self) -> "TableCell":
        """returns the cell this one was ultimately merged into, or itself."""
        cell = self
        while cell.absorbed_by is not None:
            cell = cell.absorbed_by
        return cell


def _absorb(target: TableCell, cell: TableCell) -> None:
    if cell.attributes and not target.attributes:
        target.attributes = dict(cell.attributes)
    cell.absorbed_by = target


def merge_colspans(row: list[TableCell]) -> None:
    """
    merges each > cell into its left neighbour, right to left.

    Chains of > cells accumulate: the neighbour picks up the colspan the
    merged cell had already collected. A > in the first column stays literal.
    """
    for index in range(len(row) - 1, 0, -1):
        cell = row[index]
        if cell.text != COLSPAN_MARKER:
            continue
        target = row[index - 1]
        target.colspan += cell.colspan
        _absorb(target, cell)


def merge_rowspans(rows: list[list[TableCell]]) -> None:
    """
    merges each ^ cell into the cell directly above it, top to bottom.

    The cell above must sit at the same index and span the same number of
    columns. Runs of ^ cells all extend the topmost surviving cell.
    """
    for row_index in range(1, len(rows)):
        above_row = rows[row_index - 1]
        for index, cell in enumerate(rows[row_index]):
            if cell.merged or cell.text != ROWSPAN_MARKER:
                continue
            if index >= len(above_row):
                continue
            above = above_row[index]
            if above.colspan != cell.colspan:
                continue
            target = above.survivor()
            if target.colspan != cell.colspan:
                continue
            target.rowspan += cell.rowspan
            _absorb(target, cell)


def merge_spans(
    header_rows: list[list[TableCell]], body_rows: list[list[TableCell]]
) -> tuple[list[list[TableCell]], list[list[TableCell]]]:
    """
    resolves > and ^ span markers for a whole table.

    Colspans are resolved for every row first; rowspans apply to body rows
    only.

    Args:
        header_rows: rows of the table head
        body_rows: rows of the table body

    Returns:
        (header_rows, body_rows) with merged cells removed
    """
    for row in header_rows + body_rows:
        merge_colspans(row)
    merge_rowspans(body_rows)

    def surviving(rows: list[list[TableCell]]) -> list[list[TableCell]]:
        return [[cell for cell in row if not cell.merged] for row in rows]

    return surviving(header_rows), surviving(body_rows)
