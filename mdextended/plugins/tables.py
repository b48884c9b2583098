"""markdown-it core rule applying table span merging."""

from markdown_it import MarkdownIt
from markdown_it.rules_core import StateCore
from markdown_it.token import Token

from mdextended.core.config import FeatureConfig
from mdextended.postprocess.tables import TableCell, merge_spans

CELL_OPENERS = ("th_open", "td_open")


def _collect_rows(
    tokens: list[Token],
) -> tuple[list[list[TableCell]], list[list[TableCell]], list[list[TableCell]]]:
    """returns (header rows, body rows, all rows in document order)."""
    header_rows: list[list[TableCell]] = []
    body_rows: list[list[TableCell]] = []
    ordered: list[list[TableCell]] = []
    section = header_rows
    row: list[TableCell] = []

    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.type == "thead_open":
            section = header_rows
        elif token.type == "tbody_open":
            section = body_rows
        elif token.type == "tr_open":
            row = []
            section.append(row)
            ordered.append(row)
        elif token.type in CELL_OPENERS:
            inline = tokens[index + 1]
            row.append(
                TableCell(
                    text=inline.content.strip(),
                    attributes={k: str(v) for k, v in token.attrs.items()},
                    payload=tokens[index : index + 3],
                )
            )
            index += 3
            continue
        index += 1

    return header_rows, body_rows, ordered


def merge_table_tokens(tokens: list[Token]) -> list[Token]:
    """
    rewrites one table's tokens with > and ^ cells merged away.

    Args:
        tokens: tokens from table_open to table_close inclusive

    Returns:
        new token list with colspan/rowspan attributes on surviving cells
    """
    header_rows, body_rows, ordered = _collect_rows(tokens)
    merge_spans(header_rows, body_rows)

    out: list[Token] = []
    rows = iter(ordered)
    current: list[TableCell] = []
    index = 0
    while index < len(tokens):
        token = tokens[index]
        if token.type == "tr_open":
            current = next(rows)
        elif token.type in CELL_OPENERS:
            index += 3
            continue
        elif token.type == "tr_close":
            for cell in current:
                if cell.merged:
                    continue
                opener = cell.payload[0]
                opener.attrs = dict(cell.attributes)
                if cell.colspan > 1:
                    opener.attrSet("colspan", str(cell.colspan))
                if cell.rowspan > 1:
                    opener.attrSet("rowspan", str(cell.rowspan))
                out.extend(cell.payload)
        out.append(token)
        index += 1
    return out


def table_spans_plugin(md: MarkdownIt, config: FeatureConfig) -> None:
    """plugin merging table cells marked with > (colspan) and ^ (rowspan)."""

    def table_spans(state: StateCore) -> None:
        if not config.enabled("tables.tablespan"):
            return

        tokens = state.tokens
        out: list[Token] = []
        index = 0
        while index < len(tokens):
            token = tokens[index]
            if token.type != "table_open":
                out.append(token)
                index += 1
                continue
            end = index
            while end < len(tokens) and tokens[end].type != "table_close":
                end += 1
            out.extend(merge_table_tokens(tokens[index : end + 1]))
            index = end + 1
        state.tokens = out

    md.core.ruler.after("block", "table_spans", table_spans)
