"""Comma-separated text to rows of cells, for table previews.

The model output is shown as-is in the raw view, so this decoder never
rewrites cells: no trimming, no type coercion, no padding. It accepts any
string and always returns a table.
"""

from __future__ import annotations

from tablesnap.models import Row, Table

QUOTE = '"'
DELIMITER = ","
LINE_BREAKS = ("\n", "\r")


def _is_blank(row: Row) -> bool:
    return len(row) == 1 and row[0] == ""


def decode(raw: str) -> Table:
    """Decode CSV text into a list of rows.

    - `,` separates fields; `\\n`, `\\r\\n` and a lone `\\r` end a record.
    - Inside double quotes, commas and line breaks are literal and `""` is
      one literal quote. An unterminated quote is closed at end of input.
    - Records made of a single empty field (trailing newline, blank line
      between tables) are dropped.
    """
    rows: Table = []
    row: Row = []
    field: list[str] = []
    in_quotes = False
    i = 0
    n = len(raw)

    while i < n:
        char = raw[i]
        if char == QUOTE:
            if in_quotes and i + 1 < n and raw[i + 1] == QUOTE:
                field.append(QUOTE)
                i += 1
            else:
                in_quotes = not in_quotes
        elif in_quotes:
            field.append(char)
        elif char == DELIMITER:
            row.append("".join(field))
            field = []
        elif char in LINE_BREAKS:
            if char == "\r" and i + 1 < n and raw[i + 1] == "\n":
                i += 1
            row.append("".join(field))
            rows.append(row)
            row = []
            field = []
        else:
            field.append(char)
        i += 1

    if field or row:
        row.append("".join(field))
        rows.append(row)

    return [r for r in rows if not _is_blank(r)]


def column_count(table: Table) -> int:
    """Width of the widest row (0 for an empty table)."""
    return max((len(row) for row in table), default=0)
