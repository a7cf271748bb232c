import pandas as pd

from tablesnap.csv_decoder import column_count
from tablesnap.models import Table

CSV_FILENAME = "extracted-table.csv"


def needs_raw_fallback(raw: str, table: Table) -> bool:
    """Text came back but nothing tabular could be read from it."""
    return bool(raw) and not table


def spreadsheet_label(index: int) -> str:
    """0 -> A, 25 -> Z, 26 -> AA."""
    label = ""
    index += 1
    while index > 0:
        index, remainder = divmod(index - 1, 26)
        label = chr(ord("A") + remainder) + label
    return label


def table_to_frame(table: Table) -> pd.DataFrame:
    """Display frame for a decoded table; short rows are padded with empty cells."""
    width = column_count(table)
    padded = [row + [""] * (width - len(row)) for row in table]
    columns = [spreadsheet_label(i) for i in range(width)]
    frame = pd.DataFrame(padded, columns=columns, dtype="string")
    frame.index = pd.RangeIndex(start=1, stop=len(padded) + 1)
    return frame
