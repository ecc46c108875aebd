"""Read transaction exports (CSV or XLSX) into header-keyed records."""

import csv
from pathlib import Path
from typing import Any, Iterator

from openpyxl import load_workbook

from bankledger.domain.errors import ValidationError

# Canonical field -> accepted header spellings (matched case-insensitively).
COLUMN_ALIASES = {
    "due_date": ("Data Vencimento", "Due Date"),
    "payment_date": ("Data Pagamento", "Payment Date"),
    "type": ("Tipo", "Type"),
    "description": ("Descrição", "Descricao", "Description"),
    "value": ("Valor", "Value"),
    "bank_name": ("Banco", "Bank"),
    "chart_of_account_name": ("Plano de Contas", "Chart of Account", "Plan"),
}

SUPPORTED_SUFFIXES = (".csv", ".xlsx")


def _header_map(headers: list[Any]) -> dict[str, int]:
    """Map canonical field names to column indexes.

    Raises:
        ValidationError: If any field has no matching column
    """
    normalized = {str(h).strip().lower(): idx for idx, h in enumerate(headers) if h is not None}
    mapping = {}
    missing = []
    for field, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias.lower() in normalized:
                mapping[field] = normalized[alias.lower()]
                break
        else:
            missing.append(aliases[0])
    if missing:
        raise ValidationError(f"Spreadsheet missing required columns: {', '.join(missing)}")
    return mapping


def _is_blank(cell: Any) -> bool:
    return cell is None or (isinstance(cell, str) and not cell.strip())


def _records(rows: Iterator[list[Any]]) -> Iterator[tuple[int, dict[str, Any]]]:
    """Yield (sheet row number, record) pairs, skipping blank rows."""
    try:
        headers = next(rows)
    except StopIteration:
        raise ValidationError("Spreadsheet has no header row")
    mapping = _header_map(list(headers))

    for row_number, cells in enumerate(rows, start=2):  # Header is row 1
        cells = list(cells)
        if all(_is_blank(cell) for cell in cells):
            continue
        record = {}
        for field, idx in mapping.items():
            cell = cells[idx] if idx < len(cells) else None
            if isinstance(cell, str):
                cell = cell.strip()
            record[field] = None if _is_blank(cell) else cell
        yield row_number, record


def _csv_rows(path: Path) -> Iterator[list[Any]]:
    with open(path, "r", encoding="utf-8-sig", newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        try:
            delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
        except csv.Error:
            delimiter = ","
        yield from csv.reader(f, delimiter=delimiter)


def _xlsx_rows(path: Path) -> Iterator[list[Any]]:
    workbook = load_workbook(path, read_only=True, data_only=True)
    try:
        sheet = workbook.worksheets[0]
        for row in sheet.iter_rows(values_only=True):
            yield list(row)
    finally:
        workbook.close()


def read_records(file_path: str) -> list[tuple[int, dict[str, Any]]]:
    """Read an export file into (row number, record) pairs.

    Records are keyed by the canonical names in COLUMN_ALIASES. Cells keep
    the type the reader produced (spreadsheet dates arrive as datetimes,
    numbers as int/float, everything from CSV as str); blanks become None.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValidationError: If the format is unsupported or columns are missing
    """
    path = Path(file_path)
    if not path.exists():
        raise FileNotFoundError(f"Import file not found: {file_path}")

    suffix = path.suffix.lower()
    if suffix == ".csv":
        rows = _csv_rows(path)
    elif suffix == ".xlsx":
        rows = _xlsx_rows(path)
    else:
        raise ValidationError(
            f"Unsupported file type '{suffix}': expected one of {', '.join(SUPPORTED_SUFFIXES)}"
        )
    return list(_records(rows))
