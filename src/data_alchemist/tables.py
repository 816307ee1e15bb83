"""Load uploaded tables from CSV/TSV files and write cleaned copies.

Cells are kept as the strings the file holds; empty cells stay ``""``.
The table name is the file name (e.g. ``tasks.csv``), which is what the
reference rules use to find the tasks table.
"""

from __future__ import annotations

import csv
import logging
from collections.abc import Iterable
from pathlib import Path  # noqa: TC003 - Path is used at runtime

from data_alchemist.validation.base import Table

logger = logging.getLogger(__name__)


def _delimiter_for(path: Path) -> str:
    return "\t" if path.suffix.lower() == ".tsv" else ","


def load_table(path: Path, delimiter: str | None = None) -> Table:
    """Read a CSV (or TSV, by suffix) file into a Table.

    Args:
        path: File to read
        delimiter: Override the delimiter chosen from the suffix

    Returns:
        Table named after the file
    """
    if delimiter is None:
        delimiter = _delimiter_for(path)

    with path.open(newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f, delimiter=delimiter)
        headers = list(reader.fieldnames or [])
        rows = [dict(row) for row in reader]

    logger.info(f"Loaded {path.name}: {len(rows)} rows, {len(headers)} columns")
    return Table(name=path.name, headers=headers, rows=rows)


def load_dataset(paths: Iterable[Path]) -> dict[str, Table]:
    """Load several files into a dataset keyed by file name.

    A later file with the same name replaces an earlier one.
    """
    dataset: dict[str, Table] = {}
    for path in paths:
        table = load_table(path)
        if table.name in dataset:
            logger.warning(f"Replacing previously loaded table {table.name} with {path}")
        dataset[table.name] = table
    return dataset


def write_table(table: Table, path: Path) -> None:
    """Write a table's declared columns to a CSV (or TSV) file.

    Keys missing from a row are written empty; keys not in the headers are
    dropped.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=table.headers, delimiter=_delimiter_for(path), extrasaction="ignore")
        writer.writeheader()
        for row in table.rows:
            writer.writerow({header: "" if row.get(header) is None else row.get(header) for header in table.headers})

    logger.info(f"Wrote {len(table.rows)} rows to {path}")
