#!/usr/bin/env python3
"""Validate uploaded tables against the data-quality rules.

Loads client, worker and task tables, runs every rule over every table
(task references are checked across tables) and prints the findings.

Usage:
    uv run python -m data_alchemist.scripts.validate_tables clients.csv workers.csv tasks.csv
    uv run python -m data_alchemist.scripts.validate_tables data/*.csv --output report.json
    uv run python -m data_alchemist.scripts.validate_tables data/*.csv --rules rules.json --export-rules out/rules.json
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from data_alchemist.config import get_settings
from data_alchemist.tables import load_dataset, write_table
from data_alchemist.validation import (
    ValidationEngine,
    ValidationReport,
    export_rules,
    export_validation_report,
    load_rules,
    print_validation_report,
)

logger = logging.getLogger(__name__)


@click.command()
@click.argument(
    "files",
    nargs=-1,
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--rules",
    "rules_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Rules JSON to add to the built-in rules (default: $DATA_ALCHEMIST_RULES_FILE)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Export report to JSON file",
)
@click.option(
    "--export-rules",
    "export_rules_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Export the active rules to a JSON file",
)
@click.option(
    "--export-clean",
    "clean_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Write cleaned copies of the tables (declared columns only) to this directory",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="List every finding instead of the first few per table",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def main(
    files: tuple[Path, ...],
    rules_file: Path | None,
    output: Path | None,
    export_rules_path: Path | None,
    clean_dir: Path | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Validate client, worker and task tables.

    Checks every table against the built-in rules plus any custom rules:

    \b
    - Required names, email and phone formats
    - Duplicate client IDs
    - Load and hourly-rate ranges
    - Skills lists and task references (against the tasks table)

    Exits with status 1 when any error-severity finding exists.
    """
    settings = get_settings()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s: %(message)s")
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)

    engine = ValidationEngine()

    if rules_file is None and settings.rules_file is not None:
        if not settings.rules_file.exists():
            raise click.BadParameter(f"Rules file not found: {settings.rules_file}", param_hint="DATA_ALCHEMIST_RULES_FILE")
        rules_file = settings.rules_file

    if rules_file is not None:
        try:
            custom_rules = load_rules(rules_file)
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--rules") from e
        for rule in custom_rules:
            engine.add_custom_rule(rule)

    dataset = load_dataset(files)
    click.echo(f"Validating {len(dataset)} tables: {', '.join(dataset)}")

    results = engine.validate_dataset(dataset)
    report = ValidationReport.from_results(results, dataset, engine.list_rules())
    print_validation_report(report, verbose=verbose)

    if output is not None:
        export_validation_report(report, output)
        click.echo(f"\nExported report to {output}")

    if export_rules_path is not None:
        export_rules(engine.list_rules(), export_rules_path)
        click.echo(f"Exported rules to {export_rules_path}")

    if clean_dir is not None:
        for table in dataset.values():
            write_table(table, clean_dir / table.name)
        click.echo(f"Wrote cleaned tables to {clean_dir}")

    if report.error_count > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
