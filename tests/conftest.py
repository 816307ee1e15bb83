"""Pytest configuration for data-alchemist tests.

This file is automatically loaded by pytest and sets up test fixtures
and configuration that are shared across all test modules.
"""

import pytest
from dotenv import load_dotenv

from data_alchemist.validation import Table

# Load .env file so tests see the same settings as the scripts
# This runs before any tests are collected
load_dotenv()


@pytest.fixture
def clean_client_row() -> dict[str, str]:
    """A client row that passes every built-in rule."""
    return {
        "ClientID": "C1",
        "Name": "Acme Corp",
        "Email": "ops@acme.example",
        "PhoneNumber": "+1 (555) 010-0100",
        "TaskIDs": '["T1", "T2"]',
    }


@pytest.fixture
def task_table() -> Table:
    """A tasks table holding T1 and T2 (plus a row with no id)."""
    return Table(
        name="tasks.csv",
        headers=["TaskID", "Name"],
        rows=[
            {"TaskID": "T1", "Name": "Design"},
            {"TaskID": "T2", "Name": "Build"},
            {"TaskID": "", "Name": "Unassigned"},
        ],
    )


@pytest.fixture
def client_table(clean_client_row: dict[str, str]) -> Table:
    """A clients table with one clean row."""
    return Table(
        name="clients.csv",
        headers=list(clean_client_row),
        rows=[clean_client_row],
    )


@pytest.fixture
def dataset(client_table: Table, task_table: Table) -> dict[str, Table]:
    """Clients and tasks loaded together."""
    return {client_table.name: client_table, task_table.name: task_table}
