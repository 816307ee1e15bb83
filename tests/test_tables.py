"""Tests for loading and writing tables."""

from pathlib import Path

from data_alchemist.tables import load_dataset, load_table, write_table
from data_alchemist.validation import Table


class TestLoadTable:
    """Tests for load_table()."""

    def test_load_csv(self, tmp_path: Path) -> None:
        """Test reading headers and rows from a CSV file."""
        path = tmp_path / "clients.csv"
        path.write_text('ClientID,Name,TaskIDs\nC1,Acme,"[""T1""]"\nC2,,\n', encoding="utf-8")

        table = load_table(path)

        assert table.name == "clients.csv"
        assert table.headers == ["ClientID", "Name", "TaskIDs"]
        assert table.rows == [
            {"ClientID": "C1", "Name": "Acme", "TaskIDs": '["T1"]'},
            {"ClientID": "C2", "Name": "", "TaskIDs": ""},
        ]

    def test_load_tsv_by_suffix(self, tmp_path: Path) -> None:
        """Test that .tsv files are read tab-separated."""
        path = tmp_path / "tasks.tsv"
        path.write_text("TaskID\tName\nT1\tDesign, phase 1\n", encoding="utf-8")

        table = load_table(path)

        assert table.rows == [{"TaskID": "T1", "Name": "Design, phase 1"}]

    def test_byte_order_mark_stripped(self, tmp_path: Path) -> None:
        """Test spreadsheet exports that start with a BOM."""
        path = tmp_path / "workers.csv"
        path.write_text("\ufeffWorkerID,Name\nW1,Ann\n", encoding="utf-8")

        assert load_table(path).headers == ["WorkerID", "Name"]

    def test_empty_file(self, tmp_path: Path) -> None:
        """Test a file with no content."""
        path = tmp_path / "empty.csv"
        path.write_text("", encoding="utf-8")

        table = load_table(path)

        assert table.headers == []
        assert len(table) == 0


class TestLoadDataset:
    """Tests for load_dataset()."""

    def test_keyed_by_file_name(self, tmp_path: Path) -> None:
        """Test that tables are keyed by file name in load order."""
        clients = tmp_path / "clients.csv"
        tasks = tmp_path / "tasks.csv"
        clients.write_text("ClientID\nC1\n", encoding="utf-8")
        tasks.write_text("TaskID\nT1\n", encoding="utf-8")

        dataset = load_dataset([tasks, clients])

        assert list(dataset) == ["tasks.csv", "clients.csv"]
        assert dataset["tasks.csv"].rows == [{"TaskID": "T1"}]


class TestWriteTable:
    """Tests for write_table()."""

    def test_writes_declared_columns(self, tmp_path: Path) -> None:
        """Test that missing keys are blank and extra keys dropped."""
        table = Table(
            name="clients.csv",
            headers=["ClientID", "Name"],
            rows=[{"ClientID": "C1", "Name": "Acme", "Notes": "x"}, {"ClientID": "C2", "Name": None}],
        )
        path = tmp_path / "clean" / "clients.csv"

        write_table(table, path)

        assert path.read_text(encoding="utf-8").splitlines() == ["ClientID,Name", "C1,Acme", "C2,"]

    def test_written_table_loads_back(self, tmp_path: Path) -> None:
        """Test that a written TSV reads back the same rows."""
        table = Table(name="tasks.tsv", headers=["TaskID", "Name"], rows=[{"TaskID": "T1", "Name": "a, b"}])
        path = tmp_path / "tasks.tsv"

        write_table(table, path)

        assert load_table(path) == table
