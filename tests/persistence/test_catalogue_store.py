"""Tests for catalogue persistence layer."""

import sqlite3
from datetime import date

from alarm_app.catalogue.models import AlarmCatalogue, Trigger, TriggerKind
from alarm_app.persistence.catalogue_store import CatalogueStore, StoredCatalogue


def _catalogue(symbol: str, triggered=None, names=("A", "B")) -> AlarmCatalogue:
    return AlarmCatalogue.from_triggers(
        symbol,
        [
            Trigger(alarm_name=name, kind=TriggerKind.BB_LOWER, previous_triggered_date=triggered)
            for name in names
        ],
        as_of=date(2024, 2, 1),
    )


class TestCatalogueStore:
    """Test CatalogueStore class."""

    def test_init_database(self, store):
        """Should create the catalogues table."""
        conn = sqlite3.connect(store.db_path)
        tables = [row[0] for row in conn.execute("SELECT name FROM sqlite_master WHERE type='table'")]
        conn.close()
        assert "catalogues" in tables

    def test_store_and_get(self, store):
        """A stored catalogue reads back equal."""
        catalogue = _catalogue("ABC", date(2024, 1, 30))
        assert store.store_catalogue(catalogue)
        assert store.get_catalogue("ABC") == catalogue

    def test_get_missing(self, store):
        """Unknown symbols return None."""
        assert store.get_catalogue("NOPE") is None
        assert store.get_stored("NOPE") is None

    def test_replace_wholesale(self, store):
        """Storing again replaces every entry of the symbol."""
        store.store_catalogue(_catalogue("ABC", names=("A", "B")))
        store.store_catalogue(_catalogue("ABC", names=("C",)))

        assert store.get_catalogue("ABC").alarm_names == ["C"]
        assert store.list_symbols() == ["ABC"]

    def test_identical_store_reports_unchanged(self, store):
        """Re-storing the same catalogue is detected by content hash."""
        assert store.store_catalogue(_catalogue("ABC"))
        assert not store.store_catalogue(_catalogue("ABC"))
        assert store.store_catalogue(_catalogue("ABC", date(2024, 1, 31)))

    def test_stored_row_metadata(self, store):
        """Row metadata reflects the catalogue."""
        catalogue = _catalogue("ABC")
        store.store_catalogue(catalogue)
        stored = store.get_stored("ABC")

        assert isinstance(stored, StoredCatalogue)
        assert stored.symbol == "ABC"
        assert stored.as_of == "2024-02-01"
        assert stored.alarm_count == 2
        assert stored.document == catalogue.to_json()

    def test_list_and_delete(self, store):
        """Symbols are listed sorted and can be deleted."""
        store.store_catalogue(_catalogue("ZZZ"))
        store.store_catalogue(_catalogue("AAA"))

        assert store.list_symbols() == ["AAA", "ZZZ"]
        assert store.delete_catalogue("AAA")
        assert not store.delete_catalogue("AAA")
        assert store.list_symbols() == ["ZZZ"]

    def test_get_stats(self, store):
        """Stats summarize stored catalogues."""
        assert store.get_stats() == {"total_catalogues": 0, "total_alarms": 0, "latest_as_of": None}

        store.store_catalogue(_catalogue("AAA"))
        store.store_catalogue(_catalogue("BBB", names=("A", "B", "C")))
        stats = store.get_stats()

        assert stats["total_catalogues"] == 2
        assert stats["total_alarms"] == 5
        assert stats["latest_as_of"] == "2024-02-01"

    def test_malformed_document_reads_as_missing(self, store):
        """A corrupt stored document is treated as absent."""
        conn = sqlite3.connect(store.db_path)
        conn.execute(
            "INSERT INTO catalogues (id, document, as_of, alarm_count, updated_at, document_hash) "
            "VALUES (?, ?, ?, ?, ?, ?)",
            ("BAD", "{not json", None, 0, "2024-01-01T00:00:00+00:00", "x"),
        )
        conn.commit()
        conn.close()

        assert store.get_catalogue("BAD") is None

    def test_persists_across_instances(self, tmp_path):
        """A second store on the same file sees the data."""
        db_path = str(tmp_path / "shared.db")
        CatalogueStore(db_path).store_catalogue(_catalogue("ABC"))
        assert CatalogueStore(db_path).list_symbols() == ["ABC"]
