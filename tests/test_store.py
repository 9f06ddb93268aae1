import json
from datetime import datetime, timezone

import pytest

from orgdirectory.core.errors import PersistenceError
from orgdirectory.domain import Company
from orgdirectory.infrastructure import (
    ChangeNotifier,
    EntityStore,
    InMemoryStorageBackend,
    JsonFileStorageBackend,
    ValueStore,
)


def _company(company_id: str, second: int) -> Company:
    return Company(id=company_id, name=f"Company {company_id}", created_at=datetime(2024, 1, 1, 0, 0, second, tzinfo=timezone.utc))


def _store(backend, notifier=None) -> EntityStore[Company]:
    return EntityStore(
        "companies",
        backend,
        notifier or ChangeNotifier(),
        encode=Company.to_dict,
        decode=Company.from_dict,
        sort_key=lambda company: company.created_at,
        id_of=lambda company: company.id,
    )


class FailingBackend(InMemoryStorageBackend):
    def __init__(self) -> None:
        super().__init__()
        self.fail = False

    def write(self, key, value):
        if self.fail:
            raise PersistenceError(key, "disk full")
        super().write(key, value)


def test_list_orders_newest_first_with_id_tie_break():
    store = _store(InMemoryStorageBackend())
    store.replace_all([_company("b", 1), _company("c", 5), _company("a", 1)])

    assert [company.id for company in store.list()] == ["c", "a", "b"]


def test_replace_all_notifies_once_with_key():
    notifier = ChangeNotifier()
    seen: list[str] = []
    notifier.subscribe(seen.append)
    store = _store(InMemoryStorageBackend(), notifier)

    store.replace_all([_company("a", 1), _company("b", 2)])

    assert seen == ["companies"]


def test_unsubscribe_stops_notifications():
    notifier = ChangeNotifier()
    seen: list[str] = []
    unsubscribe = notifier.subscribe(seen.append)
    unsubscribe()

    notifier.notify("companies")

    assert seen == []


def test_failing_listener_does_not_block_others():
    notifier = ChangeNotifier()
    seen: list[str] = []

    def broken(key: str) -> None:
        raise RuntimeError("boom")

    notifier.subscribe(broken)
    notifier.subscribe(seen.append)

    notifier.notify("employees")

    assert seen == ["employees"]


def test_failed_write_keeps_previous_value_and_does_not_notify():
    backend = FailingBackend()
    notifier = ChangeNotifier()
    seen: list[str] = []
    notifier.subscribe(seen.append)
    store = _store(backend, notifier)
    store.replace_all([_company("a", 1)])
    seen.clear()

    backend.fail = True
    with pytest.raises(PersistenceError):
        store.replace_all([])

    assert [company.id for company in store.list()] == ["a"]
    assert seen == []


def test_records_are_copies_not_aliases():
    store = _store(InMemoryStorageBackend())
    store.replace_all([Company(id="a", name="Acme", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc), api_configs={"Instagram": {"api_key": "k"}})])

    first = store.list()[0]
    first.api_configs["Instagram"]["api_key"] = "changed"

    assert store.list()[0].api_configs["Instagram"]["api_key"] == "k"


def test_value_store_returns_default_until_written():
    store = ValueStore("active_company", InMemoryStorageBackend(), ChangeNotifier(), default=None)
    assert store.read() is None

    store.write("c1")

    assert store.read() == "c1"


def test_json_backend_round_trip(tmp_path):
    backend = JsonFileStorageBackend(tmp_path / "store")
    store = _store(backend)
    store.replace_all([_company("a", 1)])

    on_disk = json.loads((tmp_path / "store" / "companies.json").read_text(encoding="utf-8"))
    assert on_disk[0]["id"] == "a"
    assert not list((tmp_path / "store").glob("*.tmp"))

    other_process = _store(JsonFileStorageBackend(tmp_path / "store"))
    assert [company.id for company in other_process.list()] == ["a"]


def test_json_backend_reports_corrupt_file(tmp_path):
    (tmp_path / "companies.json").write_text("{not json", encoding="utf-8")
    store = _store(JsonFileStorageBackend(tmp_path))

    with pytest.raises(PersistenceError):
        store.list()


def test_json_backend_wraps_unserialisable_values(tmp_path):
    backend = JsonFileStorageBackend(tmp_path)

    with pytest.raises(PersistenceError):
        backend.write("broken", {"value": object()})

    assert not backend.exists("broken")


def test_last_writer_wins_between_processes(tmp_path):
    first = _store(JsonFileStorageBackend(tmp_path))
    second = _store(JsonFileStorageBackend(tmp_path))
    first.replace_all([_company("a", 1)])

    snapshot_one = first.list()
    snapshot_two = second.list()
    first.replace_all([*snapshot_one, _company("b", 2)])
    second.replace_all([*snapshot_two, _company("c", 3)])

    assert [company.id for company in first.list()] == ["c", "a"]


def test_mixed_timestamp_kinds_raise_persistence_error():
    backend = InMemoryStorageBackend()
    backend.write(
        "companies",
        [
            {"id": "a", "name": "Naive", "created_at": "2024-01-01T00:00:00"},
            {"id": "b", "name": "Aware", "created_at": "2024-01-01T00:00:01+00:00"},
        ],
    )

    with pytest.raises(PersistenceError):
        _store(backend).list()
