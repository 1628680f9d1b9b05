import glob

import pytest
from sqlalchemy import create_engine, text

from culture_kernel.cache import CatalogCache
from culture_kernel.db import Store, encode
from culture_kernel.errors import ReseedFailure, StorageUnavailable
from culture_kernel.seed_guard import ensure_healthy, force_reseed, inspect, repair

from conftest import make_protocol, write_raw_rows


def _ids(store):
    return [pid for pid, _ in store.scan_all()]


def test_empty_store_is_unhealthy(store, corpus) -> None:
    verdict = inspect(store, corpus)
    assert not verdict.healthy
    assert verdict.record_count == 0
    assert "store is empty" in verdict.reasons
    assert verdict.missing_ids == [p.protocol_id for p in corpus]


def test_seeded_store_is_healthy(store, corpus) -> None:
    repair(store, corpus)
    verdict = inspect(store, corpus)
    assert verdict.healthy
    assert verdict.record_count == len(corpus)
    assert verdict.reasons == []
    assert verdict.summary() == f"healthy ({len(corpus)} records)"


def test_unknown_id_is_reported(store, corpus) -> None:
    store.replace_all(list(corpus[:-1]) + [make_protocol("rogue")])
    verdict = inspect(store, corpus)
    assert not verdict.healthy
    assert verdict.unexpected_ids == ["rogue"]
    assert verdict.missing_ids == [corpus[-1].protocol_id]


def test_decode_failure_is_unhealthy_even_with_right_count(db_path, corpus) -> None:
    rows = [(p.protocol_id, encode(p)) for p in corpus]
    rows[3] = (rows[3][0], b"\x00garbage")
    write_raw_rows(db_path, rows)
    with Store.open_or_create(db_path) as store:
        verdict = inspect(store, corpus)
    assert not verdict.healthy
    assert verdict.decode_failures == 1
    assert verdict.record_count == len(corpus)


def test_record_stored_under_the_wrong_key_counts_as_failure(db_path, corpus) -> None:
    rows = [(p.protocol_id, encode(p)) for p in corpus]
    rows[0] = (rows[0][0], encode(corpus[1]))
    rows[1] = (rows[1][0], encode(corpus[0]))
    write_raw_rows(db_path, rows)
    with Store.open_or_create(db_path) as store:
        verdict = inspect(store, corpus)
    assert verdict.decode_failures == 2
    assert not verdict.healthy


def test_ensure_healthy_seeds_an_empty_file(tmp_path, corpus) -> None:
    path = tmp_path / "culture.db"
    path.write_bytes(b"")
    with ensure_healthy(str(path)) as store:
        assert _ids(store) == [p.protocol_id for p in corpus]


def test_ensure_healthy_replaces_unknown_records(db_path, corpus) -> None:
    with Store.open_or_create(db_path) as store:
        store.replace_all([make_protocol("rogue")])

    with ensure_healthy(db_path) as store:
        ids = _ids(store)
    assert "rogue" not in ids
    assert ids == [p.protocol_id for p in corpus]


def test_ensure_healthy_leaves_a_healthy_store_alone(db_path, corpus, monkeypatch) -> None:
    with Store.open_or_create(db_path) as store:
        store.replace_all(corpus)

    def fail(self, records):
        raise AssertionError("healthy store must not be rewritten")

    monkeypatch.setattr(Store, "replace_all", fail)
    with ensure_healthy(db_path) as store:
        assert store.count() == len(corpus)


def test_ensure_healthy_reseeds_when_corpus_grows(db_path, corpus) -> None:
    with ensure_healthy(db_path):
        pass
    bigger = tuple(corpus) + (make_protocol("newcomer"),)
    with ensure_healthy(db_path, bigger) as store:
        assert _ids(store)[-1] == "newcomer"
        assert store.count() == len(corpus) + 1


def test_ensure_healthy_quarantines_an_unreadable_file(tmp_path, corpus) -> None:
    path = tmp_path / "culture.db"
    path.write_bytes(b"bit rot " * 1024)
    with ensure_healthy(str(path)) as store:
        assert store.count() == len(corpus)
    moved = glob.glob(str(path) + ".corrupt-*")
    assert len(moved) == 1
    with open(moved[0], "rb") as f:
        assert f.read().startswith(b"bit rot")


def test_ensure_healthy_fails_when_path_cannot_hold_a_store(tmp_path) -> None:
    with pytest.raises(StorageUnavailable):
        ensure_healthy(str(tmp_path))


def test_reseed_failure_is_fatal(db_path, monkeypatch) -> None:
    def fail(self, records):
        raise ReseedFailure("disk full")

    monkeypatch.setattr(Store, "replace_all", fail)
    with pytest.raises(ReseedFailure, match="disk full"):
        ensure_healthy(db_path)


def test_force_reseed_is_idempotent(db_path, corpus) -> None:
    with force_reseed(db_path) as store:
        first = store.scan_all()
    with force_reseed(db_path) as store:
        second = store.scan_all()
    assert first == second
    assert [pid for pid, _ in first] == [p.protocol_id for p in corpus]


def test_force_reseed_rewrites_a_healthy_store(db_path, corpus, monkeypatch) -> None:
    with ensure_healthy(db_path):
        pass
    calls = []
    original = Store.replace_all

    def spy(self, records):
        calls.append(len(records))
        return original(self, records)

    monkeypatch.setattr(Store, "replace_all", spy)
    force_reseed(db_path).close()
    assert calls == [len(corpus)]


def test_ensure_healthy_rebuilds_a_store_with_damaged_pages(db_path, corpus) -> None:
    with force_reseed(db_path):
        pass
    with open(db_path, "rb") as f:
        data = f.read()
    assert len(data) > 4096
    with open(db_path, "wb") as f:
        f.write(data[:4096] + b"\xff" * (len(data) - 4096))

    with ensure_healthy(db_path) as store:
        assert _ids(store) == [p.protocol_id for p in corpus]
    assert len(glob.glob(db_path + ".corrupt-*")) == 1


def test_force_reseed_rebuilds_a_store_with_damaged_pages(db_path, corpus) -> None:
    with force_reseed(db_path):
        pass
    with open(db_path, "r+b") as f:
        f.seek(4096)
        size = len(f.read())
        f.seek(4096)
        f.write(b"\xff" * size)

    with force_reseed(db_path) as store:
        assert _ids(store) == [p.protocol_id for p in corpus]


def test_quarantine_never_overwrites_an_earlier_copy(tmp_path, corpus, monkeypatch) -> None:
    import culture_kernel.seed_guard as guard

    monkeypatch.setattr(guard, "_timestamp", lambda: "20260101000000000000")
    path = tmp_path / "culture.db"
    for content in (b"first rot " * 1024, b"second rot " * 1024):
        path.write_bytes(content)
        ensure_healthy(str(path)).close()

    moved = sorted(glob.glob(str(path) + ".corrupt-*"))
    assert len(moved) == 2
    contents = set()
    for name in moved:
        with open(name, "rb") as f:
            contents.add(f.read(11))
    assert contents == {b"first rot f", b"second rot "}


def test_out_of_order_store_is_unhealthy_and_gets_reordered(db_path, corpus) -> None:
    with Store.open_or_create(db_path) as store:
        store.replace_all(list(reversed(corpus)))
        verdict = inspect(store, corpus)
    assert not verdict.healthy
    assert verdict.reasons == ["records are out of order"]

    with ensure_healthy(db_path) as store:
        assert _ids(store) == [p.protocol_id for p in corpus]


def test_unreadable_table_is_reported_as_unreadable(db_path, corpus) -> None:
    engine = create_engine(f"sqlite:///{db_path}")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE rituals (id TEXT PRIMARY KEY, title TEXT)"))
    engine.dispose()

    with Store.open_or_create(db_path) as store:
        verdict = inspect(store, corpus)
    assert not verdict.healthy
    assert not verdict.readable
    with ensure_healthy(db_path) as store:
        assert CatalogCache.load(store).ids == tuple(p.protocol_id for p in corpus)
    assert glob.glob(db_path + ".corrupt-*") == []
