import pytest
from sqlalchemy import create_engine

from culture_kernel.db import Store, metadata, rituals_table
from culture_kernel.models import ModernScript, Protocol
from culture_kernel.protocols import canonical_protocols


@pytest.fixture
def corpus():
    return canonical_protocols()


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "culture.db")


@pytest.fixture
def store(db_path):
    s = Store.open_or_create(db_path)
    yield s
    s.close()


def make_protocol(protocol_id: str, **overrides) -> Protocol:
    fields = {
        "protocol_id": protocol_id,
        "name": f"Protocol {protocol_id}",
        "origin_culture": "Nowhere",
        "category": "Testing",
        "bug_fixed": "Nothing in particular",
        "mechanism": "None",
        "modern_script": ModernScript(trigger="t", contract="c", vesting="v", ritual="r"),
        "ethical_guardrails": ["first", "second"],
    }
    fields.update(overrides)
    return Protocol(**fields)


def write_raw_rows(path: str, rows) -> None:
    """Write (protocol_id, payload) rows straight into the store table."""
    engine = create_engine(f"sqlite:///{path}")
    try:
        metadata.create_all(engine)
        with engine.begin() as conn:
            conn.execute(rituals_table.delete())
            conn.execute(
                rituals_table.insert(),
                [{"seq": i, "protocol_id": pid, "payload": payload} for i, (pid, payload) in enumerate(rows)],
            )
    finally:
        engine.dispose()
