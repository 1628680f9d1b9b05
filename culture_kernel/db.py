import json
import logging
import os
from typing import Iterable, List, Tuple, Union

from pydantic import ValidationError
from sqlalchemy import (
    Column,
    Integer,
    LargeBinary,
    MetaData,
    String,
    Table,
    create_engine,
    event,
    func,
    select,
)
from sqlalchemy.engine import URL
from sqlalchemy.exc import SQLAlchemyError

from .errors import DecodeFailure, ReseedFailure, StorageUnavailable
from .models import Protocol

log = logging.getLogger("culture_kernel.db")

# Bumped whenever the stored record shape changes; older rows fail to decode.
SCHEMA_VERSION = 1

metadata = MetaData()

# seq records insertion order, which is presentation order.
rituals_table = Table(
    "rituals",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=False),
    Column("protocol_id", String, nullable=False, unique=True),
    Column("payload", LargeBinary, nullable=False),
)

def encode(protocol: Protocol) -> bytes:
    envelope = {"v": SCHEMA_VERSION, "record": protocol.model_dump(mode="json")}
    return json.dumps(envelope, ensure_ascii=False, separators=(",", ":")).encode("utf-8")

def decode(raw: Union[bytes, str]) -> Protocol:
    try:
        envelope = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise DecodeFailure(f"payload is not valid JSON: {e}") from e
    if not isinstance(envelope, dict):
        raise DecodeFailure("payload is not an object")
    if envelope.get("v") != SCHEMA_VERSION:
        raise DecodeFailure(f"unsupported schema version {envelope.get('v')!r}")
    try:
        return Protocol.model_validate(envelope.get("record"))
    except ValidationError as e:
        raise DecodeFailure(f"record has the wrong shape: {e.error_count()} error(s)") from e

def store_url(path: str) -> URL:
    return URL.create("sqlite", database=os.path.abspath(path))

def _use_explicit_transactions(engine) -> None:
    # pysqlite does not BEGIN before DDL; take over so replace_all is one
    # transaction from DROP to the last INSERT.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

class Store:
    def __init__(self, path: str, engine):
        self.path = path
        self._engine = engine

    @classmethod
    def open_or_create(cls, path: str) -> "Store":
        parent = os.path.dirname(os.path.abspath(path))
        try:
            os.makedirs(parent, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"cannot create directory {parent}: {e}") from e
        if os.path.isdir(path):
            raise StorageUnavailable(f"{path} is a directory")
        if os.path.exists(path) and not os.access(path, os.R_OK | os.W_OK):
            raise StorageUnavailable(f"{path} is not readable and writable")

        engine = create_engine(store_url(path))
        _use_explicit_transactions(engine)
        try:
            # Touching sqlite_master makes SQLite read the header, so a file
            # that is not a database fails here rather than on first scan.
            with engine.connect() as conn:
                conn.exec_driver_sql("SELECT count(*) FROM sqlite_master").scalar()
            metadata.create_all(engine)
        except SQLAlchemyError as e:
            engine.dispose()
            raise StorageUnavailable(f"cannot open store {path}: {e}") from e
        log.debug("opened store %s", path)
        return cls(path, engine)

    def close(self) -> None:
        self._engine.dispose()

    def __enter__(self) -> "Store":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def scan_all(self) -> List[Tuple[str, bytes]]:
        stmt = select(rituals_table.c.protocol_id, rituals_table.c.payload).order_by(rituals_table.c.seq)
        try:
            with self._engine.connect() as conn:
                return [(row.protocol_id, row.payload) for row in conn.execute(stmt)]
        except (SQLAlchemyError, TypeError, ValueError) as e:
            raise StorageUnavailable(f"cannot scan store {self.path}: {e}") from e

    def count(self) -> int:
        try:
            with self._engine.connect() as conn:
                return conn.execute(select(func.count()).select_from(rituals_table)).scalar_one()
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"cannot count store {self.path}: {e}") from e

    def contains(self, protocol_id: str) -> bool:
        stmt = select(rituals_table.c.seq).where(rituals_table.c.protocol_id == protocol_id)
        try:
            with self._engine.connect() as conn:
                return conn.execute(stmt).first() is not None
        except SQLAlchemyError as e:
            raise StorageUnavailable(f"cannot read store {self.path}: {e}") from e

    def replace_all(self, records: Iterable[Protocol]) -> None:
        records = list(records)
        seen = set()
        for r in records:
            if r.protocol_id in seen:
                raise ReseedFailure(f"duplicate protocol_id {r.protocol_id!r} in replacement set")
            seen.add(r.protocol_id)

        rows = [
            {"seq": i, "protocol_id": r.protocol_id, "payload": encode(r)}
            for i, r in enumerate(records)
        ]
        try:
            # Drop, re-create and fill in one transaction: the table comes back
            # in its current shape even if an older layout was on disk.
            with self._engine.begin() as conn:
                metadata.drop_all(conn)
                metadata.create_all(conn)
                if rows:
                    conn.execute(rituals_table.insert(), rows)
        except SQLAlchemyError as e:
            raise ReseedFailure(f"cannot replace catalog in {self.path}: {e}") from e
        log.info("replaced catalog in %s with %d records", self.path, len(rows))
