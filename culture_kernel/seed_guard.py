from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional, Sequence

from .db import Store, decode
from .errors import DecodeFailure, ReseedFailure, StorageUnavailable
from .models import Protocol
from .protocols import canonical_protocols

log = logging.getLogger("culture_kernel.seed_guard")

@dataclass(frozen=True)
class HealthVerdict:
    healthy: bool
    readable: bool = True
    record_count: int = 0
    decode_failures: int = 0
    missing_ids: List[str] = field(default_factory=list)
    unexpected_ids: List[str] = field(default_factory=list)
    reasons: List[str] = field(default_factory=list)

    def summary(self) -> str:
        if self.healthy:
            return f"healthy ({self.record_count} records)"
        return "unhealthy: " + "; ".join(self.reasons)

def inspect(store: Store, corpus: Sequence[Protocol]) -> HealthVerdict:
    expected_ids = [p.protocol_id for p in corpus]
    try:
        rows = store.scan_all()
    except StorageUnavailable as e:
        return HealthVerdict(
            healthy=False,
            readable=False,
            missing_ids=expected_ids,
            reasons=[f"unreadable: {e}"],
        )

    decoded_ids = []
    failures = 0
    for key, raw in rows:
        try:
            protocol = decode(raw)
        except DecodeFailure as e:
            log.warning("record %r failed to decode: %s", key, e)
            failures += 1
            continue
        if protocol.protocol_id != key:
            log.warning("record stored under %r decodes as %r", key, protocol.protocol_id)
            failures += 1
            continue
        decoded_ids.append(protocol.protocol_id)

    found = set(decoded_ids)
    missing = [pid for pid in expected_ids if pid not in found]
    unexpected = sorted(found - set(expected_ids))

    reasons = []
    if not rows:
        reasons.append("store is empty")
    if failures:
        reasons.append(f"{failures} record(s) failed to decode")
    if len(rows) != len(corpus):
        reasons.append(f"expected {len(corpus)} records, found {len(rows)}")
    if missing and rows:
        reasons.append(f"{len(missing)} canonical id(s) missing")
    if unexpected:
        reasons.append(f"{len(unexpected)} unknown id(s): {', '.join(unexpected)}")
    if not reasons and decoded_ids != expected_ids:
        reasons.append("records are out of order")

    return HealthVerdict(
        healthy=not reasons,
        record_count=len(rows),
        decode_failures=failures,
        missing_ids=missing,
        unexpected_ids=unexpected,
        reasons=reasons,
    )

def repair(store: Store, corpus: Sequence[Protocol]) -> None:
    store.replace_all(corpus)

def _timestamp() -> str:
    return datetime.now().strftime("%Y%m%d%H%M%S%f")

def _quarantine(path: str) -> Optional[str]:
    if not os.path.isfile(path):
        return None
    base = f"{path}.corrupt-{_timestamp()}"
    target = base
    n = 1
    while os.path.exists(target):
        target = f"{base}-{n}"
        n += 1
    try:
        os.replace(path, target)
    except OSError as e:
        raise StorageUnavailable(f"cannot move unreadable store {path} aside: {e}") from e
    return target

def _fresh_store(path: str) -> Store:
    moved = _quarantine(path)
    if moved is not None:
        log.warning("moved unreadable store to %s", moved)
    return Store.open_or_create(path)

def _open_or_recover(path: str) -> Store:
    try:
        return Store.open_or_create(path)
    except StorageUnavailable as e:
        log.warning("store %s cannot be opened (%s); treating it as corrupt", path, e)
        if not os.path.isfile(path):
            raise
    return _fresh_store(path)

def _repair_or_replace_file(store: Store, corpus: Sequence[Protocol], readable: bool) -> Store:
    # A file whose header opens but whose pages are damaged cannot even drop
    # its table; such a store is set aside and rebuilt from an empty file.
    try:
        repair(store, corpus)
        return store
    except ReseedFailure as e:
        if readable:
            raise
        log.warning("reseeding unreadable store %s failed (%s); replacing the file", store.path, e)
    store.close()
    store = _fresh_store(store.path)
    try:
        repair(store, corpus)
    except Exception:
        store.close()
        raise
    return store

# StorageUnavailable or ReseedFailure from here means the catalog must not be served.
def ensure_healthy(path: str, corpus: Optional[Sequence[Protocol]] = None) -> Store:
    if corpus is None:
        corpus = canonical_protocols()
    store = _open_or_recover(path)
    try:
        verdict = inspect(store, corpus)
        if verdict.healthy:
            log.info("catalog store %s is %s", path, verdict.summary())
            return store

        log.warning("catalog store %s is %s; reseeding", path, verdict.summary())
        store = _repair_or_replace_file(store, corpus, verdict.readable)
        after = inspect(store, corpus)
        if not after.healthy:
            raise ReseedFailure(f"store still {after.summary()} after reseed")
        log.info("reseeded %s with %d records", path, after.record_count)
        return store
    except Exception:
        store.close()
        raise

def force_reseed(path: str, corpus: Optional[Sequence[Protocol]] = None) -> Store:
    if corpus is None:
        corpus = canonical_protocols()
    store = _open_or_recover(path)
    try:
        readable = inspect(store, corpus).readable
        store = _repair_or_replace_file(store, corpus, readable)
    except Exception:
        store.close()
        raise
    log.info("force-reseeded %s with %d records", path, len(corpus))
    return store
