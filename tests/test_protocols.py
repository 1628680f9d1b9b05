from culture_kernel.db import decode, encode
from culture_kernel.protocols import CANONICAL_IDS, PROTOCOLS


def test_corpus_has_21_unique_protocols(corpus) -> None:
    assert len(corpus) == 21
    ids = [p.protocol_id for p in corpus]
    assert len(set(ids)) == len(ids)
    assert tuple(ids) == CANONICAL_IDS == tuple(PROTOCOLS)


def test_every_protocol_is_filled_in(corpus) -> None:
    for p in corpus:
        assert p.protocol_id
        assert p.name and p.origin_culture and p.category and p.bug_fixed and p.mechanism
        script = p.modern_script
        assert script.trigger and script.contract and script.vesting and script.ritual
        assert p.ethical_guardrails


def test_encode_decode_round_trip(corpus) -> None:
    for p in corpus:
        back = decode(encode(p))
        assert back == p
        assert back.ethical_guardrails == p.ethical_guardrails


def test_encoding_is_deterministic(corpus) -> None:
    assert [encode(p) for p in corpus] == [encode(p) for p in corpus]
