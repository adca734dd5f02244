from tech_tree_engine import (
    Prerequisites,
    Technology,
    TechnologyRegistry,
    decode_unlocked,
    encode_unlocked,
)


def _registry():
    registry = TechnologyRegistry()
    registry.add(Technology("alpha", "Alpha", "", Prerequisites.all_of(), 1))
    registry.add(Technology("beta", "Beta", "", Prerequisites.all_of("alpha"), 2))
    return registry


def test_encode_decode_round_trip():
    payload = encode_unlocked({"beta", "alpha"})
    decoded = decode_unlocked(payload, _registry())

    assert payload == {"version": 1, "unlocked": ["alpha", "beta"]}
    assert decoded is not None
    assert decoded.unlocked == frozenset({"alpha", "beta"})
    assert decoded.dropped == ()


def test_decode_drops_unknown_ids():
    payload = {"version": 1, "unlocked": ["alpha", "missing", "missing", "beta"]}

    decoded = decode_unlocked(payload, _registry())

    assert decoded is not None
    assert decoded.unlocked == frozenset({"alpha", "beta"})
    assert decoded.dropped == ("missing",)


def test_decode_invalid_payloads_return_none():
    registry = _registry()

    assert decode_unlocked({"version": 99, "unlocked": ["alpha"]}, registry) is None
    assert decode_unlocked({"version": 1, "unlocked": "alpha"}, registry) is None
    assert decode_unlocked({"version": 1, "unlocked": ["alpha", 3]}, registry) is None
    assert decode_unlocked(["alpha"], registry) is None
