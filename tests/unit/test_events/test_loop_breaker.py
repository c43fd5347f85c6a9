"""Unit tests for LoopBreaker."""

import hashlib
import json
from unittest.mock import MagicMock

import pytest

from action_toolkit.events import LoopBreaker, fingerprint
from action_toolkit.store import MemoryTtlStore, StoreError
from tests.helpers.clock import FakeClock


EVENT_TYPES = ["com.example.product.updated"]


class TestFingerprint:
    """Tests for fingerprint."""

    def test_is_sha256_of_canonical_json(self) -> None:
        """Should hash the key-sorted compact JSON form."""
        expected = hashlib.sha256(b'{"a":1,"b":[1,2]}').hexdigest()

        assert fingerprint({"b": [1, 2], "a": 1}) == expected

    def test_key_order_does_not_matter(self) -> None:
        """Should give equal fingerprints for logically equal payloads."""
        assert fingerprint({"x": {"b": 1, "a": 2}}) == fingerprint({"x": {"a": 2, "b": 1}})

    @pytest.mark.parametrize(
        "payload",
        [
            {"sku": "A-1", "qty": [1, 2.5, None, True]},
            {"name": "Caf\u00e9 \u6771\u4eac", "emoji": "\U0001f600"},
            json.loads('{"name": "\\ud800", "nested": {"v": "\\udfff"}}'),
        ],
    )
    def test_stable_across_json_round_trip(self, payload: object) -> None:
        """Should hash a payload and its parsed JSON copy identically."""
        assert fingerprint(payload) == fingerprint(json.loads(json.dumps(payload)))

    def test_lone_surrogate_payload_can_be_stored(self, clock: FakeClock) -> None:
        """Should store and recognise events carrying escaped surrogates."""
        payload = json.loads('{"name": "\\ud800"}')
        breaker = LoopBreaker(MemoryTtlStore(clock=clock))

        breaker.store("k", payload)

        assert breaker.check("k", EVENT_TYPES, EVENT_TYPES[0], payload) is True


class TestLoopBreaker:
    """Tests for check and store."""

    def test_store_then_check_detects_repeat(self, clock: FakeClock) -> None:
        """Should report a repeat for the same key and payload within the TTL."""
        breaker = LoopBreaker(MemoryTtlStore(clock=clock))
        payload = {"sku": "ABC", "qty": 1}

        breaker.store("product-ABC", payload)

        assert breaker.check("product-ABC", EVENT_TYPES, EVENT_TYPES[0], payload) is True

    def test_different_payload_is_not_repeat(self, clock: FakeClock) -> None:
        """Should not match a changed payload."""
        breaker = LoopBreaker(MemoryTtlStore(clock=clock))
        breaker.store("product-ABC", {"qty": 1})

        assert breaker.check("product-ABC", EVENT_TYPES, EVENT_TYPES[0], {"qty": 2}) is False

    def test_absent_key_is_not_repeat(self, clock: FakeClock) -> None:
        """Should return False when nothing is stored."""
        breaker = LoopBreaker(MemoryTtlStore(clock=clock))

        assert breaker.check("missing", EVENT_TYPES, EVENT_TYPES[0], {}) is False

    def test_expires_after_ttl(self, clock: FakeClock) -> None:
        """Should forget fingerprints after the TTL (default 60s)."""
        breaker = LoopBreaker(MemoryTtlStore(clock=clock))
        breaker.store("k", {"a": 1})

        clock.advance(60)

        assert breaker.check("k", EVENT_TYPES, EVENT_TYPES[0], {"a": 1}) is False

    def test_store_overwrites(self, clock: FakeClock) -> None:
        """Should keep only the latest fingerprint for a key."""
        breaker = LoopBreaker(MemoryTtlStore(clock=clock))
        breaker.store("k", {"v": 1})
        breaker.store("k", {"v": 2}, ttl_seconds=300)

        assert breaker.check("k", EVENT_TYPES, EVENT_TYPES[0], {"v": 1}) is False
        assert breaker.check("k", EVENT_TYPES, EVENT_TYPES[0], {"v": 2}) is True

    def test_unprotected_event_type_short_circuits(self) -> None:
        """Should return False without touching the store or lazy inputs."""
        store = MagicMock()
        key_fn = MagicMock(return_value="k")
        payload_fn = MagicMock(return_value={})

        result = LoopBreaker(store).check(key_fn, EVENT_TYPES, "com.other.event", payload_fn)

        assert result is False
        store.get.assert_not_called()
        key_fn.assert_not_called()
        payload_fn.assert_not_called()

    def test_lazy_inputs_are_resolved(self, clock: FakeClock) -> None:
        """Should accept zero-argument callables for key and payload."""
        breaker = LoopBreaker(MemoryTtlStore(clock=clock))

        breaker.store(lambda: "k", lambda: {"a": 1})

        assert breaker.check(lambda: "k", EVENT_TYPES, EVENT_TYPES[0], lambda: {"a": 1}) is True

    def test_store_errors_propagate(self) -> None:
        """Should not swallow store failures."""
        store = MagicMock()
        store.get.side_effect = StoreError("down")
        store.put.side_effect = StoreError("down")
        breaker = LoopBreaker(store)

        with pytest.raises(StoreError):
            breaker.check("k", EVENT_TYPES, EVENT_TYPES[0], {})
        with pytest.raises(StoreError):
            breaker.store("k", {})
