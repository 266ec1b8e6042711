"""
Ticklist Backend — Time-Ordered Identifiers
=============================================

What:  Generates version-7 UUIDs (RFC 9562) for new rows.
Why:   Identifiers sort in creation order, so insertion order can be
       recovered from the id alone without a created_at column.

Layout (128 bits):
    ┌──────────────────────┬─────┬──────────┬─────┬───────────────────┐
    │ unix_ts_ms (48)      │ ver │ seq (12) │ var │ random (62)       │
    └──────────────────────┴─────┴──────────┴─────┴───────────────────┘

    The 12-bit sequence field (rand_a in the RFC) is a counter seeded
    randomly at each new millisecond and incremented for every id issued in
    the same millisecond. When it overflows, the timestamp is advanced by
    one. When the wall clock goes backwards, the last timestamp is reused.
    Either way, ids from one process are strictly increasing.
"""

import os
import threading
import time
import uuid

_SEQ_MASK = 0xFFF
_RAND_B_MASK = (1 << 62) - 1

_lock = threading.Lock()
_last_ms = 0
_last_seq = 0


def _next_timestamp_and_sequence():
    global _last_ms, _last_seq
    now_ms = time.time_ns() // 1_000_000
    with _lock:
        if now_ms > _last_ms:
            # Seed low in the range so a burst in this millisecond has room to count up
            _last_ms = now_ms
            _last_seq = int.from_bytes(os.urandom(2), "big") & 0x7FF
        else:
            _last_seq += 1
            if _last_seq > _SEQ_MASK:
                _last_ms += 1
                _last_seq = 0
        return _last_ms, _last_seq


def new_id() -> uuid.UUID:
    """Return a fresh, time-ordered version-7 UUID."""
    unix_ts_ms, seq = _next_timestamp_and_sequence()
    rand_b = int.from_bytes(os.urandom(8), "big") & _RAND_B_MASK

    value = (unix_ts_ms & ((1 << 48) - 1)) << 80
    value |= 0x7 << 76          # version
    value |= seq << 64
    value |= 0b10 << 62         # RFC 4122/9562 variant
    value |= rand_b
    return uuid.UUID(int=value)


def timestamp_ms(identifier: uuid.UUID) -> int:
    """Extract the Unix millisecond timestamp embedded in a version-7 UUID."""
    return identifier.int >> 80
