"""
Test data generators for JSON Lines parsing benchmarks.

Creates JSON Lines documents with different record shapes:
- Many small log-style records
- Few wide records with nested arrays
- Heterogeneous records (objects, arrays, scalars on alternate lines)
- String-heavy records with escape sequences
- Sparse documents with blank lines between records
"""

import json
import random
import string
from typing import Any

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3


def generate_test_data(data_type: str, records: int = 500) -> str:
    """Generates a JSON Lines document of ``records`` records."""
    generators = {
        "event_log": _event_record,
        "wide_records": _wide_record,
        "mixed_records": _mixed_record,
        "string_heavy": _string_heavy_record,
        "sparse": _event_record,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    rng = random.Random(_SEED)
    make_record = generators[data_type]
    lines = [json.dumps(make_record(rng, i)) for i in range(records)]
    separator = "\n\n" if data_type == "sparse" else "\n"
    return separator.join(lines) + "\n"


def _event_record(rng: random.Random, i: int) -> dict[str, Any]:
    """One small structured log event."""
    return {
        "seq": i,
        "level": rng.choice(["debug", "info", "warning", "error"]),
        "ts": f"2024-01-15T10:{rng.randint(0, 59):02d}:00Z",
        "msg": _random_string(rng, rng.randint(10, 40)),
        "latency_ms": round(rng.uniform(0.1, 250.0), 3),
        "ok": rng.choice([True, False]),
    }


def _wide_record(rng: random.Random, i: int) -> dict[str, Any]:
    """A record with a nested transaction history."""
    return {
        "user_id": rng.randint(1000000, 9999999),
        "profile": {
            "name": _random_string(rng, 12),
            "email": f"{_random_string(rng, 8)}@{_random_string(rng, 6)}.com",
            "tags": [_random_string(rng, 5) for _ in range(8)],
        },
        "transactions": [
            {
                "id": f"txn_{i:06d}_{n:03d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "status": rng.choice(["completed", "pending", "failed"]),
            }
            for n in range(20)
        ],
    }


def _mixed_record(rng: random.Random, i: int) -> Any:
    """Cycles through the JSON value types line by line."""
    kind = i % 5
    if kind == 0:
        return {"index": i, "score": round(rng.uniform(0, 100), 2)}
    elif kind == 1:
        return [_random_string(rng, 6), rng.randint(-1000, 1000), None]
    elif kind == 2:
        return _random_string(rng, 20)
    elif kind == 3:
        return rng.uniform(-1e6, 1e6)
    else:
        return rng.choice([True, False, None])


def _string_heavy_record(rng: random.Random, i: int) -> dict[str, Any]:
    """A record whose strings are full of characters needing escapes."""
    chars = []
    for _ in range(80):
        if rng.random() < _ESCAPE_PROBABILITY:
            chars.append(rng.choice(['"', "\\", "/", "\b", "\f", "\n", "\t"]))
        else:
            chars.append(rng.choice(string.ascii_letters + " \xe9\u4e2d"))
    return {"id": i, "text": "".join(chars), "path": f"C:\\Users\\u{i}"}


def _random_string(rng: random.Random, length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(rng.choices(string.ascii_letters, k=length))
