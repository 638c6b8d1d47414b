"""
Test data generators for JSON parsing benchmarks.

Creates JSON documents that each lean on one part of the parser:
- Objects of different sizes (key/value dispatch)
- Number-heavy arrays (digit accumulation, fractions, exponents)
- String-heavy content with escape sequences and non-ASCII text
- Deep nesting (recursion and the depth guard)

Generation is seeded so repeated runs compare the same documents.
"""

import json
import random
import string
from functools import cache
from typing import Any

_SEED = 20240115
_ESCAPE_PROBABILITY = 0.3
_SIMPLE_ESCAPES = ['\\"', "\\\\", "\\/", "\\b", "\\f", "\\n", "\\r", "\\t"]

DATA_TYPES = (
    "small_object",
    "large_object",
    "mixed_array",
    "number_heavy",
    "nested_structure",
    "string_heavy",
    "deep_nesting",
)


@cache
def generate_test_data(data_type: str) -> str:
    """Generates JSON test data based on specified type."""
    generators = {
        "small_object": _generate_small_object,
        "large_object": _generate_large_object,
        "mixed_array": _generate_mixed_array,
        "number_heavy": _generate_number_heavy,
        "nested_structure": _generate_nested_structure,
        "string_heavy": _generate_string_heavy,
        "deep_nesting": _generate_deep_nesting,
    }

    if data_type not in generators:
        raise ValueError(f"Unknown data type: {data_type}")

    rng = random.Random(_SEED)
    return generators[data_type](rng)


def generate_test_bytes(data_type: str) -> bytes:
    """Same document as generate_test_data, UTF-8 encoded."""
    return generate_test_data(data_type).encode("utf-8")


def _generate_small_object(rng: random.Random) -> str:
    """Generates a small JSON object (< 1KB) with basic key-value pairs."""
    data = {
        "id": 12345,
        "name": "Alice Johnson",
        "email": "alice@example.com",
        "active": True,
        "balance": 1234.56,
        "metadata": {"created": "2024-01-15T10:30:00Z", "source": "api"},
    }
    return json.dumps(data)


def _generate_large_object(rng: random.Random) -> str:
    """Generates a large JSON object (> 10KB) of user and order records."""
    data = {
        "user_id": rng.randint(1000000, 9999999),
        "profile": {
            "first_name": _random_string(rng, 10),
            "last_name": _random_string(rng, 12),
            "email": f"{_random_string(rng, 8)}@example.com",
            "address": {
                "street": f"{rng.randint(1, 9999)} Main St",
                "city": _random_string(rng, 12),
                "zip": f"{rng.randint(10000, 99999)}",
                "country": "US",
            },
            "notifications": {
                "email": rng.choice([True, False]),
                "sms": rng.choice([True, False]),
                "push": None,
            },
        },
        "orders": [
            {
                "id": f"ord_{i:06d}",
                "amount": round(rng.uniform(1.0, 1000.0), 2),
                "currency": rng.choice(["USD", "EUR", "GBP", "JPY"]),
                "items": rng.randint(1, 20),
                "status": rng.choice(["completed", "pending", "failed"]),
                "note": f"Payment for {_random_string(rng, 20)}",
            }
            for i in range(80)
        ],
    }
    return json.dumps(data, indent=2)


def _generate_mixed_array(rng: random.Random) -> str:
    """Generates a large array with mixed data types."""
    makers = [
        lambda i: rng.randint(-1000, 1000),
        lambda i: round(rng.uniform(-100.0, 100.0), 3),
        lambda i: _random_string(rng, rng.randint(5, 30)),
        lambda i: rng.choice([True, False]),
        lambda i: None,
        lambda i: {"index": i, "value": _random_string(rng, 10)},
    ]
    array: list[Any] = [rng.choice(makers)(i) for i in range(300)]
    return json.dumps(array)


def _generate_number_heavy(rng: random.Random) -> str:
    """Generates integers, decimals and exponent forms."""
    numbers: list[str] = []
    for _ in range(500):
        numbers.append(str(rng.randint(-(10**12), 10**12)))
        numbers.append(f"{rng.uniform(-1e6, 1e6):.6f}")
        numbers.append(f"{rng.uniform(1.0, 9.9):.4f}e{rng.randint(-30, 30)}")
    return "[" + ",".join(numbers) + "]"


def _generate_nested_structure(rng: random.Random) -> str:
    """Generates a branching nested structure."""

    def create_nested_dict(depth: int) -> dict[str, Any]:
        if depth <= 0:
            return {"value": _random_string(rng, 10)}

        return {
            "level": depth,
            "data": _random_string(rng, 15),
            "items": [create_nested_dict(depth - 1) for _ in range(3)],
        }

    return json.dumps(create_nested_dict(6))


def _generate_string_heavy(rng: random.Random) -> str:
    """Generates JSON with many escape sequences and non-ASCII text."""

    def create_escaped_string() -> str:
        chars = []
        for _ in range(50):
            if rng.random() < _ESCAPE_PROBABILITY:
                chars.append(rng.choice(_SIMPLE_ESCAPES))
            else:
                chars.append(
                    rng.choice(string.ascii_letters + string.digits + " ")
                )
        return '"' + "".join(chars) + '"'

    escaped = [create_escaped_string() for _ in range(100)]
    unicode_escapes = [
        f'"code point \\u{rng.randint(0x00A0, 0x2FFF):04x}"' for _ in range(50)
    ]
    raw_unicode = [
        json.dumps("h\xe9llo w\xf6rld ☃ " * 4, ensure_ascii=False)
        for _ in range(50)
    ]
    return (
        '{"escaped":['
        + ",".join(escaped)
        + '],"unicode":['
        + ",".join(unicode_escapes)
        + '],"raw":['
        + ",".join(raw_unicode)
        + "]}"
    )


def _generate_deep_nesting(rng: random.Random) -> str:
    """Generates alternating arrays and objects 150 levels deep."""
    pairs = 75
    opening = '[{"k":' * pairs
    closing = "}]" * pairs
    return opening + str(rng.randint(0, 9)) + closing


def _random_string(rng: random.Random, length: int) -> str:
    """Generates a random string of specified length."""
    return "".join(rng.choices(string.ascii_letters, k=length))
