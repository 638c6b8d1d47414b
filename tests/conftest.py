"""
Pytest configuration and shared fixtures for medea tests.

Provides immutable test data shared by the pass/fail suites. The case lists
are module constants so they can drive ``pytest.mark.parametrize`` directly;
the fixtures hand out the same data to tests that prefer injection.
"""

from dataclasses import dataclass
from dataclasses import field
from typing import Any

import pytest


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input, the parse options to use, and expected behavior.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""
    options: dict[str, Any] = field(default_factory=dict)


_FAIL_DOCS = [
    # https://json.org/JSON_checker/test/fail1.json
    '"A JSON payload should be an object or array, not a string."',
    # https://json.org/JSON_checker/test/fail2.json
    '["Unclosed array"',
    # https://json.org/JSON_checker/test/fail3.json
    '{unquoted_key: "keys must be quoted"}',
    # https://json.org/JSON_checker/test/fail4.json
    '["extra comma",]',
    # https://json.org/JSON_checker/test/fail5.json
    '["double extra comma",,]',
    # https://json.org/JSON_checker/test/fail6.json
    '[   , "<-- missing value"]',
    # https://json.org/JSON_checker/test/fail7.json
    '["Comma after the close"],',
    # https://json.org/JSON_checker/test/fail8.json
    '["Extra close"]]',
    # https://json.org/JSON_checker/test/fail9.json
    '{"Extra comma": true,}',
    # https://json.org/JSON_checker/test/fail10.json
    '{"Extra value after close": true} "misplaced quoted value"',
    # https://json.org/JSON_checker/test/fail11.json
    '{"Illegal expression": 1 + 2}',
    # https://json.org/JSON_checker/test/fail12.json
    '{"Illegal invocation": alert()}',
    # https://json.org/JSON_checker/test/fail13.json
    '{"Numbers cannot have leading zeroes": 013}',
    # https://json.org/JSON_checker/test/fail14.json
    '{"Numbers cannot be hex": 0x14}',
    # https://json.org/JSON_checker/test/fail15.json
    '["Illegal backslash escape: \\x15"]',
    # https://json.org/JSON_checker/test/fail16.json
    "[\\naked]",
    # https://json.org/JSON_checker/test/fail17.json
    '["Illegal backslash escape: \\017"]',
    # https://json.org/JSON_checker/test/fail18.json
    '[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]',
    # https://json.org/JSON_checker/test/fail19.json
    '{"Missing colon" null}',
    # https://json.org/JSON_checker/test/fail20.json
    '{"Double colon":: null}',
    # https://json.org/JSON_checker/test/fail21.json
    '{"Comma instead of colon", null}',
    # https://json.org/JSON_checker/test/fail22.json
    '["Colon instead of comma": false]',
    # https://json.org/JSON_checker/test/fail23.json
    '["Bad value", truth]',
    # https://json.org/JSON_checker/test/fail24.json
    "['single quote']",
    # https://json.org/JSON_checker/test/fail25.json
    '["\ttab\tcharacter\tin\tstring\t"]',
    # https://json.org/JSON_checker/test/fail26.json
    '["tab\\   character\\   in\\  string\\  "]',
    # https://json.org/JSON_checker/test/fail27.json
    '["line\nbreak"]',
    # https://json.org/JSON_checker/test/fail28.json
    '["line\\\nbreak"]',
    # https://json.org/JSON_checker/test/fail29.json
    "[0e]",
    # https://json.org/JSON_checker/test/fail30.json
    "[0e+]",
    # https://json.org/JSON_checker/test/fail31.json
    "[0e+-1]",
    # https://json.org/JSON_checker/test/fail32.json
    '{"Comma instead if closing brace": true,',
    # https://json.org/JSON_checker/test/fail33.json
    '["mismatch"}',
    # https://code.google.com/archive/p/simplejson/issues/3
    '["A\u001fZ control characters in string"]',
]

# Raw control characters are only rejected with allow_control_characters off
_CONTROL_CHARACTER_CASES = {25, 27, 34}

_SKIPS = {
    1: "a bare string is a valid document",
    18: "twenty levels are well inside the default nesting limit",
}

FAIL_CASES = [
    JsonTestCase(
        description=f"fail{idx + 1}.json",
        input_data=doc,
        should_fail=True,
        skip_reason=_SKIPS.get(idx + 1, ""),
        options=(
            {"allow_control_characters": False}
            if idx + 1 in _CONTROL_CHARACTER_CASES
            else {}
        ),
    )
    for idx, doc in enumerate(_FAIL_DOCS)
]

PASS1 = r"""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\"",
        "backslash": "\\",
        "controls": "\b\f\n\r\t",
        "slash": "/ & \/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\u0123\u4567\u89AB\uCDEF\uabcd\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "http://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\"object with 1 member\":[\"array with 1 element\"]}",
        "quotes": "&#34; \u0022 %22 0x22 034 &#x22;",
        "\/\\\"\uCAFE\uBABE\uAB98\uFCDE\ubcda\uef4A\b\f\n\r\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]"""

PASS2 = '[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]'

PASS3 = """{
    "JSON Test Pattern pass3": {
        "The outermost value": "must be an object or array.",
        "In this test": "It is an object."
    }
}"""

PASS_CASES = [
    JsonTestCase("pass1.json - complex nested structure", PASS1),
    JsonTestCase("pass2.json - deep nesting", PASS2),
    JsonTestCase("pass3.json - simple object", PASS3),
]

BASIC_VALUES = [
    JsonTestCase("null value", "null", False, None),
    JsonTestCase("true boolean", "true", False, True),
    JsonTestCase("false boolean", "false", False, False),
    JsonTestCase("integer", "42", False, 42.0),
    JsonTestCase("negative integer", "-17", False, -17.0),
    JsonTestCase("float", "0.5", False, 0.5),
    JsonTestCase("exponent", "-0.5e2", False, -50.0),
    JsonTestCase("empty string", '""', False, ""),
    JsonTestCase("simple string", '"hello"', False, "hello"),
    JsonTestCase("empty array", "[]", False, []),
    JsonTestCase("empty object", "{}", False, {}),
    JsonTestCase("simple array", "[1, 2, 3]", False, [1.0, 2.0, 3.0]),
    JsonTestCase(
        "simple object", '{"key": "value"}', False, {"key": "value"}
    ),
]


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must fail parsing.

    The JSON_checker failure corpus, with the options each case needs.
    """
    return FAIL_CASES


@pytest.fixture
def json_pass_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must parse successfully.
    """
    return PASS_CASES


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental parsing.

    Covers all JSON primitive types and basic container structures.
    """
    return BASIC_VALUES
