"""
JSON specification pass3 test from json.org test suite.

Validates parsing of a simple nested object and its round trip through the
compact encoder.
"""

import medea

# from https://json.org/JSON_checker/test/pass3.json
JSON = rb"""
{
    "JSON Test Pattern pass3": {
        "The outermost value": "must be an object or array.",
        "In this test": "It is an object."
    }
}
"""


def test_parse() -> None:
    """
    Validates nested object parsing and re-parsing the encoded output.
    """
    res = medea.parse(JSON)

    match res:
        case medea.JsonObject({"JSON Test Pattern pass3": medea.JsonObject(inner)}):
            assert inner["In this test"] == medea.JsonString("It is an object.")
        case _:
            raise AssertionError(f"unexpected structure: {res!r}")

    out = medea.dumps(res)
    assert res == medea.parse_str(out)
