"""
Pytest configuration and shared fixtures for jzonl tests.

Provides immutable test data fixtures for line-oriented parsing: malformed
documents with the line that must be reported, well-formed documents, and
single JSON values for the per-line value parser.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest


@dataclass(frozen=True)
class JsonTestCase:
    """
    Immutable container for JSON test case data.

    Holds test input and expected behavior for consistent test execution.
    """

    description: str
    input_data: str
    should_fail: bool = False
    expected_output: Any = None
    skip_reason: str = ""


@dataclass(frozen=True)
class BadLineCase:
    """A JSON Lines document whose line ``bad_line`` is malformed."""

    description: str
    input_data: str
    bad_line: int


def _document_with_bad_line(bad_line: int, total: int = 12) -> str:
    lines = [f'{{"line": {n}}}' for n in range(1, total + 1)]
    lines[bad_line - 1] = '{"line": oops}'
    return "\n".join(lines) + "\n"


@pytest.fixture
def bad_line_cases() -> list[BadLineCase]:
    """
    Provides documents with exactly one malformed line at a known position.

    Line numbers 1, 2 and 10 exercise the first line, the first line with an
    offset, and an offset that crosses a digit boundary.
    """
    cases = [
        BadLineCase(f"malformed line {n}", _document_with_bad_line(n), n)
        for n in (1, 2, 10)
    ]
    cases.append(
        BadLineCase(
            "malformed line after blank lines",
            '{"a": 1}\n\n\n[1, 2,]\n',
            4,
        )
    )
    cases.append(
        BadLineCase(
            "two values on one line",
            '{"a": 1}\n{"b": 2} {"c": 3}\n',
            2,
        )
    )
    cases.append(
        BadLineCase(
            "value split across lines",
            '{"a": 1}\n{"b":\n2}\n',
            2,
        )
    )
    return cases


@pytest.fixture
def records_text() -> str:
    """Provides a five record document in the shape of a typical export."""
    return (
        '{"creator": {"handle": "Wendigoon"}, "video": {"id": "gCUFztOkrEU", "views": 2088488}}\n'
        '{"creator": {"handle": "TomScottGo"}, "video": {"id": "BxV14h0kFs0", "views": 65367317}}\n'
        '{"creator": {"handle": "HBMmaster"}, "video": {"id": "qID2B4MK7Y0", "views": 1272282}}\n'
        '{"creator": {"handle": "HBMmaster"}, "video": {"id": "2EZihKCB9iw", "views": 272019}}\n'
        '{"creator": {"handle": "SarahZ"}, "video": {"id": "ohFyOjfcLWQ", "views": 3115062}}\n'
    )


@pytest.fixture
def table_file(tmp_path: Path) -> Path:
    """Writes a small tabular JSON Lines file and returns its path."""
    path = tmp_path / "1.jsonl"
    path.write_text(
        '["Name", "Session", "Score", "Completed"]\n'
        '["Gilbert", "2013", 24, true]\n'
        '["Alexa", "2013", 29, true]\n'
        '["May", "2012B", 14, false]\n'
        '["Deloise", "2012A", 19, true]\n',
        encoding="utf-8",
    )
    return path


@pytest.fixture
def json_fail_cases() -> list[JsonTestCase]:
    """
    Provides JSON strings that must fail parsing per JSON specification.

    Adapted from the json.org JSON_checker suite. None of them contains a
    raw newline, so each is a valid candidate for a single JSON Lines record.
    """
    fail_docs = [
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

    return [
        JsonTestCase(
            description=f"fail case {idx}",
            input_data=doc,
            should_fail=True,
        )
        for idx, doc in enumerate(fail_docs)
    ]


@pytest.fixture
def basic_json_values() -> list[JsonTestCase]:
    """
    Provides basic JSON value test cases for fundamental parsing.

    Covers all JSON primitive types and basic container structures.
    """
    return [
        JsonTestCase("null value", "null", False, None),
        JsonTestCase("true boolean", "true", False, True),
        JsonTestCase("false boolean", "false", False, False),
        JsonTestCase("integer", "42", False, 42),
        JsonTestCase("negative integer", "-17", False, -17),
        JsonTestCase("float", "3.14", False, 3.14),
        JsonTestCase("exponent", "1e3", False, 1000.0),
        JsonTestCase("empty string", '""', False, ""),
        JsonTestCase("simple string", '"hello"', False, "hello"),
        JsonTestCase("empty array", "[]", False, []),
        JsonTestCase("empty object", "{}", False, {}),
        JsonTestCase("simple array", "[1, 2, 3]", False, [1, 2, 3]),
        JsonTestCase(
            "simple object", '{"key": "value"}', False, {"key": "value"}
        ),
        JsonTestCase("bare minus", "-", True),
        JsonTestCase("lone comma", ",", True),
    ]
