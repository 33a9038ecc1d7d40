"""
Single-value JSON parser used for every line of a JSON Lines document.

The parser reports errors against an explicit line offset, so a failure in
line N of a larger input is reported as line N without re-reading the lines
before it.
"""

from dataclasses import dataclass
from dataclasses import field
from enum import Enum
from typing import Any

from jzonl.config import ParseConfig
from jzonl.errors import JSONDecodeError
from jzonl.errors import Position

_DIGITS = "0123456789"
_HEX_DIGITS = "0123456789abcdefABCDEF"
_WHITESPACE = " \t\n\r"
_CONTROL_LIMIT = 0x20

_ESCAPES = {
    '"': '"',
    "\\": "\\",
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_LITERALS = {"true": True, "false": False, "null": None}
_CONSTANTS = ("-Infinity", "Infinity", "NaN")


class RawNumber(str):
    """
    Numeric literal kept as its exact source text.

    Produced instead of ``int``/``float`` when raw preservation is enabled,
    and written back unquoted by the encoder.
    """

    __slots__ = ()

    # A number never equals a JSON string, even one with the same text
    def __eq__(self, other: object) -> bool:
        if isinstance(other, RawNumber):
            return str.__eq__(self, other)
        if isinstance(other, str):
            return False
        return NotImplemented

    def __ne__(self, other: object) -> bool:
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    __hash__ = str.__hash__

    def __repr__(self) -> str:
        return f"RawNumber({str.__repr__(self)})"

    @property
    def is_integer(self) -> bool:
        return not any(c in self for c in ".eE")

    def to_number(self) -> int | float:
        """Converts the literal to a Python number."""
        return int(self) if self.is_integer else float(self)


class TokenType(Enum):
    """Kinds of tokens produced by ``JsonLexer``."""

    PUNCTUATION = "punctuation"
    STRING = "string"
    INTEGER = "integer"
    FLOAT = "float"
    LITERAL = "literal"


@dataclass(frozen=True)
class JsonToken:
    """Represents a JSON token with position information."""

    type: TokenType
    value: str
    start: Position
    end: Position


class JsonLexer:
    """
    Tokenizes the text of one JSON value.

    Handles whitespace, strings, numbers, literals, and structural tokens.
    Errors carry the lexer's line offset and source name.
    """

    def __init__(
        self, text: str, line_offset: int = 0, source: str | None = None
    ):
        self.text = text
        self.pos = 0
        self.length = len(text)
        self.line_offset = line_offset
        self.source = source

    def error(self, msg: str, pos: Position) -> JSONDecodeError:
        """Builds a decode error positioned in this lexer's text."""
        return JSONDecodeError(
            msg,
            self.text,
            pos,
            line_offset=self.line_offset,
            source=self.source,
        )

    def peek(self) -> str:
        """Returns current character without advancing."""
        return self.text[self.pos] if self.pos < self.length else "\0"

    def advance(self) -> str:
        """Returns current character and advances position."""
        char = self.peek()
        if self.pos < self.length:
            self.pos += 1
        return char

    def skip_whitespace(self) -> None:
        """Skips whitespace characters according to JSON spec."""
        while self.pos < self.length and self.text[self.pos] in _WHITESPACE:
            self.pos += 1

    def scan_string(self) -> JsonToken:
        """Scans a JSON string token including quotes."""
        start = self.pos
        if self.advance() != '"':
            raise self.error("Expecting string", start)

        while self.pos < self.length:
            char = self.advance()
            if char == '"':
                return JsonToken(
                    TokenType.STRING,
                    self.text[start : self.pos],
                    start,
                    self.pos,
                )
            elif char == "\\":
                # Skip escaped character, decoded later
                if self.pos < self.length:
                    self.advance()
            elif ord(char) < _CONTROL_LIMIT:
                raise self.error("Invalid control character", self.pos - 1)

        raise self.error("Unterminated string starting at", start)

    def _scan_digits(self) -> int:
        count = 0
        while self.peek() in _DIGITS:
            self.advance()
            count += 1
        return count

    def scan_number(self) -> JsonToken:
        """Scans a JSON number token, classifying it as integer or float."""
        start = self.pos

        if self.text.startswith("-Infinity", self.pos):
            self.pos += len("-Infinity")
            return JsonToken(TokenType.LITERAL, "-Infinity", start, self.pos)

        if self.peek() == "-":
            self.advance()

        # Integer part
        if self.peek() == "0":
            self.advance()
            if self.peek() in _DIGITS:
                raise self.error("Leading zeros not allowed", start)
        elif self._scan_digits() == 0:
            raise self.error("Expecting value", start)

        is_float = False

        # Fraction part
        if self.peek() == ".":
            self.advance()
            if self._scan_digits() == 0:
                raise self.error("Invalid decimal number", start)
            is_float = True

        # Exponent part
        if self.peek() in "eE":
            self.advance()
            if self.peek() in "+-":
                self.advance()
            if self._scan_digits() == 0:
                raise self.error("Invalid exponent", start)
            is_float = True

        return JsonToken(
            TokenType.FLOAT if is_float else TokenType.INTEGER,
            self.text[start : self.pos],
            start,
            self.pos,
        )

    def scan_literal(self) -> JsonToken:
        """Scans literal tokens: true, false, null and the named constants."""
        start = self.pos
        for literal in (*_LITERALS, *_CONSTANTS):
            if self.text.startswith(literal, self.pos):
                self.pos += len(literal)
                return JsonToken(TokenType.LITERAL, literal, start, self.pos)
        raise self.error("Expecting value", start)

    def next_token(self) -> JsonToken | None:
        """Returns the next token or None if at end."""
        self.skip_whitespace()

        if self.pos >= self.length:
            return None

        char = self.peek()
        start = self.pos

        if char in "{}[],:":
            self.advance()
            return JsonToken(TokenType.PUNCTUATION, char, start, self.pos)
        elif char == '"':
            return self.scan_string()
        elif char in _DIGITS or char == "-":
            return self.scan_number()
        elif char in "tfnIN":
            return self.scan_literal()
        else:
            raise self.error("Expecting value", start)


_CLOSERS = {"{": "}", "[": "]"}

# Marks that a container was opened and its first item is still pending
_OPENED = object()


@dataclass
class _Container:
    """An object or array whose items are still being parsed."""

    closing: str
    items: list[Any] = field(default_factory=list)
    key: str = ""

    @property
    def is_object(self) -> bool:
        return self.closing == "}"


class JsonParser:
    """
    Parser over a ``JsonLexer`` token stream.

    Applies raw-number preservation, the constant hook and the object pairs
    hook from ``ParseConfig``.
    """

    def __init__(self, lexer: JsonLexer, config: ParseConfig):
        self.lexer = lexer
        self.config = config
        self.current_token: JsonToken | None = None
        self._key_cache: dict[str, str] = {}

    def advance_token(self) -> JsonToken | None:
        """Advances to next token and returns it."""
        self.current_token = self.lexer.next_token()
        return self.current_token

    def _position(self) -> Position:
        if self.current_token:
            return self.current_token.start
        return self.lexer.pos

    def expect_token(self, expected_value: str) -> JsonToken:
        """Expects a specific punctuation token and advances."""
        token = self.current_token
        if (
            token is None
            or token.type != TokenType.PUNCTUATION
            or token.value != expected_value
        ):
            raise self.lexer.error(
                f"Expecting '{expected_value}' delimiter", self._position()
            )
        self.advance_token()
        return token

    def parse_value(self) -> Any:
        """
        Parses any JSON value based on current token.

        Containers are tracked on an explicit stack rather than the call
        stack, so nesting depth is bounded only by memory.
        """
        stack: list[_Container] = []
        while True:
            value = self._open_or_scalar(stack)
            if value is _OPENED:
                continue

            # Attach the finished value to enclosing containers, closing
            # every container whose last item it completes
            while stack:
                container = stack[-1]
                if container.is_object:
                    container.items.append((container.key, value))
                else:
                    container.items.append(value)
                if self._continue_container(container):
                    if container.is_object:
                        container.key = self._object_member_key()
                    break
                stack.pop()
                value = self._close(container)
            else:
                return value

    def _open_or_scalar(self, stack: list[_Container]) -> Any:
        """Parses a scalar, or pushes a newly opened non-empty container."""
        token = self.current_token
        if token is None:
            raise self.lexer.error("Expecting value", self.lexer.pos)

        if token.type == TokenType.LITERAL:
            self.advance_token()
            return self._literal(token)
        elif token.type == TokenType.STRING:
            self.advance_token()
            return decode_string(token, self.lexer)
        elif token.type in (TokenType.INTEGER, TokenType.FLOAT):
            self.advance_token()
            return self._number(token)
        elif token.value in _CLOSERS:
            container = _Container(_CLOSERS[token.value])
            following = self.advance_token()
            if following and following.value == container.closing:
                self.advance_token()
                return self._close(container)
            if container.is_object:
                container.key = self._object_member_key()
            stack.append(container)
            return _OPENED
        else:
            raise self.lexer.error("Expecting value", token.start)

    def _literal(self, token: JsonToken) -> Any:
        if token.value in _LITERALS:
            return _LITERALS[token.value]
        if self.config.parse_constant:
            return self.config.parse_constant(token.value)
        raise self.lexer.error("Invalid literal", token.start)

    def _number(self, token: JsonToken) -> Any:
        is_float = token.type == TokenType.FLOAT
        if is_float and self.config.preserve_raw_floats:
            return RawNumber(token.value)
        if not is_float and self.config.preserve_raw_integers:
            return RawNumber(token.value)

        try:
            return float(token.value) if is_float else int(token.value)
        except ValueError as e:
            # Python caps int() conversion of very long digit strings
            if "Exceeds the limit" in str(e):
                raise self.lexer.error("Number too large", token.start) from e
            raise self.lexer.error("Invalid number", token.start) from e

    def _parse_object_key(self) -> str:
        """Parses object key and validates it's a proper string token."""
        token = self.current_token
        if token is None or token.type != TokenType.STRING:
            raise self.lexer.error(
                "Expecting property name enclosed in double quotes",
                self._position(),
            )

        self.advance_token()
        if token.value not in self._key_cache:
            self._key_cache[token.value] = decode_string(token, self.lexer)
        return self._key_cache[token.value]

    def _object_member_key(self) -> str:
        key = self._parse_object_key()
        self.expect_token(":")
        return key

    def _continue_container(self, container: _Container) -> bool:
        """Consumes ',' or the closing bracket; True if more items follow."""
        token = self.current_token
        if token is None:
            raise self.lexer.error("Expecting ',' delimiter", self.lexer.pos)

        closing = container.closing
        if token.value == closing and token.type == TokenType.PUNCTUATION:
            self.advance_token()
            return False
        elif token.value == "," and token.type == TokenType.PUNCTUATION:
            self.advance_token()
            if self.current_token and self.current_token.value == closing:
                kind = "object" if container.is_object else "array"
                raise self.lexer.error(
                    f"Illegal trailing comma before end of {kind}", token.start
                )
            return True
        else:
            raise self.lexer.error("Expecting ',' delimiter", token.start)

    def _close(self, container: _Container) -> Any:
        if not container.is_object:
            return container.items
        if self.config.object_pairs_hook:
            return self.config.object_pairs_hook(container.items)
        return dict(container.items)


def _decode_unicode_escape(
    inner: str, i: int, token: JsonToken, lexer: JsonLexer
) -> tuple[str, int]:
    """Decodes ``\\uXXXX`` at ``inner[i]``, joining surrogate pairs."""
    hex_digits = inner[i + 2 : i + 6]
    if len(hex_digits) != 4 or not all(c in _HEX_DIGITS for c in hex_digits):
        raise lexer.error(
            f"Invalid unicode escape sequence: \\u{hex_digits}",
            token.start + 1 + i,
        )

    code_point = int(hex_digits, 16)
    if 0xD800 <= code_point <= 0xDBFF and inner.startswith("\\u", i + 6):
        low_digits = inner[i + 8 : i + 12]
        if len(low_digits) == 4 and all(c in _HEX_DIGITS for c in low_digits):
            low = int(low_digits, 16)
            if 0xDC00 <= low <= 0xDFFF:
                high_bits = (code_point - 0xD800) << 10
                return chr(0x10000 + high_bits + (low - 0xDC00)), i + 12
    return chr(code_point), i + 6


def decode_string(token: JsonToken, lexer: JsonLexer) -> str:
    """Decodes a string token, handling escape sequences."""
    inner = token.value[1:-1]
    if "\\" not in inner:
        return inner

    result = []
    i = 0
    while i < len(inner):
        char = inner[i]
        if char != "\\":
            result.append(char)
            i += 1
            continue

        next_char = inner[i + 1] if i + 1 < len(inner) else ""
        if next_char in _ESCAPES:
            result.append(_ESCAPES[next_char])
            i += 2
        elif next_char == "u":
            decoded, i = _decode_unicode_escape(inner, i, token, lexer)
            result.append(decoded)
        else:
            raise lexer.error(
                f"Invalid escape sequence: \\{next_char}", token.start + 1 + i
            )

    return "".join(result)


def parse_value(
    text: str,
    config: ParseConfig | None = None,
    line_offset: int = 0,
    source: str | None = None,
) -> Any:
    """
    Parses exactly one JSON value from ``text``.

    ``line_offset`` is the number of lines that precede ``text`` in the
    original input; error line numbers are shifted by it. Anything but
    whitespace after the value is rejected as extra data.
    """
    if not isinstance(text, str):
        raise TypeError(
            f"the JSON text must be str, not {type(text).__name__}"
        )

    lexer = JsonLexer(text, line_offset=line_offset, source=source)

    if text.startswith("\ufeff"):
        raise lexer.error(
            "JSON input should not contain BOM (Byte Order Mark)", 0
        )

    parser = JsonParser(lexer, config or ParseConfig())
    parser.advance_token()

    result = parser.parse_value()

    if parser.current_token:
        raise lexer.error("Extra data", parser.current_token.start)

    return result
