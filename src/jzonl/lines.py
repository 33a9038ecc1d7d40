"""
JSON Lines documents: line segmentation, parsing and the ``JsonLines`` model.

Every non-blank line is parsed as an independent JSON value. The value
parser receives the number of preceding lines as an offset, so a malformed
line N is reported as line N of the input no matter how the input was
supplied (buffer, stream or file).
"""

import logging
import os
from collections.abc import Iterable
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import IO
from typing import Any
from typing import TypeAlias

from jzonl.config import DEFAULT_INDENT
from jzonl.config import EncodeConfig
from jzonl.config import ParseConfig
from jzonl.decoder import parse_value
from jzonl.encoder import encode_value

log = logging.getLogger(__name__)

_COMPACT = EncodeConfig()

# Text, bytes, or anything yielding lines of either
LineSource: TypeAlias = str | bytes | Iterable[str] | Iterable[bytes]


def _is_blank(line: str) -> bool:
    """A line is blank when nothing but its terminator is left."""
    return line in ("", "\r")


def _split_buffer(buffer: str) -> list[str]:
    """Splits on ``\\n`` only; a final terminator does not open a new line."""
    lines = buffer.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def iter_lines(source: LineSource) -> Iterator[tuple[int, str]]:
    """
    Yields ``(lineno, text)`` pairs for a buffer or a line-readable stream.

    Line numbers are 1-based. The ``\\n`` terminator is removed; a ``\\r``
    before it is kept and later absorbed as JSON whitespace. Byte input is
    decoded as UTF-8.
    """
    if isinstance(source, bytes):
        source = source.decode("utf-8")

    if isinstance(source, str):
        yield from enumerate(_split_buffer(source), start=1)
        return

    try:
        stream = iter(source)
    except TypeError as e:
        raise TypeError(
            f"expected str, bytes or an iterable of lines, "
            f"not {type(source).__name__}"
        ) from e

    lineno = 0
    for raw in stream:
        if isinstance(raw, bytes):
            raw = raw.decode("utf-8")
        lineno += 1
        yield lineno, raw[:-1] if raw.endswith("\n") else raw


def _source_name(source: Any) -> str:
    if isinstance(source, str | bytes):
        return "<string>"
    name = getattr(source, "name", None)
    return name if isinstance(name, str) else "<stream>"


def _iter_parsed(
    source: LineSource, config: ParseConfig, source_name: str | None
) -> Iterator[Any]:
    """The parse loop shared by the eager and lazy entry points."""
    blank = 0
    lineno = 0
    for lineno, line in iter_lines(source):
        if config.skip_blank_lines and _is_blank(line):
            blank += 1
            continue
        yield parse_value(
            line, config, line_offset=lineno - 1, source=source_name
        )

    log.debug(
        "Read %d lines from %s, skipped %d blank", lineno, source_name, blank
    )


def iter_values(
    source: LineSource, *, source_name: str | None = None, **kwargs: Any
) -> Iterator[Any]:
    """
    Lazily parses JSON Lines input, yielding one value per non-blank line.

    Accepts the same options as ``loads``. A malformed line raises
    ``JSONDecodeError`` when iteration reaches it.
    """
    config = ParseConfig(**kwargs)
    return _iter_parsed(source, config, source_name or _source_name(source))


@dataclass
class Slot:
    """
    Handle on one position of a ``JsonLines`` document.

    Reading ``value`` returns whatever the document holds at ``index`` now;
    assigning it replaces that entry in place.
    """

    document: "JsonLines"
    index: int

    @property
    def value(self) -> Any:
        return self.document[self.index]

    @value.setter
    def value(self, new_value: Any) -> None:
        self.document[self.index] = new_value


class JsonLines:
    """
    Ordered, mutable sequence of JSON values, one per JSON Lines record.

    Entries keep source line order when parsed and insertion order when
    built from values. Indexing is strictly zero-based: negative indices
    and out-of-range assignments raise ``IndexError`` instead of wrapping
    or growing the document.
    """

    __hash__ = None  # type: ignore[assignment]

    def __init__(self, values: Iterable[Any] = ()) -> None:
        self._values: list[Any] = list(values)

    @classmethod
    def from_values(cls, values: Iterable[Any]) -> "JsonLines":
        """Builds a document from already constructed values."""
        return cls(values)

    def _check_index(self, index: int) -> int:
        if not isinstance(index, int) or isinstance(index, bool):
            raise TypeError(
                "JsonLines indices must be integers, "
                f"not {type(index).__name__}"
            )
        if not 0 <= index < len(self._values):
            raise IndexError(
                f"JsonLines index {index} out of range "
                f"for document of length {len(self._values)}"
            )
        return index

    def __getitem__(self, index: int) -> Any:
        return self._values[self._check_index(index)]

    def __setitem__(self, index: int, value: Any) -> None:
        self._values[self._check_index(index)] = value

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[Any]:
        for index in range(len(self._values)):
            yield self._values[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, JsonLines):
            return NotImplemented
        return self._values == other._values

    def __repr__(self) -> str:
        return f"JsonLines({self._values!r})"

    def __str__(self) -> str:
        return dumps(self)

    def append(self, value: Any) -> None:
        """Adds one entry at the end of the document."""
        self._values.append(value)

    def items(self) -> Iterator[tuple[int, Any]]:
        """Yields ``(index, value)`` pairs in document order."""
        for index in range(len(self._values)):
            yield index, self._values[index]

    def slots(self) -> Iterator[Slot]:
        """
        Yields a ``Slot`` per entry so entries can be replaced while scanning.

        The traversal covers the entries present when it started.
        """
        for index in range(len(self._values)):
            yield Slot(self, index)

    def to_array(self) -> list[Any]:
        """Returns the entries as a new JSON array (a Python list)."""
        return list(self._values)

    def pretty(self, indent: int | str = DEFAULT_INDENT) -> str:
        """
        Renders each entry as indented multi-line JSON.

        The result is for reading only: records span several lines, so it is
        not valid JSON Lines and cannot be loaded back.
        """
        config = EncodeConfig(indent=indent)
        return "\n".join(encode_value(value, config) for value in self._values)


def loads(
    s: str | bytes, *, source_name: str | None = None, **kwargs: Any
) -> JsonLines:
    """
    Parses a JSON Lines buffer into a ``JsonLines`` document.

    Keyword arguments build a ``ParseConfig``. The first malformed line
    aborts the whole parse with ``JSONDecodeError``.
    """
    if not isinstance(s, str | bytes):
        raise TypeError(
            f"the JSON Lines text must be str or bytes, not {type(s).__name__}"
        )

    document = JsonLines(iter_values(s, source_name=source_name, **kwargs))
    log.debug("Parsed %d values", len(document))
    return document


def load(
    fp: IO[str] | IO[bytes] | Iterable[str],
    *,
    source_name: str | None = None,
    **kwargs: Any,
) -> JsonLines:
    """
    Parses JSON Lines from a stream, one line at a time.

    The stream is not closed. ``source_name`` defaults to the stream's
    ``name`` attribute and only appears in error messages.
    """
    if isinstance(fp, str | bytes) or not hasattr(fp, "__iter__"):
        raise TypeError("fp must be an iterable of lines")

    document = JsonLines(iter_values(fp, source_name=source_name, **kwargs))
    log.debug("Parsed %d values", len(document))
    return document


def load_file(path: str | os.PathLike[str], **kwargs: Any) -> JsonLines:
    """
    Parses the JSON Lines file at ``path``.

    Failing to open or read the file raises ``OSError``; the file is closed
    whether or not parsing succeeds.
    """
    log.debug("Opening %s", path)
    with Path(path).open(encoding="utf-8", newline="\n") as fp:
        return load(fp, source_name=str(path), **kwargs)


def dumps(document: JsonLines | Iterable[Any], **kwargs: Any) -> str:
    """
    Serializes a document as JSON Lines text.

    One compact record per line, joined by ``\\n`` with no trailing
    terminator, so the result loads back into an equal document.
    """
    if "indent" in kwargs:
        raise TypeError("indent is not allowed in JSON Lines output")
    config = EncodeConfig(**kwargs) if kwargs else _COMPACT
    return "\n".join(encode_value(value, config) for value in document)


def dump(
    document: JsonLines | Iterable[Any], fp: IO[str], **kwargs: Any
) -> None:
    """Writes ``dumps(document)`` to a text stream."""
    if not hasattr(fp, "write"):
        raise TypeError("fp must have a write() method")

    fp.write(dumps(document, **kwargs))
