"""Exceptions raised while parsing JSON Lines input."""

from typing import TypeAlias

Position: TypeAlias = int


class JSONDecodeError(ValueError):
    """
    Handles JSON parsing failures with absolute line and column information.

    ``doc`` is the text handed to the value parser (a single line for JSON
    Lines input) and ``pos`` an index into it. ``line_offset`` is the number
    of source lines preceding ``doc``, so ``lineno`` always refers to the
    original input rather than to the line in isolation.
    """

    def __init__(
        self,
        msg: str,
        doc: str = "",
        pos: Position = 0,
        line_offset: int = 0,
        source: str | None = None,
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")
        if not isinstance(line_offset, int) or line_offset < 0:
            raise ValueError("line_offset must be a non-negative integer")

        self.msg = msg
        self.doc = doc
        self.pos = pos
        self.source = source

        # Compute line and column numbers from position
        self.lineno = line_offset + (doc.count("\n", 0, pos) + 1 if doc else 1)
        self.colno = pos - doc.rfind("\n", 0, pos) if doc else pos + 1

        message = f"{msg} at line {self.lineno}, column {self.colno}"
        if source is not None:
            message = f"{message} in {source}"
        super().__init__(message)

