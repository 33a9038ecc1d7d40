"""
Immutable configuration objects for JSON Lines parsing and encoding.

Both configs are built from the keyword arguments of the public entry points,
so option names are validated once by the dataclass constructor.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

# Hook type definitions - hooks can return custom types
ParseConstantHook = Callable[[str], Any] | None
ObjectPairsHook = Callable[[list[tuple[str, Any]]], Any] | None

DEFAULT_INDENT = 2


@dataclass(frozen=True)
class ParseConfig:
    """
    Configures JSON Lines parsing behavior with immutable settings.

    Covers both the per-line value grammar (raw numeric literals, hooks) and
    the line loop itself (blank-line policy).
    """

    preserve_raw_integers: bool = False
    preserve_raw_floats: bool = False
    skip_blank_lines: bool = True
    parse_constant: ParseConstantHook = None
    object_pairs_hook: ObjectPairsHook = None

    def __post_init__(self) -> None:
        for name in (
            "preserve_raw_integers",
            "preserve_raw_floats",
            "skip_blank_lines",
        ):
            if not isinstance(getattr(self, name), bool):
                raise TypeError(f"{name} must be a boolean")


@dataclass(frozen=True)
class EncodeConfig:
    """
    Configures JSON encoding behavior with immutable settings.

    The defaults produce the compact single-line form required by JSON Lines;
    setting ``indent`` switches to the multi-line pretty form.
    """

    skipkeys: bool = False
    ensure_ascii: bool = False
    sort_keys: bool = False
    indent: str | int | None = None
    default: Callable[[Any], Any] | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.skipkeys, bool):
            raise TypeError("skipkeys must be a boolean")
        if not isinstance(self.ensure_ascii, bool):
            raise TypeError("ensure_ascii must be a boolean")
        if not isinstance(self.sort_keys, bool):
            raise TypeError("sort_keys must be a boolean")
        if isinstance(self.indent, int) and not isinstance(self.indent, bool):
            if self.indent < 0:
                raise ValueError("indent must be a non-negative integer")
