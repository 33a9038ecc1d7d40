"""
JSON Lines (NDJSON) parsing and document model.

Parses text where every line holds one independent JSON value into an
ordered, mutable ``JsonLines`` document, and serializes it back. Parse
errors always carry the line number of the offending line in the original
input.
"""

import logging
import os

from jzonl.config import EncodeConfig
from jzonl.config import ParseConfig
from jzonl.decoder import RawNumber
from jzonl.decoder import parse_value
from jzonl.encoder import encode_value
from jzonl.errors import JSONDecodeError
from jzonl.lines import JsonLines
from jzonl.lines import Slot
from jzonl.lines import dump
from jzonl.lines import dumps
from jzonl.lines import iter_lines
from jzonl.lines import iter_values
from jzonl.lines import load
from jzonl.lines import load_file
from jzonl.lines import loads

__version__ = "0.1.0"

# Debug logging switch - the library never attaches handlers itself
if "JZONL_DEBUG" in os.environ:
    logging.getLogger(__name__).setLevel(logging.DEBUG)

__all__ = [
    "EncodeConfig",
    "JSONDecodeError",
    "JsonLines",
    "ParseConfig",
    "RawNumber",
    "Slot",
    "dump",
    "dumps",
    "encode_value",
    "iter_lines",
    "iter_values",
    "load",
    "load_file",
    "loads",
    "parse_value",
]
