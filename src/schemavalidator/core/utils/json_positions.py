"""
json_positions.py — Source positions for values in a JSON text.

`index_positions(text)` walks an already well-formed JSON text and records,
for every value, the position of the last character of its first token:

    scalar      -> last character of the scalar ("thirty" -> closing quote)
    object/array -> the opening bracket

Keys of the returned mapping are paths as tuples (str for object members,
int for array items), the same shape as jsonschema's `absolute_path`.
Positions are `(line, column)`, both 1-based.

With duplicate object keys the last occurrence wins, matching the decoded value.
"""
from __future__ import annotations

import bisect
import json
from json.decoder import scanstring
from typing import Union

PathKey = tuple[Union[str, int], ...]
Position = tuple[int, int]

_WS = " \t\n\r"
_DECODER = json.JSONDecoder()


class _Index:
    def __init__(self, text: str) -> None:
        self.text = text
        self.line_starts = [0]
        for i, ch in enumerate(text):
            if ch == "\n":
                self.line_starts.append(i + 1)
        self.positions: dict[PathKey, Position] = {}

    def at(self, end: int) -> Position:
        # `end` is exclusive, so the last token character sits at end - 1.
        line = bisect.bisect_right(self.line_starts, end - 1)
        return line, end - self.line_starts[line - 1]

    def skip(self, i: int) -> int:
        text = self.text
        while i < len(text) and text[i] in _WS:
            i += 1
        return i

    def value(self, i: int, path: PathKey) -> int:
        i = self.skip(i)
        ch = self.text[i]
        if ch == "{":
            self.positions[path] = self.at(i + 1)
            return self._object(i + 1, path)
        if ch == "[":
            self.positions[path] = self.at(i + 1)
            return self._array(i + 1, path)
        _, end = _DECODER.raw_decode(self.text, i)
        self.positions[path] = self.at(end)
        return end

    def _object(self, i: int, path: PathKey) -> int:
        i = self.skip(i)
        if self.text[i] == "}":
            return i + 1
        while True:
            i = self.skip(i)
            key, i = scanstring(self.text, i + 1)
            i = self.skip(i) + 1  # ':'
            i = self.skip(self.value(i, path + (key,)))
            if self.text[i] == "}":
                return i + 1
            i += 1  # ','

    def _array(self, i: int, path: PathKey) -> int:
        i = self.skip(i)
        if self.text[i] == "]":
            return i + 1
        idx = 0
        while True:
            i = self.skip(self.value(i, path + (idx,)))
            if self.text[i] == "]":
                return i + 1
            i += 1  # ','
            idx += 1


def index_positions(text: str) -> dict[PathKey, Position]:
    """Map every value path in `text` to its (line, column)."""
    idx = _Index(text)
    idx.value(0, ())
    return idx.positions


def locate(positions: dict[PathKey, Position], path: PathKey) -> Position:
    """Position of `path`, falling back to the nearest recorded ancestor."""
    key = tuple(path)
    while key not in positions and key:
        key = key[:-1]
    return positions.get(key, (1, 1))
