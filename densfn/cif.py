"""A small reader for Crystallographic Information Files (CIF)."""

from __future__ import annotations

import os
import re
from collections import deque
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from densfn.lattice import CellShape, Point3, frac_to_cart

_WHITESPACE = " \t\r\n"
_NUMBER_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)

CELL_TAGS = CellShape.LABELS
ATOM_TAGS = ("_atom_site_fract_x", "_atom_site_fract_y", "_atom_site_fract_z")


class CifError(Exception):
    """Raised when CIF text is malformed or a requested item is missing."""


@dataclass(frozen=True)
class _Token:
    text: str
    quoted: bool

    def is_keyword(self) -> bool:
        if self.quoted:
            return False
        lower = self.text.lower()
        return lower.startswith(("data_", "save_", "global_")) or lower == "loop_"

    def is_tag(self) -> bool:
        return not self.quoted and self.text.startswith("_")


@dataclass
class _Loop:
    tags: list[str]
    rows: list[list[str]]


@dataclass
class CifBlock:
    """One ``data_`` block: single tag/value pairs and loops."""

    name: str
    pairs: dict[str, str] = field(default_factory=dict)
    loops: list[_Loop] = field(default_factory=list)

    def find(self, tags: Sequence[str]) -> list[list[str]]:
        """Rows of values for the given tags, in the order the tags are given.

        The tags are looked up together in one loop; failing that, as single
        pairs, which give one row.
        """
        wanted = [tag.lower() for tag in tags]
        for loop in self.loops:
            if all(tag in loop.tags for tag in wanted):
                columns = [loop.tags.index(tag) for tag in wanted]
                return [[row[col] for col in columns] for row in loop.rows]
        if all(tag in self.pairs for tag in wanted):
            return [[self.pairs[tag] for tag in wanted]]
        missing = [tag for tag in tags if tag.lower() not in self.pairs]
        raise CifError(f"tags not found together in block {self.name!r}: {missing or list(tags)}")


def _tokens(text: str) -> Iterator[_Token]:
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c in _WHITESPACE:
            i += 1
        elif c == "#":
            end = text.find("\n", i)
            i = n if end == -1 else end + 1
        elif c == ";" and (i == 0 or text[i - 1] in "\r\n"):
            end = text.find("\n;", i)
            if end == -1:
                raise CifError("unterminated text field")
            value = text[i + 1 : end]
            yield _Token(value.strip("\r\n") if value.startswith(("\n", "\r")) else value.rstrip("\r"), True)
            i = end + 2
        elif c in "'\"":
            j = i + 1
            while j < n and not (text[j] == c and (j + 1 == n or text[j + 1] in _WHITESPACE)):
                j += 1
            if j >= n:
                raise CifError("unterminated quoted string")
            yield _Token(text[i + 1 : j], True)
            i = j + 1
        else:
            j = i
            while j < n and text[j] not in _WHITESPACE:
                j += 1
            yield _Token(text[i:j], False)
            i = j


def _read_loop(tokens: deque[_Token]) -> _Loop:
    tags: list[str] = []
    while tokens and tokens[0].is_tag():
        tags.append(tokens.popleft().text.lower())
    if not tags:
        raise CifError("loop_ without tags")
    values: list[str] = []
    while tokens and not tokens[0].is_tag() and not tokens[0].is_keyword():
        values.append(tokens.popleft().text)
    if len(values) % len(tags):
        raise CifError(f"loop of {len(tags)} tags has {len(values)} values")
    width = len(tags)
    rows = [values[start : start + width] for start in range(0, len(values), width)]
    return _Loop(tags, rows)


def parse_cif(text: str) -> list[CifBlock]:
    """Parse CIF text into its data blocks, in file order."""
    tokens = deque(_tokens(text))
    blocks: list[CifBlock] = []
    while tokens:
        token = tokens.popleft()
        lower = token.text.lower()
        if not token.quoted and lower.startswith("data_"):
            blocks.append(CifBlock(token.text[5:]))
            continue
        if not token.quoted and lower.startswith(("save_", "global_")):
            continue
        if not blocks:
            raise CifError(f"{token.text!r} appears before any data block")
        block = blocks[-1]
        if not token.quoted and lower == "loop_":
            block.loops.append(_read_loop(tokens))
        elif token.is_tag():
            if not tokens or tokens[0].is_tag() or tokens[0].is_keyword():
                raise CifError(f"tag {token.text!r} has no value")
            block.pairs[lower] = tokens.popleft().text
        else:
            raise CifError(f"unexpected value {token.text!r}")
    return blocks


def read_cif(path: str | os.PathLike[str]) -> list[CifBlock]:
    """Read and parse a CIF file."""
    with open(path, encoding="utf-8") as fh:
        return parse_cif(fh.read())


def _number(text: str, what: str) -> float:
    match = _NUMBER_RE.match(text)
    if match is None:
        raise CifError(f"invalid number for {what}: {text!r}")
    return float(match.group(1))


def read_cell_shape(block: CifBlock) -> CellShape:
    """The unit cell lengths and angles given in the block."""
    rows = block.find(CELL_TAGS)
    if not rows:
        raise CifError("cell parameters have no values")
    return CellShape(*(_number(value, tag) for tag, value in zip(CELL_TAGS, rows[0])))


def read_atom_coords(block: CifBlock, matrix: Sequence[Sequence[float]]) -> list[Point3]:
    """Cartesian positions of all atom sites listed in the block."""
    return [
        frac_to_cart(matrix, (_number(value, tag) for tag, value in zip(ATOM_TAGS, row)))
        for row in block.find(ATOM_TAGS)
    ]