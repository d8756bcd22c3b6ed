"""
Cursor combinators for GnuPG's line oriented output.

GnuPG's machine readable output is a sequence of newline terminated records,
each a colon separated list of fields whose first field is the record type
(``sec``, ``fpr``, ``grp``, ``uid``, ``ssb``, ...). The cursor keeps a position
into the text and exposes small steps (locate a record, skip fields, read a
field) that parsers compose, so no parser does its own offset arithmetic.

Every step either advances the cursor or raises the configured ParseError
subclass carrying the unconsumed input. Fields never span lines, which keeps a
truncated record from silently borrowing fields from the next one.
"""

from collections.abc import Iterable
from typing import NoReturn

from gpg_import.exceptions import ParseError

FIELD_SEPARATOR = ":"
_NEWLINE = "\n"


class Cursor:
    """
    A read position over text being parsed.

    Args:
        text: The full input.
        error: ParseError subclass raised when a step fails.
    """

    __slots__ = ("_text", "_pos", "_error")

    def __init__(self, text: str, *, error: type[ParseError] = ParseError) -> None:
        self._text = text
        self._pos = 0
        self._error = error

    @property
    def remaining(self) -> str:
        return self._text[self._pos :]

    def fail(self, message: str) -> NoReturn:
        raise self._error(message, remaining=self.remaining)

    def seek(self, needle: str) -> None:
        """Advance to the next occurrence of `needle` without consuming it."""
        index = self._text.find(needle, self._pos)
        if index < 0:
            self.fail(f"expected {needle!r}")
        self._pos = index

    def expect(self, literal: str) -> None:
        """Consume `literal`, which must start at the current position."""
        if not self._text.startswith(literal, self._pos):
            self.fail(f"expected {literal!r}")
        self._pos += len(literal)

    def expect_any(self, literals: Iterable[str]) -> str:
        """Consume the first of `literals` found at the current position."""
        options = tuple(literals)
        for literal in options:
            if self._text.startswith(literal, self._pos):
                self._pos += len(literal)
                return literal
        self.fail(f"expected one of {options!r}")

    def locate_record(self, tag: str) -> int | None:
        """
        Find the start of the next record of type `tag`.

        Records are only recognised at the start of a line, so a tag appearing
        inside another record's fields is not mistaken for a record.

        Returns:
            The offset of the record, or None if there is none.
        """
        marker = tag + FIELD_SEPARATOR
        if self._at_line_start() and self._text.startswith(marker, self._pos):
            return self._pos
        index = self._text.find(_NEWLINE + marker, self._pos)
        if index < 0:
            return None
        return index + 1

    def expect_tag(self, tag: str) -> None:
        """
        Skip to the next record of type `tag` and consume the tag.

        Unrelated records in between are ignored. The cursor is left on the
        separator following the tag, so the tag's own (empty) remainder counts
        as the first skipped field.
        """
        index = self.locate_record(tag)
        if index is None:
            self.fail(f"missing {tag!r} record")
        self._pos = index + len(tag)

    def skip_fields(self, count: int) -> None:
        """Consume `count` separator terminated fields of the current record."""
        for _ in range(count):
            self.read_field(terminated=True)

    def read_field(self, *, terminated: bool = False) -> str:
        """
        Read the field at the cursor and consume its separator.

        The last field of a record may end at the end of the line instead of a
        separator, unless `terminated` is set.
        """
        end, found_separator = self._field_end()
        if terminated and not found_separator:
            self.fail("truncated record")
        value = self._text[self._pos : end]
        self._pos = end + 1 if found_separator else end
        return value.rstrip("\r")

    def read_fields(self, count: int) -> list[str]:
        return [self.read_field(terminated=True) for _ in range(count)]

    def read_until(self, delimiter: str) -> str:
        """Read up to `delimiter` on the current line, leaving the delimiter unconsumed."""
        line_end = self._line_end()
        index = self._text.find(delimiter, self._pos, line_end)
        if index < 0:
            self.fail(f"expected {delimiter!r}")
        value = self._text[self._pos : index]
        self._pos = index
        return value

    def read_line(self) -> str:
        """Read the rest of the current line and consume its line break."""
        end = self._line_end()
        value = self._text[self._pos : end]
        self._pos = min(end + 1, len(self._text))
        return value.rstrip("\r")

    def _at_line_start(self) -> bool:
        return self._pos == 0 or self._text[self._pos - 1] == _NEWLINE

    def _line_end(self) -> int:
        index = self._text.find(_NEWLINE, self._pos)
        return len(self._text) if index < 0 else index

    def _field_end(self) -> tuple[int, bool]:
        line_end = self._line_end()
        index = self._text.find(FIELD_SEPARATOR, self._pos, line_end)
        if index < 0:
            return line_end, False
        return index, True
