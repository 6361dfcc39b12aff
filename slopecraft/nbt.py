"""A streaming writer for uncompressed NBT files."""

from __future__ import annotations

import enum
import logging
import os
import struct
from typing import BinaryIO

__all__ = ["TagType", "NBTWriter", "MAX_DEPTH"]

_log = logging.getLogger(__name__)

MAX_DEPTH = 128
_MAX_STRING_BYTES = 0x7FFF


class TagType(enum.IntEnum):
    """NBT tag ids."""

    END = 0
    BYTE = 1
    SHORT = 2
    INT = 3
    LONG = 4
    FLOAT = 5
    DOUBLE = 6
    BYTE_ARRAY = 7
    STRING = 8
    LIST = 9
    COMPOUND = 10
    INT_ARRAY = 11
    LONG_ARRAY = 12


def _encode(text: str, what: str) -> bytes:
    data = text.encode("utf-8")
    if len(data) > _MAX_STRING_BYTES:
        raise ValueError(f"{what} is {len(data)} bytes long, at most {_MAX_STRING_BYTES} allowed")
    return data


def _pack(fmt: str, value: object) -> bytes:
    try:
        return struct.pack(fmt, value)
    except struct.error as exc:
        raise ValueError(str(exc)) from exc


class NBTWriter:
    """Writes an NBT document tag by tag, straight to a file.

    The file starts with an unnamed root compound, which :meth:`close` ends.
    Lists and arrays are declared with their length up front; each element
    written into them counts down, and a list closes itself once full.
    Compounds are ended explicitly with :meth:`end_compound`.

    When :attr:`allow_emergency_fill` is set, closing a writer with lists or
    compounds still open fills and ends them with placeholder values and adds
    a warning string, so that the file is still well formed.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.allow_emergency_fill = True
        self._file: BinaryIO | None = None
        self._count = 0
        self._stack: list[list[int]] = []
        if path is not None:
            self.open(path)

    def __enter__(self) -> NBTWriter:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    @property
    def is_open(self) -> bool:
        """True while a file is being written."""
        return self._file is not None

    def open(self, path: str | os.PathLike[str]) -> None:
        """Start a new file at ``path``; does nothing if a file is already open."""
        if self._file is not None:
            return
        self._file = open(path, "wb")
        self._stack = []
        self._count = 0
        self._write(bytes([TagType.COMPOUND, 0, 0]))

    def close(self) -> int:
        """End the root compound, close the file and return the bytes written."""
        if self._file is not None:
            if self._stack and self.allow_emergency_fill:
                self._emergency_fill()
            self._write(bytes([TagType.END]))
            self._file.close()
            self._file = None
        return self._count

    def byte_count(self) -> int:
        """Number of bytes written so far."""
        return self._count

    def is_in_compound(self) -> bool:
        """True if the next tag goes into a compound (the root included)."""
        return not self._stack or self._stack[-1][0] == TagType.END

    def is_in_list(self) -> bool:
        """True if the next tag is an element of a list or array."""
        return not self.is_in_compound()

    def is_list_finished(self) -> bool:
        """True if the innermost list or array needs no more elements."""
        return not self._stack or self._stack[-1][1] <= 0

    def current_type(self) -> TagType:
        """Element type of the innermost list; END inside a compound."""
        if not self._stack:
            return TagType.END
        return TagType(self._stack[-1][0])

    def _write(self, data: bytes) -> int:
        assert self._file is not None
        self._file.write(data)
        self._count += len(data)
        return len(data)

    def _require_open(self) -> None:
        if self._file is None:
            raise ValueError("the writer is not open")

    def _type_matches(self, tag: TagType) -> bool:
        return bool(self._stack) and self._stack[-1][0] == tag

    def _push(self, tag: TagType, size: int) -> None:
        if len(self._stack) >= MAX_DEPTH:
            raise ValueError(f"tags nested deeper than {MAX_DEPTH}")
        self._stack.append([int(tag), size])

    def _element_written(self) -> None:
        if self.is_in_list() and not self.is_list_finished():
            self._stack[-1][1] -= 1
        if self.is_list_finished():
            self._end_list()

    def _end_list(self) -> None:
        if self.is_in_list() and self.is_list_finished():
            self._stack.pop()
            self._element_written()

    def _mismatch(self, tag: TagType) -> ValueError:
        return ValueError(f"cannot write a {tag.name} tag into a list of {self.current_type().name}")

    @staticmethod
    def _header(tag: TagType, name: str) -> bytes:
        encoded = _encode(name, "tag name")
        return bytes([tag]) + struct.pack(">h", len(encoded)) + encoded

    def _write_single(self, tag: TagType, name: str, payload: bytes) -> int:
        self._require_open()
        if self.is_in_compound():
            return self._write(self._header(tag, name) + payload)
        if self._type_matches(tag):
            written = self._write(payload)
            self._element_written()
            return written
        raise self._mismatch(tag)

    def write_byte(self, name: str, value: int) -> int:
        """Write a byte tag; returns the bytes written."""
        return self._write_single(TagType.BYTE, name, _pack(">b", value))

    def write_short(self, name: str, value: int) -> int:
        """Write a short tag; returns the bytes written."""
        return self._write_single(TagType.SHORT, name, _pack(">h", value))

    def write_int(self, name: str, value: int) -> int:
        """Write an int tag; returns the bytes written."""
        return self._write_single(TagType.INT, name, _pack(">i", value))

    def write_long(self, name: str, value: int) -> int:
        """Write a long tag; returns the bytes written."""
        return self._write_single(TagType.LONG, name, _pack(">q", value))

    def write_long_directly(self, name: str, value: int) -> int:
        """Write a long tag whose value is stored in native byte order, unswapped."""
        return self._write_single(TagType.LONG, name, _pack("=q", value))

    def write_float(self, name: str, value: float) -> int:
        """Write a float tag; returns the bytes written."""
        return self._write_single(TagType.FLOAT, name, _pack(">f", value))

    def write_double(self, name: str, value: float) -> int:
        """Write a double tag; returns the bytes written."""
        return self._write_single(TagType.DOUBLE, name, _pack(">d", value))

    def write_string(self, name: str, value: str) -> int:
        """Write a string tag; returns the bytes written."""
        self._require_open()
        encoded = _encode(value, "string value")
        payload = struct.pack(">h", len(encoded)) + encoded
        if self.is_in_compound():
            written = self._write(self._header(TagType.STRING, name) + payload)
        elif self._type_matches(TagType.STRING):
            written = self._write(payload)
        else:
            raise self._mismatch(TagType.STRING)
        self._element_written()
        return written

    def write_compound(self, name: str) -> int:
        """Open a compound; as a list element it writes nothing and returns 0."""
        self._require_open()
        if self.is_in_compound():
            written = self._write(self._header(TagType.COMPOUND, name))
            self._push(TagType.END, 0)
            return written
        if self._type_matches(TagType.COMPOUND):
            self._push(TagType.END, 0)
            return 0
        raise self._mismatch(TagType.COMPOUND)

    def end_compound(self) -> int:
        """End the innermost open compound; returns the bytes written."""
        self._require_open()
        if not self._stack or not self.is_in_compound():
            raise ValueError("no compound is open here")
        written = self._write(bytes([TagType.END]))
        self._stack.pop()
        self._element_written()
        return written

    def _write_sequence_head(
        self, tag: TagType, name: str, element: TagType, prefix: bytes, size: int
    ) -> int:
        self._require_open()
        if size < 0:
            raise ValueError(f"negative length {size}")
        payload = prefix + _pack(">i", size)
        if self.is_in_compound():
            written = self._write(self._header(tag, name) + payload)
        elif self._type_matches(tag):
            written = self._write(payload)
        else:
            raise self._mismatch(tag)
        self._push(element, size)
        if size == 0:
            self._element_written()
        return written

    def write_list_head(self, name: str, type_id: TagType | int, size: int) -> int:
        """Open a list of ``size`` elements of ``type_id``."""
        element = TagType(type_id)
        return self._write_sequence_head(TagType.LIST, name, element, bytes([element]), size)

    def write_byte_array_head(self, name: str, size: int) -> int:
        """Open a byte array; its elements are written with :meth:`write_byte`."""
        return self._write_sequence_head(TagType.BYTE_ARRAY, name, TagType.BYTE, b"", size)

    def write_int_array_head(self, name: str, size: int) -> int:
        """Open an int array; its elements are written with :meth:`write_int`."""
        return self._write_sequence_head(TagType.INT_ARRAY, name, TagType.INT, b"", size)

    def write_long_array_head(self, name: str, size: int) -> int:
        """Open a long array; its elements are written with :meth:`write_long`."""
        return self._write_sequence_head(TagType.LONG_ARRAY, name, TagType.LONG, b"", size)

    def _emergency_fill(self) -> int:
        fillers = {
            TagType.BYTE: lambda: self.write_byte("autoByte", 114),
            TagType.SHORT: lambda: self.write_short("autoShort", 514),
            TagType.INT: lambda: self.write_int("autoInt", 114514),
            TagType.LONG: lambda: self.write_long("autoLong", 1919810),
            TagType.FLOAT: lambda: self.write_float("autoFloat", 114.514),
            TagType.DOUBLE: lambda: self.write_double("autoDouble", 1919810.114514),
            TagType.BYTE_ARRAY: lambda: self.write_byte_array_head("autoByteArray", 1),
            TagType.STRING: lambda: self.write_string("autoString", "autoString"),
            TagType.LIST: lambda: self.write_list_head("autoList", TagType.INT, 1),
            TagType.COMPOUND: lambda: self.write_compound("autoCompound"),
            TagType.INT_ARRAY: lambda: self.write_int_array_head("autoIntArray", 1),
            TagType.LONG_ARRAY: lambda: self.write_long_array_head("autoLongArray", 1),
        }
        written = 0
        while self._stack:
            if self.is_in_compound():
                written += self.end_compound()
                continue
            element = self.current_type()
            filler = fillers.get(element)
            if filler is None:
                _log.warning("dropping an unfinished list of %s tags", element.name)
                self._stack.pop()
                self._element_written()
                continue
            _log.warning("emergency fill wrote a %s tag", element.name)
            written += filler()
        written += self.write_string(
            "Warning",
            "The NBT writer was closed with tags still open; "
            "the file format was completed automatically instead of manually.",
        )
        _log.warning("emergency fill finished")
        return written