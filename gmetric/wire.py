"""Low-level XDR-style writers shared by the packet encoders.

Every field is written straight to a caller-supplied sink: any object with a
``write(bytes)`` method. A sink that raises, or that reports writing fewer
bytes than it was given, fails the write with :class:`SinkError` and the
caller's packet is abandoned at that point.
"""
import struct
from typing import Iterable, Tuple

from .errors import SinkError


UINT32_MASK = 0xFFFFFFFF
ALIGNMENT = 4

# Index by pad length (0-3)
PADDING = (b"", b"\x00", b"\x00\x00", b"\x00\x00\x00")

_UINT32 = struct.Struct(">I")


def pad_length(length: int) -> int:
    """Number of zero bytes needed to align length to 4 bytes"""
    return (ALIGNMENT - length % ALIGNMENT) % ALIGNMENT


def write_bytes(sink, data: bytes) -> None:
    """Write raw bytes, raising SinkError on any failure"""
    if not data:
        return
    try:
        written = sink.write(data)
    except Exception as e:
        raise SinkError(f"gmetric: sink write failed: {e}", cause=e) from e
    if isinstance(written, int) and written < len(data):
        raise SinkError(f"gmetric: short write ({written} of {len(data)} bytes)")


def pack_uint32(value: int) -> bytes:
    return _UINT32.pack(int(value) & UINT32_MASK)


def write_uint32(sink, value: int) -> None:
    """Write an unsigned 32-bit big-endian integer"""
    write_bytes(sink, pack_uint32(value))


def write_string(sink, value) -> None:
    """Write a length-prefixed string padded to a 4-byte boundary"""
    if isinstance(value, str):
        value = value.encode("utf-8")
    write_uint32(sink, len(value))
    write_bytes(sink, value)
    write_bytes(sink, PADDING[pad_length(len(value))])


def write_extras(sink, extras: Iterable[Tuple[str, str]]) -> None:
    """Write a counted list of NAME/VAL string pairs"""
    extras = list(extras)
    write_uint32(sink, len(extras))
    for name, val in extras:
        write_string(sink, name)
        write_string(sink, val)


def string_field_length(value) -> int:
    """Encoded size of a string field, including length word and padding"""
    if isinstance(value, str):
        value = value.encode("utf-8")
    return ALIGNMENT + len(value) + pad_length(len(value))
