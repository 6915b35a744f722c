from __future__ import annotations

from typing import BinaryIO, Iterable, Iterator, List

MAX_VARINT_BYTES = 16


class TruncatedStreamError(EOFError):
    """The stream ended in the middle of a length prefix or a record payload."""


def _read(stream: BinaryIO, size: int) -> bytes:
    # Zip members whose recorded size outruns the real data raise a bare EOFError.
    try:
        return stream.read(size)
    except EOFError as exc:
        if isinstance(exc, TruncatedStreamError):
            raise
        raise TruncatedStreamError(f"underlying stream ended early: {exc}") from exc


def read_length(stream: BinaryIO) -> int:
    """
    Read one varint length prefix from ``stream``.

    Each byte contributes its low 7 bits, least significant group first. The
    high bit marks that another byte follows. At most ``MAX_VARINT_BYTES``
    bytes are consumed, so a corrupt run of continuation bytes cannot keep us
    reading forever.
    """

    value = 0
    for index in range(MAX_VARINT_BYTES):
        byte = _read(stream, 1)
        if not byte:
            raise TruncatedStreamError(f"stream ended after {index} byte(s) of a length prefix")
        data = byte[0]
        value |= (data & 0x7F) << (7 * index)
        if not data & 0x80:
            break
    return value


def read_payload(stream: BinaryIO, length: int) -> bytes:
    if length < 0:
        raise ValueError(f"record length must be non-negative, got {length}")
    chunks: List[bytes] = []
    remaining = length
    while remaining:
        chunk = _read(stream, remaining)
        if not chunk:
            raise TruncatedStreamError(
                f"record announced {length} bytes but the stream ended after {length - remaining}"
            )
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


def iter_records(stream: BinaryIO) -> Iterator[bytes]:
    """Yield every record payload until a zero-length record ends the stream."""

    while True:
        length = read_length(stream)
        if length == 0:
            return
        yield read_payload(stream, length)


def encode_varint(value: int) -> bytes:
    if value < 0:
        raise ValueError("varints encode non-negative integers only")
    out = bytearray()
    while True:
        group = value & 0x7F
        value >>= 7
        if value:
            out.append(group | 0x80)
        else:
            out.append(group)
            return bytes(out)


def frame_records(payloads: Iterable[bytes], *, terminate: bool = True) -> bytes:
    """Length-prefix each payload and (by default) append the zero-length terminator."""

    out = bytearray()
    for payload in payloads:
        out.extend(encode_varint(len(payload)))
        out.extend(payload)
    if terminate:
        out.extend(encode_varint(0))
    return bytes(out)
