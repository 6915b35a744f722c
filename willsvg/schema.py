"""
Protobuf schema for the stroke records stored in ``sections/media/*.protobuf``.

Each record is one ``WacomInkFormat.Path`` message. Only ``decimalprecision``
and ``points`` matter for rendering; the remaining fields are declared so the
message round-trips cleanly.

The message class is built at runtime from a descriptor instead of shipping
generated ``_pb2`` code. ``path_message_class()`` performs that setup once and
every decode call goes through it.
"""

from __future__ import annotations

import functools
from dataclasses import dataclass
from typing import Sequence, Tuple

from google.protobuf import descriptor_pb2, descriptor_pool, message, message_factory

PACKAGE = "WacomInkFormat"
MESSAGE_NAME = "Path"
DEFAULT_DECIMAL_PRECISION = 2

_F = descriptor_pb2.FieldDescriptorProto

# (name, number, type, label, default)
_PATH_FIELDS = (
    ("startparameter", 1, _F.TYPE_FLOAT, _F.LABEL_OPTIONAL, "0"),
    ("endparameter", 2, _F.TYPE_FLOAT, _F.LABEL_OPTIONAL, "1"),
    ("decimalprecision", 3, _F.TYPE_UINT32, _F.LABEL_OPTIONAL, str(DEFAULT_DECIMAL_PRECISION)),
    ("points", 4, _F.TYPE_SINT32, _F.LABEL_REPEATED, None),
    ("strokewidths", 5, _F.TYPE_SINT32, _F.LABEL_REPEATED, None),
    ("strokecolor", 6, _F.TYPE_SINT32, _F.LABEL_REPEATED, None),
)


class PathSchemaError(ValueError):
    """The payload bytes are not a valid ``Path`` message."""


@dataclass(frozen=True)
class PathRecord:
    decimal_precision: int
    points: Tuple[int, ...]


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    proto = descriptor_pb2.FileDescriptorProto()
    proto.name = "will.proto"
    proto.package = PACKAGE
    proto.syntax = "proto2"
    path = proto.message_type.add()
    path.name = MESSAGE_NAME
    for name, number, ftype, label, default in _PATH_FIELDS:
        field = path.field.add()
        field.name = name
        field.number = number
        field.type = ftype
        field.label = label
        if default is not None:
            field.default_value = default
        if label == _F.LABEL_REPEATED:
            field.options.packed = True
    return proto


@functools.lru_cache(maxsize=None)
def path_message_class() -> type:
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(_file_descriptor().SerializeToString())
    descriptor = pool.FindMessageTypeByName(f"{PACKAGE}.{MESSAGE_NAME}")
    return message_factory.GetMessageClass(descriptor)


def parse_path(payload: bytes) -> PathRecord:
    msg = path_message_class()()
    try:
        msg.ParseFromString(payload)
    except message.DecodeError as exc:
        raise PathSchemaError(f"not a valid {PACKAGE}.{MESSAGE_NAME} record ({len(payload)} bytes): {exc}") from exc
    return PathRecord(decimal_precision=msg.decimalprecision, points=tuple(msg.points))


def encode_path(
    points: Sequence[int],
    *,
    decimal_precision: int | None = None,
    start_parameter: float | None = None,
    end_parameter: float | None = None,
) -> bytes:
    msg = path_message_class()()
    if decimal_precision is not None:
        msg.decimalprecision = decimal_precision
    if start_parameter is not None:
        msg.startparameter = start_parameter
    if end_parameter is not None:
        msg.endparameter = end_parameter
    msg.points.extend(int(value) for value in points)
    return msg.SerializeToString()
