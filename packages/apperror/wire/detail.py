"""``apperror.v1.ErrorDetail`` protobuf message.

The message mirrors ``proto/apperror/v1/error_detail.proto``. Its descriptor is
registered in the default pool at import time so packed details resolve by
type URL like any generated message.
"""

from __future__ import annotations

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

PROTO_FILE = "apperror/v1/error_detail.proto"
PROTO_PACKAGE = "apperror.v1"
MESSAGE_NAME = f"{PROTO_PACKAGE}.ErrorDetail"

_Field = descriptor_pb2.FieldDescriptorProto


def _file_descriptor() -> descriptor_pb2.FileDescriptorProto:
    """Return the file descriptor for ``error_detail.proto``."""
    file_proto = descriptor_pb2.FileDescriptorProto(
        name=PROTO_FILE,
        package=PROTO_PACKAGE,
        syntax="proto3",
    )
    message = file_proto.message_type.add(name="ErrorDetail")

    entry = message.nested_type.add(name="FieldsEntry")
    entry.options.map_entry = True
    for number, name in enumerate(("key", "value"), start=1):
        entry.field.add(
            name=name,
            number=number,
            type=_Field.TYPE_STRING,
            label=_Field.LABEL_OPTIONAL,
            json_name=name,
        )

    for number, name in enumerate(("service", "code", "message"), start=1):
        message.field.add(
            name=name,
            number=number,
            type=_Field.TYPE_STRING,
            label=_Field.LABEL_OPTIONAL,
            json_name=name,
        )
    message.field.add(
        name="fields",
        number=4,
        type=_Field.TYPE_MESSAGE,
        label=_Field.LABEL_REPEATED,
        type_name=f".{MESSAGE_NAME}.FieldsEntry",
        json_name="fields",
    )
    return file_proto


def _message_class() -> type:
    """Register the descriptor once and return its message class."""
    pool = descriptor_pool.Default()
    try:
        descriptor = pool.FindMessageTypeByName(MESSAGE_NAME)
    except KeyError:
        pool.AddSerializedFile(_file_descriptor().SerializeToString())
        descriptor = pool.FindMessageTypeByName(MESSAGE_NAME)
    return message_factory.GetMessageClass(descriptor)


ErrorDetail = _message_class()
