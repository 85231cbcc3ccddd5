"""Shared fixtures: ID vectors and protobuf metadata messages."""

import types

import pytest
from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

_BYTES = descriptor_pb2.FieldDescriptorProto.TYPE_BYTES
_STRING = descriptor_pb2.FieldDescriptorProto.TYPE_STRING

# Field layout of the metadata messages the adapters read from.
_MESSAGES = {
    "Album": [("gid", _BYTES)],
    "Artist": [("gid", _BYTES)],
    "ArtistWithRole": [("artist_gid", _BYTES)],
    "Episode": [("gid", _BYTES)],
    "Show": [("gid", _BYTES)],
    "Track": [("gid", _BYTES)],
    "TrackRef": [("gid", _BYTES), ("uri", _STRING)],
    "Item": [("uri", _STRING)],
    "MetaItem": [("revision", _BYTES)],
    "SelectedListContent": [("revision", _BYTES)],
    "TranscodedPicture": [("uri", _STRING)],
    "Image": [("file_id", _BYTES)],
    "AudioFile": [("file_id", _BYTES)],
    "VideoFile": [("file_id", _BYTES)],
}

TRACK_BASE62 = "5sWHDYs0csV6RS48xBl0tH"
TRACK_HEX = "b39fe8081e1f4c54be38e8d6f9f12bb9"
TRACK_INT = 238762092608182713602505436543891614649
TRACK_RAW = bytes([
    179, 159, 232, 8, 30, 31, 76, 84, 190, 56, 232, 214, 249, 241, 43, 185
])

ITEM_BASE62 = "4GNcXTGWmnZ3ySrqvol3o4"
ITEM_HEX = "9a1b1cfbc6f244569ae0356c77bbe9d8"
ITEM_INT = 204841891221366092811751085145916697048
ITEM_RAW = bytes([
    154, 27, 28, 251, 198, 242, 68, 86, 154, 224, 53, 108, 119, 187, 233, 216
])

PLAYLIST_BASE62 = "37i9dQZF1DWSw8liJZcPOI"
PLAYLIST_INT = 136159921382084734723401526672209703396


def _build_messages():
    file_proto = descriptor_pb2.FileDescriptorProto(
        name="spotify_uri_test_metadata.proto",
        package="spotify_uri.test",
        syntax="proto2",
    )
    for name, fields in _MESSAGES.items():
        message = file_proto.message_type.add(name=name)
        for number, (field_name, field_type) in enumerate(fields, start=1):
            message.field.add(
                name=field_name,
                number=number,
                type=field_type,
                label=descriptor_pb2.FieldDescriptorProto.LABEL_OPTIONAL,
            )
    pool = descriptor_pool.DescriptorPool()
    pool.AddSerializedFile(file_proto.SerializeToString())
    return types.SimpleNamespace(**{
        name: message_factory.GetMessageClass(
            pool.FindMessageTypeByName("spotify_uri.test." + name))
        for name in _MESSAGES
    })


@pytest.fixture(scope="session")
def metadata():
    """Message classes shaped like the client's metadata protobufs."""
    return _build_messages()
