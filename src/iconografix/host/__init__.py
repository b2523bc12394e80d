"""Embedding-host integration: the ADD_OBJECT channel and the export action."""

from .export import add_selection_to_host, build_metadata, encode_svg_data_uri
from .messaging import (
    AddObjectMessage,
    HostMessageType,
    HostMessagingChannel,
    HttpTransport,
    StreamTransport,
)

__all__ = [
    "AddObjectMessage",
    "HostMessageType",
    "HostMessagingChannel",
    "HttpTransport",
    "StreamTransport",
    "add_selection_to_host",
    "build_metadata",
    "encode_svg_data_uri",
]
