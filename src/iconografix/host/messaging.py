"""Host messaging channel.

Delivers an ``ADD_OBJECT`` envelope to the application embedding Iconografix.
The envelope shape is the contract with the host:

    {"type": "ADD_OBJECT",
     "payload": {"dataString": "data:image/svg+xml;base64,...",
                 "type": "stickerbox",
                 "metaData": {...}}}

Sends are fire-and-forget; the host never answers on this channel.
"""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, Any, Dict, Optional, Protocol
from urllib.parse import urlparse

import requests

from ..errors import HostMessagingError
from ..logging import get_logger

logger = get_logger("host.messaging")

WILDCARD_ORIGIN = "*"
STICKERBOX = "stickerbox"


class HostMessageType(str, Enum):
    ADD_OBJECT = "ADD_OBJECT"


@dataclass
class AddObjectMessage:
    """Typed ``ADD_OBJECT`` envelope."""
    data_string: str
    meta_data: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "type": HostMessageType.ADD_OBJECT.value,
            "payload": {
                "dataString": self.data_string,
                "type": STICKERBOX,
                "metaData": self.meta_data,
            },
        }


def origin_of(url: str) -> str:
    """Return scheme://host[:port] for ``url``."""
    u = urlparse(url)
    return f"{u.scheme}://{u.netloc}" if u.scheme and u.netloc else ""


class HostTransport(Protocol):
    """Delivers a serialized envelope to the parent context."""

    def dispatch(self, message: dict, target_origin: str) -> None:
        ...


class StreamTransport:
    """Writes one JSON line per message to a text stream (stdout by default).

    Used when the host drives Iconografix as a child process.
    """

    def __init__(self, stream: Optional[IO[str]] = None):
        self._stream = stream

    def dispatch(self, message: dict, target_origin: str) -> None:
        stream = self._stream or sys.stdout
        line = json.dumps({"targetOrigin": target_origin, "message": message})
        stream.write(line + "\n")
        stream.flush()


class HttpTransport:
    """POSTs messages to a host endpoint.

    Like a browser's postMessage, delivery only happens when the endpoint
    belongs to the target origin (or the origin is the wildcard).
    """

    def __init__(self, endpoint: str, timeout_s: float = 10.0, session: Optional[requests.Session] = None):
        self.endpoint = endpoint
        self.timeout_s = timeout_s
        self._session = session or requests.Session()
        self._session.headers["Content-Type"] = "application/json"

    def dispatch(self, message: dict, target_origin: str) -> None:
        if target_origin != WILDCARD_ORIGIN and origin_of(self.endpoint) != target_origin:
            raise HostMessagingError(
                f"Endpoint {self.endpoint} does not match target origin {target_origin}"
            )
        try:
            response = self._session.post(self.endpoint, json=message, timeout=self.timeout_s)
            response.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise HostMessagingError(f"Dispatch to {self.endpoint} failed: {e}")


class HostMessagingChannel:
    """Typed outbound channel bound to an allowed host origin.

    In production the origin must be an exact origin; the wildcard is
    refused both at construction and per send.
    """

    def __init__(self, transport: HostTransport, target_origin: str, production: bool = False):
        self._transport = transport
        self.production = production
        self.target_origin = self._check_origin(target_origin)

    def _check_origin(self, origin: str) -> str:
        origin = (origin or "").strip()
        if not origin:
            if self.production:
                raise HostMessagingError("A host origin is required in production")
            return WILDCARD_ORIGIN
        if origin == WILDCARD_ORIGIN and self.production:
            raise HostMessagingError("Wildcard host origin is not allowed in production")
        return origin

    def send_add_object(
        self,
        encoded_content: str,
        metadata: Optional[Dict[str, Any]] = None,
        target_origin: Optional[str] = None,
    ) -> dict:
        """Build and dispatch an ``ADD_OBJECT`` envelope; returns it."""
        origin = self._check_origin(target_origin) if target_origin else self.target_origin
        envelope = AddObjectMessage(data_string=encoded_content, meta_data=dict(metadata or {})).to_dict()
        try:
            self._transport.dispatch(envelope, origin)
        except HostMessagingError:
            raise
        except Exception as e:
            raise HostMessagingError(f"Failed to send message to host: {e}")
        logger.debug("Sent %s to %s", HostMessageType.ADD_OBJECT.value, origin)
        return envelope
