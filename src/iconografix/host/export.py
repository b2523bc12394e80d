"""Add-to-host export action.

Takes the current selection, resolves the first item's SVG through the
registry and sends it to the host. Only one item is ever sent per action;
larger selections are reported to the host through batch metadata.
"""

from __future__ import annotations

import base64
import re
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

from .. import __version__
from ..errors import HostMessagingError
from ..logging import get_logger
from .messaging import HostMessagingChannel

if TYPE_CHECKING:
    from ..catalog.models import ItemRecord
    from ..catalog.registry import ProviderRegistry
    from ..selection import SelectionStore

logger = get_logger("host.export")

PLUGIN_NAME = "Iconografix"
DATA_URI_PREFIX = "data:image/svg+xml;base64,"

_WHITESPACE = re.compile(r"\s+")


def encode_svg_data_uri(markup: str) -> str:
    """Collapse whitespace in ``markup`` and wrap it as a base64 data URI."""
    clean = _WHITESPACE.sub(" ", re.sub(r"[\r\n]", "", markup)).strip()
    encoded = base64.b64encode(clean.encode("utf-8")).decode("ascii")
    return DATA_URI_PREFIX + encoded


def build_metadata(item: "ItemRecord", batch_total: int = 1) -> Dict[str, Any]:
    """Metadata sent alongside an item; batch fields only for multi-item selections."""
    meta: Dict[str, Any] = {
        "name": item.display_name,
        "provider": item.provider_id,
        "fileName": item.export_file_name,
        "plugin": PLUGIN_NAME,
        "version": __version__,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if batch_total > 1:
        meta["batchTotal"] = batch_total
        meta["batchIndex"] = 1
        meta["message"] = f"Selected {batch_total} icons - adding first one"
    return meta


async def resolve_content(item: "ItemRecord", registry: "ProviderRegistry") -> str:
    if item.cached_content:
        return item.cached_content
    return await registry.get_svg_content(item)


async def add_selection_to_host(
    selection: "SelectionStore",
    registry: "ProviderRegistry",
    channel: HostMessagingChannel,
    target_origin: Optional[str] = None,
) -> Optional[dict]:
    """Send the first selected item to the host, then clear the selection.

    Returns the dispatched envelope, or None when nothing was sent. Failures
    are logged and not retried; the selection is cleared either way.
    """
    items = selection.snapshot()
    if not items:
        return None

    first = items[0]
    try:
        content = await resolve_content(first, registry)
        if not content:
            raise HostMessagingError(f"No SVG content received for {first.name}")
        envelope = channel.send_add_object(
            encode_svg_data_uri(content),
            build_metadata(first, batch_total=len(items)),
            target_origin,
        )
    except HostMessagingError as e:
        logger.error("Failed to add %s to host: %s", first.name, e)
        envelope = None
    else:
        if len(items) > 1:
            logger.info("Sent first icon from batch of %d: %s", len(items), first.display_name)
        else:
            logger.info("Sent icon: %s", first.display_name)
    finally:
        selection.clear()

    return envelope
