"""Icon sets shipped with Iconografix."""

from __future__ import annotations

from enum import Enum
from typing import Dict, List, Tuple

from .models import ProviderDescriptor, join_location


class KnownProvider(str, Enum):
    """Identifiers of the bundled icon sets."""
    BOOTSTRAP = "BOOTSTRAP"
    FEATHER = "FEATHER"
    GILBARBARA = "GILBARBARA"
    HEROICONS = "HEROICONS"
    ICONOIR = "ICONOIR"
    SIMPLE_ICONS = "SIMPLE_ICONS"
    BRAND_LOGOS = "BRAND_LOGOS"
    TABLER = "TABLER"


# (display name, asset directory) per provider, in registration order
BUILTIN_PROVIDERS: Dict[KnownProvider, Tuple[str, str]] = {
    KnownProvider.BOOTSTRAP: ("Bootstrap", "bootstrap"),
    KnownProvider.FEATHER: ("Feather", "feather"),
    KnownProvider.GILBARBARA: ("Gilbarbara", "gilbarbara"),
    KnownProvider.HEROICONS: ("Heroicons", "heroicons-24-solid"),
    KnownProvider.ICONOIR: ("Iconoir", "iconoir"),
    KnownProvider.SIMPLE_ICONS: ("Simple Icons", "simple-icons"),
    KnownProvider.BRAND_LOGOS: ("Brand Logos", "simple-svg-brand-logos"),
    KnownProvider.TABLER: ("Tabler", "tabler"),
}


def builtin_descriptors(assets_path: str) -> List[ProviderDescriptor]:
    """Descriptors for every bundled icon set rooted at ``assets_path``."""
    return [
        ProviderDescriptor(
            id=provider.value,
            display_name=display_name,
            base_path=join_location(assets_path, directory),
        )
        for provider, (display_name, directory) in BUILTIN_PROVIDERS.items()
    ]
