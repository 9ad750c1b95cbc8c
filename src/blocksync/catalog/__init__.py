"""Model catalog — live Bedrock listing with a static fallback."""

from blocksync.catalog.fallback import KNOWN_MODELS, fallback_descriptors
from blocksync.catalog.models import CatalogOrigin, CatalogResult, ModelDescriptor
from blocksync.catalog.source import CatalogSource, CatalogUnavailable

__all__ = [
    "KNOWN_MODELS",
    "CatalogOrigin",
    "CatalogResult",
    "CatalogSource",
    "CatalogUnavailable",
    "ModelDescriptor",
    "fallback_descriptors",
]
