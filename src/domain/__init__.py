"""Domain layer: errors and schemas."""

from .errors import AssetError, ErrorCodes
from .schemas import Asset, AssetServiceConfig, StoreEntry

__all__ = [
    "AssetError",
    "ErrorCodes",
    "Asset",
    "AssetServiceConfig",
    "StoreEntry",
]
