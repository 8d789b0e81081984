from __future__ import annotations

from .metadata import MetadataClient

__all__ = ["MetadataClient"]
