"""
Read-through accessors for single-class detail views. Nothing here is persisted.
"""

from __future__ import annotations

from typing import Any, Optional

from upstream.dnd_api import UpstreamClient


class ClassQueryFacade:
    """
    Each method returns the upstream JSON for one class resource, or None
    when upstream does not know the class. Empty indices raise
    InvalidArgument and connection errors propagate unchanged.
    """

    def __init__(self, client: UpstreamClient):
        self.client = client

    def detail(self, index: str) -> Optional[Any]:
        return self.client.get_class(index)

    def features(self, index: str) -> Optional[Any]:
        return self.client.get_class_resource(index, "features")

    def multiclassing(self, index: str) -> Optional[Any]:
        return self.client.get_class_resource(index, "multiclassing")

    def proficiencies(self, index: str) -> Optional[Any]:
        return self.client.get_class_resource(index, "proficiencies")

    def spellcasting(self, index: str) -> Optional[Any]:
        return self.client.get_class_resource(index, "spellcasting")

    def spells(self, index: str) -> Optional[Any]:
        return self.client.get_class_resource(index, "spells")

    def subclasses(self, index: str) -> Optional[Any]:
        return self.client.get_class_resource(index, "subclasses")
