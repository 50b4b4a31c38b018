"""Read-only wardrobe sources producing snapshots for outfit generation."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

import requests

from models.wardrobe_item import WardrobeItem, from_raw_metadata
from tools.observability import instrument_tool

LOGGER = logging.getLogger(__name__)


class WardrobeSourceError(Exception):
    """Raised when the wardrobe backend cannot produce a snapshot."""


def coerce_items(raw_items: Iterable[Dict[str, Any]]) -> List[WardrobeItem]:
    """Build items from loose payloads, skipping the malformed ones."""

    items = []
    for raw in raw_items:
        try:
            items.append(from_raw_metadata(raw))
        except (TypeError, ValueError, AttributeError) as exc:
            LOGGER.warning("Skipping wardrobe entry due to validation error: %s", exc)
    return items


class WardrobeSource(ABC):
    """Read interface over the external wardrobe store."""

    @abstractmethod
    def list_items(self, user_id: str) -> List[WardrobeItem]:
        """Return the user's wardrobe snapshot."""


class InMemoryWardrobeSource(WardrobeSource):
    """Wardrobe snapshots held in memory, keyed by user."""

    def __init__(self, wardrobes: Optional[Dict[str, List[Dict[str, Any]]]] = None) -> None:
        self.wardrobes = wardrobes or {}

    def add_items(self, user_id: str, raw_items: Iterable[Dict[str, Any]]) -> None:
        self.wardrobes.setdefault(user_id, []).extend(raw_items)

    def list_items(self, user_id: str) -> List[WardrobeItem]:
        return coerce_items(self.wardrobes.get(user_id, []))


class HttpWardrobeSource(WardrobeSource):
    """Wardrobe snapshots fetched from the wardrobe REST backend."""

    def __init__(self, base_url: str, token: str | None = None, timeout_seconds: float = 5.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.token = token
        self.timeout_seconds = timeout_seconds

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    @instrument_tool("list_wardrobe_items")
    def list_items(self, user_id: str) -> List[WardrobeItem]:
        url = f"{self.base_url}/api/wardrobe"
        try:
            response = requests.get(
                url, params={"userId": user_id}, headers=self._headers(), timeout=self.timeout_seconds
            )
            response.raise_for_status()
            payload = response.json()
        except requests.RequestException as exc:
            raise WardrobeSourceError(f"Wardrobe backend unreachable: {exc}") from exc
        except ValueError as exc:
            raise WardrobeSourceError("Wardrobe backend returned invalid JSON") from exc

        if isinstance(payload, dict):
            payload = payload.get("items", [])
        if not isinstance(payload, list):
            raise WardrobeSourceError("Unexpected wardrobe payload shape")
        items = coerce_items(entry for entry in payload if isinstance(entry, dict))
        LOGGER.info("Fetched %s wardrobe items", len(items))
        return items


__all__ = [
    "WardrobeSource",
    "WardrobeSourceError",
    "InMemoryWardrobeSource",
    "HttpWardrobeSource",
    "coerce_items",
]
