"""Client overtime rules resolution with a time-boxed cache.

Rules come from each client's ot_rules.xlsx in the document store. Loading
is slow (remote read + workbook parse), so results are cached per client.
Any failure to load falls back to DEFAULT_RULES; report submission must
never be blocked by a missing or broken workbook.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass

from app.core.config import (
    OT_RULES_PATH_TEMPLATE,
    RULES_CACHE_TTL_SECONDS,
    RULES_SOURCE_CACHE,
    RULES_SOURCE_DEFAULT,
)
from app.core.models import DEFAULT_RULES, OvertimeRules
from app.core.rules_parser import RulesParseError, parse_overtime_rules_from_bytes
from app.core.types import ConfigLoader

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CachedRules:
    rules: OvertimeRules
    loaded_at: float


@dataclass(frozen=True)
class RulesLoaded:
    rules: OvertimeRules
    path: str


@dataclass(frozen=True)
class RulesLoadFailed:
    path: str
    reason: str
    error: Exception | None = None


RulesLoadResult = RulesLoaded | RulesLoadFailed


@dataclass(frozen=True)
class ResolvedRules:
    """Rules plus where they came from ("default", "cache" or the workbook path)."""

    rules: OvertimeRules
    source: str


class RulesCache:
    """
    In-memory cache of client rules keyed by client name (case-sensitive).

    Entries expire ttl_seconds after they were stored and are always
    replaced whole.
    """

    def __init__(self, ttl_seconds: float = RULES_CACHE_TTL_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CachedRules] = {}

    def get(self, client_name: str) -> OvertimeRules | None:
        entry = self._entries.get(client_name)
        if entry is None:
            return None
        if self._clock() - entry.loaded_at >= self.ttl_seconds:
            del self._entries[client_name]
            return None
        return entry.rules

    def put(self, client_name: str, rules: OvertimeRules) -> None:
        self._entries[client_name] = CachedRules(rules=rules, loaded_at=self._clock())

    def clear(self, client_name: str | None = None) -> None:
        if client_name:
            self._entries.pop(client_name, None)
        else:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)


class ClientRulesProvider:
    """
    Resolves OvertimeRules for a client.

    The cache is injected so each process (or test) owns its own.
    Concurrent requests for the same uncached client may both hit the
    loader; the last one to finish wins.
    """

    def __init__(self, cache: RulesCache | None = None, path_template: str = OT_RULES_PATH_TEMPLATE):
        self.cache = cache if cache is not None else RulesCache()
        self.path_template = path_template

    def config_path(self, client_name: str) -> str:
        return self.path_template.format(client_name=client_name)

    async def load_client_rules(self, client_name: str, loader: ConfigLoader) -> RulesLoadResult:
        """Load and parse a client's workbook, bypassing the cache."""
        path = self.config_path(client_name)
        logger.info("Loading OT rules from: %s", path)

        try:
            data = await loader(path)
        except Exception as e:
            return RulesLoadFailed(path=path, reason="loader error", error=e)

        if not data:
            return RulesLoadFailed(path=path, reason="not found")

        try:
            rules = parse_overtime_rules_from_bytes(data)
        except RulesParseError as e:
            return RulesLoadFailed(path=path, reason="unreadable workbook", error=e)
        except Exception as e:
            return RulesLoadFailed(path=path, reason="invalid rules", error=e)

        return RulesLoaded(rules=rules, path=path)

    async def resolve_client_rules(self, client_name: str | None, loader: ConfigLoader) -> ResolvedRules:
        if not client_name:
            return ResolvedRules(rules=DEFAULT_RULES, source=RULES_SOURCE_DEFAULT)

        cached = self.cache.get(client_name)
        if cached is not None:
            logger.debug("Using cached OT rules for client: %s", client_name)
            return ResolvedRules(rules=cached, source=RULES_SOURCE_CACHE)

        result = await self.load_client_rules(client_name, loader)

        if isinstance(result, RulesLoadFailed):
            logger.warning(
                "Could not load OT rules for %s (%s), using defaults",
                client_name,
                result.reason,
                exc_info=result.error,
                extra={"extra_fields": {"client_name": client_name, "path": result.path}},
            )
            return ResolvedRules(rules=DEFAULT_RULES, source=RULES_SOURCE_DEFAULT)

        self.cache.put(client_name, result.rules)
        return ResolvedRules(rules=result.rules, source=result.path)

    async def get_client_rules(self, client_name: str | None, loader: ConfigLoader) -> OvertimeRules:
        """
        Rules for a client, from cache or freshly loaded.

        Args:
            client_name: Client name; empty or None means default rules
            loader: Reads a document by path, returns None if missing

        Returns:
            The client's rules, or DEFAULT_RULES if they cannot be loaded
        """
        resolved = await self.resolve_client_rules(client_name, loader)
        return resolved.rules

    def clear_client_rules_cache(self, client_name: str | None = None) -> None:
        """Drop one client's cached rules, or all of them. Call after a workbook changes."""
        self.cache.clear(client_name)
        logger.info("Cleared OT rules cache for %s", client_name or "all clients")
