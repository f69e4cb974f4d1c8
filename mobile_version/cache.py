"""File-based version cache.

The whole cache lives in one JSON document shaped like::

    {
        "<bundle id>": {
            "ios": {"expired_at": "YYYY-MM-DD HH:MM:SS", "version": "1.2.3"},
            "android": {...}
        }
    }

Timestamps are naive local time. Every store rewrites the whole document
through a temporary file, so readers never see a half-written file. Writers in
the same process are serialized per path; writers in different processes are
not, and the last one to finish wins.

The per-path locks live for the whole process: one is kept for every distinct
cache path ever used, so a process that cycles through many cache files keeps
growing that table.
"""

import json
import threading
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable, Optional, Union

from .logging_config import get_logger
from .models import CacheEntry, Platform

logger = get_logger(__name__)

_path_locks: dict[Path, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    key = path.resolve()
    with _path_locks_guard:
        if key not in _path_locks:
            _path_locks[key] = threading.Lock()
        return _path_locks[key]


class FileCache:
    """Version cache backed by a single JSON file."""

    def __init__(
        self,
        path: Union[str, Path],
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the cache.

        Args:
            path: Location of the cache file. It is created on first store.
            clock: Returns the current naive local time.
        """
        self.path = Path(path)
        self._clock = clock

    def lookup(self, application_id: str, platform: Platform) -> Optional[str]:
        """Return the cached version if it has not expired yet."""
        entry = self.get_entry(application_id, platform)

        if entry is None:
            logger.debug("Cache miss for %s (%s)", application_id, platform.value)
            return None

        if not entry.is_fresh(self._clock()):
            logger.debug(
                "Cache entry for %s (%s) expired at %s",
                application_id, platform.value, entry.expires_at,
            )
            return None

        logger.debug("Cache hit for %s (%s): %s", application_id, platform.value, entry.version)
        return entry.version

    def get_entry(self, application_id: str, platform: Platform) -> Optional[CacheEntry]:
        """Return the stored entry for a key, fresh or not."""
        document = self._load()
        platforms = document.get(application_id)

        if not isinstance(platforms, dict):
            return None

        return CacheEntry.from_dict(application_id, platform, platforms.get(platform.value))

    def store(
        self,
        application_id: str,
        platform: Platform,
        version: str,
        ttl_seconds: int,
    ) -> bool:
        """Save a version that stays valid for ``ttl_seconds``.

        Returns:
            True if the cache file was written, False otherwise.
        """
        try:
            expires_at = (self._clock() + timedelta(seconds=ttl_seconds)).replace(microsecond=0)
        except OverflowError:
            logger.warning(
                "Not caching %s (%s): a TTL of %s seconds is out of range",
                application_id, platform.value, ttl_seconds,
            )
            return False

        entry = CacheEntry(
            application_id=application_id,
            platform=platform,
            version=version,
            expires_at=expires_at,
        )

        with _lock_for(self.path):
            document = self._load()

            platforms = document.get(application_id)
            if not isinstance(platforms, dict):
                platforms = {}
                document[application_id] = platforms

            platforms[platform.value] = entry.to_dict()

            saved = self._save(document)

        if saved:
            logger.debug(
                "Cached %s (%s) = %s until %s",
                application_id, platform.value, version, expires_at,
            )
        return saved

    def entries(self) -> list[CacheEntry]:
        """Return every well-formed entry in the cache file."""
        result: list[CacheEntry] = []

        for application_id, platforms in self._load().items():
            if not isinstance(platforms, dict):
                continue
            for platform in Platform:
                entry = CacheEntry.from_dict(application_id, platform, platforms.get(platform.value))
                if entry is not None:
                    result.append(entry)

        return result

    def clear(self, application_id: Optional[str] = None) -> int:
        """Remove cached entries.

        Args:
            application_id: Only remove entries of this application. All
                entries are removed when omitted.

        Returns:
            Number of entries removed.
        """
        with _lock_for(self.path):
            document = self._load()

            if application_id is None:
                targets = list(document)
            else:
                targets = [application_id] if application_id in document else []

            removed = 0
            for key in targets:
                platforms = document.pop(key)
                if isinstance(platforms, dict):
                    removed += len(platforms)

            if targets:
                self._save(document)

        logger.info("Removed %d cache entries from %s", removed, self.path)
        return removed

    def _load(self) -> dict[str, Any]:
        """Read the cache document, treating any problem as an empty cache."""
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug("Ignoring unreadable cache file %s: %s", self.path, e)
            return {}

        if not isinstance(data, dict):
            logger.debug("Ignoring cache file %s with non-object root", self.path)
            return {}

        return data

    def _save(self, document: dict[str, Any]) -> bool:
        temp_file = self.path.with_name(self.path.name + ".tmp")

        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(temp_file, "w", encoding="utf-8") as f:
                json.dump(document, f, indent=2, ensure_ascii=False)

            temp_file.replace(self.path)
            return True

        except OSError as e:
            logger.warning("Failed to write cache file %s: %s", self.path, e)
            try:
                if temp_file.exists():
                    temp_file.unlink()
            except OSError:
                logger.debug("Could not remove temporary file %s", temp_file)
            return False
