"""
Download Cache Store

This module keeps one downloaded artifact per dependency key in the cache
directory and re-downloads it once it is older than the freshness window.
"""

import os
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Optional

import requests

from launcherdeps.utils.logger import get_logger

SECONDS_PER_DAY = 86400

# Cache expiration in days
DEFAULT_MAX_AGE_DAYS = 7


def is_fresh_timestamp(mtime: float, now: float, max_age_days: float = DEFAULT_MAX_AGE_DAYS) -> bool:
    """A cached file is fresh if it was modified strictly after now - max_age"""
    return mtime > now - max_age_days * SECONDS_PER_DAY


@dataclass
class FetchResult:
    """Outcome of ensuring a cached artifact"""
    success: bool
    path: Path
    downloaded: bool = False
    error: Optional[str] = None


class CacheStore:
    """
    Manages cached downloads keyed by dependency

    This class provides:
    - One file per key in the cache directory
    - Time-based freshness (files older than max_age_days are re-downloaded)
    - Streaming downloads written to a temporary file and renamed on success
    - A lock per key so concurrent setups don't write the same file at once
    """

    CHUNK_SIZE = 8192

    def __init__(self, cache_dir: Path, max_age_days: float = DEFAULT_MAX_AGE_DAYS,
                 timeout: Optional[float] = None):
        """
        Initialize cache store

        Args:
            cache_dir: Directory holding cached files
            max_age_days: Freshness window in days
            timeout: requests timeout in seconds, None waits indefinitely
        """
        self.logger = get_logger(__name__)
        self.cache_dir = Path(cache_dir)
        self.max_age_days = max_age_days
        self.timeout = timeout

        self._locks: Dict[str, threading.Lock] = {}
        self._locks_guard = threading.Lock()

    def path_for(self, key: str) -> Path:
        """Get the cache path for a key"""
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise ValueError(f"Invalid cache key: {key!r}")
        return self.cache_dir / key

    def _lock_for(self, key: str) -> threading.Lock:
        with self._locks_guard:
            if key not in self._locks:
                self._locks[key] = threading.Lock()
            return self._locks[key]

    def is_fresh(self, key: str, now: Optional[float] = None) -> bool:
        """Check whether the cached file for key exists and is within the freshness window"""
        path = self.path_for(key)
        try:
            mtime = path.stat().st_mtime
        except FileNotFoundError:
            return False

        if now is None:
            now = time.time()
        return is_fresh_timestamp(mtime, now, self.max_age_days)

    def ensure_cached(self, key: str, url: str, force: bool = False,
                      progress_callback: Optional[Callable] = None) -> FetchResult:
        """
        Make sure a fresh copy of url is cached under key

        Never raises; failures are returned in the result.

        Args:
            key: Dependency key (also the cached filename)
            url: Source URL
            force: Download even if the cached file is fresh
            progress_callback: Optional callback for progress (percent, current, total)

        Returns:
            FetchResult describing what happened
        """
        try:
            path = self.path_for(key)
        except ValueError as e:
            return FetchResult(success=False, path=self.cache_dir, error=str(e))

        with self._lock_for(key):
            try:
                if not force and self.is_fresh(key):
                    self.logger.info(f"Using cached {key}: {path}")
                    return FetchResult(success=True, path=path)

                try:
                    age_days = (time.time() - path.stat().st_mtime) / SECONDS_PER_DAY
                    self.logger.info(f"Cached {key} is {age_days:.1f} days old, downloading a new copy...")
                except FileNotFoundError:
                    self.logger.info(f"{key} not cached, downloading...")

                self._download(url, path, progress_callback)
            except Exception as e:
                # cache dir unusable (not a directory, permissions) or download failed
                self.logger.warning(f"Failed to cache {key} from {url}: {e}")
                return FetchResult(success=False, path=path, error=str(e))

        return FetchResult(success=True, path=path, downloaded=True)

    def _download(self, url: str, path: Path, progress_callback: Optional[Callable] = None):
        """Stream url into path via a temporary file"""
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        part_path = path.with_name(path.name + ".part")

        self.logger.info(f"Downloading {path.name} from {url}")
        response = requests.get(url, stream=True, timeout=self.timeout)
        try:
            response.raise_for_status()

            total_size = int(response.headers.get('content-length', 0) or 0)
            downloaded = 0

            with open(part_path, 'wb') as f:
                for chunk in response.iter_content(chunk_size=self.CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        downloaded += len(chunk)

                        if progress_callback and total_size > 0:
                            progress_callback((downloaded / total_size) * 100, downloaded, total_size)

            if total_size and downloaded != total_size:
                raise IOError(f"Incomplete download: got {downloaded} of {total_size} bytes")

            os.replace(part_path, path)
        except BaseException:
            part_path.unlink(missing_ok=True)
            raise
        finally:
            response.close()

        self.logger.info(f"Download complete: {path.name} ({downloaded} bytes)")

    def clear(self, key: Optional[str] = None) -> int:
        """
        Clear cached files

        Args:
            key: Specific key to clear, or None to clear everything

        Returns:
            Number of files removed
        """
        if key is not None:
            paths = [self.path_for(key)]
        elif self.cache_dir.exists():
            paths = [p for p in self.cache_dir.iterdir() if p.is_file()]
        else:
            paths = []

        removed = 0
        for path in paths:
            if not path.exists():
                continue
            try:
                path.unlink()
                removed += 1
                self.logger.info(f"Cleared cache: {path.name}")
            except OSError as e:
                self.logger.warning(f"Failed to clear {path.name}: {e}")
        return removed

    def get_cache_status(self) -> Dict[str, Any]:
        """Describe every cached file"""
        entries: Dict[str, Any] = {}
        now = time.time()

        if self.cache_dir.exists():
            for path in sorted(self.cache_dir.iterdir()):
                if not path.is_file() or path.name.endswith(".part"):
                    continue
                stat = path.stat()
                entries[path.name] = {
                    "path": str(path),
                    "size_mb": round(stat.st_size / (1024 * 1024), 2),
                    "age_days": round((now - stat.st_mtime) / SECONDS_PER_DAY, 1),
                    "fresh": is_fresh_timestamp(stat.st_mtime, now, self.max_age_days)
                }

        return {
            "cache_dir": str(self.cache_dir),
            "max_age_days": self.max_age_days,
            "entries": entries
        }
