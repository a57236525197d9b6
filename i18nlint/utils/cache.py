"""Lint cache: skip re-linting files that have not changed.

Findings are stored per file in a MessagePack file under the scan root,
together with the fingerprint of the options they were produced with. A
different fingerprint (options, type use, analyzer version) discards the
whole cache.
"""

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path

import msgpack

from i18nlint import __version__
from i18nlint.logging import logger
from i18nlint.models.options import LintOptions

CACHE_DIRNAME = ".i18nlint"

# Lint cache version - bump when cache format changes
LINT_CACHE_VERSION = "1.0"


@dataclass
class FileCacheEntry:
    """Cache entry for a single linted file."""

    mtime: float  # File modification time
    size: int  # File size in bytes
    language: str
    findings: list[dict]  # Finding.model_dump(mode="json")
    content_hash: str = ""  # SHA256 of file contents


@dataclass
class LintCache:
    """Cached findings of one scan root."""

    version: str
    fingerprint: str
    created_at: str  # ISO timestamp
    files: dict[str, FileCacheEntry]  # relative path -> cache entry


def get_cache_path(root: Path) -> Path:
    """Path to the lint cache file (MessagePack format) for a scan root."""
    return root / CACHE_DIRNAME / "lint_cache.msgpack"


def options_fingerprint(options: LintOptions, use_types: bool = True) -> str:
    """Stable hash of everything that changes lint results besides the source."""
    payload = json.dumps(
        {
            "options": options.model_dump(mode="json"),
            "use_types": use_types,
            "version": __version__,
        },
        sort_keys=True,
    )
    return hashlib.sha256(payload.encode()).hexdigest()[:16]


def compute_file_hash(filepath: Path) -> str:
    """SHA256 hex digest of a file's contents, or empty string on error."""
    try:
        with filepath.open("rb") as f:
            return hashlib.sha256(f.read()).hexdigest()
    except OSError:
        return ""


def load_lint_cache(root: Path, fingerprint: str) -> LintCache | None:
    """Load cached findings if the cache is valid for this fingerprint.

    Args:
        root: Scan root.
        fingerprint: Fingerprint of the current options.

    Returns:
        LintCache if the cache exists and matches, None otherwise.
    """
    cache_path = get_cache_path(root)
    if not cache_path.exists():
        return None

    try:
        with cache_path.open("rb") as f:
            data = msgpack.unpack(f, raw=False)

        if data.get("version") != LINT_CACHE_VERSION:
            logger.info("  Lint cache version mismatch, ignoring cache")
            return None
        if data.get("fingerprint") != fingerprint:
            logger.info("  Lint options changed, ignoring cache")
            return None

        files = {
            path: FileCacheEntry(
                mtime=entry["mtime"],
                size=entry["size"],
                language=entry["language"],
                findings=entry["findings"],
                content_hash=entry.get("content_hash", ""),
            )
            for path, entry in data.get("files", {}).items()
        }
        return LintCache(
            version=data["version"],
            fingerprint=data["fingerprint"],
            created_at=data["created_at"],
            files=files,
        )

    except (OSError, msgpack.UnpackException, msgpack.ExtraData, KeyError, TypeError, ValueError) as e:
        logger.warning("  Failed to load lint cache: %s", e)
        return None


def save_lint_cache(root: Path, cache: LintCache) -> None:
    """Save the lint cache using MessagePack format."""
    cache_path = get_cache_path(root)

    try:
        cache_path.parent.mkdir(parents=True, exist_ok=True)

        data = {
            "version": cache.version,
            "fingerprint": cache.fingerprint,
            "created_at": cache.created_at,
            "files": {
                path: {
                    "mtime": entry.mtime,
                    "size": entry.size,
                    "language": entry.language,
                    "findings": entry.findings,
                    "content_hash": entry.content_hash,
                }
                for path, entry in cache.files.items()
            },
        }

        with cache_path.open("wb") as f:
            msgpack.pack(data, f)

        logger.info("  Saved lint cache with %d files (msgpack)", len(cache.files))

    except OSError as e:
        logger.warning("  Failed to save lint cache: %s", e)


def is_file_stale(file_path: Path, cache_key: str, cache: LintCache) -> bool:
    """Check if a file needs re-linting based on mtime/size and content hash.

    Uses a two-level check:
    1. Fast path: If mtime and size match, file is not stale.
    2. Content hash: If only mtime differs but content hash matches, file is
       not stale (git checkout, touch).

    Args:
        file_path: The absolute file path to stat.
        cache_key: The relative path string used as cache key.
        cache: The current lint cache.

    Returns:
        True if file is stale (needs re-linting), False if cache is valid.
    """
    entry = cache.files.get(cache_key)
    if entry is None:
        return True

    try:
        stat = file_path.stat()
    except OSError:
        return True

    if stat.st_mtime == entry.mtime and stat.st_size == entry.size:
        return False

    if stat.st_size != entry.size:
        return True

    if entry.content_hash:
        current_hash = compute_file_hash(file_path)
        if current_hash and current_hash == entry.content_hash:
            # Content unchanged, refresh mtime to avoid rehashing next time
            entry.mtime = stat.st_mtime
            return False

    return True
