"""Cached "is there a newer release" check.

The latest release tag is fetched at most once a day and stored in a small
JSON file; a run only ever reads the cached answer and refreshes it in the
background for next time.
"""
import json
import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

import requests


log = logging.getLogger(__name__)

CACHE_PATH = Path.home() / '.iconwolf' / 'update-check.json'
CACHE_TTL_SECONDS = 24 * 60 * 60
FETCH_TIMEOUT_SECONDS = 5
RELEASES_URL = 'https://api.github.com/repos/MrDemonWolf/iconwolf/releases/latest'


@dataclass(frozen=True)
class UpdateInfo:
    update_available: bool
    current_version: str
    latest_version: str


def is_newer_version(current: str, latest: str) -> bool:
    current_parts = [int(p) for p in current.split('.')]
    latest_parts = [int(p) for p in latest.split('.')]
    length = max(len(current_parts), len(latest_parts))
    current_parts += [0] * (length - len(current_parts))
    latest_parts += [0] * (length - len(latest_parts))
    return latest_parts > current_parts


def load_cache() -> Dict[str, object]:
    if CACHE_PATH.exists():
        with CACHE_PATH.open('r', encoding='utf-8') as f:
            return json.load(f)
    return {}


def save_cache(data: Dict[str, object]) -> None:
    CACHE_PATH.parent.mkdir(parents=True, exist_ok=True)
    with CACHE_PATH.open('w', encoding='utf-8') as f:
        json.dump(data, f)


def read_cached_update_info(current_version: str) -> Optional[UpdateInfo]:
    """Return what the cache knows about newer releases, or None if it knows nothing usable."""
    try:
        data = load_cache()
        latest = data.get('latestVersion') if isinstance(data, dict) else None
        if not isinstance(latest, str) or not latest:
            return None
        return UpdateInfo(is_newer_version(current_version, latest), current_version, latest)
    except (OSError, ValueError) as e:
        log.debug('Ignoring unreadable update cache: %s', e)
        return None


def fetch_latest_version() -> Optional[str]:
    """Latest release version without a leading ``v``, or None when it cannot be determined."""
    try:
        response = requests.get(
            RELEASES_URL,
            headers={'Accept': 'application/vnd.github.v3+json'},
            timeout=FETCH_TIMEOUT_SECONDS,
        )
        if not response.ok:
            return None
        body = response.json()
        tag = body.get('tag_name') if isinstance(body, dict) else None
    except (requests.RequestException, ValueError) as e:
        log.debug('Update check failed: %s', e)
        return None
    if not isinstance(tag, str) or not tag:
        return None
    return tag[1:] if tag.startswith('v') else tag


def cache_is_fresh() -> bool:
    try:
        return time.time() - CACHE_PATH.stat().st_mtime < CACHE_TTL_SECONDS
    except OSError:
        return False


def refresh_cache(force: bool = False) -> Optional[str]:
    if not force and cache_is_fresh():
        return None
    latest = fetch_latest_version()
    if latest is None:
        return None
    try:
        save_cache({'latestVersion': latest, 'checkedAt': int(time.time() * 1000)})
    except OSError as e:
        log.debug('Could not write update cache: %s', e)
    return latest


def refresh_cache_in_background() -> threading.Thread:
    t = threading.Thread(target=refresh_cache, daemon=True)
    t.start()
    return t
