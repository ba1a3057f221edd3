import json
import os
import time

from iconwolf import updates


def test_is_newer_version():
    assert updates.is_newer_version('0.0.6', '0.0.7') is True
    assert updates.is_newer_version('0.0.6', '0.1.0') is True
    assert updates.is_newer_version('0.0.6', '1.0.0') is True
    assert updates.is_newer_version('0.0.6', '0.0.6') is False
    assert updates.is_newer_version('0.0.7', '0.0.6') is False
    assert updates.is_newer_version('1.0', '1.0.1') is True
    assert updates.is_newer_version('1.0.1', '1.0') is False


def test_read_cached_update_info_missing(tmp_path, monkeypatch):
    monkeypatch.setattr(updates, 'CACHE_PATH', tmp_path / 'cache.json')
    assert updates.read_cached_update_info('0.0.6') is None


def test_read_cached_update_info_newer(tmp_path, monkeypatch):
    monkeypatch.setattr(updates, 'CACHE_PATH', tmp_path / 'cache.json')
    updates.save_cache({'latestVersion': '0.0.7', 'checkedAt': 0})
    info = updates.read_cached_update_info('0.0.6')
    assert info == updates.UpdateInfo(True, '0.0.6', '0.0.7')


def test_read_cached_update_info_same_version(tmp_path, monkeypatch):
    monkeypatch.setattr(updates, 'CACHE_PATH', tmp_path / 'cache.json')
    updates.save_cache({'latestVersion': '0.0.6', 'checkedAt': 0})
    assert updates.read_cached_update_info('0.0.6').update_available is False


def test_read_cached_update_info_corrupt_or_incomplete(tmp_path, monkeypatch):
    cache = tmp_path / 'cache.json'
    monkeypatch.setattr(updates, 'CACHE_PATH', cache)
    cache.write_text('not json{{{')
    assert updates.read_cached_update_info('0.0.6') is None
    cache.write_text(json.dumps({'checkedAt': 0}))
    assert updates.read_cached_update_info('0.0.6') is None
    cache.write_text(json.dumps({'latestVersion': 2}))
    assert updates.read_cached_update_info('0.0.6') is None
    cache.write_text(json.dumps(['0.0.7']))
    assert updates.read_cached_update_info('0.0.6') is None


def _fake_get(status_ok=True, body=None, calls=None):
    def fake_get(url, headers=None, timeout=None):
        if calls is not None:
            calls.append((url, headers, timeout))

        class Resp:
            ok = status_ok

            def json(self):
                return {} if body is None else body
        return Resp()
    return fake_get


def test_fetch_latest_version_strips_v(monkeypatch):
    calls = []
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body={'tag_name': 'v1.2.3'}, calls=calls))
    assert updates.fetch_latest_version() == '1.2.3'
    assert calls[0][0] == updates.RELEASES_URL
    assert calls[0][2] == 5


def test_fetch_latest_version_failures(monkeypatch):
    monkeypatch.setattr(updates.requests, 'get', _fake_get(status_ok=False))
    assert updates.fetch_latest_version() is None
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body={}))
    assert updates.fetch_latest_version() is None
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body=[{'tag_name': 'v1.0.0'}]))
    assert updates.fetch_latest_version() is None
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body={'tag_name': 7}))
    assert updates.fetch_latest_version() is None

    def raise_exc(*args, **kwargs):
        raise updates.requests.RequestException('boom')

    monkeypatch.setattr(updates.requests, 'get', raise_exc)
    assert updates.fetch_latest_version() is None


def test_refresh_cache_writes_latest(tmp_path, monkeypatch):
    cache = tmp_path / 'nested' / 'cache.json'
    monkeypatch.setattr(updates, 'CACHE_PATH', cache)
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body={'tag_name': 'v0.2.0'}))
    assert updates.refresh_cache() == '0.2.0'
    data = json.loads(cache.read_text())
    assert data['latestVersion'] == '0.2.0'
    assert isinstance(data['checkedAt'], int)


def test_refresh_cache_skips_fresh_cache(tmp_path, monkeypatch):
    cache = tmp_path / 'cache.json'
    monkeypatch.setattr(updates, 'CACHE_PATH', cache)
    updates.save_cache({'latestVersion': '0.1.0', 'checkedAt': 0})
    calls = []
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body={'tag_name': 'v9.9.9'}, calls=calls))
    assert updates.refresh_cache() is None
    assert calls == []


def test_refresh_cache_refetches_stale_cache(tmp_path, monkeypatch):
    cache = tmp_path / 'cache.json'
    monkeypatch.setattr(updates, 'CACHE_PATH', cache)
    updates.save_cache({'latestVersion': '0.1.0', 'checkedAt': 0})
    stale = time.time() - updates.CACHE_TTL_SECONDS - 60
    os.utime(cache, (stale, stale))
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body={'tag_name': '0.3.0'}))
    assert updates.refresh_cache() == '0.3.0'
    assert updates.read_cached_update_info('0.1.0').latest_version == '0.3.0'


def test_refresh_cache_in_background_runs_thread(tmp_path, monkeypatch):
    monkeypatch.setattr(updates, 'CACHE_PATH', tmp_path / 'cache.json')
    monkeypatch.setattr(updates.requests, 'get', _fake_get(body={'tag_name': 'v1.0.0'}))
    t = updates.refresh_cache_in_background()
    t.join(timeout=5)
    assert updates.read_cached_update_info('0.1.0').update_available is True
