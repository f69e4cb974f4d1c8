import json

import pytest

from mobile_version.cache import FileCache, _lock_for
from mobile_version.models import Platform


@pytest.fixture
def cache_file(tmp_path):
    return tmp_path / "versions.json"


@pytest.fixture
def cache(cache_file, clock):
    return FileCache(cache_file, clock=clock)


def test_lookup_without_file_is_miss(cache, cache_file):
    assert not cache_file.exists()
    assert cache.lookup("com.example.app", Platform.IOS) is None


def test_lookup_after_store_returns_version(cache):
    assert cache.store("com.example.app", Platform.IOS, "1.2.3", 600) is True
    assert cache.lookup("com.example.app", Platform.IOS) == "1.2.3"


def test_lookup_after_store_with_one_second_ttl(cache, clock):
    clock.now = clock.now.replace(microsecond=999999)
    cache.store("com.example.app", Platform.IOS, "1.2.3", 1)
    assert cache.lookup("com.example.app", Platform.IOS) == "1.2.3"


def test_expired_entry_is_miss(cache, clock):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)

    clock.advance(599)
    assert cache.lookup("com.example.app", Platform.IOS) == "1.2.3"

    clock.advance(1)
    assert cache.lookup("com.example.app", Platform.IOS) is None


def test_file_format(cache, cache_file):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)

    data = json.loads(cache_file.read_text(encoding="utf-8"))

    assert data == {
        "com.example.app": {
            "ios": {"expired_at": "2026-01-01 12:10:00", "version": "1.2.3"},
        },
    }


def test_store_twice_keeps_one_entry_with_later_expiry(cache, cache_file, clock):
    cache.store("com.example.app", Platform.ANDROID, "2.0.0", 600)
    clock.advance(100)
    cache.store("com.example.app", Platform.ANDROID, "2.0.0", 600)

    data = json.loads(cache_file.read_text(encoding="utf-8"))

    assert list(data) == ["com.example.app"]
    assert data["com.example.app"] == {
        "android": {"expired_at": "2026-01-01 12:11:40", "version": "2.0.0"},
    }
    assert len(cache.entries()) == 1


def test_store_leaves_other_keys_untouched(cache, cache_file):
    existing = {
        "com.other.app": {
            "ios": {"expired_at": "2030-01-01 00:00:00", "version": "9.9.9"},
        },
        "com.example.app": {
            "android": {"expired_at": "2030-01-01 00:00:00", "version": "3.0.0"},
        },
    }
    cache_file.write_text(json.dumps(existing), encoding="utf-8")

    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)

    data = json.loads(cache_file.read_text(encoding="utf-8"))
    assert data["com.other.app"] == existing["com.other.app"]
    assert data["com.example.app"]["android"] == existing["com.example.app"]["android"]
    assert data["com.example.app"]["ios"]["version"] == "1.2.3"


@pytest.mark.parametrize("content", ["{not json", "[1, 2, 3]", "", '{"com.example.app": "oops"}'])
def test_malformed_file_is_miss(cache, cache_file, content):
    cache_file.write_text(content, encoding="utf-8")

    assert cache.lookup("com.example.app", Platform.IOS) is None


def test_store_replaces_corrupt_file(cache, cache_file):
    cache_file.write_text("{not json", encoding="utf-8")

    assert cache.store("com.example.app", Platform.IOS, "1.2.3", 600) is True
    assert cache.lookup("com.example.app", Platform.IOS) == "1.2.3"


def test_platforms_are_separate(cache):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)

    assert cache.lookup("com.example.app", Platform.ANDROID) is None


def test_store_failure_returns_false(tmp_path, clock):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("", encoding="utf-8")
    cache = FileCache(blocker / "versions.json", clock=clock)

    assert cache.store("com.example.app", Platform.IOS, "1.2.3", 600) is False
    assert cache.lookup("com.example.app", Platform.IOS) is None


@pytest.mark.parametrize("ttl", [10**12, 10**15])
def test_store_with_out_of_range_ttl_returns_false(cache, cache_file, ttl):
    assert cache.store("com.example.app", Platform.IOS, "1.2.3", ttl) is False
    assert not cache_file.exists()


def test_out_of_range_ttl_keeps_existing_entry(cache):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)

    assert cache.store("com.example.app", Platform.IOS, "1.3.0", 10**12) is False
    assert cache.lookup("com.example.app", Platform.IOS) == "1.2.3"


def test_instances_share_lock_per_path(cache_file, tmp_path):
    assert _lock_for(cache_file) is _lock_for(tmp_path / "." / "versions.json")
    assert _lock_for(cache_file) is not _lock_for(tmp_path / "other.json")


def test_store_leaves_no_temp_file(cache, cache_file):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)

    assert [p.name for p in cache_file.parent.iterdir()] == ["versions.json"]


def test_get_entry_returns_expired_entries(cache, clock):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 10)
    clock.advance(60)

    entry = cache.get_entry("com.example.app", Platform.IOS)

    assert entry is not None
    assert entry.version == "1.2.3"
    assert not entry.is_fresh(clock())


def test_clear_single_application(cache):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)
    cache.store("com.example.app", Platform.ANDROID, "1.2.4", 600)
    cache.store("com.other.app", Platform.IOS, "5.0.0", 600)

    assert cache.clear("com.example.app") == 2
    assert cache.lookup("com.example.app", Platform.IOS) is None
    assert cache.lookup("com.other.app", Platform.IOS) == "5.0.0"


def test_clear_everything(cache):
    cache.store("com.example.app", Platform.IOS, "1.2.3", 600)
    cache.store("com.other.app", Platform.ANDROID, "5.0.0", 600)

    assert cache.clear() == 2
    assert cache.entries() == []


def test_clear_unknown_application(cache):
    assert cache.clear("com.missing.app") == 0
