"""Tests for Redis caching implementation."""

import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient
from redis.exceptions import ConnectionError as RedisConnectionError

from clinica.core.redis_client import CacheManager


def test_cache_manager_get_json():
    """Test CacheManager get_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    # Test cache miss
    mock_redis.get.return_value = None
    result = cache_manager.get_json("test_key")
    assert result is None
    mock_redis.get.assert_called_once_with("test_key")

    # Test cache hit
    mock_redis.reset_mock()
    mock_redis.get.return_value = '{"name": "Sede Centro", "value": 123}'
    result = cache_manager.get_json("test_key")
    assert result == {"name": "Sede Centro", "value": 123}
    mock_redis.get.assert_called_once_with("test_key")


def test_cache_manager_set_json():
    """Test CacheManager set_json method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    test_data = {"name": "Sede Centro", "value": 123}

    # Test without TTL
    result = cache_manager.set_json("test_key", test_data)
    assert result is True
    mock_redis.set.assert_called_once()

    # Test with TTL
    mock_redis.reset_mock()
    result = cache_manager.set_json("test_key", test_data, ttl=300)
    assert result is True
    mock_redis.setex.assert_called_once()


def test_cache_manager_delete():
    """Test CacheManager delete method."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    result = cache_manager.delete("test_key")
    assert result is True
    mock_redis.delete.assert_called_once_with("test_key")


def test_cache_manager_delete_many():
    """Several keys are dropped in one call."""
    mock_redis = MagicMock()
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.delete("sede:list", "company:feet-care-main") is True
    mock_redis.delete.assert_called_once_with("sede:list", "company:feet-care-main")


@pytest.mark.asyncio
async def test_get_or_load_hit_skips_loader():
    """A hit never calls the loader."""
    mock_redis = MagicMock()
    mock_redis.get.return_value = '{"id": "feet-care-main"}'
    loader = AsyncMock()

    result = await CacheManager(mock_redis).get_or_load("company:feet-care-main", loader)

    assert result == {"id": "feet-care-main"}
    loader.assert_not_called()


@pytest.mark.asyncio
async def test_get_or_load_miss_stores_result():
    """A miss awaits the loader and caches its result; None is not cached."""
    mock_redis = MagicMock()
    mock_redis.get.return_value = None
    cache_manager = CacheManager(mock_redis)

    result = await cache_manager.get_or_load("sede:list", AsyncMock(return_value=[]), ttl=300)
    missing = await cache_manager.get_or_load("company:x", AsyncMock(return_value=None))

    assert result == []
    assert missing is None
    mock_redis.setex.assert_called_once_with("sede:list", 300, "[]")
    mock_redis.set.assert_not_called()


def test_cache_manager_failures_are_soft():
    """An unreachable Redis reads as a miss and writes report False."""
    mock_redis = MagicMock()
    mock_redis.get.side_effect = RedisConnectionError("down")
    mock_redis.setex.side_effect = RedisConnectionError("down")
    mock_redis.delete.side_effect = RedisConnectionError("down")
    cache_manager = CacheManager(redis_client=mock_redis)

    assert cache_manager.get_json("sede:list") is None
    assert cache_manager.set_json("sede:list", [], ttl=60) is False
    assert cache_manager.delete("sede:list") is False


@pytest.mark.asyncio
async def test_sede_list_served_from_cache(
    client: AsyncClient, admin_headers: dict, mock_redis: MagicMock
):
    """A cached sede list is returned without touching the database."""
    cached = [
        {
            "id": "sede-cache",
            "name": "Sede en caché",
            "address": "Jr. Cusco 10",
            "phone": None,
            "whatsapp": None,
            "availability": {},
            "company_id": "feet-care-main",
        }
    ]
    mock_redis.get.side_effect = lambda key: json.dumps(cached) if key == "sede:list" else None

    response = await client.get("/api/v1/sedes/", headers=admin_headers)

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == ["sede-cache"]


@pytest.mark.asyncio
async def test_sede_list_cached_after_miss(
    client: AsyncClient, admin_headers: dict, sede_centro: dict, mock_redis: MagicMock
):
    """A miss loads from the database and stores the list with a TTL."""
    response = await client.get("/api/v1/sedes/", headers=admin_headers)

    assert response.status_code == 200
    key, ttl, payload = mock_redis.setex.call_args.args
    assert key == "sede:list"
    assert ttl == 300
    assert json.loads(payload)[0]["id"] == sede_centro["id"]
