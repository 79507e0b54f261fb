import pytest
from unittest.mock import patch, AsyncMock, MagicMock


@pytest.mark.asyncio
async def test_init_redis_pings_and_stores_client():
    """init_redis should connect and keep the client for get_redis."""
    from sosgen import redis_client

    mock_client = MagicMock()
    mock_client.ping = AsyncMock(return_value=True)
    mock_client.close = AsyncMock()

    with patch("sosgen.redis_client.redis.from_url", return_value=mock_client) as mock_from_url:
        client = await redis_client.init_redis("redis://test:6379")
        assert client is mock_client
        assert redis_client.get_redis() is mock_client
        mock_from_url.assert_called_once_with(
            "redis://test:6379", encoding="utf-8", decode_responses=True
        )

        await redis_client.close_redis()
        mock_client.close.assert_awaited_once()


def test_get_redis_before_init_raises():
    from sosgen import redis_client

    with patch("sosgen.redis_client.redis_client", None):
        with pytest.raises(RuntimeError):
            redis_client.get_redis()


def test_redis_module_exists():
    """Redis client module should be importable."""
    from sosgen import redis_client
    assert hasattr(redis_client, "get_redis")
    assert hasattr(redis_client, "init_redis")
    assert hasattr(redis_client, "close_redis")
