# tests/conftest.py
"""Shared test helpers."""

import pytest
import redis


class FakeRedis:
    """Minimal dict-backed stand-in for the redis client."""

    def __init__(self):
        self.data = {}

    def get(self, key):
        return self.data.get(key)

    def set(self, key, value):
        self.data[key] = value.encode() if isinstance(value, str) else value

    def delete(self, key):
        self.data.pop(key, None)


class DownRedis(FakeRedis):
    """Every call fails as if the server were unreachable."""

    def get(self, key):
        raise redis.ConnectionError("down")

    def set(self, key, value):
        raise redis.ConnectionError("down")


@pytest.fixture
def fake_redis():
    return FakeRedis()


@pytest.fixture
def down_redis():
    return DownRedis()
