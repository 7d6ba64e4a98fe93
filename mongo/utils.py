import os
import redis
from typing import Any

__all__ = [
    'RedisCache',
]


class Singleton(type):
    _instances = {}

    def __call__(cls, *args, **kwargs):
        if cls not in cls._instances:
            cls._instances[cls] = super().__call__(*args, **kwargs)
        return cls._instances[cls]


class RedisCache(metaclass=Singleton):
    POOL = None

    def __new__(cls) -> Any:
        if cls.POOL is None:
            cls.HOST = os.getenv('REDIS_HOST')
            cls.PORT = os.getenv('REDIS_PORT')
            cls.POOL = redis.ConnectionPool(
                host=cls.HOST,
                port=cls.PORT,
                db=0,
            )
        return super().__new__(cls)

    def __init__(self) -> None:
        self._client = None

    @property
    def client(self):
        if self._client is None:
            if self.PORT is None:
                import fakeredis
                self._client = fakeredis.FakeStrictRedis()
            else:
                self._client = redis.Redis(connection_pool=self.POOL)
        return self._client
