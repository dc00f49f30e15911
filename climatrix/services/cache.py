"""
Cache Service

Cache-aside helper over Redis. Cache failures never fail a request: reads
degrade to a miss and write-backs are skipped.
"""

import json
import logging

import redis
from flask import current_app

logger = logging.getLogger(__name__)

EXTENSION_KEY = 'climatrix_cache'

TTL_BUCKETS = ('short', 'medium', 'long')


class CacheService:
    """Redis-backed JSON cache with TTL buckets and pattern invalidation."""

    def __init__(self, app=None):
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Create the Redis client for ``app`` from ``REDIS_URL``.

        The client connects lazily, so an unreachable server only shows up
        as errors on individual commands.
        """
        timeout = app.config.get('CACHE_SOCKET_TIMEOUT', 2)
        client = redis.Redis.from_url(
            app.config['REDIS_URL'],
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
            decode_responses=True,
        )
        app.extensions[EXTENSION_KEY] = client

    @property
    def client(self):
        return current_app.extensions[EXTENSION_KEY]

    def ttl_seconds(self, ttl):
        if isinstance(ttl, int):
            return ttl
        if ttl not in TTL_BUCKETS:
            raise ValueError(f'Unknown TTL bucket: {ttl}')
        return current_app.config[f'CACHE_TTL_{ttl.upper()}']

    def get(self, key):
        try:
            data = self.client.get(key)
        except redis.RedisError as e:
            logger.warning('Cache get error for key %s: %s', key, e)
            return None
        if data is None:
            return None
        try:
            return json.loads(data)
        except ValueError:
            logger.warning('Discarding corrupt cache entry %s', key)
            return None

    def set(self, key, value, ttl='medium'):
        try:
            self.client.setex(key, self.ttl_seconds(ttl), json.dumps(value))
            return True
        except redis.RedisError as e:
            logger.warning('Cache set error for key %s: %s', key, e)
            return False

    def delete(self, key):
        try:
            self.client.delete(key)
            return True
        except redis.RedisError as e:
            logger.warning('Cache delete error for key %s: %s', key, e)
            return False

    def delete_pattern(self, pattern):
        """Delete every key matching ``pattern``; returns how many were removed."""
        try:
            keys = list(self.client.scan_iter(match=pattern))
            if keys:
                self.client.delete(*keys)
            return len(keys)
        except redis.RedisError as e:
            logger.warning('Cache delete pattern error for %s: %s', pattern, e)
            return 0

    def invalidate(self, resource, id=None):
        patterns = [f'{resource}:*', f'{resource}:list:*']
        if id is not None:
            patterns.insert(1, f'{resource}:{id}')
        for pattern in patterns:
            self.delete_pattern(pattern)

    def remember(self, key, ttl, compute):
        """Cache-aside read: return ``(value, hit)``.

        On a miss ``compute()`` supplies the value, which is then stored.
        Exceptions from ``compute`` propagate and nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached, True

        value = compute()
        self.set(key, value, ttl)
        return value, False

    def ping(self):
        try:
            return bool(self.client.ping())
        except redis.RedisError:
            return False
