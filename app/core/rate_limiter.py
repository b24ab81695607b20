from redis import Redis
from redis.exceptions import RedisError

from .logger import logger


class RateLimiter:
    """Ventana fija por cliente: INCR + PEXPIRE en Redis."""

    def __init__(self, client: Redis | None, limit: int, window_ms: int, prefix: str = "ratelimit"):
        self.client = client
        self.limit = limit
        self.window_ms = window_ms
        self.prefix = prefix

    def hit(self, key: str) -> bool:
        # Sin Redis no se bloquea a nadie
        if self.client is None:
            return True

        redis_key = f"{self.prefix}:{key}"
        try:
            count = self.client.incr(redis_key)
            if count == 1:
                self.client.pexpire(redis_key, self.window_ms)
            return count <= self.limit
        except RedisError as e:
            logger.warning(f"Rate limiter sin Redis, se permite la petición: {e}")
            return True

    def reset(self, key: str) -> None:
        if self.client is None:
            return
        try:
            self.client.delete(f"{self.prefix}:{key}")
        except RedisError as e:
            logger.warning(f"No se pudo reiniciar el rate limit de {key}: {e}")
