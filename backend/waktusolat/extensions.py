# waktusolat/extensions.py

from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address
from redis import from_url


class FlaskRedis:
    """
    Lazily configured Redis client for the month schedule cache.

    Socket timeouts come from config so that an unreachable Redis fails fast
    and the schedule store can fall back to the database within a request.
    """
    def __init__(self, app=None):
        self.redis_client = None
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        timeout = app.config.get('REDIS_SOCKET_TIMEOUT')
        self.redis_client = from_url(
            app.config.get('REDIS_URL'),
            socket_timeout=timeout,
            socket_connect_timeout=timeout,
        )

    @property
    def is_configured(self):
        return self.redis_client is not None

    def __getattr__(self, name):
        if self.redis_client is None:
            raise RuntimeError("Redis client used before init_app().")
        return getattr(self.redis_client, name)


db = SQLAlchemy()

migrate = Migrate()

# Default limits come from RATELIMIT_DEFAULT in config.
limiter = Limiter(key_func=get_remote_address)

redis_client = FlaskRedis()
