import os
from dotenv import load_dotenv

# Load .env file
dotenv_path = os.path.join(os.path.dirname(os.path.dirname(__file__)), '.env')
if os.path.exists(dotenv_path):
    load_dotenv(dotenv_path)
else:
    print("Warning: .env file not found. Using defaults or environment variables.")

DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')


def _env_bool(name, default):
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """Base configuration."""
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'a_default_fallback_secret_key_for_development_only'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    LOG_LEVEL = "INFO"

    # Sentry Configuration
    SENTRY_DSN = os.environ.get('SENTRY_DSN')

    # Rate limiting
    RATELIMIT_DEFAULT = os.environ.get('RATELIMIT_DEFAULT', "600 per minute")

    # Redis and Caching Configuration
    # Used for Celery broker, result backend, and the month schedule read-through cache.
    REDIS_URL = os.environ.get('REDIS_URL') or 'redis://localhost:6379/0'
    SCHEDULE_CACHE_ENABLED = _env_bool('SCHEDULE_CACHE_ENABLED', True)
    REDIS_TTL_MONTH_SCHEDULE = int(os.environ.get('REDIS_TTL_MONTH_SCHEDULE', 60 * 60 * 24))
    REDIS_SOCKET_TIMEOUT = float(os.environ.get('REDIS_SOCKET_TIMEOUT', 2.0))

    # Celery Configuration
    CELERY_BROKER_URL = os.environ.get('CELERY_BROKER_URL') or REDIS_URL
    CELERY_RESULT_BACKEND = os.environ.get('CELERY_RESULT_BACKEND') or REDIS_URL
    # Yearly prefetch of next year's schedules for every zone (month, day, hour in ZONE_TIMEZONE).
    PREFETCH_SCHEDULE = {'month_of_year': '12', 'day_of_month': '1', 'hour': '3', 'minute': '0'}

    # All stored prayer times are civil times in this zone.
    ZONE_TIMEZONE = os.environ.get('ZONE_TIMEZONE', 'Asia/Kuala_Lumpur')

    # Gazetteer data files
    ZONES_DATA_PATH = os.environ.get('ZONES_DATA_PATH') or os.path.join(DATA_DIR, 'zones.json')
    BOUNDARY_DATA_PATH = os.environ.get('BOUNDARY_DATA_PATH') or os.path.join(DATA_DIR, 'boundaries.geojson')

    # Upstream JAKIM e-solat API (used only for ingestion)
    ESOLAT_API_BASE_URL = os.environ.get('ESOLAT_API_BASE_URL') or "https://www.e-solat.gov.my/index.php"
    ESOLAT_API_TIMEOUT = int(os.environ.get('ESOLAT_API_TIMEOUT', 30))

    # Printable schedule
    JADUAL_TITLE = "Jadual Waktu Solat"
    JADUAL_BRANDING = "Waktu Solat Malaysia"


class DevelopmentConfig(Config):
    FLASK_ENV = 'development'
    DEBUG = True
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///waktusolat.db'
    LOG_LEVEL = "DEBUG"


class ProductionConfig(Config):
    FLASK_ENV = 'production'
    DEBUG = False
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL')


class TestingConfig(Config):
    TESTING = True
    # Use an in-memory SQLite database for tests to ensure speed and isolation.
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    RATELIMIT_ENABLED = False  # Disable rate limiting for tests
    SCHEDULE_CACHE_ENABLED = False
    SECRET_KEY = 'test-secret-key'


config_by_name = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
    'default': DevelopmentConfig
}
