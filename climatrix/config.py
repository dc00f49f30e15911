"""
Configuration settings for the Climatrix climate-monitoring API
"""
import os


class Config:
    """Flask application configuration"""

    # Flask secret key (CHANGE THIS IN PRODUCTION!)
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'climatrix.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Redis cache
    REDIS_URL = os.environ.get('REDIS_URL') or 'redis://localhost:6379/0'
    CACHE_SOCKET_TIMEOUT = float(os.environ.get('CACHE_SOCKET_TIMEOUT') or 2)
    CACHE_TTL_SHORT = int(os.environ.get('CACHE_TTL_SHORT') or 300)
    CACHE_TTL_MEDIUM = int(os.environ.get('CACHE_TTL_MEDIUM') or 1800)
    CACHE_TTL_LONG = int(os.environ.get('CACHE_TTL_LONG') or 3600)

    # JWT auth, carried in an HTTP-only cookie
    JWT_SECRET = os.environ.get('JWT_SECRET') or 'your-secret-key-min-32-characters-long'
    JWT_EXPIRES_IN = os.environ.get('JWT_EXPIRES_IN') or '7d'
    JWT_ALGORITHM = 'HS256'
    AUTH_COOKIE_NAME = 'auth-token'
    AUTH_COOKIE_SECURE = os.environ.get('AUTH_COOKIE_SECURE', '').lower() in ('1', 'true', 'yes')

    # OpenWeatherMap API configuration
    # Get your free API key from: https://openweathermap.org/api
    WEATHER_API_KEY = os.environ.get('WEATHER_API_KEY')
    WEATHER_API_URL = os.environ.get('WEATHER_API_URL') or 'https://api.openweathermap.org/data/2.5'
    WEATHER_TIMEOUT = 6

    # Allowed origin for browser clients
    APP_URL = os.environ.get('APP_URL') or '*'

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    REDIS_URL = 'redis://localhost:6379/15'
    JWT_SECRET = 'test-secret-key-that-is-at-least-32-chars'
    WEATHER_API_KEY = 'test-weather-key'
    WEATHER_API_URL = 'https://weather.test/data/2.5'
