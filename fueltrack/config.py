import os


class Config:
    """Application configuration from environment variables."""

    # Database
    DATABASE_URL = os.environ.get('DATABASE_URL', 'sqlite:///fueltrack.db')

    # Flask
    SECRET_KEY = os.environ.get('SECRET_KEY', 'dev-secret-key-change-in-production')
    FLASK_ENV = os.environ.get('FLASK_ENV', 'production')
    DEBUG = FLASK_ENV == 'development'

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')

    # API Configuration
    FLASK_HOST = os.environ.get('FLASK_HOST', '0.0.0.0')
    FLASK_PORT = int(os.environ.get('FLASK_PORT', 8080))
    API_MAX_HISTORY = int(os.environ.get('API_MAX_HISTORY', 500))

    # Presentation defaults
    DEFAULT_LANGUAGE = os.environ.get('DEFAULT_LANGUAGE', 'es')
    CURRENCY_SYMBOL = os.environ.get('CURRENCY_SYMBOL', '$')
    DEFAULT_WINDOW = os.environ.get('DEFAULT_WINDOW', 'last30days')

    # Explicit ranges up to this many days are bucketed per day
    DAILY_BUCKET_MAX_DAYS = 45
