import os


class BaseConfig:
    """Base configuration shared across all environments."""

    # Flask core
    SECRET_KEY = os.environ.get('SECRET_KEY', 'fallback-secret-key-change-me')

    # AI provider settings
    AI_PROVIDER = os.environ.get('AI_PROVIDER', 'gemini')
    AI_MODEL = os.environ.get('AI_MODEL', '')

    # AI API keys
    GEMINI_API_KEY = os.environ.get('GEMINI_API_KEY', '')
    ANTHROPIC_API_KEY = os.environ.get('ANTHROPIC_API_KEY', '')
    OPENAI_API_KEY = os.environ.get('OPENAI_API_KEY', '')

    # Gemini endpoint override (e.g. a regional proxy)
    GEMINI_BASE_URL = os.environ.get('GEMINI_BASE_URL', '')

    # Seconds before a provider call is abandoned
    LLM_TIMEOUT = float(os.environ.get('LLM_TIMEOUT', '30'))

    # Default number of local recommendations
    RECOMMENDATION_COUNT = int(os.environ.get('RECOMMENDATION_COUNT', '5'))

    # File logging (disabled when max bytes is 0)
    LOG_FILE_MAX_BYTES = int(os.environ.get('LOG_FILE_MAX_BYTES', '0'))
    LOG_FILE_BACKUP_COUNT = int(os.environ.get('LOG_FILE_BACKUP_COUNT', '3'))
    LOG_FORMAT = os.environ.get(
        'LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
    )


class DevelopmentConfig(BaseConfig):
    """Development environment configuration."""

    DEBUG = True


class ProductionConfig(BaseConfig):
    """Production environment configuration."""

    DEBUG = False
    LOG_FILE_MAX_BYTES = int(os.environ.get('LOG_FILE_MAX_BYTES', str(5 * 1024 * 1024)))


class TestingConfig(BaseConfig):
    """Testing environment configuration."""

    TESTING = True
    DEBUG = True
    SECRET_KEY = 'test-secret-key'
    AI_PROVIDER = 'gemini'
    GEMINI_API_KEY = 'test-gemini-key'
    GEMINI_BASE_URL = ''
    LOG_FILE_MAX_BYTES = 0
    SERVER_NAME = 'localhost'


config_map = {
    'development': DevelopmentConfig,
    'production': ProductionConfig,
    'testing': TestingConfig,
}
