import logging
import os

from logging.handlers import RotatingFileHandler

from dotenv import load_dotenv
from flask import Flask

from cfcoach.config import config_map

__version__ = '0.1.0'

# Flask config key holding the API key for each provider.
PROVIDER_KEY_MAP = {
    'gemini': 'GEMINI_API_KEY',
    'claude': 'ANTHROPIC_API_KEY',
    'openai': 'OPENAI_API_KEY',
}


def create_app(config_name=None, provider=None):
    """Application factory for creating the Flask app instance.

    This is the composition root: it builds the single SuggestionEngine for
    the process and stores it in ``app.extensions['suggestion_engine']``.

    Args:
        config_name: Configuration name ('development', 'production' or
                     'testing'). Defaults to FLASK_ENV or 'development'.
        provider: Optional LLM provider to inject instead of the configured
                  one (used by tests and embedding applications).

    Returns:
        Configured Flask application instance.
    """
    # Load environment variables from the appropriate .env file
    env = config_name or os.environ.get('FLASK_ENV', 'development')
    root_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    env_file = os.path.join(root_dir, f'.env.{env}')
    if os.path.exists(env_file):
        load_dotenv(env_file)

    # Also load a local .env if it exists (overrides the environment-specific one)
    dotenv_path = os.path.join(root_dir, '.env')
    if os.path.exists(dotenv_path):
        load_dotenv(dotenv_path, override=True)

    # Determine final config name after env files are loaded
    if config_name is None:
        config_name = os.environ.get('FLASK_ENV', 'development')

    app = Flask(__name__)

    config_class = config_map.get(config_name, config_map['development'])
    app.config.from_object(config_class)
    # Rating buckets and other ordered mappings must keep their order
    app.json.sort_keys = False

    _configure_logging(app)

    from cfcoach.analysis.llm import LLMConfigurationError, UnavailableProvider
    from cfcoach.analysis.suggestion_engine import SuggestionEngine

    if provider is None:
        try:
            provider = build_provider(app.config)
        except LLMConfigurationError as e:
            # Statistics and recommendations still work without a provider
            app.logger.error(f'AI provider unavailable: {e}')
            provider = UnavailableProvider(e)
    app.extensions['suggestion_engine'] = SuggestionEngine(provider)

    _register_blueprints(app)

    app.logger.info(
        f'CF Coach {__version__} started with provider '
        f'{getattr(provider, "PROVIDER_NAME", type(provider).__name__)}'
    )
    return app


def build_provider(config):
    """Instantiate the LLM provider named by ``AI_PROVIDER``.

    Raises:
        LLMConfigurationError: If the provider is unknown or unavailable.
    """
    from cfcoach.analysis.llm import get_provider

    provider_name = config.get('AI_PROVIDER', 'gemini')
    api_key = config.get(PROVIDER_KEY_MAP.get(provider_name, ''), '')

    kwargs = {'timeout': config.get('LLM_TIMEOUT', 30.0)}
    if config.get('AI_MODEL'):
        kwargs['model'] = config['AI_MODEL']
    if provider_name == 'gemini' and config.get('GEMINI_BASE_URL'):
        kwargs['base_url'] = config['GEMINI_BASE_URL']

    return get_provider(provider_name, api_key=api_key, **kwargs)


def _configure_logging(app):
    """Set up RotatingFileHandler on the root logger."""
    max_bytes = app.config.get('LOG_FILE_MAX_BYTES', 0)
    if not max_bytes:
        return

    log_dir = os.path.join(app.instance_path, 'logs')
    os.makedirs(log_dir, exist_ok=True)

    log_file = os.path.join(log_dir, 'app.log')
    handler = RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=app.config.get('LOG_FILE_BACKUP_COUNT', 3),
    )
    handler.setFormatter(logging.Formatter(
        app.config.get('LOG_FORMAT', '%(asctime)s [%(levelname)s] %(name)s: %(message)s')
    ))
    handler.setLevel(logging.DEBUG)

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.WARNING:
        root.setLevel(logging.DEBUG)


def _register_blueprints(app):
    """Register all application blueprints."""
    from cfcoach.views.api import api_bp

    app.register_blueprint(api_bp)
