"""Tests for the gunicorn deployment settings."""

import os
import runpy

CONF_PATH = os.path.join(os.path.dirname(__file__), '..', 'deploy', 'gunicorn.conf.py')


def test_single_process_serves_every_request():
    settings = runpy.run_path(CONF_PATH)
    # One process means one SuggestionEngine shared by all requests
    assert settings['workers'] == 1
    assert settings['worker_class'] == 'gthread'
    assert settings['threads'] > 1


def test_worker_timeout_exceeds_llm_timeout():
    from cfcoach.config import ProductionConfig

    settings = runpy.run_path(CONF_PATH)
    assert settings['timeout'] > ProductionConfig.LLM_TIMEOUT
