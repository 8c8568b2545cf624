import logging

from flask import Blueprint, jsonify, request, current_app

from cfcoach import __version__
from cfcoach.models import Submission, UserProfile
from cfcoach.analysis.insights import practice_insights
from cfcoach.analysis.llm import get_available_providers
from cfcoach.analysis.llm.config import get_all_models_for_provider
from cfcoach.analysis.recommender import quick_problem_set

logger = logging.getLogger(__name__)

api_bp = Blueprint('api', __name__, url_prefix='/api')

MAX_RECOMMENDATION_COUNT = 20


def _get_engine():
    """Return the SuggestionEngine built by the application factory."""
    return current_app.extensions['suggestion_engine']


def _parse_history():
    """Decode ``{"profile": ..., "submissions": [...]}`` from the request body.

    Returns:
        Tuple of (body, profile or None, list of submissions).

    Raises:
        ValueError: If the body is not a JSON object or a record is malformed.
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValueError('Request body must be a JSON object')

    raw_profile = body.get('profile')
    profile = UserProfile.from_dict(raw_profile) if raw_profile else None

    raw_submissions = body.get('submissions', [])
    if not isinstance(raw_submissions, list):
        raise ValueError('submissions must be a list')
    submissions = [Submission.from_dict(item) for item in raw_submissions]
    return body, profile, submissions


@api_bp.route('/health')
def health():
    providers = sorted(get_available_providers().keys())
    return jsonify({
        'status': 'ok',
        'version': __version__,
        'provider': current_app.config.get('AI_PROVIDER'),
        'providers': {name: get_all_models_for_provider(name) for name in providers},
    })


@api_bp.route('/suggestions')
def suggestions():
    return jsonify(_get_engine().snapshot())


@api_bp.route('/suggestions/refresh', methods=['POST'])
def refresh_suggestions():
    try:
        _, profile, submissions = _parse_history()
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    engine = _get_engine()
    if not engine.refresh(profile, submissions):
        return jsonify({'error': 'A refresh is already running', **engine.snapshot()}), 409
    return jsonify(engine.snapshot())


@api_bp.route('/recommendations', methods=['POST'])
def recommendations():
    try:
        body, profile, submissions = _parse_history()
        count = int(body.get('count', current_app.config.get('RECOMMENDATION_COUNT', 5)))
    except (TypeError, ValueError) as e:
        return jsonify({'error': str(e)}), 400

    count = max(0, min(count, MAX_RECOMMENDATION_COUNT))
    items = _get_engine().recommend(profile, submissions, target_count=count)
    return jsonify({'recommendations': [r.to_dict() for r in items]})


@api_bp.route('/analysis', methods=['POST'])
def analysis():
    try:
        _, profile, submissions = _parse_history()
    except ValueError as e:
        return jsonify({'error': str(e)}), 400

    snapshot = _get_engine().analyze(profile, submissions)
    data = snapshot.to_dict()
    data['insights'] = practice_insights(submissions)
    data['quick_problem_set'] = quick_problem_set(
        profile.rating if profile else None,
        snapshot.weak_topics[0] if snapshot.weak_topics else None,
    )
    return jsonify(data)
