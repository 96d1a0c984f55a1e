import logging

from flask import Blueprint, current_app, jsonify, request

from app.models import FilterSpec

logger = logging.getLogger(__name__)

spas_bp = Blueprint('spas', __name__)


def get_spa_service():
    return current_app.extensions['spa_service']


@spas_bp.route('/spas', methods=['GET'])
def list_spas():
    """
    Spa listing with filters, sort and pagination

    Query Parameters:
    - page: page number (default 1, clamped into range)
    - pageSize: items per page (default 20)
    - location: exact location, case-insensitive
    - treatment: exact treatment name, case-insensitive
    - budget: budget tier; ignored when not a number
    - search: substring of title or address
    - sort: rating_desc/rating_asc/budget_desc/budget_asc/title_asc/title_desc
    """
    try:
        spec = FilterSpec.from_args(
            request.args,
            default_page_size=current_app.config.get('DEFAULT_PAGE_SIZE', 20),
        )
        result = get_spa_service().query(spec)
        return jsonify(result.to_dict())
    except Exception as e:
        logger.exception("Spa listing failed")
        return jsonify({
            'success': False,
            'message': str(e)
        }), 500


@spas_bp.route('/spas/<spa_id>', methods=['GET'])
def get_spa_detail(spa_id):
    """Spa detail by id"""
    try:
        spa = get_spa_service().get_spa(spa_id)
        if spa:
            return jsonify(spa.to_dict())
        return jsonify({
            'success': False,
            'error': 'NOT_FOUND',
            'message': 'Spa not found'
        }), 404
    except Exception as e:
        logger.exception("Spa lookup failed for %r", spa_id)
        return jsonify({
            'success': False,
            'message': str(e)
        }), 500


@spas_bp.route('/filters', methods=['GET'])
def get_filter_options():
    """Distinct locations, treatments and budget tiers for the filter UI"""
    return jsonify(get_spa_service().facets().to_dict())


@spas_bp.route('/health', methods=['GET'])
def health():
    stats = get_spa_service().stats()
    return jsonify({'success': True, **stats})
