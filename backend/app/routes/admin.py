import hmac
import logging

from flask import Blueprint, current_app, jsonify, request

from app.routes.spas import get_spa_service
from app.services import LoadError

logger = logging.getLogger(__name__)

admin_bp = Blueprint('admin', __name__)

ADMIN_TOKEN_HEADER = 'X-Admin-Token'


@admin_bp.route('/reload', methods=['POST'])
def reload_catalog():
    """Re-read the catalog CSV and swap it in.

    Only enabled when ADMIN_TOKEN is configured. On a bad file the
    previous catalog keeps serving.
    """
    expected = current_app.config.get('ADMIN_TOKEN') or ''
    if not expected:
        return jsonify({
            'success': False,
            'error': 'NOT_FOUND',
            'message': 'Not found'
        }), 404

    provided = request.headers.get(ADMIN_TOKEN_HEADER, '')
    if not hmac.compare_digest(provided.encode('utf-8'), expected.encode('utf-8')):
        return jsonify({
            'success': False,
            'error': 'FORBIDDEN',
            'message': 'Invalid admin token.'
        }), 403

    service = get_spa_service()
    try:
        service.reload()
    except LoadError as e:
        return jsonify({
            'success': False,
            'error': 'LOAD_ERROR',
            'message': str(e)
        }), 500

    logger.info("Catalog reloaded via admin endpoint")
    return jsonify({'success': True, **service.stats()})
