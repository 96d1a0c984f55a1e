import logging
import threading
import time
from collections import defaultdict

from flask import Flask, request, jsonify
from flask_cors import CORS

from app.logging_config import setup_logging
from app.services import SpaRepository, SpaService

logger = logging.getLogger(__name__)


# Simple in-memory rate limiter
class RateLimiter:
    """Sliding one-minute window per client key"""
    def __init__(self, requests_per_minute=100):
        self.requests_per_minute = requests_per_minute
        self.requests = defaultdict(list)
        self._lock = threading.Lock()

    def is_allowed(self, key):
        if self.requests_per_minute <= 0:
            return True

        now = time.time()
        minute_ago = now - 60

        with self._lock:
            # Clean old entries
            recent = [t for t in self.requests[key] if t > minute_ago]

            if len(recent) >= self.requests_per_minute:
                self.requests[key] = recent
                return False

            recent.append(now)
            self.requests[key] = recent
            return True


def _client_key():
    client_ip = request.headers.get('X-Forwarded-For', request.remote_addr)
    if client_ip:
        client_ip = client_ip.split(',')[0].strip()
    return client_ip or 'unknown'


def create_app(config_object=None, repository=None):
    """Create the Flask app.

    The catalog is loaded here; a LoadError propagates so a bad data file
    stops startup. Pass ``repository`` to serve an already-built catalog.
    """
    if config_object is None:
        from config import Config
        config_object = Config

    app = Flask(__name__)
    app.config.from_object(config_object)

    setup_logging(app.config.get('LOG_LEVEL', 'INFO'))

    # CORS: use explicit allowlist in production when provided.
    cors_origins = app.config.get('CORS_ALLOWED_ORIGINS', [])
    if cors_origins:
        CORS(app, resources={r"/api/*": {"origins": cors_origins}})
    else:
        CORS(app, resources={r"/api/*": {"origins": "*"}})

    if repository is None:
        repository = SpaRepository(app.config['SPA_DATA_PATH'])
        repository.load()
    app.extensions['spa_service'] = SpaService(repository)

    rate_limiter = RateLimiter(requests_per_minute=app.config.get('RATE_LIMIT_PER_MINUTE', 100))

    @app.before_request
    def check_rate_limit():
        if request.path.startswith('/api/'):
            if not rate_limiter.is_allowed(_client_key()):
                return jsonify({
                    'success': False,
                    'message': 'Rate limit exceeded. Please wait a moment.',
                    'error': 'TOO_MANY_REQUESTS'
                }), 429

    from app.routes.spas import spas_bp
    from app.routes.admin import admin_bp

    api_prefix = app.config.get('API_PREFIX', '/api')
    app.register_blueprint(spas_bp, url_prefix=api_prefix)
    app.register_blueprint(admin_bp, url_prefix=f'{api_prefix}/admin')

    logger.info("Spa directory API ready (%d spas)", len(repository.snapshot()))
    return app
