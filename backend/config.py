from pathlib import Path
from dotenv import load_dotenv

from app.services.env_utils import env_int, env_str

load_dotenv()

# backend/ directory
BACKEND_ROOT = Path(__file__).parent


class Config:
    """Application configuration"""

    # Spa catalog CSV:
    # 1) SPA_DATA_PATH from the environment when set
    # 2) otherwise the bundled backend/data/bsg_spas.csv
    SPA_DATA_PATH = env_str('SPA_DATA_PATH', str(BACKEND_ROOT / 'data' / 'bsg_spas.csv'))

    API_PREFIX = '/api'

    # Listing defaults
    DEFAULT_PAGE_SIZE = 20

    # CORS allowlist (comma-separated origins)
    # Example:
    # CORS_ALLOWED_ORIGINS=https://balispa.example,https://www.balispa.example
    CORS_ALLOWED_ORIGINS = [
        origin.strip()
        for origin in env_str('CORS_ALLOWED_ORIGINS').split(',')
        if origin.strip()
    ]

    # Requests per minute per client IP on /api/*; 0 turns the limiter off
    RATE_LIMIT_PER_MINUTE = env_int('RATE_LIMIT_PER_MINUTE', 100)

    # Shared secret for POST /api/admin/reload; empty disables the endpoint
    ADMIN_TOKEN = env_str('ADMIN_TOKEN')

    LOG_LEVEL = env_str('LOG_LEVEL', 'INFO')

    # Flask environment
    FLASK_ENV = env_str('FLASK_ENV', 'development')
