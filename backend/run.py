import os
import socket

from app import create_app
from app.services.env_utils import env_int

app = create_app()


def _can_bind(port: int) -> bool:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.settimeout(0.2)
        return sock.connect_ex(("127.0.0.1", port)) != 0


if __name__ == '__main__':
    preferred_port = env_int("PORT", 4000)
    fallback_port = env_int("PORT_FALLBACK", 4001)
    run_port = preferred_port

    if not _can_bind(preferred_port) and fallback_port != preferred_port and _can_bind(fallback_port):
        app.logger.warning("Port %d is in use, falling back to %d", preferred_port, fallback_port)
        run_port = fallback_port

    debug = app.config.get('FLASK_ENV') == 'development'
    app.run(debug=debug, host=os.getenv("HOST", "0.0.0.0"), port=run_port)
