"""
Apple Music Link Resolver API
A Flask API that converts Spotify links to Apple Music links
"""

from flask import Flask, request, jsonify
from flask_cors import CORS
import logging
import os

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Configuration
from config import configure_logging, init_app_config, load_settings
from routes import register_blueprints

logger = configure_logging()


def create_app(settings=None):
    """
    Create and configure the Flask app

    Args:
        settings: Optional config.Settings (default: read from environment)
    """
    app = Flask(__name__)
    CORS(app, methods=['GET', 'OPTIONS'], allow_headers='*', send_wildcard=True)
    init_app_config(app, settings)

    # Register all route blueprints
    register_blueprints(app)

    @app.errorhandler(404)
    def not_found(error):
        """JSON 404 for unknown paths; preflight succeeds on any path"""
        if request.method == 'OPTIONS':
            return '', 200
        return jsonify({'error': 'Not found. Use GET /convert?url=<spotify_url>'}), 404

    # Request/response logging
    @app.before_request
    def log_request():
        """Log incoming requests"""
        logger.info(f"{request.method} {request.full_path.rstrip('?')}")

    @app.after_request
    def log_response(response):
        """Log response status"""
        logger.info(f"{request.method} {request.path} - {response.status_code}")
        return response

    return app


app = create_app()
logger.info(f"Flask app initialized in PID {os.getpid()}")


if __name__ == '__main__':
    # Running directly with 'python app.py' (not gunicorn)
    logger.info("Starting Flask application directly (not gunicorn)...")
    app.run(debug=True, host='0.0.0.0', port=app.config['SETTINGS'].port)
