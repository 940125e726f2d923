"""
Serverless-style JSON endpoints next to the Streamlit site.

- /api/payment/process: PayPal checkout URL builder
- /api/qr/generate: event QR code URL builder
- /api/health: liveness probe
"""

import logging

from flask import Flask, jsonify

from services.errors import ApiError

logger = logging.getLogger(__name__)


def create_app(config_object=None):
    from api.config import Config
    from api.routes import api_bp

    app = Flask(__name__)
    app.config.from_object(config_object or Config)
    app.json.sort_keys = False
    app.register_blueprint(api_bp)

    @app.errorhandler(ApiError)
    def handle_api_error(error):
        return jsonify({'error': error.message}), error.status_code

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({'error': 'Method not allowed'}), 405

    @app.errorhandler(404)
    def handle_not_found(error):
        return jsonify({'error': 'Not found'}), 404

    logger.info("✅ API app created")
    return app
