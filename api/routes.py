"""
Payment and QR Routes Blueprint

Handles:
- /api/payment/process: PayPal "Buy Now" redirect URL
- /api/qr/generate: QR image URL for an event payload
- /api/health: liveness probe
"""

import logging

from flask import Blueprint, current_app, jsonify, request

from services import payment_service, qr_service
from services.errors import ApiError, MethodNotAllowed, UnexpectedError, ValidationError

logger = logging.getLogger(__name__)

api_bp = Blueprint('api_bp', __name__)

# OPTIONS is listed so preflight requests get the same 405 as any other non-POST.
ALL_METHODS = ['GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS']


def _json_payload(require_object=True):
    """Request body as a dict. An empty body counts as {}.

    With require_object=False any other JSON value (array, string, number)
    also counts as {}; a JSON null still fails as an unexpected error.
    """
    if not request.get_data():
        return {}
    payload = request.get_json(force=True)
    if isinstance(payload, dict):
        return payload
    if require_object:
        raise ValidationError('Request body must be a JSON object')
    if payload is None:
        raise TypeError('Request body is null')
    return {}


@api_bp.route('/api/payment/process', methods=ALL_METHODS)
def process_payment():
    """Build a PayPal checkout URL for amount/currency/description"""
    if request.method != 'POST':
        raise MethodNotAllowed()

    try:
        site_url = current_app.config.get('SITE_URL', '').rstrip('/')
        link = payment_service.create_payment_link(
            _json_payload(),
            business_email=current_app.config['PAYPAL_BUSINESS_EMAIL'],
            default_return_url=f"{site_url}/?payment=success" if site_url else None,
            default_cancel_url=f"{site_url}/?payment=cancelled" if site_url else None,
        )
    except ApiError:
        raise
    except Exception as e:
        logger.error(f"PayPal processing error: {e}", exc_info=True)
        raise UnexpectedError('Failed to process payment')

    logger.info(f"Payment link built: {link.amount} {link.currency}")
    return jsonify(link.to_response())


@api_bp.route('/api/qr/generate', methods=ALL_METHODS)
def generate_qr():
    """Build a QR image URL carrying event data"""
    if request.method != 'POST':
        raise MethodNotAllowed()

    try:
        result = qr_service.generate_qr_code(
            _json_payload(require_object=False),
            default_location=current_app.config['QR_DEFAULT_LOCATION'],
        )
    except ApiError:
        raise
    except Exception as e:
        logger.error(f"QR generation error: {e}", exc_info=True)
        raise UnexpectedError('Failed to generate QR code')

    return jsonify(result)


@api_bp.route('/api/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})
