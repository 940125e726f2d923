"""
Configuration for the payment/QR API.
Values are read from the environment; Streamlit secrets are not available to the WSGI process.
"""
import os

from services import payment_service, qr_service


class Config:
    """Base configuration with defaults"""

    DEBUG = False
    TESTING = False

    # PayPal
    PAYPAL_BUSINESS_EMAIL = os.environ.get('PAYPAL_BUSINESS_EMAIL', payment_service.DEFAULT_BUSINESS_EMAIL)

    # Used for default PayPal return/cancel pages
    SITE_URL = os.environ.get('SITE_URL', '')

    # QR codes
    QR_DEFAULT_LOCATION = os.environ.get('QR_DEFAULT_LOCATION', qr_service.DEFAULT_LOCATION)

    # Logging
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')


class TestingConfig(Config):
    """Testing-specific configuration"""
    TESTING = True
    PAYPAL_BUSINESS_EMAIL = payment_service.DEFAULT_BUSINESS_EMAIL
    SITE_URL = 'https://9lmnts.test'
    QR_DEFAULT_LOCATION = qr_service.DEFAULT_LOCATION
