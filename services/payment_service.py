"""PayPal "Buy Now" redirect construction.

Nothing here talks to PayPal: the result is only a checkout URL the browser is
sent to. Completion of the payment is never verified.
"""

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

from services.errors import ValidationError

log = logging.getLogger(__name__)

PAYPAL_BASE_URL = "https://www.paypal.com/cgi-bin/webscr"
DEFAULT_BUSINESS_EMAIL = "darnley@9lmnts.com"
BUTTON_SOURCE = "PP-BuyNowBF:btn_buynowCC_LG.gif:NonHostedGuest"
REQUIRED_FIELDS = ("amount", "currency", "description")


@dataclass(frozen=True)
class PaymentLink:
    payment_url: str
    amount: Any
    currency: str
    description: str
    business_email: str

    def to_response(self) -> dict:
        return {
            "success": True,
            "paymentUrl": self.payment_url,
            "amount": self.amount,
            "currency": self.currency,
            "description": self.description,
            "businessEmail": self.business_email,
        }


def _param(value: Any) -> str:
    if value is None:
        return ""
    # JSON numbers like 10.0 should read "10" in the checkout form, as a browser would send them.
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def build_payment_url(
    amount: Any,
    currency: str,
    description: str,
    return_url: Optional[str] = None,
    cancel_url: Optional[str] = None,
    business_email: str = DEFAULT_BUSINESS_EMAIL,
) -> str:
    params = {
        "cmd": "_xclick",
        "business": business_email,
        "currency_code": _param(currency),
        "amount": _param(amount),
        "item_name": _param(description),
        "return": _param(return_url),
        "cancel_return": _param(cancel_url),
        "no_shipping": "1",
        "no_note": "1",
        "bn": BUTTON_SOURCE,
    }
    return f"{PAYPAL_BASE_URL}?{urlencode(params)}"


def create_payment_link(
    payload: Mapping[str, Any],
    business_email: str = DEFAULT_BUSINESS_EMAIL,
    default_return_url: Optional[str] = None,
    default_cancel_url: Optional[str] = None,
) -> PaymentLink:
    """Validate a checkout request payload and build its redirect link."""
    missing = [name for name in REQUIRED_FIELDS if not payload.get(name)]
    if missing:
        log.info(f"Payment request rejected, missing: {', '.join(missing)}")
        raise ValidationError("Missing required fields: amount, currency, description")

    amount = payload["amount"]
    currency = payload["currency"]
    description = payload["description"]
    url = build_payment_url(
        amount,
        currency,
        description,
        return_url=payload.get("returnUrl") or default_return_url,
        cancel_url=payload.get("cancelUrl") or default_cancel_url,
        business_email=business_email,
    )
    return PaymentLink(
        payment_url=url,
        amount=amount,
        currency=currency,
        description=description,
        business_email=business_email,
    )
