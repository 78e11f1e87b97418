"""
Stripe Checkout

Creates Checkout Sessions for plan subscriptions and pay-per-notice
purchases. Friendly price aliases resolve to real Stripe price ids,
overridable per environment (PRICE_BASIC_MONTHLY_ID etc).
"""
import logging
import os
from typing import Any, Dict, Optional

import stripe

from ...config import STRIPE_CANCEL_URL, STRIPE_SECRET_KEY, STRIPE_SUCCESS_URL
from .pricing import PER_NOTICE_PRICE_IDS, SUBSCRIPTION_PRICE_IDS

logger = logging.getLogger(__name__)

stripe.api_key = STRIPE_SECRET_KEY


def _price_env_name(alias: str) -> str:
    # price_basic_monthly -> PRICE_BASIC_MONTHLY_ID
    return f"{alias.upper()}_ID"


PRICE_MAP: Dict[str, str] = {
    alias: os.getenv(_price_env_name(alias), alias)
    for alias in SUBSCRIPTION_PRICE_IDS + PER_NOTICE_PRICE_IDS
}

DEFAULT_PRODUCT_NAME = "Notice delivery"


class CheckoutError(ValueError):
    """Invalid checkout request (maps to HTTP 400)."""


class BillingNotConfiguredError(RuntimeError):
    """Stripe credentials are missing."""


def resolve_price_id(price_id: str) -> str:
    """Alias -> real price id. Raises CheckoutError for unknown ids."""
    resolved = PRICE_MAP.get(price_id, price_id)
    if resolved not in set(PRICE_MAP.values()):
        raise CheckoutError("Unsupported priceId")
    return resolved


def build_checkout_params(
    price_id: Optional[str] = None,
    amount_cents: Optional[int] = None,
    price: Optional[float] = None,
    customer_email: Optional[str] = None,
    metadata: Optional[Dict[str, str]] = None,
    quantity: int = 1,
    success_url: Optional[str] = None,
    cancel_url: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Keyword arguments for stripe.checkout.Session.create.

    Either price_id or an amount (cents preferred, dollars accepted) is
    required. Per-notice prices and ad-hoc amounts use payment mode; plan
    prices use subscription mode.
    """
    if not price_id and amount_cents is None and price is None:
        raise CheckoutError("priceId or price/amountCents is required")

    metadata = dict(metadata or {})
    resolved_price = resolve_price_id(price_id) if price_id else None
    quantity = quantity if quantity and quantity >= 1 else 1

    is_amount_flow = resolved_price is None
    per_notice = is_amount_flow or price_id.startswith("price_per_notice")

    if is_amount_flow:
        unit_amount = int(round(amount_cents)) if amount_cents is not None else int(round(price * 100))
        line_item = {
            "price_data": {
                "currency": "usd",
                "unit_amount": unit_amount,
                "product_data": {"name": metadata.get("type") or DEFAULT_PRODUCT_NAME},
            },
            "quantity": quantity,
        }
    else:
        line_item = {"price": resolved_price, "quantity": quantity}

    params = {
        "mode": "payment" if per_notice else "subscription",
        "success_url": success_url or STRIPE_SUCCESS_URL,
        "cancel_url": cancel_url or STRIPE_CANCEL_URL,
        "line_items": [line_item],
        "allow_promotion_codes": True,
        "metadata": metadata,
    }
    if customer_email:
        params["customer_email"] = customer_email
    if per_notice:
        params["payment_intent_data"] = {"metadata": metadata}
    else:
        params["subscription_data"] = {"metadata": metadata}
    return params


def create_checkout_session(**kwargs) -> Dict[str, Optional[str]]:
    """
    Create a Checkout Session. Returns {"url", "session_id"}.

    Raises CheckoutError for bad input and BillingNotConfiguredError when no
    secret key is set. Stripe API errors propagate.
    """
    params = build_checkout_params(**kwargs)
    if not stripe.api_key:
        raise BillingNotConfiguredError("Stripe is not configured (STRIPE_SECRET_KEY)")
    session = stripe.checkout.Session.create(**params)
    logger.info(f"Checkout session {session.id} created ({params['mode']})")
    return {"url": session.url, "session_id": session.id}
