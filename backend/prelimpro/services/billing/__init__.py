"""Stripe checkout, webhooks and notice entitlements."""
from .checkout import PRICE_MAP, BillingNotConfiguredError, CheckoutError, build_checkout_params, create_checkout_session
from .plans import FREE_NOTICE_LIMIT, PlanService, summarize_plan
from .pricing import CORPORATE_PLAN, PRICING_TIERS
from .webhooks import PRICE_TO_TIER, StripeWebhookProcessor, handle_stripe_event

__all__ = [
    "PRICE_MAP",
    "BillingNotConfiguredError",
    "CheckoutError",
    "build_checkout_params",
    "create_checkout_session",
    "FREE_NOTICE_LIMIT",
    "PlanService",
    "summarize_plan",
    "CORPORATE_PLAN",
    "PRICING_TIERS",
    "PRICE_TO_TIER",
    "StripeWebhookProcessor",
    "handle_stripe_event",
]
