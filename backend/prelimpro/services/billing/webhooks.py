"""
Stripe Webhooks

Signature verification is left to the Stripe SDK. Event handling is a
dispatch over the event type with best-effort upserts into the billing
tables, followed by a billing_events log row.

handle_stripe_event() is the pure classifier; StripeWebhookProcessor does
the persistence.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from ...models.db_models import (
    BillingEventDB,
    ChargeDB,
    EntitlementDB,
    InvoiceDB,
    PlanType,
    SubscriptionDB,
    SubscriptionStatus,
)
from .checkout import PRICE_MAP
from .plans import PlanService

logger = logging.getLogger(__name__)


HANDLED_EVENT_TYPES = (
    "checkout.session.completed",
    "customer.subscription.created",
    "customer.subscription.updated",
    "customer.subscription.deleted",
    "invoice.payment_succeeded",
    "invoice.payment_failed",
    "charge.refunded",
    "charge.dispute.created",
    "payment_intent.succeeded",
)

# Subscription price -> internal tier. Keyed by alias and by resolved id.
PRICE_TO_TIER: Dict[str, str] = {}
for _alias, _tier in (
    ("price_basic_monthly", "basic"),
    ("price_basic_annual", "basic"),
    ("price_pro_monthly", "pro"),
    ("price_pro_annual", "pro"),
    ("price_business_monthly", "business"),
    ("price_business_annual", "business"),
):
    PRICE_TO_TIER[_alias] = _tier
    PRICE_TO_TIER[PRICE_MAP.get(_alias, _alias)] = _tier

TIER_TO_PLAN = {
    "basic": PlanType.PRO,
    "pro": PlanType.PRO,
    "business": PlanType.PRO,
    "corporate": PlanType.ENTERPRISE,
}


def handle_stripe_event(event: Dict[str, Any]) -> Dict[str, Any]:
    """{"handled": type, "id": object id} for known types, else {"handled": "unhandled", "type": type}."""
    event_type = (event or {}).get("type") or "unknown"
    if event_type in HANDLED_EVENT_TYPES:
        obj = ((event.get("data") or {}).get("object")) or {}
        return {"handled": event_type, "id": obj.get("id")}
    return {"handled": "unhandled", "type": event_type}


def _from_timestamp(value: Optional[int]) -> Optional[datetime]:
    return datetime.utcfromtimestamp(value) if value else None


def _primary_item(subscription: Dict[str, Any]) -> Dict[str, Any]:
    items = ((subscription.get("items") or {}).get("data")) or []
    return items[0] if items else {}


def subscription_snapshot(subscription: Dict[str, Any], deleted: bool = False) -> Dict[str, Any]:
    item = _primary_item(subscription)
    price_id = (item.get("price") or {}).get("id") or "unknown"
    return {
        "subscription_id": subscription.get("id"),
        "customer_id": subscription.get("customer"),
        "tier": "unknown" if deleted else PRICE_TO_TIER.get(price_id, "unknown"),
        "price_id": price_id,
        "seats": item.get("quantity") or 1,
        "status": "canceled" if deleted else subscription.get("status"),
        "current_period_end": _from_timestamp(subscription.get("current_period_end")),
        "cancel_at": _from_timestamp(subscription.get("canceled_at") if deleted else subscription.get("cancel_at")),
        "cancel_at_period_end": bool(subscription.get("cancel_at_period_end")),
    }


def plan_subscription_status(status: Optional[str], cancel_at_period_end: bool) -> SubscriptionStatus:
    if status in ("active", "trialing"):
        return SubscriptionStatus.CANCELING if cancel_at_period_end else SubscriptionStatus.ACTIVE
    if status in ("past_due", "unpaid", "incomplete"):
        return SubscriptionStatus.PAST_DUE
    return SubscriptionStatus.CANCELED


class StripeWebhookProcessor:
    """Persists verified Stripe events."""

    def __init__(self, db_session: Session):
        self.db = db_session
        self.plans = PlanService(db_session)

    def process(self, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Route an event to its handler and log it.

        Handler errors are logged to billing_events as "error" and re-raised
        so the endpoint answers 500 and Stripe retries. An event id already
        logged as "processed" is acknowledged without running its handler
        again, so redeliveries never credit twice.
        """
        result = handle_stripe_event(event)
        event_type = event.get("type")
        obj = ((event.get("data") or {}).get("object")) or {}

        if self._already_processed(event.get("id")):
            logger.info(f"Stripe event {event.get('id')} already processed, skipping")
            return result

        handlers = {
            "checkout.session.completed": self._checkout_completed,
            "customer.subscription.created": self._subscription_updated,
            "customer.subscription.updated": self._subscription_updated,
            "customer.subscription.deleted": self._subscription_deleted,
            "invoice.payment_succeeded": lambda o: self._persist_invoice(o, "paid"),
            "invoice.payment_failed": lambda o: self._persist_invoice(o, "failed"),
            "charge.refunded": lambda o: self._persist_charge(o, "charge.refunded"),
            "charge.dispute.created": lambda o: self._persist_charge(o, "charge.dispute.created"),
        }

        handler = handlers.get(event_type)
        try:
            if handler:
                handler(obj)
        except Exception as e:
            logger.error(f"Stripe event {event.get('id')} ({event_type}) failed: {e}")
            self.db.rollback()
            self._log_event(event, "error", str(e))
            self.db.commit()
            raise

        self._log_event(event, "processed")
        self.db.commit()
        logger.info(f"Stripe event {event.get('id')} processed: {result['handled']}")
        return result

    # =========================================================================
    # HANDLERS
    # =========================================================================

    def _checkout_completed(self, session: Dict[str, Any]) -> None:
        metadata = session.get("metadata") or {}
        user_id = metadata.get("user_id")
        if not user_id:
            logger.warning(f"Checkout session {session.get('id')} has no user_id metadata")
            return

        plan = self.plans.get_or_create_plan(user_id)
        if session.get("customer"):
            plan.stripe_customer_id = session["customer"]

        if session.get("mode") == "payment":
            count = int(metadata.get("notices") or 1)
            self.plans.add_purchased_notices(user_id, count)
            return

        if session.get("subscription"):
            plan.subscription_id = session["subscription"]
            plan.subscription_status = SubscriptionStatus.ACTIVE
            plan.plan_type = TIER_TO_PLAN.get(metadata.get("tier"), PlanType.PRO)
        plan.updated_at = datetime.utcnow()

    def _subscription_updated(self, subscription: Dict[str, Any]) -> None:
        snapshot = subscription_snapshot(subscription)
        self._persist_subscription(snapshot)
        self._upsert_entitlement(snapshot)

        plan = self.plans.get_plan_by_customer(snapshot["customer_id"])
        if plan:
            plan.subscription_id = snapshot["subscription_id"]
            plan.subscription_status = plan_subscription_status(snapshot["status"], snapshot["cancel_at_period_end"])
            if snapshot["tier"] in TIER_TO_PLAN:
                plan.plan_type = TIER_TO_PLAN[snapshot["tier"]]
            plan.pro_until = snapshot["current_period_end"]
            plan.updated_at = datetime.utcnow()

    def _subscription_deleted(self, subscription: Dict[str, Any]) -> None:
        snapshot = subscription_snapshot(subscription, deleted=True)
        self._persist_subscription(snapshot)

        plan = self.plans.get_plan_by_customer(snapshot["customer_id"])
        if plan:
            plan.subscription_status = SubscriptionStatus.CANCELED
            plan.plan_type = PlanType.PAY_PER_NOTICE if plan.notices_purchased else PlanType.FREE
            plan.pro_until = None
            plan.updated_at = datetime.utcnow()

    # =========================================================================
    # UPSERTS
    # =========================================================================

    def _persist_subscription(self, snapshot: Dict[str, Any]) -> None:
        row = self.db.query(SubscriptionDB).filter(
            SubscriptionDB.subscription_id == snapshot["subscription_id"]
        ).first()
        if row is None:
            row = SubscriptionDB(subscription_id=snapshot["subscription_id"])
            self.db.add(row)
        for key, value in snapshot.items():
            if key != "subscription_id":
                setattr(row, key, value)
        row.updated_at = datetime.utcnow()
        self.db.flush()

    def _upsert_entitlement(self, snapshot: Dict[str, Any]) -> None:
        row = self.db.query(EntitlementDB).filter(EntitlementDB.customer_id == snapshot["customer_id"]).first()
        if row is None:
            row = EntitlementDB(customer_id=snapshot["customer_id"])
            self.db.add(row)
        row.tier = snapshot["tier"]
        row.seat_limit = snapshot["seats"]
        row.status = snapshot["status"]
        row.updated_at = datetime.utcnow()
        self.db.flush()

    def _persist_invoice(self, invoice: Dict[str, Any], status: str) -> None:
        row = self.db.query(InvoiceDB).filter(InvoiceDB.invoice_id == invoice.get("id")).first()
        if row is None:
            row = InvoiceDB(invoice_id=invoice.get("id"))
            self.db.add(row)
        row.customer_id = invoice.get("customer")
        row.subscription_id = invoice.get("subscription")
        row.status = status
        row.amount_paid = invoice.get("amount_paid")
        row.amount_due = invoice.get("amount_due")
        row.currency = invoice.get("currency")
        row.hosted_invoice_url = invoice.get("hosted_invoice_url")
        row.next_payment_attempt = _from_timestamp(invoice.get("next_payment_attempt"))
        row.updated_at = datetime.utcnow()
        self.db.flush()

        if status == "failed":
            plan = self.plans.get_plan_by_customer(invoice.get("customer"))
            if plan and plan.subscription_id:
                plan.subscription_status = SubscriptionStatus.PAST_DUE

    def _persist_charge(self, charge: Dict[str, Any], event_type: str) -> None:
        row = self.db.query(ChargeDB).filter(ChargeDB.charge_id == charge.get("id")).first()
        if row is None:
            row = ChargeDB(charge_id=charge.get("id"))
            self.db.add(row)
        row.customer_id = charge.get("customer")
        row.invoice_id = charge.get("invoice")
        row.amount_refunded = charge.get("amount_refunded")
        row.status = charge.get("status")
        row.event_type = event_type
        row.updated_at = datetime.utcnow()
        self.db.flush()

    def _already_processed(self, event_id: Optional[str]) -> bool:
        if not event_id:
            return False
        row = self.db.query(BillingEventDB).filter(BillingEventDB.id == event_id).first()
        return row is not None and row.status == "processed"

    def _log_event(self, event: Dict[str, Any], status: str, message: Optional[str] = None) -> None:
        event_id = event.get("id") or str(uuid4())
        row = self.db.query(BillingEventDB).filter(BillingEventDB.id == event_id).first()
        if row is None:
            row = BillingEventDB(id=event_id, created_at=datetime.utcnow())
            self.db.add(row)
        row.type = event.get("type") or "unknown"
        row.status = status
        row.message = message
        row.payload = event
        self.db.flush()
