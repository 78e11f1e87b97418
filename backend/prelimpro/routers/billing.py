"""
Billing API Routes

Pricing, plan entitlements, Stripe Checkout and the Stripe webhook.
"""
import json
import logging
from typing import Dict, List, Optional

import stripe
from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..auth import get_current_user, require_admin
from ..config import STRIPE_WEBHOOK_SECRET
from ..database import get_db
from ..models.db_models import BillingEventDB, UserDB
from ..services.billing import (
    CORPORATE_PLAN,
    PRICING_TIERS,
    BillingNotConfiguredError,
    CheckoutError,
    PlanService,
    StripeWebhookProcessor,
    create_checkout_session,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/billing", tags=["billing"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class CheckoutRequest(BaseModel):
    price_id: Optional[str] = Field(None, description="Price alias, e.g. price_basic_monthly")
    amount_cents: Optional[int] = Field(None, ge=0)
    price: Optional[float] = Field(None, ge=0, description="Dollar amount (legacy)")
    quantity: int = 1
    customer_email: Optional[str] = None
    metadata: Dict[str, str] = Field(default_factory=dict)
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None


# =============================================================================
# PRICING & PLAN
# =============================================================================

@router.get("/pricing", response_model=dict)
async def get_pricing():
    return {"tiers": PRICING_TIERS, "corporate": CORPORATE_PLAN}


@router.get("/plan", response_model=dict)
async def get_plan(
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    summary = PlanService(db).get_plan_summary(current_user.id)
    db.commit()
    return summary


@router.post("/plan/use-notice", response_model=dict)
async def use_notice(
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """Consume one notice credit. 402 when none remain."""
    result = PlanService(db).use_notice(current_user.id)
    if not result["success"]:
        raise HTTPException(status_code=402, detail=result["error"])
    db.commit()
    return result


# =============================================================================
# CHECKOUT
# =============================================================================

@router.post("/checkout-session", response_model=dict)
async def create_checkout(
    body: CheckoutRequest,
    current_user: UserDB = Depends(get_current_user),
):
    """
    Start a Stripe Checkout. The user id is stamped into the session
    metadata so the webhook can link the purchase back to the user.
    """
    metadata = {**body.metadata, "user_id": current_user.id}
    try:
        return create_checkout_session(
            price_id=body.price_id,
            amount_cents=body.amount_cents,
            price=body.price,
            customer_email=body.customer_email or current_user.email,
            metadata=metadata,
            quantity=body.quantity,
            success_url=body.success_url,
            cancel_url=body.cancel_url,
        )
    except CheckoutError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except BillingNotConfiguredError as e:
        raise HTTPException(status_code=503, detail=str(e))
    except stripe.StripeError as e:
        logger.error(f"Stripe checkout failed: {e}")
        raise HTTPException(status_code=502, detail=str(e))


# =============================================================================
# WEBHOOK
# =============================================================================

@router.post("/webhook", response_model=dict)
async def stripe_webhook(request: Request, db: Session = Depends(get_db)):
    """
    Stripe webhook. The signature is verified when STRIPE_WEBHOOK_SECRET is
    set; without it the body is trusted (local testing only).
    """
    try:
        payload = (await request.body()).decode("utf-8")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Invalid payload")

    if STRIPE_WEBHOOK_SECRET:
        sig_header = request.headers.get("stripe-signature")
        if not sig_header:
            raise HTTPException(status_code=400, detail="Missing stripe-signature header")
        try:
            stripe.WebhookSignature.verify_header(payload, sig_header, STRIPE_WEBHOOK_SECRET)
        except stripe.SignatureVerificationError as e:
            logger.warning(f"Stripe signature verification failed: {e}")
            raise HTTPException(status_code=400, detail="Invalid signature")

    try:
        event = json.loads(payload)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid payload")
    if not isinstance(event, dict):
        raise HTTPException(status_code=400, detail="Invalid payload")

    try:
        return StripeWebhookProcessor(db).process(event)
    except Exception:
        raise HTTPException(status_code=500, detail="Processing error")


@router.get("/events", response_model=List[dict])
async def list_billing_events(
    limit: int = 50,
    db: Session = Depends(get_db),
    _: UserDB = Depends(require_admin),
):
    """Recent webhook events (admin only)."""
    events = db.query(BillingEventDB).order_by(BillingEventDB.created_at.desc()).limit(limit).all()
    return [
        {
            "id": e.id,
            "type": e.type,
            "status": e.status,
            "message": e.message,
            "created_at": e.created_at.isoformat() if e.created_at else None,
        }
        for e in events
    ]
