"""
User Plans

Notice entitlements per user. Free users get FREE_NOTICE_LIMIT notices;
purchased credits add to that. Pro and enterprise subscribers are
unlimited while their subscription is live.
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from ...models.db_models import PlanType, SubscriptionStatus, UserPlanDB

logger = logging.getLogger(__name__)


FREE_NOTICE_LIMIT = 3

UNLIMITED_PLANS = (PlanType.PRO, PlanType.ENTERPRISE)
LIVE_SUBSCRIPTION_STATUSES = (SubscriptionStatus.ACTIVE, SubscriptionStatus.CANCELING)


def is_pro(plan: UserPlanDB, now: Optional[datetime] = None) -> bool:
    now = now or datetime.utcnow()
    if plan.plan_type in UNLIMITED_PLANS and plan.subscription_status in LIVE_SUBSCRIPTION_STATUSES:
        return True
    return bool(plan.pro_until and plan.pro_until > now)


def notices_available(plan: UserPlanDB) -> int:
    return max(0, FREE_NOTICE_LIMIT + (plan.notices_purchased or 0) - (plan.notices_used or 0))


def summarize_plan(plan: UserPlanDB, now: Optional[datetime] = None) -> Dict[str, Any]:
    pro = is_pro(plan, now)
    available = notices_available(plan)
    return {
        "id": plan.id,
        "user_id": plan.user_id,
        "plan_type": plan.plan_type.value,
        "company_name": plan.company_name,
        "notices_used": plan.notices_used or 0,
        "notices_purchased": plan.notices_purchased or 0,
        "stripe_customer_id": plan.stripe_customer_id,
        "subscription_id": plan.subscription_id,
        "subscription_status": plan.subscription_status.value if plan.subscription_status else None,
        "pro_until": plan.pro_until.isoformat() if plan.pro_until else None,
        "is_pro": pro,
        "notices_available": "unlimited" if pro else available,
        "can_create_notice": pro or available > 0,
        "free_notices_remaining": max(0, FREE_NOTICE_LIMIT - (plan.notices_used or 0)),
    }


class PlanService:
    """Reads and updates UserPlan rows. One row per user, created lazily."""

    def __init__(self, db_session: Session):
        self.db = db_session

    def get_or_create_plan(self, user_id: str) -> UserPlanDB:
        plan = self.db.query(UserPlanDB).filter(UserPlanDB.user_id == user_id).first()
        if plan:
            return plan

        plan = UserPlanDB(
            id=str(uuid4()),
            user_id=user_id,
            plan_type=PlanType.FREE,
            notices_used=0,
            notices_purchased=0,
        )
        self.db.add(plan)
        self.db.flush()
        logger.info(f"Created free plan for user {user_id}")
        return plan

    def get_plan_by_customer(self, customer_id: str) -> Optional[UserPlanDB]:
        if not customer_id:
            return None
        return self.db.query(UserPlanDB).filter(UserPlanDB.stripe_customer_id == customer_id).first()

    def get_plan_summary(self, user_id: str) -> Dict[str, Any]:
        return summarize_plan(self.get_or_create_plan(user_id))

    def use_notice(self, user_id: str) -> Dict[str, Any]:
        """
        Consume one notice. Pro users are not metered.

        Returns {"success": bool, "plan": summary} plus "error" on refusal.
        """
        plan = self.get_or_create_plan(user_id)
        if is_pro(plan):
            return {"success": True, "plan": summarize_plan(plan)}

        if notices_available(plan) <= 0:
            logger.info(f"User {user_id} has no notices remaining")
            return {
                "success": False,
                "error": "No notices remaining. Upgrade or purchase more notices.",
                "plan": summarize_plan(plan),
            }

        plan.notices_used = (plan.notices_used or 0) + 1
        if plan.plan_type == PlanType.FREE and plan.notices_used > FREE_NOTICE_LIMIT:
            plan.plan_type = PlanType.PAY_PER_NOTICE
        plan.updated_at = datetime.utcnow()
        return {"success": True, "plan": summarize_plan(plan)}

    def add_purchased_notices(self, user_id: str, count: int) -> UserPlanDB:
        plan = self.get_or_create_plan(user_id)
        plan.notices_purchased = (plan.notices_purchased or 0) + max(0, count)
        if plan.plan_type == PlanType.FREE:
            plan.plan_type = PlanType.PAY_PER_NOTICE
        plan.updated_at = datetime.utcnow()
        logger.info(f"User {user_id} purchased {count} notice(s)")
        return plan

    def update_company_name(self, user_id: str, company_name: Optional[str]) -> Dict[str, Any]:
        plan = self.get_or_create_plan(user_id)
        plan.company_name = company_name
        return summarize_plan(plan)
