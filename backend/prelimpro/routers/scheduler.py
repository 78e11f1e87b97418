"""
Scheduler API Routes

Internal endpoints for system-automatic tasks, called by cron.
Deadline reminders, upcoming deadlines, overdue projects, push receipts.
"""
from datetime import date
from typing import Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, Header
from pydantic import BaseModel
from sqlalchemy.orm import Session

from ..config import INTERNAL_API_KEY
from ..database import get_db
from ..services.deadlines import DeadlineEngine, DeadlineScheduler
from ..services.notifications import PushNotificationService


router = APIRouter(prefix="/internal", tags=["scheduler"])


# =============================================================================
# INTERNAL API KEY VALIDATION
# =============================================================================

async def verify_internal_key(x_internal_key: str = Header(...)):
    """Verify internal API key for scheduler endpoints."""
    if x_internal_key != INTERNAL_API_KEY:
        raise HTTPException(status_code=403, detail="Invalid internal API key")
    return True


class ReceiptCheckRequest(BaseModel):
    """Expo ticket ids mapped to the push token each was sent to."""
    tickets: Dict[str, str]


# =============================================================================
# SCHEDULER ENDPOINTS (SYSTEM-ONLY)
# =============================================================================

@router.post("/reminder-check", response_model=dict)
def run_reminder_check(
    run_date: Optional[date] = None,
    db: Session = Depends(get_db),
    _: bool = Depends(verify_internal_key),
):
    """
    Run the daily deadline reminder scan.

    Sends 7, 3 and 1 day reminders for open projects. Safe to re-run:
    reminders already logged are skipped.
    """
    scheduler = DeadlineScheduler(db)

    result = scheduler.run_daily_reminder_check(today=run_date)

    return result


@router.post("/push-receipts", response_model=dict)
def check_push_receipts(
    body: ReceiptCheckRequest,
    db: Session = Depends(get_db),
    _: bool = Depends(verify_internal_key),
):
    """Invalidate tokens whose Expo receipts report DeviceNotRegistered."""
    invalidated = PushNotificationService(db).process_receipts(body.tickets)
    db.commit()
    return {"checked": len(body.tickets), "invalidated": invalidated}


# =============================================================================
# SCHEDULER STATUS ENDPOINTS (READ-ONLY)
# =============================================================================

@router.get("/deadlines", response_model=dict)
def get_upcoming_deadlines(
    days_ahead: int = 7,
    db: Session = Depends(get_db),
    _: bool = Depends(verify_internal_key),
):
    """
    Get upcoming deadlines for monitoring.
    """
    engine = DeadlineEngine(db)
    deadlines = engine.get_upcoming_deadlines(days_ahead)

    return {
        "days_ahead": days_ahead,
        "count": len(deadlines),
        "deadlines": deadlines,
    }


@router.get("/overdue", response_model=dict)
def get_overdue_projects(
    db: Session = Depends(get_db),
    _: bool = Depends(verify_internal_key),
):
    engine = DeadlineEngine(db)
    overdue = engine.get_overdue_projects()

    return {
        "count": len(overdue),
        "projects": overdue,
    }
