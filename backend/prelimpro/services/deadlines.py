"""
Deadline Engine

Calculates preliminary notice deadlines and drives deadline reminders.

Key behaviors:
- Deadline = first furnishing date + statutory days for the project's state
- States without a mapped deadline get no deadline (never a guessed one)
- Reminders go out 7, 3 and 1 days before the deadline at 9 AM
- The daily reminder run is idempotent: each reminder is logged once per project
"""
import logging
from datetime import date, datetime, time, timedelta
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from ..models.db_models import ProjectDB, ProjectStatus
from .audit import AuditLogger
from .notices.state_rules import (
    calculate_deadline as calculate_state_deadline,
    get_deadline_days,
    get_state_template,
    is_notice_required,
    normalize_state,
)
from .notifications.push import PushNotificationService

logger = logging.getLogger(__name__)


# =============================================================================
# REMINDER CONFIGURATION
# =============================================================================

REMINDER_DAYS_BEFORE = (7, 3, 1)
REMINDER_HOUR = 9

# Projects still waiting on a notice to go out
OPEN_STATUSES = (ProjectStatus.DRAFT, ProjectStatus.PENDING)


def reminder_type_for(days_before: int) -> str:
    return f"{days_before}_day"


def format_time_until_deadline(deadline: date, today: Optional[date] = None) -> str:
    """'N days overdue' | 'Due today' | '1 day remaining' | 'N days remaining'"""
    days = (deadline - (today or date.today())).days
    if days < 0:
        overdue = abs(days)
        return f"{overdue} day{'s' if overdue != 1 else ''} overdue"
    if days == 0:
        return "Due today"
    if days == 1:
        return "1 day remaining"
    return f"{days} days remaining"


def build_reminder_schedule(project: Any, now: Optional[datetime] = None) -> List[Dict[str, Any]]:
    """
    Future reminder slots for a project.

    Empty when the project needs no notice or has no deadline. Slots whose
    9 AM trigger time has already passed are skipped.
    """
    if not project.deadline or not project.notice_required:
        return []

    now = now or datetime.now()
    schedule = []
    for days_before in REMINDER_DAYS_BEFORE:
        trigger_at = datetime.combine(project.deadline - timedelta(days=days_before), time(hour=REMINDER_HOUR))
        if trigger_at > now:
            schedule.append({
                "days_before": days_before,
                "reminder_type": reminder_type_for(days_before),
                "trigger_at": trigger_at.isoformat(),
            })
    return schedule


# =============================================================================
# DEADLINE ENGINE
# =============================================================================

class DeadlineEngine:
    """
    Deadline calculation and lookup for preliminary notice projects.
    """

    def __init__(self, db_session: Session):
        """Initialize with database session."""
        self.db = db_session

    def calculate_deadline(
        self,
        state: str,
        furnishing_date: Optional[date],
    ) -> Tuple[Optional[date], Dict[str, Any]]:
        """
        Calculate the notice deadline for a state and first furnishing date.

        Returns (deadline_date, metadata). deadline_date is None when the
        state requires no notice or has no mapped deadline.
        """
        name = normalize_state(state)
        notice_required = is_notice_required(name)
        deadline = calculate_state_deadline(name, furnishing_date) if notice_required else None

        metadata = {
            "state": name,
            "days": get_deadline_days(name),
            "notice_required": notice_required,
            "statute": get_state_template(name).subtitle,
            "furnishing_date": furnishing_date.isoformat() if furnishing_date else None,
        }
        return deadline, metadata

    def apply_deadline(self, project: ProjectDB) -> ProjectDB:
        """Recompute notice_required and deadline on a project from its state and start date."""
        project.state = normalize_state(project.state) or project.state
        project.deadline, metadata = self.calculate_deadline(project.state, project.job_start_date)
        project.notice_required = metadata["notice_required"]
        return project

    def open_projects_query(self, user_id: Optional[str] = None):
        query = self.db.query(ProjectDB).filter(
            ProjectDB.status.in_(OPEN_STATUSES),
            ProjectDB.notice_required.is_(True),
            ProjectDB.deadline.isnot(None),
        )
        if user_id:
            query = query.filter(ProjectDB.user_id == user_id)
        return query

    def get_upcoming_deadlines(
        self,
        days_ahead: int = 7,
        user_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> List[Dict[str, Any]]:
        """Open projects with deadlines in the next N days, soonest first."""
        today = today or date.today()
        future_date = today + timedelta(days=days_ahead)

        projects = self.open_projects_query(user_id).filter(
            ProjectDB.deadline >= today,
            ProjectDB.deadline <= future_date,
        ).order_by(ProjectDB.deadline.asc()).all()

        return [
            {
                "project_id": p.id,
                "user_id": p.user_id,
                "project_name": p.project_name,
                "state": p.state,
                "deadline": p.deadline.isoformat(),
                "days_remaining": (p.deadline - today).days,
                "time_until": format_time_until_deadline(p.deadline, today),
            }
            for p in projects
        ]

    def get_overdue_projects(self, user_id: Optional[str] = None, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Open projects whose deadline has passed."""
        today = today or date.today()
        projects = self.open_projects_query(user_id).filter(
            ProjectDB.deadline < today,
        ).order_by(ProjectDB.deadline.asc()).all()

        return [
            {
                "project_id": p.id,
                "user_id": p.user_id,
                "project_name": p.project_name,
                "state": p.state,
                "deadline": p.deadline.isoformat(),
                "days_overdue": (today - p.deadline).days,
                "time_until": format_time_until_deadline(p.deadline, today),
            }
            for p in projects
        ]


# =============================================================================
# DEADLINE SCHEDULER
# =============================================================================
#
# Runs once a day via the internal scheduler endpoint (cron).
#
# =============================================================================

class DeadlineScheduler:
    """
    Daily scheduler for deadline reminders.
    """

    def __init__(self, db_session: Session, push_service: Optional[PushNotificationService] = None):
        """Initialize with database session."""
        self.db = db_session
        self.engine = DeadlineEngine(db_session)
        self.push = push_service or PushNotificationService(db_session)

    def run_daily_reminder_check(self, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Send reminders for open projects whose deadline is exactly 7, 3 or 1 days away.

        A reminder already logged for a project is not sent again.
        """
        today = today or date.today()
        sent = []
        skipped = []
        errors = []

        due_dates = [today + timedelta(days=d) for d in REMINDER_DAYS_BEFORE]
        projects = self.engine.open_projects_query().filter(ProjectDB.deadline.in_(due_dates)).all()

        for project in projects:
            days_remaining = (project.deadline - today).days
            reminder_type = reminder_type_for(days_remaining)
            try:
                audit = AuditLogger(self.db, project.user_id)
                if audit.has_reminder_been_sent(project.id, reminder_type):
                    skipped.append({"project_id": project.id, "reminder_type": reminder_type})
                    continue

                results = self.push.send_deadline_reminder(
                    project.user_id,
                    project.project_name,
                    days_remaining,
                    project_id=project.id,
                )
                delivered = sum(1 for r in results if r.success)

                audit.log_reminder_sent(project.id, reminder_type, days_remaining)
                sent.append({
                    "project_id": project.id,
                    "reminder_type": reminder_type,
                    "devices": delivered,
                })

            except Exception as e:
                logger.error(f"Reminder failed for project {project.id}: {e}")
                errors.append({
                    "project_id": project.id,
                    "error": str(e),
                })

        # Commit all changes
        self.db.commit()

        logger.info(f"Reminder run {today.isoformat()}: {len(sent)} sent, {len(skipped)} skipped, {len(errors)} errors")

        return {
            "run_date": datetime.utcnow().isoformat(),
            "reminders_sent": len(sent),
            "reminders_skipped": len(skipped),
            "errors": len(errors),
            "details": {
                "sent": sent,
                "skipped": skipped,
                "errors": errors,
            }
        }
