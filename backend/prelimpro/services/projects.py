"""
Project Service

CRUD and document lifecycle for preliminary notice projects.

Lifecycle:
    draft -> pending -> sent -> delivered -> signed

Status only moves forward (pending may drop back to draft). Every change
is written to the audit log in the same transaction.
"""
import logging
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple, Union
from uuid import uuid4

from sqlalchemy.orm import Session

from ..models.db_models import (
    DeliveryMethod,
    ProjectDB,
    ProjectStatus,
    ProjectTemplateDB,
)
from .audit import AuditLogger
from .deadlines import DeadlineEngine, build_reminder_schedule, format_time_until_deadline
from .notices.state_rules import normalize_state

logger = logging.getLogger(__name__)


# =============================================================================
# STATUS CONFIGURATION
# =============================================================================

STATUS_CONFIG = {
    ProjectStatus.DRAFT: {
        "description": "Project created, notice not yet prepared",
        "allowed_transitions": [ProjectStatus.PENDING, ProjectStatus.SENT],
    },
    ProjectStatus.PENDING: {
        "description": "Notice generated, awaiting delivery",
        "allowed_transitions": [ProjectStatus.DRAFT, ProjectStatus.SENT],
    },
    ProjectStatus.SENT: {
        "description": "Notice sent to recipients",
        "allowed_transitions": [ProjectStatus.DELIVERED, ProjectStatus.SIGNED],
    },
    ProjectStatus.DELIVERED: {
        "description": "Delivery confirmed",
        "allowed_transitions": [ProjectStatus.SIGNED],
    },
    ProjectStatus.SIGNED: {
        "description": "Recipient signed - lifecycle complete",
        "allowed_transitions": [],  # Terminal state
    },
}

# Fields a user may edit directly
EDITABLE_FIELDS = (
    "project_name",
    "state",
    "job_start_date",
    "property_address",
    "property_owner_name",
    "property_owner_address",
    "general_contractor_name",
    "general_contractor_address",
    "lender_name",
    "lender_address",
    "description",
    "contract_amount",
    "delivery_method",
    "tracking_number",
    "proof_of_service",
)

# Fields copied from a user's default project template into new projects
TEMPLATE_FIELDS = (
    "state",
    "general_contractor_name",
    "general_contractor_address",
    "lender_name",
    "lender_address",
    "description",
)


class ProjectTransitionError(ValueError):
    """Raised when a status change is not allowed from the current status."""


def can_transition(from_status: ProjectStatus, to_status: ProjectStatus) -> Tuple[bool, str]:
    """Returns (allowed, reason)."""
    allowed = STATUS_CONFIG.get(from_status, {}).get("allowed_transitions", [])
    if to_status in allowed:
        return True, "Transition allowed"
    return False, f"Cannot transition from {from_status.value} to {to_status.value}"


def _iso(value: Optional[Union[date, datetime]]) -> Optional[str]:
    return value.isoformat() if value else None


def serialize_project(project: ProjectDB, today: Optional[date] = None) -> Dict[str, Any]:
    today = today or date.today()
    return {
        "id": project.id,
        "user_id": project.user_id,
        "project_name": project.project_name,
        "state": project.state,
        "status": project.status.value if project.status else None,
        "deadline": _iso(project.deadline),
        "job_start_date": _iso(project.job_start_date),
        "notice_required": bool(project.notice_required),
        "property_address": project.property_address,
        "property_owner_name": project.property_owner_name,
        "property_owner_address": project.property_owner_address,
        "general_contractor_name": project.general_contractor_name,
        "general_contractor_address": project.general_contractor_address,
        "lender_name": project.lender_name,
        "lender_address": project.lender_address,
        "description": project.description,
        "contract_amount": project.contract_amount,
        "delivery_method": project.delivery_method.value if project.delivery_method else None,
        "tracking_number": project.tracking_number,
        "proof_of_service": project.proof_of_service,
        "days_to_deadline": (project.deadline - today).days if project.deadline else None,
        "time_until_deadline": format_time_until_deadline(project.deadline, today) if project.deadline else None,
        "reminders": build_reminder_schedule(project),
        "created_at": _iso(project.created_at),
        "updated_at": _iso(project.updated_at),
    }


# =============================================================================
# PROJECT SERVICE
# =============================================================================

class ProjectService:
    """
    Project CRUD and lifecycle operations for one user.

    Not-found lookups return {"error": ...}; illegal status changes raise
    ProjectTransitionError.
    """

    def __init__(
        self,
        db_session: Session,
        user_id: str,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ):
        self.db = db_session
        self.user_id = user_id
        self.audit = AuditLogger(db_session, user_id, ip_address=ip_address, user_agent=user_agent)
        self.deadline_engine = DeadlineEngine(db_session)

    # =========================================================================
    # LOOKUP
    # =========================================================================

    def get_project_record(self, project_id: str) -> Optional[ProjectDB]:
        return self.db.query(ProjectDB).filter(
            ProjectDB.id == project_id,
            ProjectDB.user_id == self.user_id,
        ).first()

    def get_project(self, project_id: str) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}
        return serialize_project(project)

    def list_project_records(
        self,
        status: Optional[ProjectStatus] = None,
        state: Optional[str] = None,
    ) -> List[ProjectDB]:
        query = self.db.query(ProjectDB).filter(ProjectDB.user_id == self.user_id)
        if status:
            query = query.filter(ProjectDB.status == status)
        if state:
            query = query.filter(ProjectDB.state == normalize_state(state))
        return query.order_by(ProjectDB.created_at.desc()).all()

    def list_projects(self, status: Optional[ProjectStatus] = None, state: Optional[str] = None) -> List[Dict[str, Any]]:
        return [serialize_project(p) for p in self.list_project_records(status=status, state=state)]

    # =========================================================================
    # CRUD
    # =========================================================================

    def get_default_template(self) -> Optional[ProjectTemplateDB]:
        return self.db.query(ProjectTemplateDB).filter(
            ProjectTemplateDB.user_id == self.user_id,
            ProjectTemplateDB.is_default.is_(True),
        ).first()

    def create_project(self, data: Dict[str, Any], apply_default_template: bool = True) -> Dict[str, Any]:
        """
        Create a project. Blank party fields are filled from the user's
        default project template; deadline and notice_required are derived.
        """
        values = {k: v for k, v in data.items() if k in EDITABLE_FIELDS}

        template = self.get_default_template() if apply_default_template else None
        if template:
            for field in TEMPLATE_FIELDS:
                if not values.get(field) and getattr(template, field):
                    values[field] = getattr(template, field)

        if not values.get("project_name"):
            raise ValueError("project_name is required")
        if not values.get("state"):
            raise ValueError("state is required")

        if values.get("delivery_method") is not None:
            values["delivery_method"] = DeliveryMethod(values["delivery_method"])

        project = ProjectDB(
            id=str(uuid4()),
            user_id=self.user_id,
            status=ProjectStatus.DRAFT,
            created_at=datetime.utcnow(),
            updated_at=datetime.utcnow(),
            **values,
        )
        self.deadline_engine.apply_deadline(project)
        self.db.add(project)
        self.db.flush()

        self.audit.log_project_created(project.id, project.project_name, metadata={
            "state": project.state,
            "deadline": _iso(project.deadline),
            "template_id": template.id if template else None,
        })

        logger.info(f"Project created: {project.id} ({project.state}) for user {self.user_id}")
        return serialize_project(project)

    def update_project(self, project_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Apply field changes; each changed field gets its own audit entry."""
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}

        for required in ("project_name", "state"):
            if required in changes and not changes[required]:
                raise ValueError(f"{required} cannot be empty")

        if "delivery_method" in changes and changes["delivery_method"] is not None:
            changes = {**changes, "delivery_method": DeliveryMethod(changes["delivery_method"])}
        if changes.get("state"):
            changes = {**changes, "state": normalize_state(changes["state"])}

        changed = []
        for field in EDITABLE_FIELDS:
            if field not in changes:
                continue
            old_value = getattr(project, field)
            new_value = changes[field]
            if old_value == new_value:
                continue
            setattr(project, field, new_value)
            self.audit.log_field_update(project.id, field, old_value, new_value)
            changed.append(field)

        if "state" in changed or "job_start_date" in changed:
            old_deadline = project.deadline
            self.deadline_engine.apply_deadline(project)
            if project.deadline != old_deadline:
                self.audit.log_field_update(
                    project.id, "deadline", old_deadline, project.deadline,
                    metadata={"reason": "recalculated"},
                )

        if changed:
            project.updated_at = datetime.utcnow()
            logger.info(f"Project {project.id} updated: {', '.join(changed)}")

        return serialize_project(project)

    def delete_project(self, project_id: str) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}

        self.audit.log_project_deleted(project.id, project.project_name, metadata={"state": project.state})
        self.db.delete(project)
        self.db.flush()

        logger.info(f"Project deleted: {project_id}")
        return {"deleted": True, "project_id": project_id}

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def _advance(self, project: ProjectDB, to_status: ProjectStatus) -> bool:
        """Move to to_status, logging the change. No-op when already there."""
        from_status = project.status
        if from_status == to_status:
            return False

        allowed, reason = can_transition(from_status, to_status)
        if not allowed:
            raise ProjectTransitionError(reason)

        project.status = to_status
        project.updated_at = datetime.utcnow()
        self.audit.log_status_update(project.id, from_status.value, to_status.value)
        return True

    def change_status(self, project_id: str, to_status: Union[ProjectStatus, str]) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}
        self._advance(project, ProjectStatus(to_status))
        return serialize_project(project)

    def record_notice_generated(self, project_id: str, document_url: Optional[str] = None) -> Dict[str, Any]:
        """Log the generated notice; a draft project becomes pending."""
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}
        self.audit.log_notice_generated(project.id, project.state, document_url)
        if project.status == ProjectStatus.DRAFT:
            self._advance(project, ProjectStatus.PENDING)
        return serialize_project(project)

    def record_delivery(
        self,
        project_id: str,
        delivery_method: Union[DeliveryMethod, str],
        recipient_name: str,
        recipient_address: str,
        tracking_number: Optional[str] = None,
    ) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}

        method = DeliveryMethod(delivery_method)
        self._advance(project, ProjectStatus.SENT)
        project.delivery_method = method
        if tracking_number:
            project.tracking_number = tracking_number

        self.audit.log_delivery(project.id, method.value, recipient_name, recipient_address, tracking_number)
        return serialize_project(project)

    def confirm_delivery(self, project_id: str, confirmed_at: Optional[datetime] = None) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}

        self._advance(project, ProjectStatus.DELIVERED)
        self.audit.log_delivery_confirmed(
            project.id,
            project.delivery_method.value if project.delivery_method else None,
            confirmed_at or datetime.utcnow(),
        )
        return serialize_project(project)

    def record_proof_of_service(
        self,
        project_id: str,
        proof_type: str,
        document_url: str,
        delivery_date: datetime,
        signed_by: Optional[str] = None,
    ) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}
        if project.status in (ProjectStatus.DRAFT, ProjectStatus.PENDING):
            raise ProjectTransitionError("Proof of service requires a sent notice")

        project.proof_of_service = document_url
        project.updated_at = datetime.utcnow()
        self.audit.log_proof_of_service(project.id, proof_type, document_url, delivery_date, signed_by)
        return serialize_project(project)

    def record_signature(
        self,
        project_id: str,
        signer_name: str,
        signer_email: str,
        signature_provider: str,
        document_url: Optional[str] = None,
    ) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}

        self._advance(project, ProjectStatus.SIGNED)
        self.audit.log_signature(project.id, signer_name, signer_email, signature_provider, document_url)
        return serialize_project(project)

    def record_email_sent(
        self,
        project_id: str,
        recipient_email: str,
        email_type: str,
        subject: Optional[str] = None,
    ) -> Dict[str, Any]:
        project = self.get_project_record(project_id)
        if not project:
            return {"error": "Project not found"}
        self.audit.log_email_sent(project.id, recipient_email, email_type, subject)
        return serialize_project(project)


# =============================================================================
# PROJECT TEMPLATES
# =============================================================================

TEMPLATE_EDITABLE_FIELDS = ("template_name",) + TEMPLATE_FIELDS + ("is_default",)


def serialize_project_template(template: ProjectTemplateDB) -> Dict[str, Any]:
    return {
        "id": template.id,
        "template_name": template.template_name,
        "state": template.state,
        "general_contractor_name": template.general_contractor_name,
        "general_contractor_address": template.general_contractor_address,
        "lender_name": template.lender_name,
        "lender_address": template.lender_address,
        "description": template.description,
        "is_default": bool(template.is_default),
        "created_at": _iso(template.created_at),
    }


class ProjectTemplateService:
    """Saved project defaults. At most one template per user is the default."""

    def __init__(self, db_session: Session, user_id: str):
        self.db = db_session
        self.user_id = user_id

    def _get(self, template_id: str) -> Optional[ProjectTemplateDB]:
        return self.db.query(ProjectTemplateDB).filter(
            ProjectTemplateDB.id == template_id,
            ProjectTemplateDB.user_id == self.user_id,
        ).first()

    def _clear_default(self, keep_id: Optional[str] = None) -> None:
        query = self.db.query(ProjectTemplateDB).filter(
            ProjectTemplateDB.user_id == self.user_id,
            ProjectTemplateDB.is_default.is_(True),
        )
        for template in query.all():
            if template.id != keep_id:
                template.is_default = False

    def list_templates(self) -> List[Dict[str, Any]]:
        templates = self.db.query(ProjectTemplateDB).filter(
            ProjectTemplateDB.user_id == self.user_id,
        ).order_by(ProjectTemplateDB.is_default.desc(), ProjectTemplateDB.template_name.asc()).all()
        return [serialize_project_template(t) for t in templates]

    def create_template(self, data: Dict[str, Any]) -> Dict[str, Any]:
        values = {k: v for k, v in data.items() if k in TEMPLATE_EDITABLE_FIELDS}
        if not values.get("template_name"):
            raise ValueError("template_name is required")
        if values.get("state"):
            values["state"] = normalize_state(values["state"])

        template = ProjectTemplateDB(id=str(uuid4()), user_id=self.user_id, created_at=datetime.utcnow(), **values)
        if template.is_default:
            self._clear_default(keep_id=template.id)
        self.db.add(template)
        self.db.flush()
        return serialize_project_template(template)

    def update_template(self, template_id: str, changes: Dict[str, Any]) -> Dict[str, Any]:
        template = self._get(template_id)
        if not template:
            return {"error": "Template not found"}
        for field in TEMPLATE_EDITABLE_FIELDS:
            if field in changes:
                value = changes[field]
                if field == "state" and value:
                    value = normalize_state(value)
                setattr(template, field, value)
        if template.is_default:
            self._clear_default(keep_id=template.id)
        return serialize_project_template(template)

    def set_default(self, template_id: str) -> Dict[str, Any]:
        return self.update_template(template_id, {"is_default": True})

    def delete_template(self, template_id: str) -> Dict[str, Any]:
        template = self._get(template_id)
        if not template:
            return {"error": "Template not found"}
        self.db.delete(template)
        self.db.flush()
        return {"deleted": True, "template_id": template_id}
