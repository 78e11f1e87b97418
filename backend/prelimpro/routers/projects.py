"""
Project API Routes

Project CRUD, the notice document lifecycle (delivery, proof of service,
signature), notice generation and the audit timeline.
"""
from datetime import date, datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import HTMLResponse, Response
from pydantic import BaseModel, Field, field_validator
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.db_models import DeliveryMethod, ProjectStatus, UserDB
from ..services.audit import AuditLogger, serialize_audit_log
from ..services.billing import PlanService
from ..services.deadlines import DeadlineEngine
from ..services.notices import (
    build_placeholder_values,
    fill_sections,
    generate_notice_html,
    get_descriptor_for_state,
    get_state_template,
    render_notice_pdf,
)
from ..services.notices.export import generate_csv, render_projects_report_pdf
from ..services.notices.state_rules import US_STATES, normalize_state
from ..services.projects import ProjectService


router = APIRouter(prefix="/projects", tags=["projects"])


# =============================================================================
# REQUEST/RESPONSE MODELS
# =============================================================================

class ProjectFields(BaseModel):
    """Editable project fields."""
    project_name: Optional[str] = None
    state: Optional[str] = Field(None, description="Full state name or two-letter code")
    job_start_date: Optional[date] = Field(None, description="First furnishing date")
    property_address: Optional[str] = None
    property_owner_name: Optional[str] = None
    property_owner_address: Optional[str] = None
    general_contractor_name: Optional[str] = None
    general_contractor_address: Optional[str] = None
    lender_name: Optional[str] = None
    lender_address: Optional[str] = None
    description: Optional[str] = None
    contract_amount: Optional[float] = Field(None, ge=0)
    delivery_method: Optional[DeliveryMethod] = None
    tracking_number: Optional[str] = None
    proof_of_service: Optional[str] = None

    @field_validator('state')
    @classmethod
    def validate_state(cls, v):
        if v is not None and v.strip():
            name = normalize_state(v)
            if name not in US_STATES:
                raise ValueError('Invalid state')
            return name
        return v


class CreateProjectRequest(ProjectFields):
    project_name: str = Field(..., min_length=1)
    state: Optional[str] = Field(None, description="Defaults to the default project template's state")
    apply_default_template: bool = True


class StatusChangeRequest(BaseModel):
    status: ProjectStatus


class DeliveryRequest(BaseModel):
    delivery_method: DeliveryMethod
    recipient_name: str
    recipient_address: str
    tracking_number: Optional[str] = None


class ConfirmDeliveryRequest(BaseModel):
    confirmed_at: Optional[datetime] = None


class ProofOfServiceRequest(BaseModel):
    proof_type: str = Field(..., description="e.g. certified_mail_receipt, affidavit")
    document_url: str
    delivery_date: datetime
    signed_by: Optional[str] = None


class SignatureRequest(BaseModel):
    signer_name: str
    signer_email: str
    signature_provider: str = "esign"
    document_url: Optional[str] = None


class EmailSentRequest(BaseModel):
    recipient_email: str
    email_type: str = "notice"
    subject: Optional[str] = None


# =============================================================================
# HELPERS
# =============================================================================

def _service(request: Request, db: Session, user: UserDB) -> ProjectService:
    return ProjectService(
        db,
        user.id,
        ip_address=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
    )


def _check(result: dict) -> dict:
    if "error" in result:
        raise HTTPException(status_code=404, detail=result["error"])
    return result


def _run_lifecycle(db: Session, action, *args, **kwargs) -> dict:
    """Run a lifecycle step, mapping illegal transitions and bad values to 400, then commit."""
    try:
        result = action(*args, **kwargs)
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))
    _check(result)
    db.commit()
    return result


# =============================================================================
# COLLECTION ENDPOINTS
# =============================================================================

@router.get("", response_model=List[dict])
async def list_projects(
    request: Request,
    status: Optional[ProjectStatus] = None,
    state: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """List the user's projects, newest first."""
    return _service(request, db, current_user).list_projects(status=status, state=state)


@router.post("", response_model=dict, status_code=201)
async def create_project(
    body: CreateProjectRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """
    Create a project. Consumes one notice from the user's plan.
    """
    usage = PlanService(db).use_notice(current_user.id)
    if not usage["success"]:
        db.rollback()
        raise HTTPException(status_code=402, detail=usage["error"])

    data = body.model_dump(exclude={"apply_default_template"}, exclude_none=True)
    try:
        result = _service(request, db, current_user).create_project(
            data, apply_default_template=body.apply_default_template,
        )
    except ValueError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    db.commit()
    return result


@router.get("/deadline-preview", response_model=dict)
async def deadline_preview(
    state: str,
    job_start_date: Optional[date] = None,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """Deadline a project would get for a state and first furnishing date."""
    deadline, metadata = DeadlineEngine(db).calculate_deadline(state, job_start_date)
    return {"deadline": deadline.isoformat() if deadline else None, **metadata}


@router.get("/export.csv")
async def export_csv(
    request: Request,
    status: Optional[ProjectStatus] = None,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    projects = _service(request, db, current_user).list_project_records(status=status)
    filename = f"projects-{date.today().isoformat()}.csv"
    return Response(
        content=generate_csv(projects),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/export.pdf")
async def export_pdf(
    request: Request,
    status: Optional[ProjectStatus] = None,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    projects = _service(request, db, current_user).list_project_records(status=status)
    owner = current_user.company_name or current_user.business_name or current_user.full_name or ""
    filename = f"projects-{date.today().isoformat()}.pdf"
    return Response(
        content=render_projects_report_pdf(projects, owner_name=owner),
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


# =============================================================================
# PROJECT ENDPOINTS
# =============================================================================

@router.get("/{project_id}", response_model=dict)
async def get_project(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    return _check(_service(request, db, current_user).get_project(project_id))


@router.patch("/{project_id}", response_model=dict)
async def update_project(
    project_id: str,
    body: ProjectFields,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """Update provided fields. State or start date changes recompute the deadline."""
    service = _service(request, db, current_user)
    return _run_lifecycle(db, service.update_project, project_id, body.model_dump(exclude_unset=True))


@router.delete("/{project_id}", response_model=dict)
async def delete_project(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    service = _service(request, db, current_user)
    return _run_lifecycle(db, service.delete_project, project_id)


# =============================================================================
# LIFECYCLE ENDPOINTS
# =============================================================================

@router.post("/{project_id}/status", response_model=dict)
async def change_status(
    project_id: str,
    body: StatusChangeRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    service = _service(request, db, current_user)
    return _run_lifecycle(db, service.change_status, project_id, body.status)


@router.post("/{project_id}/delivery", response_model=dict)
async def record_delivery(
    project_id: str,
    body: DeliveryRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """Record that the notice was sent. Moves the project to sent."""
    service = _service(request, db, current_user)
    return _run_lifecycle(
        db, service.record_delivery, project_id,
        body.delivery_method, body.recipient_name, body.recipient_address, body.tracking_number,
    )


@router.post("/{project_id}/delivery/confirm", response_model=dict)
async def confirm_delivery(
    project_id: str,
    body: ConfirmDeliveryRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    service = _service(request, db, current_user)
    return _run_lifecycle(db, service.confirm_delivery, project_id, body.confirmed_at)


@router.post("/{project_id}/proof-of-service", response_model=dict)
async def record_proof_of_service(
    project_id: str,
    body: ProofOfServiceRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    service = _service(request, db, current_user)
    return _run_lifecycle(
        db, service.record_proof_of_service, project_id,
        body.proof_type, body.document_url, body.delivery_date, body.signed_by,
    )


@router.post("/{project_id}/signature", response_model=dict)
async def record_signature(
    project_id: str,
    body: SignatureRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    service = _service(request, db, current_user)
    return _run_lifecycle(
        db, service.record_signature, project_id,
        body.signer_name, body.signer_email, body.signature_provider, body.document_url,
    )


@router.post("/{project_id}/email-sent", response_model=dict)
async def record_email_sent(
    project_id: str,
    body: EmailSentRequest,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    service = _service(request, db, current_user)
    return _run_lifecycle(
        db, service.record_email_sent, project_id, body.recipient_email, body.email_type, body.subject,
    )


# =============================================================================
# NOTICE GENERATION
# =============================================================================

@router.get("/{project_id}/notice")
async def generate_notice(
    project_id: str,
    request: Request,
    format: str = Query("html", pattern="^(html|pdf|sections)$"),
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """
    Generate the project's preliminary notice as HTML, PDF, or filled
    template sections. Generation is recorded in the audit log.
    """
    service = _service(request, db, current_user)
    project = service.get_project_record(project_id)
    if not project:
        raise HTTPException(status_code=404, detail="Project not found")

    template = get_state_template(project.state)
    if format == "pdf":
        content = render_notice_pdf(project, template, current_user)
    elif format == "html":
        content = generate_notice_html(project, template, current_user)
    else:
        descriptor = get_descriptor_for_state(project.state)
        values = build_placeholder_values(project, current_user)
        content = {"state": descriptor.to_dict(include_sections=False), "sections": fill_sections(descriptor, values)}

    _run_lifecycle(db, service.record_notice_generated, project_id)

    if format == "pdf":
        slug = get_descriptor_for_state(project.state).slug
        return Response(
            content=content,
            media_type="application/pdf",
            headers={"Content-Disposition": f'inline; filename="preliminary-notice-{slug}.pdf"'},
        )
    if format == "html":
        return HTMLResponse(content=content)
    return content


# =============================================================================
# AUDIT TIMELINE
# =============================================================================

@router.get("/{project_id}/audit", response_model=List[dict])
async def get_audit_trail(
    project_id: str,
    legacy: bool = False,
    event_types: Optional[List[str]] = Query(None),
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """
    Project audit trail, newest first.

    legacy=true returns the older timeline event shape, optionally filtered
    by legacy event type (created, update, notice, delivery, proof, signature).
    """
    audit = AuditLogger(db, current_user.id)
    if legacy:
        return audit.get_audit_events(project_id, event_types)
    return [serialize_audit_log(log) for log in audit.get_project_audit_logs(project_id)]


@router.get("/{project_id}/compliance", response_model=dict)
async def get_compliance_status(
    project_id: str,
    request: Request,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """Compliance checklist (notice, signature, delivery, proof) from the audit trail."""
    if _service(request, db, current_user).get_project_record(project_id) is None:
        raise HTTPException(status_code=404, detail="Project not found")
    status = AuditLogger(db, current_user.id).get_compliance_status(project_id)
    return {"project_id": project_id, **status}
