"""
Template API Routes

State notice templates (read-only) and the user's saved project templates.
"""
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from ..auth import get_current_user
from ..database import get_db
from ..models.db_models import UserDB
from ..services.notices import (
    DEFAULT_CUSTOMER_PLACEHOLDERS,
    NO_NOTICE_STATES,
    STATE_DEADLINES,
    STATE_TEMPLATE_LIST,
    US_STATES,
    build_placeholder_values,
    fill_sections,
    get_state_code,
    get_state_template_by_slug,
)
from ..services.notices.descriptors import slugify
from ..services.notices.state_rules import STATE_ABBREVIATIONS
from ..services.projects import ProjectTemplateService


router = APIRouter(prefix="/templates", tags=["templates"])


# =============================================================================
# REQUEST MODELS
# =============================================================================

class PreviewRequest(BaseModel):
    """Placeholder values for a preview. Missing keys use sample values."""
    values: Dict[str, str] = Field(default_factory=dict)
    use_profile: bool = Field(True, description="Fill company fields from the user's profile")


class ProjectTemplateRequest(BaseModel):
    template_name: str = Field(..., min_length=1)
    state: Optional[str] = None
    general_contractor_name: Optional[str] = None
    general_contractor_address: Optional[str] = None
    lender_name: Optional[str] = None
    lender_address: Optional[str] = None
    description: Optional[str] = None
    is_default: bool = False


class ProjectTemplateUpdateRequest(BaseModel):
    template_name: Optional[str] = None
    state: Optional[str] = None
    general_contractor_name: Optional[str] = None
    general_contractor_address: Optional[str] = None
    lender_name: Optional[str] = None
    lender_address: Optional[str] = None
    description: Optional[str] = None
    is_default: Optional[bool] = None


# =============================================================================
# STATE TEMPLATES
# =============================================================================

@router.get("/states", response_model=List[dict])
async def list_state_templates():
    """All state descriptors (without sections), Generic last."""
    return [d.to_dict(include_sections=False) for d in STATE_TEMPLATE_LIST]


@router.get("/states/deadlines", response_model=List[dict])
async def list_state_deadlines():
    """Statutory deadline table for every state."""
    return [
        {
            "state": state,
            "code": get_state_code(state),
            "deadline_days": STATE_DEADLINES.get(state),
            "notice_required": state not in NO_NOTICE_STATES,
        }
        for state in US_STATES
    ]


@router.get("/states/code/{code}", response_model=dict)
async def get_state_template_by_code(code: str):
    name = STATE_ABBREVIATIONS.get(code.upper())
    if not name:
        raise HTTPException(status_code=404, detail="Unknown state code")
    return get_state_template_by_slug(slugify(name)).to_dict()


@router.get("/states/{slug}", response_model=dict)
async def get_state_template(slug: str):
    """Descriptor by slug; unknown slugs get the generic template."""
    descriptor = get_state_template_by_slug(slug)
    if descriptor is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return descriptor.to_dict()


@router.post("/states/{slug}/preview", response_model=dict)
async def preview_state_template(
    slug: str,
    body: PreviewRequest,
    current_user: UserDB = Depends(get_current_user),
):
    """Descriptor sections with placeholders filled."""
    descriptor = get_state_template_by_slug(slug)
    if descriptor is None:
        raise HTTPException(status_code=404, detail="Template not found")

    values = dict(DEFAULT_CUSTOMER_PLACEHOLDERS)
    if body.use_profile:
        values.update({k: v for k, v in build_placeholder_values(profile=current_user).items() if v})
    values.update(body.values)
    values.setdefault("state_name", descriptor.full_name)

    return {
        "state": descriptor.to_dict(include_sections=False),
        "sections": fill_sections(descriptor, values),
    }


# =============================================================================
# PROJECT TEMPLATES
# =============================================================================

@router.get("/projects", response_model=List[dict])
async def list_project_templates(
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    return ProjectTemplateService(db, current_user.id).list_templates()


@router.post("/projects", response_model=dict, status_code=201)
async def create_project_template(
    body: ProjectTemplateRequest,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    try:
        result = ProjectTemplateService(db, current_user.id).create_template(body.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    db.commit()
    return result


@router.patch("/projects/{template_id}", response_model=dict)
async def update_project_template(
    template_id: str,
    body: ProjectTemplateUpdateRequest,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    result = ProjectTemplateService(db, current_user.id).update_template(
        template_id, body.model_dump(exclude_unset=True),
    )
    if "error" in result:
        raise HTTPException(status_code=404, detail=result["error"])
    db.commit()
    return result


@router.post("/projects/{template_id}/default", response_model=dict)
async def set_default_project_template(
    template_id: str,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    """Make this the user's default; any previous default is cleared."""
    result = ProjectTemplateService(db, current_user.id).set_default(template_id)
    if "error" in result:
        raise HTTPException(status_code=404, detail=result["error"])
    db.commit()
    return result


@router.delete("/projects/{template_id}", response_model=dict)
async def delete_project_template(
    template_id: str,
    db: Session = Depends(get_db),
    current_user: UserDB = Depends(get_current_user),
):
    result = ProjectTemplateService(db, current_user.id).delete_template(template_id)
    if "error" in result:
        raise HTTPException(status_code=404, detail=result["error"])
    db.commit()
    return result
