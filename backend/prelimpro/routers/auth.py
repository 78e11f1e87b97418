"""
Prelimpro - Authentication Router
Handles user registration, login, session verification, and the company
profile used on generated notices.
"""
from uuid import uuid4
from typing import Optional
import logging
import re

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, EmailStr, field_validator
from sqlalchemy.orm import Session

from ..database import get_db
from ..models.db_models import UserDB
from ..auth import hash_password, verify_password, create_access_token, get_current_user
from ..services.audit import AuditLogger
from ..services.billing import PlanService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


# =============================================================================
# PYDANTIC MODELS
# =============================================================================

class RegisterRequest(BaseModel):
    email: EmailStr
    username: str
    password: str

    @field_validator('password')
    @classmethod
    def validate_password_strength(cls, v):
        if len(v) < 8:
            raise ValueError('Password must be at least 8 characters')
        return v


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"


class MessageResponse(BaseModel):
    message: str


# -----------------------------------------------------------------------------
# PROFILE MODELS
# -----------------------------------------------------------------------------

PROFILE_FIELDS = (
    "full_name",
    "business_name",
    "company_name",
    "company_address",
    "phone",
    "company_email",
    "tax_id",
    "website",
    "license_number",
    "logo_url",
)


class ProfileUpdateRequest(BaseModel):
    """Company profile fields. Only provided fields are updated."""
    full_name: Optional[str] = None
    business_name: Optional[str] = None
    company_name: Optional[str] = None
    company_address: Optional[str] = None
    phone: Optional[str] = None
    company_email: Optional[EmailStr] = None
    tax_id: Optional[str] = None
    website: Optional[str] = None
    license_number: Optional[str] = None
    logo_url: Optional[str] = None

    @field_validator('phone')
    @classmethod
    def validate_phone(cls, v):
        if v is not None and v.strip():
            digits = re.sub(r'\D', '', v)
            if len(digits) < 10:
                raise ValueError('Phone number must have at least 10 digits')
        return v

    @field_validator('website', 'logo_url')
    @classmethod
    def validate_url(cls, v):
        if v is not None and v.strip() and not re.match(r'^https?://', v.strip()):
            raise ValueError('URL must start with http:// or https://')
        return v


class ChangePasswordRequest(BaseModel):
    """Request model for changing password."""
    current_password: str
    new_password: str
    confirm_password: str

    @field_validator('new_password')
    @classmethod
    def validate_password_strength(cls, v):
        if len(v) < 8:
            raise ValueError('Password must be at least 8 characters')
        return v

    @field_validator('confirm_password')
    @classmethod
    def passwords_match(cls, v, info):
        if 'new_password' in info.data and v != info.data['new_password']:
            raise ValueError('Passwords do not match')
        return v


class UserProfileResponse(BaseModel):
    """Full user profile response."""
    id: str
    email: str
    username: str
    created_at: Optional[str] = None

    full_name: Optional[str] = None
    business_name: Optional[str] = None
    company_name: Optional[str] = None
    company_address: Optional[str] = None
    phone: Optional[str] = None
    company_email: Optional[str] = None
    tax_id: Optional[str] = None
    website: Optional[str] = None
    license_number: Optional[str] = None
    logo_url: Optional[str] = None

    # Profile completeness
    profile_complete: int = 0


class UserResponse(BaseModel):
    """Basic user response."""
    id: str
    email: str
    username: str
    role: str = "user"


# =============================================================================
# API ENDPOINTS
# =============================================================================

@router.post("/register", response_model=MessageResponse, status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account. Every user starts on the free plan.
    """
    existing_email = db.query(UserDB).filter(UserDB.email == request.email).first()
    if existing_email:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email already registered"
        )

    existing_username = db.query(UserDB).filter(UserDB.username == request.username).first()
    if existing_username:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username already taken"
        )

    user = UserDB(
        id=str(uuid4()),
        email=request.email,
        username=request.username,
        password_hash=hash_password(request.password)
    )

    db.add(user)
    db.flush()
    PlanService(db).get_or_create_plan(user.id)
    db.commit()

    logger.info(f"User registered: {request.email}")
    return MessageResponse(message="User created successfully")


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate user and return JWT token.
    """
    user = db.query(UserDB).filter(UserDB.email == request.email).first()

    if not user or not verify_password(request.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(user.id, user.email, user.role or "user")

    logger.info(f"User logged in: {request.email}")
    return TokenResponse(access_token=access_token)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: UserDB = Depends(get_current_user)):
    """
    Get current authenticated user info (basic).
    """
    return UserResponse(
        id=current_user.id,
        email=current_user.email,
        username=current_user.username,
        role=current_user.role or "user"
    )


# =============================================================================
# PROFILE ENDPOINTS
# =============================================================================

def _calculate_profile_completeness(user: UserDB) -> int:
    """Percentage of the fields a notice's company block needs."""
    fields = [
        user.full_name,
        user.company_name or user.business_name,
        user.company_address,
        user.phone,
        user.company_email,
        user.license_number,
    ]
    filled = sum(1 for f in fields if f is not None and str(f).strip())
    return int((filled / len(fields)) * 100)


def _profile_response(user: UserDB) -> UserProfileResponse:
    return UserProfileResponse(
        id=user.id,
        email=user.email,
        username=user.username,
        created_at=user.created_at.isoformat() if user.created_at else None,
        profile_complete=_calculate_profile_completeness(user),
        **{field: getattr(user, field) for field in PROFILE_FIELDS},
    )


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(current_user: UserDB = Depends(get_current_user)):
    """
    Get the company profile that fills the claimant block of notices.
    """
    return _profile_response(current_user)


@router.put("/profile", response_model=UserProfileResponse)
async def update_profile(
    request: ProfileUpdateRequest,
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Update company profile information.
    All fields are optional - only provided fields will be updated.
    """
    audit = AuditLogger(db, current_user.id)
    changes = request.model_dump(exclude_unset=True)

    for field, value in changes.items():
        old_value = getattr(current_user, field)
        if old_value == value:
            continue
        setattr(current_user, field, value)
        audit.log_profile_update(field, old_value, value)

    if "company_name" in changes:
        PlanService(db).update_company_name(current_user.id, changes["company_name"])

    db.commit()
    db.refresh(current_user)

    logger.info(f"Profile updated for user: {current_user.email} ({', '.join(changes) or 'no changes'})")
    return _profile_response(current_user)


@router.put("/password", response_model=MessageResponse)
async def change_password(
    request: ChangePasswordRequest,
    current_user: UserDB = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """
    Change user password.
    Requires current password for verification.
    """
    if not verify_password(request.current_password, current_user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Current password is incorrect"
        )

    current_user.password_hash = hash_password(request.new_password)
    db.commit()

    logger.info(f"Password changed for user: {current_user.email}")
    return MessageResponse(message="Password updated successfully")
