"""
Prelimpro - SQLAlchemy ORM Models
PostgreSQL database models for persistent storage
"""
from datetime import datetime
from enum import Enum
from sqlalchemy import (
    Column, String, Integer, Float, DateTime, Text, JSON, ForeignKey,
    Enum as SQLEnum, Boolean, Date, UniqueConstraint
)
from sqlalchemy.orm import relationship
from ..database import Base


# =============================================================================
# ENUMS
# =============================================================================

class ProjectStatus(str, Enum):
    """Lifecycle status of a preliminary notice project."""
    DRAFT = "draft"
    PENDING = "pending"
    SENT = "sent"
    DELIVERED = "delivered"
    SIGNED = "signed"


class DeliveryMethod(str, Enum):
    """How the notice reaches its recipients."""
    EMAIL = "email"
    ESIGN = "esign"
    MAIL = "mail"


class AuditActionType(str, Enum):
    """Action types recorded in the audit log."""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    STATUS_CHANGE = "status_change"
    DELIVERY_CONFIRMED = "delivery_confirmed"
    DOCUMENT_GENERATED = "document_generated"
    DOCUMENT_MODIFIED = "document_modified"
    EMAIL_SENT = "email_sent"
    REMINDER_SENT = "reminder_sent"
    NOTICE = "notice"
    DELIVERY = "delivery"
    PROOF = "proof"
    SIGNATURE = "signature"


class AuditEntityType(str, Enum):
    """Entity an audit entry refers to."""
    PROJECT = "project"
    TEMPLATE = "template"
    PROFILE = "profile"
    DOCUMENT = "document"


class PlanType(str, Enum):
    """Subscription plan of a user."""
    FREE = "free"
    PAY_PER_NOTICE = "pay_per_notice"
    PRO = "pro"
    ENTERPRISE = "enterprise"


class SubscriptionStatus(str, Enum):
    """Status of a user's paid subscription."""
    ACTIVE = "active"
    CANCELING = "canceling"
    CANCELED = "canceled"
    PAST_DUE = "past_due"


class PushPlatform(str, Enum):
    """Device platform for a push token."""
    IOS = "ios"
    ANDROID = "android"
    WEB = "web"


# =============================================================================
# USERS & PROFILES
# =============================================================================

class UserDB(Base):
    """User account with the company profile that fills notice letterheads."""
    __tablename__ = "users"

    id = Column(String(36), primary_key=True)  # UUID
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(100), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=True)  # NULL for externally provisioned users
    role = Column(String(20), default="user")
    full_name = Column(String(255), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # ==========================================================================
    # COMPANY PROFILE - Feeds notice header and signature block
    # ==========================================================================
    business_name = Column(String(255), nullable=True)
    company_name = Column(String(255), nullable=True)
    company_address = Column(String(500), nullable=True)
    phone = Column(String(30), nullable=True)
    company_email = Column(String(255), nullable=True)
    tax_id = Column(String(50), nullable=True)
    website = Column(String(255), nullable=True)
    license_number = Column(String(100), nullable=True)
    logo_url = Column(String(500), nullable=True)

    # Relationships
    projects = relationship("ProjectDB", back_populates="user", cascade="all, delete-orphan")
    project_templates = relationship("ProjectTemplateDB", back_populates="user", cascade="all, delete-orphan")
    plan = relationship("UserPlanDB", back_populates="user", uselist=False, cascade="all, delete-orphan")


class UserPlanDB(Base):
    """Plan and notice entitlements for a user. One row per user."""
    __tablename__ = "user_plans"

    id = Column(String(36), primary_key=True)  # UUID
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)

    plan_type = Column(SQLEnum(PlanType), default=PlanType.FREE, nullable=False)
    company_name = Column(String(255), nullable=True)
    notices_used = Column(Integer, default=0)
    notices_purchased = Column(Integer, default=0)

    # Stripe linkage
    stripe_customer_id = Column(String(100), nullable=True, index=True)
    subscription_id = Column(String(100), nullable=True, index=True)
    subscription_status = Column(SQLEnum(SubscriptionStatus), nullable=True)
    pro_until = Column(DateTime, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("UserDB", back_populates="plan")


# =============================================================================
# PROJECTS
# =============================================================================

class ProjectDB(Base):
    """
    A construction job for which a preliminary notice is tracked.
    Deadline and notice_required are derived from state + job_start_date.
    """
    __tablename__ = "projects"

    id = Column(String(36), primary_key=True)  # UUID
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    project_name = Column(String(255), nullable=False)
    state = Column(String(50), nullable=False)  # Full state name, e.g. "California"
    status = Column(SQLEnum(ProjectStatus), default=ProjectStatus.DRAFT, nullable=False)

    # Deadline
    job_start_date = Column(Date, nullable=True)  # First furnishing date
    deadline = Column(Date, nullable=True)
    notice_required = Column(Boolean, default=True)

    # Parties
    property_address = Column(String(500), nullable=True)
    property_owner_name = Column(String(255), nullable=True)
    property_owner_address = Column(String(500), nullable=True)
    general_contractor_name = Column(String(255), nullable=True)
    general_contractor_address = Column(String(500), nullable=True)
    lender_name = Column(String(255), nullable=True)
    lender_address = Column(String(500), nullable=True)

    description = Column(Text, nullable=True)
    contract_amount = Column(Float, nullable=True)

    # Delivery
    delivery_method = Column(SQLEnum(DeliveryMethod), nullable=True)
    tracking_number = Column(String(100), nullable=True)
    proof_of_service = Column(Text, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("UserDB", back_populates="projects")


class ProjectTemplateDB(Base):
    """Reusable party/description defaults applied to new projects."""
    __tablename__ = "project_templates"

    id = Column(String(36), primary_key=True)  # UUID
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    template_name = Column(String(255), nullable=False)
    state = Column(String(50), nullable=True)
    general_contractor_name = Column(String(255), nullable=True)
    general_contractor_address = Column(String(500), nullable=True)
    lender_name = Column(String(255), nullable=True)
    lender_address = Column(String(500), nullable=True)
    description = Column(Text, nullable=True)
    is_default = Column(Boolean, default=False)  # At most one per user

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = relationship("UserDB", back_populates="project_templates")


# =============================================================================
# AUDIT LOG
# =============================================================================

class AuditLogDB(Base):
    """
    Immutable record of project and document events.
    Append-only - rows are never updated or deleted.
    """
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True)  # UUID
    user_id = Column(String(36), nullable=False, index=True)
    project_id = Column(String(36), nullable=True, index=True)  # NULL once the project is deleted

    action_type = Column(SQLEnum(AuditActionType), nullable=False, index=True)
    entity_type = Column(SQLEnum(AuditEntityType), nullable=False)
    entity_id = Column(String(36), nullable=True)

    # Field-level change
    field_name = Column(String(100), nullable=True)
    old_value = Column(Text, nullable=True)
    new_value = Column(Text, nullable=True)

    # Event Metadata (renamed from 'metadata' which is reserved in SQLAlchemy)
    event_metadata = Column(JSON, nullable=True)

    # Request context
    ip_address = Column(String(64), nullable=True)
    user_agent = Column(String(500), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow, index=True)


# =============================================================================
# PUSH NOTIFICATIONS
# =============================================================================

class PushTokenDB(Base):
    """Expo push token registered by a device."""
    __tablename__ = "user_push_tokens"
    __table_args__ = (
        UniqueConstraint("user_id", "device_id", name="uq_push_token_user_device"),
    )

    id = Column(String(36), primary_key=True)  # UUID
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expo_push_token = Column(String(255), nullable=False, index=True)
    device_id = Column(String(255), nullable=False)
    platform = Column(SQLEnum(PushPlatform), nullable=False)
    is_valid = Column(Boolean, default=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


# =============================================================================
# BILLING (Stripe webhook mirror)
# =============================================================================

class SubscriptionDB(Base):
    """Snapshot of a Stripe subscription."""
    __tablename__ = "org_subscriptions"

    subscription_id = Column(String(100), primary_key=True)
    customer_id = Column(String(100), nullable=False, index=True)
    tier = Column(String(20), nullable=False, default="unknown")
    price_id = Column(String(100), nullable=True)
    seats = Column(Integer, default=1)
    status = Column(String(30), nullable=False)
    current_period_end = Column(DateTime, nullable=True)
    cancel_at = Column(DateTime, nullable=True)
    cancel_at_period_end = Column(Boolean, default=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class EntitlementDB(Base):
    """Tier and seat limit granted to a Stripe customer."""
    __tablename__ = "org_entitlements"

    customer_id = Column(String(100), primary_key=True)
    tier = Column(String(20), nullable=False)
    seat_limit = Column(Integer, default=1)
    status = Column(String(30), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class InvoiceDB(Base):
    """Stripe invoice payment outcome."""
    __tablename__ = "billing_invoices"

    invoice_id = Column(String(100), primary_key=True)
    customer_id = Column(String(100), nullable=True, index=True)
    subscription_id = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False)  # paid, failed
    amount_paid = Column(Integer, nullable=True)  # cents
    amount_due = Column(Integer, nullable=True)   # cents
    currency = Column(String(10), nullable=True)
    hosted_invoice_url = Column(String(500), nullable=True)
    next_payment_attempt = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class ChargeDB(Base):
    """Refunded or disputed Stripe charge."""
    __tablename__ = "billing_charges"

    charge_id = Column(String(100), primary_key=True)
    customer_id = Column(String(100), nullable=True, index=True)
    invoice_id = Column(String(100), nullable=True)
    amount_refunded = Column(Integer, nullable=True)  # cents
    status = Column(String(30), nullable=True)
    event_type = Column(String(60), nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class BillingEventDB(Base):
    """Processing log for every received Stripe webhook."""
    __tablename__ = "billing_events"

    id = Column(String(100), primary_key=True)  # Stripe event id or UUID
    type = Column(String(100), nullable=False)
    status = Column(String(20), nullable=False)  # processed, error
    message = Column(Text, nullable=True)
    payload = Column(JSON, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)
