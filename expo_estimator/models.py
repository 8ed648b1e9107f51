from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, Enum, Boolean, JSON
from sqlalchemy.orm import relationship
from datetime import datetime
from .database import Base
import enum


class QuoteStatus(str, enum.Enum):
    DRAFT = "draft"
    SENT = "sent"
    ACCEPTED = "accepted"
    DECLINED = "declined"


class WizardStep(str, enum.Enum):
    EVENT = "event"
    STALL_DESIGN = "stall_design"
    FLIGHTS = "flights"
    HOTEL = "hotel"
    VENDORS = "vendors"
    SUMMARY = "summary"


# Stored as VARCHAR, not enum: new categories don't need a migration.
VENDOR_CATEGORIES = [
    "stall_fabrication",
    "printing_branding",
    "av_equipment",
    "furniture_rental",
    "logistics",
    "catering",
    "staffing",
    "photography",
]


class AdminUser(Base):
    """Admin-panel accounts. Only admins can manage vendors."""
    __tablename__ = "admin_users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    full_name = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)


class Exhibitor(Base):
    """The company an estimate is prepared for."""
    __tablename__ = "exhibitors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    company = Column(String)
    email = Column(String)
    phone = Column(String)
    industry = Column(String)
    notes = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)
    quotes = relationship("Quote", back_populates="exhibitor")


class Vendor(Base):
    """Service providers recommended in the vendor step. Managed from the admin panel."""
    __tablename__ = "vendors"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    category = Column(String, nullable=False)
    location = Column(String, nullable=True)
    city = Column(String, nullable=False)
    state = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    specialties = Column(JSON, default=list)
    services = Column(JSON, default=list)
    contact = Column(JSON, default=dict)
    rating = Column(Float, nullable=True)
    experience = Column(String, nullable=True)
    price_range = Column(String, nullable=False, default="Standard")  # 'Budget' | 'Standard' | 'Premium'
    keywords = Column(JSON, default=list)
    logo_url = Column(String, nullable=True)
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class WizardSession(Base):
    """Form state for one run through the estimate wizard."""
    __tablename__ = "wizard_sessions"

    id = Column(String, primary_key=True)  # UUID
    step = Column(String, default=WizardStep.EVENT.value)
    state_json = Column(JSON, default=dict)  # FormStateController.to_state()
    estimate_json = Column(JSON, nullable=True)  # Last recomputed estimate
    status = Column(String, default="active")  # 'active' | 'complete' | 'abandoned'
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class Quote(Base):
    __tablename__ = "quotes"

    id = Column(Integer, primary_key=True, index=True)
    quote_number = Column(String, unique=True, nullable=False)
    exhibitor_id = Column(Integer, ForeignKey("exhibitors.id"), nullable=True)
    session_id = Column(String, nullable=True)
    exhibition_name = Column(String, nullable=True)
    destination_city = Column(String, nullable=True)
    status = Column(Enum(QuoteStatus), default=QuoteStatus.DRAFT)
    notes = Column(Text)
    currency = Column(String, default="INR")
    total = Column(Float, default=0.0)
    valid_days = Column(Integer, default=30)
    inputs_json = Column(JSON, nullable=True)  # Form state snapshot
    outputs_json = Column(JSON, nullable=True)  # Estimate snapshot
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    exhibitor = relationship("Exhibitor", back_populates="quotes")
