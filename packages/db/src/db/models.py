# This project was developed with assistance from AI tools.
"""
Board package domain models

Co-op/condo purchase, sublet and lease applications, the applicant data each
section collects, manual completeness overrides, and the audit trail.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import relationship

from .database import Base
from .enums import (
    ApplicationStatus,
    DocumentCategory,
    DocumentStatus,
    EmploymentStatus,
    FinancialEntryType,
    ParticipantRole,
    PersonRole,
    TransactionType,
)


class Application(Base):
    """Board package application for one unit."""

    __tablename__ = "applications"

    id = Column(String(36), primary_key=True)
    building_id = Column(String(36), nullable=True, index=True)
    unit = Column(String(50), nullable=True)
    transaction_type = Column(
        Enum(TransactionType, name="transaction_type", native_enum=False),
        nullable=False,
    )
    status = Column(
        Enum(ApplicationStatus, name="application_status", native_enum=False),
        nullable=False,
        default=ApplicationStatus.IN_PROGRESS,
    )
    created_by = Column(String(255), nullable=True, index=True)
    cover_letter = Column(Text, nullable=True)
    is_locked = Column(Boolean, nullable=False, default=False)
    completion_percentage = Column(Integer, nullable=False, default=0)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    sections = relationship(
        "ApplicationSection", back_populates="application",
        cascade="all, delete-orphan", order_by="ApplicationSection.position",
    )
    people = relationship(
        "Person", back_populates="application", cascade="all, delete-orphan",
    )
    employment_records = relationship(
        "EmploymentRecord", back_populates="application", cascade="all, delete-orphan",
    )
    financial_entries = relationship(
        "FinancialEntry", back_populates="application", cascade="all, delete-orphan",
    )
    real_estate_properties = relationship(
        "RealEstateProperty", back_populates="application", cascade="all, delete-orphan",
    )
    documents = relationship(
        "Document", back_populates="application", cascade="all, delete-orphan",
    )
    disclosures = relationship(
        "Disclosure", back_populates="application", cascade="all, delete-orphan",
    )
    participants = relationship(
        "Participant", back_populates="application", cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Application(id={self.id}, status='{self.status}')>"


class ApplicationSection(Base):
    """One section of an application and its completion flag."""

    __tablename__ = "application_sections"
    __table_args__ = (
        UniqueConstraint("application_id", "key", name="uq_app_section_key"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    key = Column(String(50), nullable=False)
    label = Column(String(255), nullable=False)
    is_complete = Column(Boolean, nullable=False, default=False)
    position = Column(Integer, nullable=False, default=0)

    application = relationship("Application", back_populates="sections")

    def __repr__(self):
        return f"<ApplicationSection(app_id={self.application_id}, key='{self.key}')>"


class Person(Base):
    """Applicant, co-applicant or guarantor on an application."""

    __tablename__ = "people"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    role = Column(Enum(PersonRole, name="person_role", native_enum=False), nullable=False)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    date_of_birth = Column(DateTime(timezone=True), nullable=True)
    ssn_full = Column(String(255), nullable=True)
    ssn_last4 = Column(String(4), nullable=True)
    address_history = Column(JSON, nullable=True)

    application = relationship("Application", back_populates="people")

    def __repr__(self):
        return f"<Person(id={self.id}, role='{self.role}')>"


class EmploymentRecord(Base):
    """Employer or income source reported for an application."""

    __tablename__ = "employment_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    employer = Column(String(255), nullable=False)
    title = Column(String(255), nullable=True)
    employment_status = Column(
        Enum(EmploymentStatus, name="employment_status", native_enum=False),
        nullable=True,
    )
    annual_income = Column(Numeric(14, 2), nullable=True)
    start_date = Column(DateTime(timezone=True), nullable=True)
    end_date = Column(DateTime(timezone=True), nullable=True)

    application = relationship("Application", back_populates="employment_records")


class FinancialEntry(Base):
    """Asset, liability, monthly income or monthly expense line."""

    __tablename__ = "financial_entries"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    entry_type = Column(
        Enum(FinancialEntryType, name="financial_entry_type", native_enum=False),
        nullable=False,
    )
    category = Column(String(50), nullable=True)
    institution = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    amount = Column(Numeric(14, 2), nullable=False)

    application = relationship("Application", back_populates="financial_entries")


class RealEstateProperty(Base):
    """Other real estate held by the applicants."""

    __tablename__ = "real_estate_properties"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    address = Column(Text, nullable=False)
    property_type = Column(String(50), nullable=True)
    market_value = Column(Numeric(14, 2), nullable=True)
    mortgage_balance = Column(Numeric(14, 2), nullable=True)
    monthly_income = Column(Numeric(12, 2), nullable=True)

    application = relationship("Application", back_populates="real_estate_properties")


class Document(Base):
    """Uploaded supporting document with its verification status."""

    __tablename__ = "documents"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    category = Column(
        Enum(DocumentCategory, name="document_category", native_enum=False),
        nullable=False,
    )
    filename = Column(String(255), nullable=False)
    status = Column(
        Enum(DocumentStatus, name="document_status", native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
    )
    uploaded_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    application = relationship("Application", back_populates="documents")

    def __repr__(self):
        return f"<Document(id={self.id}, category='{self.category}', status='{self.status}')>"


class Disclosure(Base):
    """Legal disclosure the applicant must acknowledge (lease/sublet)."""

    __tablename__ = "disclosures"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    disclosure_type = Column(String(100), nullable=False)
    title = Column(String(255), nullable=False)
    acknowledged = Column(Boolean, nullable=False, default=False)
    acknowledged_at = Column(DateTime(timezone=True), nullable=True)

    application = relationship("Application", back_populates="disclosures")


class Participant(Base):
    """Deal party (unit owner, brokers, attorneys)."""

    __tablename__ = "participants"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(
        String(36), ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    role = Column(Enum(ParticipantRole, name="participant_role", native_enum=False), nullable=False)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    company = Column(String(255), nullable=True)

    application = relationship("Application", back_populates="participants")


class SectionOverride(Base):
    """Manual completeness override. INSERT + SELECT only -- no UPDATE or DELETE."""

    __tablename__ = "section_overrides"

    id = Column(Integer, primary_key=True, autoincrement=True)
    application_id = Column(String(36), nullable=False, index=True)
    section_key = Column(String(50), nullable=False, index=True)
    section_label = Column(String(255), nullable=False)
    overridden_by = Column(String(255), nullable=False)
    overridden_at = Column(DateTime(timezone=True), nullable=False)
    reason = Column(Text, nullable=False)

    def __repr__(self):
        return f"<SectionOverride(app_id={self.application_id}, key='{self.section_key}')>"


class AuditEvent(Base):
    """Append-only audit trail. INSERT + SELECT only -- no UPDATE or DELETE."""

    __tablename__ = "audit_events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime(timezone=True), nullable=False)
    prev_hash = Column(String(64), nullable=True)
    action = Column(String(100), nullable=False, index=True)
    application_id = Column(String(36), nullable=True, index=True)
    section = Column(String(50), nullable=True)
    performed_by = Column(String(255), nullable=True)
    reason = Column(Text, nullable=True)
    previous_status = Column(String(50), nullable=True)
    new_status = Column(String(50), nullable=True)
    event_data = Column(JSON, nullable=True)

    def __repr__(self):
        return f"<AuditEvent(id={self.id}, action='{self.action}')>"
