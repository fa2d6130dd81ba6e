# This project was developed with assistance from AI tools.
"""Application aggregate schemas.

The aggregate is the read-only input to the completeness engine. It is built
from ORM rows by the repository layer, or directly in tests.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from db.enums import (
    ApplicationStatus,
    DocumentCategory,
    DocumentStatus,
    EmploymentStatus,
    FinancialEntryType,
    ParticipantRole,
    PersonRole,
)
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ApplicationSection(BaseModel):
    """One logical section of an application."""

    model_config = ConfigDict(from_attributes=True)

    key: str
    label: str
    is_complete: bool = False


class AddressHistoryEntry(BaseModel):
    street: str
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    from_date: str | None = None
    to_date: str | None = None


class Person(BaseModel):
    """Applicant, co-applicant or guarantor."""

    model_config = ConfigDict(from_attributes=True)

    role: PersonRole
    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    date_of_birth: datetime | None = None
    ssn_full: str | None = None
    ssn_last4: str | None = None
    address_history: list[AddressHistoryEntry] = Field(default_factory=list)

    @field_validator("address_history", mode="before")
    @classmethod
    def _none_to_empty(cls, value):
        return value or []


class EmploymentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    employer: str
    title: str | None = None
    employment_status: EmploymentStatus | None = None
    annual_income: Decimal | None = None
    start_date: datetime | None = None
    end_date: datetime | None = None


class FinancialEntry(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entry_type: FinancialEntryType
    category: str | None = None
    institution: str | None = None
    description: str | None = None
    amount: Decimal


class RealEstateProperty(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    address: str
    property_type: str | None = None
    market_value: Decimal | None = None
    mortgage_balance: Decimal | None = None
    monthly_income: Decimal | None = None


class Document(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    category: DocumentCategory
    filename: str
    status: DocumentStatus = DocumentStatus.PENDING


class Disclosure(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    disclosure_type: str
    title: str
    acknowledged: bool = False
    acknowledged_at: datetime | None = None


class Participant(BaseModel):
    """Deal party keyed by role."""

    model_config = ConfigDict(from_attributes=True)

    role: ParticipantRole
    name: str
    email: str | None = None
    phone: str | None = None
    company: str | None = None


class ApplicationAggregate(BaseModel):
    """Full board package record for one unit.

    ``transaction_type`` is kept as a plain string so that an unrecognized
    value reaches the evaluator and fails there with ConfigurationError
    instead of being rejected at parse time.
    """

    model_config = ConfigDict(from_attributes=True)

    id: str
    transaction_type: str
    status: ApplicationStatus = ApplicationStatus.IN_PROGRESS
    sections: list[ApplicationSection] = Field(default_factory=list)
    people: list[Person] = Field(default_factory=list)
    employment_records: list[EmploymentRecord] = Field(default_factory=list)
    financial_entries: list[FinancialEntry] = Field(default_factory=list)
    real_estate_properties: list[RealEstateProperty] = Field(default_factory=list)
    documents: list[Document] = Field(default_factory=list)
    disclosures: list[Disclosure] = Field(default_factory=list)
    participants: list[Participant] = Field(default_factory=list)
    completion_percentage: int = Field(default=0, ge=0, le=100)

    building_id: str | None = None
    unit: str | None = None
    created_by: str | None = None
    cover_letter: str | None = None
    is_locked: bool = False
    created_at: datetime | None = None
    submitted_at: datetime | None = None

    @field_validator("transaction_type", mode="before")
    @classmethod
    def _enum_to_value(cls, value):
        return value.value if isinstance(value, Enum) else value

    def section(self, key: str) -> ApplicationSection | None:
        """Return the section with the given key, or None."""
        for s in self.sections:
            if s.key == key:
                return s
        return None


class SectionsRecomputeResponse(BaseModel):
    """Sections after their flags were re-derived from application data."""

    application_id: str
    sections: list[ApplicationSection]
    completion_percentage: int
    can_submit: bool
