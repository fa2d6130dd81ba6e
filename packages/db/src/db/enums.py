# This project was developed with assistance from AI tools.
"""
Domain enums for the board-package application lifecycle.

Shared domain types used by both SQLAlchemy models (db package)
and Pydantic schemas (api package).
"""

import enum


class TransactionType(str, enum.Enum):
    COOP_PURCHASE = "COOP_PURCHASE"
    CONDO_PURCHASE = "CONDO_PURCHASE"
    COOP_SUBLET = "COOP_SUBLET"
    CONDO_LEASE = "CONDO_LEASE"

    @classmethod
    def lease_or_sublet(cls) -> frozenset["TransactionType"]:
        """Transaction types that require disclosure acknowledgement."""
        return frozenset({cls.COOP_SUBLET, cls.CONDO_LEASE})


class ApplicationStatus(str, enum.Enum):
    IN_PROGRESS = "IN_PROGRESS"
    SUBMITTED = "SUBMITTED"
    IN_REVIEW = "IN_REVIEW"
    RFI = "RFI"
    APPROVED = "APPROVED"
    CONDITIONAL = "CONDITIONAL"
    DENIED = "DENIED"

    @classmethod
    def terminal_statuses(cls) -> frozenset["ApplicationStatus"]:
        """Statuses where the board has rendered a decision."""
        return frozenset({cls.APPROVED, cls.CONDITIONAL, cls.DENIED})

    @classmethod
    def valid_transitions(cls) -> dict["ApplicationStatus", frozenset["ApplicationStatus"]]:
        """Allowed status transitions in the review lifecycle."""
        return {
            cls.IN_PROGRESS: frozenset({cls.SUBMITTED}),
            cls.SUBMITTED: frozenset({cls.IN_REVIEW, cls.RFI}),
            cls.IN_REVIEW: frozenset({cls.RFI, cls.APPROVED, cls.CONDITIONAL, cls.DENIED}),
            cls.RFI: frozenset({cls.SUBMITTED, cls.IN_REVIEW}),
            cls.APPROVED: frozenset(),
            cls.CONDITIONAL: frozenset(),
            cls.DENIED: frozenset(),
        }


class UserRole(str, enum.Enum):
    APPLICANT = "APPLICANT"
    BROKER = "BROKER"
    TRANSACTION_AGENT = "TRANSACTION_AGENT"
    BOARD = "BOARD"
    ADMIN = "ADMIN"


class PersonRole(str, enum.Enum):
    APPLICANT = "APPLICANT"
    CO_APPLICANT = "CO_APPLICANT"
    GUARANTOR = "GUARANTOR"


class ParticipantRole(str, enum.Enum):
    UNIT_OWNER = "UNIT_OWNER"
    OWNER_BROKER = "OWNER_BROKER"
    OWNER_ATTORNEY = "OWNER_ATTORNEY"
    APPLICANT_ATTORNEY = "APPLICANT_ATTORNEY"
    BROKER = "BROKER"


class FinancialEntryType(str, enum.Enum):
    ASSET = "ASSET"
    LIABILITY = "LIABILITY"
    MONTHLY_INCOME = "MONTHLY_INCOME"
    MONTHLY_EXPENSE = "MONTHLY_EXPENSE"


class DocumentCategory(str, enum.Enum):
    GOVERNMENT_ID = "GOVERNMENT_ID"
    BANK_STATEMENT = "BANK_STATEMENT"
    TAX_RETURN = "TAX_RETURN"
    REFERENCE_LETTER = "REFERENCE_LETTER"
    BUILDING_FORM = "BUILDING_FORM"
    PAYSTUB = "PAYSTUB"
    W2 = "W2"
    OTHER = "OTHER"


class DocumentStatus(str, enum.Enum):
    PENDING = "PENDING"
    UPLOADED = "UPLOADED"
    VERIFIED = "VERIFIED"
    REJECTED = "REJECTED"


class EmploymentStatus(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    CONTRACT = "CONTRACT"
    SELF_EMPLOYED = "SELF_EMPLOYED"
    UNEMPLOYED = "UNEMPLOYED"
    RETIRED = "RETIRED"


class SectionStatus(str, enum.Enum):
    COMPLETE = "complete"
    OVERRIDDEN = "overridden"
    WARNING = "warning"
    INCOMPLETE = "incomplete"


class AuditAction(str, enum.Enum):
    MANUAL_OVERRIDE = "MANUAL_OVERRIDE"
    APPLICATION_SUBMITTED = "APPLICATION_SUBMITTED"
    SECTIONS_RECOMPUTED = "SECTIONS_RECOMPUTED"
