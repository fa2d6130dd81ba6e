# This project was developed with assistance from AI tools.
__version__ = "0.1.0"

from .database import Base, DatabaseService, SessionLocal, get_db, get_db_service
from .enums import (
    ApplicationStatus,
    AuditAction,
    DocumentCategory,
    DocumentStatus,
    EmploymentStatus,
    FinancialEntryType,
    ParticipantRole,
    PersonRole,
    SectionStatus,
    TransactionType,
    UserRole,
)
from .models import (
    Application,
    ApplicationSection,
    AuditEvent,
    Disclosure,
    Document,
    EmploymentRecord,
    FinancialEntry,
    Participant,
    Person,
    RealEstateProperty,
    SectionOverride,
)

__all__ = [
    "Base",
    "DatabaseService",
    "SessionLocal",
    "get_db",
    "get_db_service",
    "__version__",
    # Enums
    "ApplicationStatus",
    "AuditAction",
    "DocumentCategory",
    "DocumentStatus",
    "EmploymentStatus",
    "FinancialEntryType",
    "ParticipantRole",
    "PersonRole",
    "SectionStatus",
    "TransactionType",
    "UserRole",
    # Models
    "Application",
    "ApplicationSection",
    "AuditEvent",
    "Disclosure",
    "Document",
    "EmploymentRecord",
    "FinancialEntry",
    "Participant",
    "Person",
    "RealEstateProperty",
    "SectionOverride",
]
