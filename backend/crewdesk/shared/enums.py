# crewdesk/shared/enums.py
"""
Toutes les énumérations du projet CrewDesk.

Source unique de vérité pour les statuts, rôles et types.
Importé par les modèles, schemas, services et engine.

Attention : CrewStatus et RequestStatus partagent des libellés
("pending", "approved", "rejected") mais ce sont deux machines distinctes.
"""

from enum import Enum


class PrincipalType(str, Enum):
    ADMIN  = "admin"
    CLIENT = "client"


class AdminRole(str, Enum):
    SUPER_ADMIN = "super_admin"
    ADMIN       = "admin"
    MODERATOR   = "moderator"


class CrewRank(str, Enum):
    MASTER             = "Master / Captain"
    CHIEF_OFFICER      = "Chief Officer"
    SECOND_OFFICER     = "2nd Officer"
    THIRD_OFFICER      = "3rd Officer"
    CHIEF_ENGINEER     = "Chief Engineer"
    SECOND_ENGINEER    = "2nd Engineer"
    ETO                = "ETO"
    AB                 = "AB (Able Seaman)"
    OS                 = "OS (Ordinary Seaman)"
    BOSUN              = "Bosun"
    MOTORMAN           = "Motorman"
    OILER              = "Oiler"
    COOK               = "Cook / Chief Cook"
    MESSMAN            = "Messman"
    DECK_CADET         = "Deck Cadet"
    ENGINE_CADET       = "Engine Cadet"
    WELDER             = "Welder / Fitter"
    RIGGER             = "Rigger"
    CRANE_OPERATOR     = "Crane Operator"
    HLO                = "HLO / HDA"
    MARINE_ELECTRICIAN = "Marine Electrician"
    SAFETY_OFFICER     = "Safety Officer"
    YACHT_SKIPPER      = "Yacht Skipper / Delivery Crew"
    PROJECT_ENGINEER   = "Project Engineer"
    MARINE_SURVEYOR    = "Marine Surveyor"
    OTHERS             = "Others"


class VesselType(str, Enum):
    TANKER       = "Tanker"
    AHTS         = "AHTS"
    YACHT        = "Yacht"
    BARGE        = "Barge"
    CONTAINER    = "Container"
    BULK_CARRIER = "Bulk Carrier"
    OFFSHORE     = "Offshore"
    OTHER        = "Other"


class CrewStatus(str, Enum):
    PENDING      = "pending"
    APPROVED     = "approved"
    REJECTED     = "rejected"
    MISSING_DOCS = "missing_docs"


class DocumentSlot(str, Enum):
    CV          = "cv"
    PASSPORT    = "passport"
    CDC         = "cdc"
    STCW        = "stcw"
    COC         = "coc"
    SEAMAN_BOOK = "seamanBook"
    VISA        = "visa"
    PHOTO       = "photo"      # seul emplacement facultatif


class RequestType(str, Enum):
    INTERVIEW        = "interview"
    BOOKING          = "booking"
    HOLD_CANDIDATE   = "hold_candidate"
    MORE_INFORMATION = "more_information"


class RequestUrgency(str, Enum):
    NORMAL = "normal"
    URGENT = "urgent"
    ASAP   = "asap"


class RequestStatus(str, Enum):
    PENDING   = "pending"
    APPROVED  = "approved"
    REJECTED  = "rejected"
    COMPLETED = "completed"


class FollowUpAuthor(str, Enum):
    CLIENT = "client"
    ADMIN  = "admin"


class ReminderPriority(str, Enum):
    LOW    = "low"
    MEDIUM = "medium"
    HIGH   = "high"
    URGENT = "urgent"


class ReminderStatus(str, Enum):
    PENDING   = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class NotificationChannel(str, Enum):
    EMAIL    = "email"
    WHATSAPP = "whatsapp"
