# crewdesk/shared/models/Crew.py
"""
Dossier de candidature d'un marin et ses satellites.

Stratégie de découpage :
- Crew                 : champs déclarés + champs de back-office (statut, notes…)
- CrewDocument         : un fichier par emplacement (cv, passport, …), unique (crew, slot)
- CrewTag              : ensemble de tags, unique (crew, tag)
- CrewClientAssignment : ensemble des clients à qui le marin est présenté

Les ensembles (tags, affectations) sont des tables avec contrainte
d'unicité : l'ajout se fait en INSERT … ON CONFLICT DO NOTHING, jamais en
lecture-modification-écriture d'une liste.
"""
from sqlalchemy import (
    Column, Integer, String, Boolean, Date, DateTime, Text,
    ForeignKey, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crewdesk.core.database import Base, pg_enum
from crewdesk.shared.enums import CrewRank, CrewStatus, DocumentSlot, VesselType


class Crew(Base):
    __tablename__ = "crews"

    id        = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(100), nullable=False)
    email     = Column(String, unique=True, index=True, nullable=False)
    phone     = Column(String, nullable=False)

    date_of_birth     = Column(Date, nullable=False)
    rank              = Column(pg_enum(CrewRank, "crewrank"), nullable=False, index=True)
    nationality       = Column(String, nullable=False, index=True)
    current_location  = Column(String, nullable=False)
    availability_date = Column(Date, nullable=False)

    sea_time_summary      = Column(Text, nullable=True)
    preferred_vessel_type = Column(pg_enum(VesselType, "vesseltype"), nullable=True)
    additional_notes      = Column(Text, nullable=True)

    # ── Back-office (admin uniquement) ───────────────────────
    status   = Column(pg_enum(CrewStatus, "crewstatus"), default=CrewStatus.PENDING, nullable=False, index=True)
    priority = Column(Boolean, default=False, nullable=False)
    internal_comments    = Column(Text, nullable=True)
    admin_notes          = Column(Text, nullable=True)
    approved_for_clients = Column(Boolean, default=False, nullable=False)

    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    last_updated = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    documents = relationship(
        "CrewDocument", back_populates="crew",
        cascade="all, delete-orphan", lazy="selectin",
    )
    tags = relationship(
        "CrewTag", back_populates="crew",
        cascade="all, delete-orphan", lazy="selectin",
    )
    assignments = relationship(
        "CrewClientAssignment", back_populates="crew",
        cascade="all, delete-orphan", lazy="selectin",
    )

    # ── Helpers ──────────────────────────────────────────────
    @property
    def tag_names(self) -> list:
        return sorted(t.tag for t in self.tags)

    @property
    def assigned_client_ids(self) -> set:
        return {a.client_id for a in self.assignments}

    def __repr__(self):
        return f"<Crew id={self.id} name={self.full_name} status={self.status}>"


class CrewDocument(Base):
    __tablename__ = "crew_documents"
    __table_args__ = (UniqueConstraint("crew_id", "slot", name="uq_crew_document_slot"),)

    id      = Column(Integer, primary_key=True, index=True)
    crew_id = Column(Integer, ForeignKey("crews.id", ondelete="CASCADE"), nullable=False, index=True)
    slot    = Column(pg_enum(DocumentSlot, "documentslot"), nullable=False)

    original_name = Column(String, nullable=False)
    content_type  = Column(String, nullable=False)
    storage_ref   = Column(String, nullable=False)   # référence opaque du FileStore
    size_bytes    = Column(Integer, nullable=True)
    uploaded_at   = Column(DateTime(timezone=True), server_default=func.now())

    crew = relationship("Crew", back_populates="documents")

    def __repr__(self):
        return f"<CrewDocument crew={self.crew_id} slot={self.slot}>"


class CrewTag(Base):
    __tablename__ = "crew_tags"
    __table_args__ = (UniqueConstraint("crew_id", "tag", name="uq_crew_tag"),)

    id      = Column(Integer, primary_key=True)
    crew_id = Column(Integer, ForeignKey("crews.id", ondelete="CASCADE"), nullable=False, index=True)
    tag     = Column(String(50), nullable=False)

    crew = relationship("Crew", back_populates="tags")


class CrewClientAssignment(Base):
    __tablename__ = "crew_client_assignments"
    __table_args__ = (UniqueConstraint("crew_id", "client_id", name="uq_crew_client"),)

    id        = Column(Integer, primary_key=True)
    crew_id   = Column(Integer, ForeignKey("crews.id", ondelete="CASCADE"), nullable=False, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    assigned_at = Column(DateTime(timezone=True), server_default=func.now())

    crew   = relationship("Crew", back_populates="assignments")
    client = relationship("Client", back_populates="assignments")

    def __repr__(self):
        return f"<CrewClientAssignment crew={self.crew_id} client={self.client_id}>"
