# crewdesk/shared/models/Request.py
"""
Demandes client (entretien, réservation, mise en attente, infos).

client_id et crew_id sont fixés à la création et jamais modifiés.
Un index unique partiel garantit au plus une demande 'pending' par
couple (client, marin) - filet de sécurité sous le contrôle applicatif.
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crewdesk.core.database import Base, pg_enum
from crewdesk.shared.enums import (
    RequestType, RequestUrgency, RequestStatus, FollowUpAuthor,
)


class ClientRequest(Base):
    __tablename__ = "client_requests"
    __table_args__ = (
        Index(
            "uq_client_request_pending",
            "client_id", "crew_id",
            unique=True,
            postgresql_where=text("status = 'pending'"),
        ),
    )

    id        = Column(Integer, primary_key=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False, index=True)
    crew_id   = Column(Integer, ForeignKey("crews.id", ondelete="CASCADE"), nullable=False, index=True)

    request_type = Column(pg_enum(RequestType, "requesttype"), nullable=False)
    message      = Column(String(1000), nullable=True)
    urgency      = Column(pg_enum(RequestUrgency, "requesturgency"), default=RequestUrgency.NORMAL, nullable=False)
    status       = Column(pg_enum(RequestStatus, "requeststatus"), default=RequestStatus.PENDING, nullable=False, index=True)

    admin_response = Column(String(1000), nullable=True)
    requested_at   = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    responded_at   = Column(DateTime(timezone=True), nullable=True)

    client = relationship("Client", back_populates="requests", lazy="selectin")
    crew   = relationship("Crew", lazy="selectin")
    follow_ups = relationship(
        "RequestFollowUp", back_populates="request",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="[RequestFollowUp.sent_at, RequestFollowUp.id]",
    )

    def __repr__(self):
        return f"<ClientRequest id={self.id} client={self.client_id} crew={self.crew_id} status={self.status}>"


class RequestFollowUp(Base):
    __tablename__ = "request_follow_ups"

    id         = Column(Integer, primary_key=True)
    request_id = Column(Integer, ForeignKey("client_requests.id", ondelete="CASCADE"), nullable=False, index=True)
    message    = Column(String(1000), nullable=False)
    sent_by    = Column(pg_enum(FollowUpAuthor, "followupauthor"), nullable=False)
    sent_at    = Column(DateTime(timezone=True), server_default=func.now())

    request = relationship("ClientRequest", back_populates="follow_ups")
