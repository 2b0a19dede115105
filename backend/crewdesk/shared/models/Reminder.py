# crewdesk/shared/models/Reminder.py
"""Rappels / tâches internes des admins, optionnellement liés à un marin ou un client."""
from sqlalchemy import Column, Integer, String, DateTime, JSON, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crewdesk.core.database import Base, pg_enum
from crewdesk.shared.enums import ReminderPriority, ReminderStatus


class Reminder(Base):
    __tablename__ = "reminders"

    id          = Column(Integer, primary_key=True, index=True)
    title       = Column(String(200), nullable=False)
    description = Column(Text, nullable=True)

    crew_id   = Column(Integer, ForeignKey("crews.id", ondelete="SET NULL"), nullable=True, index=True)
    client_id = Column(Integer, ForeignKey("clients.id", ondelete="SET NULL"), nullable=True, index=True)

    priority = Column(pg_enum(ReminderPriority, "reminderpriority"), default=ReminderPriority.MEDIUM, nullable=False)
    due_date = Column(DateTime(timezone=True), nullable=False, index=True)
    status   = Column(pg_enum(ReminderStatus, "reminderstatus"), default=ReminderStatus.PENDING, nullable=False, index=True)

    created_by_id  = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True)
    assigned_to_id = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True)

    tags  = Column(JSON, default=list)    # ["visa", "relance"]
    notes = Column(Text, nullable=True)

    completed_at    = Column(DateTime(timezone=True), nullable=True)
    completed_by_id = Column(Integer, ForeignKey("admins.id", ondelete="SET NULL"), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    crew   = relationship("Crew", lazy="selectin")
    client = relationship("Client", lazy="selectin")

    def __repr__(self):
        return f"<Reminder id={self.id} title={self.title!r} status={self.status}>"
