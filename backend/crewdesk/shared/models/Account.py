# crewdesk/shared/models/Account.py
"""
Comptes authentifiables.

- Admin  : personnel back-office (super_admin / admin / moderator)
- Client : entreprise cliente qui consulte les marins approuvés

Le mot de passe n'est jamais renvoyé : seuls les schemas *Out sortent.
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from crewdesk.core.database import Base, pg_enum
from crewdesk.shared.enums import AdminRole


class Admin(Base):
    __tablename__ = "admins"

    id       = Column(Integer, primary_key=True, index=True)
    username = Column(String(30), unique=True, index=True, nullable=False)
    email    = Column(String, unique=True, index=True, nullable=False)
    full_name       = Column(String, nullable=False)
    hashed_password = Column(String, nullable=False)

    role      = Column(pg_enum(AdminRole, "adminrole"), default=AdminRole.ADMIN, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)

    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Admin id={self.id} username={self.username} role={self.role}>"


class Client(Base):
    __tablename__ = "clients"

    id           = Column(Integer, primary_key=True, index=True)
    company_name = Column(String, nullable=False)
    email        = Column(String, unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)

    contact_person = Column(String, nullable=False)
    phone          = Column(String, nullable=True)
    address        = Column(String, nullable=True)
    industry       = Column(String, nullable=True)

    is_active  = Column(Boolean, default=True, nullable=False)
    last_login = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    assignments = relationship(
        "CrewClientAssignment", back_populates="client",
        cascade="all, delete-orphan",
    )
    requests = relationship(
        "ClientRequest", back_populates="client",
        cascade="all, delete-orphan",
    )

    def __repr__(self):
        return f"<Client id={self.id} company={self.company_name}>"
