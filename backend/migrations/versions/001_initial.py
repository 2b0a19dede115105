"""initial schema - crewdesk v1

Revision ID: 001_initial
Create Date: 19/10/2026
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = '001_initial'
down_revision = None

# Valeurs des Enums (figées à la date de la révision)
ADMIN_ROLE = ('super_admin', 'admin', 'moderator')
CREW_RANK = (
    'Master / Captain', 'Chief Officer', '2nd Officer', '3rd Officer',
    'Chief Engineer', '2nd Engineer', 'ETO', 'AB (Able Seaman)', 'OS (Ordinary Seaman)',
    'Bosun', 'Motorman', 'Oiler', 'Cook / Chief Cook', 'Messman', 'Deck Cadet',
    'Engine Cadet', 'Welder / Fitter', 'Rigger', 'Crane Operator', 'HLO / HDA',
    'Marine Electrician', 'Safety Officer', 'Yacht Skipper / Delivery Crew',
    'Project Engineer', 'Marine Surveyor', 'Others',
)
VESSEL_TYPE = ('Tanker', 'AHTS', 'Yacht', 'Barge', 'Container', 'Bulk Carrier', 'Offshore', 'Other')
CREW_STATUS = ('pending', 'approved', 'rejected', 'missing_docs')
DOCUMENT_SLOT = ('cv', 'passport', 'cdc', 'stcw', 'coc', 'seamanBook', 'visa', 'photo')
REQUEST_TYPE = ('interview', 'booking', 'hold_candidate', 'more_information')
REQUEST_URGENCY = ('normal', 'urgent', 'asap')
REQUEST_STATUS = ('pending', 'approved', 'rejected', 'completed')
FOLLOW_UP_AUTHOR = ('client', 'admin')
REMINDER_PRIORITY = ('low', 'medium', 'high', 'urgent')
REMINDER_STATUS = ('pending', 'completed', 'cancelled')


def upgrade() -> None:
    # ── 1. CREATION MANUELLE DES TYPES ENUM (SÉCURISÉE) ──
    enums = {
        "adminrole": ADMIN_ROLE,
        "crewrank": CREW_RANK,
        "vesseltype": VESSEL_TYPE,
        "crewstatus": CREW_STATUS,
        "documentslot": DOCUMENT_SLOT,
        "requesttype": REQUEST_TYPE,
        "requesturgency": REQUEST_URGENCY,
        "requeststatus": REQUEST_STATUS,
        "followupauthor": FOLLOW_UP_AUTHOR,
        "reminderpriority": REMINDER_PRIORITY,
        "reminderstatus": REMINDER_STATUS,
    }

    for name, values in enums.items():
        vals_str = ", ".join([f"'{v}'" for v in values])
        op.execute(f"""
            DO $$
            BEGIN
                IF NOT EXISTS (SELECT 1 FROM pg_type WHERE typname = '{name}') THEN
                    CREATE TYPE {name} AS ENUM ({vals_str});
                END IF;
            END $$;
        """)

    # ── 2. CREATION DES TABLES ──
    # Note : postgresql.ENUM(..., create_type=False) empêche SQLAlchemy
    # de tenter une double création.

    op.create_table("admins",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("username", sa.String(30), nullable=False),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("full_name", sa.String, nullable=False),
        sa.Column("hashed_password", sa.String, nullable=False),
        sa.Column("role", postgresql.ENUM(*ADMIN_ROLE, name='adminrole', create_type=False), nullable=False, server_default="admin"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_admins_username", "admins", ["username"], unique=True)
    op.create_index("ix_admins_email", "admins", ["email"], unique=True)

    op.create_table("clients",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("company_name", sa.String, nullable=False),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("hashed_password", sa.String, nullable=False),
        sa.Column("contact_person", sa.String, nullable=False),
        sa.Column("phone", sa.String, nullable=True),
        sa.Column("address", sa.String, nullable=True),
        sa.Column("industry", sa.String, nullable=True),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("last_login", sa.DateTime(timezone=True), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_clients_email", "clients", ["email"], unique=True)

    op.create_table("crews",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("full_name", sa.String(100), nullable=False),
        sa.Column("email", sa.String, nullable=False),
        sa.Column("phone", sa.String, nullable=False),
        sa.Column("date_of_birth", sa.Date, nullable=False),
        sa.Column("rank", postgresql.ENUM(*CREW_RANK, name='crewrank', create_type=False), nullable=False),
        sa.Column("nationality", sa.String, nullable=False),
        sa.Column("current_location", sa.String, nullable=False),
        sa.Column("availability_date", sa.Date, nullable=False),
        sa.Column("sea_time_summary", sa.Text, nullable=True),
        sa.Column("preferred_vessel_type", postgresql.ENUM(*VESSEL_TYPE, name='vesseltype', create_type=False), nullable=True),
        sa.Column("additional_notes", sa.Text, nullable=True),
        sa.Column("status", postgresql.ENUM(*CREW_STATUS, name='crewstatus', create_type=False), nullable=False, server_default="pending"),
        sa.Column("priority", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("internal_comments", sa.Text, nullable=True),
        sa.Column("admin_notes", sa.Text, nullable=True),
        sa.Column("approved_for_clients", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("submitted_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("last_updated", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_crews_email", "crews", ["email"], unique=True)
    op.create_index("ix_crews_rank", "crews", ["rank"])
    op.create_index("ix_crews_nationality", "crews", ["nationality"])
    op.create_index("ix_crews_status", "crews", ["status"])
    op.create_index("ix_crews_submitted_at", "crews", ["submitted_at"])

    op.create_table("crew_documents",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("crew_id", sa.Integer, sa.ForeignKey("crews.id", ondelete="CASCADE"), nullable=False),
        sa.Column("slot", postgresql.ENUM(*DOCUMENT_SLOT, name='documentslot', create_type=False), nullable=False),
        sa.Column("original_name", sa.String, nullable=False),
        sa.Column("content_type", sa.String, nullable=False),
        sa.Column("storage_ref", sa.String, nullable=False),
        sa.Column("size_bytes", sa.Integer, nullable=True),
        sa.Column("uploaded_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("crew_id", "slot", name="uq_crew_document_slot"),
    )
    op.create_index("ix_crew_documents_crew_id", "crew_documents", ["crew_id"])

    op.create_table("crew_tags",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("crew_id", sa.Integer, sa.ForeignKey("crews.id", ondelete="CASCADE"), nullable=False),
        sa.Column("tag", sa.String(50), nullable=False),
        sa.UniqueConstraint("crew_id", "tag", name="uq_crew_tag"),
    )
    op.create_index("ix_crew_tags_crew_id", "crew_tags", ["crew_id"])

    op.create_table("crew_client_assignments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("crew_id", sa.Integer, sa.ForeignKey("crews.id", ondelete="CASCADE"), nullable=False),
        sa.Column("client_id", sa.Integer, sa.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("assigned_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.UniqueConstraint("crew_id", "client_id", name="uq_crew_client"),
    )
    op.create_index("ix_crew_client_assignments_crew_id", "crew_client_assignments", ["crew_id"])
    op.create_index("ix_crew_client_assignments_client_id", "crew_client_assignments", ["client_id"])

    op.create_table("client_requests",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("client_id", sa.Integer, sa.ForeignKey("clients.id", ondelete="CASCADE"), nullable=False),
        sa.Column("crew_id", sa.Integer, sa.ForeignKey("crews.id", ondelete="CASCADE"), nullable=False),
        sa.Column("request_type", postgresql.ENUM(*REQUEST_TYPE, name='requesttype', create_type=False), nullable=False),
        sa.Column("message", sa.String(1000), nullable=True),
        sa.Column("urgency", postgresql.ENUM(*REQUEST_URGENCY, name='requesturgency', create_type=False), nullable=False, server_default="normal"),
        sa.Column("status", postgresql.ENUM(*REQUEST_STATUS, name='requeststatus', create_type=False), nullable=False, server_default="pending"),
        sa.Column("admin_response", sa.String(1000), nullable=True),
        sa.Column("requested_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("responded_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("ix_client_requests_client_id", "client_requests", ["client_id"])
    op.create_index("ix_client_requests_crew_id", "client_requests", ["crew_id"])
    op.create_index("ix_client_requests_status", "client_requests", ["status"])
    op.create_index("ix_client_requests_requested_at", "client_requests", ["requested_at"])
    # Au plus une demande pending par couple (client, marin)
    op.create_index(
        "uq_client_request_pending", "client_requests", ["client_id", "crew_id"],
        unique=True, postgresql_where=sa.text("status = 'pending'"),
    )

    op.create_table("request_follow_ups",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("request_id", sa.Integer, sa.ForeignKey("client_requests.id", ondelete="CASCADE"), nullable=False),
        sa.Column("message", sa.String(1000), nullable=False),
        sa.Column("sent_by", postgresql.ENUM(*FOLLOW_UP_AUTHOR, name='followupauthor', create_type=False), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_request_follow_ups_request_id", "request_follow_ups", ["request_id"])

    op.create_table("reminders",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(200), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("crew_id", sa.Integer, sa.ForeignKey("crews.id", ondelete="SET NULL"), nullable=True),
        sa.Column("client_id", sa.Integer, sa.ForeignKey("clients.id", ondelete="SET NULL"), nullable=True),
        sa.Column("priority", postgresql.ENUM(*REMINDER_PRIORITY, name='reminderpriority', create_type=False), nullable=False, server_default="medium"),
        sa.Column("due_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("status", postgresql.ENUM(*REMINDER_STATUS, name='reminderstatus', create_type=False), nullable=False, server_default="pending"),
        sa.Column("created_by_id", sa.Integer, sa.ForeignKey("admins.id", ondelete="SET NULL"), nullable=True),
        sa.Column("assigned_to_id", sa.Integer, sa.ForeignKey("admins.id", ondelete="SET NULL"), nullable=True),
        sa.Column("tags", sa.JSON, nullable=True),
        sa.Column("notes", sa.Text, nullable=True),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("completed_by_id", sa.Integer, sa.ForeignKey("admins.id", ondelete="SET NULL"), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_reminders_crew_id", "reminders", ["crew_id"])
    op.create_index("ix_reminders_client_id", "reminders", ["client_id"])
    op.create_index("ix_reminders_due_date", "reminders", ["due_date"])
    op.create_index("ix_reminders_status", "reminders", ["status"])


def downgrade() -> None:
    tables = [
        "reminders", "request_follow_ups", "client_requests",
        "crew_client_assignments", "crew_tags", "crew_documents",
        "crews", "clients", "admins",
    ]
    for table in tables:
        op.drop_table(table)

    enums = [
        "reminderstatus", "reminderpriority", "followupauthor",
        "requeststatus", "requesturgency", "requesttype",
        "documentslot", "crewstatus", "vesseltype", "crewrank", "adminrole",
    ]
    for e in enums:
        op.execute(f"DROP TYPE IF EXISTS {e}")
