"""create users, verification, events, inquiries, privacy and search tables"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "initial_20241001"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLES = ("event_manager", "contractor", "admin")
APPROVAL_STATUSES = ("pending", "approved", "rejected")
VERIFICATION_ACTIONS = ("approve", "reject")
VERIFICATION_LOG_STATUSES = ("approved", "rejected")
NOTIFICATION_TYPES = (
    "onboarding_submitted",
    "verification_approved",
    "verification_rejected",
)
EVENT_TYPES = (
    "wedding",
    "corporate",
    "birthday",
    "conference",
    "festival",
    "concert",
    "fundraiser",
    "private_party",
    "other",
)
EVENT_STATUSES = ("draft", "planning", "confirmed", "in_progress", "completed", "cancelled")
INQUIRY_TYPES = ("general", "quote_request", "availability", "service_details")
INQUIRY_STATUSES = ("sent", "viewed", "responded", "quoted", "accepted", "declined", "expired")
INQUIRY_PRIORITIES = ("low", "medium", "high")
RESPONSE_TYPES = ("reply", "quote", "decline", "info_request")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("email", sa.String(length=255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("role", sa.Enum(*USER_ROLES, name="user_role"), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verified_at", sa.DateTime(), nullable=True),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("phone", sa.String(length=32), nullable=True),
        sa.Column("address", sa.String(length=255), nullable=True),
        sa.Column("bio", sa.Text(), nullable=True),
        sa.Column("avatar_url", sa.String(length=512), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("timezone", sa.String(length=64), nullable=False, server_default="Pacific/Auckland"),
        *_timestamps(),
    )

    op.create_table(
        "business_profiles",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("company_name", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("website", sa.String(length=255), nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("business_address", sa.String(length=255), nullable=True),
        sa.Column("nzbn", sa.String(length=13), nullable=True),
        sa.Column("service_areas", sa.JSON(), nullable=False),
        sa.Column("is_verified", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("verification_date", sa.DateTime(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "contractor_onboarding_status",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("step1_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("step2_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("step3_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("step4_completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_submitted", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("submission_date", sa.DateTime(), nullable=True),
        sa.Column(
            "approval_status",
            sa.Enum(*APPROVAL_STATUSES, name="onboarding_approval_status"),
            nullable=False,
            server_default="pending",
        ),
        sa.Column("approval_date", sa.DateTime(), nullable=True),
        sa.Column("admin_notes", sa.Text(), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "verification_logs",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("admin_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("action", sa.Enum(*VERIFICATION_ACTIONS, name="verification_action"), nullable=False),
        sa.Column("status", sa.Enum(*VERIFICATION_LOG_STATUSES, name="verification_log_status"), nullable=False),
        sa.Column("reason", sa.Text(), nullable=True),
        sa.Column("feedback", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_verification_logs_user_id", "verification_logs", ["user_id"])

    op.create_table(
        "admin_notifications",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("recipient_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=True),
        sa.Column("type", sa.Enum(*NOTIFICATION_TYPES, name="admin_notification_type"), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("is_read", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_admin_notifications_recipient_id", "admin_notifications", ["recipient_id"])

    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_manager_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("event_type", sa.Enum(*EVENT_TYPES, name="event_type"), nullable=False),
        sa.Column("event_date", sa.DateTime(), nullable=False),
        sa.Column("duration_hours", sa.Float(), nullable=True),
        sa.Column("attendee_count", sa.Integer(), nullable=True),
        sa.Column("location", sa.JSON(), nullable=True),
        sa.Column("budget_total", sa.Numeric(12, 2), nullable=True),
        sa.Column("special_requirements", sa.Text(), nullable=True),
        sa.Column("status", sa.Enum(*EVENT_STATUSES, name="event_status"), nullable=False, server_default="planning"),
        *_timestamps(),
    )
    op.create_index("ix_events_event_manager_id", "events", ["event_manager_id"])

    op.create_table(
        "inquiries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("event_manager_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("contractor_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("event_id", sa.Integer(), sa.ForeignKey("events.id", ondelete="SET NULL"), nullable=True),
        sa.Column("inquiry_type", sa.Enum(*INQUIRY_TYPES, name="inquiry_type"), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("event_details", sa.JSON(), nullable=True),
        sa.Column("priority", sa.Enum(*INQUIRY_PRIORITIES, name="inquiry_priority"), nullable=False, server_default="medium"),
        sa.Column("status", sa.Enum(*INQUIRY_STATUSES, name="inquiry_status"), nullable=False, server_default="sent"),
        *_timestamps(),
    )
    op.create_index("ix_inquiries_event_manager_id", "inquiries", ["event_manager_id"])
    op.create_index("ix_inquiries_contractor_id", "inquiries", ["contractor_id"])

    op.create_table(
        "inquiry_responses",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("inquiry_id", sa.Integer(), sa.ForeignKey("inquiries.id", ondelete="CASCADE"), nullable=False),
        sa.Column("responder_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "response_type",
            sa.Enum(*RESPONSE_TYPES, name="inquiry_response_type"),
            nullable=False,
            server_default="reply",
        ),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_inquiry_responses_inquiry_id", "inquiry_responses", ["inquiry_id"])

    op.create_table(
        "inquiry_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column("template_type", sa.Enum(*INQUIRY_TYPES, name="inquiry_template_type"), nullable=False),
        sa.Column("subject", sa.String(length=200), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("usage_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_inquiry_templates_user_id", "inquiry_templates", ["user_id"])

    op.create_table(
        "privacy_policies",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("version", sa.String(length=32), nullable=False, unique=True),
        sa.Column("title", sa.String(length=200), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("effective_date", sa.DateTime(), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_by", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "search_queries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        sa.Column("query", sa.String(length=255), nullable=False),
        sa.Column("filters", sa.JSON(), nullable=False),
        sa.Column("result_count", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_search_queries_created_at", "search_queries", ["created_at"])


def downgrade():
    op.drop_index("ix_search_queries_created_at", table_name="search_queries")
    op.drop_table("search_queries")
    op.drop_table("privacy_policies")

    op.drop_index("ix_inquiry_templates_user_id", table_name="inquiry_templates")
    op.drop_table("inquiry_templates")
    op.drop_index("ix_inquiry_responses_inquiry_id", table_name="inquiry_responses")
    op.drop_table("inquiry_responses")
    op.drop_index("ix_inquiries_contractor_id", table_name="inquiries")
    op.drop_index("ix_inquiries_event_manager_id", table_name="inquiries")
    op.drop_table("inquiries")

    op.drop_index("ix_events_event_manager_id", table_name="events")
    op.drop_table("events")

    op.drop_index("ix_admin_notifications_recipient_id", table_name="admin_notifications")
    op.drop_table("admin_notifications")
    op.drop_index("ix_verification_logs_user_id", table_name="verification_logs")
    op.drop_table("verification_logs")

    op.drop_table("contractor_onboarding_status")
    op.drop_table("business_profiles")
    op.drop_table("profiles")
    op.drop_table("users")

    bind = op.get_bind()
    for name in (
        "inquiry_template_type",
        "inquiry_response_type",
        "inquiry_status",
        "inquiry_priority",
        "inquiry_type",
        "event_status",
        "event_type",
        "admin_notification_type",
        "verification_log_status",
        "verification_action",
        "onboarding_approval_status",
        "user_role",
    ):
        sa.Enum(name=name).drop(bind, checkfirst=True)
