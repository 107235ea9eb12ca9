"""Create users and service_requests tables"""

revision = "20251020_000000"
down_revision = None
branch_labels = None
depends_on = None

from alembic import op
import sqlalchemy as sa


def upgrade():
    """Create users and the service requests they own."""
    op.create_table(
        "users",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), unique=True, nullable=False, index=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("is_active", sa.Boolean, default=True, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
        sa.Column("last_login_at", sa.DateTime(timezone=True)),
    )
    op.create_table(
        "service_requests",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("service_name", sa.String(255), nullable=False),
        sa.Column("customer_name", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(50)),
        sa.Column("email", sa.String(255)),
        sa.Column("company_name", sa.String(255)),
        sa.Column("scheduled_date_time", sa.DateTime(timezone=True)),
        sa.Column("assigned_to", sa.String(255), index=True),
        sa.Column("status", sa.String(50), nullable=False, server_default="Pending", index=True),
        sa.Column("comments", sa.Text),
        sa.Column("signature", sa.Text),
        sa.Column("audio_feedback", sa.String(1024)),
        sa.Column("video_feedback", sa.String(1024)),
        sa.Column("created_by", sa.Uuid, sa.ForeignKey("users.id"), nullable=False, index=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )


def downgrade():
    """Drop service requests, then users."""
    op.drop_table("service_requests")
    op.drop_table("users")
