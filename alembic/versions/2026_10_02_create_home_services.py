from alembic import op
import sqlalchemy as sa

revision = "2026_10_02_create_home_services"
down_revision = "2026_10_01_create_stays"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "services",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("slug", sa.String(100), nullable=False, unique=True),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("image_url", sa.Text),
    )
    op.create_table(
        "professionals",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("profession", sa.String(100), nullable=False),
        sa.Column("bio", sa.Text, nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("rating", sa.Numeric(3, 1), nullable=False),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("verifications", sa.JSON, nullable=False),
    )
    op.create_table(
        "service_testimonials",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("location", sa.String(100), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text, nullable=False),
        sa.Column("service", sa.String(100), nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
    )
    op.create_table(
        "contact_forms",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(100), nullable=False),
        sa.Column("subject", sa.String(255), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

def downgrade():
    op.drop_table("contact_forms")
    op.drop_table("service_testimonials")
    op.drop_table("professionals")
    op.drop_table("services")
