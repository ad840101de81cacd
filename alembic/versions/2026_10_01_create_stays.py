from alembic import op
import sqlalchemy as sa

revision = "2026_10_01_create_stays"
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "properties",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("city", sa.String(120), nullable=False),
        sa.Column("country", sa.String(120), nullable=False),
        sa.Column("price", sa.Numeric(10, 2), nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("host_id", sa.String(64), nullable=False),
        sa.Column("rating", sa.Numeric(3, 2)),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("property_type", sa.String(50), nullable=False),
        sa.Column("is_featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_unique_stay", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("unique_stay_type", sa.String(100)),
        sa.Column("available_start", sa.DateTime(timezone=True)),
        sa.Column("available_end", sa.DateTime(timezone=True)),
        sa.Column("bedrooms", sa.Integer, nullable=False),
        sa.Column("bathrooms", sa.Integer, nullable=False),
        sa.Column("max_guests", sa.Integer, nullable=False),
    )
    op.create_table(
        "destinations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("country", sa.String(120), nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "testimonials",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text, nullable=False),
        sa.Column("user_country", sa.String(120)),
        sa.Column("user_name", sa.String(120), nullable=False),
        sa.Column("user_image", sa.Text),
        sa.Column("property_id", sa.Integer, sa.ForeignKey("properties.id")),
    )
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("property_id", sa.Integer, sa.ForeignKey("properties.id"), nullable=False),
        sa.Column("check_in", sa.DateTime(timezone=True), nullable=False),
        sa.Column("check_out", sa.DateTime(timezone=True), nullable=False),
        sa.Column("guests", sa.Integer, nullable=False),
        sa.Column("total_price", sa.Numeric(10, 2), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_property_id", "bookings", ["property_id"])

def downgrade():
    op.drop_index("ix_bookings_property_id", "bookings")
    op.drop_index("ix_bookings_user_id", "bookings")
    op.drop_table("bookings")
    op.drop_table("testimonials")
    op.drop_table("destinations")
    op.drop_table("properties")
