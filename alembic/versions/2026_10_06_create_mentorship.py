from alembic import op
import sqlalchemy as sa

revision = "2026_10_06_create_mentorship"
down_revision = "2026_10_05_create_breath_tests"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "mentors",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("inspired_by", sa.String(100), nullable=False),
        sa.Column("profile_image", sa.Text, nullable=False),
        sa.Column("genre", sa.String(100), nullable=False),
        sa.Column("genres", sa.JSON, nullable=False),
        sa.Column("region", sa.String(100)),
        sa.Column("country", sa.String(100)),
        sa.Column("bio", sa.Text, nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("artist_type", sa.String(50)),
        sa.Column("mentor_available", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("clone_status", sa.String(20), nullable=False, server_default="AI"),
        sa.Column("personality_profile", sa.JSON),
        sa.Column("specialties", sa.JSON, nullable=False),
        sa.Column("years_active", sa.String(50)),
        sa.Column("spotify_id", sa.String(255)),
        sa.Column("genius_id", sa.String(255)),
        sa.Column("media_url", sa.Text),
        sa.Column("sample_prompt", sa.Text),
        sa.Column("last_updated", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("auto_updated", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_table(
        "user_mentors",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False, unique=True),
        sa.Column("mentor_id", sa.Integer, sa.ForeignKey("mentors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("progress", sa.Integer, nullable=False, server_default="0"),
        sa.Column("current_message", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "journey_steps",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="locked"),
        sa.Column("order", sa.Integer, nullable=False),
        sa.Column("icon", sa.String(50), nullable=False),
    )
    op.create_table(
        "user_journey_steps",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("step_id", sa.Integer, sa.ForeignKey("journey_steps.id", ondelete="CASCADE"), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("progress", sa.Integer, nullable=False, server_default="0"),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "step_id", name="uq_user_journey_step"),
    )
    op.create_index("ix_user_journey_steps_user_id", "user_journey_steps", ["user_id"])
    op.create_table(
        "inspiration_items",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("mentor_id", sa.Integer, sa.ForeignKey("mentors.id", ondelete="SET NULL")),
        sa.Column("type", sa.String(20), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("image_url", sa.Text),
        sa.Column("audio_url", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "collaborations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("created_by", sa.String(64), nullable=False),
        sa.Column("looking_for", sa.String(255), nullable=False),
        sa.Column("genre", sa.String(100), nullable=False),
        sa.Column("tags", sa.String(255)),
        sa.Column("image_url", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "challenges",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("entries", sa.Integer, nullable=False, server_default="0"),
        sa.Column("days_left", sa.Integer, nullable=False),
        sa.Column("prize", sa.String(255), nullable=False),
        sa.Column("is_featured", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("audio_url", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_table(
        "artist_syncs",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("source", sa.String(20), nullable=False),
        sa.Column("source_id", sa.String(255), nullable=False),
        sa.Column("mentor_id", sa.Integer, sa.ForeignKey("mentors.id", ondelete="SET NULL")),
        sa.Column("last_synced", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("sync_status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("raw_data", sa.JSON),
        sa.Column("sync_error", sa.Text),
        sa.Column("sync_interval", sa.String(20), nullable=False, server_default="daily"),
        sa.Column("priority", sa.Integer, nullable=False, server_default="5"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("source", "source_id", name="uq_artist_sync_source"),
    )

def downgrade():
    op.drop_table("artist_syncs")
    op.drop_table("challenges")
    op.drop_table("collaborations")
    op.drop_table("inspiration_items")
    op.drop_index("ix_user_journey_steps_user_id", "user_journey_steps")
    op.drop_table("user_journey_steps")
    op.drop_table("journey_steps")
    op.drop_table("user_mentors")
    op.drop_table("mentors")
