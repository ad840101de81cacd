from alembic import op
import sqlalchemy as sa

revision = "2026_10_07_create_podcasts"
down_revision = "2026_10_06_create_mentorship"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "podcasts",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("cover_image_url", sa.Text),
        sa.Column("category", sa.String(100)),
        sa.Column("creator_id", sa.String(64), nullable=False),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_podcasts_category", "podcasts", ["category"])
    op.create_index("ix_podcasts_creator_id", "podcasts", ["creator_id"])
    op.create_table(
        "episodes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("audio_url", sa.Text, nullable=False),
        sa.Column("duration", sa.Integer),
        sa.Column("episode_number", sa.Integer),
        sa.Column("cover_image_url", sa.Text),
        sa.Column("podcast_id", sa.Integer, sa.ForeignKey("podcasts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("play_count", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("published_at", sa.DateTime(timezone=True)),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_episodes_podcast_id", "episodes", ["podcast_id"])
    op.create_table(
        "follows",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("follower_id", sa.String(64), nullable=False),
        sa.Column("podcast_id", sa.Integer, sa.ForeignKey("podcasts.id", ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("follower_id", "podcast_id", name="uq_follow"),
    )
    op.create_index("ix_follows_follower_id", "follows", ["follower_id"])
    op.create_index("ix_follows_podcast_id", "follows", ["podcast_id"])
    op.create_table(
        "play_history",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("episode_id", sa.Integer, sa.ForeignKey("episodes.id", ondelete="CASCADE"), nullable=False),
        sa.Column("progress", sa.Integer, nullable=False, server_default="0"),
        sa.Column("completed", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("played_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "episode_id", name="uq_play_history"),
    )
    op.create_index("ix_play_history_user_id", "play_history", ["user_id"])

def downgrade():
    op.drop_index("ix_play_history_user_id", "play_history")
    op.drop_table("play_history")
    op.drop_index("ix_follows_podcast_id", "follows")
    op.drop_index("ix_follows_follower_id", "follows")
    op.drop_table("follows")
    op.drop_index("ix_episodes_podcast_id", "episodes")
    op.drop_table("episodes")
    op.drop_index("ix_podcasts_creator_id", "podcasts")
    op.drop_index("ix_podcasts_category", "podcasts")
    op.drop_table("podcasts")
