from alembic import op
import sqlalchemy as sa

revision = "2026_10_08_create_learning"
down_revision = "2026_10_07_create_podcasts"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "subjects",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("code", sa.String(50), nullable=False, unique=True),
        sa.Column("description", sa.Text),
        sa.Column("image_url", sa.Text),
        sa.Column("color", sa.String(20)),
    )
    op.create_table(
        "courses",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("subject_id", sa.Integer, sa.ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False),
        sa.Column("level", sa.String(20), nullable=False),
        sa.Column("image_url", sa.Text),
        sa.Column("certification_type", sa.String(20)),
    )
    op.create_index("ix_courses_subject_id", "courses", ["subject_id"])
    op.create_table(
        "lessons",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("video_url", sa.Text),
        sa.Column("order", sa.Integer, nullable=False),
        sa.Column("duration", sa.Integer),
    )
    op.create_index("ix_lessons_course_id", "lessons", ["course_id"])
    op.create_table(
        "user_progress",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("course_id", sa.Integer, sa.ForeignKey("courses.id", ondelete="CASCADE"), nullable=False),
        sa.Column("last_lesson_id", sa.Integer, sa.ForeignKey("lessons.id", ondelete="SET NULL")),
        sa.Column("percent_complete", sa.Integer, nullable=False, server_default="0"),
        sa.Column("last_accessed", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("user_id", "course_id", name="uq_user_progress"),
    )
    op.create_index("ix_user_progress_user_id", "user_progress", ["user_id"])
    op.create_table(
        "ai_instructors",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("appearance", sa.Text, nullable=False),
        sa.Column("voice", sa.String(100), nullable=False),
        sa.Column("subject_specialties", sa.JSON, nullable=False),
        sa.Column("language", sa.String(10), nullable=False, server_default="en"),
        sa.Column("rating", sa.Integer, nullable=False, server_default="50"),
        sa.Column("rating_count", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_table(
        "user_instructors",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("instructor_id", sa.Integer, sa.ForeignKey("ai_instructors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("is_customized", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("custom_settings", sa.JSON),
        sa.UniqueConstraint("user_id", "instructor_id", name="uq_user_instructor"),
    )
    op.create_index("ix_user_instructors_user_id", "user_instructors", ["user_id"])
    op.create_table(
        "activity_feed",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("activity_type", sa.String(50), nullable=False),
        sa.Column("resource_id", sa.Integer),
        sa.Column("resource_type", sa.String(50)),
        sa.Column("details", sa.JSON),
        sa.Column("timestamp", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_activity_feed_user_id", "activity_feed", ["user_id"])

def downgrade():
    op.drop_index("ix_activity_feed_user_id", "activity_feed")
    op.drop_table("activity_feed")
    op.drop_index("ix_user_instructors_user_id", "user_instructors")
    op.drop_table("user_instructors")
    op.drop_table("ai_instructors")
    op.drop_index("ix_user_progress_user_id", "user_progress")
    op.drop_table("user_progress")
    op.drop_index("ix_lessons_course_id", "lessons")
    op.drop_table("lessons")
    op.drop_index("ix_courses_subject_id", "courses")
    op.drop_table("courses")
    op.drop_table("subjects")
