from alembic import op
import sqlalchemy as sa

revision = "2026_10_04_create_trends"
down_revision = "2026_10_03_create_tracker"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "trends",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("searches", sa.Integer, nullable=False),
        sa.Column("growth", sa.Integer, nullable=False),
        sa.Column("countries", sa.Integer, nullable=False),
        sa.Column("ai_summary", sa.Text, nullable=False),
        sa.Column("prediction", sa.String(20)),
        sa.Column("region", sa.String(10), nullable=False, server_default="global"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_trends_category", "trends", ["category"])
    op.create_index("ix_trends_region", "trends", ["region"])
    op.create_table(
        "trend_submissions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("topic", sa.String(255), nullable=False),
        sa.Column("category", sa.String(20), nullable=False),
        sa.Column("region", sa.String(10), nullable=False),
        sa.Column("description", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

def downgrade():
    op.drop_table("trend_submissions")
    op.drop_index("ix_trends_region", "trends")
    op.drop_index("ix_trends_category", "trends")
    op.drop_table("trends")
