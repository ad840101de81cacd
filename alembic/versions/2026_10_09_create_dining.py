from alembic import op
import sqlalchemy as sa

revision = "2026_10_09_create_dining"
down_revision = "2026_10_08_create_learning"
branch_labels = None
depends_on = None

def upgrade():
    op.create_table(
        "restaurants",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("cuisine_type", sa.String(100), nullable=False),
        sa.Column("country", sa.String(120), nullable=False),
        sa.Column("address", sa.String(255), nullable=False),
        sa.Column("city", sa.String(120), nullable=False),
        sa.Column("phone_number", sa.String(50)),
        sa.Column("website", sa.Text),
        sa.Column("opening_hours", sa.String(255), nullable=False),
        sa.Column("price_range", sa.String(10), nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
        sa.Column("rating", sa.Float, nullable=False, server_default="0"),
        sa.Column("review_count", sa.Integer, nullable=False, server_default="0"),
    )
    op.create_index("ix_restaurants_cuisine_type", "restaurants", ["cuisine_type"])
    op.create_table(
        "menu_items",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("restaurant_id", sa.Integer, sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=False),
        sa.Column("price", sa.Float, nullable=False),
        sa.Column("image_url", sa.Text),
        sa.Column("featured", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("ix_menu_items_restaurant_id", "menu_items", ["restaurant_id"])
    op.create_table(
        "reviews",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("restaurant_id", sa.Integer, sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("rating", sa.Integer, nullable=False),
        sa.Column("comment", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_reviews_restaurant_id", "reviews", ["restaurant_id"])
    op.create_index("ix_reviews_user_id", "reviews", ["user_id"])
    op.create_table(
        "reservations",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("restaurant_id", sa.Integer, sa.ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("party_size", sa.Integer, nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("special_requests", sa.Text),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_reservations_restaurant_id", "reservations", ["restaurant_id"])
    op.create_index("ix_reservations_user_id", "reservations", ["user_id"])
    op.create_table(
        "cultural_insights",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("cuisine_type", sa.String(100), nullable=False),
        sa.Column("region", sa.String(120), nullable=False),
        sa.Column("image_url", sa.Text, nullable=False),
    )
    op.create_index("ix_cultural_insights_cuisine_type", "cultural_insights", ["cuisine_type"])
    op.create_table(
        "food_origin_stories",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("dish_name", sa.String(255), nullable=False),
        sa.Column("cuisine_type", sa.String(100), nullable=False),
        sa.Column("country", sa.String(120), nullable=False),
        sa.Column("story_content", sa.Text, nullable=False),
        sa.Column("historical_period", sa.String(255)),
        sa.Column("cultural_significance", sa.Text),
        sa.Column("ingredients", sa.Text),
        sa.Column("image_url", sa.Text),
    )
    op.create_index("ix_food_origin_stories_cuisine_type", "food_origin_stories", ["cuisine_type"])

def downgrade():
    op.drop_index("ix_food_origin_stories_cuisine_type", "food_origin_stories")
    op.drop_table("food_origin_stories")
    op.drop_index("ix_cultural_insights_cuisine_type", "cultural_insights")
    op.drop_table("cultural_insights")
    op.drop_index("ix_reservations_user_id", "reservations")
    op.drop_index("ix_reservations_restaurant_id", "reservations")
    op.drop_table("reservations")
    op.drop_index("ix_reviews_user_id", "reviews")
    op.drop_index("ix_reviews_restaurant_id", "reviews")
    op.drop_table("reviews")
    op.drop_index("ix_menu_items_restaurant_id", "menu_items")
    op.drop_table("menu_items")
    op.drop_index("ix_restaurants_cuisine_type", "restaurants")
    op.drop_table("restaurants")
