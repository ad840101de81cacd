"""
Insert sample listings, services, trends, mentors, courses and restaurants.

Each table is seeded only when it is empty, so the command can be re-run.

    python -m protohub.seed
"""
import asyncio
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from structlog import get_logger

from protohub.core.database import async_session_maker, init_db
from protohub.core.logging import setup_logging
from protohub.models.dining import CulturalInsight, FoodOriginStory, MenuItem, Restaurant, Review
from protohub.models.homeservices import Professional, Service, ServiceTestimonial
from protohub.models.learning import AiInstructor, Course, Lesson, Subject
from protohub.models.mentorship import ArtistSync, Challenge, Collaboration, InspirationItem, JourneyStep, Mentor
from protohub.models.stays import Destination, Property, Testimonial
from protohub.models.trends import Trend

logger = get_logger()


def _day(year: int, month: int, day: int) -> datetime:
    return datetime(year, month, day, tzinfo=timezone.utc)


PROPERTIES = [
    dict(title="Luxury Safari Lodge", description="Experience the wild in luxury with this amazing safari lodge overlooking the Serengeti plains.",
         location="Serengeti", city="Serengeti", country="Tanzania", price=Decimal("275"),
         image_url="https://images.unsplash.com/photo-1523805009345-7448845a9e53", host_id="1",
         rating=Decimal("4.9"), review_count=48, property_type="Lodge", is_featured=True, is_unique_stay=False,
         available_start=_day(2023, 11, 12), available_end=_day(2023, 11, 18), bedrooms=2, bathrooms=2, max_guests=4),
    dict(title="Coastal Villa", description="Beautiful beachfront villa with private access to the pristine beaches of Zanzibar.",
         location="Zanzibar", city="Zanzibar", country="Tanzania", price=Decimal("195"),
         image_url="https://images.unsplash.com/photo-1520250497591-112f2f40a3f4", host_id="1",
         rating=Decimal("4.8"), review_count=36, property_type="Villa", is_featured=True, is_unique_stay=True,
         unique_stay_type="Beachside Villas", available_start=_day(2023, 12, 5), available_end=_day(2023, 12, 12),
         bedrooms=3, bathrooms=2, max_guests=6),
    dict(title="Desert Retreat", description="Authentic Moroccan riad with modern amenities in the heart of Marrakech.",
         location="Marrakech", city="Marrakech", country="Morocco", price=Decimal("150"),
         image_url="https://images.unsplash.com/photo-1496497243327-9dccd845c35f", host_id="2",
         rating=Decimal("4.7"), review_count=29, property_type="Riad", is_featured=True, is_unique_stay=False,
         available_start=_day(2023, 10, 20), available_end=_day(2023, 10, 27), bedrooms=2, bathrooms=1, max_guests=4),
    dict(title="Mountain Cabin", description="Cozy cabin with stunning views of Table Mountain and the city below.",
         location="Cape Town", city="Cape Town", country="South Africa", price=Decimal("130"),
         image_url="https://images.unsplash.com/photo-1489493512598-d08130f49bea", host_id="1",
         rating=Decimal("4.6"), review_count=24, property_type="Cabin", is_featured=True, is_unique_stay=False,
         available_start=_day(2024, 1, 5), available_end=_day(2024, 1, 12), bedrooms=1, bathrooms=1, max_guests=2),
    dict(title="Treehouse Hideaway", description="Sleep among the treetops in this eco-friendly, luxurious treehouse retreat.",
         location="Nairobi", city="Nairobi", country="Kenya", price=Decimal("220"),
         image_url="https://images.unsplash.com/photo-1604014838575-c9320c8acf7a", host_id="3",
         rating=Decimal("4.9"), review_count=41, property_type="Treehouse", is_featured=False, is_unique_stay=True,
         unique_stay_type="Treehouse Retreats", available_start=_day(2023, 11, 1), available_end=_day(2023, 11, 30),
         bedrooms=1, bathrooms=1, max_guests=2),
    dict(title="Traditional Maasai Hut", description="Experience authentic African living with modern comforts in this traditional Maasai dwelling.",
         location="Masai Mara", city="Narok", country="Kenya", price=Decimal("95"),
         image_url="https://images.unsplash.com/photo-1551918120-9739cb430c6d", host_id="3",
         rating=Decimal("4.7"), review_count=32, property_type="Hut", is_featured=False, is_unique_stay=True,
         unique_stay_type="Traditional Huts", available_start=_day(2023, 10, 15), available_end=_day(2023, 12, 15),
         bedrooms=1, bathrooms=1, max_guests=3),
    dict(title="Desert Camp Luxury", description="Luxury camping in the Sahara Desert with incredible stargazing opportunities.",
         location="Sahara Desert", city="Merzouga", country="Morocco", price=Decimal("180"),
         image_url="https://images.unsplash.com/photo-1573843981267-be1999ff37cd", host_id="2",
         rating=Decimal("4.8"), review_count=38, property_type="Desert Camp", is_featured=False, is_unique_stay=True,
         unique_stay_type="Desert Camps", available_start=_day(2023, 9, 1), available_end=_day(2023, 10, 31),
         bedrooms=1, bathrooms=1, max_guests=2),
    dict(title="Waterfront Bungalow", description="Charming bungalow right on the water with panoramic lake views.",
         location="Lake Victoria", city="Entebbe", country="Uganda", price=Decimal("160"),
         image_url="https://images.unsplash.com/photo-1520250497591-112f2f40a3f4", host_id="3",
         rating=Decimal("4.6"), review_count=27, property_type="Bungalow", is_featured=False, is_unique_stay=False,
         available_start=_day(2023, 11, 10), available_end=_day(2023, 12, 10), bedrooms=2, bathrooms=1, max_guests=4),
]

DESTINATIONS = [
    dict(name="Serengeti National Park", country="Tanzania", image_url="https://images.unsplash.com/photo-1516026672322-bc52d61a55d5",
         description="Home to the great migration, one of the most impressive wildlife events worldwide.", featured=True),
    dict(name="Cape Town", country="South Africa", image_url="https://images.unsplash.com/photo-1489493512598-d08130f49bea",
         description="Stunning coastal city with Table Mountain as its backdrop.", featured=True),
    dict(name="Marrakech", country="Morocco", image_url="https://images.unsplash.com/photo-1496497243327-9dccd845c35f",
         description="A bustling city known for its markets, gardens, palaces, and mosques.", featured=True),
    dict(name="Zanzibar", country="Tanzania", image_url="https://images.unsplash.com/photo-1523805009345-7448845a9e53",
         description="Archipelago known for its beautiful beaches and historical Stone Town.", featured=True),
    dict(name="Victoria Falls", country="Zimbabwe/Zambia", image_url="https://images.unsplash.com/photo-1516026672322-bc52d61a55d5",
         description="One of the world's most impressive waterfalls, located on the Zambezi River.", featured=True),
    dict(name="Cairo", country="Egypt", image_url="https://images.unsplash.com/photo-1504432842672-1a79f78e4084",
         description="Home to the Giza pyramids and the iconic Sphinx.", featured=True),
]

# property_id refers to the insertion order of PROPERTIES (1-based)
TESTIMONIALS = [
    dict(user_id="4", rating=5, user_country="United States", user_name="Sarah",
         user_image="https://images.unsplash.com/photo-1494790108377-be9c29b29330", property_id=5,
         comment="Our stay at the treehouse in Kenya was magical! Waking up to the sounds of nature and seeing wildlife from our balcony was an unforgettable experience."),
    dict(user_id="5", rating=5, user_country="Brazil", user_name="James & Maria",
         user_image="https://images.unsplash.com/photo-1507003211169-0a1dd7228f2d", property_id=2,
         comment="The coastal villa in Zanzibar exceeded all our expectations. The host was incredibly welcoming and the private beach access made our honeymoon perfect."),
    dict(user_id="6", rating=5, user_country="Japan", user_name="Yuki",
         user_image="https://images.unsplash.com/photo-1506794778202-cad84cf45f1d", property_id=3,
         comment="Staying in a traditional Moroccan riad was the highlight of our trip. The architecture, the food, and the warm hospitality made us feel like we were part of the family."),
]

SERVICES = [
    dict(name="Plumbing", slug="plumbing", description="Professional plumbing services for repairs, installations, and maintenance.",
         image_url="https://images.unsplash.com/photo-1558618666-fcd25c85cd64"),
    dict(name="Electrical Work", slug="electrical", description="Expert electrical services for your home, from repairs to new installations.",
         image_url="https://images.unsplash.com/photo-1621905252507-b35492cc74b4"),
    dict(name="Cleaning", slug="cleaning", description="Thorough cleaning services to keep your home spotless and healthy.",
         image_url="https://images.unsplash.com/photo-1581578731548-c64695cc6952"),
    dict(name="Landscaping", slug="landscaping", description="Transform your outdoor space with our professional landscaping services.",
         image_url="https://images.unsplash.com/photo-1589923188900-85dae523342b"),
    dict(name="Carpentry", slug="carpentry", description="Quality carpentry services for all your woodworking needs and repairs.",
         image_url="https://images.unsplash.com/photo-1601564921647-b446262bbc14"),
    dict(name="Painting", slug="painting", description="Professional painting services to refresh and beautify your home.",
         image_url="https://images.unsplash.com/photo-1562184552-997c461abbe6"),
    dict(name="Home Renovation", slug="renovation", description="Complete renovation services to transform your living space.",
         image_url="https://images.unsplash.com/photo-1534126875314-a33c5aae3b3a"),
    dict(name="Moving Services", slug="moving", description="Reliable moving services to help you relocate with minimal stress.",
         image_url="https://images.unsplash.com/photo-1600518464441-9154a4dea21b"),
]

PROFESSIONALS = [
    dict(name="David Okafor", profession="Master Electrician", rating=Decimal("5.0"), review_count=124,
         bio="Specializing in electrical installations and repairs with over 15 years of experience across Lagos.",
         image_url="https://images.unsplash.com/photo-1506794778202-cad84cf45f1d", years_on_platform=6),
    dict(name="Amina Diallo", profession="Interior Designer", rating=Decimal("4.8"), review_count=97,
         bio="Award-winning designer transforming homes across Africa with creative, culturally inspired designs.",
         image_url="https://images.unsplash.com/photo-1573497019940-1c28c88b4f3e", years_on_platform=4),
    dict(name="Ibrahim Mensah", profession="Master Plumber", rating=Decimal("4.9"), review_count=156,
         bio="Expert in all plumbing needs from repairs to installations. Known for reliability and quality work.",
         image_url="https://images.unsplash.com/photo-1566753323558-f4e0952af115", years_on_platform=5),
    dict(name="Emmanuel Adeyemi", profession="Carpenter", rating=Decimal("4.7"), review_count=89,
         bio="Skilled craftsman with expertise in custom furniture, home repairs, and wooden installations.",
         image_url="https://images.unsplash.com/photo-1542142430-59f45f5d9344", years_on_platform=3),
    dict(name="Grace Nkosi", profession="Professional Cleaner", rating=Decimal("4.9"), review_count=112,
         bio="Thorough, detail-oriented cleaner specializing in deep cleaning services and organization.",
         image_url="https://images.unsplash.com/photo-1567532939604-b6b5b0db2604", years_on_platform=4),
    dict(name="Samuel Kamau", profession="Landscape Architect", rating=Decimal("4.6"), review_count=78,
         bio="Creative landscape designer with expertise in indigenous plants and sustainable garden design.",
         image_url="https://images.unsplash.com/photo-1568602471122-7832951cc4c5", years_on_platform=2),
]

SERVICE_TESTIMONIALS = [
    dict(name="Grace Ademola", location="Lagos, Nigeria", rating=5, service="Electrical Repair",
         image_url="https://images.unsplash.com/photo-1531123897727-8f129e1688ce",
         comment="I was skeptical at first, but the platform connected me with an incredible electrician who fixed issues other professionals couldn't solve. The service was prompt, professional, and reasonably priced."),
    dict(name="Samuel Okeke", location="Nairobi, Kenya", rating=5, service="Plumbing Service",
         image_url="https://images.unsplash.com/photo-1522529599102-193c0d76b5b6",
         comment="Finding reliable plumbers was always a challenge. The platform connected me with a skilled professional who arrived on time and solved our bathroom issues completely. Very impressed!"),
    dict(name="Fatima Mensah", location="Accra, Ghana", rating=4, service="Landscaping",
         image_url="https://images.unsplash.com/photo-1567532939604-b6b5b0db2604",
         comment="The landscaper I hired transformed my garden completely. I appreciated the transparent pricing and the ability to view previous work before making my decision."),
]

TRENDS = [
    dict(title="AI coding assistant", category="viral", searches=1200000, growth=342, countries=15, prediction="will_grow",
         ai_summary="Trending due to major tech companies announcing new AI-powered coding tools. Expected to grow as developers adopt these technologies for faster development cycles."),
    dict(title="Climate summit 2024", category="news", searches=890000, growth=189, countries=23, prediction="will_stabilize",
         ai_summary="Major announcements from global leaders at the annual climate summit driving widespread public interest and policy discussions across multiple nations."),
    dict(title="World Cup qualifiers", category="sports", searches=2100000, growth=278, countries=31, prediction="will_grow",
         ai_summary="Critical qualification matches determining which teams advance to the next World Cup. High-stakes games generating massive global viewership and engagement."),
    dict(title="Bitcoin ETF approval", category="finance", searches=756000, growth=-23, countries=18, prediction="will_fade",
         ai_summary="Regulatory developments around cryptocurrency ETFs creating market volatility. Institutional investors closely monitoring approval status and market implications."),
    dict(title="New Marvel movie trailer", category="culture", searches=1800000, growth=156, countries=27, prediction="will_grow",
         ai_summary="Highly anticipated superhero movie trailer release generating massive social media engagement and fan theories across platforms worldwide."),
]

MENTORS = [
    dict(name="Kendrick Flow", inspired_by="Kendrick Lamar", genre="Hip-Hop", genres=["Hip-Hop", "Conscious Rap"],
         region="West Coast", country="USA", artist_type="Rapper", years_active="2010-present",
         profile_image="https://images.unsplash.com/photo-1549213783-8284d0336c4f",
         bio="Storyteller who turns city blocks into concept albums.",
         description="Pushes you to write verses with layered narratives and internal rhymes.",
         personality_profile={"lyricism": 98, "storytelling": 95, "flow": 92},
         specialties=["Storytelling", "Internal rhyme", "Concept albums"],
         sample_prompt="Write a verse about the street you grew up on."),
    dict(name="Nova Rae", inspired_by="SZA", genre="R&B", genres=["R&B", "Neo-Soul"],
         region="East Coast", country="USA", artist_type="Singer", years_active="2014-present",
         profile_image="https://images.unsplash.com/photo-1494790108377-be9c29b29330",
         bio="Vulnerable songwriting over hazy, experimental production.",
         description="Helps you find melodies that carry honest, conversational lyrics.",
         personality_profile={"melody": 94, "vulnerability": 97, "experimentation": 88},
         specialties=["Melody writing", "Vocal layering", "Confessional lyrics"]),
    dict(name="MetroDeep", inspired_by="Metro Boomin", genre="Trap", genres=["Trap", "Hip-Hop"],
         region="South", country="USA", artist_type="Producer", years_active="2009-present",
         profile_image="https://images.unsplash.com/photo-1571330735066-03aaa9429d89",
         bio="Dark, cinematic beats built around sparse 808s.",
         description="Teaches beat selection, arrangement and how to leave space for the vocal.",
         personality_profile={"production": 97, "arrangement": 93, "collaboration": 90},
         specialties=["Beat production", "808 design", "Arrangement"]),
    dict(name="Blaze420", inspired_by="Snoop Dogg", genre="West Coast Hip-Hop", genres=["Hip-Hop", "G-Funk"],
         region="West Coast", country="USA", artist_type="Rapper", years_active="1992-present",
         profile_image="https://images.unsplash.com/photo-1520341280432-4749d4d7bcf9",
         bio="Laid-back delivery with decades of funk behind it.",
         description="Works on effortless flow, swagger and hooks that stick.",
         personality_profile={"flow": 96, "charisma": 98, "longevity": 95},
         specialties=["Laid-back flow", "Hooks", "G-Funk"]),
    dict(name="IvyMuse", inspired_by="Lauryn Hill", genre="Neo-Soul", genres=["Neo-Soul", "Hip-Hop", "R&B"],
         region="East Coast", country="USA", artist_type="Singer-Rapper", years_active="1993-present",
         profile_image="https://images.unsplash.com/photo-1531123897727-8f129e1688ce",
         bio="Switches between singing and rapping without losing the message.",
         description="Guides you through blending sung and rapped sections with purpose.",
         personality_profile={"versatility": 97, "message": 96, "soul": 95},
         specialties=["Singing and rapping", "Message-driven songs", "Harmony"]),
    dict(name="Yemi Sound", inspired_by="Burna Boy", genre="Afrobeats", genres=["Afrobeats", "Afro-fusion"],
         region="West Africa", country="Nigeria", artist_type="Singer", years_active="2012-present",
         profile_image="https://images.unsplash.com/photo-1506794778202-cad84cf45f1d",
         bio="Afro-fusion built on percussion, horns and pidgin hooks.",
         description="Shows you how to ride polyrhythms and mix languages in a chorus.",
         personality_profile={"rhythm": 97, "fusion": 94, "energy": 93},
         specialties=["Afro-fusion", "Percussive flow", "Multilingual hooks"]),
]

JOURNEY_STEPS = [
    dict(title="Find Your Voice", description="Record your first verses and discover the delivery that feels like you.",
         status="completed", order=1, icon="fa-check"),
    dict(title="Beat Selection & Composition", description="Learn to choose beats that fit your voice and arrange a full song.",
         status="in-progress", order=2, icon="fa-music"),
    dict(title="Advanced Lyricism", description="Multisyllabic rhymes, wordplay and extended metaphors.",
         status="locked", order=3, icon="fa-pen-fancy"),
]

# mentor_id refers to the insertion order of MENTORS (1-based)
INSPIRATION_ITEMS = [
    dict(mentor_id=1, type="quote", title="On storytelling", content="Every verse should move the story one block further."),
    dict(mentor_id=2, type="quote", title="On honesty", content="Write the line you are scared to sing."),
    dict(mentor_id=3, type="tip", title="Leave space", content="Mute the melody for two bars before the hook drops."),
    dict(mentor_id=6, type="tip", title="Ride the drums", content="Clap the percussion pattern before you write a single word."),
    dict(mentor_id=None, type="prompt", title="Daily prompt", content="Describe your city at 3am in eight bars."),
]

COLLABORATIONS = [
    dict(title="Need a hook for a summer anthem", description="Upbeat Afrobeats track, verses are done, looking for a sung chorus.",
         created_by="user-10", looking_for="Singer", genre="Afrobeats", tags="summer,afrobeats,hook"),
    dict(title="Producer wanted for conscious EP", description="Five songs written, want a jazzy boom-bap sound.",
         created_by="user-11", looking_for="Producer", genre="Hip-Hop", tags="boom-bap,jazz,ep"),
]

CHALLENGES = [
    dict(title="MetroDeep Hook Challenge", description="Write and record a hook over the weekly MetroDeep beat.",
         entries=247, days_left=2, prize="Featured + Pro Plan", is_featured=True),
]

ARTIST_SYNCS = [
    dict(source="spotify", source_id="2YZyLoL8N0Wb9xBt1NhZWg", mentor_id=1, sync_status="success", priority=1),
    dict(source="genius", source_id="1421", mentor_id=1, sync_status="success", priority=1),
    dict(source="spotify", source_id="3TVXtAsR1Inumwj472S9r4", mentor_id=None, sync_status="pending", priority=3),
    dict(source="spotify", source_id="newcomer-artist", mentor_id=None, sync_status="pending", priority=5),
    dict(source="genius", source_id="error-example", mentor_id=None, sync_status="failed", priority=10,
         sync_error="Artist not found at source"),
]

SUBJECTS = [
    dict(name="Mathematics", code="math", color="#3B82F6", description="Algebra, calculus and statistics."),
    dict(name="English", code="english", color="#10B981", description="Literature, grammar and writing."),
    dict(name="Physics", code="physics", color="#8B5CF6", description="Mechanics, electricity and modern physics."),
    dict(name="Languages", code="languages", color="#F59E0B", description="Spanish, French and more."),
]

# subject_id refers to the insertion order of SUBJECTS (1-based)
COURSES = [
    dict(name="Advanced Mathematics", subject_id=1, level="advanced", certification_type="A-Level",
         description="Calculus, vectors and proof for final-year students."),
    dict(name="English Literature", subject_id=2, level="intermediate", certification_type="GCSE",
         description="Close reading of poetry, drama and the novel."),
    dict(name="SAT Preparation", subject_id=1, level="intermediate", certification_type="SAT",
         description="Timed practice and strategy for the SAT math sections."),
    dict(name="Introductory Physics", subject_id=3, level="beginner",
         description="Motion, forces and energy from first principles."),
    dict(name="Conversational Spanish", subject_id=4, level="beginner",
         description="Everyday Spanish for travel and conversation."),
    dict(name="Creative Writing", subject_id=2, level="beginner",
         description="Short fiction and personal essays."),
]

# course_id refers to the insertion order of COURSES (1-based)
LESSONS = [
    dict(course_id=1, title="Limits and Continuity", order=1, duration=45),
    dict(course_id=1, title="Differentiation", order=2, duration=50),
    dict(course_id=1, title="Integration", order=3, duration=55),
    dict(course_id=2, title="Reading Poetry", order=1, duration=40),
    dict(course_id=2, title="Shakespearean Drama", order=2, duration=50),
    dict(course_id=3, title="Heart of Algebra", order=1, duration=35),
    dict(course_id=3, title="Problem Solving and Data Analysis", order=2, duration=40),
]

AI_INSTRUCTORS = [
    dict(name="Professor Emma", appearance="Warm, patient teacher with a blackboard backdrop", voice="en-US-Neural2-F",
         subject_specialties=[1, 2], language="en", rating=48, rating_count=320),
    dict(name="Dr. James", appearance="Energetic scientist in a lab coat", voice="en-US-Neural2-D",
         subject_specialties=[1, 3], language="en", rating=47, rating_count=210),
    dict(name="Prof. María", appearance="Friendly linguist in a sunny classroom", voice="es-ES-Neural2-A",
         subject_specialties=[2, 4], language="es", rating=49, rating_count=180),
    dict(name="Dr. Chen", appearance="Calm physicist with a whiteboard of equations", voice="en-US-Neural2-J",
         subject_specialties=[3, 1], language="en", rating=46, rating_count=150),
]

RESTAURANTS = [
    dict(name="Abyssinia Ethiopian", cuisine_type="Ethiopian", country="Kenya", city="Nairobi",
         address="Ngong Road, Nairobi", opening_hours="11:00-22:00", price_range="$$", rating=4.7, review_count=128,
         image_url="https://images.unsplash.com/photo-1604329760661-e71dc83f8f26",
         description="Injera and slow-cooked wats served on shared platters."),
    dict(name="Tagine House", cuisine_type="Moroccan", country="Morocco", city="Marrakesh",
         address="Derb Dabachi, Medina", opening_hours="12:00-23:00", price_range="$$$", rating=4.8, review_count=203,
         image_url="https://images.unsplash.com/photo-1541518763669-27fef04b14ea",
         description="Tagines and couscous in a restored riad courtyard."),
    dict(name="Lagos Kitchen", cuisine_type="Nigerian", country="Nigeria", city="Lagos",
         address="Admiralty Way, Lekki", opening_hours="10:00-22:00", price_range="$$", rating=4.6, review_count=156,
         image_url="https://images.unsplash.com/photo-1567364816519-cbc9c4ffe1eb",
         description="Party jollof, suya and pepper soup."),
    dict(name="Accra Flavors", cuisine_type="Ghanaian", country="Ghana", city="Accra",
         address="Oxford Street, Osu", opening_hours="11:00-21:00", price_range="$", rating=4.5, review_count=97,
         image_url="https://images.unsplash.com/photo-1512058564366-18510be2db19",
         description="Waakye, kelewele and banku by the sea."),
]

# restaurant_id refers to the insertion order of RESTAURANTS (1-based)
MENU_ITEMS = [
    dict(restaurant_id=1, name="Doro Wat", price=18.99, featured=True,
         description="Chicken stewed in berbere with a hard-boiled egg."),
    dict(restaurant_id=1, name="Veggie Combo", price=15.99, featured=False,
         description="Misir, gomen and shiro on injera."),
    dict(restaurant_id=2, name="Lamb Tagine", price=22.5, featured=True,
         description="Lamb with prunes and almonds, slow-cooked in the tagine."),
    dict(restaurant_id=2, name="Chicken Pastilla", price=19.0, featured=False,
         description="Flaky pastry with spiced chicken, dusted with cinnamon sugar."),
    dict(restaurant_id=3, name="Party Jollof", price=14.0, featured=True,
         description="Smoky tomato rice with fried plantain."),
    dict(restaurant_id=3, name="Beef Suya", price=12.5, featured=True,
         description="Grilled beef skewers with yaji spice."),
    dict(restaurant_id=4, name="Waakye", price=10.0, featured=True,
         description="Rice and beans with shito, gari and boiled egg."),
]

RESTAURANT_REVIEWS = [
    dict(restaurant_id=1, user_id="user-20", rating=5, comment="The doro wat tasted like home."),
    dict(restaurant_id=2, user_id="user-21", rating=4, comment="Beautiful courtyard, the tagine was perfect."),
]

CULTURAL_INSIGHTS = [
    dict(title="The Ethiopian Coffee Ceremony", cuisine_type="Ethiopian", region="East Africa",
         image_url="https://images.unsplash.com/photo-1511920170033-f8396924c348",
         content="Beans are roasted, ground and brewed in a jebena in front of guests; three rounds are served as a sign of friendship."),
    dict(title="Sharing from One Tagine", cuisine_type="Moroccan", region="North Africa",
         image_url="https://images.unsplash.com/photo-1541518763669-27fef04b14ea",
         content="Diners eat from the same dish using bread, each staying on their own side of the pot."),
    dict(title="Jollof at Every Party", cuisine_type="Nigerian", region="West Africa",
         image_url="https://images.unsplash.com/photo-1567364816519-cbc9c4ffe1eb",
         content="No celebration in Lagos is complete without a pot of smoky party jollof cooked over firewood."),
]

FOOD_ORIGIN_STORIES = [
    dict(dish_name="Jollof Rice", cuisine_type="West African", country="Senegal", historical_period="14th century",
         ingredients="Rice, tomatoes, peppers, onions, spices",
         story_content="Jollof is traced to the Wolof people of the Senegambia region and spread along trade routes across West Africa.",
         cultural_significance="The friendly 'Jollof Wars' between Nigeria, Ghana and Senegal celebrate a shared heritage."),
    dict(dish_name="Tagine", cuisine_type="Moroccan", country="Morocco", historical_period="9th century",
         ingredients="Meat, dried fruit, preserved lemon, olives, spices",
         story_content="Named after its conical clay pot, the tagine was developed by Berber cooks for slow cooking over embers.",
         cultural_significance="Preparing a tagine for guests is an expression of Moroccan hospitality."),
    dict(dish_name="Injera", cuisine_type="Ethiopian", country="Ethiopia", historical_period="Ancient",
         ingredients="Teff flour, water",
         story_content="Injera is a fermented teff flatbread that serves as plate, utensil and food at once.",
         cultural_significance="Eating from a shared injera platter, and feeding others by hand, expresses trust."),
    dict(dish_name="Bobotie", cuisine_type="South African", country="South Africa", historical_period="17th century",
         ingredients="Minced meat, curry spices, dried fruit, egg custard",
         story_content="Bobotie grew out of Cape Malay kitchens, mixing Southeast Asian spicing with Dutch baked custards.",
         cultural_significance="It is often called South Africa's national dish."),
]


def _professional(data: dict) -> Professional:
    data = dict(data)
    years = data.pop("years_on_platform")
    return Professional(
        verifications=["Background checked", "Licensed & insured", f"{years}+ years on platform"],
        **data,
    )


async def _is_empty(db: AsyncSession, model) -> bool:
    return (await db.execute(select(func.count()).select_from(model))).scalar_one() == 0


def _link(row: dict, key: str, ids) -> dict:
    position = row.get(key)
    return {**row, key: ids[position - 1] if position else None}


async def seed_session(db: AsyncSession) -> dict:
    """Seed every empty table through ``db``; returns rows inserted per table."""
    plan = [
        (Property, [Property(**p) for p in PROPERTIES]),
        (Destination, [Destination(**d) for d in DESTINATIONS]),
        (Service, [Service(**s) for s in SERVICES]),
        (Professional, [_professional(p) for p in PROFESSIONALS]),
        (ServiceTestimonial, [ServiceTestimonial(**t) for t in SERVICE_TESTIMONIALS]),
        (Trend, [Trend(region="global", is_active=True, **t) for t in TRENDS]),
        (Mentor, [Mentor(**m) for m in MENTORS]),
        (JourneyStep, [JourneyStep(**s) for s in JOURNEY_STEPS]),
        (Collaboration, [Collaboration(**c) for c in COLLABORATIONS]),
        (Challenge, [Challenge(**c) for c in CHALLENGES]),
        (Subject, [Subject(**s) for s in SUBJECTS]),
        (AiInstructor, [AiInstructor(**i) for i in AI_INSTRUCTORS]),
        (Restaurant, [Restaurant(**r) for r in RESTAURANTS]),
        (CulturalInsight, [CulturalInsight(**c) for c in CULTURAL_INSIGHTS]),
        (FoodOriginStory, [FoodOriginStory(**s) for s in FOOD_ORIGIN_STORIES]),
    ]
    inserted = {}
    for model, rows in plan:
        if not await _is_empty(db, model):
            continue
        db.add_all(rows)
        await db.flush()
        inserted[model.__tablename__] = len(rows)

    # Child rows point at parents seeded in this run; parents come first
    linked = [
        (Testimonial, Property, "property_id", TESTIMONIALS),
        (InspirationItem, Mentor, "mentor_id", INSPIRATION_ITEMS),
        (ArtistSync, Mentor, "mentor_id", ARTIST_SYNCS),
        (Course, Subject, "subject_id", COURSES),
        (Lesson, Course, "course_id", LESSONS),
        (MenuItem, Restaurant, "restaurant_id", MENU_ITEMS),
        (Review, Restaurant, "restaurant_id", RESTAURANT_REVIEWS),
    ]
    for model, parent, key, data in linked:
        if parent.__tablename__ not in inserted or not await _is_empty(db, model):
            continue
        ids = (await db.execute(select(parent.id).order_by(parent.id))).scalars().all()
        rows = [model(**_link(row, key, ids)) for row in data]
        db.add_all(rows)
        await db.flush()
        inserted[model.__tablename__] = len(rows)

    await db.commit()
    logger.info("Seed complete", inserted=inserted)
    return inserted


async def seed() -> dict:
    async with async_session_maker() as db:
        return await seed_session(db)


async def main():
    setup_logging()
    await init_db()
    await seed()


if __name__ == "__main__":
    asyncio.run(main())
