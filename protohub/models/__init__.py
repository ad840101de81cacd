from sqlalchemy.ext.asyncio import AsyncAttrs
from sqlalchemy.orm import declarative_base

# Define a common Base for all models
Base = declarative_base(cls=AsyncAttrs)

# Import models AFTER Base is defined so they register on the same metadata
from . import stays
from . import homeservices
from . import tracker
from . import trends
from . import breath
from . import mentorship
from . import podcasts
from . import learning
from . import dining
