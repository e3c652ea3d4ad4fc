from app.core.database import Base

# Import all models here to ensure they are registered with Base.
# Tables are created by app.core.database.init_db() at application startup.
from .player import Player
from .match import Match, PlayerNumber
