import random

from app.core.config import settings
from app.core.database import SessionLocal

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_rng() -> random.Random:
    # A fresh generator per request; seeded only when RANDOM_SEED is configured
    return random.Random(settings.RANDOM_SEED)
