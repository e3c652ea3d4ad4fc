from sqlalchemy import Column, Integer, String
from app.core.database import Base

class Player(Base):
    __tablename__ = "players"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    phone_number = Column(String, nullable=True)

    # Matches reference a player three ways (player1, player2, winner), so there is no
    # single back_populates here. Query Match explicitly when a player's matches are needed.
