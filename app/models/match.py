from enum import Enum

from sqlalchemy import CheckConstraint, Column, ForeignKey, Integer
from sqlalchemy.orm import relationship
from app.core.database import Base

FIRST_ROUND = 1
FINAL_ROUND = 5


class PlayerNumber(int, Enum):
    """Which side of a match won."""
    PLAYER1 = 1
    PLAYER2 = 2


class Match(Base):
    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint(f"round BETWEEN {FIRST_ROUND} AND {FINAL_ROUND}", name="ck_matches_round_range"),
        CheckConstraint("player1_id <> player2_id", name="ck_matches_distinct_players"),
        CheckConstraint(
            "winner_id IS NULL OR winner_id IN (player1_id, player2_id)", name="ck_matches_winner_played"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)
    round = Column(Integer, nullable=False, index=True)
    # No ondelete cascade: players can only go away together with every match (bulk wipe)
    player1_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    player2_id = Column(Integer, ForeignKey("players.id"), nullable=False)
    winner_id = Column(Integer, ForeignKey("players.id"), nullable=True)

    player1 = relationship("Player", foreign_keys=[player1_id])
    player2 = relationship("Player", foreign_keys=[player2_id])
    winner = relationship("Player", foreign_keys=[winner_id])

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    def player_for(self, player: PlayerNumber):
        return self.player1 if player == PlayerNumber.PLAYER1 else self.player2
