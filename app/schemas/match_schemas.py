from pydantic import BaseModel, Field
from typing import Optional

from app.models.match import PlayerNumber
from .player_schemas import PlayerRead

class MatchRead(BaseModel):
    id: int
    round: int
    player1_id: int
    player2_id: int
    winner_id: Optional[int] = None
    player1: PlayerRead
    player2: PlayerRead
    winner: Optional[PlayerRead] = None

    class Config:
        from_attributes = True

class WinnerUpdate(BaseModel):
    player: PlayerNumber = Field(..., description="1 if player1 won the match, 2 if player2 did")
