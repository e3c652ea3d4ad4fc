from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.services import player_service
from app.schemas import player_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.get("", response_model=List[player_schemas.PlayerRead])
async def get_players_endpoint(
    name: Optional[str] = Query(None, description="Only players whose name contains this text (case-insensitive)"),
    db: Session = Depends(get_db),
):
    return player_service.get_filtered_players(db=db, name_filter=name)

@router.post("", response_model=player_schemas.PlayerRead, status_code=status.HTTP_201_CREATED)
async def add_player_endpoint(
    player_in: player_schemas.PlayerCreate,
    db: Session = Depends(get_db),
):
    return player_service.add_player(db=db, player=player_in)

@router.get("/{player_id}", response_model=player_schemas.PlayerRead)
async def get_player_endpoint(
    player_id: int,
    db: Session = Depends(get_db),
):
    # NotFoundError is turned into a 404 by the handler in app.main
    return player_service.get_player(db=db, player_id=player_id)
