import random
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.services import bracket_service, match_service
from app.schemas import match_schemas
from app.api.dependencies import get_db, get_rng

router = APIRouter()

@router.get("", response_model=List[match_schemas.MatchRead])
async def get_matches_endpoint(
    round: Optional[int] = Query(None, ge=1, le=5, description="Only matches of this round"),
    db: Session = Depends(get_db),
):
    return match_service.get_matches(db=db, round_number=round)

@router.get("/open", response_model=List[match_schemas.MatchRead])
async def get_open_matches_endpoint(db: Session = Depends(get_db)):
    return match_service.get_incomplete_matches(db=db)

@router.post("/generate", status_code=status.HTTP_204_NO_CONTENT)
async def generate_next_round_endpoint(
    db: Session = Depends(get_db),
    rng: random.Random = Depends(get_rng),
):
    bracket_service.generate_matches_for_next_round(db=db, rng=rng)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{match_id}", response_model=match_schemas.MatchRead)
async def get_match_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
):
    return match_service.get_match(db=db, match_id=match_id)

@router.post("/{match_id}/winner", response_model=match_schemas.MatchRead)
async def set_winner_endpoint(
    match_id: int,
    winner_in: match_schemas.WinnerUpdate,
    db: Session = Depends(get_db),
):
    return match_service.set_winner(db=db, match_id=match_id, player=winner_in.player)
