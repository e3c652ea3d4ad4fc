from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from app.services import bracket_service, player_service
from app.schemas import player_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.get("/champion", response_model=player_schemas.PlayerRead)
async def get_champion_endpoint(db: Session = Depends(get_db)):
    champion = bracket_service.get_champion(db=db)
    if not champion:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Final has not been decided yet")
    return champion

@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def delete_everything_endpoint(db: Session = Depends(get_db)):
    player_service.delete_everything(db=db)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
