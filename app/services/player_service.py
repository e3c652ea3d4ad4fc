import logging
from typing import List, Optional

from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, StorageError, ValidationError
from app.models import match as match_model
from app.models import player as player_model
from app.schemas import player_schemas

logger = logging.getLogger(__name__)


def add_player(db: Session, player: player_schemas.PlayerCreate) -> player_model.Player:
    name = (player.name or "").strip()
    if not name:
        raise ValidationError("Player name is required")

    db_player = player_model.Player(name=name, phone_number=player.phone_number)
    db.add(db_player)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to store player %r", name)
        raise StorageError("Could not store player") from exc
    db.refresh(db_player)
    logger.info("Added player %s (%s)", db_player.id, db_player.name)
    return db_player


def get_filtered_players(db: Session, name_filter: Optional[str] = None) -> List[player_model.Player]:
    """
    Returns every player whose name contains ``name_filter``.

    Matching is case-insensitive regardless of the database collation; LIKE wildcards
    in the filter are escaped so they match literally. A missing or empty filter
    returns all players.
    """
    query = db.query(player_model.Player)
    if name_filter:
        query = query.filter(player_model.Player.name.icontains(name_filter, autoescape=True))
    return query.order_by(player_model.Player.id).all()


def get_player(db: Session, player_id: int) -> player_model.Player:
    db_player = db.get(player_model.Player, player_id)
    if not db_player:
        raise NotFoundError(f"Player {player_id} not found")
    return db_player


def count_players(db: Session) -> int:
    return db.query(player_model.Player).count()


def delete_everything(db: Session) -> None:
    """Deletes all matches and players in a single transaction."""
    try:
        # Matches first, they hold the foreign keys
        db.execute(delete(match_model.Match))
        db.execute(delete(player_model.Player))
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Bulk delete failed, rolled back")
        raise StorageError("Could not delete tournament data") from exc
    db.expire_all()
    logger.info("Deleted all matches and players")
