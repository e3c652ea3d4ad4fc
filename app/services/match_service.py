import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidStateError, NotFoundError, StorageError, ValidationError
from app.models import match as match_model
from app.services import player_service

logger = logging.getLogger(__name__)


def add_match(db: Session, player1_id: int, player2_id: int, round_number: int) -> match_model.Match:
    """
    Adds a match between two players to the session. The caller owns the transaction,
    nothing is committed here.
    """
    if player1_id == player2_id:
        raise ValidationError(f"Player {player1_id} cannot be paired with themselves")
    if not match_model.FIRST_ROUND <= round_number <= match_model.FINAL_ROUND:
        raise ValidationError(
            f"Round must be between {match_model.FIRST_ROUND} and {match_model.FINAL_ROUND}, got {round_number}"
        )

    db_match = match_model.Match(
        player1=player_service.get_player(db, player1_id),
        player2=player_service.get_player(db, player2_id),
        round=round_number,
    )
    db.add(db_match)
    return db_match


def get_match(db: Session, match_id: int) -> match_model.Match:
    db_match = db.get(match_model.Match, match_id)
    if not db_match:
        raise NotFoundError(f"Match {match_id} not found")
    return db_match


def get_matches(db: Session, round_number: Optional[int] = None) -> List[match_model.Match]:
    query = db.query(match_model.Match)
    if round_number is not None:
        query = query.filter(match_model.Match.round == round_number)
    return query.order_by(match_model.Match.round, match_model.Match.id).all()


def get_incomplete_matches(db: Session) -> List[match_model.Match]:
    return (
        db.query(match_model.Match)
        .filter(match_model.Match.winner_id.is_(None))
        .order_by(match_model.Match.id)
        .all()
    )


def set_winner(db: Session, match_id: int, player: match_model.PlayerNumber) -> match_model.Match:
    """Records which side won the match. A decided match cannot be changed."""
    db_match = get_match(db, match_id)
    if db_match.is_decided:
        raise InvalidStateError(f"Match {match_id} already has a winner")

    player = match_model.PlayerNumber(player)
    db_match.winner = db_match.player_for(player)
    try:
        db.commit()
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Failed to record winner for match %s", match_id)
        raise StorageError(f"Could not record winner for match {match_id}") from exc
    db.refresh(db_match)
    logger.info("Match %s (round %s) won by player %s", match_id, db_match.round, db_match.winner_id)
    return db_match
