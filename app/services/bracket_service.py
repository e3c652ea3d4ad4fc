"""
Single elimination bracket for a fixed field of 32 players.

Rounds are not stored anywhere; the round to generate next is inferred from the
number of matches already in the database. Every call generates exactly one round,
and only once the previous round is fully decided:

    matches in db:   0   16   24   28   30
    next round:      1    2    3    4    5
    new matches:    16    8    4    2    1
"""
import logging
import random
from typing import Dict, List, Optional, Sequence, Tuple, TypeVar

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import InvalidStateError, StorageError
from app.models import match as match_model
from app.models import player as player_model
from app.services import match_service, player_service

logger = logging.getLogger(__name__)

TOURNAMENT_SIZE = 32
ROUND_BY_MATCH_COUNT: Dict[int, int] = {0: 1, 16: 2, 24: 3, 28: 4, 30: 5}

T = TypeVar("T")


def next_round_for_match_count(match_count: int) -> int:
    try:
        return ROUND_BY_MATCH_COUNT[match_count]
    except KeyError:
        raise InvalidStateError(f"Invalid amount of matches in DB: {match_count}") from None


def players_in_round(round_number: int) -> int:
    return TOURNAMENT_SIZE // 2 ** (round_number - 1)


def pair_players(pool: Sequence[T], rng: random.Random) -> List[Tuple[T, T]]:
    """
    Pairs up the pool by repeatedly drawing two players at random without replacement.
    Both draws come from what is left of the pool, so a player is never paired with
    themselves and appears in exactly one pair.
    """
    if len(pool) % 2 != 0:
        raise ValueError(f"Cannot pair an odd number of players ({len(pool)})")
    if len(set(pool)) != len(pool):
        raise ValueError("Player pool contains duplicates")

    remaining = list(pool)
    pairs: List[Tuple[T, T]] = []
    while remaining:
        first = remaining.pop(rng.randrange(len(remaining)))
        second = remaining.pop(rng.randrange(len(remaining)))
        pairs.append((first, second))
    return pairs


def _eligible_player_ids(db: Session, round_number: int) -> List[int]:
    if round_number == 1:
        rows = db.query(player_model.Player.id).order_by(player_model.Player.id).all()
    else:
        rows = (
            db.query(match_model.Match.winner_id, match_model.Match.player1_id, match_model.Match.player2_id)
            .filter(match_model.Match.round == round_number - 1)
            .order_by(match_model.Match.id)
            .all()
        )
        for winner_id, player1_id, player2_id in rows:
            if winner_id not in (player1_id, player2_id):
                raise InvalidStateError(
                    f"Winner {winner_id} did not play in a round {round_number - 1} match "
                    f"({player1_id} vs {player2_id})"
                )
    player_ids = [row[0] for row in rows]

    expected = players_in_round(round_number)
    if len(player_ids) != expected or len(set(player_ids)) != expected:
        raise InvalidStateError(
            f"Round {round_number} needs {expected} distinct players, found {len(set(player_ids))}"
        )
    return player_ids


def _build_next_round(db: Session, rng: random.Random) -> List[match_model.Match]:
    if db.query(match_model.Match).filter(match_model.Match.winner_id.is_(None)).count() > 0:
        raise InvalidStateError("Match in DB has no winner")

    player_count = player_service.count_players(db)
    if player_count != TOURNAMENT_SIZE:
        raise InvalidStateError(f"Not {TOURNAMENT_SIZE} players in DB (found {player_count})")

    round_number = next_round_for_match_count(db.query(match_model.Match).count())
    pool = _eligible_player_ids(db, round_number)

    return [
        match_service.add_match(db, player1_id, player2_id, round_number)
        for player1_id, player2_id in pair_players(pool, rng)
    ]


def generate_matches_for_next_round(db: Session, rng: Optional[random.Random] = None) -> List[match_model.Match]:
    """
    Generates the matches of the next round.

    Checks, reads and inserts share one transaction: either every match of the round is
    committed or, on any error, nothing is.

    Raises InvalidStateError if a match is undecided, there are not exactly 32 players,
    the number of stored matches does not correspond to a complete round, or a winner
    of the previous round did not play in the match they are recorded as winning.
    Raises StorageError if the database fails.
    """
    if rng is None:
        rng = random.Random()

    try:
        new_matches = _build_next_round(db, rng)
        db.commit()
    except InvalidStateError as exc:
        db.rollback()
        logger.warning("Refusing to generate next round: %s", exc.message)
        raise
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Storage failure while generating next round, rolled back")
        raise StorageError("Could not store matches for next round") from exc
    except Exception:
        db.rollback()
        raise

    for db_match in new_matches:
        db.refresh(db_match)
    if new_matches:
        logger.info("Generated %d matches for round %s", len(new_matches), new_matches[0].round)
    return new_matches


def get_champion(db: Session) -> Optional[player_model.Player]:
    final = (
        db.query(match_model.Match)
        .filter(match_model.Match.round == match_model.FINAL_ROUND)
        .first()
    )
    if final is None or not final.is_decided:
        return None
    return final.winner
