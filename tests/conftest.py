import random

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import Base, create_db_engine
from app.models import Match, Player, PlayerNumber
from app.services import bracket_service



@pytest.fixture
def db_engine():
    # One in-memory database shared by every connection of the test
    engine = create_db_engine("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(bind=db_engine, autocommit=False, autoflush=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def add_players(db):
    def _add_players(count: int = bracket_service.TOURNAMENT_SIZE):
        players = [Player(name=f"Player {i:02d}", phone_number=f"+43 660 {i:04d}") for i in range(count)]
        db.add_all(players)
        db.commit()
        return players
    return _add_players


@pytest.fixture
def decide_open_matches(db):
    """Sets the winner of every open match, always picking the given side."""
    def _decide(side: PlayerNumber = PlayerNumber.PLAYER1):
        open_matches = db.query(Match).filter(Match.winner_id.is_(None)).all()
        for m in open_matches:
            m.winner_id = m.player1_id if side == PlayerNumber.PLAYER1 else m.player2_id
        db.commit()
        return open_matches
    return _decide


@pytest.fixture
def play_rounds(db, rng, decide_open_matches):
    """Generates and fully decides the given number of rounds."""
    def _play(rounds: int):
        for _ in range(rounds):
            bracket_service.generate_matches_for_next_round(db, rng=rng)
            decide_open_matches()
    return _play
