import logging

import pytest

from app.core.exceptions import InvalidStateError, NotFoundError, ValidationError
from app.models import Match, PlayerNumber
from app.services import bracket_service, match_service


@pytest.fixture
def first_round(db, rng, add_players):
    add_players()
    return bracket_service.generate_matches_for_next_round(db, rng=rng)


class TestSetWinner:

    def test_player1_wins(self, db, first_round):
        m = first_round[0]
        updated = match_service.set_winner(db, m.id, PlayerNumber.PLAYER1)
        assert updated.winner_id == updated.player1_id
        assert updated.winner.id == updated.player1.id

    def test_player2_wins(self, db, first_round):
        m = first_round[3]
        updated = match_service.set_winner(db, m.id, PlayerNumber.PLAYER2)
        assert updated.winner_id == updated.player2_id

    def test_accepts_plain_int(self, db, first_round):
        updated = match_service.set_winner(db, first_round[0].id, 2)
        assert updated.winner_id == updated.player2_id

    def test_winner_is_persisted(self, db, session_factory, first_round):
        match_id = first_round[0].id
        match_service.set_winner(db, match_id, PlayerNumber.PLAYER1)

        with session_factory() as other:
            stored = other.get(Match, match_id)
            assert stored.winner_id == stored.player1_id

    def test_unknown_match(self, db, first_round):
        with pytest.raises(NotFoundError, match="Match 999 not found"):
            match_service.set_winner(db, 999, PlayerNumber.PLAYER1)

    def test_winner_cannot_change(self, db, first_round):
        m = first_round[0]
        match_service.set_winner(db, m.id, PlayerNumber.PLAYER1)

        with pytest.raises(InvalidStateError, match="already has a winner"):
            match_service.set_winner(db, m.id, PlayerNumber.PLAYER2)
        assert match_service.get_match(db, m.id).winner_id == m.player1_id

    def test_invalid_side(self, db, first_round):
        with pytest.raises(ValueError):
            match_service.set_winner(db, first_round[0].id, 3)

    def test_logs_with_lazy_arguments(self, db, first_round, caplog):
        m = first_round[0]
        with caplog.at_level(logging.INFO, logger="app.services.match_service"):
            match_service.set_winner(db, m.id, PlayerNumber.PLAYER2)

        record = caplog.records[-1]
        assert record.args == (m.id, 1, m.player2_id)
        assert record.getMessage() == f"Match {m.id} (round 1) won by player {m.player2_id}"


class TestQueries:

    def test_incomplete_matches(self, db, first_round):
        match_service.set_winner(db, first_round[0].id, PlayerNumber.PLAYER1)
        open_ids = [m.id for m in match_service.get_incomplete_matches(db)]
        assert len(open_ids) == 15
        assert first_round[0].id not in open_ids

    def test_incomplete_matches_empty(self, db):
        assert match_service.get_incomplete_matches(db) == []

    def test_get_matches_by_round(self, db, play_rounds, add_players):
        add_players()
        play_rounds(2)
        assert len(match_service.get_matches(db)) == 24
        assert len(match_service.get_matches(db, round_number=2)) == 8
        assert match_service.get_matches(db, round_number=3) == []

    def test_get_match_not_found(self, db):
        with pytest.raises(NotFoundError):
            match_service.get_match(db, 1)


class TestAddMatch:

    def test_adds_without_committing(self, db, add_players):
        p1, p2 = add_players(2)
        m = match_service.add_match(db, p1.id, p2.id, 1)
        db.flush()
        assert m.id is not None
        db.rollback()
        assert db.query(Match).count() == 0

    def test_same_player_twice(self, db, add_players):
        p1, = add_players(1)
        with pytest.raises(ValidationError, match="themselves"):
            match_service.add_match(db, p1.id, p1.id, 1)

    @pytest.mark.parametrize("round_number", [0, 6])
    def test_round_out_of_range(self, db, add_players, round_number):
        p1, p2 = add_players(2)
        with pytest.raises(ValidationError, match="Round must be between 1 and 5"):
            match_service.add_match(db, p1.id, p2.id, round_number)

    def test_unknown_player(self, db, add_players):
        p1, = add_players(1)
        with pytest.raises(NotFoundError):
            match_service.add_match(db, p1.id, 12345, 1)
