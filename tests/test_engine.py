import dataclasses

import numpy as np
import pytest

from connectfour.errors import (ColumnFullError, ErrorKind, GameError, InvalidConfigurationError,
                                NullArgumentError)
from connectfour.game import Contestant, Engine
from connectfour.utils import COLS, ROWS, Cell, GameMode, GameResult


def snapshot_key(match):
    return (match.grid.tobytes(), match.active, match.last_drop, match.result,
            match.terminal, match.winner, tuple(match.winning_line), match.moves_made)


class TestInitialize:

    def test_new_match(self, engine, alice, bob):
        match = engine.get_state()
        assert np.all(match.grid == Cell.EMPTY.value)
        assert match.active is alice
        assert match.result == GameResult.CONTINUING
        assert not match.terminal
        assert match.last_drop is None
        assert alice.color == Cell.RED
        assert bob.color == Cell.BLUE

    @pytest.mark.parametrize("mode, flags", [
        (1, (False, False)),
        (2, (False, True)),
        (3, (True, True)),
        (GameMode.HUMAN_VS_AUTOMATED, (False, True)),
    ])
    def test_mode_sets_control_flags(self, alice, bob, mode, flags):
        Engine(mode, alice, bob)
        assert (alice.is_automated, bob.is_automated) == flags

    @pytest.mark.parametrize("mode", [0, 4, -1, "1", None, True, 2.0])
    def test_unknown_mode_is_rejected(self, mode):
        with pytest.raises(InvalidConfigurationError) as excinfo:
            Engine(mode)
        assert excinfo.value.kind == ErrorKind.INVALID_CONFIGURATION

    def test_failed_initialize_keeps_current_match(self, engine, play):
        play(engine, [3])
        with pytest.raises(GameError):
            engine.initialize(5, Contestant(), Contestant())
        assert engine.get_state().column_height(3) == 1

    def test_numpy_integer_mode_is_accepted(self):
        assert Engine(np.int64(3)).mode == GameMode.AUTOMATED_VS_AUTOMATED

    def test_same_contestant_twice_is_rejected(self, alice):
        with pytest.raises(InvalidConfigurationError):
            Engine(1, alice, alice)

    def test_missing_contestants_are_created(self):
        match = Engine(2).get_state()
        assert match.contestant1.name == ""
        assert match.contestant2.is_automated
        assert match.contestant1 is not match.contestant2


class TestRename:

    def test_rename_returns_confirmation(self, engine, alice):
        assert engine.rename_contestant(alice, "Zed") == "new name: Zed"
        assert alice.name == "Zed"
        assert engine.get_state().contestant1.name == "Zed"

    def test_missing_contestant(self, engine):
        with pytest.raises(NullArgumentError) as excinfo:
            engine.rename_contestant(None, "Zed")
        assert excinfo.value.kind == ErrorKind.NULL_ARGUMENT

    def test_missing_name(self, engine, bob):
        with pytest.raises(NullArgumentError):
            engine.rename_contestant(bob, None)
        assert bob.name == "Bob"


class TestDropPiece:

    @pytest.mark.parametrize("column", range(COLS))
    def test_drop_grows_only_the_target_column(self, engine, play, column):
        play(engine, [(column + 1) % COLS])
        before = engine.get_state()

        result = engine.drop_piece(column)

        assert result.ok
        assert result.column == column
        after = result.match
        for col in range(COLS):
            expected = before.column_height(col) + (1 if col == column else 0)
            assert after.column_height(col) == expected

    def test_piece_lands_in_lowest_empty_row(self, engine, play):
        play(engine, [4, 4])
        result = engine.drop_piece(4)
        assert result.match.last_drop == (ROWS - 3, 4)
        assert result.match.cell(ROWS - 3, 4) == Cell.RED

    @pytest.mark.parametrize("column", [-1, COLS, 100, "3", 2.5, None, True])
    def test_invalid_column(self, engine, column):
        before = engine.get_state()
        result = engine.drop_piece(column)
        assert result.error == ErrorKind.INVALID_COLUMN
        assert not result.ok
        assert snapshot_key(result.match) == snapshot_key(before)

    def test_numpy_integer_column_is_accepted(self, engine):
        assert engine.drop_piece(np.int64(2)).ok

    def test_full_column(self, engine, play, alice):
        play(engine, [0] * ROWS)
        before = engine.get_state()

        result = engine.drop_piece(0)

        assert result.error == ErrorKind.COLUMN_FULL
        assert snapshot_key(engine.get_state()) == snapshot_key(before)
        assert engine.active is alice
        with pytest.raises(ColumnFullError):
            result.raise_for_error()

    def test_turns_alternate(self, engine, play, alice, bob):
        assert engine.active is alice
        play(engine, [0])
        assert engine.active is bob
        play(engine, [0])
        assert engine.active is alice
        assert engine.get_state().cell(ROWS - 2, 0) == Cell.BLUE

    def test_accepted_result_does_not_raise(self, engine):
        result = engine.drop_piece(3)
        assert result.raise_for_error() is result


class TestOutcome:

    def test_bottom_row_win(self, engine, play, alice):
        # Red fills row 5 columns 0-3 while Blue stacks on top
        result = play(engine, [0, 0, 1, 1, 2, 2, 3])
        match = result.match

        assert match.result == GameResult.WON
        assert match.terminal
        assert engine.get_winner() is alice
        assert match.winner is alice
        assert match.active is alice
        assert match.winning_line == [(5, 0), (5, 1), (5, 2), (5, 3)]
        assert engine.get_outcome() == GameResult.WON

    def test_vertical_win_for_second_contestant(self, engine, play, bob):
        play(engine, [0, 1, 0, 1, 0, 1, 2, 1])
        assert engine.get_winner() is bob
        assert engine.get_winner().color == Cell.BLUE
        assert engine.active is bob

    def test_diagonal_down_left_win(self, engine, play, alice):
        result = play(engine, [0, 1, 1, 2, 2, 3, 2, 3, 3, 6, 3])
        assert result.match.last_drop == (2, 3)
        assert engine.get_winner() is alice
        assert sorted(result.match.winning_line) == [(2, 3), (3, 2), (4, 1), (5, 0)]

    def test_diagonal_down_right_win(self, engine, play, alice):
        play(engine, [6, 5, 5, 4, 4, 3, 4, 3, 3, 0, 3])
        assert engine.get_winner() is alice
        assert sorted(engine.get_state().winning_line) == [(2, 3), (3, 4), (4, 5), (5, 6)]

    def test_no_winner_while_continuing(self, engine, play):
        play(engine, [0, 1, 2])
        assert engine.get_outcome() == GameResult.CONTINUING
        assert engine.get_winner() is None

    def test_full_grid_without_runs_is_a_draw(self, engine, play, draw_sequence, bob):
        match = play(engine, draw_sequence).match

        assert match.result == GameResult.DRAWN
        assert match.terminal
        assert match.moves_made == ROWS * COLS
        assert engine.get_winner() is None
        # Blue made the last drop and the pointer stays on it
        assert match.active is bob
        assert engine.valid_columns() == []

    def test_no_moves_after_a_win(self, engine, play, alice):
        play(engine, [0, 0, 1, 1, 2, 2, 3])
        before = engine.get_state()

        for column in range(COLS):
            assert engine.drop_piece(column).error == ErrorKind.MATCH_FINISHED
        assert snapshot_key(engine.get_state()) == snapshot_key(before)
        assert engine.active is alice

    def test_checks_run_in_order_after_the_match_ends(self, engine, play):
        # Column 0 is full and Red completes row 5 on the last drop
        play(engine, [0, 0, 0, 0, 0, 0, 1, 6, 2, 6, 3])
        assert engine.is_game_over()

        assert engine.drop_piece(7).error == ErrorKind.INVALID_COLUMN
        assert engine.drop_piece(0).error == ErrorKind.COLUMN_FULL
        assert engine.drop_piece(1).error == ErrorKind.MATCH_FINISHED


class TestState:

    def test_snapshot_grid_is_a_copy(self, engine, play):
        play(engine, [3])
        snapshot = engine.get_state()
        snapshot.grid[:, :] = Cell.BLUE.value

        fresh = engine.get_state()
        assert fresh.column_height(3) == 1
        assert fresh.cell(0, 0) == Cell.EMPTY

    def test_result_snapshot_is_a_copy(self, engine):
        result = engine.drop_piece(2)
        result.match.grid[5, 2] = Cell.EMPTY.value
        assert engine.get_state().cell(5, 2) == Cell.RED

    def test_snapshot_fields_cannot_be_reassigned(self, engine, bob):
        match = engine.get_state()
        with pytest.raises(dataclasses.FrozenInstanceError):
            match.active = bob
        assert engine.active is not bob

    @pytest.mark.parametrize("attribute, value", [
        ("is_automated", True),
        ("color", Cell.RED),
        ("name", "Mallory"),
    ])
    def test_contestants_change_only_through_the_engine(self, engine, bob, attribute, value):
        with pytest.raises(AttributeError):
            setattr(engine.get_state().contestant2, attribute, value)

        engine.drop_piece(0)
        engine.drop_piece(0)

        assert not bob.is_automated
        assert bob.color == Cell.BLUE
        assert bob.name == "Bob"
        assert engine.get_state().cell(ROWS - 2, 0) == Cell.BLUE

    def test_render(self, engine, play):
        play(engine, [0, 1])
        assert engine.render().splitlines()[ROWS - 1] == "@ # . . . . ."


class TestReset:

    def test_reset_after_moves(self, engine, play, alice):
        play(engine, [0, 0, 1, 1, 2, 2, 3])
        match = engine.reset()

        assert np.all(match.grid == Cell.EMPTY.value)
        assert match.result == GameResult.CONTINUING
        assert not match.terminal
        assert match.last_drop is None
        assert match.winner is None
        assert match.active is match.contestant1
        assert match.contestant1 is not alice
        assert match.contestant1.name == ""
        assert match.contestant1.color == Cell.RED
        assert match.contestant2.color == Cell.BLUE

    def test_reset_keeps_constructor_mode(self, alice, bob):
        engine = Engine(GameMode.HUMAN_VS_AUTOMATED, alice, bob, seed=1)
        match = engine.reset()
        assert match.mode == GameMode.HUMAN_VS_AUTOMATED
        assert not match.contestant1.is_automated
        assert match.contestant2.is_automated

    def test_reset_returns_to_initial_mode(self, alice, bob):
        engine = Engine(GameMode.HUMAN_VS_HUMAN, alice, bob, seed=1)
        engine.initialize(GameMode.AUTOMATED_VS_AUTOMATED)
        assert engine.mode == GameMode.AUTOMATED_VS_AUTOMATED

        match = engine.reset()

        assert match.mode == GameMode.HUMAN_VS_HUMAN
        assert not match.contestant1.is_automated
        assert not match.contestant2.is_automated

    def test_reset_allows_play_again(self, engine, play):
        play(engine, [0, 0, 1, 1, 2, 2, 3])
        engine.reset()
        assert engine.drop_piece(3).ok


class TestAutomatedMoves:

    def test_column_argument_is_ignored(self, alice, bob, scripted_rng):
        engine = Engine(GameMode.HUMAN_VS_AUTOMATED, alice, bob, rng=scripted_rng([5]))
        engine.drop_piece(0)

        result = engine.drop_piece(0)

        assert result.column == 5
        assert result.match.cell(ROWS - 1, 5) == Cell.BLUE
        assert engine.active is alice

    def test_full_columns_are_rerolled(self, play, scripted_rng):
        rng = scripted_rng([0] * ROWS + [0, 0, 4])
        engine = Engine(GameMode.AUTOMATED_VS_AUTOMATED, rng=rng)
        play(engine, [3] * ROWS)
        assert engine.is_column_full(0)

        result = engine.drop_piece(3)

        assert result.column == 4
        assert rng.calls == ROWS + 3
        assert result.match.column_height(0) == ROWS

    def test_caller_column_is_still_validated(self, scripted_rng):
        rng = scripted_rng([2])
        engine = Engine(GameMode.AUTOMATED_VS_AUTOMATED, rng=rng)
        assert engine.drop_piece(-1).error == ErrorKind.INVALID_COLUMN
        assert rng.calls == 0

    def test_seeded_matches_are_reproducible(self):
        def run(seed):
            engine = Engine(GameMode.AUTOMATED_VS_AUTOMATED, seed=seed)
            columns = []
            while not engine.is_game_over():
                result = engine.drop_piece(engine.valid_columns()[0])
                assert result.ok
                columns.append(result.column)
            return columns, engine.get_outcome()

        assert run(99) == run(99)

    @pytest.mark.parametrize("seed", range(10))
    def test_automated_matches_always_finish(self, seed):
        engine = Engine(GameMode.AUTOMATED_VS_AUTOMATED, seed=seed)
        for _ in range(ROWS * COLS):
            if engine.is_game_over():
                break
            assert engine.drop_piece(engine.valid_columns()[0]).ok
        assert engine.is_game_over()
        match = engine.get_state()
        if match.result == GameResult.WON:
            assert match.winner is match.active
            assert all(match.cell(r, c) == match.winner.color for r, c in match.winning_line)
