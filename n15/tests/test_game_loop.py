"""
Tests for the game session state machine.

Tests:
- Transcript of human and machine turns
- Recoverable input faults (garbled, bad, unavailable)
- Win and draw endings
- Transport failures abort the session
- Board/hands partition after every move
"""

import logging
import random

import pytest

from ..bots import MovePolicy, MoveDecision, RandomPolicy
from ..engine_core import NumberSet, GamePhase, InvariantViolation
from ..session import GameSession, LoopState, Outcome, ConnectionClosed, BANNER
from ..session.players import parse_move
from .conftest import ScriptedReader, RecordingWriter, run, human_session


FULL_PROMPT = "I: \r\nyou: \r\navailable: 1 2 3 4 5 6 7 8 9\r\nmove: "


class ScriptedPolicy(MovePolicy):
    """Plays a fixed sequence of digits."""

    def __init__(self, digits):
        self.digits = list(digits)

    def select_move(self, board, own, opponent):
        return MoveDecision(digit=self.digits.pop(0), explanation="scripted")


class TestParseMove:
    """Tests for client answer parsing."""

    @pytest.mark.parametrize("answer,expected", [
        ("5", 5),
        (" 7 ", 7),
        ("+3", 3),
        ("0", 0),
        ("42", 42),
        ("0009", 9),
        ("18446744073709551615", 2 ** 64 - 1),
    ])
    def test_numbers(self, answer, expected):
        assert parse_move(answer) == expected

    @pytest.mark.parametrize("answer", [
        "", "abc", "-3", "5x", "4.0", "1 2",
        "18446744073709551616",
        "9" * 5000,
    ])
    def test_not_numbers(self, answer):
        assert parse_move(answer) is None


class TestHumanWins:
    """The client plays every turn against an idle machine."""

    def test_five_one_nine_wins(self):
        session, reader, writer = human_session(["5", "1", "9"])

        result = run(session.run())

        assert result.outcome == Outcome.WIN
        assert result.winner == "you"
        assert list(result.line) == [1, 5, 9]
        assert writer.text.endswith("move: \r\n1 5 9\r\nyou win\r\n")
        assert session.loop_state == LoopState.WON
        assert session.state.phase == GamePhase.WON

    def test_banner_then_first_prompt(self):
        session, reader, writer = human_session(["5", "1", "9"])
        run(session.run())

        assert writer.text.startswith(BANNER + "\r\n\r\n" + FULL_PROMPT)

    def test_prompt_shows_both_hands(self):
        session, reader, writer = human_session(["5", "1", "9"])
        run(session.run())

        assert "I: \r\nyou: 1 5\r\navailable: 2 3 4 6 7 8 9\r\nmove: " in writer.text

    def test_no_banner(self):
        session, reader, writer = human_session(["5", "1", "9"], banner=None)
        run(session.run())

        assert not writer.text.startswith(BANNER)


class TestInputFaults:
    """Bad client input is reported and the client is asked again."""

    def test_non_numeric_reprompts_same_state(self):
        session, reader, writer = human_session(["abc"])

        with pytest.raises(ConnectionClosed):
            run(session.run())

        assert "move: bad choice try again\r\n" + FULL_PROMPT in writer.text
        assert session.state.board == NumberSet.full()
        assert session.state.human.numbers.is_empty()

    def test_claimed_by_machine_is_unavailable(self):
        reader = ScriptedReader(["5"])
        writer = RecordingWriter()
        session = GameSession(reader, writer, rng=random.Random(0), human_first=False)

        with pytest.raises(ConnectionClosed):
            run(session.run())

        assert "I choose 5" in writer.lines
        assert "move: unavailable choice try again" in writer.lines
        assert session.state.board == {1, 2, 3, 4, 6, 7, 8, 9}
        assert session.state.machine.numbers == {5}
        assert session.state.human.numbers.is_empty()

    @pytest.mark.parametrize("answer", ["0", "10", "12345678901234567890"])
    def test_out_of_range_is_unavailable(self, answer):
        session, reader, writer = human_session([answer, "5", "1", "9"])
        result = run(session.run())

        assert "move: unavailable choice try again" in writer.lines
        assert result.winner == "you"

    def test_huge_number_is_bad_choice(self):
        session, reader, writer = human_session(["9" * 5000, "5", "1", "9"])
        result = run(session.run())

        assert "move: bad choice try again" in writer.lines
        assert result.winner == "you"
        assert result.moves[0] == ("you", 5)

    def test_already_own_digit_is_unavailable(self):
        session, reader, writer = human_session(["5", "5", "1", "9"])
        result = run(session.run())

        assert writer.text.count("unavailable choice try again") == 1
        assert result.moves == [("you", 5), ("I", 0), ("you", 1), ("I", 0), ("you", 9)]

    def test_garbled_input_reprompts(self, caplog):
        session, reader, writer = human_session([b"\xff\xfe", "5", "1", "9"])

        with caplog.at_level(logging.WARNING, logger="n15.session.players"):
            result = run(session.run())

        assert "move: \r\ngarbled input\r\n" + FULL_PROMPT in writer.text
        assert result.winner == "you"
        assert any("garbled input" in r.getMessage() for r in caplog.records)


class TestMachineTurns:
    """Tests for the automated player's turns."""

    def test_machine_win(self):
        reader = ScriptedReader(["1", "2"])
        writer = RecordingWriter()
        session = GameSession(
            reader, writer,
            policy=ScriptedPolicy([4, 5, 6]),
            human_first=False,
        )

        result = run(session.run())

        assert result.outcome == Outcome.WIN
        assert result.winner == "I"
        assert writer.lines[-4:] == ["", "4 5 6", "I win", ""]
        assert ["I choose 4", "I choose 5", "I choose 6"] == [
            line for line in writer.lines if line.startswith("I choose")
        ]
        # The machine never reads.
        assert reader.reads == 2

    def test_heuristic_opens_with_center(self):
        reader = ScriptedReader([])
        writer = RecordingWriter()
        session = GameSession(reader, writer, rng=random.Random(3), human_first=False)

        with pytest.raises(ConnectionClosed):
            run(session.run())

        assert "I choose 5" in writer.lines

    def test_policy_choosing_unavailable_digit_is_internal_fault(self):
        reader = ScriptedReader(["5"])
        writer = RecordingWriter()
        session = GameSession(
            reader, writer,
            policy=ScriptedPolicy([5]),
            human_first=True,
        )

        with pytest.raises(InvariantViolation):
            run(session.run())
        assert session.loop_state == LoopState.FAILED


class TestDraw:
    """Tests for the board running out."""

    def test_draw(self):
        reader = ScriptedReader(["2", "3", "6", "8", "9"])
        writer = RecordingWriter()
        session = GameSession(
            reader, writer,
            policy=ScriptedPolicy([5, 1, 4, 7]),
            human_first=True,
        )

        result = run(session.run())

        assert result.outcome == Outcome.DRAW
        assert result.winner is None
        assert result.line is None
        assert writer.text.endswith("move: \r\ndraw\r\n")
        assert session.state.board.is_empty()
        assert session.loop_state == LoopState.DRAW
        assert len(result.moves) == 9


class TestTransportFaults:
    """Transport failures end the session and propagate."""

    def test_write_failure_propagates(self):
        reader = ScriptedReader(["5"])
        writer = RecordingWriter(fail_after_flushes=0)
        session = GameSession(reader, writer, human_first=True)

        with pytest.raises(BrokenPipeError):
            run(session.run())

        assert session.loop_state == LoopState.FAILED
        assert reader.reads == 0

    def test_read_failure_propagates(self):
        session, reader, writer = human_session([ConnectionResetError("reset")])

        with pytest.raises(ConnectionResetError):
            run(session.run())

        assert session.loop_state == LoopState.FAILED
        assert "bad choice" not in writer.text


class TestSessionProperties:
    """Properties that hold for every game."""

    def test_coin_flip_uses_injected_rng(self):
        firsts = set()
        for seed in range(20):
            session = GameSession(ScriptedReader([]), RecordingWriter(), rng=random.Random(seed))
            assert session.state.human_to_move == (random.Random(seed).random() < 0.5)
            firsts.add(session.state.human_to_move)
        assert firsts == {True, False}

    @pytest.mark.parametrize("seed", range(15))
    def test_partition_and_alternation(self, seed):
        rng = random.Random(seed)
        noise = [rng.choice(["0", "10", "x", "", "3", "5", "7", "1", "9"]) for _ in range(30)]
        lines = noise + [str(d) for d in range(1, 10)]
        writer = RecordingWriter()
        session = GameSession(
            ScriptedReader(lines), writer,
            rng=random.Random(seed),
            policy=RandomPolicy(seed=seed),
        )

        result = run(session.run())

        state = session.state
        state.check_partition()
        hands = [set(state.board), set(state.human.numbers), set(state.machine.numbers)]
        assert set().union(*hands) == set(range(1, 10))
        assert sum(len(h) for h in hands) == 9

        names = [name for name, _ in result.moves]
        assert all(a != b for a, b in zip(names, names[1:]))
        assert sorted(d for _, d in result.moves) == sorted(
            set(range(1, 10)) - set(state.board)
        )

        if result.outcome == Outcome.WIN:
            winner = state.human if result.winner == "you" else state.machine
            assert sum(result.line) == 15
            assert all(d in winner.numbers for d in result.line)
        else:
            assert state.board.is_empty()
