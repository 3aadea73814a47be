"""
Farkle - Two-Player Game Tests

Tests for seating, turn order, human roll/bank actions and AI turns.
"""

import pytest

from src.engine.base import AIDifficulty, GameRules, GameStatus, TurnStatus
from src.engine.exceptions import (
    GameStateError,
    InvalidTurnActionError,
    NotYourTurnError,
)
from src.engine.game import GAME_CODE_LENGTH, FarkleGame, generate_game_code


def started_game(dice, rules=None, *, ai=False, difficulty=AIDifficulty.MEDIUM):
    game = FarkleGame(rules=rules or GameRules(), dice_source=dice, code="ABC234")
    game.add_player("Alice")
    game.add_player("Computer", is_ai=ai, ai_difficulty=difficulty)
    game.start()
    return game


class TestGameCode:
    def test_length_and_alphabet(self):
        for _ in range(50):
            code = generate_game_code()
            assert len(code) == GAME_CODE_LENGTH
            assert not set(code) & set("OI01")
            assert code.isalnum()
            assert code == code.upper()

    def test_generated_when_missing(self):
        assert len(FarkleGame().code) == GAME_CODE_LENGTH


class TestSeating:
    """Tests for adding players and starting the game."""

    def test_new_game_waits_for_players(self):
        game = FarkleGame()
        assert game.status is GameStatus.WAITING_FOR_PLAYERS
        assert game.current_player is None
        assert game.can_accept_players()

    def test_turn_order_assigned(self):
        game = FarkleGame()
        first = game.add_player("Alice")
        second = game.add_player("Bob")
        assert (first.turn_order, second.turn_order) == (1, 2)
        assert game.is_full()

    def test_third_player_rejected(self):
        game = FarkleGame()
        game.add_player("Alice")
        game.add_player("Bob")
        with pytest.raises(GameStateError, match="full or already started"):
            game.add_player("Carol")

    def test_blank_name_rejected(self):
        with pytest.raises(ValueError, match="cannot be empty"):
            FarkleGame().add_player("  ")

    def test_start_needs_two_players(self):
        game = FarkleGame()
        game.add_player("Alice")
        with pytest.raises(GameStateError, match="without 2 players"):
            game.start()

    def test_start_twice_raises(self, scripted_dice):
        game = started_game(scripted_dice([]))
        with pytest.raises(GameStateError, match="Cannot start a game that is playing"):
            game.start()

    def test_first_seat_goes_first(self, scripted_dice):
        game = started_game(scripted_dice([]))
        alice, bob = game.players
        assert game.status is GameStatus.IN_PROGRESS
        assert game.current_player is alice
        assert alice.is_current_turn and not bob.is_current_turn
        assert game.can_player_act(alice.player_id)
        assert not game.can_player_act(bob.player_id)
        assert game.opponent_of(alice.player_id) is bob

    def test_ai_seat_uses_game_default_difficulty(self):
        game = FarkleGame(default_ai_difficulty=AIDifficulty.HARD)
        assert game.add_player("Computer", is_ai=True).ai_difficulty is AIDifficulty.HARD

    def test_explicit_difficulty_overrides_default(self):
        game = FarkleGame(default_ai_difficulty=AIDifficulty.HARD)
        bot = game.add_player("Computer", is_ai=True, ai_difficulty=AIDifficulty.EASY)
        assert bot.ai_difficulty is AIDifficulty.EASY

    def test_seat_scores_share_game_rules(self):
        rules = GameRules(on_board_minimum=300)
        player = FarkleGame(rules=rules).add_player("Alice")
        assert player.score.rules is rules


class TestHumanTurns:
    """Tests for roll and bank."""

    def test_roll_then_bank(self, scripted_dice):
        dice = scripted_dice([(1, 2, 3, 4, 6, 6), (1, 1, 1, 2, 3)])
        game = started_game(dice)
        alice, bob = game.players

        first = game.roll(alice.player_id)
        assert first.current_turn_score == 100
        assert first.dice_available == 5
        assert first.can_continue

        second = game.roll(alice.player_id)
        assert second.current_turn_score == 1100
        assert second.dice_available == 2
        assert dice.requested == [6, 5]

        outcome = game.bank(alice.player_id)
        assert outcome.points_banked == 1100
        assert outcome.new_total_score == 1100
        assert outcome.is_on_board
        assert not outcome.has_won
        assert outcome.next_player_id == bob.player_id
        assert game.current_player is bob
        assert game.turns[0].outcome is TurnStatus.BANKED

    def test_small_first_bank_is_allowed(self, scripted_dice):
        game = started_game(scripted_dice([(5, 2, 3, 4, 6, 6)]))
        alice = game.players[0]
        game.roll(alice.player_id)

        outcome = game.bank(alice.player_id)
        assert outcome.new_total_score == 50
        assert not outcome.is_on_board

    def test_farkle_passes_turn(self, scripted_dice):
        dice = scripted_dice([(1, 1, 1, 2, 3, 4), (2, 3, 4)])
        game = started_game(dice)
        alice, bob = game.players

        game.roll(alice.player_id)
        outcome = game.roll(alice.player_id)

        assert outcome.roll.is_farkle
        assert outcome.turn_ended
        assert not outcome.can_continue
        assert outcome.current_turn_score == 0
        assert alice.score.total_score == 0
        assert game.current_player is bob
        assert game.current_turn is None
        assert game.turns[0].outcome is TurnStatus.FARKLED

    def test_hot_dice_makes_six_available(self, scripted_dice):
        game = started_game(scripted_dice([(1, 2, 3, 4, 5, 6)]))
        outcome = game.roll(game.players[0].player_id)
        assert outcome.roll.is_hot_dice
        assert outcome.dice_available == 6

    def test_explicit_dice_count(self, scripted_dice):
        dice = scripted_dice([(1, 5, 2)])
        game = started_game(dice)
        outcome = game.roll(game.players[0].player_id, dice_count=3)
        assert dice.requested == [3]
        assert outcome.current_turn_score == 150

    @pytest.mark.parametrize("count", [0, 7])
    def test_illegal_dice_count(self, scripted_dice, count):
        dice = scripted_dice([])
        game = started_game(dice)
        with pytest.raises(ValueError, match="between 1 and 6"):
            game.roll(game.players[0].player_id, dice_count=count)
        assert dice.requested == []
        assert game.current_turn is None
        assert game.turns == []

    def test_wrong_player_cannot_roll(self, scripted_dice):
        game = started_game(scripted_dice([]))
        with pytest.raises(NotYourTurnError, match="not your turn"):
            game.roll(game.players[1].player_id)

    def test_wrong_player_cannot_bank(self, scripted_dice):
        game = started_game(scripted_dice([(1, 2, 3, 4, 6, 6)]))
        game.roll(game.players[0].player_id)
        with pytest.raises(NotYourTurnError):
            game.bank(game.players[1].player_id)

    def test_bank_before_rolling_raises(self, scripted_dice):
        game = started_game(scripted_dice([]))
        with pytest.raises(InvalidTurnActionError, match="No points to bank"):
            game.bank(game.players[0].player_id)

    def test_unknown_player_raises(self, scripted_dice):
        game = started_game(scripted_dice([]))
        with pytest.raises(GameStateError, match="Player not found"):
            game.roll("not-a-player")

    def test_roll_before_start_raises(self):
        game = FarkleGame()
        player = game.add_player("Alice")
        with pytest.raises(GameStateError, match="not in progress"):
            game.roll(player.player_id)

    def test_no_dice_left_without_hot_dice(self, scripted_dice):
        rules = GameRules(hot_dice_enabled=False)
        game = started_game(scripted_dice([(1, 2, 3, 4, 5, 6)]), rules)
        alice = game.players[0]
        game.roll(alice.player_id)
        with pytest.raises(InvalidTurnActionError, match="No dice remaining"):
            game.roll(alice.player_id)


class TestWinning:
    def test_bank_reaching_target_wins(self, scripted_dice, quick_rules):
        game = started_game(scripted_dice([(1, 1, 1, 2, 3, 4)]), quick_rules)
        alice = game.players[0]
        game.roll(alice.player_id)
        outcome = game.bank(alice.player_id)

        assert outcome.has_won
        assert outcome.next_player_id is None
        assert game.status is GameStatus.COMPLETED
        assert game.winner_id == alice.player_id
        assert game.current_player is None
        assert not any(p.is_current_turn for p in game.players)

    def test_no_actions_after_game_over(self, scripted_dice, quick_rules):
        game = started_game(scripted_dice([(1, 1, 1, 2, 3, 4)]), quick_rules)
        alice, bob = game.players
        game.roll(alice.player_id)
        game.bank(alice.player_id)
        with pytest.raises(GameStateError, match="not in progress"):
            game.roll(bob.player_id)


class TestAITurns:
    """Tests for play_ai_turn."""

    def test_ai_turn_after_human_banks(self, scripted_dice):
        dice = scripted_dice([
            (5, 2, 3, 4, 6, 6),
            (1, 1, 1, 2, 3, 4),
        ])
        game = started_game(dice, ai=True, difficulty=AIDifficulty.EASY)
        alice, computer = game.players
        game.roll(alice.player_id)
        game.bank(alice.player_id)

        assert game.is_ai_turn
        result = game.play_ai_turn()

        assert result.points_scored == 1000
        assert computer.score.total_score == 1000
        assert game.current_player is alice
        assert game.turns[-1].turn_number == 2

    def test_ai_farkle_passes_turn(self, scripted_dice):
        dice = scripted_dice([(5, 2, 3, 4, 6, 6), (2, 2, 3, 4, 6, 6)])
        game = started_game(dice, ai=True)
        alice = game.players[0]
        game.roll(alice.player_id)
        game.bank(alice.player_id)

        result = game.play_ai_turn()
        assert result.farkled
        assert game.current_player is alice

    def test_ai_can_win(self, scripted_dice, quick_rules):
        dice = scripted_dice([
            (2, 3, 4, 6, 6, 2),
            (1, 1, 1, 2, 3, 4),
        ])
        game = started_game(dice, quick_rules, ai=True)
        alice, computer = game.players
        game.roll(alice.player_id)

        result = game.play_ai_turn()
        assert result.game_won
        assert game.status is GameStatus.COMPLETED
        assert game.winner_id == computer.player_id

    def test_human_seat_cannot_be_played_by_ai(self, scripted_dice):
        game = started_game(scripted_dice([]))
        with pytest.raises(GameStateError, match="not an AI player"):
            game.play_ai_turn()

    def test_ai_flag_not_name_decides(self, scripted_dice):
        dice = scripted_dice([(5, 2, 3, 4, 6, 6)])
        game = FarkleGame(dice_source=dice)
        game.add_player("Alice")
        game.add_player("AI (Hard)")
        game.start()
        game.roll(game.players[0].player_id)
        game.bank(game.players[0].player_id)

        assert not game.is_ai_turn
        with pytest.raises(GameStateError, match="not an AI player"):
            game.play_ai_turn()

    def test_ai_turn_requires_game_in_progress(self):
        with pytest.raises(GameStateError, match="not in progress"):
            FarkleGame().play_ai_turn()


class TestAbandon:
    def test_abandon_mid_turn(self, scripted_dice):
        game = started_game(scripted_dice([(1, 2, 3, 4, 6, 6)]))
        alice = game.players[0]
        game.roll(alice.player_id)
        turn = game.current_turn

        game.abandon()
        assert game.status is GameStatus.ABANDONED
        assert turn.status is TurnStatus.ABANDONED
        assert alice.score.current_turn_score == 0
        assert game.current_player is None

    def test_abandon_twice_raises(self):
        game = FarkleGame()
        game.abandon()
        with pytest.raises(GameStateError, match="already abandoned"):
            game.abandon()


class TestState:
    def test_state_snapshot(self, scripted_dice):
        game = started_game(scripted_dice([(1, 2, 3, 4, 6, 6)]), ai=True, difficulty=AIDifficulty.HARD)
        alice, computer = game.players
        game.roll(alice.player_id)

        state = game.state()
        assert state["code"] == "ABC234"
        assert state["status"] == "playing"
        assert state["winning_score"] == 5000
        assert state["current_player_id"] == alice.player_id
        assert state["winner_id"] is None
        assert state["players"][0]["current_turn_score"] == 100
        assert state["players"][0]["ai_difficulty"] is None
        assert state["players"][1]["is_ai"] is True
        assert state["players"][1]["ai_difficulty"] == "hard"
        assert state["current_turn"]["roll_history"] == [[1, 2, 3, 4, 6, 6]]

    def test_state_before_start(self):
        state = FarkleGame(code="XYZ789").state()
        assert state["status"] == "waiting"
        assert state["current_player_id"] is None
        assert state["current_turn"] is None
        assert state["players"] == []
