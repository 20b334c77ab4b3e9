"""Tests for the Pong game."""

import math

import pytest

from cabinet.engine import EngineState, Position
from cabinet.games import GameState
from games.Pong.game_mode import DOWN, UP, PongMode


@pytest.fixture
def game(engine, rng):
    game = PongMode(engine, rng=rng)
    assert game.reset_game() is True
    return game


def aim(game, x, y, dx, dy, speed=4.0):
    ball = game.ball
    ball.place(x, y)
    ball.data.dx = dx
    ball.data.dy = dy
    ball.data.speed = speed


class TestReset:

    def test_layout(self, game, engine):
        assert game.player_paddle.position == Position(60, 148)
        assert game.ai_paddle.position == Position(564, 148)
        assert game.ball.position == Position(320, 184)
        assert game.ball.data.speed == 4.0
        assert (game.player_score, game.ai_score) == (0, 0)
        assert engine.state is EngineState.RUNNING
        assert len(engine.game_objects) == 3

    def test_launch_stays_inside_cone(self, game):
        limit = math.cos(math.radians(45)) - 1e-9
        signs = set()
        for _ in range(200):
            game.reset_ball()
            data = game.ball.data
            assert abs(data.dx) >= limit
            assert math.hypot(data.dx, data.dy) == pytest.approx(1.0)
            signs.add(data.dx > 0)
        assert signs == {True, False}

    def test_reset_replaces_previous_objects(self, game, engine, host):
        old_ball = game.ball
        game.game_over()
        host.advance(16)
        engine.clear()
        game.reset_game()
        assert not old_ball.alive
        assert len(engine.game_objects) == 3


class TestPaddles:

    def test_keys_set_player_direction(self, game, host):
        host.press("key_S")
        assert game.player_paddle.data.move_direction == DOWN
        host.press("key_W")
        assert game.player_paddle.data.move_direction == UP

    def test_player_paddle_keeps_moving_and_clamps(self, game, host):
        aim(game, 320, 184, 0.0, 0.0)
        for _ in range(100):
            game.step()
        assert game.player_paddle.position.y == 0

        host.press("key_S")
        for _ in range(100):
            game.step()
        assert game.player_paddle.position.y == 292

    def test_ai_ignores_ball_inside_dead_zone(self, game):
        # AI centre is 148 + 40 = 188
        aim(game, 320, 195, 0.0, 0.0)
        game.step()
        assert game.ai_paddle.position.y == 148

    def test_ai_chases_ball_outside_dead_zone(self, game):
        aim(game, 320, 300, 0.0, 0.0)
        game.step()
        assert game.ai_paddle.position.y == 152
        assert game.ai_paddle.data.move_direction == DOWN

        aim(game, 320, 20, 0.0, 0.0)
        game.step()
        assert game.ai_paddle.position.y == 148
        assert game.ai_paddle.data.move_direction == UP

    def test_ai_keeps_last_direction_inside_dead_zone(self, game):
        aim(game, 320, 300, 0.0, 0.0)
        game.step()
        aim(game, 320, 200, 0.0, 0.0)
        game.step()
        assert game.ai_paddle.position.y == 152
        assert game.ai_paddle.data.move_direction == DOWN


class TestWalls:

    def test_bounce_off_top(self, game):
        aim(game, 320, 1, 0.0, -1.0)
        game.step()
        assert game.ball.data.dy == 1.0
        assert game.ball.position.y == 0

    def test_bounce_off_bottom(self, game):
        aim(game, 320, 364, 0.0, 1.0)
        game.step()
        assert game.ball.data.dy == -1.0
        assert game.ball.position.y == 366

    def test_vertical_direction_flips_only_at_walls(self, game):
        aim(game, 320, 100, 0.0, 1.0)
        previous = game.ball.data.dy
        flips = 0
        for _ in range(400):
            game.step()
            if game.ball.data.dy != previous:
                flips += 1
                assert game.ball.position.y in (0, 366)
                previous = game.ball.data.dy
        assert flips > 2


class TestScoring:

    def test_ai_scores_when_ball_leaves_left(self, game):
        aim(game, -7, 100, -1.0, 0.0, speed=6.5)
        game.step()
        assert (game.player_score, game.ai_score) == (0, 1)
        assert game.ball.position == Position(320, 184)
        assert game.ball.data.speed == 4.0

    def test_player_scores_when_ball_leaves_right(self, game):
        aim(game, 639, 100, 1.0, 0.0)
        game.step()
        assert (game.player_score, game.ai_score) == (1, 0)
        assert game.ball.position == Position(320, 184)

    def test_match_needs_seven_and_margin_of_two(self, game):
        game.player_score = 6
        game.ai_score = 6
        aim(game, 639, 100, 1.0, 0.0)
        game.step()
        assert game.player_score == 7
        assert game.state is GameState.PLAYING
        assert game.winner is None

        aim(game, 639, 100, 1.0, 0.0)
        game.step()
        assert game.player_score == 8
        assert game.state is GameState.GAME_OVER
        assert game.winner == "player"

    def test_ai_win_stops_engine(self, game, engine, host):
        game.player_score = 2
        game.ai_score = 6
        aim(game, -7, 100, -1.0, 0.0)
        game.step()
        assert game.winner == "ai"
        assert engine.state is EngineState.STOPPING
        host.advance(16)
        assert not engine.loop_armed


class TestPaddleContact:

    def test_centre_hit_returns_straight_and_faster(self, game):
        # Player paddle moves up 4 first: 148 -> 144, centre 184
        aim(game, 80, 180, -1.0, 0.0)
        game.step()
        assert game.ball.data.dx == pytest.approx(1.0)
        assert game.ball.data.dy == pytest.approx(0.0)
        assert game.ball.data.speed == pytest.approx(4.1)

    def test_overlap_on_consecutive_ticks_speeds_up_each_time(self, game):
        aim(game, 80, 180, -1.0, 0.0)
        game.step()
        # Ball at 80.1 is still inside the paddle (60..84)
        game.step()
        assert game.ball.data.dx > 0
        assert game.ball.data.speed == pytest.approx(4.2)

    def test_edge_hit_bends_by_max_angle(self, game):
        aim(game, 80, 222, -1.0, 0.0)
        game.step()
        # Ball centre 226 vs paddle centre 184: offset clamps to 1
        assert game.ball.data.dx == pytest.approx(math.cos(math.radians(60)))
        assert game.ball.data.dy == pytest.approx(math.sin(math.radians(60)))

    def test_ai_paddle_sends_ball_left(self, game):
        aim(game, 556, 184, 1.0, 0.0)
        game.step()
        assert game.ball.data.dx < 0
        assert game.ball.data.speed == pytest.approx(4.1)

    def test_no_contact_away_from_paddles(self, game):
        aim(game, 300, 100, -1.0, 0.0)
        game.step()
        assert game.ball.data.dx == -1.0
        assert game.ball.data.speed == 4.0


class TestTiming:

    def test_tick_scales_by_elapsed_time(self, game, host):
        aim(game, 320, 100, 1.0, 0.0)
        host.advance(16)
        assert game.ball.position.x == pytest.approx(324.0)
        host.advance(32)
        assert game.ball.position.x == pytest.approx(332.0)

    def test_stalled_tick_skipped(self, game):
        aim(game, 320, 100, 1.0, 0.0)
        game._update(2.0)
        assert game.ball.position == Position(320, 100)


def test_overrides(engine, rng):
    game = PongMode(engine, rng=rng, win_score=3, win_margin=1)
    game.reset_game()
    game.player_score = 2
    aim(game, 639, 100, 1.0, 0.0)
    game.step()
    assert game.state is GameState.GAME_OVER


class TestFieldSize:

    @pytest.fixture
    def wide(self, engine, rng):
        game = PongMode(engine, rng=rng, field_width=1000, field_height=600)
        assert game.reset_game() is True
        return game

    def test_layout_follows_field(self, wide):
        assert wide.player_paddle.position == Position(60, 260)
        assert wide.ai_paddle.position == Position(924, 260)
        assert wide.ball.position == Position(500, 296)

    def test_no_point_inside_wide_field(self, wide):
        aim(wide, 700, 100, 1.0, 0.0)
        wide.step()
        assert (wide.player_score, wide.ai_score) == (0, 0)
        assert wide.ball.position.x == pytest.approx(704.0)

    def test_goal_line_at_field_width(self, wide):
        aim(wide, 997, 100, 1.0, 0.0)
        wide.step()
        assert (wide.player_score, wide.ai_score) == (1, 0)
        assert wide.ball.position == Position(500, 296)

    def test_walls_and_paddle_clamp_follow_field(self, wide, host):
        aim(wide, 500, 588, 0.0, 1.0)
        wide.step()
        assert wide.ball.data.dy == -1.0
        assert wide.ball.position.y == 590

        host.press("key_S")
        for _ in range(200):
            wide.step()
        assert wide.player_paddle.position.y == 516
