"""Tests for ArcadeController, the menu layer."""

import pytest

from cabinet.config import CabinetSettings
from cabinet.controller import ArcadeController
from cabinet.engine import EngineState
from cabinet.games import GameState
from cabinet.logging import configure_logging
from games.GuidedOwl.game_mode import GuidedOwlMode
from games.Pong.game_mode import PongMode
from games.registry import GameRegistry, UnknownGameError
from games.Viper.game_mode import ViperMode


@pytest.fixture(scope="module")
def registry():
    return GameRegistry()


@pytest.fixture
def controller(engine, registry, rng):
    return ArcadeController(engine, registry, rng=rng)


class TestSelect:

    def test_games_in_menu_order(self, controller):
        assert controller.games == ["guidedowl", "pong", "viper"]

    def test_nothing_selected_initially(self, controller):
        assert controller.current is None
        assert controller.status_line() == "No game selected"

    def test_select_creates_instance(self, controller):
        assert isinstance(controller.select("viper"), ViperMode)
        assert isinstance(controller.select("Pong"), PongMode)
        assert isinstance(controller.select("guidedowl"), GuidedOwlMode)
        assert controller.current_slug == "guidedowl"

    def test_one_instance_per_game(self, controller):
        first = controller.select("pong")
        controller.select("viper")
        assert controller.select("pong") is first

    def test_reselecting_current_changes_nothing(self, controller, engine):
        controller.select("pong")
        controller.start()
        objects = engine.game_objects
        controller.select("pong")
        assert engine.game_objects == objects
        assert engine.state is EngineState.RUNNING

    def test_switching_clears_engine(self, controller, engine):
        controller.select("pong")
        controller.start()
        controller.select("viper")
        assert engine.game_objects == ()
        assert engine.update_callback_count == 0
        assert engine.bound_keys == ()
        assert engine.state is EngineState.IDLE

    def test_unknown_game(self, controller):
        with pytest.raises(UnknownGameError):
            controller.select("tetris")
        with pytest.raises(KeyError):
            controller.select("tetris")


class TestStart:

    def test_start_without_selection(self, controller, capsys):
        configure_logging(level='INFO')
        assert controller.start() is False
        assert "No game selected..." in capsys.readouterr().out

    def test_start_runs_selected_game(self, controller, engine):
        game = controller.select("viper")
        assert controller.start() is True
        assert game.state is GameState.PLAYING
        assert engine.state is EngineState.RUNNING
        assert engine.update_callback_count == 1

    def test_start_while_running_continues(self, controller, engine, capsys):
        controller.select("viper")
        controller.start()
        objects = engine.game_objects

        configure_logging(level='INFO')
        assert controller.start() is False
        assert "Continuing game..." in capsys.readouterr().out
        assert engine.game_objects == objects

    def test_restart_after_game_over(self, controller, engine, host):
        game = controller.select("guidedowl")
        controller.start()
        host.press("key_Escape")
        assert game.state is GameState.GAME_OVER
        host.advance(16)

        assert controller.start() is True
        assert game.state is GameState.PLAYING
        assert engine.update_callback_count == 1
        assert len(engine.game_objects) == 1

    def test_game_keys_do_not_leak_between_games(self, controller, host):
        pong = controller.select("pong")
        controller.start()
        viper = controller.select("viper")
        controller.start()

        host.press("key_S")
        assert viper.facing.name == "S"
        assert pong.player_paddle.data.move_direction == -1

    def test_settings_overrides_reach_game(self, engine, registry):
        settings = CabinetSettings(games={"pong": {"win_score": 3}})
        controller = ArcadeController(engine, registry, settings)
        assert controller.select("pong").config.win_score == 3


class TestMenu:

    def test_toggle_menu(self, controller, engine):
        assert controller.toggle_menu() is True
        assert engine.state is EngineState.OPEN
        assert controller.toggle_menu() is False
        assert engine.state is EngineState.IDLE

    def test_hiding_menu_pauses_game(self, controller, engine, host):
        game = controller.select("viper")
        controller.start()
        game.pickup.place(320, 304)

        controller.toggle_menu()
        assert engine.state is EngineState.PAUSED
        host.advance(500)
        assert game.moves == 0

        controller.toggle_menu()
        host.advance(500)
        assert game.moves > 0

    def test_canvas_click_reports_focus(self, controller, engine, host, capsys):
        controller.select("pong")
        controller.start()
        configure_logging(level='INFO')

        host.activate()
        assert "Canvas clicked" in capsys.readouterr().out

        ball = controller.current.ball
        host.hover(ball.panel)
        host.activate()
        assert str(ball) in capsys.readouterr().out

    def test_status_line(self, controller):
        controller.select("pong")
        controller.start()
        assert controller.status_line().startswith("Pong  0 : 0")
