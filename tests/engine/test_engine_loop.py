"""Tests for the ArcadeEngine loop, callbacks, key dispatch and clear()."""

import pytest

from cabinet.engine import ArcadeEngine, EngineState, Key


class TestConstruction:

    def test_creates_canvas_when_none_given(self, engine, host):
        assert engine.canvas is host.panels["ArcadeCanvas"]
        assert engine.canvas.parent is None
        assert engine.canvas.style["width"] == 648.0
        assert engine.canvas.style["height"] == 376.0

    def test_uses_given_canvas(self, host):
        canvas = host.create_panel(None, "MyCanvas")
        engine = ArcadeEngine(host, canvas=canvas)
        assert engine.canvas is canvas
        assert "ArcadeCanvas" not in host.panels

    def test_rejects_non_positive_tick_interval(self, host):
        with pytest.raises(ValueError):
            ArcadeEngine(host, tick_interval=0)

    def test_starts_idle(self, engine):
        assert engine.state is EngineState.IDLE
        assert not engine.is_open
        assert not engine.is_active
        assert not engine.loop_armed


class TestPlayAndTick:

    def test_play_runs_first_tick_immediately(self, engine):
        seen = []
        engine.on_update(seen.append)
        engine.play()
        assert seen == [0.0]
        assert engine.tick_count == 1
        assert engine.loop_armed
        assert engine.state is EngineState.RUNNING

    def test_tick_rearms_every_interval(self, engine, host):
        seen = []
        engine.on_update(seen.append)
        engine.play()
        host.advance(160)

        assert engine.tick_count == 11
        assert seen[1:] == [pytest.approx(0.016)] * 10
        assert host.scheduler.queued_task_count == 1

    def test_start_callbacks_fire_on_every_play(self, engine):
        calls = []
        engine.on_start(lambda: calls.append(engine.state))
        engine.play()
        engine.play()
        assert calls == [EngineState.RUNNING, EngineState.RUNNING]
        assert engine.start_callback_count == 1

    def test_entities_rendered_after_update_callbacks(self, engine, host):
        obj = engine.create_game_object("mover")
        engine.on_update(lambda dt: obj.move(1000 * dt, 0))
        engine.play()
        host.advance(16)
        assert obj.panel.raw_style["position"] == "16.0px 0.0px 0.0px"

    def test_callback_may_clear_engine_mid_tick(self, engine, host):
        later = []
        engine.on_update(lambda dt: engine.clear())
        engine.on_update(later.append)
        engine.play()
        # Snapshot iteration: the second callback still ran on the first tick
        assert later == [0.0]
        host.advance(64)
        assert later == [0.0]
        assert not engine.loop_armed


class TestStop:

    def test_stop_ends_loop_at_next_tick(self, engine, host):
        engine.play()
        engine.stop()
        assert engine.state is EngineState.STOPPING
        assert engine.is_open
        assert not engine.is_active
        assert engine.loop_armed

        host.advance(16)
        assert not engine.loop_armed
        assert engine.state is EngineState.OPEN
        assert host.scheduler.queued_task_count == 0

    def test_no_updates_after_stop(self, engine, host):
        seen = []
        engine.on_update(seen.append)
        engine.play()
        engine.stop()
        host.advance(100)
        assert seen == [0.0]

    def test_play_while_loop_armed_starts_no_second_loop(self, engine, host):
        engine.play()
        engine.stop()
        engine.play()
        assert engine.tick_count == 1
        assert host.scheduler.queued_task_count == 1

        host.advance(160)
        assert engine.tick_count == 11
        assert host.scheduler.queued_task_count == 1

    def test_play_after_loop_ended_restarts_it(self, engine, host):
        engine.play()
        engine.stop()
        host.advance(32)
        assert not engine.loop_armed

        host.advance(5000)
        engine.play()
        assert engine.loop_armed
        seen = []
        engine.on_update(seen.append)
        host.advance(16)
        # The stall while stopped is not reported as dt
        assert seen == [pytest.approx(0.016)]


class TestOpenAndPause:

    def test_open_close_when_idle(self, engine):
        engine.set_open(True)
        assert engine.state is EngineState.OPEN
        engine.set_open(False)
        assert engine.state is EngineState.IDLE

    def test_hiding_running_game_pauses_updates(self, engine, host):
        seen = []
        engine.on_update(seen.append)
        engine.play()

        engine.set_open(False)
        assert engine.state is EngineState.PAUSED
        assert engine.is_active
        host.advance(48)
        assert seen == [0.0]
        assert engine.loop_armed

        engine.set_open(True)
        assert engine.state is EngineState.RUNNING
        host.advance(16)
        assert seen == [0.0, pytest.approx(0.016)]

    def test_stop_while_paused_goes_idle(self, engine, host):
        engine.play()
        engine.set_open(False)
        engine.stop()
        assert engine.state is EngineState.IDLE
        host.advance(16)
        assert not engine.loop_armed


class TestKeys:

    def test_key_callback_receives_key(self, engine, host):
        pressed = []
        engine.on_key_press(Key.W, pressed.append)
        host.press("key_W")
        assert pressed == [Key.W]

    def test_host_binding_registered_once_per_key(self, engine, host):
        first, second = [], []
        engine.on_key_press(Key.SPACE, first.append)
        engine.on_key_press(Key.SPACE, second.append)
        assert len(host.key_binds["key_Space"]) == 1

        host.press("key_Space")
        assert first == [Key.SPACE]
        assert second == [Key.SPACE]

    def test_bound_keys(self, engine):
        engine.on_key_press(Key.A, lambda key: None)
        engine.on_key_press(Key.D, lambda key: None)
        assert set(engine.bound_keys) == {Key.A, Key.D}

    def test_unbound_key_ignored(self, engine, host):
        assert host.press("key_Q") == 0

    def test_key_from_host_name(self):
        assert Key.from_host_name("key_Escape") is Key.ESCAPE
        with pytest.raises(ValueError):
            Key.from_host_name("key_Q")


class TestClear:

    def test_clear_empties_everything(self, engine, host):
        for name in ("a", "b", "c"):
            engine.create_game_object(name)
        engine.on_update(lambda dt: None)
        engine.on_start(lambda: None)
        engine.on_key_press(Key.W, lambda key: None)
        engine.play()

        engine.clear()

        assert engine.game_objects == ()
        assert engine.update_callback_count == 0
        assert engine.start_callback_count == 0
        assert engine.bound_keys == ()
        assert engine.state is EngineState.IDLE
        assert not engine.is_open
        assert not engine.is_active
        assert engine.focused_object is None

    def test_host_binding_survives_clear_with_empty_table(self, engine, host):
        pressed = []
        engine.on_key_press(Key.W, pressed.append)
        engine.clear()

        assert host.press("key_W") == 1
        assert pressed == []

        engine.on_key_press(Key.W, pressed.append)
        assert len(host.key_binds["key_W"]) == 1
        host.press("key_W")
        assert pressed == [Key.W]

    def test_clear_destroys_back_to_front(self, engine, monkeypatch):
        objs = [engine.create_game_object(str(i)) for i in range(3)]
        order = []
        original = engine.destroy_object

        def recording(game_object):
            order.append(game_object.id)
            original(game_object)

        monkeypatch.setattr(engine, "destroy_object", recording)
        engine.clear()
        assert order == [objs[2].id, objs[1].id, objs[0].id]

    def test_clear_ends_running_loop(self, engine, host):
        engine.play()
        engine.clear()
        host.advance(16)
        assert not engine.loop_armed
        assert engine.state is EngineState.IDLE
