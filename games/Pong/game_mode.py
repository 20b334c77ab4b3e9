"""Pong - paddle and ball against a simple AI.

The player paddle keeps moving in the last chosen direction. The AI
paddle chases the ball's height but ignores it inside a dead-zone around
its own centre. Every paddle hit bends the ball by where it struck the
paddle and makes it a little faster; a point resets it to base speed.
"""

import math
from dataclasses import dataclass
from typing import Optional

from cabinet.engine import GameObject, Key
from cabinet.games import BaseGame

from .config import PongConfig

UP = -1
DOWN = 1


@dataclass
class PaddleData:
    """Paddle attributes.

    ``move_direction`` is UP or DOWN: the last key for the player, the
    last chase direction for the AI.
    """
    move_direction: int = UP


@dataclass
class BallData:
    """Unit movement direction and scalar speed (pixels per nominal tick)."""
    dx: float = 1.0
    dy: float = 0.0
    speed: float = 0.0


def sign(value: float) -> float:
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


class PongMode(BaseGame):
    """Pong game mode. First to the win score with the required margin wins."""

    NAME = "Pong"
    DESCRIPTION = "Paddle and ball against a dead-zone AI."
    VERSION = "1.0.0"
    CONTROLS = ["W: paddle up", "S: paddle down"]
    CONFIG_MODEL = PongConfig
    LOGGER_NAME = 'pong'

    def __init__(self, engine, rng=None, config=None, **overrides):
        super().__init__(engine, rng=rng, config=config, **overrides)
        self.config: PongConfig
        self.player_score = 0
        self.ai_score = 0
        self.player_paddle: Optional[GameObject[PaddleData]] = None
        self.ai_paddle: Optional[GameObject[PaddleData]] = None
        self.ball: Optional[GameObject[BallData]] = None

    def get_score(self) -> int:
        return self.player_score

    # =========================================================================
    # Round setup
    # =========================================================================

    def _reset(self) -> None:
        cfg = self.config
        for game_object in (self.player_paddle, self.ai_paddle, self.ball):
            self._engine.destroy_object(game_object)
        self.player_score = 0
        self.ai_score = 0

        paddle_style = {
            "width": f"{cfg.paddle_width}px",
            "height": f"{cfg.paddle_height}px",
            "backgroundColor": cfg.paddle_color,
        }
        self.player_paddle = self._engine.create_game_object(
            "PlayerPaddle", paddle_style, PaddleData(UP)
        )
        self.ai_paddle = self._engine.create_game_object(
            "EnemyPaddle", paddle_style, PaddleData(UP)
        )
        self.player_paddle.place(cfg.player_paddle_x, cfg.paddle_start_y)
        self.ai_paddle.place(cfg.ai_paddle_x, cfg.paddle_start_y)

        self.ball = self._engine.create_game_object("Ball", {
            "width": f"{cfg.ball_size}px",
            "height": f"{cfg.ball_size}px",
            "backgroundColor": cfg.ball_color,
        }, BallData())
        self.reset_ball()

        self._engine.play()

        self._engine.on_update(self._update)
        self._engine.on_key_press(Key.W, self._make_steer(UP))
        self._engine.on_key_press(Key.S, self._make_steer(DOWN))

    def _make_steer(self, direction: int):
        def steer(key: Key) -> None:
            if self.player_paddle is not None:
                self.player_paddle.data.move_direction = direction
        return steer

    def reset_ball(self) -> None:
        """Centre the ball at base speed and launch it inside the cone.

        The angle is uniform within +/- half the cone from horizontal and
        the horizontal sign is a coin flip, so a launch is never vertical.
        """
        cfg = self.config
        half_cone = cfg.launch_cone_degrees / 2
        angle = math.radians(self._rng.random() * cfg.launch_cone_degrees - half_cone)
        horizontal = self._rng.choice((-1.0, 1.0))

        self.ball.data.dx = horizontal * math.cos(angle)
        self.ball.data.dy = -math.sin(angle)
        self.ball.data.speed = cfg.ball_speed
        self.ball.place(cfg.ball_start_x, cfg.ball_start_y)

    # =========================================================================
    # Per-tick logic
    # =========================================================================

    def _update(self, dt: float) -> None:
        if self._skip_tick(dt):
            return
        self.step(dt / self.config.nominal_tick)

    def step(self, scale: float = 1.0) -> None:
        """Advance one tick; ``scale`` is elapsed time in nominal ticks.

        Paddle contact is plain overlap with no cooldown, so a ball that is
        still inside the paddle on the next tick is deflected again and
        speeds up once per overlapping tick.
        """
        if not self.is_playing or self.ball is None:
            return
        cfg = self.config
        ball = self.ball

        self._move_paddle(self.player_paddle, self.player_paddle.data.move_direction, scale)

        ball.move(
            ball.data.speed * ball.data.dx * scale,
            ball.data.speed * ball.data.dy * scale,
        )

        self._move_ai(scale)
        self._bounce_off_walls()

        if self._check_scoring():
            if self._match_decided():
                self.game_over()
                return

        if self._overlaps(self.player_paddle):
            ball.data.dx = abs(ball.data.dx)
            self._deflect(self.player_paddle)
            ball.data.speed += cfg.ball_speed_increment
        elif self._overlaps(self.ai_paddle):
            ball.data.dx = -abs(ball.data.dx)
            self._deflect(self.ai_paddle)
            ball.data.speed += cfg.ball_speed_increment

    def _move_paddle(self, paddle: GameObject, direction: int, scale: float) -> None:
        paddle.move(0, direction * self.config.paddle_speed * scale)
        if paddle.position.y <= 0:
            paddle.position.y = 0
        elif paddle.position.y >= self.config.paddle_max_y:
            paddle.position.y = self.config.paddle_max_y

    def _move_ai(self, scale: float) -> None:
        paddle_center = self.ai_paddle.position.y + self.config.paddle_height / 2
        ball_y = self.ball.position.y
        if abs(ball_y - paddle_center) > self.config.ai_dead_zone:
            paddle = self.ai_paddle
            paddle.data.move_direction = UP if ball_y < paddle_center else DOWN
            self._move_paddle(paddle, paddle.data.move_direction, scale)

    def _bounce_off_walls(self) -> None:
        ball = self.ball
        if ball.position.y <= 0 and ball.data.dy < 0:
            ball.data.dy = -ball.data.dy
            ball.position.y = 0
        elif ball.position.y >= self.config.ball_max_y and ball.data.dy > 0:
            ball.data.dy = -ball.data.dy
            ball.position.y = self.config.ball_max_y

    def _check_scoring(self) -> bool:
        """Award a point if the ball left the field. Returns True on a point."""
        x = self.ball.position.x
        if x <= self.config.ball_out_left:
            self.ai_score += 1
            self.reset_ball()
            self.log.info("AI Scored! (%d)", self.ai_score)
            return True
        if x >= self.config.ball_out_right:
            self.player_score += 1
            self.reset_ball()
            self.log.info("Player Scored! (%d)", self.player_score)
            return True
        return False

    def _match_decided(self) -> bool:
        cfg = self.config
        leader = max(self.player_score, self.ai_score)
        return leader >= cfg.win_score and abs(self.player_score - self.ai_score) >= cfg.win_margin

    def _overlaps(self, paddle: GameObject) -> bool:
        cfg = self.config
        ball = self.ball.position
        pad = paddle.position
        return (
            ball.x < pad.x + cfg.paddle_width
            and ball.x + cfg.ball_size > pad.x
            and ball.y < pad.y + cfg.paddle_height
            and ball.y + cfg.ball_size > pad.y
        )

    def _deflect(self, paddle: GameObject) -> None:
        """Set the ball angle from where it struck the paddle.

        The centre sends it straight back; the paddle ends bend it by up
        to ``max_bounce_degrees``. Horizontal direction is kept.
        """
        cfg = self.config
        half = cfg.paddle_height / 2
        paddle_center = paddle.position.y + half
        ball_center = self.ball.position.y + cfg.ball_size / 2
        offset = max(-1.0, min(1.0, (ball_center - paddle_center) / half))

        angle = math.radians(offset * cfg.max_bounce_degrees)
        self.ball.data.dx = math.cos(angle) * sign(self.ball.data.dx)
        self.ball.data.dy = math.sin(angle)

    # =========================================================================
    # Reporting
    # =========================================================================

    @property
    def winner(self) -> Optional[str]:
        if not self._match_decided():
            return None
        return "player" if self.player_score > self.ai_score else "ai"

    def _game_over_lines(self):
        return [
            "Game over!",
            f"Player Score = {self.player_score}",
            f"AI Score = {self.ai_score}",
        ]

    def status_line(self) -> str:
        return f"{self.NAME}  {self.player_score} : {self.ai_score}  [{self._state.value}]"
