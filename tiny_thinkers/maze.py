"""
Rescue maze: move the lost dog one cell at a time until it reaches home
"""

import logging
from enum import Enum

from . import cues
from .config import HOME, HOME_COMPLETE_DELAY, HOME_SPEECH_DELAY, MAZE_START, WALL
from .content import MAZE_LAYOUT

logger = logging.getLogger(__name__)


class Direction(Enum):
    NONE = 0
    UP = 1
    DOWN = 2
    LEFT = 3
    RIGHT = 4


DELTAS = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


class MoveResult(Enum):
    MOVED = "moved"
    BLOCKED = "blocked"
    HOME = "home"
    IGNORED = "ignored"


class MazeEngine:
    """Validates each step of the player's route through a fixed grid"""

    def __init__(self, scheduler, audio, layout=MAZE_LAYOUT, start=MAZE_START,
                 on_home=None, group="maze"):
        self.layout = layout
        self.size = len(layout)
        self.start = start
        self.scheduler = scheduler
        self.audio = audio
        self.on_home = on_home
        self.group = group

        self.x, self.y = start
        self.moves = 0
        self.solved = False
        self.facing = Direction.RIGHT

    @property
    def position(self):
        return (self.x, self.y)

    def cell(self, x, y):
        return self.layout[y][x]

    def move(self, direction):
        """Try to move one cell in direction"""
        if isinstance(direction, str):
            direction = Direction[direction.upper()]
        if self.solved or direction not in DELTAS:
            return MoveResult.IGNORED

        self.audio.play(cues.MOVE)

        dx, dy = DELTAS[direction]
        new_x = max(0, min(self.size - 1, self.x + dx))
        new_y = max(0, min(self.size - 1, self.y + dy))
        # A press into the border lands on the current cell and still counts

        if self.cell(new_x, new_y) == WALL:
            self.audio.play(cues.INCORRECT)
            logger.debug("Wall at %s", (new_x, new_y))
            return MoveResult.BLOCKED

        self.x, self.y = new_x, new_y
        self.facing = direction
        self.moves += 1

        if self.cell(new_x, new_y) == HOME:
            self._reach_home()
            return MoveResult.HOME
        return MoveResult.MOVED

    def _reach_home(self):
        self.solved = True
        logger.info("Dog reached home in %d moves", self.moves)
        self.audio.play(cues.CELEBRATION)
        self.scheduler.schedule(
            HOME_SPEECH_DELAY,
            lambda: self.audio.speak(
                "Hooray! The dog made it home safely! What an amazing rescue!",
                rate=1.2, pitch=1.5,
            ),
            self.group,
        )
        if self.on_home is not None:
            self.scheduler.schedule(HOME_COMPLETE_DELAY, self.on_home, self.group)
