"""
Game constants and runtime settings for Tiny Thinkers
"""

import argparse
import logging
from dataclasses import dataclass
from typing import Optional

# Rounds
ROUNDS_PER_PHASE = 3
CHOICES_PER_ROUND = 4

# Narrative timings (seconds of game time)
THINKING_DELAY = 2.0        # AI "considers" the item
GUESSING_DELAY = 2.0        # wrong guess on screen before answers unlock
GUESS_SPEECH_DELAY = 0.5    # wrong guess spoken after the thinking tone
PRAISE_SPEECH_DELAY = 0.3
CORRECTION_DELAY = 4.0      # correction shown before the next round
PHASE_WRAPUP_DELAY = 4.0    # celebration before the phase is handed back
NEXT_PHASE_DELAY = 5.0      # pause between training phases
STAGE_SPEECH_DELAY = 0.2
CONTINUE_SPEECH_DELAY = 0.3
JOURNEY_SPEECH_DELAY = 0.5
CELEBRATION_SPEECH_DELAY = 1.0
MAZE_HINT_DELAY = 3.0
HOME_SPEECH_DELAY = 0.5
HOME_COMPLETE_DELAY = 1.0
HELP_BARK_DELAY = 1.0
HELP_SPEECH_DELAY = 3.0

# Maze
MAZE_SIZE = 6
MAZE_START = (0, 0)
WALL = 1
PATH = 0
HOME = 2

# Speech defaults (multipliers like the browser speech API)
SPEECH_RATE = 1.1
SPEECH_PITCH = 1.4
SPEECH_VOLUME = 0.8
BASE_WORDS_PER_MINUTE = 175

# Window
SCREEN_WIDTH = 1000
SCREEN_HEIGHT = 720
FPS = 60
MAX_NAME_LENGTH = 20
GESTURE_COOLDOWN = 20  # frames between gesture moves

# Colors
BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
GRAY = (150, 150, 150)
DARK_GRAY = (50, 50, 50)
LIGHT_GREEN = (220, 252, 231)
GREEN = (74, 222, 128)
DARK_GREEN = (22, 163, 74)
RED = (239, 68, 68)
LIGHT_RED = (254, 226, 226)
YELLOW = (250, 204, 21)
ORANGE = (251, 146, 60)
BLUE = (59, 130, 246)
PURPLE = (168, 85, 247)
PINK = (244, 114, 182)
INDIGO = (129, 140, 248)
DOG_BROWN = (160, 110, 60)
DOG_DARK = (110, 70, 35)


@dataclass
class GameConfig:
    """Settings chosen on the command line"""
    muted: bool = False
    seed: Optional[int] = None
    fps: int = FPS
    speed: float = 1.0
    skip_intro: bool = False
    gestures: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_args(cls, argv=None):
        parser = build_parser()
        args = parser.parse_args(argv)
        return cls(
            muted=args.mute,
            seed=args.seed,
            fps=args.fps,
            speed=args.speed,
            skip_intro=args.skip_intro,
            gestures=args.gestures,
            log_level=args.log_level.upper(),
        )

    def configure_logging(self):
        logging.basicConfig(
            level=getattr(logging, self.log_level, logging.INFO),
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="tiny-thinkers",
        description="Help your AI friend learn to see, hear and think.",
    )
    parser.add_argument("--mute", action="store_true", help="start with sound and speech off")
    parser.add_argument("--seed", type=int, help="seed for question order and answer shuffling")
    parser.add_argument("--fps", type=int, default=FPS, help="frame rate cap")
    parser.add_argument("--speed", type=float, default=1.0,
                        help="multiplier for narrative timers (2.0 runs twice as fast)")
    parser.add_argument("--skip-intro", action="store_true", help="start at character select")
    parser.add_argument("--gestures", action="store_true",
                        help="steer the maze by pointing at the webcam")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "debug", "info", "warning", "error"])
    return parser
