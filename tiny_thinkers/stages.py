"""
Top-level stage machine

StageMachine owns all mutable game state: the active stage, the chosen
friend, training progress and whichever round or maze engine is running.
Presentation code forwards user events here and reads state back for drawing.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum

from . import cues
from .config import (
    CELEBRATION_SPEECH_DELAY,
    CONTINUE_SPEECH_DELAY,
    HELP_BARK_DELAY,
    HELP_SPEECH_DELAY,
    JOURNEY_SPEECH_DELAY,
    MAZE_HINT_DELAY,
    NEXT_PHASE_DELAY,
    ROUNDS_PER_PHASE,
    STAGE_SPEECH_DELAY,
)
from .content import POOLS, SCRIPTS, Phase, find_character
from .cues import NullAudio
from .maze import MazeEngine, MoveResult
from .randomizer import new_session_set
from .rounds import AnswerResult, RoundEngine
from .scheduler import Scheduler

logger = logging.getLogger(__name__)


class Stage(Enum):
    INTRO = "intro"
    CHARACTER_SELECT = "character-select"
    NAMING = "naming"
    SIGHT_GAME = "sight-game"
    HEARING_GAME = "hearing-game"
    THINKING_GAME = "thinking-game"
    JOURNEY_COMPLETE = "journey-complete"
    DOG_HELP = "dog-help"
    MAZE_GAME = "maze-game"
    FINAL_CELEBRATION = "final-celebration"


PHASE_STAGES = {
    Phase.SIGHT: Stage.SIGHT_GAME,
    Phase.HEARING: Stage.HEARING_GAME,
    Phase.THINKING: Stage.THINKING_GAME,
}

NEXT_PHASE = {
    Phase.SIGHT: Phase.HEARING,
    Phase.HEARING: Phase.THINKING,
    Phase.THINKING: None,
}


@dataclass
class GameProgress:
    sight: bool = False
    hearing: bool = False
    thinking: bool = False

    def mark(self, phase):
        setattr(self, phase.value, True)

    def is_done(self, phase):
        return getattr(self, phase.value)

    def reset(self):
        self.sight = self.hearing = self.thinking = False


class StageMachine:
    """Controller for one play-through, reused across restarts"""

    def __init__(self, audio=None, scheduler=None, rng=None, skip_intro=False):
        self.audio = audio or NullAudio()
        self.scheduler = scheduler or Scheduler()
        self.rng = rng or random.Random()

        self.stage = Stage.CHARACTER_SELECT if skip_intro else Stage.INTRO
        self.character = None
        self.friend_name = ""
        self.progress = GameProgress()
        self.round_engine = None
        self.maze = None
        self.show_hint = False

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def round_index(self):
        return self.round_engine.round_index if self.round_engine else 0

    @property
    def phase(self):
        for phase, stage in PHASE_STAGES.items():
            if stage == self.stage:
                return phase
        return None

    @property
    def can_confirm_name(self):
        return bool(self.friend_name.strip())

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _enter(self, stage):
        previous = self.stage
        self.scheduler.cancel(previous.value)
        self.stage = stage
        logger.info("Stage %s -> %s", previous.value, stage.value)

    def _wrong_stage(self, action, *expected):
        if self.stage in expected:
            return False
        logger.debug("Ignoring %s during %s", action, self.stage.value)
        return True

    def _later(self, delay, callback):
        """Schedule callback for the current stage only"""
        return self.scheduler.schedule(delay, callback, self.stage.value)

    def _say_later(self, delay, text, rate=1.1, pitch=1.4):
        return self._later(delay, lambda: self.audio.speak(text, rate=rate, pitch=pitch))

    def acknowledge_intro(self):
        if self._wrong_stage("acknowledge_intro", Stage.INTRO):
            return False
        self.audio.play(cues.CLICK)
        self._enter(Stage.CHARACTER_SELECT)
        return True

    def select_character(self, character):
        if self._wrong_stage("select_character", Stage.CHARACTER_SELECT):
            return False
        if isinstance(character, str):
            character = find_character(character)
        if character is None:
            return False

        self.audio.play(cues.CLICK)
        self.character = character
        self.friend_name = character.name
        self._enter(Stage.NAMING)
        self._say_later(
            STAGE_SPEECH_DELAY,
            f"Awesome choice! You selected {character.name}! Let's be best friends!",
            rate=1.2,
        )
        return True

    def set_name(self, text):
        """Update the name being typed"""
        if self._wrong_stage("set_name", Stage.NAMING):
            return False
        self.friend_name = text
        return True

    def confirm_name(self, text=None):
        if self._wrong_stage("confirm_name", Stage.NAMING):
            return False
        if text is not None:
            self.friend_name = text
        name = self.friend_name.strip()
        if not name:
            return False
        self.friend_name = name
        self._start_phase(Phase.SIGHT)
        return True

    def _start_phase(self, phase):
        if phase == Phase.SIGHT:
            self.audio.play(cues.CLICK)
        self._enter(PHASE_STAGES[phase])
        questions = new_session_set(POOLS[phase], ROUNDS_PER_PHASE, rng=self.rng)
        self.round_engine = RoundEngine(
            phase, questions, self.progress, self.scheduler, self.audio,
            on_complete=self._phase_complete, rng=self.rng,
            friend_name=self.friend_name, group=self.stage.value,
        )
        self._say_later(
            STAGE_SPEECH_DELAY,
            SCRIPTS[phase].start_speech.format(name=self.friend_name),
            pitch=1.3,
        )
        self.round_engine.start()

    def _phase_complete(self, phase):
        if self.stage != PHASE_STAGES[phase] or not self.progress.is_done(phase):
            return
        self.audio.speak(SCRIPTS[phase].complete_speech.format(name=self.friend_name),
                         rate=1.1, pitch=1.4)
        next_phase = NEXT_PHASE[phase]
        if next_phase is None:
            self._enter(Stage.JOURNEY_COMPLETE)
            self._say_later(
                JOURNEY_SPEECH_DELAY,
                "Wow, what an incredible journey! Thank you so much for guiding me "
                "and teaching me everything!",
            )
        else:
            self._later(NEXT_PHASE_DELAY, lambda: self._start_phase(next_phase))

    def answer(self, value):
        if self.round_engine is None or self.phase is None:
            logger.debug("Ignoring answer during %s", self.stage.value)
            return AnswerResult.IGNORED
        return self.round_engine.submit(value)

    def replay_sound(self):
        if self._wrong_stage("replay_sound", Stage.HEARING_GAME):
            return False
        return self.round_engine.replay_sound()

    def continue_journey(self):
        if self._wrong_stage("continue_journey", Stage.JOURNEY_COMPLETE):
            return False
        self.audio.play(cues.CLICK)
        self._enter(Stage.DOG_HELP)
        self._say_later(CONTINUE_SPEECH_DELAY,
                        "Let's continue our adventure and help someone in need!", rate=1.2)
        self.audio.play(cues.DOG_BARKING)
        self._later(HELP_BARK_DELAY, lambda: self.audio.play(cues.DOG_BARKING))
        self._say_later(
            HELP_SPEECH_DELAY,
            "Oh my! I can hear someone crying for help! Let me use my amazing new "
            "abilities to find them!",
        )
        return True

    def start_rescue(self):
        if self._wrong_stage("start_rescue", Stage.DOG_HELP):
            return False
        self.audio.play(cues.CLICK)
        self._enter(Stage.MAZE_GAME)
        self.show_hint = False
        self.maze = MazeEngine(self.scheduler, self.audio, on_home=self.complete_maze,
                               group=self.stage.value)
        self._say_later(CONTINUE_SPEECH_DELAY,
                        "Let's work together to help guide this poor dog back home safely!",
                        pitch=1.3)
        self._later(MAZE_HINT_DELAY, self._show_maze_hint)
        return True

    def _show_maze_hint(self):
        self.show_hint = True
        self.audio.speak("Use the arrows to help guide the dog home! I can see the path clearly!",
                         rate=1.1, pitch=1.3)

    def move(self, direction):
        """Route a maze step from any input device"""
        if self.stage != Stage.MAZE_GAME or self.maze is None:
            return MoveResult.IGNORED
        return self.maze.move(direction)

    def complete_maze(self):
        if self._wrong_stage("complete_maze", Stage.MAZE_GAME):
            return False
        if self.maze is None or not self.maze.solved:
            return False
        self._enter(Stage.FINAL_CELEBRATION)
        self.audio.play(cues.CELEBRATION)
        self._say_later(
            CELEBRATION_SPEECH_DELAY,
            "Mission accomplished! Thanks to your incredible training, I successfully "
            "helped the lost dog find its way home! You're the best teacher ever!",
        )
        return True

    def restart(self):
        """Back to character select with a clean slate"""
        if self._wrong_stage("restart", Stage.FINAL_CELEBRATION):
            return False
        self.audio.play(cues.CLICK)
        self.scheduler.cancel_all()
        self.character = None
        self.friend_name = ""
        self.progress.reset()
        self.round_engine = None
        self.maze = None
        self.show_hint = False
        self._enter(Stage.CHARACTER_SELECT)
        self._say_later(STAGE_SPEECH_DELAY,
                        "Let's train another amazing AI friend! This is so much fun!", rate=1.2)
        return True

    def toggle_mute(self):
        muted = self.audio.toggle_mute()
        logger.info("Sound %s", "off" if muted else "on")
        return muted

    def update(self, dt):
        self.scheduler.advance(dt)
