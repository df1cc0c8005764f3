"""
Round engine for the three training mini-games

Each round runs thinking -> guessing -> done. The AI friend thinks, blurts out
its scripted wrong guess, and then the player picks the right answer from four
choices.
"""

import logging
import random
from enum import Enum

from . import cues
from .config import (
    CORRECTION_DELAY,
    GUESS_SPEECH_DELAY,
    GUESSING_DELAY,
    PHASE_WRAPUP_DELAY,
    PRAISE_SPEECH_DELAY,
    THINKING_DELAY,
)
from .content import POOLS, SCRIPTS, THINKING_BUBBLE
from .randomizer import build_choice_set

logger = logging.getLogger(__name__)


class GuessingPhase(Enum):
    THINKING = "thinking"
    GUESSING = "guessing"
    DONE = "done"


class AnswerResult(Enum):
    CORRECT = "correct"
    INCORRECT = "incorrect"
    IGNORED = "ignored"


class RoundEngine:
    """Drives the rounds of one phase"""

    def __init__(self, phase, questions, progress, scheduler, audio,
                 on_complete=None, rng=None, friend_name="", group=None):
        self.phase = phase
        self.questions = list(questions)
        self.progress = progress
        self.scheduler = scheduler
        self.audio = audio
        self.on_complete = on_complete
        self.rng = rng or random
        self.friend_name = friend_name
        self.group = group or phase.value
        self.script = SCRIPTS[phase]

        self.round_index = 0
        self.guessing_phase = GuessingPhase.THINKING
        self.is_guessing = False
        self.show_correction = False
        self.show_speech_bubble = False
        self.choices = []
        self.completed = False
        self._answered = False

    @property
    def total_rounds(self):
        return len(self.questions)

    @property
    def current_item(self):
        return self.questions[self.round_index]

    @property
    def accepting_input(self):
        return (self.guessing_phase == GuessingPhase.DONE
                and not self._answered and not self.completed)

    def start(self):
        """Begin the phase at its first round"""
        self.round_index = 0
        self.completed = False
        logger.info("Starting %s phase with %d rounds", self.phase.value, self.total_rounds)
        self._begin_round()

    def _begin_round(self):
        item = self.current_item
        pool_labels = [other.answer.primary for other in POOLS[self.phase]]
        excluding = set(item.answer.labels) | {item.wrong_guess}
        self.choices = build_choice_set(
            item.answer.primary, item.wrong_guess, pool_labels,
            excluding=excluding, rng=self.rng,
        )
        self.guessing_phase = GuessingPhase.THINKING
        self.is_guessing = True
        self.show_speech_bubble = True
        self.show_correction = False
        self._answered = False
        logger.debug("%s round %d: %r", self.phase.value, self.round_index + 1, item.answer.primary)
        self.scheduler.schedule(THINKING_DELAY, self._start_guessing, self.group)

    def _start_guessing(self):
        self.guessing_phase = GuessingPhase.GUESSING
        self.audio.play(cues.THINKING)
        line = self.script.guess_line.format(guess=self.current_item.wrong_guess)
        self.scheduler.schedule(
            GUESS_SPEECH_DELAY,
            lambda: self.audio.speak(line, rate=1.0, pitch=1.2),
            self.group,
        )
        self.scheduler.schedule(GUESSING_DELAY, self._finish_guessing, self.group)

    def _finish_guessing(self):
        self.guessing_phase = GuessingPhase.DONE
        self.is_guessing = False

    def submit(self, value):
        """Check the player's correction for the current round"""
        if not self.accepting_input:
            logger.debug("Ignoring %r while %s", value, self.guessing_phase.value)
            return AnswerResult.IGNORED

        item = self.current_item
        if not item.answer.accepts(value):
            self.audio.play(cues.INCORRECT)
            return AnswerResult.INCORRECT

        self._answered = True
        self.show_correction = True
        self.audio.play(cues.CORRECT)
        praise = (f"Yes! Exactly right! It's a {item.answer.primary}! "
                  "You're such a great teacher!")
        self.scheduler.schedule(
            PRAISE_SPEECH_DELAY,
            lambda: self.audio.speak(praise, rate=1.2, pitch=1.4),
            self.group,
        )
        self.scheduler.schedule(CORRECTION_DELAY, self._advance, self.group)
        return AnswerResult.CORRECT

    def _advance(self):
        if self.completed or not self.show_correction:
            return

        if self.round_index < self.total_rounds - 1:
            self.round_index += 1
            self._begin_round()
            return

        self.completed = True
        self.progress.mark(self.phase)
        self.audio.play(cues.CELEBRATION)
        logger.info("%s phase complete", self.phase.value)
        self.scheduler.schedule(PHASE_WRAPUP_DELAY, self._report_complete, self.group)

    def _report_complete(self):
        if self.on_complete is not None:
            self.on_complete(self.phase)

    def replay_sound(self):
        """Play the current item's sound again, hearing items only"""
        key = self.current_item.sound_key
        if key is None:
            return False
        self.audio.play(key)
        return True

    def speech_bubble_text(self):
        if self.guessing_phase == GuessingPhase.THINKING:
            return THINKING_BUBBLE
        return self.script.guess_line.format(guess=self.current_item.wrong_guess)

    def thanks_text(self):
        return self.script.thanks.format(answer=self.current_item.answer.primary)
