import random

import pytest

from tiny_thinkers.config import (
    CORRECTION_DELAY,
    GUESSING_DELAY,
    NEXT_PHASE_DELAY,
    PHASE_WRAPUP_DELAY,
    ROUNDS_PER_PHASE,
    THINKING_DELAY,
)
from tiny_thinkers.rounds import AnswerResult
from tiny_thinkers.scheduler import Scheduler
from tiny_thinkers.stages import StageMachine


class RecordingAudio:
    """Audio stand-in that remembers every cue and utterance"""

    def __init__(self):
        self.muted = False
        self.played = []
        self.spoken = []

    def play(self, cue):
        if not self.muted:
            self.played.append(cue)

    def speak(self, text, rate=None, pitch=None, volume=None):
        if not self.muted:
            self.spoken.append(text)

    def toggle_mute(self):
        self.muted = not self.muted
        return self.muted

    def close(self):
        pass


@pytest.fixture
def audio():
    return RecordingAudio()


@pytest.fixture
def scheduler():
    return Scheduler()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def machine(audio, scheduler, rng):
    return StageMachine(audio=audio, scheduler=scheduler, rng=rng)


def finish_round(machine):
    """Wait out the wrong guess, answer correctly, wait out the correction"""
    machine.update(THINKING_DELAY + GUESSING_DELAY)
    item = machine.round_engine.current_item
    assert machine.answer(item.answer.primary) is AnswerResult.CORRECT
    machine.update(CORRECTION_DELAY)


def play_phase(machine, handoff=True):
    for _ in range(ROUNDS_PER_PHASE):
        finish_round(machine)
    machine.update(PHASE_WRAPUP_DELAY)
    if handoff:
        machine.update(NEXT_PHASE_DELAY)


def reach_stage_after_training(machine, character="owl", name="Pip"):
    machine.acknowledge_intro()
    machine.select_character(character)
    machine.confirm_name(name)
    play_phase(machine)
    play_phase(machine)
    play_phase(machine, handoff=False)


RESCUE_ROUTE = ["right", "down", "down", "right", "right",
                "down", "down", "down", "right", "right"]
