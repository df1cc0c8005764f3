"""
Question bank and narrative scripts

Everything in here is static data built once at import time.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class Phase(Enum):
    SIGHT = "sight"
    HEARING = "hearing"
    THINKING = "thinking"


@dataclass(frozen=True)
class Single:
    """Answer with exactly one accepted label"""
    label: str

    @property
    def labels(self):
        return (self.label,)

    @property
    def primary(self):
        return self.label

    def accepts(self, candidate):
        return candidate == self.label


@dataclass(frozen=True)
class AnySet:
    """Answer accepting any of several equivalent phrasings"""
    labels: tuple

    @property
    def primary(self):
        return self.labels[0]

    def accepts(self, candidate):
        return candidate in self.labels


def _check_wrong_guess(answer, wrong_guess):
    if answer.accepts(wrong_guess):
        raise ValueError(f"wrong guess {wrong_guess!r} is an accepted answer")


@dataclass(frozen=True)
class Character:
    id: str
    name: str
    glyph: str
    color: tuple


@dataclass(frozen=True)
class QuizItem:
    """Sight or hearing question"""
    glyph: str
    answer: Single
    wrong_guess: str
    sound_key: Optional[str] = None

    def __post_init__(self):
        _check_wrong_guess(self.answer, self.wrong_guess)


@dataclass(frozen=True)
class PatternItem:
    """Sequence whose next element has to be named"""
    sequence: tuple
    answer: object
    wrong_guess: str
    glyph: str = "?"
    sound_key: Optional[str] = None

    def __post_init__(self):
        _check_wrong_guess(self.answer, self.wrong_guess)


@dataclass(frozen=True)
class PhaseScript:
    """Lines spoken and shown during one training phase"""
    title: str
    status: str
    guess_line: str
    question: str
    thanks: str
    badge: str
    start_speech: str
    complete_speech: str


CHARACTERS = [
    Character("cat", "Whiskers", "🐱", (251, 146, 60)),
    Character("dog", "Buddy", "🐶", (250, 204, 21)),
    Character("robot", "Robo", "🤖", (96, 165, 250)),
    Character("unicorn", "Sparkle", "🦄", (244, 114, 182)),
    Character("dragon", "Flame", "🐲", (74, 222, 128)),
    Character("owl", "Hoot", "🦉", (192, 132, 252)),
]

SIGHT_OBJECTS = [
    QuizItem("🍎", Single("apple"), "banana"),
    QuizItem("🚗", Single("car"), "truck"),
    QuizItem("🌟", Single("star"), "moon"),
    QuizItem("🎈", Single("balloon"), "ball"),
    QuizItem("🌸", Single("flower"), "tree"),
]

HEARING_SOUNDS = [
    QuizItem("🐶", Single("dog barking"), "cat meowing", sound_key="dog barking"),
    QuizItem("🚁", Single("helicopter"), "airplane", sound_key="helicopter"),
    QuizItem("🌧️", Single("rain"), "wind", sound_key="rain"),
    QuizItem("🎵", Single("music"), "talking", sound_key="music"),
    QuizItem("🔔", Single("bell"), "whistle", sound_key="bell"),
]

THINKING_PATTERNS = [
    PatternItem(("🔴", "🔵", "🔴", "🔵"), Single("red"), "yellow"),
    # Both phrasings of the growing star row are correct
    PatternItem(("⭐", "⭐⭐", "⭐⭐⭐"), AnySet(("four stars", "⭐⭐⭐⭐")), "one star"),
    PatternItem(("🌙", "☀️", "🌙", "☀️"), Single("moon"), "star"),
    PatternItem(("🍎", "🍊", "🍎", "🍊"), Single("apple"), "banana"),
]

POOLS = {
    Phase.SIGHT: SIGHT_OBJECTS,
    Phase.HEARING: HEARING_SOUNDS,
    Phase.THINKING: THINKING_PATTERNS,
}

SCRIPTS = {
    Phase.SIGHT: PhaseScript(
        title="Teaching {name} to See!",
        status="{name} is looking at the object...",
        guess_line="I think this is a {guess}!",
        question="Help {name} learn! What is this really?",
        thanks="Thank you! Now I know it's a {answer}!",
        badge="{name} can now see!",
        start_speech="Fantastic! Let's start training {name} to see! This is going to be so much fun!",
        complete_speech="Incredible! {name} can now see perfectly! Let's teach them to hear sounds!",
    ),
    Phase.HEARING: PhaseScript(
        title="Teaching {name} to Hear!",
        status="{name} is listening to the sound...",
        guess_line="I think this sound is {guess}!",
        question="Help {name} learn! What sound is this?",
        thanks="Thank you! Now I can hear {answer}!",
        badge="{name} can now hear!",
        start_speech="Now let's teach {name} to hear! Listen carefully!",
        complete_speech="Amazing work! {name} can now hear everything! Time to teach them to think!",
    ),
    Phase.THINKING: PhaseScript(
        title="Teaching {name} to Think!",
        status="{name} is analyzing the pattern...",
        guess_line="I think the next item is {guess}!",
        question="Help {name} think! What comes next?",
        thanks="Thank you! Now I understand the pattern!",
        badge="{name} can now think!",
        start_speech="Time to teach {name} to think! Let's find the patterns!",
        complete_speech="Outstanding! {name} can now think logically! What a smart AI friend!",
    ),
}

THINKING_BUBBLE = "Hmm... let me think..."

# 0 = path, 1 = wall, 2 = home
MAZE_LAYOUT = (
    (0, 0, 1, 0, 0, 0),
    (1, 0, 1, 0, 1, 0),
    (0, 0, 0, 0, 1, 0),
    (0, 1, 1, 0, 0, 0),
    (0, 0, 0, 0, 1, 1),
    (1, 0, 0, 0, 0, 2),
)


def find_character(character_id):
    for character in CHARACTERS:
        if character.id == character_id:
            return character
    return None
