"""
Symbolic sound cues shared by the game core and the audio player
"""

CORRECT = "correct"
INCORRECT = "incorrect"
CLICK = "click"
CELEBRATION = "celebration"
MOVE = "move"
THINKING = "thinking"

# Hearing-game sounds are keyed by the answer they stand for
DOG_BARKING = "dog barking"
HELICOPTER = "helicopter"
RAIN = "rain"
MUSIC = "music"
BELL = "bell"


class NullAudio:
    """Silent stand-in used when no audio device is wanted"""

    def __init__(self, muted=False):
        self.muted = muted

    def play(self, cue):
        pass

    def speak(self, text, rate=None, pitch=None, volume=None):
        pass

    def toggle_mute(self):
        self.muted = not self.muted
        return self.muted

    def close(self):
        pass
