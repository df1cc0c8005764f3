"""
Offline text-to-speech for the AI friend's voice

Each utterance is spoken by a short-lived child process running pyttsx3, so a
stuck or crashing speech driver never takes the game down and the current line
can be cut off at any time.
"""

import logging
import os
import subprocess
import sys
import threading

import pyttsx3

from .config import BASE_WORDS_PER_MINUTE, SPEECH_PITCH, SPEECH_RATE, SPEECH_VOLUME

logger = logging.getLogger(__name__)


class Speaker:
    """Speaks one utterance at a time; a new line interrupts the current one.

    pyttsx3 has no pitch control, so the pitch hint is accepted and ignored.
    """

    def __init__(self, popen=subprocess.Popen):
        self._popen = popen
        self._active = None
        self._lock = threading.Lock()
        # Keep headless runs silent
        self.available = os.environ.get("SDL_AUDIODRIVER", "").strip().lower() != "dummy"

    def speak(self, text, rate=SPEECH_RATE, pitch=SPEECH_PITCH, volume=SPEECH_VOLUME):
        phrase = " ".join(str(text).split())
        if not phrase:
            return
        with self._lock:
            self._check_finished()
            self._stop_active()
            if not self.available:
                return
            self._active = self._launch(phrase, rate, volume)

    def cancel(self):
        """Silence the line being spoken, if any"""
        with self._lock:
            self._check_finished()
            self._stop_active()

    def close(self):
        self.cancel()

    @property
    def speaking(self):
        with self._lock:
            return self._active is not None and self._active.poll() is None

    def _launch(self, text, rate, volume):
        command = [sys.executable, "-m", __name__, text, str(rate), str(volume)]
        try:
            return self._popen(command, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL)
        except OSError as exc:
            logger.warning("Speech disabled: %s", exc)
            self.available = False
            return None

    def _check_finished(self):
        """Disable speech once a child has failed on its own"""
        proc = self._active
        if proc is None or proc.poll() is None:
            return
        self._active = None
        if proc.returncode != 0:
            logger.warning("Speech disabled: speech process exited with %s", proc.returncode)
            self.available = False

    def _stop_active(self):
        proc, self._active = self._active, None
        if proc is None:
            return
        try:
            proc.terminate()
            proc.wait(timeout=0.5)
        except subprocess.TimeoutExpired:
            proc.kill()
        except OSError as exc:
            logger.debug("Speech process already gone: %s", exc)


def pick_voice(engine):
    """Prefer an English voice when the driver offers several"""
    voices = engine.getProperty("voices") or []
    for voice in voices:
        ident = f"{voice.id} {voice.name}".lower()
        if "en-us" in ident or "en_us" in ident or "english" in ident:
            engine.setProperty("voice", voice.id)
            return voice.id
    return None


def say(text, rate=SPEECH_RATE, volume=SPEECH_VOLUME, engine=None):
    """Speak text and block until done"""
    engine = engine or pyttsx3.init()
    pick_voice(engine)
    engine.setProperty("rate", int(BASE_WORDS_PER_MINUTE * rate))
    engine.setProperty("volume", max(0.0, min(1.0, volume)))
    engine.say(text)
    engine.runAndWait()


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    text = argv[0]
    rate = float(argv[1]) if len(argv) > 1 else SPEECH_RATE
    volume = float(argv[2]) if len(argv) > 2 else SPEECH_VOLUME
    say(text, rate, volume)


if __name__ == "__main__":
    main()
