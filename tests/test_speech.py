import subprocess
import sys
from types import SimpleNamespace

import pytest

pytest.importorskip("pyttsx3")

from tiny_thinkers.speech import Speaker, pick_voice, say  # noqa: E402


class FakeProcess:
    """Child process that keeps talking until terminated"""

    def __init__(self, command, **kwargs):
        self.command = command
        self.returncode = None
        self.terminated = False

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def wait(self, timeout=None):
        return self.returncode

    def kill(self):
        self.returncode = -9


class Launcher:
    def __init__(self):
        self.processes = []

    def __call__(self, command, **kwargs):
        proc = FakeProcess(command, **kwargs)
        self.processes.append(proc)
        return proc


@pytest.fixture
def launcher():
    return Launcher()


@pytest.fixture
def speaker(launcher):
    speaker = Speaker(popen=launcher)
    speaker.available = True
    return speaker


def test_speak_launches_one_process(speaker, launcher):
    speaker.speak("Hello   friend!", rate=1.2, volume=0.8)
    assert len(launcher.processes) == 1
    command = launcher.processes[0].command
    assert command[:3] == [sys.executable, "-m", "tiny_thinkers.speech"]
    assert command[3:] == ["Hello friend!", "1.2", "0.8"]
    assert speaker.speaking


def test_new_line_interrupts_the_current_one(speaker, launcher):
    speaker.speak("This is a very long line of praise")
    speaker.speak("Next stage!")
    first, second = launcher.processes
    assert first.terminated
    assert not second.terminated
    assert second.command[3] == "Next stage!"


def test_cancel_silences_active_utterance(speaker, launcher):
    speaker.speak("Hooray!")
    speaker.cancel()
    assert launcher.processes[0].terminated
    assert not speaker.speaking


def test_blank_text_is_not_spoken(speaker, launcher):
    speaker.speak("   ")
    assert launcher.processes == []


def test_failed_process_disables_speech(speaker, launcher):
    speaker.speak("first")
    launcher.processes[0].returncode = 1

    speaker.speak("second")
    assert not speaker.available
    assert len(launcher.processes) == 1

    speaker.speak("third")
    assert len(launcher.processes) == 1


def test_finished_process_keeps_speech_on(speaker, launcher):
    speaker.speak("first")
    launcher.processes[0].returncode = 0
    speaker.speak("second")
    assert speaker.available
    assert len(launcher.processes) == 2
    assert not launcher.processes[0].terminated


def test_missing_interpreter_disables_speech():
    def broken(command, **kwargs):
        raise OSError("no such file")

    speaker = Speaker(popen=broken)
    speaker.available = True
    speaker.speak("hello")
    assert not speaker.available
    assert not speaker.speaking


def test_stubborn_process_is_killed(speaker, launcher):
    speaker.speak("hello")
    proc = launcher.processes[0]

    def hang(timeout=None):
        raise subprocess.TimeoutExpired("tts", timeout)

    proc.wait = hang
    proc.terminate = lambda: None
    speaker.cancel()
    assert proc.returncode == -9


class FakeEngine:
    def __init__(self, voices=()):
        self.properties = {"voices": list(voices)}
        self.said = []
        self.ran = False

    def getProperty(self, name):
        return self.properties.get(name)

    def setProperty(self, name, value):
        self.properties[name] = value

    def say(self, text):
        self.said.append(text)

    def runAndWait(self):
        self.ran = True


def test_say_applies_rate_and_volume():
    engine = FakeEngine(voices=[
        SimpleNamespace(id="fr", name="French"),
        SimpleNamespace(id="en", name="English (America)"),
    ])
    say("Hi there", rate=2.0, volume=1.5, engine=engine)
    assert engine.said == ["Hi there"]
    assert engine.ran
    assert engine.properties["rate"] == 350
    assert engine.properties["volume"] == 1.0
    assert engine.properties["voice"] == "en"


def test_pick_voice_without_english():
    engine = FakeEngine(voices=[SimpleNamespace(id="fr", name="French")])
    assert pick_voice(engine) is None
    assert "voice" not in engine.properties


def test_muting_the_player_cuts_speech_off(speaker, launcher):
    pytest.importorskip("pygame")
    from tiny_thinkers.audio import AudioPlayer

    player = AudioPlayer(speaker=speaker)
    player.speak("Incredible! Hoot can now see perfectly!")
    assert speaker.speaking

    assert player.toggle_mute()
    assert launcher.processes[0].terminated
    assert not speaker.speaking
    player.close()
