"""
Synthesized sound effects and the audio player the game talks to
"""

import logging
import math
import random

import numpy as np
import pygame

from . import cues
from .speech import Speaker

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100


class SoundGenerator:
    """Generate simple synthesized sounds as mono float waves"""

    def __init__(self, sample_rate=SAMPLE_RATE, rng=None):
        self.sample_rate = sample_rate
        self.rng = rng or random.Random()

    def generate_tone(self, frequency, duration, volume=0.3, wave_type='sine'):
        """Generate a tone with given frequency and duration"""
        n_samples = max(1, int(self.sample_rate * duration))
        t = np.linspace(0, duration, n_samples, False)

        if wave_type == 'square':
            wave = np.sign(np.sin(2 * np.pi * frequency * t))
        elif wave_type == 'sawtooth':
            wave = 2 * (t * frequency - np.floor(0.5 + t * frequency))
        elif wave_type == 'triangle':
            wave = 2 * np.abs(2 * (t * frequency - np.floor(0.5 + t * frequency))) - 1
        else:
            wave = np.sin(2 * np.pi * frequency * t)

        # Apply envelope to avoid clicks
        envelope = np.ones(n_samples)
        attack = min(int(0.01 * self.sample_rate), n_samples // 2)
        release = min(int(0.05 * self.sample_rate), n_samples // 2)
        if attack:
            envelope[:attack] = np.linspace(0, 1, attack)
        if release:
            envelope[-release:] = np.linspace(1, 0, release)

        return wave * envelope * volume

    def sequence(self, notes):
        """Mix (start_ms, frequency, duration, wave_type) notes into one wave"""
        parts = []
        for start_ms, frequency, duration, wave_type in notes:
            offset = int(self.sample_rate * start_ms / 1000)
            parts.append((offset, self.generate_tone(frequency, duration, 0.3, wave_type)))

        length = max(offset + len(wave) for offset, wave in parts)
        mixed = np.zeros(length)
        for offset, wave in parts:
            mixed[offset:offset + len(wave)] += wave
        return np.clip(mixed, -1.0, 1.0)

    def correct(self):
        """Rising C-E-G arpeggio"""
        return self.sequence([(0, 523, 0.2, 'sine'), (100, 659, 0.2, 'sine'), (200, 784, 0.3, 'sine')])

    def incorrect(self):
        return self.sequence([(0, 200, 0.5, 'sawtooth')])

    def click(self):
        return self.sequence([(0, 800, 0.1, 'square')])

    def celebration(self):
        notes = [523, 659, 784, 1047]  # C, E, G, high C
        return self.sequence([(i * 150, note, 0.3, 'sine') for i, note in enumerate(notes)])

    def move(self):
        return self.sequence([(0, 400, 0.1, 'triangle')])

    def thinking(self):
        return self.sequence([(0, 300, 0.5, 'triangle')])

    def dog_barking(self):
        """Four sharp double barks"""
        notes = []
        for start in (0, 300, 600, 900):
            notes.append((start, 180, 0.08, 'sawtooth'))
            notes.append((start + 40, 220, 0.06, 'sawtooth'))
        return self.sequence(notes)

    def helicopter(self):
        """Wobbling low rotor chops for two seconds"""
        notes = []
        for i in range(40):
            frequency = 80 + math.sin(i * 0.1 * 0.3) * 15
            notes.append((i * 50, frequency, 0.1, 'sawtooth'))
        return self.sequence(notes)

    def rain(self):
        """Random high droplets"""
        notes = [(self.rng.uniform(0, 2000), 1200 + self.rng.uniform(0, 800), 0.03, 'square')
                 for _ in range(50)]
        return self.sequence(notes)

    def music(self):
        melody = [(0, 523), (300, 587), (600, 659), (900, 523), (1200, 784), (1500, 659)]
        return self.sequence([(start, freq, 0.25, 'sine') for start, freq in melody])

    def bell(self):
        return self.sequence([
            (0, 400, 1.0, 'sine'),
            (100, 800, 0.8, 'sine'),
            (800, 400, 0.6, 'sine'),
            (1200, 800, 0.4, 'sine'),
        ])

    def build_waves(self):
        return {
            cues.CORRECT: self.correct(),
            cues.INCORRECT: self.incorrect(),
            cues.CLICK: self.click(),
            cues.CELEBRATION: self.celebration(),
            cues.MOVE: self.move(),
            cues.THINKING: self.thinking(),
            cues.DOG_BARKING: self.dog_barking(),
            cues.HELICOPTER: self.helicopter(),
            cues.RAIN: self.rain(),
            cues.MUSIC: self.music(),
            cues.BELL: self.bell(),
        }


def to_sound(wave, channels=2):
    """Convert a float wave to a pygame Sound for the current mixer"""
    samples = (wave * 32767).astype(np.int16)
    if channels > 1:
        samples = np.ascontiguousarray(np.repeat(samples[:, None], channels, axis=1))
    return pygame.sndarray.make_sound(samples)


class AudioPlayer:
    """Plays cues and speech unless muted; never raises into the game"""

    def __init__(self, muted=False, speaker=None):
        self.muted = muted
        self.enabled = False
        self.sounds = {}
        self.speaker = speaker if speaker is not None else Speaker()

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init(frequency=SAMPLE_RATE, size=-16, channels=2, buffer=512)
            frequency, _, channels = pygame.mixer.get_init()
            waves = SoundGenerator(frequency).build_waves()
            self.sounds = {key: to_sound(wave, channels) for key, wave in waves.items()}
            self.enabled = True
        except (pygame.error, ValueError, TypeError) as exc:
            logger.warning("Sound effects disabled: %s", exc)

    def play(self, cue):
        if self.muted or not self.enabled:
            return
        sound = self.sounds.get(cue)
        if sound is None:
            logger.debug("No sound for cue %r", cue)
            return
        try:
            sound.play()
        except pygame.error as exc:
            logger.warning("Could not play %r: %s", cue, exc)

    def speak(self, text, rate=None, pitch=None, volume=None):
        if self.muted:
            return
        hints = {k: v for k, v in (("rate", rate), ("pitch", pitch), ("volume", volume)) if v is not None}
        self.speaker.speak(text, **hints)

    def toggle_mute(self):
        self.muted = not self.muted
        if self.muted:
            self.speaker.cancel()
            if self.enabled:
                pygame.mixer.stop()
        return self.muted

    def close(self):
        self.speaker.close()
