"""
pixeldino audio engine - synthesized chiptune effects.

Every sound is generated at startup from simple oscillators, so the game
ships without audio assets. Playback goes through pygame.mixer.
"""

import array
import logging
import math
import random

import pygame

from pixeldino.config.settings import AudioSettings
from pixeldino.game.collaborators import SoundPlayer

logger = logging.getLogger(__name__)

SAMPLE_RATE = 44100
AMPLITUDE = 32767

TRACK_CHANNEL = 0
VOICE_CHANNEL = 1


def square(t: float, freq: float) -> float:
    """Square wave oscillator."""
    return 1 if (t * freq) % 1 < 0.5 else -1


def triangle(t: float, freq: float) -> float:
    """Triangle wave oscillator."""
    p = (t * freq) % 1
    return 4 * abs(p - 0.5) - 1


def sine(t: float, freq: float) -> float:
    """Sine wave oscillator."""
    return math.sin(2 * math.pi * freq * t)


def noise() -> float:
    """White noise generator."""
    return random.random() * 2 - 1


def _to_samples(values: list[float], gain: float = 0.6) -> array.array:
    samples = array.array('h')
    for val in values:
        samples.append(int(max(-1.0, min(1.0, val)) * AMPLITUDE * gain))
    return samples


def synth_jump() -> array.array:
    """Short rising blip."""
    values = []
    duration = 0.12
    for i in range(int(SAMPLE_RATE * duration)):
        t = i / SAMPLE_RATE
        freq = 400 + 900 * (t / duration)
        env = max(0, 1 - t / duration)
        values.append(square(t, freq) * 0.5 * env)
    return _to_samples(values)


def synth_game_over() -> array.array:
    """Descending sting followed by a low "game over" voice line."""
    values = []

    # Sting: three falling notes
    for freq in (392, 311, 247):
        for i in range(int(SAMPLE_RATE * 0.15)):
            t = i / SAMPLE_RATE
            env = max(0, 1 - t * 6)
            values.append(square(t, freq) * 0.45 * env)

    # Voice: two syllables of formant-ish tones with a pitch glide
    for base, formant in ((180, 700), (140, 500)):
        for i in range(int(SAMPLE_RATE * 0.35)):
            t = i / SAMPLE_RATE
            env = math.sin(math.pi * t / 0.35)
            pitch = base * (1 - 0.2 * t)
            val = triangle(t, pitch) * 0.6 + sine(t, formant) * 0.25 * triangle(t, pitch)
            values.append(val * env)
        values.extend([0.0] * int(SAMPLE_RATE * 0.05))

    return _to_samples(values)


def synth_celebrate() -> array.array:
    """Triumphant arpeggio with a sparkle tail."""
    values = []
    notes = [523, 659, 784, 1047, 1319]
    note_len = 0.09
    for freq in notes:
        for i in range(int(SAMPLE_RATE * note_len)):
            t = i / SAMPLE_RATE
            env = max(0, 1 - t / note_len * 0.6)
            values.append((square(t, freq) * 0.35 + sine(t, freq * 2) * 0.2) * env)

    for i in range(int(SAMPLE_RATE * 0.4)):
        t = i / SAMPLE_RATE
        env = max(0, 1 - t / 0.4)
        values.append((sine(t, 2093) * 0.3 + noise() * 0.05) * env)

    return _to_samples(values)


def synth_track() -> array.array:
    """Looping two-bar bassline with a hi-hat tick."""
    values = []
    bpm = 140
    step = 60 / bpm / 2  # Eighth notes
    bass = [110, 110, 165, 110, 147, 110, 165, 131] * 2
    for step_idx, freq in enumerate(bass):
        for i in range(int(SAMPLE_RATE * step)):
            t = i / SAMPLE_RATE
            env = max(0.2, 1 - t / step)
            val = triangle(t, freq) * 0.5 * env
            if t < 0.01 and step_idx % 2 == 1:
                val += noise() * 0.3
            values.append(val)
    return _to_samples(values, gain=0.5)


class AudioEngine(SoundPlayer):
    """
    Game sound effects and background track.

    Every method is a no-op until ``init`` succeeds, and while muted, so the
    game runs unchanged on machines without an audio device.
    """

    def __init__(self, settings: AudioSettings | None = None):
        self._settings = settings or AudioSettings()
        self._initialized = False
        self._sounds: dict[str, pygame.mixer.Sound] = {}
        self._muted = False
        self._track_playing = False
        self._track_pending = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def track_playing(self) -> bool:
        return self._track_playing

    def init(self) -> bool:
        """Initialize the mixer and synthesize all sounds."""
        if not self._settings.enabled:
            logger.info("Audio disabled by settings")
            return False

        try:
            pygame.mixer.pre_init(SAMPLE_RATE, -16, 2, 4096)
            pygame.mixer.init()
            pygame.mixer.set_num_channels(8)
            pygame.mixer.set_reserved(2)
            self._generate_all_sounds()
            self._initialized = True
            logger.info(f"Audio engine initialized ({len(self._sounds)} sounds)")
            return True
        except Exception as e:
            logger.error(f"Failed to initialize audio: {e}")
            return False

    def _create_sound(self, samples: array.array) -> pygame.mixer.Sound:
        """Create a pygame Sound from mono samples (auto-converted to stereo)."""
        stereo = array.array('h')
        for s in samples:
            stereo.append(s)
            stereo.append(s)
        return pygame.mixer.Sound(buffer=stereo)

    def _generate_all_sounds(self) -> None:
        self._sounds["jump"] = self._create_sound(synth_jump())
        self._sounds["game_over"] = self._create_sound(synth_game_over())
        self._sounds["celebrate"] = self._create_sound(synth_celebrate())
        self._sounds["track"] = self._create_sound(synth_track())

    def _sound(self, name: str, volume: float) -> pygame.mixer.Sound | None:
        if not self._initialized or self._muted:
            return None
        sound = self._sounds.get(name)
        if sound is None:
            logger.warning(f"Sound not found: {name}")
            return None
        sound.set_volume(volume)
        return sound

    def play(self, name: str) -> None:
        """Play a sound effect on any free channel."""
        sound = self._sound(name, self._settings.volume)
        if sound is not None:
            sound.play()

    def play_jump(self) -> None:
        self.play("jump")

    def play_game_over(self) -> None:
        sound = self._sound("game_over", self._settings.volume)
        if sound is not None:
            pygame.mixer.Channel(VOICE_CHANNEL).play(sound)

    def play_celebrate(self) -> None:
        """Queue the celebration behind the game-over voice, or play it now."""
        sound = self._sound("celebrate", self._settings.volume)
        if sound is None:
            return
        channel = pygame.mixer.Channel(VOICE_CHANNEL)
        if channel.get_busy():
            channel.queue(sound)
        else:
            channel.play(sound)

    def start_track(self) -> None:
        """Start the looping track, or defer it until unmuted."""
        if self._track_playing or not self._initialized:
            return
        self._track_playing = True
        if self._muted:
            self._track_pending = True
            logger.debug("Background track deferred while muted")
            return
        self._play_track()

    def _play_track(self) -> None:
        self._track_pending = False
        sound = self._sound("track", self._settings.track_volume)
        if sound is None:
            return
        pygame.mixer.Channel(TRACK_CHANNEL).play(sound, loops=-1, fade_ms=300)
        logger.debug("Background track started")

    def stop_track(self) -> None:
        if not self._track_playing:
            return
        if self._initialized:
            pygame.mixer.Channel(TRACK_CHANNEL).fadeout(200)
        self._track_playing = False
        self._track_pending = False
        logger.debug("Background track stopped")

    def is_muted(self) -> bool:
        return self._muted

    def toggle_mute(self) -> bool:
        """Toggle mute state."""
        self._muted = not self._muted
        if self._initialized:
            if self._muted:
                pygame.mixer.pause()
            else:
                pygame.mixer.unpause()
                if self._track_pending:
                    self._play_track()
        logger.info(f"Audio {'muted' if self._muted else 'unmuted'}")
        return self._muted

    def cleanup(self) -> None:
        """Cleanup audio resources."""
        if self._initialized:
            pygame.mixer.quit()
            self._initialized = False
            self._track_playing = False
            self._track_pending = False
            logger.info("Audio engine cleaned up")
