"""
Audio collaborators.

Sessions fire cues through AudioSink.play and never wait on, or fail because
of, playback.
"""

import logging
from pathlib import Path
from typing import Protocol

import pygame

from retro_arcade.core.constants import SoundCue

log = logging.getLogger(__name__)


class AudioSink(Protocol):
    def play(self, cue: str) -> None: ...


class NullAudio:
    """Discards every cue. Used for headless runs."""

    def play(self, cue: str) -> None:
        pass


# Cue registry: file name under the sound directory and default volume
SOUNDS: dict[SoundCue, tuple[str, float]] = {
    SoundCue.GAME_START: ("game-start.wav", 0.7),
    SoundCue.GAME_OVER: ("game-over.wav", 0.8),
    SoundCue.SCORE: ("score.wav", 0.5),
    SoundCue.HIT: ("hit.wav", 0.6),
    SoundCue.EXPLOSION: ("explosion.wav", 0.7),
    SoundCue.POWERUP: ("powerup.wav", 0.6),
    SoundCue.JUMP: ("jump.wav", 0.5),
    SoundCue.SHOOT: ("shoot.wav", 0.4),
    SoundCue.DEATH: ("death.wav", 0.7),
}


class MixerAudio:
    """
    pygame.mixer backed cue player.

    Sounds load lazily from sound_dir. A missing file or an unavailable mixer
    is logged once and the cue is skipped from then on.
    """

    def __init__(
        self, sound_dir: str | Path, master_volume: float = 1.0, muted: bool = False
    ) -> None:
        self.sound_dir = Path(sound_dir)
        self.master_volume = max(0.0, min(1.0, master_volume))
        self.muted = muted
        self._cache: dict[str, pygame.mixer.Sound | None] = {}
        self._mixer_ready: bool | None = None

    def _ensure_mixer(self) -> bool:
        if self._mixer_ready is None:
            try:
                if not pygame.mixer.get_init():
                    pygame.mixer.init()
                self._mixer_ready = True
            except pygame.error as e:
                log.warning(f"Audio disabled, mixer unavailable: {e}")
                self._mixer_ready = False
        return self._mixer_ready

    def _load(self, cue: str) -> pygame.mixer.Sound | None:
        if cue in self._cache:
            return self._cache[cue]

        sound = None
        entry = SOUNDS.get(cue)
        if entry is None:
            log.warning(f"Unknown sound cue '{cue}'")
        else:
            filename, volume = entry
            path = self.sound_dir / filename
            if not path.exists():
                log.warning(f"Sound file {path} not found, cue '{cue}' is silent")
            else:
                try:
                    sound = pygame.mixer.Sound(str(path))
                    sound.set_volume(volume * self.master_volume)
                except pygame.error as e:
                    log.warning(f"Could not load {path}: {e}")
        self._cache[cue] = sound
        return sound

    def play(self, cue: str) -> None:
        if self.muted or not self._ensure_mixer():
            return
        sound = self._load(str(cue))
        if sound is None:
            return
        try:
            sound.play()
        except pygame.error as e:
            log.debug(f"Playback of '{cue}' failed: {e}")
