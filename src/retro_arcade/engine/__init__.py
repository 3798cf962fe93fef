from .audio import AudioSink, MixerAudio, NullAudio
from .input import InputSource, InputState, KeyboardInput
from .loop import FixedTimestep, FrameScheduler
from .session import GameSession

__all__ = [
    "AudioSink",
    "MixerAudio",
    "NullAudio",
    "InputSource",
    "InputState",
    "KeyboardInput",
    "FixedTimestep",
    "FrameScheduler",
    "GameSession",
]
