from .recorder import AudioClip, AudioDevice, AudioRecorder

__all__ = ["AudioClip", "AudioDevice", "AudioRecorder"]
