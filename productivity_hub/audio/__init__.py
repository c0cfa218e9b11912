from .sound_manager import SoundManager

__all__ = ["SoundManager"]
