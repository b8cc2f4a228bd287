from .keyboard import KeyboardEditor, KeyboardHost
from .memory import MemoryEditor, MemoryHost

__all__ = [
    "KeyboardEditor",
    "KeyboardHost",
    "MemoryEditor",
    "MemoryHost",
]
