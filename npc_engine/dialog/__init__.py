"""Dialog scripts: fragments, graph resolution, typewriter and sessions."""

from .model import (
    ByIndex, ByName, DialogTarget, to_target,
    ImageSection, ImageData, Button, DialogFragment,
)
from .graph import DialogGraph
from .typewriter import TypewriterController, TypingHandle
from .session import DialogSession
from .loader import load_dialog, load_dialog_file

__all__ = [
    'ByIndex', 'ByName', 'DialogTarget', 'to_target',
    'ImageSection', 'ImageData', 'Button', 'DialogFragment',
    'DialogGraph', 'TypewriterController', 'TypingHandle', 'DialogSession',
    'load_dialog', 'load_dialog_file',
]
