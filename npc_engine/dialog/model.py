"""Dialog script data models."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Union

from ..config import INSTANT_TYPE_SPEED
from ..errors import InvalidDialogFragmentError


@dataclass(frozen=True)
class ByIndex:
    """Jump target addressing a fragment by its position in the script."""
    index: int


@dataclass(frozen=True)
class ByName:
    """Jump target addressing a fragment by its `name`."""
    name: str


DialogTarget = Union[ByIndex, ByName]


def to_target(value: Union[DialogTarget, int, str]) -> DialogTarget:
    """Normalize a raw int/str jump target into a tagged DialogTarget."""
    if isinstance(value, (ByIndex, ByName)):
        return value
    if isinstance(value, bool):
        raise TypeError(f"Invalid dialog target: {value!r}")
    if isinstance(value, int):
        return ByIndex(value)
    if isinstance(value, str):
        return ByName(value)
    raise TypeError(f"Invalid dialog target: {value!r}")


@dataclass
class ImageSection:
    """Cut of an image atlas, in pixels."""
    source_width: float
    source_height: float
    source_left: float = 0
    source_top: float = 0


@dataclass
class ImageData:
    """Portrait or secondary image shown next to a dialog line."""
    path: str
    offset_x: float = 0
    offset_y: float = 0
    width: Optional[float] = None
    height: Optional[float] = None
    section: Optional[ImageSection] = None


@dataclass
class Button:
    """Answer offered on a question fragment."""
    label: str
    go_to: DialogTarget
    triggered_actions: Optional[Callable[[], None]] = None
    font_size: Optional[float] = None
    offset_x: float = 0
    offset_y: float = 0

    def __post_init__(self):
        self.go_to = to_target(self.go_to)


@dataclass
class DialogFragment:
    """One line of dialog plus its display and navigation metadata.

    `type_speed` None means "use the NPC's typing rate"; -1 reveals instantly.
    """
    text: str
    name: Optional[str] = None
    font_size: Optional[float] = None
    offset_x: float = 0
    offset_y: float = 0
    type_speed: Optional[float] = None
    is_question: bool = False
    is_fixed_screen: bool = False
    buttons: List[Button] = field(default_factory=list)
    portrait: Optional[ImageData] = None
    image: Optional[ImageData] = None
    audio: Optional[str] = None
    is_end_of_dialog: bool = False
    triggered_by_next: Optional[Callable[[], None]] = None

    def __post_init__(self):
        if self.is_question and not self.buttons:
            raise InvalidDialogFragmentError(
                f"Question fragment {self.label!r} has no buttons"
            )
        if self.type_speed is not None and self.type_speed != INSTANT_TYPE_SPEED and self.type_speed <= 0:
            raise InvalidDialogFragmentError(
                f"Fragment {self.label!r} has invalid type_speed {self.type_speed}"
            )

    @property
    def label(self) -> str:
        """Short identifier for logs and error messages."""
        if self.name:
            return self.name
        return self.text[:24]

    @property
    def allows_next(self) -> bool:
        """Whether the default "next" navigation applies to this fragment."""
        return not self.is_question and not self.is_fixed_screen
