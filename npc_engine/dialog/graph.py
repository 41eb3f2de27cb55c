"""Dialog graph: an indexable, name-addressable dialog script."""

from __future__ import annotations
from typing import Iterable, Iterator, List, Union

from ..errors import DuplicateDialogNameError, UnknownDialogTargetError
from .model import ByIndex, ByName, DialogFragment, DialogTarget, to_target


class DialogGraph:
    """Immutable collection of fragments with branch resolution.

    The graph holds no navigation state; that lives in DialogSession.
    """

    def __init__(self, fragments: Iterable[DialogFragment]):
        self._fragments: List[DialogFragment] = list(fragments)
        self._names = {}
        for index, fragment in enumerate(self._fragments):
            if fragment.name is None:
                continue
            if fragment.name in self._names:
                raise DuplicateDialogNameError(
                    f"Dialog name {fragment.name!r} used by fragments "
                    f"{self._names[fragment.name]} and {index}"
                )
            self._names[fragment.name] = index

    def __len__(self) -> int:
        return len(self._fragments)

    def __iter__(self) -> Iterator[DialogFragment]:
        return iter(self._fragments)

    def resolve(self, target: Union[DialogTarget, int, str]) -> int:
        """Resolve a jump target to a fragment index.

        Raises:
            UnknownDialogTargetError: unknown name or out of range index.
        """
        target = to_target(target)
        if isinstance(target, ByName):
            try:
                return self._names[target.name]
            except KeyError:
                raise UnknownDialogTargetError(f"No dialog fragment named {target.name!r}") from None
        if not 0 <= target.index < len(self._fragments):
            raise UnknownDialogTargetError(
                f"Dialog index {target.index} out of range (0..{len(self._fragments) - 1})"
            )
        return target.index

    def fragment_at(self, index: int) -> DialogFragment:
        return self._fragments[self.resolve(ByIndex(index))]

    def has_name(self, name: str) -> bool:
        return name in self._names

    def validate(self) -> List[str]:
        """List unresolved button targets without raising."""
        issues = []
        for index, fragment in enumerate(self._fragments):
            for button in fragment.buttons:
                try:
                    self.resolve(button.go_to)
                except UnknownDialogTargetError as e:
                    issues.append(f"Fragment {index} button {button.label!r}: {e}")
        return issues
