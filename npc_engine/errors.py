"""Exception hierarchy for the NPC engine.

Every error is local to the call that raised it: the state machine is left in
its previous valid state (or, for dialog navigation errors, back in STANDING).
"""


class NPCEngineError(Exception):
    """Base class for all engine errors."""


class InvalidPathError(NPCEngineError):
    """Malformed waypoint list, curve request or starting index."""


class DialogError(NPCEngineError):
    """Base class for dialog script construction and navigation errors."""


class UnknownDialogTargetError(DialogError):
    """A fragment name or index does not exist in the dialog graph."""


class DuplicateDialogNameError(DialogError):
    """Two fragments of the same dialog graph share a name."""


class InvalidDialogFragmentError(DialogError):
    """A fragment breaks one of its own invariants (e.g. a question without buttons)."""


class InvalidChoiceError(NPCEngineError):
    """Missing or out of range button choice on a question fragment."""


class NoActiveDialogError(NPCEngineError):
    """A dialog operation was requested while the NPC is not talking."""
