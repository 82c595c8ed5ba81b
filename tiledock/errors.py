"""
Error Types

Exceptions raised by the layout engine.

Ineligible drop targets are not errors (they are silent no-ops) and
out-of-bounds geometry never reaches a layout because snapping clamps it.
What remains is a programming defect: an event or command that references a
module or window the layout does not contain.
"""


class TileDockError(Exception):
    """Base class for all tiledock errors."""


class InvariantViolation(TileDockError):
    """A layout invariant would be broken, or an id does not resolve.

    Raised instead of producing a corrupt layout. Callers should treat this
    as a bug in the code driving the engine, not as a user-facing error.
    """
