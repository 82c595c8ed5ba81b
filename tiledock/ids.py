"""
Id Generators

Windows synthesized during a drag need fresh ids. Generators are plain
zero-argument callables returning a string, injected into the components that
need them so that no process-wide counter is shared between sessions.
"""

from __future__ import annotations
import itertools
import uuid
from typing import Callable

IdFactory = Callable[[], str]


def uuid_ids() -> IdFactory:
    """Return a generator producing random hex UUIDs."""
    return lambda: uuid.uuid4().hex


def counter_ids(prefix: str = "", start: int = 1) -> IdFactory:
    """Return a generator producing ``prefix1``, ``prefix2``, ...

    Useful for deterministic sessions and tests.
    """
    counter = itertools.count(start)
    return lambda: f"{prefix}{next(counter)}"
