"""Explicit discriminant shared by every container variant."""

from __future__ import annotations

from enum import Enum

__all__ = ['Variant']


class Variant(Enum):
    """Tag identifying the active variant of an Option or a Result.

    The values double as the keys of a keyed branch set in ``match``.
    """

    SOME = 'Some'
    NONE = 'None'
    OK = 'Ok'
    ERR = 'Err'
