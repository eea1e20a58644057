"""
Module: errors

Purpose:
    Exception taxonomy shared by the models and the tree engine. Each
    subclass also inherits the closest builtin so callers can catch
    either the tree-specific type or the generic one.

Key Classes:
    - TreeError: Base class for everything raised by modtree
    - InvalidArgumentError: Missing reference, bad level or id
    - NotFoundError: Absent group, leaf or level match
    - DuplicateStateError: Group already present on insert
    - AlreadyResolvedError: Leaf already detached from its owner

Used By:
    - core.models.modification / core.models.groups
    - tree.binary_tree
    - config
"""

from __future__ import annotations


class TreeError(Exception):
    """Base class for modification tree errors."""
    pass


class InvalidArgumentError(TreeError, ValueError):
    """A required reference was None, or a level/id was out of range."""
    pass


class NotFoundError(TreeError, LookupError):
    """
    The requested group, leaf or level match does not exist.

    This is a routine outcome, not a defect.
    """
    pass


class DuplicateStateError(TreeError):
    """The group is already present in the tree; nothing was changed."""
    pass


class AlreadyResolvedError(TreeError):
    """
    The leaf has no owner any more.

    Raised by ``Modification.resolved()`` on a second call. Callers should
    treat it as "already done" and carry on.
    """
    pass


def require(value, what: str):
    """Return ``value`` or raise InvalidArgumentError if it is None."""
    if value is None:
        raise InvalidArgumentError(f"{what} cannot be None")
    return value
