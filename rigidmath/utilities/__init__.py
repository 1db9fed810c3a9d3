"""
This package provides the configuration helpers used throughout rigidmath.

The :class:`.UserOptions` dataclass base is used to declare default configuration and the mixin classes in
:mod:`.mixin_classes` apply that configuration to the classes that consume it.
"""

from rigidmath.utilities.options import UserOptions
from rigidmath.utilities.mixin_classes import AttributeEqualityComparison, AttributePrinting, UserOptionConfigured

__all__ = ["UserOptions", "AttributeEqualityComparison", "AttributePrinting", "UserOptionConfigured"]
