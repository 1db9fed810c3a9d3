"""
This module provides the :class:`UserOptionConfigured` mixin class that enables classes to be
configured using :class:`.UserOptions`-derived classes while maintaining the ability to reset
to the original configuration state.

Example:
    Basic usage of the UserOptionConfigured mixin::

        from dataclasses import dataclass

        from rigidmath.utilities.options import UserOptions
        from rigidmath.utilities.mixin_classes.user_option_configured import UserOptionConfigured

        @dataclass
        class CameraRigOptions(UserOptions):
            height: float = 1.8
            field_of_view: float = 60.0

        class CameraRig(UserOptionConfigured[CameraRigOptions], CameraRigOptions):
            def __init__(self, options: CameraRigOptions | None = None):
                super().__init__(CameraRigOptions, options=options)

        rig = CameraRig()
        rig.height = 0.5  # crouch
        rig.reset_settings()
        print(rig.height)  # Output: 1.8

.. Note::
    The :class:`UserOptionConfigured` class should come first in the inheritance order
    due to Method Resolution Order (MRO) requirements.
"""

import copy

from typing import Generic, TypeVar

from rigidmath.utilities.options import UserOptions


OptionsT = TypeVar("OptionsT", bound=UserOptions)
"""
Type variable bound to UserOptions for type safety
"""


class UserOptionConfigured(Generic[OptionsT]):
    """
    Mixin class providing UserOptions-based configuration with reset capability.

    The options instance given at initialization (or a default instance of ``options_type`` when none is given) is
    applied to the new object as attributes and a deep copy of it is kept so that :meth:`reset_settings` can restore
    the configured state after the object has been modified in place.

    :param OptionsT: The :class:`UserOptions`-derived class type for configuration
    """

    def __init__(self, options_type: type[OptionsT], *args, options: OptionsT | None = None, **kwargs) -> None:
        """
        :param options_type: The type of the :class:`.UserOptions` to use
        :param options: An optional instance of `options_type` preconfigured.
        """

        super().__init__(*args, **kwargs)

        if options is None:
            options = options_type()

        self._original_options: OptionsT = copy.deepcopy(options)
        """
        The original configuration for this class
        """

        self.reset_settings()

    def reset_settings(self) -> None:
        """
        Resets the class to the state it was originally initialized with.

        Subclasses which derive state from the raw option values should override this, call the super method, and
        then rebuild the derived state.
        """

        copy.deepcopy(self._original_options).apply_options(self)

    @property
    def original_options(self) -> OptionsT:
        """
        The original configuration options.

        .. Warning::
            Modifying the returned object will affect reset behavior.
        """
        return self._original_options

    @original_options.setter
    def original_options(self, value: OptionsT) -> None:
        self._original_options = value
