"""
This module defines the :class:`RotationOrder` enumeration that selects the order in which the three elemental
rotations (pitch, heading, bank) are composed.
"""

from enum import Enum


__all__ = ['RotationOrder']


_AXIS_INDEX = {'P': 0, 'H': 1, 'B': 2}


class RotationOrder(Enum):
    """
    The order of the elemental rotation matrices in a composed euler rotation.

    The letters name the elemental matrices from left to right in the matrix product, so that ``BPH`` is
    :math:`\\mathbf{B}(b)\\mathbf{P}(p)\\mathbf{H}(h)`.  Pitch is about the x axis, heading about the y axis, and
    bank about the z axis.

    ``BPH`` is the default everywhere since it is the upright-to-object rotation (the fused Z-X-Y form).
    """

    PHB = 'PHB'
    """
    Pitch, then heading, then bank
    """

    PBH = 'PBH'
    """
    Pitch, then bank, then heading
    """

    HPB = 'HPB'
    """
    Heading, then pitch, then bank
    """

    HBP = 'HBP'
    """
    Heading, then bank, then pitch
    """

    BPH = 'BPH'
    """
    Bank, then pitch, then heading.  This is the upright-to-object order.
    """

    BHP = 'BHP'
    """
    Bank, then heading, then pitch
    """

    @property
    def axes(self) -> tuple[int, int, int]:
        """
        The axis index (0 for x/pitch, 1 for y/heading, 2 for z/bank) of each elemental matrix in product order
        """
        first, second, third = self.value
        return _AXIS_INDEX[first], _AXIS_INDEX[second], _AXIS_INDEX[third]

    @property
    def is_cyclic(self) -> bool:
        """
        Whether the axes appear in cyclic (x, y, z) order
        """
        return self.axes in ((0, 1, 2), (1, 2, 0), (2, 0, 1))

    @classmethod
    def coerce(cls, order: 'RotationOrder | str') -> 'RotationOrder':
        """
        Returns ``order`` as a :class:`RotationOrder`, accepting the letter names in any case.

        :param order: The order or its name
        :return: The matching order
        :raises ValueError: If the name does not match one of the six orders
        """

        if isinstance(order, cls):
            return order

        try:
            return cls(str(order).upper())
        except ValueError:
            raise ValueError(f'Invalid rotation order {order!r}.  Must be one of '
                             f'{", ".join(member.value for member in cls)}')
