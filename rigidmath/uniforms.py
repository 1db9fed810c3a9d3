"""
This module provides the adapter between the rigidmath value types and the uniform/vertex attribute layouts expected
by GPU shading languages.

Only the data layout is handled here.  Uploading the data is up to the graphics library in use, which typically
accepts either the flat numpy array of :attr:`UniformValue.data` or the raw bytes from :func:`as_uniform_bytes`.

The layouts are fixed:

==============  ============================  ========================================================================
Value           Kind                          Data
==============  ============================  ========================================================================
``VectorN``     ``vecN`` / ``dvecN``          the components in ``x, y, z, w`` order
``MatrixN``     ``matN`` / ``dmatN``          the elements in column-major order (the transpose of the row-major
                                              storage flattened), as GLSL expects
``Quaternion``  ``vec4`` / ``dvec4``          the components in ``w, x, y, z`` order
==============  ============================  ========================================================================

The ``d`` prefixed kinds are used for double precision values.
"""

from typing import NamedTuple, Protocol, runtime_checkable, Any

import numpy as np

from rigidmath._typing import REAL_ARRAY


__all__ = ['UniformValue', 'SupportsUniform', 'as_uniform_value', 'attribute_type', 'as_uniform_bytes']


class UniformValue(NamedTuple):
    """
    A value laid out for upload as a GPU uniform.
    """

    kind: str
    """
    The GLSL type name (for instance ``'mat4'`` or ``'dvec3'``)
    """

    data: REAL_ARRAY
    """
    The flat, contiguous array of elements in upload order
    """


@runtime_checkable
class SupportsUniform(Protocol):
    """
    Anything that can describe itself as a GPU uniform.
    """

    def as_uniform_value(self) -> UniformValue: ...


def _layout(value: Any) -> tuple[str, tuple[int, ...], np.dtype]:
    try:
        return value.uniform_kind, tuple(value.shape), np.dtype(value.dtype)
    except AttributeError:
        raise TypeError(f'{type(value).__name__} cannot be used as a uniform value')


def as_uniform_value(value: Any) -> UniformValue:
    """
    Lays a vector, matrix, or quaternion out for upload as a uniform.

    :param value: The value to lay out
    :return: The uniform kind and the flat data in upload order
    :raises TypeError: If the value is not one of the rigidmath value types
    """

    family, shape, dtype = _layout(value)

    prefix = 'd' if dtype == np.float64 else ''

    array = np.asarray(value)

    if family == 'mat':
        # graphics APIs read matrices column by column
        return UniformValue(f'{prefix}mat{shape[0]}', np.ascontiguousarray(array.T).ravel())

    return UniformValue(f'{prefix}vec{shape[0]}', np.ascontiguousarray(array).ravel())


def attribute_type(value: Any) -> str:
    """
    Returns the vertex attribute type tag for a value.

    Vectors (and quaternions) are tagged by repeating the component type once per component (``'F32F32F32'``) and
    matrices by the component type followed by the dimensions (``'F64x4x4'``).

    :param value: The value to tag
    :return: The attribute type tag
    :raises TypeError: If the value is not one of the rigidmath value types
    """

    family, shape, dtype = _layout(value)

    component = 'F64' if dtype == np.float64 else 'F32'

    if family == 'mat':
        return f'{component}x{shape[0]}x{shape[1]}'

    return component * shape[0]


def as_uniform_bytes(value: Any) -> bytes:
    """
    Returns the raw bytes of :func:`as_uniform_value` for a value.

    :param value: The value to convert
    :return: The bytes in upload order, in the machine's native byte order
    """

    return as_uniform_value(value).data.tobytes()
