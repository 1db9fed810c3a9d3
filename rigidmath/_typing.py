from typing import Union, Sequence

from datetime import datetime
from pandas import Timestamp

import numpy as np
import numpy.typing as npt

REAL_ARRAY = np.typing.NDArray[np.float32] | np.typing.NDArray[np.float64]
ARRAY_LIKE = npt.ArrayLike
SCALAR_OR_ARRAY = Union[float, npt.ArrayLike]

DatetimeLike = Union[datetime, Timestamp]

EULER_ANGLES = Sequence[float] | REAL_ARRAY
"""
Three angles ordered ``(pitch, heading, bank)``
"""
