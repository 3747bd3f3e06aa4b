import os

import numpy as np

# Backend used when a builder is called without an explicit one
DEFAULT_BACKEND = os.environ.get("TIMELAG_BACKEND", "numba")

DEFAULT_FILL = np.nan
