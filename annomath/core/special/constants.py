# annomath/core/special/constants.py

"""
Named mathematical constants exposed through the catalog.
"""

import math
from typing import Dict

PI: float = math.pi
E: float = math.e
GOLDEN_RATIO: float = (1 + math.sqrt(5)) / 2
OMEGA: float = 0.5671432904097838 # Omega constant, W(1)
EULER_MASCHERONI: float = 0.5772156649015329

NAMED_CONSTANTS: Dict[str, float] = {
    "pi": PI,
    "e": E,
    "golden_ratio": GOLDEN_RATIO,
    "omega": OMEGA,
    "euler_mascheroni": EULER_MASCHERONI,
}
