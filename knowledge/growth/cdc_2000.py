"""
CDC 2000 BMI-for-age reference using the LMS method.

Reference: https://www.cdc.gov/growthcharts/

The LMS method expresses growth as:
- L (lambda): Box-Cox power transformation
- M (mu): Median
- S (sigma): Coefficient of variation

Z-score = ((value/M)^L - 1) / (L * S)  when L ≠ 0
Z-score = ln(value/M) / S              when L = 0

The tables are looked up by nearest tabulated age, never interpolated, so a
stored result can always name the exact triplet it was graded against.
"""

from __future__ import annotations

import math
from types import MappingProxyType
from typing import Mapping

LmsTriplet = tuple[float, float, float]
LmsTable = Mapping[float, LmsTriplet]

# Z for the 95th percentile, used for the severe obesity threshold
Z_95TH_PERCENTILE = 1.64485

# BMI-for-age, Males, 24-240 months (BMI only meaningful after 2 years)
BMI_FOR_AGE_MALE: LmsTable = MappingProxyType({
    24: (-0.7766, 16.42, 0.0861),
    36: (-1.2236, 15.79, 0.0823),
    48: (-1.4997, 15.48, 0.0839),
    60: (-1.6315, 15.34, 0.0885),
    72: (-1.6623, 15.32, 0.0950),
    84: (-1.6293, 15.44, 0.1024),
    96: (-1.5635, 15.72, 0.1102),
    108: (-1.4867, 16.15, 0.1178),
    120: (-1.4143, 16.72, 0.1250),
    132: (-1.3563, 17.44, 0.1311),
    144: (-1.3159, 18.30, 0.1360),
    156: (-1.2932, 19.27, 0.1394),
    168: (-1.2865, 20.29, 0.1413),
    180: (-1.2926, 21.29, 0.1417),
    192: (-1.3074, 22.21, 0.1407),
    204: (-1.3268, 23.02, 0.1388),
    216: (-1.3467, 23.69, 0.1364),
    228: (-1.3651, 24.22, 0.1339),
    240: (-1.3815, 24.63, 0.1317),
})

# BMI-for-age, Females, 24-240 months
BMI_FOR_AGE_FEMALE: LmsTable = MappingProxyType({
    24: (-0.6075, 16.13, 0.0917),
    36: (-0.9803, 15.58, 0.0890),
    48: (-1.1963, 15.29, 0.0903),
    60: (-1.2959, 15.17, 0.0942),
    72: (-1.3224, 15.17, 0.0997),
    84: (-1.3064, 15.32, 0.1063),
    96: (-1.2716, 15.59, 0.1132),
    108: (-1.2353, 16.00, 0.1200),
    120: (-1.2062, 16.53, 0.1264),
    132: (-1.1882, 17.20, 0.1319),
    144: (-1.1814, 18.00, 0.1361),
    156: (-1.1839, 18.88, 0.1389),
    168: (-1.1929, 19.79, 0.1401),
    180: (-1.2053, 20.66, 0.1399),
    192: (-1.2183, 21.43, 0.1388),
    204: (-1.2301, 22.07, 0.1373),
    216: (-1.2399, 22.56, 0.1358),
    228: (-1.2475, 22.93, 0.1346),
    240: (-1.2531, 23.20, 0.1338),
})

# Keyed by the binary sex key ("male" / "female")
BMI_LMS_TABLES: Mapping[str, LmsTable] = MappingProxyType({
    "male": BMI_FOR_AGE_MALE,
    "female": BMI_FOR_AGE_FEMALE,
})

# Below this |L| the Box-Cox form degenerates to the log form
L_ZERO_THRESHOLD = 1e-10


def nearest_lms(
    table: LmsTable,
    age_months: float,
) -> tuple[float, LmsTriplet] | None:
    """
    Find the tabulated age closest to `age_months` and its LMS triplet.

    Equidistant candidates resolve to the lower age. Returns None for an
    empty table.
    """
    if not table:
        return None

    closest = min(table.keys(), key=lambda a: (abs(a - age_months), a))
    lms = table.get(closest)
    if lms is None:
        return None
    return closest, lms


def z_score_from_lms(value: float, L: float, M: float, S: float) -> float:
    """
    Calculate Z-score from value and LMS parameters.
    """
    if abs(L) < L_ZERO_THRESHOLD:  # L ≈ 0
        return math.log(value / M) / S
    else:
        return (math.pow(value / M, L) - 1) / (L * S)


def value_from_lms_z(z: float, L: float, M: float, S: float) -> float:
    """
    Calculate value from Z-score and LMS parameters.
    """
    if abs(L) < L_ZERO_THRESHOLD:  # L ≈ 0
        return M * math.exp(z * S)
    else:
        return M * math.pow(1 + L * S * z, 1 / L)
