"""
Core math modules

Целочисленные примитивы округления и закрытые формулы кривых.
"""

# Numerical Safeguards
from ecobalance.core.math.numerical_safeguards import (
    EPS_FLOOR,
    MAX_EXACT_DENOMINATOR,
    as_fraction,
    ceil_div,
    floor_scaled_power,
    floor_to_int,
    integer_root,
    is_valid_float,
    mean_floor,
    round_half_up,
)

# Curves
from ecobalance.core.math.curves import (
    EnhancementStep,
    cumulative_experience,
    enhance_cost,
    enhancement_cost_curve,
    experience_for_level,
    first_non_increasing_level,
    level_curve,
    reference_hp,
    reference_mp,
)

__all__ = [
    # Numerical Safeguards
    "EPS_FLOOR",
    "MAX_EXACT_DENOMINATOR",
    "as_fraction",
    "ceil_div",
    "floor_scaled_power",
    "floor_to_int",
    "integer_root",
    "is_valid_float",
    "mean_floor",
    "round_half_up",
    # Curves: types
    "EnhancementStep",
    # Curves: functions
    "cumulative_experience",
    "enhance_cost",
    "enhancement_cost_curve",
    "experience_for_level",
    "first_non_increasing_level",
    "level_curve",
    "reference_hp",
    "reference_mp",
]
