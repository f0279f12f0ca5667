"""
Numerical Safeguards — целочисленные примитивы для таблиц баланса

Все величины баланса (опыт, золото, цены) целые. Модуль сводит приведение
float → int к небольшому набору явно названных операций, чтобы каждое место
округления в движке было видно по имени функции:

- floor_scaled_power: точный floor(scale * base ** exponent) в рациональной
  арифметике (кривые опыта и усиления, награды подземелий)
- floor_to_int: отсечение к меньшему целому для значений, которые нельзя
  посчитать точно
- ceil_div: целочисленный потолок деления без float (счётчик убийств)
- round_half_up: детерминированное округление половины вверх (цены)
- mean_floor: среднее по целым с отсечением (распределения цен)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Деление на ноль никогда не происходит (ValueError до деления)
2. NaN/Inf не превращаются в целое молча (ValueError)
3. floor_scaled_power совпадает с математическим floor для любого уровня,
   а не только для малых значений
4. Все операции детерминированы и воспроизводимы
"""

import math
from fractions import Fraction
from typing import Final, Iterable

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Абсолютный допуск при отсечении float: 799.9999999999999 → 800.
# Допуск не растёт со значением, иначе floor больших величин сдвигается на 1.
EPS_FLOOR: Final[float] = 1e-9

# Максимальный знаменатель показателя степени для точного расчёта
# (1.5 = 3/2, 2.25 = 9/4). Иррациональные показатели считаются через float.
MAX_EXACT_DENOMINATOR: Final[int] = 64


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, что значение конечное (не NaN и не Inf).

    Examples:
        >>> is_valid_float(1.5)
        True
        >>> is_valid_float(float('nan'))
        False
    """
    return math.isfinite(value)


# =============================================================================
# ТОЧНАЯ АРИФМЕТИКА
# =============================================================================


def as_fraction(value: float) -> Fraction:
    """
    Десятичная запись числа → точная дробь.

    Множители контента задаются десятичными литералами (1.2, 1.8), поэтому
    берётся кратчайшая десятичная запись float, а не его двоичное значение.

    Raises:
        ValueError: если value NaN/Inf

    Examples:
        >>> as_fraction(1.8)
        Fraction(9, 5)
        >>> as_fraction(10)
        Fraction(10, 1)
    """
    value = float(value)
    if not is_valid_float(value):
        raise ValueError(f"Cannot convert non-finite value to fraction: {value}")
    return Fraction(repr(value))


def integer_root(value: int, n: int) -> int:
    """
    Целочисленный корень степени n: наибольшее k, для которого k ** n <= value.

    Raises:
        ValueError: если value < 0 или n < 1

    Examples:
        >>> integer_root(27, 3)
        3
        >>> integer_root(10 ** 7, 2)
        3162
    """
    if value < 0:
        raise ValueError(f"value must be non-negative, got {value}")
    if n < 1:
        raise ValueError(f"root degree must be >= 1, got {n}")
    if n == 1 or value < 2:
        return value
    if n == 2:
        return math.isqrt(value)

    # Ньютон сверху: начальное приближение 2 ** ceil(bits / n) >= корня
    x = 1 << -(-value.bit_length() // n)
    while True:
        y = ((n - 1) * x + value // x ** (n - 1)) // n
        if y >= x:
            return x
        x = y


def floor_scaled_power(scale: int, base: float, exponent: float) -> int:
    """
    floor(scale * base ** exponent) без ошибки представления float.

    Для показателя p/q с q <= MAX_EXACT_DENOMINATOR результат точный:
        floor(scale * (a/b) ** (p/q)) = integer_root(scale**q * a**p // b**p, q)
    Иначе значение считается во float и отсекается floor_to_int.

    Args:
        scale: Целый множитель (>= 0)
        base: Основание степени (>= 0)
        exponent: Показатель степени (>= 0)

    Returns:
        int

    Raises:
        ValueError: если аргумент отрицательный или не конечный

    Examples:
        >>> floor_scaled_power(100, 10, 1.5)
        3162
        >>> floor_scaled_power(1000, 1.2, 2)
        1440
        >>> floor_scaled_power(100, 1.8, 26)
        433595865
    """
    if scale < 0:
        raise ValueError(f"scale must be non-negative, got {scale}")
    ratio = as_fraction(base)
    power = as_fraction(exponent)
    if ratio < 0 or power < 0:
        raise ValueError(f"base and exponent must be non-negative, got {base}, {exponent}")

    if power.denominator > MAX_EXACT_DENOMINATOR:
        return floor_to_int(scale * float(base) ** float(exponent))

    p, q = power.numerator, power.denominator
    radicand = (scale ** q) * ratio.numerator ** p // ratio.denominator ** p
    return integer_root(radicand, q)


# =============================================================================
# ОКРУГЛЕНИЕ
# =============================================================================


def floor_to_int(value: float, eps: float = EPS_FLOOR) -> int:
    """
    Отсечение к меньшему целому с защитой от ошибки представления float.

    Если value отстоит от ближайшего целого меньше чем на eps (абсолютно),
    результат — это целое. Иначе обычный floor.

    Args:
        value: Конечное значение
        eps: Абсолютный допуск

    Returns:
        int

    Raises:
        ValueError: если value NaN/Inf

    Examples:
        >>> floor_to_int(3162.2776601683795)
        3162
        >>> floor_to_int(799.9999999999999)
        800
        >>> floor_to_int(-0.5)
        -1
    """
    if not is_valid_float(value):
        raise ValueError(f"Cannot floor non-finite value: {value}")

    nearest = round(value)
    if abs(value - nearest) <= eps:
        return int(nearest)
    return math.floor(value)


def round_half_up(value: float) -> int:
    """
    Округление половины вверх (а не банковское округление round()).

    Examples:
        >>> round_half_up(2.5)
        3
        >>> round_half_up(120.0)
        120
        >>> round_half_up(70.99999999999999)
        71
    """
    if not is_valid_float(value):
        raise ValueError(f"Cannot round non-finite value: {value}")
    return math.floor(value + 0.5)


def ceil_div(numerator: int, denominator: int) -> int:
    """
    Целочисленный потолок деления без промежуточного float.

    Args:
        numerator: Делимое (>= 0)
        denominator: Делитель (> 0)

    Returns:
        ceil(numerator / denominator)

    Raises:
        ValueError: если denominator <= 0

    Examples:
        >>> ceil_div(100, 4)
        25
        >>> ceil_div(3162, 4)
        791
        >>> ceil_div(0, 7)
        0
    """
    if denominator <= 0:
        raise ValueError(f"denominator must be positive, got {denominator}")
    return -(-numerator // denominator)


def mean_floor(values: Iterable[int]) -> int:
    """
    Среднее по целым значениям с отсечением; 0 для пустой выборки.

    Examples:
        >>> mean_floor([100, 150, 201])
        150
        >>> mean_floor([])
        0
    """
    total = 0
    count = 0
    for v in values:
        total += v
        count += 1
    if count == 0:
        return 0
    return total // count
