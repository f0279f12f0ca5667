"""
Price Model — цена продажи предмета по грейду

Политика (первое совпадение):
1. Экипировка с известным max урона > 0 (оружие):
       price = round_half_up(max_damage * 10 * grade_multiplier)
2. Иначе экипировка с положительной текущей ценой (броня): текущая цена уже
   содержит множитель грейда; восстанавливаем базу и применяем заново:
       base = max(10, price / grade_multiplier)
       price = round_half_up(base * grade_multiplier)
3. Иначе цена не меняется.

Порядок веток значим: ветка брони выбирается по отсутствию урона, а не по
сравнению "цена не изменилась". Ветка брони идемпотентна, пока сохранённая
цена отражает ту же таблицу множителей.

Грейд вне ординального набора → UnknownGrade, цена не назначается.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

from ecobalance.core.domain.items import ItemGrade, ItemRecord
from ecobalance.core.domain.profile import DEFAULT_PROFILE, BalanceProfile
from ecobalance.core.errors import BalanceError, SkippedRecord, UnknownGrade
from ecobalance.core.math.numerical_safeguards import mean_floor, round_half_up

logger = logging.getLogger("ecobalance")


# =============================================================================
# RESULTS
# =============================================================================


@dataclass(frozen=True)
class RepriceOutcome:
    """Предмет, чья цена была пересчитана и записана."""

    item_id: str
    grade: ItemGrade
    previous_price: int
    new_price: int


@dataclass(frozen=True)
class RepriceBatchResult:
    """Результат пакетного пересчёта цен."""

    repriced: List[RepriceOutcome]
    unchanged: int
    failures: List[SkippedRecord]


@dataclass(frozen=True)
class GradePriceStats:
    """Количество и средняя цена по грейду."""

    grade: ItemGrade
    count: int
    mean_price: int


# =============================================================================
# PRICING
# =============================================================================


def resolve_grade(item: ItemRecord) -> ItemGrade:
    """
    Ординал грейда → ItemGrade.

    Raises:
        UnknownGrade: если грейд вне None..Legendary
    """
    if not ItemGrade.is_known(item.grade):
        raise UnknownGrade(item.grade, item.item_id)
    return ItemGrade(item.grade)


def grade_multiplier(grade: int, profile: BalanceProfile = DEFAULT_PROFILE) -> float:
    """
    Множитель цены для грейда.

    Raises:
        UnknownGrade: если грейд вне None..Legendary

    Examples:
        >>> grade_multiplier(ItemGrade.RARE)
        3.0
    """
    if not ItemGrade.is_known(grade):
        raise UnknownGrade(grade)
    return profile.multiplier_for(ItemGrade(grade))


def price_for_item(item: ItemRecord, profile: BalanceProfile = DEFAULT_PROFILE) -> int:
    """
    Новая цена продажи предмета (без записи).

    Returns:
        Новая цена; для предметов вне политики — текущая цена

    Raises:
        UnknownGrade: если грейд вне None..Legendary

    Examples:
        >>> price_for_item(ItemRecord(item_id="sword", grade=1, weapon_max_damage=12))
        120
    """
    grade = resolve_grade(item)
    multiplier = profile.multiplier_for(grade)

    if item.is_weapon:
        return round_half_up(item.weapon_max_damage * profile.weapon_price_per_damage * multiplier)

    if item.is_equipment and item.sell_price > 0:
        base_price = max(float(profile.armor_min_base_price), item.sell_price / multiplier)
        return round_half_up(base_price * multiplier)

    return item.sell_price


def reprice_item(item: ItemRecord, profile: BalanceProfile = DEFAULT_PROFILE) -> int:
    """
    Пересчёт и запись цены на месте; запись только при изменении и price > 0.

    Returns:
        Итоговая цена предмета

    Raises:
        UnknownGrade: если грейд вне None..Legendary
    """
    new_price = price_for_item(item, profile)
    if new_price != item.sell_price and new_price > 0:
        item.sell_price = new_price
    return item.sell_price


def reprice_items(
    items: Sequence[ItemRecord],
    profile: BalanceProfile = DEFAULT_PROFILE,
) -> RepriceBatchResult:
    """
    Пакетный пересчёт цен. Ошибка одного предмета не прерывает пакет.
    """
    repriced: List[RepriceOutcome] = []
    failures: List[SkippedRecord] = []
    unchanged = 0

    for item in items:
        previous = item.sell_price
        try:
            current = reprice_item(item, profile)
        except BalanceError as e:
            logger.warning("[Balance] skipped item %s: %s", item.item_id, e)
            failures.append(SkippedRecord.from_error(item.item_id, "item", e))
            continue

        if current == previous:
            unchanged += 1
            continue

        repriced.append(
            RepriceOutcome(
                item_id=item.item_id,
                grade=ItemGrade(item.grade),
                previous_price=previous,
                new_price=current,
            )
        )

    logger.info("[Balance] %d item prices adjusted", len(repriced))

    return RepriceBatchResult(repriced=repriced, unchanged=unchanged, failures=failures)


# =============================================================================
# AGGREGATE
# =============================================================================


def grade_price_stats(
    items: Sequence[ItemRecord],
) -> Tuple[List[GradePriceStats], List[SkippedRecord]]:
    """
    Количество и средняя цена продажи по каждому грейду кроме None.

    Грейды без предметов присутствуют с count=0 и mean_price=0, чтобы таблица
    всегда имела одинаковый набор строк.

    Returns:
        (stats в порядке грейдов, failures для предметов с неизвестным грейдом)
    """
    prices: Dict[ItemGrade, List[int]] = {grade: [] for grade in ItemGrade}
    failures: List[SkippedRecord] = []

    for item in items:
        try:
            grade = resolve_grade(item)
        except UnknownGrade as e:
            failures.append(SkippedRecord.from_error(item.item_id, "item", e))
            continue
        prices[grade].append(item.sell_price)

    stats = [
        GradePriceStats(grade=grade, count=len(prices[grade]), mean_price=mean_floor(prices[grade]))
        for grade in ItemGrade
        if grade != ItemGrade.NONE
    ]
    return stats, failures


def mean_gear_price(
    items: Sequence[ItemRecord],
    grade: ItemGrade,
    price_floor: int,
) -> int:
    """
    Средняя цена предметов грейда grade дороже price_floor (0 если таких нет).

    Дешёвые предметы (расходники, материалы) отсекаются порогом, чтобы
    среднее отражало цену снаряжения. Предметы с неизвестным грейдом
    не учитываются.
    """
    return mean_floor(
        item.sell_price
        for item in items
        if item.grade == grade and item.sell_price > price_floor
    )
