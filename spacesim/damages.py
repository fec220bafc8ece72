"""Turning weapon hits into armor, hull and component damage."""

from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass
from typing import List, Mapping, Optional

from spacesim.combat_log import CombatLog, ComponentDestroy, Hit, ShipDestroyed, destroyed_component_ships
from spacesim.ship_internals import (
    ArmorIndex,
    ComponentId,
    Components,
    ShipInstance,
    ShipInstanceId,
    WeaponDamageType,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class DamageToApply:
    attacker_id: ShipInstanceId
    target_id: ShipInstanceId
    amount: int
    weapon_id: ComponentId
    damage_type: WeaponDamageType


def apply_damages(
    components: Components,
    logs: List[CombatLog],
    ships: Mapping[ShipInstanceId, ShipInstance],
    damages: List[DamageToApply],
    rng: Optional[random.Random] = None,
) -> None:
    """Apply every damage to its target, then check ships that lost components for wrecking."""
    rng = rng or random.Random()
    for damage in damages:
        _apply_damage(components, logs, ships[damage.target_id], damage, rng)

    for ship_id in destroyed_component_ships(logs):
        ship = ships[ship_id]
        total_hull = ship.spec.hull_hp(components)
        if wreck_check(total_hull, ship.total_hull_damage(), rng):
            logs.append(ShipDestroyed(id=ship.id))
            ship.wreck = True
        ship.update_stats(components)


def _apply_damage(
    components: Components,
    logs: List[CombatLog],
    ship: ShipInstance,
    damage: DamageToApply,
    rng: random.Random,
) -> None:
    armor_width = ship.spec.armor.width
    index = rng.randrange(armor_width)
    hull_hits = []
    for damage_index in generate_damage_indexes(
        damage.damage_type, damage.amount, index, armor_width
    ):
        hull_damage = _ship_apply_damage(ship, damage_index)
        if hull_damage:
            hull_hits.append(damage_index)
        logs.append(
            Hit(
                id=damage.attacker_id,
                target_id=damage.target_id,
                damage=damage.amount,
                weapon_id=damage.weapon_id,
                armor_index=damage_index,
                hull_damage=hull_damage,
            )
        )

    for _ in hull_hits:
        _ship_apply_hull_damage(logs, components, ship, rng)


def wreck_check(total_hull: int, total_damage: int, rng: Optional[random.Random] = None) -> bool:
    """Roll whether a ship with this much hull damage is wrecked."""
    if total_hull // 2 > total_damage:
        log.debug(
            "combat - wreck check not required, hp: %r / 2 > damage: %r", total_hull, total_damage
        )
        return False

    if total_hull == 0:
        ratio = math.inf if total_damage > 0 else math.nan
    else:
        ratio = total_damage / total_hull
    chance = ratio**2
    dice = (rng or random.Random()).random()
    destroyed = chance >= dice
    log.debug("combat - wreck check %s, chance: %r, dice: %r", destroyed, chance, dice)
    return destroyed


def generate_damage_indexes(
    damage_type: WeaponDamageType, amount: int, index: ArmorIndex, armor_width: int
) -> List[ArmorIndex]:
    if damage_type is WeaponDamageType.PENETRATION:
        return generate_penetration_damage_indexes(amount, index, armor_width)
    return generate_explosive_damage_indexes(amount, index, armor_width)


def generate_explosive_damage_indexes(
    amount: int, index: ArmorIndex, armor_width: int
) -> List[ArmorIndex]:
    """Spread damage outward from ``index``, alternating left and right in a pyramid."""
    result = []
    width = 0
    max_width = 0
    left = True
    for _ in range(amount):
        if width == 0:
            left = True
            max_width += 1
            width = max_width
            relative = 0
        elif left:
            left = False
            relative = -width
        else:
            left = True
            relative = width
            width -= 1

        target = index + relative
        if 0 <= target < armor_width:
            result.append(target)
    return result


def generate_penetration_damage_indexes(
    amount: int, index: ArmorIndex, armor_width: int
) -> List[ArmorIndex]:
    """Hit the same column three times, then cycle left, right and centre."""
    result = []
    for i in range(amount):
        if i >= 3 and i % 3 == 0:
            target = index - 1
        elif i >= 3 and (i - 1) % 3 == 0:
            target = index + 1
        else:
            target = index
        if 0 <= target < armor_width:
            result.append(target)
    return result


def _ship_apply_damage(ship: ShipInstance, damage_index: ArmorIndex) -> bool:
    """Damage the first intact armor layer; return True if the hit reached the hull."""
    i = damage_index
    for _ in range(ship.spec.armor.height):
        if i not in ship.armor_damage:
            ship.armor_damage.add(i)
            return False
        i += ship.spec.armor.width
    return True


def _ship_apply_hull_damage(
    logs: List[CombatLog],
    components: Components,
    ship: ShipInstance,
    rng: random.Random,
) -> None:
    hit = rng.randrange(ship.spec.component_table.total)
    for component_id, width in ship.spec.component_table.sequence:
        hit -= width
        if hit > 0:
            continue

        total_damage = ship.component_damage.get(component_id, 0) + 1
        ship.component_damage[component_id] = total_damage

        component = components.get(component_id)
        total_width = component.size * ship.spec.components[component_id]
        damage_percent = total_damage / total_width if total_width else math.inf
        if rng.random() < damage_percent:
            ship.component_destroyed[component_id] = ship.component_destroyed.get(component_id, 0) + 1
            logs.append(ComponentDestroy(id=ship.id, component_id=component_id))
        break