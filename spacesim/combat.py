"""One combat round: targeting, firing, hit rolls and damage."""

from __future__ import annotations

import copy
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from spacesim.combat_log import CombatLog, Miss, NoTarget, Recharging
from spacesim.damages import DamageToApply, apply_damages
from spacesim.ship_internals import (
    ComponentId,
    Components,
    ShipInstance,
    ShipInstanceId,
    Weapon,
)
from spacesim.utils import Speed

log = logging.getLogger(__name__)


class CombatContext:
    """Short-lived state for running combat between a set of ships."""

    def __init__(self, components: Components) -> None:
        self.components = components
        self.delta_time = 0.0
        self.total_time = 0.0
        self._ships: Dict[ShipInstanceId, ShipInstance] = {}
        self._distances: Dict[Tuple[ShipInstanceId, ShipInstanceId], float] = {}

    def add_ship(self, ship: ShipInstance) -> None:
        if ship.id in self._ships:
            raise ValueError(f"ship {ship.id} already in combat")
        self._ships[ship.id] = ship

    def ships(self) -> List[ShipInstance]:
        """Snapshots of the ships taking part."""
        return [copy.deepcopy(ship) for ship in self._ships.values()]

    def set_distance(self, id0: ShipInstanceId, id1: ShipInstanceId, distance: float) -> None:
        self._distances[(id0, id1)] = distance
        self._distances[(id1, id0)] = distance

    def set_time(self, delta_time: float, total_time: float) -> None:
        self.delta_time = delta_time
        self.total_time = total_time


@dataclass
class _WeaponFire:
    target_id: ShipInstanceId
    weapons: List[ComponentId] = field(default_factory=list)


def _div(a: float, b: float) -> float:
    if b:
        return a / b
    if a == 0 or math.isnan(a):
        return math.nan
    return math.copysign(math.inf, a)


def compute_hit_chance(
    weapon: Weapon, attack_speed: Speed, target_width: int, target_speed: Speed
) -> float:
    """Chance to hit: faster targets are harder to hit, wider ones easier."""
    speed_ratio = 0.5 ** _div(target_speed.value, attack_speed.value)
    size_bonus = 0.1 ** _div(100.0, float(target_width))
    value = speed_ratio + size_bonus
    level = logging.WARNING if value < 0.01 or value > 0.99 else logging.DEBUG
    log.log(
        level,
        "combat - hit chance %r, target %r, width %r. speed_ratio %r, size_bonus %r, value %r",
        attack_speed,
        target_speed,
        target_width,
        speed_ratio,
        size_bonus,
        value,
    )
    return value


def execute(
    ctx: CombatContext, logs: List[CombatLog], rng: Optional[random.Random] = None
) -> None:
    """Run one combat round, appending what happens to ``logs``."""
    rng = rng or random.Random()
    targets = _acquire_targets(ctx, logs)
    fires = _fire_weapons(ctx, logs, targets)
    damages = _compute_hits(ctx, logs, fires, rng)
    apply_damages(ctx.components, logs, ctx._ships, damages, rng)


def _acquire_targets(
    ctx: CombatContext, logs: List[CombatLog]
) -> Dict[ShipInstanceId, ShipInstanceId]:
    targets = {}
    for attacker_id, ship in ctx._ships.items():
        if ship.wreck:
            continue
        target_id = _search_best_target(ctx, attacker_id)
        if target_id is None:
            logs.append(NoTarget(id=attacker_id))
        else:
            targets[attacker_id] = target_id
    return targets


def _search_best_target(
    ctx: CombatContext, attacker_id: ShipInstanceId
) -> Optional[ShipInstanceId]:
    team_id = ctx._ships[attacker_id].team_id
    candidates = [
        (ctx._distances[(attacker_id, other_id)], other_id)
        for other_id, other in ctx._ships.items()
        if other.team_id != team_id
    ]
    if not candidates:
        return None
    return min(candidates, key=lambda c: c[0])[1]


def _fire_weapons(
    ctx: CombatContext,
    logs: List[CombatLog],
    targeting: Dict[ShipInstanceId, ShipInstanceId],
) -> Dict[ShipInstanceId, _WeaponFire]:
    result: Dict[ShipInstanceId, _WeaponFire] = {}
    for attacker_id, attacker in ctx._ships.items():
        for weapon_id in attacker.spec.find_weapons(ctx.components):
            weapon = ctx.components.get(weapon_id).weapon
            for i in range(attacker.spec.amount(weapon_id) or 0):
                state = attacker.weapon_state(weapon_id, i)
                if state.recharge > 0.0:
                    state.recharge -= ctx.delta_time

                can_fire = state.recharge <= 0.0
                target_id = targeting.get(attacker_id)

                if can_fire and target_id is not None:
                    state.recharge += weapon.reload
                    result.setdefault(attacker_id, _WeaponFire(target_id)).weapons.append(
                        weapon_id
                    )
                elif not can_fire:
                    logs.append(
                        Recharging(id=attacker_id, weapon_id=weapon_id, wait_time=state.recharge)
                    )
    return result


def _compute_hits(
    ctx: CombatContext,
    logs: List[CombatLog],
    fires: Dict[ShipInstanceId, _WeaponFire],
    rng: random.Random,
) -> List[DamageToApply]:
    damages = []
    for attacker_id, attacker in ctx._ships.items():
        fire = fires.get(attacker_id)
        if fire is None:
            continue
        defender = ctx._ships[fire.target_id]
        for weapon_id in fire.weapons:
            weapon = ctx.components.get(weapon_id).weapon
            hit_chance = compute_hit_chance(
                weapon,
                attacker.current_stats.speed,
                defender.current_stats.total_width,
                defender.current_stats.speed,
            )
            for _ in range(weapon.rounds):
                if rng.random() <= hit_chance:
                    damages.append(
                        DamageToApply(
                            attacker_id=attacker_id,
                            target_id=fire.target_id,
                            amount=weapon.damage,
                            weapon_id=weapon_id,
                            damage_type=weapon.damage_type,
                        )
                    )
                else:
                    logs.append(Miss(id=attacker_id, target_id=fire.target_id, weapon_id=weapon_id))
    return damages