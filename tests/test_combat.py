import random

import pytest

from spacesim.combat import CombatContext, compute_hit_chance, execute
from spacesim.combat_log import Hit, Miss, NoTarget, Recharging
from spacesim.ship_internals import (
    Component,
    Components,
    ShipInstance,
    ShipSpec,
    Weapon,
    WeaponDamageType,
)
from spacesim.utils import Speed

BRIDGE = 1
GUN = 2


@pytest.mark.parametrize(
    "attack_speed, target_speed, target_width, expected",
    [
        (0.5, 0.5, 10, 0.5),
        (1.0, 2.0, 10, 0.25),
        (1.0, 10.0, 10, 0.0009765626),
        (1.0, 10.0, 100, 0.100976564),
    ],
)
def test_compute_hit_chance(attack_speed, target_speed, target_width, expected):
    weapon = Weapon(damage=1, reload=1.0, rounds=1, damage_type=WeaponDamageType.EXPLOSIVE)
    chance = compute_hit_chance(weapon, Speed(attack_speed), target_width, Speed(target_speed))
    assert chance == pytest.approx(expected, rel=1e-6)


def _components():
    components = Components()
    components.add(Component(id=BRIDGE, size=1, weight=1, thrust=10.0, bridge_power=1.0))
    components.add(
        Component(
            id=GUN,
            size=1,
            weight=1,
            weapon=Weapon(1, 1.0, 1, WeaponDamageType.PENETRATION),
        )
    )
    return components


def _ship(components, ship_id, team_id):
    spec = ShipSpec(components, {BRIDGE: 1, GUN: 1}, armor_height=2)
    return ShipInstance(components, ship_id, spec, team_id)


def test_lone_ship_has_no_target():
    components = _components()
    ctx = CombatContext(components)
    ctx.add_ship(_ship(components, 1, 0))
    logs = []
    execute(ctx, logs, random.Random(0))
    assert logs == [NoTarget(id=1)]
    assert ctx.ships()[0].weapon_state(GUN, 0).recharge == 0.0


def test_same_team_ships_have_no_target():
    components = _components()
    ctx = CombatContext(components)
    ctx.add_ship(_ship(components, 1, 0))
    ctx.add_ship(_ship(components, 2, 0))
    logs = []
    execute(ctx, logs, random.Random(0))
    assert logs == [NoTarget(id=1), NoTarget(id=2)]


def test_enemies_fire_then_recharge():
    components = _components()
    ctx = CombatContext(components)
    ctx.add_ship(_ship(components, 1, 0))
    ctx.add_ship(_ship(components, 2, 1))
    ctx.set_distance(1, 2, 10.0)
    rng = random.Random(11)

    logs = []
    ctx.set_time(1.0, 1.0)
    execute(ctx, logs, rng)
    for attacker_id, target_id in ((1, 2), (2, 1)):
        shots = [e for e in logs if isinstance(e, (Hit, Miss)) and e.id == attacker_id]
        assert len(shots) == 1
        assert shots[0].target_id == target_id
    for ship in ctx.ships():
        assert ship.weapon_state(GUN, 0).recharge == 1.0
        assert ship.wreck is False

    logs = []
    ctx.set_time(0.5, 1.5)
    execute(ctx, logs, rng)
    assert sorted(logs, key=lambda e: e.id) == [
        Recharging(id=1, weapon_id=GUN, wait_time=0.5),
        Recharging(id=2, weapon_id=GUN, wait_time=0.5),
    ]


def test_attacker_targets_nearest_enemy():
    components = _components()
    ctx = CombatContext(components)
    ctx.add_ship(_ship(components, 1, 0))
    ctx.add_ship(_ship(components, 2, 1))
    ctx.add_ship(_ship(components, 3, 1))
    ctx.set_distance(1, 2, 5.0)
    ctx.set_distance(1, 3, 2.0)
    logs = []
    execute(ctx, logs, random.Random(4))
    shots = [e for e in logs if isinstance(e, (Hit, Miss)) and e.id == 1]
    assert shots
    assert all(s.target_id == 3 for s in shots)


def test_missing_distance_raises():
    components = _components()
    ctx = CombatContext(components)
    ctx.add_ship(_ship(components, 1, 0))
    ctx.add_ship(_ship(components, 2, 1))
    with pytest.raises(KeyError):
        execute(ctx, [], random.Random(0))


def test_duplicate_ship_rejected():
    components = _components()
    ctx = CombatContext(components)
    ctx.add_ship(_ship(components, 1, 0))
    with pytest.raises(ValueError):
        ctx.add_ship(_ship(components, 1, 1))


def test_ships_returns_snapshots():
    components = _components()
    ctx = CombatContext(components)
    ctx.add_ship(_ship(components, 1, 0))
    ctx.add_ship(_ship(components, 2, 1))
    snapshot = ctx.ships()
    assert {s.id for s in snapshot} == {1, 2}
    snapshot[0].wreck = True
    assert all(not s.wreck for s in ctx.ships())