import dataclasses

import pytest

from spacesim.ship_internals import (
    Armor,
    Component,
    Components,
    ShipInstance,
    ShipSpec,
    ShipValidationError,
    ShipValidationIssue,
    Weapon,
    WeaponDamageType,
    compute_ship_stats,
)

BRIDGE, ENGINE, REACTOR, QUARTERS, LASER = 0, 1, 2, 3, 4
SHIP = {BRIDGE: 1, ENGINE: 2, REACTOR: 1, QUARTERS: 1, LASER: 2}


@pytest.fixture
def components():
    registry = Components()
    registry.add(Component(BRIDGE, crew=-1.0, power=-1.0, bridge_power=1.0, size=1, weight=1))
    registry.add(Component(ENGINE, thrust=10.0, power=-1.0, size=2, weight=2))
    registry.add(Component(REACTOR, power=5.0, crew=-1.0, size=1, weight=1))
    registry.add(Component(QUARTERS, crew=5.0, size=1))
    registry.add(
        Component(
            LASER,
            weapon=Weapon(damage=1, reload=1.0, rounds=2, damage_type=WeaponDamageType.PENETRATION),
            power=-1.0,
            size=1,
        )
    )
    return registry


@pytest.fixture
def spec(components):
    return ShipSpec(components, SHIP, 2)


def test_armor_weight():
    assert Armor(4, 2).weight() == 4.0


def test_armor_width_matches_component_table(components, spec):
    assert spec.armor.width == spec.component_table.total
    assert spec.hull_hp(components) == spec.component_table.total
    assert spec.stats.total_width == spec.hull_hp(components)
    assert spec.armor.height == 2


def test_component_table_lists_every_component(spec):
    assert [cid for cid, _ in spec.component_table.sequence] == list(SHIP)
    assert sum(w for _, w in spec.component_table.sequence) == spec.component_table.total


def test_complete_ship_passes_validation(spec):
    assert spec.stats.bridge
    assert spec.stats.power_balance >= 0.0
    assert spec.validate() is None


def test_validation_reports_missing_bridge_and_power(components):
    bad = ShipSpec(components, {ENGINE: 1}, 1)
    with pytest.raises(ShipValidationError) as info:
        bad.validate()
    kinds = [issue.kind for issue in info.value.issues]
    assert ShipValidationIssue.NO_BRIDGE in kinds
    assert ShipValidationIssue.NEED_POWER in kinds
    power_issue = next(i for i in info.value.issues if i.kind == ShipValidationIssue.NEED_POWER)
    assert power_issue.amount == -bad.stats.power_balance


def test_find_weapons_and_amount(components, spec):
    assert spec.find_weapons(components) == [LASER]
    assert spec.amount(ENGINE) == SHIP[ENGINE]
    assert spec.amount(99) is None


def test_map_components_round_trip(components, spec):
    mapped = {component.id: amount for component, amount in spec.map_components(components)}
    assert mapped == SHIP


def test_components_registry_errors():
    registry = Components()
    registry.add(Component(7))
    with pytest.raises(ValueError):
        registry.add(Component(7))
    with pytest.raises(KeyError):
        registry.get(8)
    assert registry.get(7).id == 7


def test_armor_adds_weight(components):
    no_armor = compute_ship_stats(components, SHIP, Armor(0, 0), {})
    with_armor = compute_ship_stats(components, SHIP, Armor(3, 2), {})
    assert with_armor.total_weight > no_armor.total_weight
    assert with_armor.thrust == no_armor.thrust
    assert with_armor.speed.value < no_armor.speed.value


def test_instance_weapons_state(components, spec):
    ship = ShipInstance(components, 1, spec, 0)
    assert len(ship.weapons_state[LASER]) == SHIP[LASER]
    assert all(state.recharge == 0.0 for state in ship.weapons_state[LASER])
    assert ship.weapon_state(LASER, 1) is ship.weapons_state[LASER][1]
    with pytest.raises(IndexError):
        ship.weapon_state(LASER, SHIP[LASER])
    with pytest.raises(KeyError):
        ship.weapon_state(ENGINE, 0)


def test_instance_starts_with_spec_stats_copy(components, spec):
    ship = ShipInstance(components, 1, spec, 0)
    assert ship.current_stats == spec.stats
    assert ship.current_stats is not spec.stats
    assert not ship.wreck


def test_destroyed_engines_stop_thrust_but_keep_weight(components, spec):
    ship = ShipInstance(components, 1, spec, 0)
    ship.component_destroyed[ENGINE] = SHIP[ENGINE]
    ship.update_stats(components)
    assert ship.current_stats.thrust == 0.0
    assert ship.current_stats.speed.value == 0.0
    assert ship.current_stats.total_weight == spec.stats.total_weight
    assert spec.stats.thrust > 0.0


def test_partially_destroyed_engines_reduce_thrust(components, spec):
    ship = ShipInstance(components, 1, spec, 0)
    ship.component_destroyed[ENGINE] = 1
    ship.update_stats(components)
    assert 0.0 < ship.current_stats.thrust < spec.stats.thrust


def test_destroyed_bridge_removes_bridge(components, spec):
    ship = ShipInstance(components, 1, spec, 0)
    ship.component_destroyed[BRIDGE] = 1
    ship.update_stats(components)
    assert not ship.current_stats.bridge
    assert dataclasses.replace(ship.current_stats, bridge=True) != spec.stats


def test_total_hull_damage(components, spec):
    ship = ShipInstance(components, 1, spec, 0)
    assert ship.total_hull_damage() == 0
    ship.component_damage[BRIDGE] = 2
    ship.component_damage[ENGINE] = 3
    assert ship.total_hull_damage() == 5