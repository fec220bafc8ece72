# spacesim

Building blocks for a space trading and combat simulation.

## Modules

- `spacesim.utils`: the `Vec2` vector, `move_towards`, `assert_v2`, game time types
  (`DeltaTime`, `TotalTime`, `Tick`, `Speed`), the `NextId` counter and `next_lower`.
- `spacesim.wares`: `Cargo` holds with a maximum volume and an optional whitelist that splits
  the volume evenly between listed wares; `transfer_all` and `transfer_only` plan a
  `CargoTransfer` that is then applied with `apply_from` and `apply_to`. Failures raise
  `CargoError` or its subclasses `NotAllowedError`, `CargoFullError` and `NotEnoughSpaceError`.
- `spacesim.shipyard`: `Shipyard` production state, `ProductionOrder` (none, next, random,
  random selected) and `ProductionResult` from `Shipyard.update_production`.
- `spacesim.ship_internals`: ship `Component`s and the `Components` registry, `ShipSpec`
  designs (with `validate`, raising `ShipValidationError`), `compute_ship_stats` and
  `ShipInstance` damage and weapon state.
- `spacesim.combat_log`: the entries recorded during combat (`NoTarget`, `Recharging`, `Miss`,
  `Hit`, `ComponentDestroy`, `ShipDestroyed`).
- `spacesim.damages`: armor damage patterns for explosive and penetration weapons,
  `apply_damages` and `wreck_check`.
- `spacesim.combat`: `CombatContext`, `compute_hit_chance` and `execute`, which runs one combat
  round. Functions that roll dice take an optional `random.Random`.
- `spacesim.noise`: seeded `OpenSimplexNoise` with `eval_2d`.
- `spacesim.terrain`: height, biome and resource maps (`generate_terrain`, `generate_maps`,
  `generate_resource`), biome classification and rendering to Pillow images.
- `spacesim.entity_ids`: packing entity `(index, generation)` pairs into single integers.

## Installation

```
pip install .
```

Tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from spacesim.wares import Cargo, transfer_all

source = Cargo(10)
source.add(0, 4)
source.add(1, 3)
target = Cargo(5)

transfer = transfer_all(source, target)
transfer.apply_from(source)
transfer.apply_to(target)

print(target.get_amount(0), target.get_amount(1))  # 4 1
```

Terrain generation:

```python
from spacesim.terrain import TerrainConfig, generate_terrain, generate_image

cfg = TerrainConfig(width=64, height=48, seed=1)
terrain = generate_terrain(cfg)
image = generate_image(terrain.width, terrain.height, terrain.height_map, terrain.biomes_map)
image.save("terrain.png")
```

## Command line

`spacesim-resources` renders four sample terrains, each with one resource layer, as PNG images
(`image-<i>.png` and `resource-<i>-<j>-<amount>-<disp>.png`):

```
spacesim-resources --output /tmp/res --width 300 --height 200
```

The options shown are the defaults.

## What it does not do

There is no game loop or world of entities here: nothing ties shipyards to cargo and trade
orders, spawns built ships, moves fleets or saves a game. `Shipyard` only keeps production
state and progress; deciding what to build and paying for it is left to the caller. There is
no galaxy or star system generation.