"""Command that renders sample terrains with resource layers as images."""

from __future__ import annotations

import argparse
import logging
import os
import random
from typing import List, Optional, Sequence

from spacesim.terrain import (
    ResourceConfig,
    Shape,
    TerrainConfig,
    generate_image,
    generate_terrain,
    save_gradient_as_image,
)

_SAMPLES = [(1.0, 0.5), (0.5, 0.75), (0.25, 1.0), (1.0, 0.1)]


def _parse(argv: Optional[Sequence[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Render sample terrain resource maps.")
    parser.add_argument("--output", default="/tmp/res", help="directory for the images")
    parser.add_argument("--width", type=int, default=300)
    parser.add_argument("--height", type=int, default=200)
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse(argv)
    logging.basicConfig(level=logging.DEBUG)
    os.makedirs(args.output, exist_ok=True)

    for i, (amount, disp) in enumerate(_SAMPLES):
        resource = ResourceConfig(amount=amount, disp=disp)
        rng = random.Random(0)
        terrain = generate_terrain(
            TerrainConfig(
                width=args.width,
                height=args.height,
                seed=rng.getrandbits(64),
                heightmap_scale=0.004,
                biomemap_scale=0.007,
                shape=Shape.PLAIN,
                resources=[resource],
            )
        )
        generate_image(args.width, args.height, terrain.height_map, terrain.biomes_map).save(
            os.path.join(args.output, f"image-{i}.png")
        )
        for j, layer in enumerate(terrain.resources_map):
            save_gradient_as_image(
                args.width,
                args.height,
                layer,
                os.path.join(
                    args.output, f"resource-{i}-{j}-{resource.amount:g}-{resource.disp:g}.png"
                ),
            )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())