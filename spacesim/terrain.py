"""Procedural terrain: height, biome and resource maps and their images."""

from __future__ import annotations

import enum
import logging
import math
import random
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from PIL import Image

from spacesim.noise import OpenSimplexNoise

log = logging.getLogger(__name__)

_I64_MAX = (1 << 63) - 1


class Shape(enum.Enum):
    PLAIN = "plain"
    ISLAND = "island"


@dataclass(frozen=True)
class ResourceConfig:
    """A resource layer: ``amount`` and ``disp`` both range 0 to 1."""

    amount: float
    disp: float


@dataclass
class TerrainConfig:
    width: int = 512
    height: int = 512
    seed: int = 0
    heightmap_scale: float = 0.004
    biomemap_scale: float = 0.007
    shape: Shape = Shape.PLAIN
    resources: List[ResourceConfig] = field(default_factory=list)

    def total_indexes(self) -> int:
        return self.width * self.height


@dataclass
class Terrain:
    width: int
    height: int
    biomes_map: List[float]
    height_map: List[float]
    resources_map: List[List[float]]


class Biome(enum.Enum):
    GRASS = "grass"
    DEEP_WATER = "deep_water"
    WATER = "water"
    DIRT = "dirt"
    SAND = "sand"
    WET_SAND = "wet_sand"
    DARK_FOREST = "dark_forest"
    HIGH_DARK_FOREST = "high_dark_forest"
    LIGHT_FOREST = "light_forest"
    MOUNTAIN = "mountain"
    HIGH_MOUNTAIN = "high_mountain"
    SNOW = "snow"


_BIOME_COLORS = {
    Biome.GRASS: (120, 157, 80),
    Biome.WATER: (9, 82, 198),
    Biome.DEEP_WATER: (0, 62, 178),
    Biome.DIRT: (114, 98, 49),
    Biome.SAND: (194, 178, 128),
    Biome.WET_SAND: (164, 148, 99),
    Biome.DARK_FOREST: (60, 97, 20),
    Biome.HIGH_DARK_FOREST: (40, 77, 0),
    Biome.LIGHT_FOREST: (85, 122, 45),
    Biome.MOUNTAIN: (140, 142, 123),
    Biome.HIGH_MOUNTAIN: (160, 162, 143),
    Biome.SNOW: (235, 235, 235),
}


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def index_of(width: int, x: int, y: int) -> int:
    """Index of pixel ``(x, y)`` in a row-major map of the given width."""
    return x + width * y


def _to_i64(value: int) -> int:
    value &= (1 << 64) - 1
    return value - (1 << 64) if value >= (1 << 63) else value


def sum_octaves(
    num_iterations: int,
    point: Tuple[int, int],
    persistence: float,
    scale: float,
    low: float,
    high: float,
    noise_fn: Callable[[float, float], float],
) -> float:
    """Sum octaves of ``noise_fn`` at ``point`` and map the result into ``[low, high]``."""
    max_amp = 0.0
    amp = 1.0
    freq = scale
    noise = 0.0
    for _ in range(num_iterations):
        noise += noise_fn(point[0] * freq, point[1] * freq) * amp
        max_amp += amp
        amp *= persistence
        freq *= 2.0
    return (noise / max_amp) * (high - low) / 2.0 + (high + low) / 2.0


def generate_plain_gradient(pixels: int) -> List[float]:
    return [0.0] * pixels


def generate_island_gradient(w: int, h: int) -> List[float]:
    """Gradient that rises toward the borders, for island-shaped terrain."""
    gradient = [0.0] * (w * h)
    for x in range(w):
        for y in range(h):
            a = w - x if x > w // 2 else x
            b = h - y if y > h // 2 else y
            value = 1.0 - min(a, b) / (w / 2.0)
            value = value * value - 0.1
            gradient[index_of(h, x, y)] = min(1.0, max(0.0, value))
    return gradient


def generate_noise_map(width: int, height: int, seed: int, scale: float) -> List[float]:
    """Octave noise in [0, 1] for every pixel of a ``width`` x ``height`` map."""
    generator = OpenSimplexNoise(_to_i64(seed))
    result = [0.0] * (width * height)
    for x in range(width):
        for y in range(height):
            result[index_of(width, x, y)] = sum_octaves(
                16, (x, y), 0.5, scale, 0.0, 1.0, generator.eval_2d
            )
    return result


def generate_maps(cfg: TerrainConfig) -> Tuple[List[float], List[float]]:
    """Return the height map and the biome map for ``cfg``."""
    if cfg.shape is Shape.ISLAND:
        gradient = generate_island_gradient(cfg.width, cfg.height)
    else:
        gradient = generate_plain_gradient(cfg.width * cfg.height)

    rng = random.Random(cfg.seed)
    height_map = generate_noise_map(
        cfg.width, cfg.height, rng.randrange(0, _I64_MAX), cfg.heightmap_scale
    )
    biome_map = generate_noise_map(
        cfg.width, cfg.height, rng.randrange(0, _I64_MAX), cfg.biomemap_scale
    )

    for x in range(cfg.width):
        for y in range(cfg.height):
            i = index_of(cfg.width, x, y)
            height_map[i] = max(0.0, height_map[i] * 1.1 - gradient[i] * 0.8)
            biome_map[i] = max(0.0, biome_map[i] - (0.1 - gradient[i]) * 0.4)

    return height_map, biome_map


def _normalize(values: List[float]) -> List[float]:
    low = min([1.0, *values])
    high = max([0.0, *values])
    delta = high - low
    if delta == 0:
        return [math.nan if v == low else math.copysign(math.inf, v - low) for v in values]
    return [(v - low) / delta for v in values]


def generate_resource(w: int, h: int, seed: int, dist: float, quantity: float) -> List[float]:
    """Resource map: ``quantity`` where present, else 0.

    ``dist`` 0 concentrates the resource in a single spot, 1 spreads it over every pixel.
    """
    scale = lerp(0.01, 0.02, dist)
    res_map = _normalize(generate_noise_map(w, h, _to_i64(seed), scale))
    selector = 1.0 - dist
    return [quantity if v >= selector else 0.0 for v in res_map]


def generate_terrain(cfg: TerrainConfig) -> Terrain:
    heights, biomes = generate_maps(cfg)
    resources = []
    for r in cfg.resources:
        log.debug("generate resource %r", r)
        resources.append(generate_resource(cfg.width, cfg.height, cfg.seed, r.disp, r.amount))
    return Terrain(
        width=cfg.width,
        height=cfg.height,
        biomes_map=biomes,
        height_map=heights,
        resources_map=resources,
    )


def classify_biome(height: float, moisture: float) -> Biome:
    a, b = height, moisture
    if a < 0.39:
        return Biome.DEEP_WATER
    if a < 0.42:
        return Biome.WATER
    if a < 0.46 and b < 0.57:
        return Biome.SAND
    if a < 0.47 and b < 0.6:
        return Biome.WET_SAND
    if a < 0.47 and b >= 0.6:
        return Biome.DIRT
    if a > 0.54 and b < 0.43 and a < 0.62:
        return Biome.GRASS
    if a < 0.62 and b >= 0.58:
        return Biome.HIGH_DARK_FOREST
    if a < 0.62 and b >= 0.49:
        return Biome.DARK_FOREST
    if a >= 0.79:
        return Biome.SNOW
    if a >= 0.74:
        return Biome.HIGH_MOUNTAIN
    if a >= 0.68 and b >= 0.10:
        return Biome.MOUNTAIN
    return Biome.LIGHT_FOREST


def biome_color(biome: Biome) -> Tuple[int, int, int]:
    return _BIOME_COLORS[biome]


def generate_image(
    w: int, h: int, height_map: Sequence[float], biome_map: Sequence[float]
) -> Image.Image:
    """Render the height and biome maps as an RGB image coloured by biome."""
    image = Image.new("RGB", (w, h))
    image.putdata(
        [
            biome_color(
                classify_biome(height_map[index_of(w, x, y)], biome_map[index_of(w, x, y)])
            )
            for y in range(h)
            for x in range(w)
        ]
    )
    return image


def gradient_to_rgb(value: float) -> int:
    """Map a 0..1 value to a 0..255 channel intensity."""
    if math.isnan(value):
        return 0
    scaled = min(256.0, max(0.0, value * 256.0))
    return min(255, math.floor(scaled + 0.5))


def save_gradient_as_image(w: int, h: int, gradient: Sequence[float], file_name: str) -> None:
    """Save a map as an image in the red channel."""
    image = Image.new("RGB", (w, h))
    image.putdata(
        [(gradient_to_rgb(gradient[index_of(w, x, y)]), 0, 0) for y in range(h) for x in range(w)]
    )
    image.save(file_name)


def save_image(w: int, h: int, data: Sequence[int], file_name: str) -> None:
    """Save raw RGB bytes as an image; raises ValueError if ``data`` is too short."""
    size = w * h * 3
    raw = bytes(data)
    if len(raw) < size:
        raise ValueError(f"image data has {len(raw)} bytes, {size} required")
    Image.frombytes("RGB", (w, h), raw[:size]).save(file_name)