"""Space simulation building blocks: cargo, shipyards, ship combat, noise and terrain generation."""

__version__ = "0.1.0"