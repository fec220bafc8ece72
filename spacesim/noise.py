"""Two-dimensional OpenSimplex gradient noise."""

from __future__ import annotations

import math
from typing import List, Optional

_MASK64 = (1 << 64) - 1
_LCG_MUL = 6364136223846793005
_LCG_ADD = 1442695040888963407

_STRETCH_2D = -0.211324865405187
_SQUISH_2D = 0.366025403784439
_NORM_2D = 47.0

_GRADIENTS_2D = (
    5, 2, 2, 5,
    -5, 2, -2, 5,
    5, -2, 2, -5,
    -5, -2, -2, -5,
)


def _to_signed64(value: int) -> int:
    value &= _MASK64
    return value - (1 << 64) if value >= (1 << 63) else value


def _lcg(seed: int) -> int:
    return _to_signed64(seed * _LCG_MUL + _LCG_ADD)


class OpenSimplexNoise:
    """Seeded OpenSimplex noise; ``eval_2d`` returns values roughly in [-1, 1]."""

    def __init__(self, seed: Optional[int] = None) -> None:
        state = _to_signed64(0 if seed is None else seed)
        source = list(range(256))
        perm: List[int] = [0] * 256
        for _ in range(3):
            state = _lcg(state)
        for i in range(255, -1, -1):
            state = _lcg(state)
            r = _to_signed64(state + 31) % (i + 1)
            perm[i] = source[r]
            source[r] = source[i]
        self._perm = perm

    def _extrapolate(self, xsb: int, ysb: int, dx: float, dy: float) -> float:
        perm = self._perm
        index = perm[(perm[xsb & 0xFF] + ysb) & 0xFF] & 0x0E
        return _GRADIENTS_2D[index] * dx + _GRADIENTS_2D[index + 1] * dy

    def eval_2d(self, x: float, y: float) -> float:
        """Noise value at ``(x, y)``."""
        stretch = (x + y) * _STRETCH_2D
        xs = x + stretch
        ys = y + stretch
        xsb = math.floor(xs)
        ysb = math.floor(ys)
        squish = (xsb + ysb) * _SQUISH_2D
        xb = xsb + squish
        yb = ysb + squish
        xins = xs - xsb
        yins = ys - ysb
        in_sum = xins + yins
        dx0 = x - xb
        dy0 = y - yb
        value = 0.0

        dx1 = dx0 - 1 - _SQUISH_2D
        dy1 = dy0 - _SQUISH_2D
        attn1 = 2 - dx1 * dx1 - dy1 * dy1
        if attn1 > 0:
            attn1 *= attn1
            value += attn1 * attn1 * self._extrapolate(xsb + 1, ysb, dx1, dy1)

        dx2 = dx0 - _SQUISH_2D
        dy2 = dy0 - 1 - _SQUISH_2D
        attn2 = 2 - dx2 * dx2 - dy2 * dy2
        if attn2 > 0:
            attn2 *= attn2
            value += attn2 * attn2 * self._extrapolate(xsb, ysb + 1, dx2, dy2)

        if in_sum <= 1:
            zins = 1 - in_sum
            if zins > xins or zins > yins:
                if xins > yins:
                    xsv_ext, ysv_ext = xsb + 1, ysb - 1
                    dx_ext, dy_ext = dx0 - 1, dy0 + 1
                else:
                    xsv_ext, ysv_ext = xsb - 1, ysb + 1
                    dx_ext, dy_ext = dx0 + 1, dy0 - 1
            else:
                xsv_ext, ysv_ext = xsb + 1, ysb + 1
                dx_ext = dx0 - 1 - 2 * _SQUISH_2D
                dy_ext = dy0 - 1 - 2 * _SQUISH_2D
        else:
            zins = 2 - in_sum
            if zins < xins or zins < yins:
                if xins > yins:
                    xsv_ext, ysv_ext = xsb + 2, ysb
                    dx_ext = dx0 - 2 - 2 * _SQUISH_2D
                    dy_ext = dy0 - 2 * _SQUISH_2D
                else:
                    xsv_ext, ysv_ext = xsb, ysb + 2
                    dx_ext = dx0 - 2 * _SQUISH_2D
                    dy_ext = dy0 - 2 - 2 * _SQUISH_2D
            else:
                dx_ext, dy_ext = dx0, dy0
                xsv_ext, ysv_ext = xsb, ysb
            xsb += 1
            ysb += 1
            dx0 = dx0 - 1 - 2 * _SQUISH_2D
            dy0 = dy0 - 1 - 2 * _SQUISH_2D

        attn0 = 2 - dx0 * dx0 - dy0 * dy0
        if attn0 > 0:
            attn0 *= attn0
            value += attn0 * attn0 * self._extrapolate(xsb, ysb, dx0, dy0)

        attn_ext = 2 - dx_ext * dx_ext - dy_ext * dy_ext
        if attn_ext > 0:
            attn_ext *= attn_ext
            value += attn_ext * attn_ext * self._extrapolate(xsv_ext, ysv_ext, dx_ext, dy_ext)

        return value / _NORM_2D