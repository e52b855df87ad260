"""
2D gradient (Perlin-style) noise for organic density variation.
"""
import math
from typing import Dict, Optional, Tuple

from .rng import default_seed


def _smoothstep(t: float) -> float:
    return t * t * (3 - 2 * t)


def _lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


class PerlinNoise:
    """
    Seeded gradient noise field.

    Gradients are hashed from (x, y, seed) so no permutation table is needed.
    Each instance memoizes its own lattice gradients; two fields with
    different seeds never share state.
    """

    def __init__(self, seed: Optional[int] = None):
        self.seed = default_seed() if seed is None else seed
        self._gradients: Dict[Tuple[int, int], Tuple[float, float]] = {}

    def _gradient(self, x: int, y: int) -> Tuple[float, float]:
        key = (x, y)
        gradient = self._gradients.get(key)
        if gradient is None:
            value = math.sin(x * 12.9898 + y * 78.233 + self.seed) * 43758.5453
            angle = (value - math.floor(value)) * 2 * math.pi
            gradient = (math.cos(angle), math.sin(angle))
            self._gradients[key] = gradient
        return gradient

    def _dot(self, ix: int, iy: int, dx: float, dy: float) -> float:
        gx, gy = self._gradient(ix, iy)
        return gx * dx + gy * dy

    def noise(self, x: float, y: float) -> float:
        """
        Sample the field at (x, y).

        Returns:
            A continuous value in [-1, 1]; exactly 0 on lattice points.
        """
        x0 = math.floor(x)
        y0 = math.floor(y)
        x1 = x0 + 1
        y1 = y0 + 1

        sx = x - x0
        sy = y - y0
        u = _smoothstep(sx)
        v = _smoothstep(sy)

        n0 = self._dot(x0, y0, sx, sy)
        n1 = self._dot(x1, y0, sx - 1, sy)
        ix0 = _lerp(n0, n1, u)

        n2 = self._dot(x0, y1, sx, sy - 1)
        n3 = self._dot(x1, y1, sx - 1, sy - 1)
        ix1 = _lerp(n2, n3, u)

        return _lerp(ix0, ix1, v)

    def octave_noise(self, x: float, y: float, octaves: int = 4, persistence: float = 0.5) -> float:
        """
        Sum `octaves` layers of noise at doubling frequency.

        Each layer's amplitude is scaled by `persistence`; the sum is
        normalized by the total amplitude so the result stays in [-1, 1].
        """
        if octaves < 1:
            raise ValueError("octaves must be at least 1")

        total = 0.0
        frequency = 1.0
        amplitude = 1.0
        max_value = 0.0

        for _ in range(octaves):
            total += self.noise(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= 2

        return total / max_value
