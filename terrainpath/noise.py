"""
Seeded gradient noise for terrain generation.

SeededRandom is a small linear-congruential generator; PerlinNoise uses it
once to shuffle its permutation table and is deterministic afterwards. The
same seed yields bit-identical terrain across runs, which golden-output
tests depend on.
"""

import math
from typing import List


class SeededRandom:
    """
    Linear-congruential generator producing floats in [0, 1).

    seed = (seed * 9301 + 49297) % 233280, value = seed / 233280
    """

    MULTIPLIER = 9301
    INCREMENT = 49297
    MODULUS = 233280

    def __init__(self, seed: int = 0):
        self.seed = int(seed)

    def random(self) -> float:
        self.seed = (self.seed * self.MULTIPLIER + self.INCREMENT) % self.MODULUS
        return self.seed / float(self.MODULUS)


def fade(t: float) -> float:
    """Quintic smoothstep 6t^5 - 15t^4 + 10t^3."""
    return t * t * t * (t * (t * 6 - 15) + 10)


def lerp(t: float, a: float, b: float) -> float:
    return a + t * (b - a)


def grad(hash_value: int, x: float, y: float, z: float = 0.0) -> float:
    """Dot product with one of the hashed gradient directions."""
    h = hash_value & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)


class PerlinNoise:
    """
    Improved Perlin noise with a seeded permutation table.

    Args:
        seed: Integer seed for the permutation shuffle
    """

    def __init__(self, seed: int = 0):
        self.seed = seed
        self.permutation = self._generate_permutation(SeededRandom(seed))

    @staticmethod
    def _generate_permutation(rng: SeededRandom) -> List[int]:
        p = list(range(256))

        # Fisher-Yates, high index down to 1
        i = 255
        while i > 0:
            j = int(math.floor(rng.random() * (i + 1)))
            p[i], p[j] = p[j], p[i]
            i -= 1

        # Duplicated so corner lookups never wrap
        return p + p

    def noise(self, x: float, y: float, z: float = 0.0) -> float:
        """
        Sample 3D gradient noise; pass z=0 for the 2D slice.

        Returns:
            Value in roughly [-1, 1]
        """
        fx = math.floor(x)
        fy = math.floor(y)
        fz = math.floor(z)

        X = int(fx) & 255
        Y = int(fy) & 255
        Z = int(fz) & 255

        x -= fx
        y -= fy
        z -= fz

        u = fade(x)
        v = fade(y)
        w = fade(z)

        p = self.permutation
        A = p[X] + Y
        AA = p[A] + Z
        AB = p[A + 1] + Z
        B = p[X + 1] + Y
        BA = p[B] + Z
        BB = p[B + 1] + Z

        return lerp(
            w,
            lerp(
                v,
                lerp(u, grad(p[AA], x, y, z), grad(p[BA], x - 1, y, z)),
                lerp(u, grad(p[AB], x, y - 1, z), grad(p[BB], x - 1, y - 1, z)),
            ),
            lerp(
                v,
                lerp(u, grad(p[AA + 1], x, y, z - 1), grad(p[BA + 1], x - 1, y, z - 1)),
                lerp(u, grad(p[AB + 1], x, y - 1, z - 1), grad(p[BB + 1], x - 1, y - 1, z - 1)),
            ),
        )

    def fractal_noise(
        self,
        x: float,
        y: float,
        octaves: int = 4,
        persistence: float = 0.5,
        scale: float = 0.1
    ) -> float:
        """
        Multi-octave noise: frequency doubles and amplitude decays per layer.

        Args:
            x, y: Sample coordinates
            octaves: Number of layers
            persistence: Amplitude multiplier between layers
            scale: Base frequency

        Returns:
            Amplitude-normalized sum, roughly in [-1, 1]
        """
        value = 0.0
        amplitude = 1.0
        frequency = scale
        max_value = 0.0

        for _ in range(octaves):
            value += self.noise(x * frequency, y * frequency) * amplitude
            max_value += amplitude
            amplitude *= persistence
            frequency *= 2

        if max_value == 0:
            return 0.0
        return value / max_value
