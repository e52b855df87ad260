"""Tests for the gradient noise field."""
import pytest

from mapgen.core.map_generation import PerlinNoise


class TestNoise:
    """Tests for single-octave noise."""

    def test_range(self):
        """Samples stay within [-1, 1]."""
        noise = PerlinNoise(seed=42)
        for i in range(40):
            for j in range(40):
                value = noise.noise(i * 0.37, j * 0.53)
                assert -1 <= value <= 1

    def test_zero_on_lattice(self):
        """Gradient noise is zero at integer lattice points."""
        noise = PerlinNoise(seed=42)
        assert noise.noise(3, 5) == 0
        assert noise.noise(-2, 7) == 0

    def test_continuity(self):
        """A tiny step in x gives a tiny change in value."""
        noise = PerlinNoise(seed=42)
        for i in range(50):
            x = i * 0.731
            assert abs(noise.noise(x + 0.001, 1.3) - noise.noise(x, 1.3)) < 0.01

    def test_deterministic(self):
        """Two fields with the same seed agree everywhere."""
        a = PerlinNoise(seed=9)
        b = PerlinNoise(seed=9)
        for i in range(20):
            assert a.noise(i * 0.41, i * 0.29) == b.noise(i * 0.41, i * 0.29)

    def test_fields_do_not_share_cache(self):
        """Each field owns its own gradient cache."""
        a = PerlinNoise(seed=1)
        b = PerlinNoise(seed=2)
        a.noise(0.5, 0.5)
        assert a._gradients
        assert not b._gradients


class TestOctaveNoise:
    """Tests for multi-octave noise."""

    def test_range(self):
        """Octave noise stays in [-1, 1]."""
        noise = PerlinNoise(seed=5)
        for i in range(30):
            for j in range(30):
                value = noise.octave_noise(i * 0.13, j * 0.17, octaves=6, persistence=0.6)
                assert -1 <= value <= 1

    def test_single_octave_matches_noise(self):
        """One octave is plain noise."""
        noise = PerlinNoise(seed=5)
        assert noise.octave_noise(1.25, 2.75, octaves=1) == noise.noise(1.25, 2.75)

    def test_zero_octaves_rejected(self):
        """At least one octave is required."""
        with pytest.raises(ValueError):
            PerlinNoise(seed=5).octave_noise(0.5, 0.5, octaves=0)
