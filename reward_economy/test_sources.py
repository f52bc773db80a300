"""
Unit tests for sources.py - injectable random streams and id providers.
"""
import pytest

from reward_economy.sources import (
    ScriptedRandom,
    SeededRandom,
    chance,
    choice,
    randint,
    sequential_ids,
    uniform,
    uuid_provider,
)


class TestSeededRandom:
    """Tests for the seeded stream."""

    def test_same_seed_same_draws(self):
        """Two streams with one seed produce identical draws."""
        a = SeededRandom(42)
        b = SeededRandom(42)
        assert [a.random() for _ in range(20)] == [b.random() for _ in range(20)]

    def test_draws_in_unit_interval(self):
        """Every draw is in [0, 1)."""
        rng = SeededRandom(1)
        for _ in range(1000):
            assert 0.0 <= rng.random() < 1.0


class TestScriptedRandom:
    """Tests for the scripted stream used by deterministic tests."""

    def test_replays_in_order(self):
        """Draws come back in script order."""
        rng = ScriptedRandom([0.1, 0.5, 0.9])
        assert [rng.random(), rng.random(), rng.random()] == [0.1, 0.5, 0.9]

    def test_exhaustion_raises(self):
        """Drawing past the script is an error, not a silent repeat."""
        rng = ScriptedRandom([0.2])
        rng.random()
        with pytest.raises(RuntimeError):
            rng.random()

    def test_rejects_out_of_range(self):
        """Scripted values must be valid unit draws."""
        with pytest.raises(ValueError):
            ScriptedRandom([1.0])
        with pytest.raises(ValueError):
            ScriptedRandom([-0.1])

    def test_tracks_usage(self):
        """draws_used and remaining reflect consumption."""
        rng = ScriptedRandom([0.1, 0.2, 0.3])
        rng.random()
        assert rng.draws_used == 1
        assert rng.remaining == 2


class TestDrawHelpers:
    """Tests for uniform, randint, choice and chance."""

    def test_randint_bounds_inclusive(self):
        """Lowest and highest draws map to a and b."""
        assert randint(ScriptedRandom([0.0]), -1, 2) == -1
        assert randint(ScriptedRandom([0.999]), -1, 2) == 2

    def test_randint_single_value(self):
        """a == b always returns a."""
        assert randint(ScriptedRandom([0.7]), 3, 3) == 3

    def test_uniform_range(self):
        """uniform maps 0 to the low end."""
        assert uniform(ScriptedRandom([0.0]), 0.8, 1.2) == pytest.approx(0.8)
        assert uniform(ScriptedRandom([0.5]), 0.8, 1.2) == pytest.approx(1.0)

    def test_choice_uniform_index(self):
        """choice picks by floor(draw * len)."""
        options = ['a', 'b', 'c', 'd']
        assert choice(ScriptedRandom([0.0]), options) == 'a'
        assert choice(ScriptedRandom([0.5]), options) == 'c'
        assert choice(ScriptedRandom([0.99]), options) == 'd'

    def test_choice_empty_raises(self):
        """Choosing from nothing is an error."""
        with pytest.raises(IndexError):
            choice(ScriptedRandom([0.1]), [])

    def test_chance(self):
        """chance is a strict less-than against the draw."""
        assert chance(ScriptedRandom([0.29]), 0.30) is True
        assert chance(ScriptedRandom([0.30]), 0.30) is False
        assert chance(ScriptedRandom([0.999]), 1.0) is True


class TestIdProviders:
    """Tests for id providers."""

    def test_sequential_ids(self):
        """Sequential ids count up from 1 with a prefix."""
        next_id = sequential_ids("hero")
        assert [next_id(), next_id(), next_id()] == ["hero_1", "hero_2", "hero_3"]

    def test_sequential_ids_independent(self):
        """Each provider has its own counter."""
        a = sequential_ids("a")
        b = sequential_ids("b")
        a()
        assert b() == "b_1"

    def test_uuid_provider_unique(self):
        """uuid ids do not collide."""
        ids = {uuid_provider() for _ in range(500)}
        assert len(ids) == 500


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
