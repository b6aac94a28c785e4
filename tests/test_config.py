"""Tests for environment-driven settings."""

from stargen.config import Settings
from stargen.generator import ProceduralGenerator


def test_defaults():
    s = Settings()
    assert s.default_seed is None
    assert s.default_region_name == "Unknown Region"
    assert s.max_name_attempts == 100


def test_env_override(monkeypatch):
    monkeypatch.setenv("STARGEN_DEFAULT_REGION_NAME", "Far Reach")
    monkeypatch.setenv("STARGEN_MAX_NAME_ATTEMPTS", "5")
    s = Settings()
    assert s.default_region_name == "Far Reach"
    assert s.max_name_attempts == 5


def test_default_region_name_used_by_generator():
    gen = ProceduralGenerator(seed=1, settings=Settings(default_region_name="Far Reach"))
    assert gen.generate_planet().region == "Far Reach"


def test_default_seed_from_env(monkeypatch):
    monkeypatch.setenv("STARGEN_DEFAULT_SEED", "12")
    gen = ProceduralGenerator(settings=Settings())
    assert gen.get_seed() == 12


def test_explicit_seed_beats_default():
    gen = ProceduralGenerator(seed=3, settings=Settings(default_seed=12))
    assert gen.get_seed() == 3


def test_random_seed_without_default():
    gen = ProceduralGenerator(settings=Settings())
    assert 0 <= gen.get_seed() < 1_000_000
