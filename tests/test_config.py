import pytest

from neon_pong import DEFAULT_CONFIG, EffectsConfig, GameConfig


def test_default_profiles():
    profiles = DEFAULT_CONFIG.difficulties
    assert DEFAULT_CONFIG.difficulty_order == ("EASY", "MEDIUM", "HARD", "IMPOSSIBLE")
    assert profiles["IMPOSSIBLE"].reaction_delay == 0
    assert profiles["IMPOSSIBLE"].error_margin == 0
    assert profiles["EASY"].misdirection_chance == pytest.approx(0.15)
    assert all(profiles[name].misdirection_chance == 0 for name in ("MEDIUM", "HARD", "IMPOSSIBLE"))


def test_paddle_positions():
    assert DEFAULT_CONFIG.left_paddle_x == 20
    assert DEFAULT_CONFIG.right_paddle_x == 800 - 20 - 15
    assert DEFAULT_CONFIG.paddle_max_y == 500


def test_replace_keeps_original():
    changed = DEFAULT_CONFIG.replace(winning_score=3)
    assert changed.winning_score == 3
    assert DEFAULT_CONFIG.winning_score == 11


def test_rejects_tunneling_speed():
    with pytest.raises(ValueError, match="tunneling"):
        GameConfig(ball_max_speed=30.0)


def test_rejects_unknown_default_difficulty():
    with pytest.raises(ValueError):
        GameConfig(default_difficulty="NIGHTMARE")


def test_rejects_unknown_order_entry():
    with pytest.raises(ValueError):
        GameConfig(difficulty_order=("EASY", "NIGHTMARE"))


@pytest.mark.parametrize("field", ["canvas_width", "paddle_height", "ball_size"])
def test_rejects_non_positive_sizes(field):
    with pytest.raises(ValueError):
        GameConfig(**{field: 0})


def test_rejects_bad_drag():
    with pytest.raises(ValueError):
        EffectsConfig(drag=1.5)


@pytest.mark.parametrize(
    "field, value",
    [
        ("size_range", (5.0, 2.0)),
        ("directional_speed_range", (7.0, 3.0)),
        ("radial_life_range", (0.0, 1.0)),
        ("directional_life_range", (0.8, 0.4)),
        ("radial_speed_jitter", -1.0),
    ],
)
def test_rejects_bad_particle_ranges(field, value):
    with pytest.raises(ValueError):
        EffectsConfig(**{field: value})


def test_config_is_hashable():
    assert hash(DEFAULT_CONFIG) == hash(GameConfig())
    assert {DEFAULT_CONFIG: "stock"}[GameConfig()] == "stock"


def test_profiles_are_read_only():
    with pytest.raises(TypeError):
        DEFAULT_CONFIG.difficulties["EASY"] = DEFAULT_CONFIG.difficulties["HARD"]
    with pytest.raises(TypeError):
        del DEFAULT_CONFIG.difficulties["MEDIUM"]
    assert DEFAULT_CONFIG.replace(winning_score=5).difficulties["EASY"].name == "EASY"


def test_profiles_are_copied_from_caller():
    profiles = dict(DEFAULT_CONFIG.difficulties)
    config = GameConfig(difficulties=profiles)
    profiles.pop("HARD")
    assert "HARD" in config.difficulties
