import pytest

from puyo.config import (
    DIFFICULTY_SETTINGS,
    Difficulty,
    EngineConfig,
    ScoringRules,
)


def test_pass_score_grows_with_depth() -> None:
    rules = ScoringRules()
    scores = [rules.pass_score(depth) for depth in range(1, 12)]
    assert scores[0] == 200
    assert all(later > earlier for earlier, later in zip(scores, scores[1:]))
    assert rules.pass_score(0) == 0


def test_chain_score_sums_passes() -> None:
    rules = ScoringRules(base_points=10, chain_power=3)
    assert rules.chain_score(3) == 30 + 90 + 270


def test_garbage_rows_round_up() -> None:
    rules = ScoringRules(garbage_row_cost=400)
    assert rules.garbage_rows(0) == 0
    assert rules.garbage_rows(200) == 1
    assert rules.garbage_rows(400) == 1
    assert rules.garbage_rows(600) == 2


@pytest.mark.parametrize(
    "kwargs",
    [
        {"base_points": 0},
        {"chain_power": 1},
        {"garbage_row_cost": 0},
    ],
)
def test_scoring_rules_validation(kwargs) -> None:
    with pytest.raises(ValueError):
        ScoringRules(**kwargs)


@pytest.mark.parametrize(
    "kwargs",
    [
        {"palette_size": 0},
        {"palette_size": 6},
        {"match_threshold": 1},
        {"spawn_column": 6},
        {"spawn_row": 11},
        {"width": 1},
    ],
)
def test_engine_config_validation(kwargs) -> None:
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_difficulty_only_sets_timings() -> None:
    response = [DIFFICULTY_SETTINGS[d].ai_response_ms for d in Difficulty]
    assert response == sorted(response, reverse=True)
    assert Difficulty("hard") is Difficulty.HARD
