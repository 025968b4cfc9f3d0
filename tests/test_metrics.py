import pytest

from hoopsdraft.analytics.metrics import (
    RankProfile,
    breakout_score,
    calculate_percentile,
    calculate_slope,
    calculate_trends,
    categorize_player,
    consistency_rating,
    format_stat,
    latest_season,
    player_consistency,
    primary_rank,
    rank_profile,
    rank_tier,
    season_display_name,
    season_rank,
    standard_deviation,
    value_vs_adp,
)
from hoopsdraft.config import PlayerCategory

from tests.helpers import make_player, make_season


def _profile(
    *,
    avg_rank: float,
    consistency: float,
    rank_trend: int = 0,
    best_rank: int | None = None,
    age: int | None = None,
) -> RankProfile:
    best = best_rank if best_rank is not None else int(avg_rank)
    return RankProfile(
        avg_rank=avg_rank,
        consistency=consistency,
        best_rank=best,
        worst_rank=best,
        rank_range=0,
        rank_trend=rank_trend,
        age=age,
        seasons=(),
    )


def test_calculate_slope():
    assert calculate_slope([1.0, 2.0, 3.0]) == pytest.approx(1.0)
    assert calculate_slope([5.0, 3.0]) == pytest.approx(-2.0)
    assert calculate_slope([4.0, 4.0, 4.0, 4.0]) == pytest.approx(0.0)
    assert calculate_slope([2.0, 4.0, 5.0]) == pytest.approx(1.5)


def test_calculate_slope_needs_two_points():
    assert calculate_slope([]) is None
    assert calculate_slope([7.0]) is None


def test_latest_season_and_ranks():
    player = make_player(
        "p1",
        seasons={
            "2024-2025": make_season(None, total_rank=30),
            "2022-2023": make_season(12),
        },
    )

    latest = latest_season(player)
    assert latest.ranks.total_rank == 30
    assert season_rank(latest, "per_game") is None
    assert season_rank(latest, "total") == 30
    assert primary_rank(latest) == 30
    assert latest_season(make_player("p2")) is None


def test_season_rank_rejects_unknown_type():
    with pytest.raises(ValueError):
        season_rank(make_season(1), "weekly")


def test_calculate_trends_rank_change_and_categories():
    player = make_player(
        "p1",
        seasons={
            "2022-2023": make_season(50, averages={"PTS_G": 15.0, "AST_G": 3.0}),
            "2023-2024": make_season(40, averages={"PTS_G": 18.0}),
            "2024-2025": make_season(30, averages={"PTS_G": 21.0, "AST_G": 5.0}),
        },
    )

    trends = calculate_trends(player)

    assert trends.rank_change == 20
    assert trends.rank_slope == pytest.approx(10.0)
    assert trends.category_trends["PTS"] == pytest.approx(3.0)
    assert trends.category_trends["AST"] == pytest.approx(2.0)
    assert "REB" not in trends.category_trends


def test_calculate_trends_requires_two_seasons():
    player = make_player("p1", seasons={"2024-2025": make_season(10)})

    assert calculate_trends(player) is None


def test_calculate_trends_without_ranks():
    player = make_player(
        "p1",
        seasons={"2023-2024": make_season(None), "2024-2025": make_season(10)},
    )

    trends = calculate_trends(player)
    assert trends is not None
    assert trends.rank_change is None
    assert trends.rank_slope is None


def test_value_vs_adp_example():
    player = make_player("p1", adp=50, seasons={"2024-2025": make_season(20)})

    value = value_vs_adp(player)

    assert value.adp == pytest.approx(50)
    assert value.roto_rank == 20
    assert value.value == pytest.approx(30)
    assert value.percentage == pytest.approx(60)


def test_value_vs_adp_needs_adp_and_rank():
    assert value_vs_adp(make_player("p1", seasons={"2024-2025": make_season(20)})) is None
    assert value_vs_adp(make_player("p2", adp=40)) is None
    assert value_vs_adp(make_player("p3", adp=40, seasons={"2024-2025": make_season(None)})) is None


def test_standard_deviation_is_population():
    assert standard_deviation([]) is None
    assert standard_deviation([10]) == pytest.approx(0.0)
    assert standard_deviation([10, 20]) == pytest.approx(5.0)


@pytest.mark.parametrize(
    "std_dev, rating",
    [
        (0.0, "Elite"),
        (9.99, "Elite"),
        (10.0, "Very Good"),
        (19.99, "Very Good"),
        (20.0, "Good"),
        (30.0, "Average"),
        (49.9, "Average"),
        (50.0, "Volatile"),
        (120.0, "Volatile"),
    ],
)
def test_consistency_rating_boundaries(std_dev, rating):
    assert consistency_rating(std_dev) == rating


def test_consistency_zero_only_for_identical_ranks():
    steady = make_player(
        "steady",
        seasons={"2023-2024": make_season(12), "2024-2025": make_season(12)},
    )
    moving = make_player(
        "moving",
        seasons={"2023-2024": make_season(12), "2024-2025": make_season(13)},
    )

    assert player_consistency(steady) == 0
    assert player_consistency(moving) > 0


def test_rank_profile_uses_qualifying_seasons_only():
    player = make_player(
        "p1",
        seasons={
            "2021-2022": make_season(90, games=10, age=21),
            "2022-2023": make_season(60, games=50, age=22),
            "2023-2024": make_season(None, games=70, age=23),
            "2024-2025": make_season(30, games=65, age=24),
        },
    )

    profile = rank_profile(player, min_games=20)

    assert [season.season for season in profile.seasons] == ["2022-2023", "2024-2025"]
    assert profile.avg_rank == pytest.approx(45.0)
    assert profile.consistency == pytest.approx(15.0)
    assert profile.best_rank == 30
    assert profile.worst_rank == 60
    assert profile.rank_range == 30
    assert profile.rank_trend == 30
    assert profile.age == 24
    assert profile.seasons_analyzed == 2


def test_rank_profile_single_season_has_no_trend():
    player = make_player("p1", seasons={"2024-2025": make_season(8)})

    profile = rank_profile(player)
    assert profile.rank_trend == 0
    assert profile.consistency == 0


def test_rank_profile_without_qualifying_seasons():
    player = make_player("p1", seasons={"2024-2025": make_season(8, games=5)})

    assert rank_profile(player) is None
    assert player_consistency(player) is None


def test_rank_profile_by_total_rank():
    player = make_player(
        "p1",
        seasons={
            "2023-2024": make_season(10, total_rank=40),
            "2024-2025": make_season(12, total_rank=20),
        },
    )

    profile = rank_profile(player, rank_type="total")
    assert profile.avg_rank == pytest.approx(30.0)
    assert profile.rank_trend == 20


def test_elite_consistent_takes_priority_over_rising_stars():
    profile = _profile(avg_rank=20, consistency=5, rank_trend=25, age=23)

    assert categorize_player(profile) == "elite-consistent"


def test_rising_stars_take_priority_over_breakout_candidates():
    profile = _profile(avg_rank=50, consistency=20, rank_trend=20, best_rank=40, age=23)

    assert categorize_player(profile) is PlayerCategory.RISING_STARS


def test_breakout_candidates_need_known_age():
    young = _profile(avg_rank=90, consistency=40, rank_trend=5, best_rank=50, age=25)
    unknown = _profile(avg_rank=90, consistency=40, rank_trend=5, best_rank=50, age=None)
    older = _profile(avg_rank=90, consistency=40, rank_trend=5, best_rank=50, age=27)

    assert categorize_player(young) is PlayerCategory.BREAKOUT_CANDIDATES
    assert categorize_player(unknown) is PlayerCategory.RELIABLE_PRODUCERS
    assert categorize_player(older) is PlayerCategory.RELIABLE_PRODUCERS


def test_declining_and_volatile():
    assert categorize_player(_profile(avg_rank=70, consistency=60, rank_trend=-20)) is PlayerCategory.DECLINING
    assert categorize_player(_profile(avg_rank=70, consistency=60, rank_trend=0)) is PlayerCategory.VOLATILE


def test_reliable_producers_is_the_fallback():
    assert categorize_player(_profile(avg_rank=80, consistency=20)) is PlayerCategory.RELIABLE_PRODUCERS
    assert categorize_player(_profile(avg_rank=200, consistency=40)) is PlayerCategory.RELIABLE_PRODUCERS


def test_breakout_score_example():
    player = make_player(
        "p1",
        adp=45,
        seasons={
            "2023-2024": make_season(40, games=55, age=23),
            "2024-2025": make_season(20, games=70, age=24),
        },
    )

    result = breakout_score(player)

    assert result.score == pytest.approx(9.0)
    assert result.qualifies
    assert result.reasons == (
        "Rank improved by 20 spots",
        "Prime age (24)",
        "Games played increased by 15",
        "Outperformed ADP by 25 spots",
    )
    assert result.value.value == pytest.approx(25)


def test_breakout_rank_contribution_is_capped():
    player = make_player(
        "p1",
        seasons={
            "2023-2024": make_season(150, games=70, age=30),
            "2024-2025": make_season(40, games=70, age=31),
        },
    )

    result = breakout_score(player)

    assert result.score == pytest.approx(3.0)
    assert not result.qualifies
    assert result.reasons == ("Rank improved by 110 spots",)


def test_breakout_score_requires_trends():
    player = make_player("p1", seasons={"2024-2025": make_season(5, age=23)})

    assert breakout_score(player) is None


def test_rank_tier():
    assert rank_tier(1) == "tier-1"
    assert rank_tier(24) == "tier-1"
    assert rank_tier(25) == "tier-2"
    assert rank_tier(120) == "tier-3"
    assert rank_tier(121) == ""
    assert rank_tier(None) == ""


def test_season_display_name():
    assert season_display_name("2024-2025") == "24-25"
    assert season_display_name("career") == "career"


def test_calculate_percentile():
    values = [1.0, 2.0, 3.0, 4.0]

    assert calculate_percentile(3.0, values) == pytest.approx(75.0)
    assert calculate_percentile(4.0, values) == pytest.approx(100.0)
    assert calculate_percentile(None, values) == 0.0
    assert calculate_percentile(2.0, []) == 0.0


def test_format_stat():
    assert format_stat(0.4751, "FG%") == "47.5%"
    assert format_stat(27.26, "PTS") == "27.3"
    assert format_stat(None, "PTS") == "-"
