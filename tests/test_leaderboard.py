"""
Tests for personal top brands, the global leaderboard and vote history.
"""
from datetime import date, timedelta

import pytest

from app.services import leaderboard
from app.services.errors import UserNotFound
from app.services.scoring_engine import ScoringEngine
from conftest import BASE_TIME


def _as_pairs(ranked):
    return [(row.brand.id, row.points) for row in ranked]


class TestPersonalTopBrands:
    """Tests for get_personal_top_brands."""

    async def test_single_ballot_weights(self, session, settings, make_user, make_brands):
        user = await make_user()
        a, b, c = await make_brands(3)
        await ScoringEngine(session, settings).submit_ballot(user.id, [a.id, b.id, c.id], now=BASE_TIME)

        ranked = await leaderboard.get_personal_top_brands(session, user.id)
        assert _as_pairs(ranked) == [(a.id, 60), (b.id, 30), (c.id, 10)]

    async def test_sums_across_days_with_tie_break(self, session, settings, make_user, make_brands):
        user = await make_user()
        a, b, c = await make_brands(3)
        engine = ScoringEngine(session, settings)
        await engine.submit_ballot(user.id, [a.id, b.id, c.id], now=BASE_TIME)
        await engine.submit_ballot(user.id, [b.id, a.id, c.id], now=BASE_TIME + timedelta(days=1))

        ranked = await leaderboard.get_personal_top_brands(session, user.id)
        # A and B tie on 90; lower brand id first
        assert _as_pairs(ranked) == [(a.id, 90), (b.id, 90), (c.id, 20)]

    async def test_truncated_to_ten(self, session, settings, make_user, make_brands):
        user = await make_user()
        brands = await make_brands(15)
        engine = ScoringEngine(session, settings)
        for day in range(5):
            picks = brands[day * 3:day * 3 + 3]
            await engine.submit_ballot(
                user.id, [x.id for x in picks], now=BASE_TIME + timedelta(days=day)
            )

        ranked = await leaderboard.get_personal_top_brands(session, user.id)
        assert len(ranked) == 10
        scores = [row.points for row in ranked]
        assert scores == sorted(scores, reverse=True)
        # all five first picks (60) come before any second pick (30)
        assert scores[:5] == [60] * 5
        assert scores[5:] == [30] * 5

    async def test_only_own_ballots(self, session, settings, make_user, make_brands):
        alice = await make_user("alice")
        bob = await make_user("bob")
        a, b, c = await make_brands(3)
        engine = ScoringEngine(session, settings)
        await engine.submit_ballot(alice.id, [a.id, b.id, c.id], now=BASE_TIME)
        await engine.submit_ballot(bob.id, [c.id, b.id, a.id], now=BASE_TIME)

        ranked = await leaderboard.get_personal_top_brands(session, bob.id)
        assert _as_pairs(ranked) == [(c.id, 60), (b.id, 30), (a.id, 10)]

    async def test_no_ballots(self, session, make_user):
        user = await make_user()
        assert await leaderboard.get_personal_top_brands(session, user.id) == []


class TestGlobalLeaderboard:
    """Tests for get_global_leaderboard."""

    async def test_sums_all_users(self, session, settings, make_user, make_brands):
        alice = await make_user("alice")
        bob = await make_user("bob")
        a, b, c, d = await make_brands(4)
        engine = ScoringEngine(session, settings)
        await engine.submit_ballot(alice.id, [a.id, b.id, c.id], now=BASE_TIME)
        await engine.submit_ballot(bob.id, [b.id, d.id, a.id], now=BASE_TIME)

        ranked = await leaderboard.get_global_leaderboard(session)
        assert _as_pairs(ranked) == [(b.id, 90), (a.id, 70), (d.id, 30), (c.id, 10)]

    async def test_since_filters_old_ballots(self, session, settings, make_user, make_brands):
        user = await make_user()
        a, b, c = await make_brands(3)
        engine = ScoringEngine(session, settings)
        await engine.submit_ballot(user.id, [a.id, b.id, c.id], now=BASE_TIME)
        await engine.submit_ballot(user.id, [c.id, b.id, a.id], now=BASE_TIME + timedelta(days=10))

        ranked = await leaderboard.get_global_leaderboard(session, since=date(2024, 1, 5))
        assert _as_pairs(ranked) == [(c.id, 60), (b.id, 30), (a.id, 10)]

    async def test_limit(self, session, settings, make_user, make_brands):
        user = await make_user()
        brands = await make_brands(3)
        await ScoringEngine(session, settings).submit_ballot(user.id, [x.id for x in brands], now=BASE_TIME)

        assert len(await leaderboard.get_global_leaderboard(session, limit=2)) == 2


class TestVoteHistory:
    """Tests for get_vote_history."""

    async def test_grouped_newest_day_first(self, session, settings, make_user, make_brands):
        user = await make_user()
        ids = [x.id for x in await make_brands(3)]
        engine = ScoringEngine(session, settings)
        await engine.submit_ballot(user.id, ids, now=BASE_TIME)
        await engine.submit_ballot(user.id, ids, now=BASE_TIME + timedelta(days=2))

        count, by_day = await leaderboard.get_vote_history(session, user.id)

        assert count == 2
        assert list(by_day) == ["2024-01-03", "2024-01-01"]
        assert by_day["2024-01-03"].brand1.id == ids[0]

    async def test_pagination(self, session, settings, make_user, make_brands):
        user = await make_user()
        ids = [x.id for x in await make_brands(3)]
        engine = ScoringEngine(session, settings)
        for day in range(5):
            await engine.submit_ballot(user.id, ids, now=BASE_TIME + timedelta(days=day))

        count, page_two = await leaderboard.get_vote_history(session, user.id, page=2, limit=2)
        assert count == 5
        assert list(page_two) == ["2024-01-03", "2024-01-02"]

    async def test_user_without_ballots(self, session, make_user):
        user = await make_user()
        count, by_day = await leaderboard.get_vote_history(session, user.id)
        assert count == 0
        assert by_day == {}

    async def test_unknown_user(self, session):
        with pytest.raises(UserNotFound):
            await leaderboard.get_vote_history(session, 999)
