"""Unit tests for deterministic competition ranking."""

from cyberquest.leaderboard.ranking import assign_competition_ranks, competition_rank, leaderboard_sort_key


def _entries(*pairs: tuple[int, int]) -> list[dict]:
    return [{"id": uid, "total_score": score} for uid, score in pairs]


class TestCompetitionRanking:
    """Ties share a rank and the next distinct score skips ahead."""

    def test_empty_input(self):
        assert assign_competition_ranks([]) == []

    def test_single_entry_is_rank_one(self):
        ranked = assign_competition_ranks(_entries((7, 0)))
        assert ranked[0]["rank"] == 1

    def test_tie_then_skip(self):
        ranked = assign_competition_ranks(_entries((1, 100), (2, 100), (3, 90)))
        assert [e["rank"] for e in ranked] == [1, 1, 3]

    def test_sorted_by_score_desc_then_id_asc(self):
        ranked = assign_competition_ranks(_entries((5, 50), (2, 100), (9, 100), (1, 10)))
        assert [e["id"] for e in ranked] == [2, 9, 5, 1]
        assert [e["rank"] for e in ranked] == [1, 1, 3, 4]

    def test_input_order_does_not_matter(self):
        a = assign_competition_ranks(_entries((1, 30), (2, 30), (3, 20)))
        b = assign_competition_ranks(_entries((3, 20), (2, 30), (1, 30)))
        assert [(e["id"], e["rank"]) for e in a] == [(e["id"], e["rank"]) for e in b]

    def test_all_tied(self):
        ranked = assign_competition_ranks(_entries((4, 0), (2, 0), (3, 0)))
        assert [e["rank"] for e in ranked] == [1, 1, 1]
        assert [e["id"] for e in ranked] == [2, 3, 4]

    def test_higher_score_always_strictly_better_rank(self):
        ranked = assign_competition_ranks(_entries((1, 5), (2, 80), (3, 80), (4, 40), (5, 5), (6, 100)))
        for a in ranked:
            for b in ranked:
                if a["total_score"] > b["total_score"]:
                    assert a["rank"] < b["rank"]
                if a["total_score"] == b["total_score"]:
                    assert a["rank"] == b["rank"]

    def test_rank_matches_count_of_higher_scores(self):
        ranked = assign_competition_ranks(_entries((1, 70), (2, 90), (3, 70), (4, 60)))
        for entry in ranked:
            above = sum(1 for e in ranked if e["total_score"] > entry["total_score"])
            assert entry["rank"] == competition_rank(above)

    def test_sort_key(self):
        assert leaderboard_sort_key({"id": 3, "total_score": 10}) == (-10, 3)
