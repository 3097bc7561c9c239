"""Deterministic competition ranking.

Users are ordered by total_score DESC, then by id ASC. Tied scores share a
rank and the next distinct score skips ahead (100, 100, 90 -> 1, 1, 3).
"""

from __future__ import annotations

from typing import Any


def leaderboard_sort_key(entry: dict[str, Any]) -> tuple[int, int]:
    return (-entry["total_score"], entry["id"])


def competition_rank(scores_above: int) -> int:
    """Rank of a score given how many scores are strictly greater."""
    return scores_above + 1


def assign_competition_ranks(entries: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Sort entries and set ``rank`` on each.

    Input: list of dicts with at least:
        - id: int
        - total_score: int

    The input may be a prefix of the full ordering; every entry above a
    given score is inside any prefix that contains that score, so the
    ranks match a rank computed against the whole table.
    """
    if not entries:
        return []

    ranked = sorted(entries, key=leaderboard_sort_key)
    previous_score: int | None = None
    rank = 0
    for idx, entry in enumerate(ranked):
        if entry["total_score"] != previous_score:
            rank = competition_rank(idx)
            previous_score = entry["total_score"]
        entry["rank"] = rank
    return ranked
