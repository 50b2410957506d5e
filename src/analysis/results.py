"""
Results tables for pairwise comparison sessions.

Turns a candidate list and its votes into pandas tables suitable for
display, the JSON API and CSV export.
"""

import logging
from typing import Any, Dict, List, Sequence

import pandas as pd

try:
    from .pairwise import (
        get_ranking,
        get_wins,
        latest_votes,
        points_offered,
        possible_pairs,
        remaining_pairs,
    )
except ImportError:
    from analysis.pairwise import (
        get_ranking,
        get_wins,
        latest_votes,
        points_offered,
        possible_pairs,
        remaining_pairs,
    )

logger = logging.getLogger(__name__)

RESULT_COLUMNS = ["rank", "candidate", "wins", "matchups", "win_rate"]


def build_results_table(
    candidates: Sequence[str], votes: Sequence[Sequence[str]]
) -> pd.DataFrame:
    """
    Build the ranking table for a set of candidates.

    Args:
        candidates: The candidates being compared
        votes: All votes cast so far; only the latest vote per pair counts

    Returns:
        DataFrame with rank, candidate, wins, matchups and win_rate columns,
        one row per candidate in ranking order
    """
    # Rank and count wins on the same deduplicated votes
    latest = latest_votes(votes)
    rows: List[Dict[str, Any]] = []
    for position, candidate in enumerate(get_ranking(candidates, latest), 1):
        wins = get_wins(latest, candidate)
        matchups = points_offered(candidate, votes)
        rows.append(
            {
                "rank": position,
                "candidate": candidate,
                "wins": wins,
                "matchups": matchups,
                "win_rate": round(wins / matchups, 4) if matchups else 0.0,
            }
        )

    logger.debug(f"Built results table for {len(rows)} candidates")
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def summarize_progress(
    candidates: Sequence[str], votes: Sequence[Sequence[str]]
) -> Dict[str, Any]:
    """Report how many pairs are decided and whether voting is finished."""
    total = len(possible_pairs(candidates))
    remaining = len(remaining_pairs(candidates, votes))
    return {
        "candidates": len(candidates),
        "total_pairs": total,
        "decided_pairs": total - remaining,
        "remaining_pairs": remaining,
        "complete": remaining == 0,
    }
