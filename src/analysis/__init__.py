"""
Analysis module for pairwise comparison ranking.

This module provides:
- The pairwise engine: pair enumeration, vote deduplication, transitive
  vote updates, next-ballot selection and win-count ranking
- Results tables built on top of the engine
"""

from .pairwise import (
    Vote,
    get_ranking,
    get_wins,
    is_complete,
    latest_votes,
    max_new_votes,
    min_new_votes,
    next_ballot,
    pairs_equal,
    points_earned,
    points_offered,
    possible_pairs,
    remaining_pairs,
    update_votes,
)
from .results import build_results_table, summarize_progress

__all__ = [
    "Vote",
    "get_ranking",
    "get_wins",
    "is_complete",
    "latest_votes",
    "max_new_votes",
    "min_new_votes",
    "next_ballot",
    "pairs_equal",
    "points_earned",
    "points_offered",
    "possible_pairs",
    "remaining_pairs",
    "update_votes",
    "build_results_table",
    "summarize_progress",
]
