import logging
import threading
from typing import Any, Dict, Iterable, List, Optional, Sequence

import pandas as pd

try:
    from ..analysis.pairwise import (
        Vote,
        get_ranking,
        is_complete,
        next_ballot,
        remaining_pairs,
        update_votes,
    )
    from ..analysis.results import build_results_table, summarize_progress
except ImportError:
    from analysis.pairwise import (
        Vote,
        get_ranking,
        is_complete,
        next_ballot,
        remaining_pairs,
        update_votes,
    )
    from analysis.results import build_results_table, summarize_progress

logger = logging.getLogger(__name__)


class InvalidCandidateError(ValueError):
    """Raised when a candidate name or ballot participant is not acceptable."""


class ComparisonStore:
    """
    Holds the candidates and votes of one pairwise comparison session.

    The pairwise engine is stateless; this store is the single owner of the
    mutable candidate and vote lists. Every read-compute-write cycle runs
    under a lock so concurrent callers never compute against a stale vote
    list.
    """

    def __init__(
        self,
        candidates: Optional[Iterable[str]] = None,
        votes: Optional[Iterable[Sequence[str]]] = None,
    ):
        """
        Initialize the store.

        Args:
            candidates: Initial candidates, validated like add_candidate
            votes: Initial chronological votes, taken as given
        """
        self._lock = threading.Lock()
        self._candidates: List[str] = []
        self._votes: List[Vote] = [(v[0], v[1]) for v in votes or []]
        for candidate in candidates or []:
            self.add_candidate(candidate)

    @property
    def candidates(self) -> List[str]:
        """Snapshot of the candidate list."""
        with self._lock:
            return list(self._candidates)

    @property
    def votes(self) -> List[Vote]:
        """Snapshot of the vote list."""
        with self._lock:
            return list(self._votes)

    def add_candidate(self, name: str) -> str:
        """
        Append a candidate.

        Args:
            name: Candidate name; surrounding whitespace is stripped

        Returns:
            The stored name

        Raises:
            InvalidCandidateError: If the name is blank or already present
        """
        candidate = (name or "").strip()
        if not candidate:
            raise InvalidCandidateError("Candidate name must not be empty")

        with self._lock:
            if candidate in self._candidates:
                raise InvalidCandidateError(f"Duplicate candidate: {candidate}")
            self._candidates.append(candidate)
            total = len(self._candidates)

        logger.info(f"Added candidate '{candidate}' ({total} total)")
        return candidate

    def cast_vote(self, winner: str, loser: str) -> List[Vote]:
        """
        Record that ``winner`` beat ``loser``, with its implied votes.

        Args:
            winner: The preferred candidate
            loser: The other candidate

        Returns:
            The updated vote list

        Raises:
            InvalidCandidateError: If either side is unknown or both are the same
        """
        if winner == loser:
            raise InvalidCandidateError(f"A candidate cannot beat itself: {winner}")

        with self._lock:
            unknown = [c for c in (winner, loser) if c not in self._candidates]
            if unknown:
                raise InvalidCandidateError(
                    f"Unknown candidate(s): {', '.join(unknown)}"
                )
            before = len(self._votes)
            self._votes = update_votes((winner, loser), self._votes)
            votes = list(self._votes)

        logger.info(
            f"Vote cast: {winner} > {loser} "
            f"({len(votes) - before} new, {len(votes)} total)"
        )
        return votes

    def next_ballot(self) -> Optional[Vote]:
        """The most informative pair to present next, or None when finished."""
        with self._lock:
            return next_ballot(self._candidates, self._votes)

    def remaining_pairs(self) -> List[Vote]:
        """Pairs of candidates that have no recorded outcome yet."""
        with self._lock:
            return remaining_pairs(self._candidates, self._votes)

    def is_complete(self) -> bool:
        """True once every pair of candidates has been decided."""
        with self._lock:
            return is_complete(self._candidates, self._votes)

    def ranking(self) -> List[str]:
        """Candidates ordered by wins; final only once is_complete() is True."""
        with self._lock:
            return get_ranking(self._candidates, self._votes)

    def results(self) -> pd.DataFrame:
        """Ranking table with wins, matchups and win rate per candidate."""
        with self._lock:
            return build_results_table(self._candidates, self._votes)

    def progress(self) -> Dict[str, Any]:
        """Counts of total, decided and remaining pairs."""
        with self._lock:
            return summarize_progress(self._candidates, self._votes)

    def reset(self, keep_candidates: bool = True):
        """
        Discard all votes.

        Args:
            keep_candidates: If False, the candidate list is cleared as well
        """
        with self._lock:
            self._votes = []
            if not keep_candidates:
                self._candidates = []
        logger.info(
            "Session reset" + ("" if keep_candidates else " (candidates cleared)")
        )
