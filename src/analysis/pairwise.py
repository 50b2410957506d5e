"""
Pairwise comparison engine.

Infers an order over a set of candidates from a sequence of head-to-head
judgments. A vote is a ``(winner, loser)`` tuple; a list of votes is kept in
chronological order, most recent last. Every function here is pure: inputs
are never mutated and new lists are always returned.
"""

import logging
from typing import FrozenSet, Iterable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

Vote = Tuple[str, str]


def _pair_key(vote: Sequence[str]) -> FrozenSet[str]:
    """Unordered identity of the two candidates in a vote."""
    return frozenset(vote)


def _unique_pairs(votes: Iterable[Sequence[str]]) -> List[Vote]:
    """Keep the first vote seen for each unordered pair."""
    seen = set()
    unique = []
    for vote in votes:
        key = _pair_key(vote)
        if key in seen:
            continue
        seen.add(key)
        unique.append((vote[0], vote[1]))
    return unique


def pairs_equal(a: Sequence[str], b: Sequence[str]) -> bool:
    """
    Compare two votes to see if they involve the same candidates.

    Args:
        a: The first vote
        b: The second vote

    Returns:
        True if both votes have the same candidates, regardless of who won
    """
    return _pair_key(a) == _pair_key(b)


def possible_pairs(candidates: Sequence[str]) -> List[Vote]:
    """
    Generate every unordered pair from a list of candidates.

    The first candidate is paired with each later one, then the same is done
    for the remainder, so four candidates give
    ``(a, b), (a, c), (a, d), (b, c), (b, d), (c, d)``.

    Args:
        candidates: The list of candidates

    Returns:
        A list of all possible ballots, empty for fewer than two candidates
    """
    pairs: List[Vote] = []
    remainder = list(candidates)
    while len(remainder) >= 2:
        first, remainder = remainder[0], remainder[1:]
        pairs.extend((first, candidate) for candidate in remainder)
    return pairs


def latest_votes(all_votes: Sequence[Sequence[str]]) -> List[Vote]:
    """
    Filter out all but the most recent vote for each pair.

    Args:
        all_votes: A chronological list of votes

    Returns:
        The most recent vote for each pair, oldest first
    """
    newest_first = _unique_pairs(reversed(list(all_votes)))
    newest_first.reverse()
    return newest_first


def remaining_pairs(
    candidates: Sequence[str], all_votes: Sequence[Sequence[str]]
) -> List[Vote]:
    """
    Find pairs that have not been compared yet.

    Args:
        candidates: A list of candidates
        all_votes: A list of existing votes

    Returns:
        Remaining ballots to be voted on, in ``possible_pairs`` order
    """
    decided = {_pair_key(vote) for vote in all_votes}
    return [
        pair for pair in possible_pairs(candidates) if _pair_key(pair) not in decided
    ]


def is_complete(candidates: Sequence[str], votes: Sequence[Sequence[str]]) -> bool:
    """True once every pair of candidates has a recorded outcome."""
    return not remaining_pairs(candidates, votes)


def update_votes(ballot: Sequence[str], votes: Sequence[Sequence[str]]) -> List[Vote]:
    """
    Update a list of votes with a newly cast ballot.

    Anyone who beat the winner is taken to also beat the loser (implied
    wins), and the winner is taken to beat anyone the loser beat (implied
    losses). Only one hop is followed; longer chains build up as further
    ballots are cast.

    The ballot and its implications replace any earlier vote on the same
    pair. Earlier votes that survive keep their place at the front of the
    list, followed by the ballot, the implied wins and the implied losses.

    Args:
        ballot: The new ``(winner, loser)`` vote
        votes: An existing list of votes to update

    Returns:
        An updated list of votes with one vote per pair
    """
    winner, loser = ballot[0], ballot[1]
    ballot_key = _pair_key(ballot)

    # A re-vote must not infer anything from the outcome it replaces
    history = [vote for vote in votes if _pair_key(vote) != ballot_key]

    implied_wins = [
        (vote[0], loser) for vote in history if vote[1] == winner and vote[0] != loser
    ]
    implied_losses = [
        (winner, vote[1]) for vote in history if vote[0] == loser and vote[1] != winner
    ]

    fresh = _unique_pairs([(winner, loser)] + implied_wins + implied_losses)
    fresh_keys = {_pair_key(vote) for vote in fresh}
    kept = _unique_pairs(vote for vote in history if _pair_key(vote) not in fresh_keys)

    logger.debug(
        f"Ballot {winner} > {loser}: {len(implied_wins)} implied wins, "
        f"{len(implied_losses)} implied losses"
    )
    return kept + fresh


def min_new_votes(ballot: Sequence[str], votes: Sequence[Sequence[str]]) -> int:
    """
    Calculate the size of the vote list guaranteed after casting a ballot.

    Args:
        ballot: The ballot to be tested
        votes: A list of previously recorded votes

    Returns:
        The smaller resulting vote count over both possible outcomes
    """
    a, b = ballot[0], ballot[1]
    return min(len(update_votes((a, b), votes)), len(update_votes((b, a), votes)))


def max_new_votes(ballot: Sequence[str], votes: Sequence[Sequence[str]]) -> int:
    """
    Calculate the size of the vote list in the best case after casting a ballot.

    Args:
        ballot: The ballot to be tested
        votes: A list of previously recorded votes

    Returns:
        The larger resulting vote count over both possible outcomes
    """
    a, b = ballot[0], ballot[1]
    return max(len(update_votes((a, b), votes)), len(update_votes((b, a), votes)))


def next_ballot(
    candidates: Sequence[str], votes: Sequence[Sequence[str]]
) -> Optional[Vote]:
    """
    Suggest the ballot to vote on next.

    Remaining pairs are sorted ascending by ``(min_new_votes, max_new_votes)``
    and the last one is taken, so the pick is the pair that settles the most
    outstanding pairs whichever way it goes.

    Args:
        candidates: The list of candidates
        votes: Previously recorded votes

    Returns:
        The suggested next ballot, or None when every pair has been decided
    """
    remaining = remaining_pairs(candidates, votes)
    if not remaining:
        return None

    options = sorted(
        remaining,
        key=lambda pair: (min_new_votes(pair, votes), max_new_votes(pair, votes)),
    )
    choice = options[-1]
    logger.debug(f"Next ballot {choice} chosen from {len(remaining)} remaining pairs")
    return choice


def get_wins(votes: Sequence[Sequence[str]], candidate: str) -> int:
    """
    Tally the number of wins for a candidate.

    Args:
        votes: A list of votes, counted as given
        candidate: The candidate to tally wins for

    Returns:
        The number of votes won by the candidate
    """
    return sum(1 for vote in votes if vote[0] == candidate)


def points_earned(candidate: str, all_votes: Sequence[Sequence[str]]) -> int:
    """Count the matchups a candidate has won, using the latest vote per pair."""
    return get_wins(latest_votes(all_votes), candidate)


def points_offered(candidate: str, all_votes: Sequence[Sequence[str]]) -> int:
    """Count the matchups a candidate took part in, using the latest vote per pair."""
    return sum(1 for vote in latest_votes(all_votes) if candidate in vote)


def get_ranking(
    candidates: Sequence[str], votes: Sequence[Sequence[str]]
) -> List[str]:
    """
    Rank candidates by number of wins, most wins first.

    Candidates are stably sorted by ascending wins and the result reversed,
    so among candidates with equal wins the one listed later comes first.

    Args:
        candidates: The list of candidates to be ranked
        votes: The votes upon which to base the ranking

    Returns:
        A ranked copy of the candidate list
    """
    ranking = sorted(candidates, key=lambda candidate: get_wins(votes, candidate))
    ranking.reverse()
    return ranking
