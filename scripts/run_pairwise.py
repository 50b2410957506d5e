#!/usr/bin/env python3
"""
Run an interactive pairwise comparison session in the terminal.
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from data.candidates import load_candidates  # noqa: E402
from data.store import ComparisonStore  # noqa: E402

logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def ask_winner(ballot, ask=input):
    """
    Ask which side of a ballot wins.

    Returns:
        The winning candidate, or None if the user quits
    """
    first, second = ballot
    while True:
        answer = ask(f"\n  1) {first}\n  2) {second}\nWhich is better? [1/2/q] ")
        answer = answer.strip().lower()
        if answer == "1":
            return first
        if answer == "2":
            return second
        if answer in ("q", "quit"):
            return None
        print("Please answer 1, 2 or q.")


def run_session(store: ComparisonStore, ask=input) -> bool:
    """
    Present ballots until every pair is decided or the user quits.

    Returns:
        True if the session finished with a final ranking
    """
    while True:
        ballot = store.next_ballot()
        if ballot is None:
            return True

        progress = store.progress()
        print(
            f"\n[{progress['decided_pairs']}/{progress['total_pairs']} pairs decided]"
        )
        winner = ask_winner(ballot, ask)
        if winner is None:
            return False

        loser = ballot[1] if winner == ballot[0] else ballot[0]
        store.cast_vote(winner, loser)


def main():
    parser = argparse.ArgumentParser(description="Rank candidates by pairwise votes")
    parser.add_argument("--candidates", help="Text or CSV file with candidates")
    parser.add_argument(
        "--candidate",
        action="append",
        default=[],
        help="Candidate name (repeat for each candidate)",
    )
    parser.add_argument("--export", help="Export results to CSV file")

    args = parser.parse_args()

    try:
        candidates = list(args.candidate)
        if args.candidates:
            candidates = load_candidates(args.candidates) + candidates

        if len(candidates) < 2:
            logger.error("At least two candidates are required.")
            sys.exit(1)

        store = ComparisonStore(candidates)
        logger.info(
            f"=== Pairwise comparison ({len(store.candidates)} candidates, "
            f"{store.progress()['total_pairs']} pairs) ==="
        )

        finished = run_session(store)

        print("\n=== Final Ranking ===" if finished else "\n=== Partial Ranking ===")
        results = store.results()
        for _, row in results.iterrows():
            print(
                f"  {row['rank']:3d}. {row['candidate']:30s}: "
                f"{row['wins']} wins of {row['matchups']}"
            )

        if args.export:
            export_path = Path(args.export).with_suffix(".csv")
            results.to_csv(export_path, index=False)
            print(f"\n✓ Results exported to: {export_path}")

    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error running pairwise session: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.")
        sys.exit(130)


if __name__ == "__main__":
    main()
