import logging
from pathlib import Path
from typing import List, Union

import pandas as pd

logger = logging.getLogger(__name__)

CANDIDATE_COLUMN = "candidate"


def load_candidates(path: Union[str, Path]) -> List[str]:
    """
    Load a candidate list from disk.

    Plain text files hold one candidate per line. CSV files must have a
    ``candidate`` column; other columns are ignored.

    Args:
        path: Path to a .txt or .csv file

    Returns:
        Candidate names in file order, stripped, without blanks or repeats
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Candidate file not found: {path}")

    logger.info(f"Loading candidates from: {path}")

    if path.suffix.lower() == ".csv":
        frame = pd.read_csv(path, dtype=str, keep_default_na=False)
        if CANDIDATE_COLUMN not in frame.columns:
            raise ValueError(
                f"CSV file {path} has no '{CANDIDATE_COLUMN}' column "
                f"(found: {', '.join(frame.columns)})"
            )
        names = frame[CANDIDATE_COLUMN]
    else:
        with open(path, "r", encoding="utf-8") as f:
            names = pd.Series(f.read().splitlines(), dtype=str)

    names = names.str.strip()
    names = names[names != ""]
    duplicates = int(names.duplicated().sum())
    if duplicates:
        logger.warning(f"Dropped {duplicates} duplicate candidate name(s)")

    candidates = names.drop_duplicates().tolist()
    logger.info(f"Loaded {len(candidates)} candidates")
    return candidates
