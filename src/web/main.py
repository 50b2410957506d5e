import io
import logging
import os
from typing import List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.responses import StreamingResponse
from pydantic import BaseModel

try:
    from ..data.candidates import load_candidates
    from ..data.store import ComparisonStore, InvalidCandidateError
except ImportError:
    from data.candidates import load_candidates
    from data.store import ComparisonStore, InvalidCandidateError

logger = logging.getLogger(__name__)

CANDIDATES_FILE_ENV = "PAIRWISE_CANDIDATES_FILE"

app = FastAPI(
    title="Pairwise Ranker",
    description="Rank candidates through head-to-head comparisons",
)

# Global comparison session, created on first use
store: Optional[ComparisonStore] = None


class CandidateRequest(BaseModel):
    name: str


class VoteRequest(BaseModel):
    winner: str
    loser: str


@app.on_event("startup")
async def startup_event():
    """Initialize the application."""
    logger.info("Starting Pairwise Ranker")


@app.on_event("shutdown")
async def shutdown_event():
    """Clean up on shutdown."""
    logger.info("Shutting down Pairwise Ranker")


def get_store() -> ComparisonStore:
    """
    Get the comparison session, creating it on first use.
    Candidates are preloaded from PAIRWISE_CANDIDATES_FILE when it is set.
    """
    global store
    if store is None:
        candidates: List[str] = []
        candidates_file = os.environ.get(CANDIDATES_FILE_ENV)
        if candidates_file:
            try:
                candidates = load_candidates(candidates_file)
            except (OSError, ValueError) as e:
                logger.error(f"Could not load candidates from {candidates_file}: {e}")
                raise HTTPException(
                    status_code=500, detail=f"Candidate file failed to load: {e}"
                )
        store = ComparisonStore(candidates)
    return store


def set_candidates(candidates: List[str]):
    """Start a fresh session with the given candidates."""
    global store
    store = ComparisonStore(candidates)
    logger.info(f"Session configured with {len(candidates)} candidates")


@app.get("/")
async def root():
    """Service information and voting progress."""
    return {"name": app.title, "progress": get_store().progress()}


@app.get("/api/candidates")
async def get_candidates():
    """Get list of all candidates."""
    return {"candidates": get_store().candidates}


@app.post("/api/candidates", status_code=201)
async def add_candidate(request: CandidateRequest):
    """Add a candidate to the session."""
    session = get_store()
    try:
        name = session.add_candidate(request.name)
    except InvalidCandidateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"candidate": name, "candidates": session.candidates}


@app.get("/api/ballot")
async def get_next_ballot():
    """Get the next pair to compare; null once every pair is decided."""
    session = get_store()
    try:
        ballot = session.next_ballot()
    except Exception as e:
        logger.error(f"Error selecting next ballot: {e}")
        raise HTTPException(status_code=500, detail=f"Ballot selection failed: {e}")
    return {"ballot": list(ballot) if ballot else None, "complete": ballot is None}


@app.get("/api/votes")
async def get_votes():
    """Get all recorded votes, oldest first."""
    return {"votes": [list(vote) for vote in get_store().votes]}


@app.post("/api/votes", status_code=201)
async def cast_vote(request: VoteRequest):
    """Record a head-to-head outcome."""
    session = get_store()
    try:
        votes = session.cast_vote(request.winner, request.loser)
    except InvalidCandidateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return {"votes": [list(vote) for vote in votes], "progress": session.progress()}


@app.get("/api/progress")
async def get_progress():
    """Get how many pairs are decided and remaining."""
    return get_store().progress()


@app.get("/api/results")
async def get_results():
    """Get the ranking; 'final' is true once no pairs remain."""
    session = get_store()
    try:
        results = session.results()
    except Exception as e:
        logger.error(f"Error building results: {e}")
        raise HTTPException(status_code=500, detail=f"Results failed: {e}")

    return {
        "final": session.is_complete(),
        "ranking": results["candidate"].tolist(),
        "results": results.to_dict("records"),
    }


@app.get("/api/export/results")
async def export_results():
    """Export the results table as CSV."""
    results = get_store().results()
    buffer = io.StringIO()
    results.to_csv(buffer, index=False)
    buffer.seek(0)

    return StreamingResponse(
        iter([buffer.getvalue()]),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=pairwise_results.csv"},
    )


@app.delete("/api/session")
async def reset_session(clear_candidates: bool = False):
    """Discard votes, and optionally candidates, to start over."""
    session = get_store()
    session.reset(keep_candidates=not clear_candidates)
    return session.progress()
