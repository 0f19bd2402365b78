from fastapi import APIRouter, Depends, Query, Request

from .constants import LEADERBOARD_SIZE
from .schema import (
    ScoreSubmission,
    ScoreItem,
    PlayerScoreResponse,
    SubmitResponse,
    DeleteResponse,
)
from .score_service import ScoreService

router = APIRouter(prefix="/api/scores", tags=["scores"])


def get_score_service(request: Request) -> ScoreService:
    return request.app.state.score_service


@router.get("", response_model=list[ScoreItem])
def list_scores(
    limit: int = Query(LEADERBOARD_SIZE, ge=1, le=LEADERBOARD_SIZE),
    service: ScoreService = Depends(get_score_service),
):
    return [ScoreItem(name=e.name, score=e.score) for e in service.fetch_top_scores(limit)]


@router.post("", response_model=SubmitResponse, status_code=201)
def submit_score(body: ScoreSubmission, service: ScoreService = Depends(get_score_service)):
    result = service.submit_score(body.name, body.score)
    return SubmitResponse(rank=result.rank)


@router.delete("", response_model=DeleteResponse)
def delete_scores(service: ScoreService = Depends(get_score_service)):
    return DeleteResponse(deleted=service.delete_all_scores())


@router.get("/player/{name:path}", response_model=PlayerScoreResponse)
def get_player_best(name: str, service: ScoreService = Depends(get_score_service)):
    return PlayerScoreResponse(**service.fetch_player_best(name).to_public())
