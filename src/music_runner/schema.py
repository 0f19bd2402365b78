from pydantic import BaseModel, Field, StrictInt, StrictStr


class ScoreSubmission(BaseModel):
    name: StrictStr = Field(..., description="Player name, 1-50 characters after trimming")
    score: StrictInt = Field(..., description="Final score, 0-999999")


class ScoreItem(BaseModel):
    name: str
    score: int


class PlayerScoreResponse(BaseModel):
    name: str
    score: int
    timestamp: str


class SubmitResponse(BaseModel):
    success: bool = True
    rank: int


class DeleteResponse(BaseModel):
    success: bool = True
    deleted: int
    message: str = "All scores deleted"


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    uptime: float
