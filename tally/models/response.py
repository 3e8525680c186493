from pydantic import BaseModel
from typing import List, Literal, Union

Number = Union[int, float]

class IncrementResponse(BaseModel):
    total: Number
    userTotal: Number
    newScore: Number

class StatsResponse(BaseModel):
    total: Number = 0
    userTotal: Number = 0

class LeaderboardRow(BaseModel):
    userId: str
    score: Number

class LeaderboardResponse(BaseModel):
    rows: List[LeaderboardRow]

class HealthResponse(BaseModel):
    status: Literal["healthy"] = "healthy"
    uptime: float
    store: Literal["up", "down"]

class ErrorResponse(BaseModel):
    error: str
