# 상태/통계 응답 스키마

from typing import Dict

from pydantic import BaseModel

from .user_schema import CamelModel


class HealthResponse(BaseModel):
    status: str
    uptime: int
    timestamp: str
    memory: Dict[str, str]
    version: str


class StatsResponse(CamelModel):
    total_users: int
    api_version: str
    uptime: int
    timestamp: str


class WelcomeResponse(BaseModel):
    message: str
    version: str
    environment: str
    timestamp: str
    endpoints: Dict[str, str]
