from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class RoomStatsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str
    users: List[str] = []
    last_activity: int = Field(alias="lastActivity")  # epoch-ms


class AdminStatsOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    rooms: List[RoomStatsOut]
    total_rooms: int = Field(alias="totalRooms")
    total_users: int = Field(alias="totalUsers")
