from typing import Optional

from .base import RosterModel


class RoomIn(RosterModel):
    id: str
    name: str
    centre_id: Optional[str] = None
