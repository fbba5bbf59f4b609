from pydantic import BaseModel, Field
from typing import Optional

from chesscard.card.constants import MISSING_RATING


class PlayerProfile(BaseModel):
    avatar_url: str


class PlayerStats(BaseModel):
    rapid: Optional[int] = None
    blitz: Optional[int] = None
    bullet: Optional[int] = None

    def display(self, mode: str) -> str:
        rating = getattr(self, mode)
        return MISSING_RATING if rating is None else str(rating)


class RenderSize(BaseModel):
    width: int = Field(ge=1)
    height: int = Field(ge=1)
