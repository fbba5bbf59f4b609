from typing import AsyncIterator, Optional

import httpx
from fastapi import Query

from chesscard.config import settings
from chesscard.card.renderer import CardRenderer
from chesscard.card.schemas import RenderSize
from chesscard.card.sizing import parse_dimension, resolve_size


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(
        base_url=settings.chesscom_api_url,
        headers={"User-Agent": settings.user_agent},
        timeout=settings.http_timeout,
        follow_redirects=True,
    ) as client:
        yield client


def get_render_size(
    width: Optional[str] = Query(None),
    height: Optional[str] = Query(None),
) -> RenderSize:
    return resolve_size(parse_dimension(width), parse_dimension(height))


def get_renderer() -> CardRenderer:
    return CardRenderer()
