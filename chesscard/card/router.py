import logging

import httpx
from fastapi import APIRouter, Depends, Response
from fastapi.concurrency import run_in_threadpool

from chesscard.config import settings
from chesscard.card.dependencies import get_http_client, get_render_size, get_renderer
from chesscard.card.exceptions import CardError, CardRenderError, UsernameMissingError
from chesscard.card.layout import build_card_tree, iter_pictures
from chesscard.card.renderer import CardRenderer
from chesscard.card.schemas import RenderSize
from chesscard.card.service import fetch_images, fetch_player

logger = logging.getLogger(__name__)


router = APIRouter(tags=["card"])


@router.get("/api/", include_in_schema=False)
@router.get("/", include_in_schema=False)
async def username_missing():
    raise UsernameMissingError()


@router.get(
    "/api/{username}",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
)
@router.get("/{username}", response_class=Response, include_in_schema=False)
async def get_profile_card(
    username: str,
    size: RenderSize = Depends(get_render_size),
    client: httpx.AsyncClient = Depends(get_http_client),
    renderer: CardRenderer = Depends(get_renderer),
):
    username = username.strip()
    if not username:
        raise UsernameMissingError()

    try:
        profile, stats = await fetch_player(client, username, settings.default_avatar_url)

        tree = build_card_tree(username, profile, stats)
        images = await fetch_images(client, [picture.src for picture in iter_pictures(tree)])

        png = await run_in_threadpool(renderer.render, tree, size.width, size.height, images)
    except CardError:
        raise
    except Exception as e:
        logger.exception("Error generating image for %s", username)
        raise CardRenderError() from e

    return Response(content=png, media_type="image/png")
