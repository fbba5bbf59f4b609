import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import httpx

from chesscard.card.constants import (
    CHESSCOM_PROFILE_PATH,
    CHESSCOM_STATS_PATH,
    GAME_MODES,
    NOT_FOUND_CODE,
)
from chesscard.card.exceptions import PlayerNotFoundError
from chesscard.card.schemas import PlayerProfile, PlayerStats

logger = logging.getLogger(__name__)


async def fetch_player(
    client: httpx.AsyncClient,
    username: str,
    default_avatar_url: str,
) -> tuple[PlayerProfile, PlayerStats]:
    segment = quote(username, safe="")
    results = await asyncio.gather(
        client.get(CHESSCOM_PROFILE_PATH.format(username=segment)),
        client.get(CHESSCOM_STATS_PATH.format(username=segment)),
        return_exceptions=True,
    )
    for result in results:
        if isinstance(result, BaseException):
            raise result

    profile_response, stats_response = results
    logger.debug(
        "chess.com responded %s (profile) / %s (stats) for %s",
        profile_response.status_code,
        stats_response.status_code,
        username,
    )

    if not profile_response.is_success or not stats_response.is_success:
        logger.info("Player %s not found upstream (HTTP status)", username)
        raise PlayerNotFoundError(username)

    profile_data = profile_response.json()
    stats_data = stats_response.json()

    if not _is_player_payload(profile_data) or not _is_player_payload(stats_data):
        logger.info("Player %s not found upstream (payload)", username)
        raise PlayerNotFoundError(username)

    return parse_profile(profile_data, default_avatar_url), parse_stats(stats_data)


def _is_player_payload(data: Any) -> bool:
    if not isinstance(data, dict):
        return False
    return data.get("code") != NOT_FOUND_CODE


def extract_rating(stats_data: dict, keys: tuple[str, ...]) -> Optional[int]:
    for key in keys:
        if key in stats_data:
            node = stats_data[key]
            break
    else:
        return None

    for part in ("last", "rating"):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]

    return node


def parse_stats(stats_data: dict) -> PlayerStats:
    ratings = {
        label.lower(): extract_rating(stats_data, keys)
        for label, keys in GAME_MODES
    }
    return PlayerStats(**ratings)


def parse_profile(profile_data: dict, default_avatar_url: str) -> PlayerProfile:
    avatar = profile_data.get("avatar")
    return PlayerProfile(avatar_url=avatar or default_avatar_url)


async def fetch_image(client: httpx.AsyncClient, url: str) -> Optional[bytes]:
    response = await client.get(url)
    if not response.is_success:
        logger.warning("Image %s returned HTTP %s", url, response.status_code)
        return None
    return response.content


async def fetch_images(client: httpx.AsyncClient, urls: list[str]) -> dict[str, bytes]:
    unique = list(dict.fromkeys(urls))
    contents = await asyncio.gather(*(fetch_image(client, url) for url in unique))
    return {
        url: content
        for url, content in zip(unique, contents)
        if content is not None
    }
