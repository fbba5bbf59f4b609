"""
Declarative visual tree for the profile card.

Nodes carry CSS-like style dicts and are laid out by the rasterizer in
chesscard.card.renderer. The card is always composed at its native size;
other sizes are produced by a scale transform at paint time.
"""
from dataclasses import dataclass, field
from typing import Union

from chesscard.card.constants import GAME_MODES, NATIVE_HEIGHT, NATIVE_WIDTH
from chesscard.card.schemas import PlayerProfile, PlayerStats


CARD_BACKGROUND = "#2e2e2e"
CARD_BORDER = "#4a4a4a"
TEXT_COLOR = "white"
MUTED_TEXT_COLOR = "#cccccc"

AVATAR_SIZE = 96


@dataclass
class Text:
    text: str
    style: dict = field(default_factory=dict)


@dataclass
class Picture:
    src: str
    width: int
    height: int
    style: dict = field(default_factory=dict)


@dataclass
class Box:
    children: list["Node"] = field(default_factory=list)
    style: dict = field(default_factory=dict)


Node = Union[Box, Text, Picture]


def iter_pictures(node: Node):
    if isinstance(node, Picture):
        yield node
    elif isinstance(node, Box):
        for child in node.children:
            yield from iter_pictures(child)


def build_card_tree(username: str, profile: PlayerProfile, stats: PlayerStats) -> Box:
    rating_lines = [
        Text(
            f"{label}: {stats.display(label.lower())}",
            style={
                "fontSize": 24,
                "color": MUTED_TEXT_COLOR,
                "marginTop": 8 if index == 0 else 0,
            },
        )
        for index, (label, _keys) in enumerate(GAME_MODES)
    ]

    return Box(
        style={
            "width": NATIVE_WIDTH,
            "height": NATIVE_HEIGHT,
            "flexDirection": "column",
            "alignItems": "center",
            "justifyContent": "center",
            "backgroundColor": CARD_BACKGROUND,
            "borderColor": CARD_BORDER,
            "borderWidth": 4,
            "padding": 32,
            "color": TEXT_COLOR,
        },
        children=[
            Box(
                style={"flexDirection": "row", "alignItems": "center"},
                children=[
                    Picture(
                        profile.avatar_url,
                        AVATAR_SIZE,
                        AVATAR_SIZE,
                        style={"borderRadius": "50%", "marginRight": 24},
                    ),
                    Box(
                        style={"flexDirection": "column"},
                        children=[
                            Text(
                                username,
                                style={"fontSize": 48, "fontWeight": "bold", "maxWidth": 400},
                            ),
                            *rating_lines,
                        ],
                    ),
                ],
            ),
        ],
    )
