CHESSCOM_PROFILE_PATH = "/pub/player/{username}"
CHESSCOM_STATS_PATH = "/pub/player/{username}/stats"

NATIVE_WIDTH = 600
NATIVE_HEIGHT = 250

MAX_WIDTH = 1200
MAX_HEIGHT = 600

# chess.com answers unknown players with {"code": 0, "message": ...}
NOT_FOUND_CODE = 0

MISSING_RATING = "N/A"

# (label, stats keys in lookup order)
GAME_MODES = (
    ("Rapid", ("chess_rapid", "rapid")),
    ("Blitz", ("chess_blitz", "blitz")),
    ("Bullet", ("chess_bullet", "bullet")),
)
