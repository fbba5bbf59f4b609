import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from chesscard.config import settings
from chesscard.card.exceptions import CardError
from chesscard.card.router import router as card_router


def configure_logging() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


configure_logging()

app = FastAPI(
    title="Chess.com Profile Card API",
    version="0.1.0",
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(CardError)
async def card_error_handler(request: Request, exc: CardError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


@app.get("/health")
async def health_check():
    return {"status": "ok"}


# registered last: the bare /{username} route would otherwise shadow /health
app.include_router(card_router)
