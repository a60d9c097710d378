from __future__ import annotations

import logging
import os
import signal

from fastapi import FastAPI, Request
from telegram import Update
from telegram.ext import (
    Application,
    ApplicationBuilder,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters,
)

import storage
from handlers.commands import auto, board, choose_mode, newgame, reset, rotate, score, start
from handlers.router import router_text

from app.config import LOG_LEVEL, normalize_webhook_base


token = os.getenv("BOT_TOKEN")
if not token:
    raise RuntimeError("BOT_TOKEN environment variable is not set")

webhook_url_raw = os.getenv("WEBHOOK_URL")
if not webhook_url_raw:
    raise RuntimeError("WEBHOOK_URL environment variable is not set")
webhook_url = normalize_webhook_base(webhook_url_raw)

logging.basicConfig(level=LOG_LEVEL)
logger = logging.getLogger(__name__)

logger.info("Using webhook base URL %s", webhook_url)


def _handle_exit(sig: int, frame: object | None) -> None:
    """Log received termination signals."""
    logger.info("Received shutdown signal %s", sig)


signal.signal(signal.SIGTERM, _handle_exit)
signal.signal(signal.SIGINT, _handle_exit)


async def handle_error(update: object, context: ContextTypes.DEFAULT_TYPE) -> None:
    logger.error("Exception while handling update %s", update, exc_info=context.error)


def build_bot_app(bot_token: str) -> Application:
    # Updates arrive through the webhook only, so the polling Updater is off.
    application = ApplicationBuilder().token(bot_token).updater(None).build()
    application.add_handler(CommandHandler("start", start))
    application.add_handler(CommandHandler("newgame", newgame))
    application.add_handler(CommandHandler("rotate", rotate))
    application.add_handler(CommandHandler("auto", auto))
    application.add_handler(CommandHandler("reset", reset))
    application.add_handler(CommandHandler("score", score))
    application.add_handler(CommandHandler("board", board))
    application.add_handler(CallbackQueryHandler(choose_mode, pattern=r"^mode\|"))
    application.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, router_text))
    application.add_error_handler(handle_error)
    return application


bot_app = build_bot_app(token)


app = FastAPI()


@app.on_event("startup")
async def on_startup() -> None:
    logger.info("Starting bot application")
    try:
        await bot_app.initialize()
        await bot_app.start()
        webhook = f"{webhook_url}/webhook"
        await bot_app.bot.set_webhook(webhook)
        logger.info("Webhook set to %s", webhook)
    except Exception:
        logger.exception("Failed during startup")
        raise
    else:
        logger.info("Bot application started successfully")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    logger.info("Shutting down bot application")
    try:
        await bot_app.bot.delete_webhook()
        await bot_app.stop()
        await bot_app.shutdown()
    except Exception:
        logger.exception("Error during shutdown")
        raise
    else:
        logger.info("Bot application stopped")


@app.post("/webhook")
async def telegram_webhook(request: Request) -> dict[str, bool]:
    update = Update.de_json(await request.json(), bot_app.bot)
    await bot_app.process_update(update)
    return {"ok": True}


@app.api_route("/", methods=["GET", "HEAD"])
async def root() -> dict[str, object]:
    return {"status": "running", "games": len(storage.list_games())}


@app.get("/healthz")
async def healthz() -> dict[str, str]:
    """Health-check endpoint used by the hosting platform."""
    return {"status": "ok"}
