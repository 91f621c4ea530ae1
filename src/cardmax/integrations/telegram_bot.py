from pydantic import ValidationError
from telegram import Update
from telegram.ext import Application, CommandHandler, ContextTypes, MessageHandler, filters

from cardmax.agents.orchestrator import RecommendationOrchestrator
from cardmax.config import settings
from cardmax.domain.errors import InvalidInput
from cardmax.log import configure_logging, get_logger
from cardmax.repository.json_store import JsonWalletRepository
from cardmax.schemas.requests import RecommendRequest
from cardmax.schemas.responses import RecommendResponse

logger = get_logger(__name__)

USAGE = (
    "Usage: /best <amount> <category> [merchant]\n"
    "e.g. /best 2000 dining Swiggy\n"
    "/cards lists the cards in your wallet."
)


def parse_best_args(args: list[str]) -> RecommendRequest:
    if len(args) < 2:
        raise InvalidInput("amount and category are required")

    try:
        amount = float(args[0].replace(",", ""))
    except ValueError as exc:
        raise InvalidInput(f"not an amount: {args[0]}") from exc

    try:
        return RecommendRequest(amount=amount, category=args[1], merchant=" ".join(args[2:]))
    except ValidationError as exc:
        raise InvalidInput("amount must be a positive number") from exc


def format_reply(payload: RecommendResponse, limit: int = 3) -> str:
    if payload.best_card is None:
        return "No cards in your wallet yet."

    best = payload.best_card
    lines = [f"Best card: {best.card.name} {best.card.masked_number}".rstrip()]
    for rank, item in enumerate(payload.all_cards[:limit], start=1):
        line = (
            f"{rank}. {item.card.name}: {item.reward_rate:g}% {item.reward_type.value}, "
            f"value {item.cash_value:.2f}"
        )
        if item.rule:
            line += f" ({item.rule.type.value.lower()} {item.rule.entity_name})"
        lines.append(line)
    return "\n".join(lines)


def _orchestrator(context: ContextTypes.DEFAULT_TYPE) -> RecommendationOrchestrator:
    return context.bot_data["orchestrator"]


async def start(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(USAGE)


async def best(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    try:
        request = parse_best_args(list(context.args or []))
    except InvalidInput as exc:
        await update.message.reply_text(f"{exc}\n\n{USAGE}")
        return

    try:
        result = _orchestrator(context).recommend(request)
    except Exception:
        logger.exception("telegram_recommendation_failed", category=request.category)
        await update.message.reply_text("Could not compute recommendations.")
        return
    await update.message.reply_text(format_reply(result))


async def cards(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    wallet = _orchestrator(context).repository.list_cards()
    if not wallet:
        await update.message.reply_text("No cards in your wallet yet.")
        return
    lines = [
        f"{card.id}. {card.name} ({card.issuer}) {card.masked_number}".rstrip() for card in wallet
    ]
    await update.message.reply_text("\n".join(lines))


async def handle_message(update: Update, context: ContextTypes.DEFAULT_TYPE) -> None:
    await update.message.reply_text(USAGE)


def main() -> None:
    configure_logging(settings.log_level, settings.log_format)
    if not settings.telegram_bot_token:
        raise ValueError("TELEGRAM_BOT_TOKEN is required.")

    app = Application.builder().token(settings.telegram_bot_token).build()
    app.bot_data["orchestrator"] = RecommendationOrchestrator(JsonWalletRepository(settings.data_file))
    app.add_handler(CommandHandler("start", start))
    app.add_handler(CommandHandler("best", best))
    app.add_handler(CommandHandler("cards", cards))
    app.add_handler(MessageHandler(filters.TEXT & ~filters.COMMAND, handle_message))

    logger.info("telegram_bot_starting")
    app.run_polling()


if __name__ == "__main__":
    main()
