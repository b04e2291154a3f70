"""Reply texts for chat commands."""

from decimal import Decimal, InvalidOperation
from typing import Optional, Sequence

from tradesim.core.exceptions import (
    InsufficientFundsError,
    QuoteFailureReason,
    QuoteUnavailableError,
)
from tradesim.core.timezone import format_timestamp
from tradesim.domain.models import TradeTransaction, TradeSide
from tradesim.domain.views import (
    Quote,
    CompanyOverview,
    SymbolMatch,
    PriceBar,
    PortfolioView,
    UserStats,
)
from tradesim.services.ledger_service import TradeResult

DESCRIPTION_LIMIT = 300
SEPARATOR = "━━━━━━━━━━━━━━━━━━━━"
SPARK_CHARS = "▁▂▃▄▅▆▇█"

TOP_SYMBOLS = [
    ("🍎", "AAPL", "Apple Inc."),
    ("💻", "MSFT", "Microsoft Corporation"),
    ("🚗", "TSLA", "Tesla Inc."),
    ("📦", "AMZN", "Amazon.com Inc."),
    ("🔍", "GOOGL", "Alphabet Inc. (Google)"),
    ("💳", "V", "Visa Inc."),
    ("🎮", "NVDA", "NVIDIA Corporation"),
    ("☕", "SBUX", "Starbucks Corporation"),
    ("🎬", "DIS", "The Walt Disney Company"),
    ("✈️", "BA", "Boeing Company"),
]


# Number helpers

def money(value: Optional[Decimal]) -> str:
    if value is None:
        return "--"
    return f"${value:,.2f}"


def signed_money(value: Decimal) -> str:
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def percent(value: Optional[Decimal]) -> str:
    if value is None:
        return "n/a"
    return f"{value:.2f}%"


def quantity(value: Decimal) -> str:
    """Shares without trailing zeros: 10, 5.5, 0.125."""
    return f"{value.normalize():f}"


def format_market_cap(raw: Optional[str]) -> str:
    """
    Human-readable market capitalization.

    Uses T/B/M suffixes from a million upwards and digit grouping below.
    Non-numeric input is returned unchanged.
    """
    if not raw:
        return "N/A"
    try:
        cap = Decimal(raw)
    except InvalidOperation:
        return raw
    if not cap.is_finite():
        return raw

    for threshold, suffix in (
        (Decimal("1e12"), "T"),
        (Decimal("1e9"), "B"),
        (Decimal("1e6"), "M"),
    ):
        if cap >= threshold:
            return f"${cap / threshold:.2f}{suffix}"
    return f"${cap:,.0f}"


def format_pe_ratio(raw: Optional[str]) -> str:
    if not raw or raw == "None":
        return "N/A"
    return raw


def truncate_description(text: Optional[str], limit: int = DESCRIPTION_LIMIT) -> str:
    if not text:
        return "No description available."
    if len(text) > limit:
        return text[: limit - 3] + "..."
    return text


def sparkline(values: Sequence[Decimal]) -> str:
    if not values:
        return ""
    low, high = min(values), max(values)
    span = high - low
    if span == 0:
        return SPARK_CHARS[len(SPARK_CHARS) // 2] * len(values)
    top = len(SPARK_CHARS) - 1
    return "".join(SPARK_CHARS[int((v - low) / span * top)] for v in values)


# Static texts

def welcome(initial_balance: Decimal) -> str:
    return (
        "💼 Welcome to the Trading Simulator! 📈\n\n"
        f"Start virtual trading with {money(initial_balance)}!\n\n"
        "🎯 What you can do:\n"
        "• Buy and sell real stocks with virtual money\n"
        "• Track your portfolio\n"
        "• Check live prices\n"
        "• Review your performance\n\n"
        "💡 Tip: try /price AAPL to see Apple's price!\n\n"
        "Use /help to list all commands."
    )


def help_text() -> str:
    return (
        "📚 AVAILABLE COMMANDS:\n\n"
        "📊 QUOTES:\n"
        "/price [SYMBOL] - Current price of a stock\n"
        "/info [SYMBOL] - Company details\n"
        "/search [NAME] - Find a symbol by company name\n"
        "/chart [SYMBOL] [INTERVAL] - Recent closing prices\n"
        "/top - Popular stocks\n\n"
        "💰 TRADING:\n"
        "/buy [SYMBOL] [QTY] - Buy shares\n"
        "/sell [SYMBOL] [QTY] - Sell shares\n"
        "/balance - Your available cash\n\n"
        "📈 PORTFOLIO:\n"
        "/portfolio - Your full portfolio\n"
        "/history - Recent transactions\n"
        "/stats - Your trading statistics\n\n"
        "⭐ WATCHLIST:\n"
        "/watch [SYMBOL] - Add to your watchlist\n"
        "/watchlist - Show your watchlist\n\n"
        "🔄 OTHER:\n"
        "/reset - Reset your cash balance\n"
        "/help - Show this message\n\n"
        "💡 Examples:\n"
        "/price AAPL\n"
        "/buy TSLA 5\n"
        "/sell MSFT 2"
    )


def top_list() -> str:
    lines = ["🔥 POPULAR STOCKS:", ""]
    lines += [f"{icon} {symbol} - {name}" for icon, symbol, name in TOP_SYMBOLS]
    lines += [
        "",
        "💡 Use /price [SYMBOL] to see the price",
        "💡 Use /info [SYMBOL] for company details",
    ]
    return "\n".join(lines)


def usage(example: str, hint: str) -> str:
    return f"❌ Usage: {hint}\nExample: {example}"


def unknown_command() -> str:
    return "❓ Unknown command. Use /help to see all commands."


# Market data

def quote(q: Quote) -> str:
    if q.cached:
        return (
            f"📊 {q.symbol}\n"
            f"💵 Price: {money(q.price)}\n\n"
            "⚡ Cached data (updated at most 1 min ago)"
        )

    lines = [f"📊 {q.symbol}", f"💵 Price: {money(q.price)}"]
    if q.change is not None:
        trend, dot = ("📈", "🟢") if q.change >= 0 else ("📉", "🔴")
        lines.append(
            f"{trend} Change: {dot}{money(abs(q.change))} ({percent(q.change_percent)})"
        )
    if q.volume is not None:
        lines.append(f"📊 Volume: {q.volume:,}")
    lines += ["", f"💡 Use /buy {q.symbol} [quantity] to buy"]
    return "\n".join(lines)


def overview(o: CompanyOverview) -> str:
    return (
        f"🏢 {o.name} ({o.symbol})\n\n"
        f"📊 Sector: {o.sector or 'N/A'}\n"
        f"🏭 Industry: {o.industry or 'N/A'}\n"
        f"💰 Market Cap: {format_market_cap(o.market_cap)}\n"
        f"📈 P/E Ratio: {format_pe_ratio(o.pe_ratio)}\n\n"
        "📝 Description:\n"
        f"{truncate_description(o.description)}\n\n"
        f"💡 Use /price {o.symbol} to see the current price"
    )


def search_results(keywords: str, matches: Sequence[SymbolMatch], limit: int) -> str:
    if not matches:
        return f"❌ No results found for: {keywords}"

    lines = ["🔍 SEARCH RESULTS:", ""]
    for match in list(matches)[:limit]:
        lines.append(f"📊 {match.symbol} - {match.name}")
        lines.append(f"   Type: {match.type or '-'} | Region: {match.region or '-'}")
        lines.append("")
    lines.append("💡 Use /price [SYMBOL] to see the price")
    return "\n".join(lines)


def chart(symbol: str, interval: str, bars: Sequence[PriceBar], points: int) -> str:
    if not bars:
        return f"❌ No price data for {symbol}."

    recent = list(bars)[-points:]
    closes = [bar.close for bar in recent]
    first, last = closes[0], closes[-1]
    change = last - first
    change_pct = (change / first * 100) if first else None

    lines = [
        f"📉 {symbol} ({interval}, last {len(recent)})",
        "",
        sparkline(closes),
        "",
    ]
    for bar in recent:
        lines.append(f"{format_timestamp(bar.timestamp)}  {money(bar.close)}")
    lines += [
        SEPARATOR,
        f"Low: {money(min(closes))} | High: {money(max(closes))}",
        f"Change: {signed_money(change)} ({percent(change_pct)})",
    ]
    return "\n".join(lines)


# Trading

def buy_receipt(result: TradeResult) -> str:
    txn = result.transaction
    return (
        "✅ PURCHASE COMPLETED!\n\n"
        f"📊 {txn.symbol}\n"
        f"📦 Quantity: {quantity(txn.quantity)}\n"
        f"💵 Price: {money(txn.price)}\n"
        f"💰 Total: {money(txn.total_amount)}\n"
        f"💳 New balance: {money(result.cash_balance)}\n\n"
        "💡 Use /portfolio to see your portfolio"
    )


def sell_receipt(result: TradeResult) -> str:
    txn = result.transaction
    return (
        "✅ SALE COMPLETED!\n\n"
        f"📊 {txn.symbol}\n"
        f"📦 Quantity: {quantity(txn.quantity)}\n"
        f"💵 Price: {money(txn.price)}\n"
        f"💰 Proceeds: {money(txn.total_amount)}\n"
        f"📈 Realized P/L: {signed_money(txn.profit_loss)}\n"
        f"💳 New balance: {money(result.cash_balance)}\n\n"
        "💡 Use /history to see all transactions"
    )


def sell_failed(symbol: str) -> str:
    return (
        "❌ SALE FAILED!\n\n"
        f"You don't own enough shares of {symbol}.\n"
        "Check your portfolio with /portfolio"
    )


def insufficient_funds(error: InsufficientFundsError) -> str:
    return (
        "❌ Insufficient funds!\n\n"
        f"💵 Total cost: {money(error.required)}\n"
        f"💳 Available balance: {money(error.available)}\n"
        f"💰 Missing: {money(error.required - error.available)}"
    )


def balance(cash: Decimal) -> str:
    return (
        "💳 AVAILABLE BALANCE\n\n"
        f"💰 {money(cash)}\n\n"
        "💡 Use /buy to invest\n"
        "💡 Use /portfolio to see your investments"
    )


def reset_done(cash: Decimal) -> str:
    return (
        "🔄 ACCOUNT RESET!\n\n"
        f"💰 New balance: {money(cash)}\n\n"
        "⚠️ Note: your holdings and history were kept,\n"
        "but you can start over with a fresh balance.\n\n"
        "💡 Happy trading!"
    )


# Portfolio and history

def portfolio(view: PortfolioView) -> str:
    if view.is_empty:
        return "📊 Your portfolio is empty. Start investing with /buy!"

    valuation = view.valuation
    lines = ["📊 YOUR PORTFOLIO:", ""]
    for item in valuation.items:
        trend = "📈" if item.unrealized_pl >= 0 else "📉"
        lines += [
            f"{trend} {item.symbol}",
            f"Quantity: {quantity(item.quantity)}",
            f"Average cost: {money(item.avg_cost)}",
            f"Current price: {money(item.current_price)}",
            f"Value: {money(item.current_value)}",
            f"P/L: {signed_money(item.unrealized_pl)} ({percent(item.unrealized_pl_percent)})",
            "",
        ]
    if valuation.unpriced_symbols:
        lines.append(f"⚠️ No price available for: {', '.join(valuation.unpriced_symbols)}")
        lines.append("")

    lines += [
        SEPARATOR,
        f"💰 Total value: {money(valuation.total_value)}",
        f"💵 Invested: {money(valuation.total_invested)}",
        f"📊 Total P/L: {signed_money(valuation.total_unrealized_pl)} "
        f"({percent(valuation.total_unrealized_pl_percent)})",
        f"💳 Available cash: {money(view.cash_balance)}",
    ]
    return "\n".join(lines)


def history(transactions: Sequence[TradeTransaction]) -> str:
    if not transactions:
        return "📜 No transactions yet."

    lines = ["📜 TRANSACTION HISTORY:", ""]
    for txn in transactions:
        dot = "🟢" if txn.side == TradeSide.BUY else "🔴"
        lines.append(f"{dot} {txn.side.value} {txn.symbol}")
        lines.append(f"Quantity: {quantity(txn.quantity)} @ {money(txn.price)}")
        lines.append(f"Total: {money(txn.total_amount)}")
        if txn.profit_loss is not None:
            heart = "💚" if txn.profit_loss >= 0 else "❤️"
            lines.append(f"{heart} P/L: {signed_money(txn.profit_loss)}")
        lines.append(f"📅 {format_timestamp(txn.timestamp)}")
        lines.append("")
    return "\n".join(lines).rstrip()


def stats(s: UserStats) -> str:
    since = s.registered_at.strftime("%Y-%m-%d") if s.registered_at else "-"
    return (
        "📊 YOUR STATISTICS\n\n"
        f"💰 Balance: {money(s.cash_balance)}\n"
        f"📈 Total trades: {s.total_trades}\n"
        f"✅ Profitable trades: {s.profitable_trades}\n"
        f"🎯 Win rate: {s.win_rate:.1f}%\n"
        f"📅 Member since: {since}"
    )


# Watchlist

def watch_added(symbol: str, added: bool) -> str:
    head = f"⭐ {symbol} added to your watchlist!" if added else f"⭐ {symbol} is already in your watchlist."
    return (
        f"{head}\n\n"
        "💡 Use /watchlist to see all saved symbols\n"
        f"💡 Use /price {symbol} to see the price"
    )


def watchlist(symbols: Sequence[str]) -> str:
    if not symbols:
        return "⭐ Your watchlist is empty. Add symbols with /watch [SYMBOL]"
    return "\n".join(["⭐ YOUR WATCHLIST:", ""] + [f"📌 {s}" for s in symbols])


# Failures

def quote_unavailable(error: QuoteUnavailableError) -> str:
    if error.reason == QuoteFailureReason.RATE_LIMITED:
        return "⚠️ API limit reached. Please try again in a few minutes."
    if error.reason == QuoteFailureReason.NOT_FOUND:
        return f"❌ No data found for {error.symbol}. Check that the symbol is correct."
    return "❌ Market data is temporarily unavailable. Please try again later."


def invalid_symbol() -> str:
    return "❌ Invalid or unknown symbol."


def error(message: str) -> str:
    return f"❌ {message}"


def internal_error() -> str:
    return "❌ Something went wrong while processing your command. Please try again."
