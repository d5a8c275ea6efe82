"""Re-analyse the configured symbol list and rebuild categories.

Each symbol is analysed in turn with a pause between calls to stay inside
the free-tier CoinGecko limits; results go to the Redis cache, then the
scam / canBuy categories are recomputed. Run it from cron.

Usage:
    python scripts/refresh_symbols.py
    python scripts/refresh_symbols.py --symbols PEPE,SHIB --delay 5
"""

import argparse
import asyncio
import sys
from pathlib import Path

# Ensure project root is in path
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from loguru import logger  # noqa: E402

from config.settings import settings  # noqa: E402
from tokenrisk.services.container import ServiceContainer  # noqa: E402
from tokenrisk.utils.logger import setup_logger  # noqa: E402


async def refresh(symbols: list[str], delay: float) -> dict[str, int]:
    """Analyse ``symbols`` sequentially. Returns ok/failed counts."""
    counts = {"ok": 0, "failed": 0}
    container = await ServiceContainer(settings).open()
    try:
        for i, symbol in enumerate(symbols):
            try:
                result = await container.multichain.analyze_by_symbol(symbol)
                await container.cache.set(symbol, result)
                gap = result.gap_hunter_bot_risk
                risk = f"{gap.risk_percentage:.2f}%" if gap else "n/a"
                logger.info(f"[REFRESH] {symbol}: success={result.success} risk={risk}")
                counts["ok" if result.success else "failed"] += 1
            except Exception as e:
                logger.error(f"[REFRESH] {symbol} failed: {e}")
                counts["failed"] += 1

            if i < len(symbols) - 1:
                await asyncio.sleep(delay)

        categories = await container.categorizer.categorize_symbols()
        print(f"Categories: {len(categories['scam'])} scam, {len(categories['canBuy'])} can buy")
    finally:
        await container.close()
    return counts


async def main() -> None:
    parser = argparse.ArgumentParser(description="Refresh cached symbol analyses")
    parser.add_argument(
        "--symbols", default="", help="Comma-separated symbols (default: SYMBOLS_TO_ANALYZE)"
    )
    parser.add_argument("--delay", type=float, default=settings.symbol_refresh_delay_sec)
    args = parser.parse_args()

    setup_logger(json_logs=settings.json_logs, level=settings.log_level)
    symbols = (
        [s.strip().upper() for s in args.symbols.split(",") if s.strip()]
        if args.symbols
        else settings.symbol_list
    )
    if not symbols:
        print("No symbols to analyse")
        return

    counts = await refresh(symbols, args.delay)
    print(f"Done: {counts['ok']} ok, {counts['failed']} failed out of {len(symbols)}")


if __name__ == "__main__":
    asyncio.run(main())
