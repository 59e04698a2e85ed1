# motor_search/search_orchestrator.py

from typing import List, Sequence
from loguru import logger

from motor_search.models import FuzzyResult, MotorRecord, SearchOptions
from motor_search.matchers import fuzzy_search, is_fuzzy_match

DEFAULT_SEARCH_KEYS = ("model", "model_code", "category", "description")


def search_inventory(
    motors: Sequence[MotorRecord],
    query: str,
    keys: Sequence[str] = DEFAULT_SEARCH_KEYS,
    options: SearchOptions = None,
    in_stock_only: bool = False,
) -> List[FuzzyResult[MotorRecord]]:
    """
    Search the motor inventory for a listing search box.

    Args:
        motors (Sequence[MotorRecord]): Inventory to search.
        query (str): Raw text typed by the customer.
        keys (Sequence[str]): MotorRecord fields to match against.
        options (SearchOptions): Threshold, result cap and boosts.
        in_stock_only (bool): Drop motors not marked as in stock before searching.

    Returns:
        List[FuzzyResult[MotorRecord]]: Ranked hits, best first.
    """
    candidates = [m for m in motors if m.in_stock] if in_stock_only else list(motors)

    results = fuzzy_search(candidates, query, keys, options)

    typo_hits = sum(1 for r in results if is_fuzzy_match(r.match_type))
    logger.debug(
        f"Search '{query}': {len(results)} hits from {len(candidates)} motors "
        f"({typo_hits} typo-tolerant)"
    )
    return results
