import re
from typing import List, Optional

import pandas as pd
from loguru import logger

from motor_search.models import MotorRecord

_TAG_RE = re.compile(r"<[^>]*>")
_ESCAPED_BRACKETS_RE = re.compile(r"&lt;|&gt;")
_WHITESPACE_RE = re.compile(r"\s+")

_TRUE_VALUES = {"true", "yes", "y", "1", "in stock"}
_FALSE_VALUES = {"false", "no", "n", "0", "out of stock"}


def clean_motor_name(raw_name: Optional[str]) -> str:
    """Strip HTML tags and entities from a scraped motor name and normalize whitespace."""
    if not raw_name:
        return ""

    name = _TAG_RE.sub("", raw_name)
    name = _ESCAPED_BRACKETS_RE.sub("", name)
    name = name.replace("&amp;", "&").replace("&nbsp;", " ")
    return _WHITESPACE_RE.sub(" ", name).strip()


def _to_float(value) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(str(value).replace("$", "").replace(",", ""))
    except (ValueError, TypeError):
        return None


def _to_bool(value) -> Optional[bool]:
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE_VALUES:
        return True
    if text in _FALSE_VALUES:
        return False
    return None


def load_motors_from_csv(file_path: str, nrows: int = None) -> List[MotorRecord]:
    """
    Load motor inventory from CSV and convert rows to MotorRecord objects.

    Missing columns and empty cells become None. Rows whose model name is
    empty after cleaning are skipped.

    Args:
        file_path (str): Path to the inventory CSV.
        nrows (int): Optional cap on the number of rows read.

    Returns:
        List[MotorRecord]: Loaded motors, in file order.
    """
    df = pd.read_csv(file_path, nrows=nrows, dtype=str, keep_default_na=True)
    records = []
    for idx, row in df.iterrows():
        # Helper to safely extract values from pandas Series, converting NaN to None
        def safe_get(col):
            if col not in row.index:
                return None
            val = row[col]
            if pd.isna(val):
                return None
            return val

        model = clean_motor_name(safe_get("model"))
        if not model:
            logger.debug(f"Skipping inventory row {idx}: no model name")
            continue

        record = MotorRecord(
            id=str(safe_get("id") or idx),
            model=model,
            hp=_to_float(safe_get("hp")),
            price=_to_float(safe_get("price")),
            category=safe_get("category"),
            model_code=safe_get("model_code"),
            description=clean_motor_name(safe_get("description")) or None,
            in_stock=_to_bool(safe_get("in_stock")),
        )
        records.append(record)

    logger.debug(f"Loaded {len(records)} motors from {file_path}")
    return records
