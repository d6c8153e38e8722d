# app/processing.py
import logging
import math
from typing import List, Optional, Sequence, Tuple

import pandas as pd

from .schemas import (
    CategoryCount,
    Dashboard,
    PriceRangeCount,
    Statistics,
    Transaction,
    TransactionPage,
)

logger = logging.getLogger(__name__)

MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)
MONTHS = {name.lower(): number for number, name in enumerate(MONTH_NAMES, start=1)}

# Upper bound of every closed price bucket; the last bucket is open-ended
PRICE_BOUNDS = (100, 200, 300, 400, 500, 600, 700, 800, 900)
PRICE_RANGE_LABELS = [
    f"{low} - {high}"
    for low, high in zip((0,) + tuple(b + 1 for b in PRICE_BOUNDS[:-1]), PRICE_BOUNDS)
] + [f"{PRICE_BOUNDS[-1] + 1} - above {PRICE_BOUNDS[-1]}"]

FRAME_COLUMNS = ["title", "description", "price", "date_of_sale", "category", "sold"]

def parse_month(name: Optional[str]) -> Optional[int]:
    """Maps a calendar month name to 1..12, or None when the name is unknown."""
    if not name:
        return None
    return MONTHS.get(name.strip().lower())

def format_price(price: float) -> str:
    """
    Canonical text form of a price used by the search filter.

    Whole amounts drop the fractional part (150.0 -> "150"), anything else
    uses the shortest round-trip representation (329.85 -> "329.85").
    """
    if float(price).is_integer():
        return str(int(price))
    return repr(float(price))

def _sale_months(dates: pd.Series) -> pd.Series:
    # Only the leading calendar date counts; any time or offset after it is ignored
    parts = dates.astype("string").str.extract(r"^(\d{4})-(\d{1,2})-(\d{1,2})")
    calendar_dates = parts[0] + "-" + parts[1].str.zfill(2) + "-" + parts[2].str.zfill(2)
    parsed = pd.to_datetime(calendar_dates, format="%Y-%m-%d", errors="coerce")
    return parsed.dt.month

def build_frame(records: Sequence[Transaction]) -> pd.DataFrame:
    """
    Builds the working DataFrame the query operations run on.

    Args:
        records: The full transaction collection, left untouched

    Returns:
        pd.DataFrame: One row per record, indexed by its position in `records`
    """
    frame = pd.DataFrame(
        [record.model_dump(include=set(FRAME_COLUMNS)) for record in records],
        columns=FRAME_COLUMNS,
    )
    frame = frame.astype({"price": "float64", "sold": "bool"})
    frame["month"] = _sale_months(frame["date_of_sale"])
    frame["price_text"] = frame["price"].map(format_price).astype(object)
    return frame

def rows_to_records(frame: pd.DataFrame, records: Sequence[Transaction]) -> List[Transaction]:
    return [records[position] for position in frame.index]

def filter_by_month(frame: pd.DataFrame, month: Optional[str]) -> pd.DataFrame:
    """Rows sold in the given month of any year. Unparseable dates never match."""
    number = parse_month(month)
    if number is None:
        return frame.iloc[0:0]
    return frame[frame["month"] == number]

def filter_by_search(frame: pd.DataFrame, search: Optional[str]) -> pd.DataFrame:
    """
    Case-insensitive substring match on title, description or price text.
    An empty search keeps every row.
    """
    needle = (search or "").lower()
    if not needle or frame.empty:
        return frame

    matches = (
        frame["title"].str.lower().str.contains(needle, regex=False)
        | frame["description"].str.lower().str.contains(needle, regex=False)
        | frame["price_text"].str.contains(needle, regex=False)
    )
    return frame[matches]

def paginate(frame: pd.DataFrame, page: int, per_page: int) -> Tuple[pd.DataFrame, int]:
    """
    Cuts one page out of the filtered rows.

    Args:
        frame: Filtered rows in their original order
        page: 1-based page number
        per_page: Page size

    Returns:
        tuple: The rows of the page (empty past the last page) and the total page count

    Raises:
        ValueError: If page or per_page is below 1
    """
    if page < 1 or per_page < 1:
        raise ValueError("page and per_page must be at least 1")

    start = (page - 1) * per_page
    total_pages = math.ceil(len(frame) / per_page)
    return frame.iloc[start:start + per_page], total_pages

def compute_statistics(frame: pd.DataFrame) -> Statistics:
    sold = frame["sold"]
    return Statistics(
        total_sales=float(frame["price"].sum()),
        sold_items=int(sold.sum()),
        not_sold_items=int((~sold).sum()),
    )

def count_price_ranges(frame: pd.DataFrame) -> List[PriceRangeCount]:
    """
    Histogram over the fixed price buckets, always all ten of them.

    Each bucket includes its upper bound, so 100 lands in "0 - 100" and
    100.5 in "101 - 200".
    """
    if frame.empty:
        return [PriceRangeCount(range=label, count=0) for label in PRICE_RANGE_LABELS]

    buckets = pd.cut(
        frame["price"],
        bins=[-math.inf, *PRICE_BOUNDS, math.inf],
        labels=PRICE_RANGE_LABELS,
        right=True,
    )
    counts = buckets.value_counts(sort=False).reindex(PRICE_RANGE_LABELS, fill_value=0)
    return [PriceRangeCount(range=label, count=int(count)) for label, count in counts.items()]

def count_categories(frame: pd.DataFrame) -> List[CategoryCount]:
    """Occurrences per category, in the order each category first shows up."""
    counts = frame.groupby("category", sort=False).size()
    return [CategoryCount(category=category, count=int(count)) for category, count in counts.items()]

def list_transactions(
    records: Sequence[Transaction],
    month: Optional[str],
    search: str = "",
    page: int = 1,
    per_page: int = 10,
) -> TransactionPage:
    frame = filter_by_search(filter_by_month(build_frame(records), month), search)
    window, total_pages = paginate(frame, page, per_page)
    logger.debug(
        "month=%s search=%r matched %d of %d records", month, search, len(frame), len(records)
    )
    return TransactionPage(
        transactions=rows_to_records(window, records),
        total_pages=total_pages,
    )

def summarise_month(records: Sequence[Transaction], month: Optional[str]) -> Statistics:
    return compute_statistics(filter_by_month(build_frame(records), month))

def price_ranges_for_month(records: Sequence[Transaction], month: Optional[str]) -> List[PriceRangeCount]:
    return count_price_ranges(filter_by_month(build_frame(records), month))

def categories_for_month(records: Sequence[Transaction], month: Optional[str]) -> List[CategoryCount]:
    return count_categories(filter_by_month(build_frame(records), month))

def dashboard_for_month(records: Sequence[Transaction], month: Optional[str]) -> Dashboard:
    """Statistics and both histograms for one month, computed from the same dataset."""
    frame = filter_by_month(build_frame(records), month)
    return Dashboard(
        statistics=compute_statistics(frame),
        price_ranges=count_price_ranges(frame),
        categories=count_categories(frame),
    )
