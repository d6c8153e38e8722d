# app/main.py
import logging
from typing import List, Optional

from fastapi import FastAPI, HTTPException, Depends, Query
from fastapi.middleware.cors import CORSMiddleware
from .config import Settings, settings
from .schemas import (
    CategoryCount,
    Dashboard,
    PriceRangeCount,
    Statistics,
    Transaction,
    TransactionPage,
)
from . import processing, source

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(name)s %(levelname)s %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Transaction Dashboard API",
    description="API for searching and summarising monthly product transactions."
)

# The dashboard frontend is served from another origin
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_methods=["GET"],
    allow_headers=["*"],
)

# Dependency function for settings
def get_settings():
    yield settings

# Dependency function for the dataset, fetched fresh for every request
def get_transactions(app_settings: Settings = Depends(get_settings)):
    try:
        return source.load_transactions(app_settings)
    except source.SourceUnavailableError as e:
        logger.error("Transaction source unavailable: %s", e)
        raise HTTPException(status_code=502, detail=f"Transaction data source unavailable: {e}")

def parse_positive_int(value: Optional[str], default: int) -> int:
    """Reads a pagination parameter, falling back to the default when it is missing or invalid."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default

# This is the route for the root URL "/"
@app.get("/")
def read_root():
    return {"message": "Welcome to the Transaction Dashboard API"}

@app.get("/transactions", response_model=TransactionPage)
def get_transactions_page(
    month: Optional[str] = None,
    search: str = "",
    page: Optional[str] = None,
    per_page: Optional[str] = Query(None, alias="perPage"),
    records: List[Transaction] = Depends(get_transactions),
    app_settings: Settings = Depends(get_settings),
):
    """
    Returns one page of the month's transactions matching the search term.
    - **month**: Month name, e.g. March (the year is ignored)
    - **search**: Matched against title, description and price (case-insensitive)
    - **page**: 1-based page number, defaults to 1
    - **perPage**: Page size, defaults to 10
    """
    page_number = parse_positive_int(page, 1)
    page_size = min(
        parse_positive_int(per_page, app_settings.DEFAULT_PER_PAGE),
        app_settings.MAX_PER_PAGE,
    )

    try:
        return processing.list_transactions(
            records, month, search=search, page=page_number, per_page=page_size
        )
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Transaction query failed: {e}")

@app.get("/transactions/statistics", response_model=Statistics)
def get_statistics(month: Optional[str] = None, records: List[Transaction] = Depends(get_transactions)):
    """
    Returns total sale amount, sold and unsold item counts for a month.
    - **month**: Month name, e.g. March
    """
    try:
        return processing.summarise_month(records, month)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Statistics query failed: {e}")

@app.get("/transactions/price-ranges", response_model=List[PriceRangeCount])
def get_price_ranges(month: Optional[str] = None, records: List[Transaction] = Depends(get_transactions)):
    """
    Returns the number of the month's items in each of the ten price ranges.
    - **month**: Month name, e.g. March
    """
    try:
        return processing.price_ranges_for_month(records, month)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Price range query failed: {e}")

@app.get("/transactions/categories", response_model=List[CategoryCount])
def get_categories(month: Optional[str] = None, records: List[Transaction] = Depends(get_transactions)):
    """
    Returns the number of the month's items per category, in first-seen order.
    - **month**: Month name, e.g. March
    """
    try:
        return processing.categories_for_month(records, month)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Category query failed: {e}")

@app.get("/transactions/dashboard", response_model=Dashboard)
def get_dashboard(month: Optional[str] = None, records: List[Transaction] = Depends(get_transactions)):
    """
    Returns statistics, price ranges and categories for a month from a single fetch.
    - **month**: Month name, e.g. March
    """
    try:
        return processing.dashboard_for_month(records, month)
    except HTTPException:
        raise
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Dashboard query failed: {e}")
