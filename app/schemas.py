# app/schemas.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

class CamelModel(BaseModel):
    # Accept both the camelCase JSON names and the python attribute names
    model_config = ConfigDict(populate_by_name=True)

class Transaction(CamelModel):
    id: int
    title: str
    description: str = ""
    price: float
    date_of_sale: Optional[str] = Field(default=None, alias="dateOfSale")
    category: str
    sold: bool
    image: str = ""

class TransactionPage(CamelModel):
    transactions: List[Transaction]
    total_pages: int = Field(alias="totalPages")

class Statistics(CamelModel):
    total_sales: float = Field(alias="totalSales")
    sold_items: int = Field(alias="soldItems")
    not_sold_items: int = Field(alias="notSoldItems")

class PriceRangeCount(BaseModel):
    range: str
    count: int

class CategoryCount(BaseModel):
    category: str
    count: int

class Dashboard(CamelModel):
    statistics: Statistics
    price_ranges: List[PriceRangeCount] = Field(alias="priceRanges")
    categories: List[CategoryCount]
