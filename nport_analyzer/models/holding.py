"""Pydantic model for a holding extracted from an NPORT-P filing."""

from pydantic import BaseModel, Field, field_validator


class HoldingRecord(BaseModel):
    """
    Individual position (holding) from an NPORT-P filing.

    Represents one <invstOrSec> entry that matched the search term.
    Serialized with camelCase keys for the web client.
    """

    name: str = Field(..., description="Security name")
    issuer: str = Field(default="", description="Issuer name")
    title: str = Field(default="", description="Title or description of the security")
    shares: float = Field(
        ...,
        description="Balance (number of shares or units)",
        gt=0
    )
    market_value: float = Field(
        ...,
        alias="marketValue",
        description="Market value in USD (valUSD)",
        gt=0
    )
    price_per_share: float = Field(
        ...,
        alias="pricePerShare",
        description="Per-share price adjusted by the exchange rate"
    )
    price_in_usd: float = Field(
        ...,
        alias="priceInUSD",
        description="marketValue / shares"
    )
    currency: str = Field(default="USD", description="ISO currency code")
    exchange_rate: float = Field(
        default=1.0,
        alias="exchangeRate",
        description="Exchange rate reported for non-USD positions"
    )
    report_date: str = Field(
        default="",
        alias="reportDate",
        description="Report period date from genInfo"
    )
    cusip: str = Field(default="", description="CUSIP identifier, if reported")
    ticker: str = Field(default="", description="Ticker symbol, if reported")

    @field_validator('currency')
    @classmethod
    def normalize_currency(cls, v: str) -> str:
        """Currency codes are compared upper-case."""
        return v.strip().upper() or "USD"

    class Config:
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "name": "Apple Inc.",
                "issuer": "Apple Inc.",
                "title": "Apple Inc.",
                "shares": 1000.0,
                "marketValue": 190000.0,
                "pricePerShare": 190.0,
                "priceInUSD": 190.0,
                "currency": "USD",
                "exchangeRate": 1.0,
                "reportDate": "2024-12-31",
                "cusip": "037833100",
                "ticker": "AAPL"
            }
        }
