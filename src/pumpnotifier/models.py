from pydantic import BaseModel, Field, field_validator


class TokenInfo(BaseModel):
    mint: str
    name: str | None = None
    symbol: str | None = None
    market_cap: float = 0.0  # Reported in SOL

    @field_validator("market_cap", mode="before")
    @classmethod
    def _missing_cap_is_zero(cls, value):
        return 0.0 if value is None else value

    @property
    def label(self) -> str:
        return f"{self.name or 'Unnamed'} ({self.symbol or '?'})"


class TradeInfo(BaseModel):
    mint: str
    token_amount: float = 0.0
    sol_amount: float = 0.0

    @field_validator("token_amount", "sol_amount", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, value):
        return 0.0 if value is None else value


class SolPrice(BaseModel):
    sol_price: float = Field(..., alias="solPrice")
    model_config = {"populate_by_name": True}


class Notification(BaseModel):
    """Message handed to a notification sink, with an optional link hint."""

    text: str
    link_url: str | None = None
    link_label: str | None = None
