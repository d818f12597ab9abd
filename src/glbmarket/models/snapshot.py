"""Results of one aggregation pass."""

from pydantic import BaseModel, ConfigDict, Field

from glbmarket.models.token import Listing, OwnedToken, TokenRecord


class MarketSnapshot(BaseModel):
    """Active listings with their token records.

    Attributes:
        listings: Active listings in contract order.
        records: Token records keyed by token id.
        is_demo: True when synthetic demonstration data was substituted.
    """

    model_config = ConfigDict(frozen=True)

    listings: list[Listing] = Field(default_factory=list)
    records: dict[int, TokenRecord] = Field(default_factory=dict)
    is_demo: bool = False

    def listing_for(self, token_id: int) -> Listing | None:
        return next((item for item in self.listings if item.token_id == token_id), None)


class OwnedSnapshot(BaseModel):
    """Tokens owned by one address."""

    model_config = ConfigDict(frozen=True)

    owner: str
    tokens: list[OwnedToken] = Field(default_factory=list)
    is_demo: bool = False

    def token_for(self, token_id: int) -> OwnedToken | None:
        return next((item for item in self.tokens if item.token_id == token_id), None)
