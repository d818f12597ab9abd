"""Single-token page view model."""

from glbmarket.core.views.base import PageView, ViewStatus
from glbmarket.models.token import TokenRecord
from glbmarket.services.metadata.sources import TokenDataSource


class TokenView(PageView):
    """Loads one token through whichever data source is configured."""

    def __init__(self, source: TokenDataSource) -> None:
        super().__init__()
        self.source = source
        self.token_id: int | None = None
        self.record: TokenRecord | None = None

    async def load(self, token_id: int) -> TokenRecord:
        self.status = ViewStatus.LOADING
        self.token_id = token_id
        self.record = await self.source.token(token_id)
        self.status = ViewStatus.READY
        return self.record
