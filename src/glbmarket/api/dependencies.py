"""FastAPI dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends

from glbmarket.config.settings import Settings, get_settings
from glbmarket.services.session import MarketSession, get_session


def get_market_session() -> MarketSession:
    """Get the market session dependency."""
    return get_session()


SettingsDep = Annotated[Settings, Depends(get_settings)]
SessionDep = Annotated[MarketSession, Depends(get_market_session)]
