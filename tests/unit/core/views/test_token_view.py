"""Unit tests for TokenView."""

import pytest

from glbmarket.core.views.base import ViewStatus
from glbmarket.core.views.token_view import TokenView
from glbmarket.services.metadata.sources import MockSource


@pytest.mark.asyncio
async def test_load_token(demo_catalog) -> None:
    view = TokenView(MockSource(demo_catalog))
    assert view.status == ViewStatus.LOADING

    record = await view.load(4)

    assert view.status == ViewStatus.READY
    assert view.token_id == 4
    assert view.record == record
    assert record.display_name == "3D Model #4"
    assert record.asset_uri == demo_catalog.glb_uri
