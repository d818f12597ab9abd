"""Unit tests for MintView."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from glbmarket.core.exceptions import ValidationError
from glbmarket.core.views.base import ViewStatus
from glbmarket.core.views.mint import (
    DEFAULT_ROYALTY_BPS,
    MintForm,
    MintView,
    is_glb_file,
    parse_minted_token_id,
)
from glbmarket.services.transactions import TransactionTracker

OWNER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
GLB_URI = "https://gateway.pinata.cloud/ipfs/demo-glb"
PREVIEW_URI = "https://gateway.pinata.cloud/ipfs/demo-preview"


@pytest.fixture
def glb_file(tmp_path: Path) -> Path:
    path = tmp_path / "robot.glb"
    path.write_bytes(b"glTF" + (2).to_bytes(4, "little") + bytes(12))
    return path


@pytest.fixture
def preview_file(tmp_path: Path) -> Path:
    path = tmp_path / "robot.png"
    path.write_bytes(b"\x89PNG\r\n\x1a\n")
    return path


@pytest.fixture
def form(glb_file: Path, preview_file: Path) -> MintForm:
    return MintForm(
        glb_file=glb_file,
        preview_file=preview_file,
        name="  Robot ",
        description="A small robot",
    )


@pytest.fixture
def view(mock_nft: MagicMock, tracker: TransactionTracker) -> MintView:
    return MintView(
        mock_nft,
        tracker,
        wallet_address=OWNER,
        uploaded_glb_uri=GLB_URI,
        uploaded_preview_uri=PREVIEW_URI,
    )


def _mint_receipt(token_id_topic: object) -> dict:
    return {"status": 1, "logs": [{"topics": [b"\x00" * 32, token_id_topic]}]}


class TestParseMintedTokenId:
    """Tests for parse_minted_token_id."""

    def test_hex_string_topic(self) -> None:
        receipt = _mint_receipt("0x" + "0" * 62 + "2a")
        assert parse_minted_token_id(receipt) == 42

    def test_bytes_topic(self) -> None:
        assert parse_minted_token_id(_mint_receipt((7).to_bytes(32, "big"))) == 7

    def test_no_logs(self) -> None:
        assert parse_minted_token_id({"status": 1, "logs": []}) is None

    def test_missing_indexed_topic(self) -> None:
        assert parse_minted_token_id({"logs": [{"topics": [b"\x00" * 32]}]}) is None


def test_is_glb_file(glb_file: Path, preview_file: Path, tmp_path: Path) -> None:
    assert is_glb_file(glb_file) is True
    assert is_glb_file(preview_file) is False
    assert is_glb_file(tmp_path / "missing.glb") is False


class TestValidate:
    """Tests for form validation."""

    def test_ready_on_creation(self, view: MintView) -> None:
        assert view.status == ViewStatus.READY
        assert view.form.royalty_bps == DEFAULT_ROYALTY_BPS

    def test_valid_form(self, view: MintView, form: MintForm) -> None:
        view.validate(form)

    def test_requires_wallet(
        self, mock_nft: MagicMock, tracker: TransactionTracker, form: MintForm
    ) -> None:
        view = MintView(mock_nft, tracker)

        with pytest.raises(ValidationError, match="Please connect your wallet first"):
            view.validate(form)

    @pytest.mark.parametrize(
        "changes",
        [{"glb_file": None}, {"preview_file": None}, {"name": "  "}, {"description": ""}],
    )
    def test_incomplete_form(self, view: MintView, form: MintForm, changes: dict) -> None:
        with pytest.raises(ValidationError, match="Please upload all files and fill in all fields"):
            view.validate(form.model_copy(update=changes))

    @pytest.mark.parametrize("royalty", [-1, 5001])
    def test_royalty_out_of_range(self, view: MintView, form: MintForm, royalty: int) -> None:
        with pytest.raises(ValidationError, match="Royalty must be between 0 and 5000"):
            view.validate(form.model_copy(update={"royalty_bps": royalty}))

    def test_not_a_glb(self, view: MintView, form: MintForm, preview_file: Path) -> None:
        with pytest.raises(ValidationError, match="not a valid GLB file"):
            view.validate(form.model_copy(update={"glb_file": preview_file}))


class TestMint:
    """Tests for minting."""

    @pytest.mark.asyncio
    async def test_mint_success_reads_token_id(
        self,
        view: MintView,
        form: MintForm,
        mock_nft: MagicMock,
        mock_chain_client: MagicMock,
    ) -> None:
        mock_chain_client.wait_for_receipt.return_value = _mint_receipt((7).to_bytes(32, "big"))

        handle = await view.mint(form)
        assert view.is_minting is True
        await handle.wait()

        mock_nft.mint_glb_3d_nft.assert_awaited_once_with(
            GLB_URI, PREVIEW_URI, "Robot", "A small robot", 1000
        )
        assert view.is_minting is False
        assert view.is_success is True
        assert view.minted_token_id == 7
        assert view.message == "NFT minted successfully! Token ID: 7"

    @pytest.mark.asyncio
    async def test_mint_success_without_token_id(
        self, view: MintView, form: MintForm
    ) -> None:
        handle = await view.mint(form)
        await handle.wait()

        assert view.is_success is True
        assert view.minted_token_id is None
        assert view.message == "NFT minted successfully!"

    @pytest.mark.asyncio
    async def test_invalid_form_is_not_dispatched(
        self, view: MintView, form: MintForm, mock_nft: MagicMock
    ) -> None:
        handle = await view.mint(form.model_copy(update={"name": ""}))

        assert handle is None
        assert view.error == "Please upload all files and fill in all fields"
        mock_nft.mint_glb_3d_nft.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_second_mint_while_pending_is_rejected(
        self, view: MintView, form: MintForm, mock_nft: MagicMock
    ) -> None:
        await view.mint(form)

        assert await view.mint(form) is None
        assert view.error == "A mint transaction is already pending"
        mock_nft.mint_glb_3d_nft.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_reset(self, view: MintView, form: MintForm, mock_chain_client: MagicMock) -> None:
        mock_chain_client.wait_for_receipt.return_value = _mint_receipt("0x01")
        handle = await view.mint(form)
        await handle.wait()

        view.reset()

        assert view.is_success is False
        assert view.minted_token_id is None
        assert view.message == ""
        assert view.form == MintForm()
