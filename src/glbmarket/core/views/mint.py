"""Mint page view model."""

from pathlib import Path
from typing import Any

import structlog
from pydantic import BaseModel, Field

from glbmarket.core.exceptions import DuplicateSubmissionError, ValidationError
from glbmarket.core.views.base import PageView, ViewStatus
from glbmarket.models.transaction import OperationKind
from glbmarket.services.chain.contracts import Glb3dNftContract
from glbmarket.services.transactions.tracker import TransactionHandle, TransactionTracker

log = structlog.get_logger(__name__)

GLB_MAGIC = b"glTF"
DEFAULT_ROYALTY_BPS = 1000  # 10%
MAX_ROYALTY_BPS = 5000


class MintForm(BaseModel):
    """Values entered on the mint form."""

    glb_file: Path | None = None
    preview_file: Path | None = None
    name: str = ""
    description: str = ""
    royalty_bps: int = Field(default=DEFAULT_ROYALTY_BPS)


def is_glb_file(path: Path) -> bool:
    """Check the binary glTF magic at the start of ``path``."""
    try:
        with path.open("rb") as fh:
            return fh.read(4) == GLB_MAGIC
    except OSError:
        return False


def parse_minted_token_id(receipt: Any) -> int | None:
    """Read the minted token id from the first log's first indexed topic."""
    logs = receipt.get("logs") or []
    if not logs:
        return None
    topics = logs[0].get("topics") or []
    if len(topics) < 2:
        return None

    topic = topics[1]
    if isinstance(topic, str):
        return int(topic, 16)
    return int.from_bytes(bytes(topic), "big")


class MintView(PageView):
    """State of the mint page.

    Attributes:
        form: Last submitted form.
        minted_token_id: Token id parsed from the mint receipt.
        is_success: Set once the mint is confirmed.
    """

    def __init__(
        self,
        nft: Glb3dNftContract,
        tracker: TransactionTracker,
        wallet_address: str | None = None,
        uploaded_glb_uri: str = "",
        uploaded_preview_uri: str = "",
    ) -> None:
        super().__init__(wallet_address)
        self.status = ViewStatus.READY
        self.nft = nft
        self.tracker = tracker
        # Uploading to IPFS happens outside this client; these URIs stand in
        # for the uploaded files.
        self.uploaded_glb_uri = uploaded_glb_uri
        self.uploaded_preview_uri = uploaded_preview_uri
        self.form = MintForm()
        self.minted_token_id: int | None = None
        self.is_success = False

    @property
    def is_minting(self) -> bool:
        return self.tracker.is_busy(OperationKind.MINT)

    def validate(self, form: MintForm) -> None:
        """Raise ValidationError with a user-facing message if ``form`` is incomplete."""
        if not self.is_connected:
            raise ValidationError("Please connect your wallet first")
        if (
            form.glb_file is None
            or form.preview_file is None
            or not form.name.strip()
            or not form.description.strip()
        ):
            raise ValidationError("Please upload all files and fill in all fields")
        if not 0 <= form.royalty_bps <= MAX_ROYALTY_BPS:
            raise ValidationError(
                f"Royalty must be between 0 and {MAX_ROYALTY_BPS} basis points"
            )
        if not is_glb_file(form.glb_file):
            raise ValidationError("The model file is not a valid GLB file")

    async def mint(self, form: MintForm) -> TransactionHandle | None:
        """Validate and dispatch mintGlb3dNft."""
        self.error = ""
        self.form = form
        try:
            self.validate(form)
        except ValidationError as e:
            self.error = str(e)
            return None

        log.info(
            "mint_requested",
            name=form.name,
            royalty_bps=form.royalty_bps,
            owner=self.wallet_address,
        )
        try:
            return await self.tracker.submit(
                OperationKind.MINT,
                lambda: self.nft.mint_glb_3d_nft(
                    self.uploaded_glb_uri,
                    self.uploaded_preview_uri,
                    form.name.strip(),
                    form.description.strip(),
                    form.royalty_bps,
                ),
                error_prefix="Error minting NFT",
                on_confirmed=self._on_minted,
                on_failed=self._fail,
            )
        except DuplicateSubmissionError as e:
            self.error = str(e)
            return None

    def _on_minted(self, receipt: Any) -> None:
        try:
            self.minted_token_id = parse_minted_token_id(receipt)
        except (ValueError, TypeError, AttributeError) as e:
            log.error("minted_token_id_parse_failed", error=str(e))
            self.minted_token_id = None
        self.is_success = True
        self.message = (
            f"NFT minted successfully! Token ID: {self.minted_token_id}"
            if self.minted_token_id is not None
            else "NFT minted successfully!"
        )

    def reset(self) -> None:
        """Start over with an empty form ("Mint Another")."""
        self.form = MintForm()
        self.minted_token_id = None
        self.is_success = False
        self.error = ""
        self.message = ""
