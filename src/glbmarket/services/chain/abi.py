"""Contract ABI loading.

ABIs ship with the package under ``glbmarket/contracts`` in the
``{"abi": [...]}`` layout produced by the contracts' export step. A
directory with files in the same layout can override them.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Any

import structlog

from glbmarket.core.exceptions import ConfigurationError

log = structlog.get_logger(__name__)

BUNDLED_ABI_DIR = Path(__file__).resolve().parents[2] / "contracts"

NFT_CONTRACT = "Glb3dNft"
MARKETPLACE_CONTRACT = "Glb3dMarketplace"


@lru_cache
def load_abi(contract_name: str, abi_dir: Path | None = None) -> list[dict[str, Any]]:
    """Load the ABI for ``contract_name``.

    Args:
        contract_name: Contract name, e.g. "Glb3dNft".
        abi_dir: Optional override directory; the bundled copy is used when
            the file is missing there.

    Returns:
        The ABI as a list of JSON entries.

    Raises:
        ConfigurationError: If no ABI file exists or it cannot be parsed.
    """
    candidates = []
    if abi_dir is not None:
        candidates.append(Path(abi_dir) / f"{contract_name}.json")
    candidates.append(BUNDLED_ABI_DIR / f"{contract_name}.json")

    for path in candidates:
        if not path.exists():
            continue
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(f"Invalid ABI file {path}: {e}") from e

        # Accept both {"abi": [...]} and a bare list
        abi = data["abi"] if isinstance(data, dict) else data
        log.debug("abi_loaded", contract=contract_name, path=str(path), entries=len(abi))
        return abi

    raise ConfigurationError(f"ABI not found for contract {contract_name}")
