"""Process-wide gateway context.

Built once at startup and injected into request handlers. Holds the shared
ledger connection and the admin identity; nothing in it changes afterwards.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from tongate.address import AddressError, LedgerAddress, parse_address
from tongate.config import ConfigurationError, Settings
from tongate.ledger.base import LedgerClient
from tongate.payload.amounts import to_nano
from tongate.payload.schema import AmountError
from tongate.services import AirdropService, BalanceService, WithdrawalService
from tongate.signing.base import WalletIdentity

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GatewayContext:
    """Shared state of a running gateway."""
    settings: Settings
    ledger: LedgerClient
    contract_address: LedgerAddress
    admin: Optional[WalletIdentity]
    balances: BalanceService
    airdrops: AirdropService
    withdrawals: WithdrawalService


def build_context(
    settings: Settings,
    ledger: LedgerClient,
    admin: Optional[WalletIdentity] = None,
) -> GatewayContext:
    """Wire services from settings.

    Raises:
        ConfigurationError: If the contract address or an amount setting is malformed
    """
    try:
        contract_address = parse_address(settings.contract_address)
    except AddressError as e:
        raise ConfigurationError(f"CONTRACT_ADDRESS is invalid: {e}") from e

    try:
        airdrop_amount = to_nano(settings.airdrop_amount)
        claim_gas = to_nano(settings.claim_gas)
        withdraw_gas = to_nano(settings.withdraw_gas)
    except AmountError as e:
        raise ConfigurationError(f"Invalid amount setting: {e}") from e

    logger.info(f"Gateway bound to contract {contract_address}")

    return GatewayContext(
        settings=settings,
        ledger=ledger,
        contract_address=contract_address,
        admin=admin,
        balances=BalanceService(ledger, contract_address, settings.balance_getter),
        airdrops=AirdropService(
            ledger, contract_address, admin, amount=airdrop_amount, gas=claim_gas
        ),
        withdrawals=WithdrawalService(contract_address, gas=withdraw_gas),
    )
