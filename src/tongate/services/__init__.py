"""Gateway services.

- BalanceService: contract balance lookups with a tagged fallback
- AirdropService: admin-signed Claim broadcasts
- WithdrawalService: unsigned WithdrawRequest payloads
"""

from tongate.services.airdrop_service import AirdropService
from tongate.services.balance_service import BalanceLookup, BalanceService, BalanceStatus
from tongate.services.withdrawal_service import WithdrawalService, WithdrawTransaction

__all__ = [
    "AirdropService",
    "BalanceLookup",
    "BalanceService",
    "BalanceStatus",
    "WithdrawTransaction",
    "WithdrawalService",
]
