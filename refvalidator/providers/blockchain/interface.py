"""
Abstract interface for ledger providers issuing credential hashes.

No implementation ships with the service; register one under the
"blockchain" category to enable on-chain issuance.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from ...models import NetworkInfo, TransactionStatus


class BlockchainProviderInterface(ABC):

    @abstractmethod
    async def issue_credential(self, credential_hash: str) -> str:
        """Anchor a credential hash and return the transaction hash."""
        pass

    @abstractmethod
    async def verify_credential(self, credential_hash: str) -> bool:
        pass

    @abstractmethod
    async def get_transaction_status(self, tx_hash: str) -> TransactionStatus:
        pass

    @abstractmethod
    async def get_network_info(self) -> NetworkInfo:
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass
