"""
Abstract interface for verifiable-credential providers (W3C VC, Hyperledger).

Interface shape only; no implementation is registered by default.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List


class VerifiableCredentialProviderInterface(ABC):

    @abstractmethod
    async def issue_credential(
        self, subject: str, claims: Dict[str, Any], issuer_key: str
    ) -> Dict[str, Any]:
        """Issue a signed credential for a subject."""
        pass

    @abstractmethod
    async def verify_credential(self, credential: Dict[str, Any]) -> bool:
        pass

    @abstractmethod
    async def create_selective_credential(
        self, credential: Dict[str, Any], disclosed_fields: List[str]
    ) -> Dict[str, Any]:
        """Derive a credential that discloses only the listed fields."""
        pass

    @abstractmethod
    async def generate_proof(
        self, credential: Dict[str, Any], public_inputs: Dict[str, Any]
    ) -> Dict[str, Any]:
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass
