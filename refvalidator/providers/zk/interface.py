"""
Abstract interface for zero-knowledge proof providers (Semaphore, Circom).

Interface shape only; no implementation is registered by default.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict


class ZKProofProviderInterface(ABC):

    @abstractmethod
    async def generate_proof(self, witness: Any, public_inputs: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    async def verify_proof(self, proof: Any, public_inputs: Dict[str, Any]) -> bool:
        pass

    @abstractmethod
    async def load_circuit(self, circuit_name: str) -> Any:
        pass

    @abstractmethod
    async def generate_witness(self, data: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    def get_provider_name(self) -> str:
        pass

    @abstractmethod
    def is_available(self) -> bool:
        pass
