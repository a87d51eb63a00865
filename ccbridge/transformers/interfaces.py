"""Transformer interfaces used by the request pipeline."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, Tuple


class ProviderRequestTransformer(ABC):
    """Interface for transformers that modify outgoing provider requests."""

    def __init__(self, logger):
        self.logger = logger

    @abstractmethod
    async def transform(self, params: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
        """Transform the outgoing request payload and headers."""
