"""Translate Claude Messages requests into OpenAI chat completion requests."""

from ccbridge.config.models import ProxyConfig
from ccbridge.exceptions import TransformerException, ValidationError
from ccbridge.transformers.providers.claude.openai import translate

__all__ = ['ProxyConfig', 'TransformerException', 'ValidationError', 'translate']
