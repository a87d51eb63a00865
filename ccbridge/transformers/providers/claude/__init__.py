"""Export Claude channel transformers."""

from .openai import ClaudeInvokeRequestTransformer, map_role, normalize_content, translate

__all__ = [
    'ClaudeInvokeRequestTransformer',
    'map_role',
    'normalize_content',
    'translate',
]
