from ccbridge.models.claude import (
    ClaudeMessage,
    ClaudeRequest,
    ContentBlock,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UnknownBlock,
    parse_claude_request,
)
from ccbridge.models.openai import OpenAIChatMessage, OpenAIChatRequest

__all__ = [
    'ClaudeMessage',
    'ClaudeRequest',
    'ContentBlock',
    'OpenAIChatMessage',
    'OpenAIChatRequest',
    'TextBlock',
    'ToolResultBlock',
    'ToolUseBlock',
    'UnknownBlock',
    'parse_claude_request',
]
