"""Claude Messages to OpenAI chat completions request mapping with flattened tool markup."""

from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from ccbridge.config import ConfigurationService
from ccbridge.config.log import get_logger
from ccbridge.config.models import ProxyConfig
from ccbridge.models.claude import (
    ClaudeRequest,
    ContentBlock,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UnknownBlock,
    parse_claude_request,
)
from ccbridge.models.openai import OpenAIChatMessage, OpenAIChatRequest
from ccbridge.transformers.interfaces import ProviderRequestTransformer
from ccbridge.transformers.shared.invoke import render_tool_result, render_tool_use, strip_invoke_markup

logger = get_logger(__name__)

DEFAULT_TEMPERATURE = 0.2
DEFAULT_TOP_P = 1


def map_role(role: Optional[str]) -> str:
    return 'assistant' if role == 'assistant' else 'user'


def build_system_content(system: Union[str, List[Any], None]) -> Optional[str]:
    """Collapse the system prompt into one string, or None when no system message is sent."""
    if system is None or system == '':
        return None
    if isinstance(system, str):
        return system

    parts = []
    for block in system:
        if isinstance(block, str):
            parts.append(block)
        elif isinstance(block, Mapping) and 'text' in block:
            parts.append(block['text'] if isinstance(block['text'], str) else '')
        else:
            parts.append('')
    return '\n'.join(parts)


def _render_block(block: ContentBlock, trigger_signal: Optional[str]) -> Tuple[str, int]:
    if isinstance(block, TextBlock):
        return strip_invoke_markup(block.text or '')
    if isinstance(block, ToolResultBlock):
        return render_tool_result(block.tool_use_id, block.content), 0
    if isinstance(block, ToolUseBlock):
        # Only genuine tool_use blocks carry the trigger signal
        return render_tool_use(block.name, block.input, trigger_signal), 0
    if isinstance(block, UnknownBlock):
        return '', 0
    raise TypeError(f'Unhandled content block {type(block).__name__}')


def normalize_content(content: Union[str, List[ContentBlock], None], trigger_signal: Optional[str] = None) -> Tuple[str, int]:
    """Flatten message content into a single string.

    Returns the string and the number of invoke markers stripped from author text.
    """
    if content is None:
        return '', 0
    if isinstance(content, str):
        return strip_invoke_markup(content)

    rendered, stripped = [], 0
    for block in content:
        text, removed = _render_block(block, trigger_signal)
        rendered.append(text)
        stripped += removed
    return '\n'.join(rendered), stripped


def translate(
    request: Union[ClaudeRequest, Mapping[str, Any]],
    config: Optional[ProxyConfig] = None,
    trigger_signal: Optional[str] = None,
) -> OpenAIChatRequest:
    """Translate a Claude Messages request into a streaming OpenAI chat request.

    Raises:
        ValidationError: max_tokens is missing or not a finite number, or the
            request cannot be parsed.
    """
    claude_request = parse_claude_request(request)
    if config is None:
        config = ProxyConfig()

    messages = []
    system_content = build_system_content(claude_request.system)
    if system_content is not None:
        messages.append(OpenAIChatMessage(role='system', content=system_content))

    for index, message in enumerate(claude_request.messages):
        content, stripped = normalize_content(message.content, trigger_signal)
        if stripped:
            logger.warning('Stripped invoke markup from message content', message_index=index, role=message.role, markers=stripped)
        messages.append(OpenAIChatMessage(role=map_role(message.role), content=content))

    model = config.upstream_model_override if config.upstream_model_override is not None else claude_request.model

    logger.debug(
        'Translated Claude request',
        requested_model=claude_request.model,
        model=model,
        messages=len(messages),
        trigger_signal=bool(trigger_signal),
    )

    return OpenAIChatRequest(
        model=model,
        stream=True,
        temperature=claude_request.temperature if claude_request.temperature is not None else DEFAULT_TEMPERATURE,
        top_p=claude_request.top_p if claude_request.top_p is not None else DEFAULT_TOP_P,
        max_tokens=claude_request.max_tokens,
        messages=messages,
    )


class ClaudeInvokeRequestTransformer(ProviderRequestTransformer):
    """Transformer converting Claude requests to OpenAI chat requests with tool calls as invoke markup."""

    def __init__(
        self,
        logger,
        config: Optional[Union[ProxyConfig, Dict[str, Any]]] = None,
        trigger_signal: Optional[str] = None,
        config_path: Optional[str] = None,
    ):
        """Initialize transformer.

        Args:
            logger: Logger instance
            config: Mapper configuration, or its mapping form as found in YAML
            trigger_signal: Marker emitted before each rendered tool invocation
            config_path: YAML file to load the configuration from when config is not given
        """
        super().__init__(logger)
        self._config_service = None
        if config is None and config_path:
            self._config_service = ConfigurationService(config_path)
            self.config = self._config_service.get_config()
        else:
            self.config = config if isinstance(config, ProxyConfig) else ProxyConfig.model_validate(config or {})
        self.trigger_signal = trigger_signal

    def reload_config(self) -> ProxyConfig:
        """Re-read the configuration file, if the transformer was built from one."""
        if self._config_service is not None:
            self.config = self._config_service.reload_config()
        return self.config

    async def transform(self, params: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, str]]:
        """Convert the Claude request; headers pass through unchanged."""
        request = params['request']
        headers = params['headers']
        trigger_signal = params.get('trigger_signal', self.trigger_signal)

        openai_request = translate(request, self.config, trigger_signal)
        self.logger.debug(f'Converted Claude request to OpenAI chat request for model {openai_request.model}')

        return openai_request.to_dict(), headers
