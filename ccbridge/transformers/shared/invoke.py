"""Textual tool-call markup used when forwarding Claude tool blocks as flat strings.

A genuine ``tool_use`` block is rendered as::

    {trigger_signal}
    <invoke name="search">
    <parameter name="query">cats</parameter>
    </invoke>

and a ``tool_result`` block as ``<tool_result id="...">...</tool_result>``.
Free text must never carry ``<invoke>`` markup of its own, so it is stripped
from string content and text blocks before forwarding.
"""

import json
import re
from typing import Any, Mapping, Optional, Tuple

import orjson

INVOKE_PATTERN = re.compile(r'<invoke\b[^>]*>.*?</invoke>', re.IGNORECASE | re.DOTALL)


def strip_invoke_markup(text: str) -> Tuple[str, int]:
    """Remove every invoke marker from author-supplied text.

    Returns the cleaned text and the number of markers removed. Stripping repeats
    until nothing matches, so a marker split around an inner one cannot reassemble.
    """
    removed = 0
    while True:
        text, count = INVOKE_PATTERN.subn('', text)
        if not count:
            return text, removed
        removed += count


def dumps_compact(value: Any) -> str:
    """Serialize to JSON without whitespace."""
    try:
        return orjson.dumps(value).decode('utf-8')
    except (orjson.JSONEncodeError, TypeError):
        # integers beyond 64 bits and other values orjson refuses
        return json.dumps(value, separators=(',', ':'), ensure_ascii=False, default=str)


def render_parameter_value(value: Any) -> str:
    return value if isinstance(value, str) else dumps_compact(value)


def render_tool_use(name: str, arguments: Optional[Mapping[str, Any]], trigger_signal: Optional[str] = None) -> str:
    """Render a tool invocation, preceded by the trigger signal line when one is given."""
    params = '\n'.join(f'<parameter name="{key}">{render_parameter_value(value)}</parameter>' for key, value in (arguments or {}).items())
    trigger = f'{trigger_signal}\n' if trigger_signal else ''
    return f'{trigger}<invoke name="{name}">\n{params}\n</invoke>'


def render_tool_result_content(content: Any) -> str:
    if content is None:
        return ''
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for item in content:
            if isinstance(item, str):
                parts.append(item)
            elif isinstance(item, Mapping) and item.get('type') == 'text' and isinstance(item.get('text'), str):
                parts.append(item['text'])
        return '\n'.join(parts)
    return dumps_compact(content)


def render_tool_result(tool_use_id: Optional[str], content: Any) -> str:
    """Render a tool result wrapper.

    The content is interpolated as-is: angle brackets and quotes are not escaped,
    and invoke markup inside a tool result is not stripped.
    """
    return f'<tool_result id="{tool_use_id or ""}">{render_tool_result_content(content)}</tool_result>'


__all__ = [
    'INVOKE_PATTERN',
    'dumps_compact',
    'render_parameter_value',
    'render_tool_result',
    'render_tool_use',
    'strip_invoke_markup',
]
