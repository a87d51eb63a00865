"""Inbound Claude Messages request models.

Only max_tokens is enforced. Every other field that arrives with an unexpected
shape is coerced to its default instead of failing the request.
"""

import math
from typing import Annotated, Any, Dict, List, Literal, Mapping, Optional, Union

import orjson
from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, field_validator, model_validator
from pydantic import ValidationError as PydanticValidationError

from ccbridge.exceptions import ValidationError


def _as_text(value: Any) -> Optional[str]:
    """Keep strings, render other scalars as JSON text, drop None."""
    if value is None or isinstance(value, str):
        return value
    try:
        return orjson.dumps(value).decode('utf-8')
    except (orjson.JSONEncodeError, TypeError):
        return str(value)


def _as_number(value: Any) -> Optional[Union[int, float]]:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return value


class TextBlock(BaseModel):
    """Text content block."""

    model_config = ConfigDict(extra='allow')

    type: Literal['text']
    text: Optional[str] = None

    @field_validator('text', mode='before')
    @classmethod
    def _text_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None


class ToolUseBlock(BaseModel):
    """Tool use content block."""

    model_config = ConfigDict(extra='allow')

    type: Literal['tool_use']
    id: Optional[str] = None
    name: str = ''
    input: Dict[str, Any] = Field(default_factory=dict)

    @field_validator('id', mode='before')
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        return _as_text(value)

    @field_validator('name', mode='before')
    @classmethod
    def _coerce_name(cls, value: Any) -> Any:
        return _as_text(value) or ''

    @field_validator('input', mode='before')
    @classmethod
    def _coerce_input(cls, value: Any) -> Any:
        # sequences become index-keyed entries
        if isinstance(value, Mapping):
            return {str(key): item for key, item in value.items()}
        if isinstance(value, (list, tuple)):
            return {str(index): item for index, item in enumerate(value)}
        return {}


class ToolResultBlock(BaseModel):
    """Tool result content block."""

    model_config = ConfigDict(extra='allow')

    type: Literal['tool_result']
    tool_use_id: Optional[str] = None
    content: Any = None
    is_error: Any = None

    @field_validator('tool_use_id', mode='before')
    @classmethod
    def _coerce_tool_use_id(cls, value: Any) -> Any:
        return _as_text(value)


class UnknownBlock(BaseModel):
    """Any block whose type tag is not recognised."""

    model_config = ConfigDict(extra='allow')

    type: Any = None

    @model_validator(mode='before')
    @classmethod
    def _coerce_non_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, (Mapping, cls)) else {}


_BLOCK_TAGS = frozenset({'text', 'tool_use', 'tool_result'})


def _block_tag(value: Any) -> str:
    if isinstance(value, Mapping):
        tag = value.get('type')
    else:
        tag = getattr(value, 'type', None)
    return tag if isinstance(tag, str) and tag in _BLOCK_TAGS else 'unknown'


ContentBlock = Annotated[
    Union[
        Annotated[TextBlock, Tag('text')],
        Annotated[ToolUseBlock, Tag('tool_use')],
        Annotated[ToolResultBlock, Tag('tool_result')],
        Annotated[UnknownBlock, Tag('unknown')],
    ],
    Discriminator(_block_tag),
]


class ClaudeMessage(BaseModel):
    """Message model. Roles other than user/assistant are accepted."""

    model_config = ConfigDict(extra='allow')

    role: Optional[str] = None
    content: Union[str, List[ContentBlock], None] = None

    @model_validator(mode='before')
    @classmethod
    def _coerce_non_mapping(cls, value: Any) -> Any:
        return value if isinstance(value, (Mapping, cls)) else {}

    @field_validator('role', mode='before')
    @classmethod
    def _role_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, str) else None

    @field_validator('content', mode='before')
    @classmethod
    def _content_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, (str, list)) else None


class ClaudeRequest(BaseModel):
    """Claude Messages API request, restricted to the fields the mapper reads."""

    model_config = ConfigDict(extra='allow')

    # forwarded as received when no override is configured
    model: Any = None
    system: Union[str, List[Any], None] = None
    messages: List[ClaudeMessage] = Field(default_factory=list)
    max_tokens: Union[int, float]
    temperature: Optional[Union[int, float]] = None
    top_p: Optional[Union[int, float]] = None

    @field_validator('system', mode='before')
    @classmethod
    def _system_or_none(cls, value: Any) -> Any:
        return value if isinstance(value, (str, list)) else None

    @field_validator('messages', mode='before')
    @classmethod
    def _messages_or_empty(cls, value: Any) -> Any:
        return value if isinstance(value, list) else []

    @field_validator('temperature', 'top_p', mode='before')
    @classmethod
    def _number_or_default(cls, value: Any) -> Any:
        return _as_number(value)

    @field_validator('max_tokens', mode='before')
    @classmethod
    def _require_finite_number(cls, value: Any) -> Any:
        # bool is an int subclass but not a token count
        if isinstance(value, bool) or not isinstance(value, (int, float)) or (isinstance(value, float) and not math.isfinite(value)):
            raise ValueError('max_tokens must be a finite number')
        return value


MAX_TOKENS_REQUIRED = 'max_tokens is required for Claude requests'

_BRANCH_TAGS = _BLOCK_TAGS | {'unknown'}


def _error_field(errors: List[Dict[str, Any]]) -> Optional[str]:
    """Dotted location of the deepest error, without pydantic's union branch labels."""
    if not errors:
        return None
    loc = max((error['loc'] for error in errors), key=len)
    parts = []
    for index, part in enumerate(loc):
        if isinstance(part, str) and ('[' in part or part in ('str', 'none')):
            continue
        if isinstance(part, str) and index and isinstance(loc[index - 1], int) and part in _BRANCH_TAGS:
            continue
        parts.append(str(part))
    return '.'.join(parts)


def parse_claude_request(payload: Union[ClaudeRequest, Mapping[str, Any]]) -> ClaudeRequest:
    """Parse a decoded request body, raising ValidationError on failure."""
    if isinstance(payload, ClaudeRequest):
        return payload
    if not isinstance(payload, Mapping):
        raise ValidationError(f'Claude request must be an object, got {type(payload).__name__}')

    try:
        return ClaudeRequest.model_validate(dict(payload))
    except PydanticValidationError as e:
        errors = e.errors()
        if any(error['loc'][:1] == ('max_tokens',) for error in errors):
            raise ValidationError(MAX_TOKENS_REQUIRED, field='max_tokens') from e
        raise ValidationError(f'Invalid Claude request: {errors[0]["msg"] if errors else e}', field=_error_field(errors)) from e
