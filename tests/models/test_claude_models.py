import pytest

from ccbridge.exceptions import ValidationError
from ccbridge.models.claude import (
    ClaudeRequest,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
    UnknownBlock,
    _error_field,
    parse_claude_request,
)


def test_blocks_parse_by_type_tag():
    request = parse_claude_request(
        {
            'model': 'claude-3',
            'max_tokens': 10,
            'messages': [
                {
                    'role': 'assistant',
                    'content': [
                        {'type': 'text', 'text': 'hi', 'cache_control': {'type': 'ephemeral'}},
                        {'type': 'tool_use', 'id': 'toolu_1', 'name': 'search', 'input': {'b': 1, 'a': 2}},
                        {'type': 'tool_result', 'tool_use_id': 'toolu_1', 'content': 'ok', 'is_error': False},
                        {'type': 'thinking', 'thinking': '...', 'signature': 'sig'},
                        {'text': 'untagged'},
                        'stray string',
                    ],
                }
            ],
        }
    )

    blocks = request.messages[0].content
    assert [type(block) for block in blocks] == [TextBlock, ToolUseBlock, ToolResultBlock, UnknownBlock, UnknownBlock, UnknownBlock]
    assert list(blocks[1].input) == ['b', 'a']


def test_unhashable_type_tag_is_unknown():
    request = parse_claude_request({'max_tokens': 1, 'messages': [{'role': 'user', 'content': [{'type': {'nested': True}}]}]})

    assert isinstance(request.messages[0].content[0], UnknownBlock)


def test_optional_fields_default():
    request = parse_claude_request({'max_tokens': 1})

    assert request.model is None
    assert request.system is None
    assert request.messages == []
    assert request.temperature is None
    assert request.top_p is None


def test_extra_fields_tolerated():
    request = parse_claude_request({'max_tokens': 1, 'tools': [{'name': 'x'}], 'stream': False, 'metadata': {'user_id': 'u'}})

    assert isinstance(request, ClaudeRequest)


def test_parsed_request_returned_as_is():
    request = ClaudeRequest(max_tokens=5)

    assert parse_claude_request(request) is request


def test_malformed_block_fields_fall_back_to_defaults():
    request = parse_claude_request(
        {
            'model': 3,
            'max_tokens': 1,
            'messages': [
                {
                    'role': 5,
                    'content': [
                        {'type': 'text', 'text': 42},
                        {'type': 'tool_use', 'id': 9, 'name': None, 'input': ['a']},
                        {'type': 'tool_result', 'tool_use_id': None, 'is_error': 'yes'},
                    ],
                }
            ],
        }
    )

    message = request.messages[0]
    text, tool_use, tool_result = message.content
    assert request.model == 3
    assert message.role is None
    assert text.text is None
    assert (tool_use.id, tool_use.name, tool_use.input) == ('9', '', {'0': 'a'})
    assert tool_result.tool_use_id is None


@pytest.mark.parametrize('errors,expected', [
    ([], None),
    ([{'loc': ('messages', 0, 'role')}], 'messages.0.role'),
    (
        [
            {'loc': ('messages', 0, 'content', 'str')},
            {'loc': ('messages', 0, 'content', 'list[tagged-union[TextBlock,ToolUseBlock,ToolResultBlock,UnknownBlock]]', 1, 'tool_use', 'name')},
            {'loc': ('messages', 0, 'content', 'none')},
        ],
        'messages.0.content.1.name',
    ),
])
def test_error_field_drops_union_branch_labels(errors, expected):
    assert _error_field(errors) == expected


@pytest.mark.parametrize('payload', [None, 'body', ['max_tokens', 1]])
def test_non_mapping_payload_rejected(payload):
    with pytest.raises(ValidationError, match='must be an object'):
        parse_claude_request(payload)
