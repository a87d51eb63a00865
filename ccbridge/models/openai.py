"""Outbound OpenAI chat completions request models."""

from typing import Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict


class OpenAIChatMessage(BaseModel):
    """Flattened chat message; content is always a single string."""

    model_config = ConfigDict(frozen=True)

    role: Literal['system', 'user', 'assistant']
    content: str


class OpenAIChatRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    model: Any
    stream: Literal[True] = True
    temperature: Union[int, float]
    top_p: Union[int, float]
    max_tokens: Union[int, float]
    messages: List[OpenAIChatMessage]

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode='json')
