from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class QuestionRequestDTO(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    content: str = Field(min_length=1, max_length=4000)


class QuestionResponseDTO(BaseModel):
    id: str
    status: str = "QUESTION CREATED"
