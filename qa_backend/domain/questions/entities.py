# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from qa_backend.domain.exceptions import InvariantViolation


@dataclass(slots=True, frozen=True)
class Question:

    id: int
    uuid: str
    content: str
    user_id: int
    created_at: datetime

    def __post_init__(self) -> None:
        if not self.content or not self.content.strip():
            raise InvariantViolation("question content must not be blank", field="content")
