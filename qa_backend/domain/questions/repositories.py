# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Protocol

from .entities import Question


class QuestionRepository(Protocol):
    def add(self, question: Question) -> Question: ...
