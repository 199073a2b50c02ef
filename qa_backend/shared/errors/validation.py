# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    fields: set[str] = set()
    errors: list[dict[str, Any]] = []

    for error in exc.errors(include_url=False, include_input=False):
        field_path = ".".join(str(part) for part in error.get("loc", ()) if part is not None)
        if field_path:
            fields.add(field_path)
        errors.append(
            {
                "field": field_path or "body",
                "type": error.get("type", "value_error"),
                "message": error.get("msg", ""),
            }
        )

    return {"fields": sorted(fields), "errors": errors}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = [
    "format_pydantic_errors",
    "raise_validation_error",
]
