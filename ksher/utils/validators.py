"""
Validation utilities for Ksher payloads.
"""

from typing import Any, Dict, Mapping, Type

import pydantic

from ..exceptions import ResponseValidationError, ValidationError


def format_validation_error(error: pydantic.ValidationError, prefix: str = "Invalid request") -> str:
    """
    Join every issue of a pydantic error into one message.

    Example:
        "Invalid request: mch_order_no: Field required; input: ..."
    """
    details = []
    for issue in error.errors():
        path = '.'.join(str(part) for part in issue['loc']) or 'input'
        details.append(f"{path}: {issue['msg']}")
    return f"{prefix}: {'; '.join(details)}"


def validate_payload(schema: Type[pydantic.BaseModel], data: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Validate a caller payload against an operation's request schema.

    Args:
        schema: Request model
        data: Caller payload

    Returns:
        The validated fields, in caller order, including unknown ones

    Raises:
        ValidationError: Listing every offending field
    """
    if not isinstance(data, Mapping):
        raise ValidationError(f"Invalid request: input: expected a mapping, got {type(data).__name__}")

    try:
        model = schema.model_validate(dict(data))
    except pydantic.ValidationError as e:
        raise ValidationError(format_validation_error(e), response_data=e.errors())

    dumped = model.model_dump()
    return {key: dumped[key] for key in data if key in dumped}


def validate_response(schema: Type[pydantic.BaseModel], payload: Any):
    """
    Parse a response body into its envelope model.

    Raises:
        ResponseValidationError: If the body breaks the response contract
    """
    try:
        return schema.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ResponseValidationError(
            format_validation_error(e, prefix="Invalid response"),
            response_data=payload,
        )
