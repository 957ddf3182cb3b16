"""
Input validation for the edit modal.

Values typed by the operator are parsed according to the column input type
before they are sent to the engine.
"""

import json
from typing import Any

BOOL_TYPES = ('bool', 'boolean')
INT_TYPES = ('int', 'integer')
NUMBER_TYPES = ('number', 'double', 'float')
USER_TYPE = 'user'
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class InputValidationError(ValueError):
    """The edited value does not match the column input type."""


def parse_input(text: str, input_type: str) -> Any:
    """Validate text for input_type (bool, int, number, json, user, text) and return the parsed value.

    Unknown input types are treated as raw text and returned untouched.
    """
    trimmed = text.strip()
    input_type = (input_type or '').lower()

    if input_type in BOOL_TYPES:
        if trimmed.lower() == 'true' or trimmed == '1':
            return True
        if trimmed.lower() == 'false' or trimmed == '0':
            return False
        raise InputValidationError('enter true or false')

    if input_type in INT_TYPES:
        try:
            # digit separators are not accepted and values must fit a signed 64-bit long
            if '_' in trimmed:
                raise ValueError(trimmed)
            value = int(trimmed, 10)
            if not INT64_MIN <= value <= INT64_MAX:
                raise ValueError(trimmed)
            return value
        except ValueError:
            raise InputValidationError('enter an integer') from None

    if input_type in NUMBER_TYPES:
        try:
            if '_' in trimmed:
                raise ValueError(trimmed)
            return float(trimmed)
        except ValueError:
            raise InputValidationError('enter a number') from None

    if input_type == 'json':
        try:
            return json.loads(trimmed)
        except json.JSONDecodeError as e:
            raise InputValidationError(f'invalid json: {e}') from None

    return text


def input_type_from_variable_type(variable_type: str) -> str:
    """Map an engine variable type (Boolean, Integer, Long, Double...) to an input type."""
    lower = (variable_type or '').lower()
    if 'bool' in lower:
        return 'bool'
    if 'int' in lower or 'long' in lower:
        return 'int'
    if 'double' in lower or 'float' in lower or 'number' in lower:
        return 'number'
    return 'text'


def type_name_for_input_type(input_type: str, variable_type: str = '') -> str:
    """Engine type name to send back: the original type when compatible, otherwise a default."""
    if variable_type and input_type == input_type_from_variable_type(variable_type):
        return variable_type
    return {'bool': 'Boolean', 'int': 'Integer', 'number': 'Double'}.get(input_type, 'String')


def resolve_input_type(column_input_type: str, variable_type: str = '') -> str:
    """Effective input type of a column; empty means text and 'auto' follows the variable type."""
    input_type = (column_input_type or '').strip().lower()
    if not input_type:
        return 'text'
    if input_type == 'auto':
        return input_type_from_variable_type(variable_type)
    if input_type in BOOL_TYPES:
        return 'bool'
    if input_type in INT_TYPES:
        return 'int'
    if input_type in NUMBER_TYPES:
        return 'number'
    return input_type
