"""Text normalization.

All encoders work on bytes. Callers may pass either str or bytes (or a
bytes-like buffer); this module turns them into bytes once, at the entry of
each encoder, so that representations are never mixed while a command is being
assembled.
"""

# SPDX-FileCopyrightText: Faidon Liambotis
# SPDX-FileCopyrightText: Wikimedia Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import Union

Text = Union[str, bytes, bytearray, memoryview]

DEFAULT_ENCODING = "utf-8"


class InvalidParameterType(TypeError):
    """Raised when a parameter is neither text nor bytes."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Expected str or bytes, got {type(value).__name__}")
        self.value = value


def normalize(value: Text, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Return value as bytes, encoding it first if it is a str."""
    if isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return value.encode(encoding)
    if isinstance(value, (bytearray, memoryview)):
        return bytes(value)
    raise InvalidParameterType(value)


def normalize_all(*values: Text, encoding: str = DEFAULT_ENCODING) -> tuple[bytes, ...]:
    """Normalize each of values, in order."""
    return tuple(normalize(value, encoding) for value in values)
