"""Opaque 24-character hexadecimal record identifiers."""

import re
import secrets

OBJECT_ID_PATTERN = re.compile(r"^[0-9a-fA-F]{24}$")


def new_object_id() -> str:
    return secrets.token_hex(12)


def is_object_id(value) -> bool:
    return isinstance(value, str) and OBJECT_ID_PATTERN.fullmatch(value) is not None


def normalize_object_id(value: str) -> str:
    return value.strip().lower()
