#!/usr/bin/env python3
"""
identifiers.py
-------------------
Identifier generation for Mnemos records.

Ids have the form '<prefix>_<epoch milliseconds>_<9 random base-36 chars>',
e.g. 'note_1718035200000_k3j9x0q2m'. They sort roughly by creation time
and are unique for practical purposes.
"""
from __future__ import annotations

import secrets
import string
import time

_ALPHABET = string.digits + string.ascii_lowercase


def new_id(prefix: str) -> str:
    """Generate a new identifier with the given prefix."""
    millis = time.time_ns() // 1_000_000
    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(9))
    return f"{prefix}_{millis}_{suffix}"
