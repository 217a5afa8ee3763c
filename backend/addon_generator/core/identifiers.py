"""
Identifier helpers shared by the assemblers and the pack assembler
"""
import re
from typing import List

# Archive file stems derived from identifiers and resource names
SAFE_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_.\-]+$")


def qualify_identifier(identifier: str, namespace: str) -> str:
    """'golem' -> 'ns:golem'; an identifier that already has a namespace is kept."""
    if ":" in identifier:
        return identifier
    return f"{namespace}:{identifier}"


def base_name(identifier: str) -> str:
    """Local segment of a qualified identifier, lower-cased."""
    return identifier.split(":", 1)[-1].lower()


def is_safe_name(name: str) -> bool:
    """True if `name` can be used as a file stem inside a pack folder."""
    return bool(SAFE_NAME_PATTERN.match(name or "")) and ".." not in name


def parse_version(version: str) -> List[int]:
    """
    Parse "a.b.c" into [a, b, c].

    Missing or non-numeric parts fall back to major 1, minor 0, patch 0.
    """
    fallback = [1, 0, 0]
    parts = str(version or "").strip().split(".")
    triple = []
    for position in range(3):
        raw = parts[position].strip() if position < len(parts) else ""
        triple.append(int(raw) if raw.isdigit() else fallback[position])
    return triple


__all__ = ["qualify_identifier", "base_name", "is_safe_name", "parse_version"]
