"""
Naming utilities for generated identifiers.

Converts free-form scene names (``"save button"``, ``"user-name"``) into
identifiers that are legal in C# and XAML ``x:Name`` attributes, and
handles the case conversions used by configuration keys.
"""

import re
from enum import Enum
from typing import Dict, Optional, Set


class NamingCase(Enum):
    """Supported identifier case styles."""

    SNAKE_CASE = "snake"  # user_name
    CAMEL_CASE = "camel"  # userName
    PASCAL_CASE = "pascal"  # UserName


CSHARP_RESERVED_WORDS = {
    "abstract", "as", "base", "bool", "break", "byte", "case", "catch",
    "char", "checked", "class", "const", "continue", "decimal", "default",
    "delegate", "do", "double", "else", "enum", "event", "explicit",
    "extern", "false", "finally", "fixed", "float", "for", "foreach",
    "goto", "if", "implicit", "in", "int", "interface", "internal", "is",
    "lock", "long", "namespace", "new", "null", "object", "operator",
    "out", "override", "params", "private", "protected", "public",
    "readonly", "ref", "return", "sbyte", "sealed", "short", "sizeof",
    "stackalloc", "static", "string", "struct", "switch", "this", "throw",
    "true", "try", "typeof", "uint", "ulong", "unchecked", "unsafe",
    "ushort", "using", "virtual", "void", "volatile", "while",
}

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_DOTTED_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")


def to_snake_case(name: str) -> str:
    """Convert ``camelCase``/``PascalCase``/``kebab-case`` to snake_case."""
    name = re.sub(r"[-\s]+", "_", str(name))
    name = re.sub(r"([A-Z]+)([A-Z][a-z])", r"\1_\2", name)
    name = re.sub(r"([a-z0-9])([A-Z])", r"\1_\2", name)
    name = re.sub(r"_+", "_", name.lower())
    return name.strip("_")


def to_pascal_case(name: str) -> str:
    """Convert to PascalCase, keeping existing inner capitals."""
    parts = re.split(r"[^A-Za-z0-9]+", str(name))
    return "".join(part[:1].upper() + part[1:] for part in parts if part)


def to_camel_case(name: str) -> str:
    """Convert to camelCase."""
    pascal = to_pascal_case(name)
    return pascal[:1].lower() + pascal[1:]


def is_valid_identifier(name: str, dotted: bool = False) -> bool:
    """Check that ``name`` is a usable C# identifier (or dotted namespace)."""
    if not name:
        return False
    pattern = _DOTTED_IDENTIFIER_RE if dotted else _IDENTIFIER_RE
    if not pattern.match(name):
        return False
    parts = name.split(".") if dotted else [name]
    return not any(part in CSHARP_RESERVED_WORDS for part in parts)


class NameSanitizer:
    """Turns arbitrary names into unique, legal identifiers."""

    def __init__(self, reserved_words: Optional[Set[str]] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Words that need a suffix when produced verbatim
        """
        self.reserved_words = (
            reserved_words if reserved_words is not None else CSHARP_RESERVED_WORDS
        )
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(
        self,
        name: str,
        target_case: NamingCase = NamingCase.PASCAL_CASE,
        unique: bool = False,
    ) -> str:
        """
        Sanitize a name for use as an identifier.

        Args:
            name: Original name
            target_case: Desired case style
            unique: Append a counter when the result was already produced

        Returns:
            Legal identifier
        """
        cache_key = f"{name}_{target_case.value}"
        if not unique and cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)

        if converted.lower() in self.reserved_words:
            converted = f"{converted}_"
        if converted[0].isdigit():
            converted = f"_{converted}"

        final_name = converted
        if unique:
            counter = 2
            while final_name in self._used_names:
                final_name = f"{converted}{counter}"
                counter += 1

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)
        return final_name

    def _clean_basic(self, name: str) -> str:
        cleaned = re.sub(r"[^A-Za-z0-9_\-\s]", " ", str(name)).strip(" _-")
        return cleaned or "Element"

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        if target_case == NamingCase.SNAKE_CASE:
            return to_snake_case(name)
        if target_case == NamingCase.CAMEL_CASE:
            return to_camel_case(name)
        return to_pascal_case(name)

    def reset_used_names(self):
        """Forget previously produced names."""
        self._used_names.clear()


def sanitize_identifier(name: str) -> str:
    """Sanitize a name into a PascalCase C# identifier."""
    return NameSanitizer().sanitize_name(name, NamingCase.PASCAL_CASE)


def sanitize_namespace(name: str) -> str:
    """Sanitize a dotted namespace one segment at a time."""
    parts = [part for part in str(name).split(".") if part.strip(" _-")]
    return ".".join(sanitize_identifier(part) for part in parts) or "Generated"


def backing_field_name(property_name: str) -> str:
    """``UserName`` -> ``_userName``."""
    return "_" + property_name[:1].lower() + property_name[1:]
