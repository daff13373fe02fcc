"""
Naming helpers for generated GraphQL operations and resolver modules.
"""

import re

# Regex pattern to split text into words, handling camelCase boundaries
_WORD_PATTERN = re.compile(r"[a-z]+|[A-Z]+(?![a-z])|[A-Z][a-z]*|[0-9]+")


def _split_into_words(text: str) -> list[str]:
    """Split text into words, handling camelCase boundaries and separators."""
    return _WORD_PATTERN.findall(text.replace("_", " ").replace("-", " "))


def pascal_case(text: str) -> str:
    """Convert snake_case, camelCase or space-separated text to PascalCase.

    Examples:
        "first_name" -> "FirstName"
        "noteComment" -> "NoteComment"
    """
    return "".join(word.capitalize() for word in _split_into_words(text))


def camel_case(text: str) -> str:
    """Convert text to camelCase.

    Examples:
        "Note" -> "note"
        "user_profile" -> "userProfile"
    """
    pascal = pascal_case(text)
    return pascal[:1].lower() + pascal[1:]


def snake_case(text: str) -> str:
    """Convert text to snake_case.

    Examples:
        "UserProfile" -> "user_profile"
        "likeNote" -> "like_note"
        "HTTPRequest" -> "http_request"
    """
    return "_".join(word.lower() for word in _split_into_words(text))


def pluralize(word: str) -> str:
    """Naive English plural used for list operation names.

    Examples:
        "Note" -> "Notes"
        "Category" -> "Categories"
        "Box" -> "Boxes"
    """
    if not word:
        return word
    lower = word.lower()
    if lower.endswith("y") and lower[-2:-1] not in ("a", "e", "i", "o", "u"):
        return word[:-1] + "ies"
    if lower.endswith(("s", "x", "z", "ch", "sh")):
        return word + "es"
    return word + "s"
