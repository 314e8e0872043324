"""Balanced parenthesis extraction."""

from .errors import UnbalancedParenthesesError


def text_inside_parentheses(text: str, start: int = 0) -> str:
    """Return the text between the first ``(`` at or after ``start`` and its
    matching ``)``.

    Nested groups are skipped by counting depth, so
    ``text_inside_parentheses("((a) ?: false)")`` gives ``"(a) ?: false"``.

    The input must contain a complete, well-formed group. This is not a
    validator: an UnbalancedParenthesesError only signals that the
    precondition was broken.
    """
    opening = text.find("(", start)
    if opening < 0:
        raise UnbalancedParenthesesError(f"No opening parenthesis after index {start}: {text!r}")

    depth = 0
    for index in range(opening, len(text)):
        char = text[index]
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth == 0:
                return text[opening + 1:index]

    raise UnbalancedParenthesesError(f"Unclosed parenthesis at index {opening}: {text!r}")


__all__ = ["text_inside_parentheses"]
