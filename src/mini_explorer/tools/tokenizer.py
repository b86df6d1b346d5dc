"""
Command-line tokenizer for MiniFileExplorer.

Splits one raw input line into argument strings. Whitespace separates
arguments, single and double quotes group text literally, and a backslash
escapes the next character everywhere (inside quotes too).
"""

from typing import List


WHITESPACE = frozenset(' \t\r\n')


class TokenizeError(ValueError):
    """Raised when a line ends inside a quote or right after a backslash."""
    pass


def tokenize(line: str) -> List[str]:
    """
    Split a command line into tokens.
    
    Args:
        line: Raw line as read from the terminal
        
    Returns:
        List of tokens; empty for a blank line
        
    Raises:
        TokenizeError: If a quote is left open or the line ends with a lone backslash
    """
    tokens: List[str] = []
    current: List[str] = []
    quote = None
    escape_next = False

    for ch in line:
        if escape_next:
            current.append(ch)
            escape_next = False
            continue

        if ch == '\\':
            escape_next = True
            continue

        if quote is not None:
            if ch == quote:
                quote = None
            else:
                current.append(ch)
            continue

        if ch in ('"', "'"):
            quote = ch
            continue

        if ch in WHITESPACE:
            # Quotes only group text, so '' on its own yields no token
            if current:
                tokens.append(''.join(current))
                current = []
            continue

        current.append(ch)

    if escape_next:
        raise TokenizeError("Line ends with an unescaped backslash")
    if quote is not None:
        raise TokenizeError(f"Unmatched {quote} quote")

    if current:
        tokens.append(''.join(current))
    return tokens
