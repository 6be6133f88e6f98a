# Conframe CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""
Splits a raw input line into tokens.

Tokens are separated by unquoted spaces. A double quote toggles quoting and is
kept in the emitted token, so `greet "Ada Lovelace"` yields
`['greet', '"Ada Lovelace"']`; quotes are stripped later, when the binder reads
the value. The last token is always emitted, even when empty, which means
trailing whitespace produces a trailing empty token.

Unlike `shlex.split`, an unbalanced quote is not an error: the rest of the
line simply belongs to the open token.
"""


def tokenize(line: str) -> list[str]:
    """Split `line` on unquoted spaces, keeping quote characters."""
    tokens: list[str] = []
    current: list[str] = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char == " " and not in_quotes:
            tokens.append("".join(current))
            current = []
        else:
            current.append(char)

    tokens.append("".join(current))
    return tokens


def strip_quotes(value: str) -> str:
    """Remove surrounding double quotes from a token value."""
    return value.strip('"')
