"""
Weka-style option token handling.

Options travel as flat lists of string tokens, e.g. ``["-C", "0.25", "-M", "2"]``.
Nested algorithms are embedded either as a single quoted token
(``-K "weka.classifiers.functions.supportVector.PolyKernel -E 1.0"``) or, for
wrapped classifiers, after a ``--`` separator.
"""

from typing import List, Sequence, Tuple

from .errors import OptionParseError

OPTION_SEPARATOR = "--"

_NEEDS_QUOTING = (" ", '"', "\\", "\t", "\n", "\r", "'")
_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}
_UNESCAPES = {"\\": "\\", '"': '"', "n": "\n", "r": "\r", "t": "\t"}


def quote(token: str) -> str:
    """Quote a token if it would not survive whitespace splitting unchanged"""
    if token and not any(char in token for char in _NEEDS_QUOTING):
        return token
    return '"' + "".join(_ESCAPES.get(char, char) for char in token) + '"'


def unquote(token: str) -> str:
    """Inverse of :func:`quote`"""
    if len(token) < 2 or not (token.startswith('"') and token.endswith('"')):
        return token
    tokens = split_options(token)
    if len(tokens) != 1:
        raise OptionParseError(f"Not a single quoted token: {token}")
    return tokens[0]


def join_options(tokens: Sequence[str]) -> str:
    """Join option tokens into a single string, quoting where needed"""
    return " ".join(quote(token) for token in tokens)


def split_options(option_string: str) -> List[str]:
    """
    Split an option string into tokens

    Whitespace separates tokens. Double quotes group a token, inside which
    backslash escapes are resolved.

    Args:
        option_string: String as produced by :func:`join_options`

    Returns:
        List of option tokens

    Raises:
        OptionParseError: On an unterminated quote or dangling escape
    """
    tokens = []
    current = []
    in_token = False
    i = 0
    length = len(option_string)

    while i < length:
        char = option_string[i]
        if char == '"':
            i += 1
            while True:
                if i >= length:
                    raise OptionParseError(f"Unterminated quote in options: {option_string}")
                char = option_string[i]
                if char == "\\":
                    if i + 1 >= length:
                        raise OptionParseError(f"Dangling escape in options: {option_string}")
                    escaped = option_string[i + 1]
                    current.append(_UNESCAPES.get(escaped, "\\" + escaped))
                    i += 2
                    continue
                if char == '"':
                    i += 1
                    break
                current.append(char)
                i += 1
            in_token = True
        elif char.isspace():
            if in_token:
                tokens.append("".join(current))
                current = []
                in_token = False
            i += 1
        else:
            current.append(char)
            in_token = True
            i += 1

    if in_token:
        tokens.append("".join(current))

    return tokens


def partition_options(tokens: Sequence[str]) -> Tuple[List[str], List[str]]:
    """Split tokens at the first ``--`` into the algorithm's own options and the wrapped algorithm's"""
    tokens = list(tokens)
    if OPTION_SEPARATOR not in tokens:
        return tokens, []
    index = tokens.index(OPTION_SEPARATOR)
    return tokens[:index], tokens[index + 1 :]


def split_spec_string(spec_string: str) -> Tuple[str, List[str]]:
    """
    Split ``"<class id> <options>"`` into the class id and its option tokens

    Raises:
        OptionParseError: If the string holds no class id
    """
    tokens = split_options(spec_string)
    if not tokens:
        raise OptionParseError(f"Empty algorithm specification: {spec_string!r}")
    class_id, options = tokens[0], tokens[1:]
    if class_id.startswith("-"):
        raise OptionParseError(f"Algorithm specification must start with a class name: {spec_string!r}")
    return class_id, options
