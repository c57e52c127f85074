"""
Positional placeholder handling.

Statements are written with positional placeholders (`?`, or `%s`) and
rewritten to the paramstyle of the connection's DBAPI driver:

    SQL -> Tokenize -> Rewrite placeholders / escape percents -> SQL

Placeholders inside string literals, quoted identifiers and comments are left
alone. Drivers using the `format` paramstyle interpolate with `%` over the
whole statement, so every percent sign is doubled whenever parameters are
bound.
"""
import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum, auto
from typing import Any

__all__ = [
    'prepare_query',
    'standardize_placeholders',
    'has_placeholders',
    'tokenize_sql',
]


class TokenType(Enum):
    """Token types identified during SQL parsing."""
    SQL_TEXT = auto()
    STRING_LITERAL = auto()
    QUOTED_IDENT = auto()
    COMMENT = auto()            # -- ..., # ..., /* ... */
    POSITIONAL_PH = auto()      # %s or ?
    ESCAPED_PERCENT = auto()    # %%


@dataclass(slots=True)
class Token:
    """Token from SQL parsing."""
    type: TokenType
    text: str


# Master tokenization pattern. MySQL accepts both quote styles for strings,
# backticks quote identifiers, `#` starts a line comment.
_TOKENIZE = re.compile(r"""
    (?P<string>'(?:[^'\\]|\\.|'')*'|"(?:[^"\\]|\\.|"")*")
    |(?P<ident>`(?:[^`]|``)*`)
    |(?P<comment>--[^\n]*|\#[^\n]*|/\*.*?\*/)
    |(?P<escaped>%%)
    |(?P<percent_s>%s)
    |(?P<qmark>\?)
""", re.VERBOSE | re.DOTALL)

_HAS_PLACEHOLDER = re.compile(r'%s|\?')

# Token types whose percent signs are doubled for format drivers
_PERCENT_ESCAPED = {
    TokenType.SQL_TEXT,
    TokenType.STRING_LITERAL,
    TokenType.QUOTED_IDENT,
    TokenType.COMMENT,
}

_PARAMSTYLE_PLACEHOLDER = {
    'qmark': '?',
    'format': '%s',
    'pyformat': '%s',
}


def tokenize_sql(sql: str) -> list[Token]:
    """Parse SQL into tokens in a single pass.

    Parameters
        sql: SQL query string

    Returns
        List of tokens preserving all SQL text
    """
    tokens = []
    last_end = 0

    for match in _TOKENIZE.finditer(sql):
        start, end = match.span()

        if start > last_end:
            tokens.append(Token(TokenType.SQL_TEXT, sql[last_end:start]))

        if match.group('string'):
            ttype = TokenType.STRING_LITERAL
        elif match.group('ident'):
            ttype = TokenType.QUOTED_IDENT
        elif match.group('comment'):
            ttype = TokenType.COMMENT
        elif match.group('escaped'):
            ttype = TokenType.ESCAPED_PERCENT
        else:
            ttype = TokenType.POSITIONAL_PH

        tokens.append(Token(ttype, match.group(0)))
        last_end = end

    if last_end < len(sql):
        tokens.append(Token(TokenType.SQL_TEXT, sql[last_end:]))

    return tokens


def has_placeholders(sql: str | None) -> bool:
    """Check if SQL has any positional placeholders outside literals and comments."""
    if not sql or not _HAS_PLACEHOLDER.search(sql):
        return False
    return any(t.type == TokenType.POSITIONAL_PH for t in tokenize_sql(sql))


def standardize_placeholders(sql: str, paramstyle: str = 'format') -> str:
    """Rewrite positional placeholders for the given DBAPI paramstyle.

    For `format`/`pyformat` drivers, bare `%` signs are doubled so the
    driver's interpolation leaves them intact. Inside literals, quoted
    identifiers and comments every `%` is literal, outside them an already
    escaped `%%` is kept as is.
    """
    if not sql:
        return sql

    if paramstyle not in _PARAMSTYLE_PLACEHOLDER:
        raise ValueError(f'Unsupported paramstyle: {paramstyle}')

    placeholder = _PARAMSTYLE_PLACEHOLDER[paramstyle]
    percent_style = placeholder == '%s'

    result = []
    for token in tokenize_sql(sql):
        if token.type == TokenType.POSITIONAL_PH:
            result.append(placeholder)
        elif token.type == TokenType.ESCAPED_PERCENT:
            result.append(token.text)
        elif percent_style and token.type in _PERCENT_ESCAPED:
            result.append(token.text.replace('%', '%%'))
        else:
            result.append(token.text)
    return ''.join(result)


def prepare_query(sql: str, params: Sequence[Any] | None,
                  paramstyle: str = 'format') -> tuple[str, tuple | None]:
    """Process SQL and positional parameters for execution.

    Without parameters the statement is returned verbatim and `None` is
    returned for the parameters, so the driver performs no interpolation.

    Parameters
        sql: SQL query string
        params: Positional bind values, in placeholder order
        paramstyle: DBAPI paramstyle of the target driver

    Returns
        Tuple of (processed_sql, processed_params)
    """
    if params is None or (not params and not has_placeholders(sql)):
        return sql, None

    return standardize_placeholders(sql, paramstyle), tuple(params)
