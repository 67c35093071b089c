"""Reader for single `config` statements.

Responsibilities:
- Accept `config :app, key: value, ...` and `config :app, Some.Key, key: value, ...`.
- Parse the argument list with the closed literal grammar; nothing is evaluated.

Key public functions:
- `parse_statement`: statement text → `(app, OptionList)`.
"""

from __future__ import annotations

import re

from .codec.value import ValueCodec
from .errors import BadInputError, BadValueError
from .models.datatypes import IDENTIFIER_TYPES, Identifier, OptionList, Symbol

_STATEMENT_PATTERN = re.compile(r"\s*config\s+(?P<arguments>\S.*?)\s*", re.DOTALL)


def parse_statement(
    statement: str, value_codec: ValueCodec | None = None
) -> tuple[Identifier, OptionList]:
    """Parse one `config` statement into its app and option list.

    Args:
        statement: Statement text such as `config :my_app, level: :info`.
        value_codec: Codec used to parse the argument list.

    Returns:
        The app symbol and its options; a key argument becomes the single
        outer key of the returned option list.

    Raises:
        BadInputError: If the text is not a `config` statement of a supported shape.
    """

    if not isinstance(statement, str):
        raise BadInputError(
            detail=f"Statement must be a string, got `{type(statement).__name__}`."
        )
    match = _STATEMENT_PATTERN.fullmatch(statement)
    if match is None:
        raise BadInputError(
            detail=f"Malformed statement `{statement}`.",
            hint="Statements look like `config :my_app, key: :value`.",
        )

    codec = value_codec or ValueCodec()
    try:
        values, pairs = codec.parse_arguments(match.group("arguments"))
    except BadValueError as exc:
        raise BadInputError(
            detail=f"Could not parse statement `{statement}`: {exc.detail}"
        ) from exc

    if not values or not isinstance(values[0], Symbol):
        raise BadInputError(detail="The first statement argument must be an app symbol.")
    app, rest = values[0], values[1:]

    if pairs is not None:
        options = pairs
    elif rest and isinstance(rest[-1], OptionList):
        options, rest = rest[-1], rest[:-1]
    else:
        raise BadInputError(detail=f"Statement for app `{app}` has no `key: value` options.")

    if len(rest) > 1 or (rest and not isinstance(rest[0], IDENTIFIER_TYPES)):
        raise BadInputError(
            detail=f"Statement for app `{app}` accepts at most one key before its options."
        )
    if rest:
        options = OptionList(((rest[0], options),))
    return app, options
