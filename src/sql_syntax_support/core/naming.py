"""
Field name to column name conversion and result alias shortening.

Both functions are pure: no I/O, deterministic output for given inputs.
"""

import re
import string
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Sequence, Tuple, Union

from .exceptions import InternalInvariantError

if TYPE_CHECKING:
    from sql_syntax_support.support import SyntaxSupport

NameConverters = Union[Mapping[str, str], Iterable[Tuple[str, str]]]

_ACRONYM = re.compile(r"[A-Z]{2,}")
_TRAILING_ACRONYM = re.compile(r"[A-Z]{2,}$")
_SINGLE_UPPER = re.compile(r"[A-Z]")
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z])(?=[A-Z])")


def normalize_name_converters(
    name_converters: Optional[NameConverters],
) -> Tuple[Tuple[str, str], ...]:
    """
    Turn a mapping or an iterable of pairs into an ordered tuple of pairs.

    Examples:
        >>> normalize_name_converters({"^serviceCode$": "service_cd"})
        (('^serviceCode$', 'service_cd'),)
        >>> normalize_name_converters(None)
        ()
    """
    if not name_converters:
        return ()
    if isinstance(name_converters, Mapping):
        pairs = name_converters.items()
    else:
        pairs = name_converters
    return tuple((str(pattern), str(replacement)) for pattern, replacement in pairs)


def apply_name_converters(name: str, name_converters: Optional[NameConverters]) -> str:
    """Apply every rewrite rule in order, each one seeing the previous output."""
    converted = name
    for pattern, replacement in normalize_name_converters(name_converters):
        converted = re.sub(pattern, replacement, converted)
    return converted


def to_column_name(
    name: str,
    name_converters: Optional[NameConverters] = None,
    use_snake_case: bool = True,
) -> str:
    """
    Convert a field name into a column name.

    Rewrite rules are applied first. With ``use_snake_case`` the result is
    then converted from camelCase/PascalCase to snake_case, treating runs of
    upper-case letters as acronyms.

    Args:
        name: Field (or entity) name
        name_converters: Ordered (regex, replacement) rewrite rules
        use_snake_case: Convert to snake_case after rewriting

    Returns:
        The column name

    Examples:
        >>> to_column_name("serviceCode")
        'service_code'
        >>> to_column_name("userID")
        'user_id'
        >>> to_column_name("XMLHttpRequest")
        'xml_http_request'
        >>> to_column_name("serviceCode", {"^serviceCode$": "service_cd"})
        'service_cd'
    """
    converted = apply_name_converters(name, name_converters)
    if not use_snake_case:
        return converted

    # A trailing acronym stays in one piece: userID -> user_id
    converted = _TRAILING_ACRONYM.sub(
        lambda m: "_" + m.group(0).lower(), converted, count=1
    )
    # An inner acronym's last letter starts the next word: XMLHttp -> xml_http
    converted = _ACRONYM.sub(
        lambda m: "_" + m.group(0)[:-1].lower() + "_" + m.group(0)[-1].lower(),
        converted,
    )
    converted = _SINGLE_UPPER.sub(lambda m: "_" + m.group(0).lower(), converted)
    if converted.startswith("_"):
        converted = converted[1:]
    if converted.endswith("_"):
        converted = converted[:-1]

    prefix = "_" if name.startswith("_") else ""
    suffix = "_" if name.endswith("_") else ""
    if not converted:
        return prefix or suffix
    return prefix + converted + suffix


def _to_alphabet_only(name: str) -> str:
    filtered = "".join(c for c in name if c in string.ascii_letters or c == "_")
    return filtered or "x"


def _shorten(name: str) -> str:
    letters = []
    for word in name.split("_"):
        head, *camel_words = _CAMEL_BOUNDARY.split(word)
        letters.append(head[:1])
        # camel humps are lower-cased: userName -> un
        letters.extend(camel_word[:1].lower() for camel_word in camel_words)
    return "".join(letters)


def to_shortened_name(name: str, columns: Sequence[str]) -> str:
    """
    Return a short alias for ``name`` that is unique among ``columns``.

    The alias is built from the first letter of every word. When several
    columns share the same short form, a 1-based counter is appended; the
    counter of a column is its rank among the colliding columns, in column
    order.

    Raises:
        InternalInvariantError: If a collision exists and ``name`` is not one
            of ``columns``

    Examples:
        >>> to_shortened_name("user_id", ["user_id", "name"])
        'ui'
        >>> to_shortened_name("user_info", ["user_id", "user_info"])
        'ui2'
    """
    shortened = _shorten(_to_alphabet_only(name))
    shortened_columns = [_shorten(_to_alphabet_only(c)) for c in columns]
    if shortened_columns.count(shortened) <= 1:
        return shortened

    counter = 1
    for column, shortened_column in zip(columns, shortened_columns):
        if column == name:
            return f"{shortened}{counter}"
        if shortened_column == shortened:
            counter += 1
    raise InternalInvariantError(
        f"Cannot resolve the shortened name of '{name}': "
        f"it is not one of the columns ({','.join(columns)})"
    )


def to_alias_name(name: str, support: "SyntaxSupport") -> str:
    """Result alias of a column: shortened when the entity asks for it."""
    if support.use_shortened_result_name:
        return to_shortened_name(name, support.columns)
    return name
