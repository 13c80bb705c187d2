"""Derive bare directive names from directive strings.

    // run-pass                 -> run-pass
    // edition: 2021            -> edition
    //[foo] ignore-windows      -> ignore-windows
    //[foo]: ignore-windows     -> ignore-windows   (stray colon tolerated)

Names are for inspection only; classification never parses revisions.
"""

from collections.abc import Iterable

from directivemig.directives import MARKER
from directivemig.errors import MalformedDirectiveError


def extract_name(directive: str) -> str:
    """Return the bare name of a single directive string.

    Raises:
        MalformedDirectiveError: no marker, unbalanced revision bracket, or
            no separable name.
    """
    if MARKER not in directive:
        raise MalformedDirectiveError(directive, "no comment marker")
    _, rest = directive.split(MARKER, 1)
    rest = rest.strip()

    if rest.startswith("["):
        close = rest.find("]")
        if close == -1:
            raise MalformedDirectiveError(directive, "unbalanced revision bracket")
        rest = rest[close + 1:]

    # `//[rev]: name` shows up in older tests
    if rest.startswith(":"):
        rest = rest[1:]
    rest = rest.strip()

    separators = [i for i in (rest.find(":"), rest.find(" ")) if i != -1]
    if separators:
        name = rest[:min(separators)]
    elif any(c.isspace() for c in rest):
        raise MalformedDirectiveError(directive, "name contains whitespace but no separator")
    else:
        name = rest

    if not name:
        raise MalformedDirectiveError(directive, "empty directive name")
    return name


def extract_names(directives: Iterable[str]) -> set[str]:
    """Collect the bare names of every directive in a DirectiveSet."""
    return {extract_name(directive) for directive in directives}
