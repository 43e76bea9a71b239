"""
Placeholder-style environment variable expansion.

Values may reference process variables as ${env:NAME}. A reference to a
variable that cannot be resolved is rewritten to ${NAME} rather than being
dropped, so the caller can still see what was asked for.
"""

import os
import re
from collections.abc import Callable, Mapping

ENV_PLACEHOLDER = re.compile(r"\$\{env:([^}]+)\}")

EnvLookup = Callable[[str], str | None]


def expand_env_vars(
    env_vars: Mapping[str, str],
    lookup: EnvLookup = os.environ.get,
) -> dict[str, str]:
    """
    Expand ${env:NAME} placeholders in every value of `env_vars`.

    Args:
        env_vars: Mapping of names to values that may contain placeholders
        lookup: Variable resolver, defaults to the process environment

    Returns:
        A new dict with the same keys and expanded values
    """

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        try:
            value = lookup(name)
        except (KeyError, UnicodeError):
            value = None
        return value if value is not None else f"${{{name}}}"

    return {key: ENV_PLACEHOLDER.sub(_replace, value) for key, value in env_vars.items()}
