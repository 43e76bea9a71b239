"""
Path canonicalization shared by validation and execution.

Validation and execution must agree on which file a tool call refers to,
so both go through canonicalize_path with the same provider.
"""

import os
import re

from agentcore.util.providers import SystemProvider

_ENV_REFERENCE = re.compile(r"\$(\w+)|\$\{([^}]+)\}")


def _expand_vars(path: str, provider: SystemProvider) -> str:
    def _replace(match: re.Match[str]) -> str:
        name = match.group(1) or match.group(2)
        value = provider.env_var(name)
        return value if value is not None else match.group(0)

    return _ENV_REFERENCE.sub(_replace, path)


def canonicalize_path(path: str, provider: SystemProvider) -> str:
    """
    Turn a model-supplied path into an absolute, normalized path.

    Expands a leading `~` and `$VAR`/`${VAR}` references, joins relative
    paths onto the provider's working directory and collapses `.`/`..`
    segments. Symlinks are not resolved.

    Raises:
        ValueError: If `~` is used but no home directory is known
    """
    expanded = path
    if expanded == "~" or expanded.startswith(("~/", "~" + os.sep)):
        home = provider.home()
        if home is None:
            msg = f"Unable to expand '~' in path '{path}': no home directory"
            raise ValueError(msg)
        expanded = home + expanded[1:]

    expanded = _expand_vars(expanded, provider)

    if not os.path.isabs(expanded):
        expanded = os.path.join(provider.cwd(), expanded)

    return os.path.normpath(expanded)
