"""
Shared primitives used by the built-in tools.

- text: UTF-8 safe truncation and bounded file reads
- env: ${env:NAME} placeholder expansion
- providers/path: system access abstraction and path canonicalization
- glob: ignore-pattern matching
- platform: line endings, shells and listing formats per OS family
"""

from agentcore.util.env import expand_env_vars
from agentcore.util.text import read_file_with_max_limit, truncate_safe, truncate_with_suffix

__all__ = [
    "expand_env_vars",
    "read_file_with_max_limit",
    "truncate_safe",
    "truncate_with_suffix",
]
