"""
agentcore - Tool invocation and execution core for coding agents.

agentcore turns a structured tool call (a tool name plus JSON-like
arguments) into a validated, executed, typed result. It provides:
- A catalog of built-in tools with model-facing descriptions and schemas
- Parsing of raw arguments into typed tool payloads
- Pre-execution validation and async execution
- Dispatch to externally registered (MCP) tools

Example usage:
    $ agentcore tools
    $ agentcore call ls --args '{"path": "."}'
"""

__version__ = "0.1.0"
__author__ = "agentcore Contributors"

__all__ = [
    "__version__",
    "__author__",
]
