"""
Catalog of the built-in tools.

The catalog answers "which built-in tools exist and how are they described
to a model". Everything here is pure: the same name always yields the same
spec, and nothing touches the filesystem.
"""

from agentcore.schema import ToolSpec
from agentcore.tools.base import BuiltInToolModel
from agentcore.tools.execute_cmd import ExecuteCmd
from agentcore.tools.fs_read import FsRead
from agentcore.tools.fs_write import FsWriteCommand
from agentcore.tools.image_read import ImageRead
from agentcore.tools.ls import Ls
from agentcore.tools.names import BuiltInName, BuiltInToolName

BUILTIN_TOOL_MODELS: dict[BuiltInToolName, type[BuiltInToolModel]] = {
    BuiltInToolName.FS_READ: FsRead,
    BuiltInToolName.FS_WRITE: FsWriteCommand,
    BuiltInToolName.EXECUTE_CMD: ExecuteCmd,
    BuiltInToolName.IMAGE_READ: ImageRead,
    BuiltInToolName.LS: Ls,
}


def list_builtin_tools() -> list[BuiltInName]:
    """Every built-in tool, in BuiltInToolName order."""
    return [BuiltInName(name) for name in BuiltInToolName]


def model_for(name: BuiltInToolName | BuiltInName | str) -> type[BuiltInToolModel]:
    """
    Return the payload model class for a built-in tool.

    For fsWrite this is the shared base of the three command variants.

    Raises:
        ValueError: If `name` is not a built-in tool name
    """
    if isinstance(name, BuiltInName):
        name = name.name
    return BUILTIN_TOOL_MODELS[BuiltInToolName(name)]


def spec_for(name: BuiltInToolName | BuiltInName | str) -> ToolSpec:
    """Return the spec (name, description, input schema) of a built-in tool."""
    return model_for(name).tool_spec()


def all_tool_specs() -> list[ToolSpec]:
    """Specs of every built-in tool, in catalog order."""
    return [spec_for(name) for name in list_builtin_tools()]
