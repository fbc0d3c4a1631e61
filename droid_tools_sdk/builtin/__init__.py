"""
Built-in tools: file reading and find/replace editing under a storage root.
"""

from droid_tools_sdk.builtin.read_file import ReadFile
from droid_tools_sdk.builtin.storage import FileStorage, configure_storage, get_storage
from droid_tools_sdk.builtin.update_file import UpdateFile

BUILTIN_TOOLS = [
    "droid_tools_sdk.builtin.ReadFile",
    "droid_tools_sdk.builtin.UpdateFile",
]

__all__ = [
    "BUILTIN_TOOLS",
    "FileStorage",
    "ReadFile",
    "UpdateFile",
    "configure_storage",
    "get_storage",
]
