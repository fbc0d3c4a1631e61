from __future__ import annotations

import json
import logging
from typing import Annotated

from droid_tools_sdk.builtin.storage import get_storage
from droid_tools_sdk.tools.annotations import Description, description

logger = logging.getLogger("droid_tools_sdk.builtin")


@description(
    "Update the content of an existing file at the specified path. Use this when you "
    "need to update the existing of a file after write_to_file returns a suggestion "
    "to merge the content."
)
@description(
    'Expected format for `replace_objects`: [ { "find": "text_to_find", '
    '"replace": "replacement_text" }, ... ]'
)
class UpdateFile:
    def handle(
        self,
        file_path: Annotated[str, Description("File path to write content to")],
        replace_objects_json: Annotated[
            str,
            Description(
                "JSON string format of objects containing text to find and text to "
                "replace. Each object should have `find` and `replace` keys."
            ),
        ],
    ) -> str:
        try:
            replace_objects = json.loads(replace_objects_json)
        except (json.JSONDecodeError, TypeError):
            return f"Invalid JSON format for replace_objects: {replace_objects_json}"
        if not isinstance(replace_objects, list):
            return f"Invalid JSON format for replace_objects: {replace_objects_json}"

        logger.info("UpdateFile: %s, %d replace objects", file_path, len(replace_objects))

        storage = get_storage()
        file_path = storage.relative(file_path)
        if not storage.exists(file_path):
            return f"The file does not exist: {file_path}"

        content = storage.get(file_path)
        for obj in replace_objects:
            if isinstance(obj, dict) and "find" in obj and "replace" in obj:
                content = content.replace(str(obj["find"]), str(obj["replace"]))

        storage.put(file_path, content)
        return f"The file has been updated successfully at {file_path}!"
