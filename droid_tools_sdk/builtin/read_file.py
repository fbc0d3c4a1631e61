from __future__ import annotations

import logging
from typing import Annotated

from droid_tools_sdk.builtin.storage import get_storage
from droid_tools_sdk.tools.annotations import Description, description

logger = logging.getLogger("droid_tools_sdk.builtin")


@description(
    "Read content from an existing file at the specified path. "
    "Use this when you need to read content from a file."
)
class ReadFile:
    def handle(
        self,
        file_path: Annotated[str, Description("Absolute File path to read content from")],
    ) -> str:
        storage = get_storage()
        file_path = storage.relative(file_path)

        if storage.exists(file_path):
            logger.info("ReadFile: %s", file_path)
            return storage.get(file_path)

        output = f"The file does not exist in the path: {file_path}"
        logger.info("ReadFile: %s", output)
        return output
