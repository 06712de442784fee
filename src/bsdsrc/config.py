"""Source tree configuration — where to build from and how."""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

DEFAULT_SRC_DIR = Path("/usr/src")
DEFAULT_OBJ_DIR = Path("/usr/obj")
DEFAULT_KERNEL = "GENERIC"
DEFAULT_MAKE_CONF = Path("/etc/make.conf")


class SourceConfig(BaseModel):
    """Settings shared by every make invocation of a build session."""

    model_config = {"frozen": True, "extra": "forbid"}

    src_dir: Path = DEFAULT_SRC_DIR
    obj_dir: Path = DEFAULT_OBJ_DIR
    kernel: str = DEFAULT_KERNEL
    make_conf: Path = DEFAULT_MAKE_CONF
    make: str = "make"

    def environ(self) -> dict[str, str]:
        """Variables added to the inherited environment of each invocation."""
        return {"MAKEOBJDIRPREFIX": str(self.obj_dir)}

    def source_exists(self) -> bool:
        """True when src_dir is an existing directory."""
        exists = self.src_dir.is_dir()
        logger.debug("Source directory '%s' exists: %s", self.src_dir, exists)
        return exists
