import logging
import os
import sys

from pydantic import BaseModel

from .classify import BumpPatterns, bump_patterns

TOOL_VERSION = "2.1.0"


class Settings(BaseModel):
    # repository
    repo_path: str = "."  # NEXTVER_REPO
    tag_prefix: str = ""  # NEXTVER_TAG_PREFIX, e.g. "v"

    # bump markers, each falls back to its own default
    major_pattern: str | None = None  # NEXTVER_MAJOR_PATTERN
    minor_pattern: str | None = None  # NEXTVER_MINOR_PATTERN
    patch_pattern: str | None = None  # NEXTVER_PATCH_PATTERN

    # logging
    log_level: str = "WARNING"  # NEXTVER_LOG_LEVEL
    structured_logging: bool = True  # NEXTVER_STRUCT_LOG ("0" to disable)

    # simple bearer auth token for the service
    auth_token: str | None = None  # NEXTVER_AUTH_TOKEN

    def bump_patterns(self) -> BumpPatterns:
        return bump_patterns(self.major_pattern, self.minor_pattern, self.patch_pattern)


def settings_from_env(default_log_level: str = "WARNING") -> Settings:
    return Settings(
        repo_path=os.getenv("NEXTVER_REPO", "."),
        tag_prefix=os.getenv("NEXTVER_TAG_PREFIX", ""),
        major_pattern=os.getenv("NEXTVER_MAJOR_PATTERN"),
        minor_pattern=os.getenv("NEXTVER_MINOR_PATTERN"),
        patch_pattern=os.getenv("NEXTVER_PATCH_PATTERN"),
        log_level=os.getenv("NEXTVER_LOG_LEVEL", default_log_level).upper(),
        structured_logging=os.getenv("NEXTVER_STRUCT_LOG", "1") != "0",
        auth_token=os.getenv("NEXTVER_AUTH_TOKEN"),
    )


def configure_logging(level: str) -> logging.Logger:
    logger = logging.getLogger("nextver")
    if not logger.handlers:
        # stdout is reserved for the version string
        handler = logging.StreamHandler(sys.stderr)
        logger.addHandler(handler)
    level_no = logging.getLevelName(level.upper())
    logger.setLevel(level_no if isinstance(level_no, int) else logging.WARNING)
    return logger
