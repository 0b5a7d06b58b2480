import enum
import re

from pydantic import BaseModel, ConfigDict, ValidationError

DEFAULT_MAJOR_PATTERN = r"(?im)^major:|#major\b"
DEFAULT_MINOR_PATTERN = r"(?im)^minor:|#minor\b"
DEFAULT_PATCH_PATTERN = r"(?im)^patch:|#patch\b"


class BumpSignal(str, enum.Enum):
    MAJOR = "major"
    MINOR = "minor"
    PATCH = "patch"
    NONE = "none"


class BumpPatterns(BaseModel):
    model_config = ConfigDict(frozen=True)

    major: re.Pattern = re.compile(DEFAULT_MAJOR_PATTERN)
    minor: re.Pattern = re.compile(DEFAULT_MINOR_PATTERN)
    patch: re.Pattern = re.compile(DEFAULT_PATCH_PATTERN)


def bump_patterns(
    major: str | None = None, minor: str | None = None, patch: str | None = None
) -> BumpPatterns:
    """Build a complete pattern set; each missing override uses its own default."""
    try:
        return BumpPatterns(
            major=major or DEFAULT_MAJOR_PATTERN,
            minor=minor or DEFAULT_MINOR_PATTERN,
            patch=patch or DEFAULT_PATCH_PATTERN,
        )
    except ValidationError as e:
        bad = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise ValueError(f"invalid bump pattern for {bad}") from e


def classify(message: str, patterns: BumpPatterns) -> BumpSignal:
    # strict priority within a single commit: major > minor > patch
    if patterns.major.search(message):
        return BumpSignal.MAJOR
    if patterns.minor.search(message):
        return BumpSignal.MINOR
    if patterns.patch.search(message):
        return BumpSignal.PATCH
    return BumpSignal.NONE
