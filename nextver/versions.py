"""Semantic version helpers on top of ``semver.Version``.

Ordering follows SemVer precedence (major, minor, patch, pre-release); build
metadata never takes part in comparisons. Increments return new values with
lower components zeroed and pre-release/build cleared.
"""
import re

from semver import Version

from .errors import ParseError

DEFAULT_BASE_VERSION = Version(0, 0, 1)

_NUMERIC = re.compile(r"[0-9]+")


def parse_version(text: str) -> Version:
    try:
        return Version.parse(text)
    except (ValueError, TypeError) as e:
        raise ParseError(f"not a semantic version: {text!r}") from e


def compare(a: Version, b: Version) -> int:
    return a.compare(b)


def increment_major(v: Version) -> Version:
    return v.bump_major()


def increment_minor(v: Version) -> Version:
    return v.bump_minor()


def increment_patch(v: Version) -> Version:
    return v.bump_patch()


def build_number(v: Version) -> int | None:
    """Numeric build metadata, or None unless it is exactly one all-digit identifier."""
    if not v.build:
        return None
    idents = v.build.split(".")
    if len(idents) != 1 or not _NUMERIC.fullmatch(idents[0]):
        return None
    return int(idents[0])


def with_build(v: Version, number: int) -> Version:
    return v.replace(prerelease=None, build=str(number))


def render(v: Version) -> str:
    core = f"{v.major}.{v.minor}.{v.patch}"
    if v.build:
        return f"{core}+{v.build}"
    return core

