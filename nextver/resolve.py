from pydantic import BaseModel, ConfigDict
from semver import Version

from .aggregate import BumpAggregate
from .versions import (
    build_number,
    increment_major,
    increment_minor,
    increment_patch,
    render,
    with_build,
)


class Resolution(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    version: Version
    text: str
    bump: str  # major | minor | patch | build


def resolve_version(base: Version, agg: BumpAggregate) -> Resolution | None:
    """Apply the aggregate decision to ``base``.

    Returns None when no commits were walked: nothing to release. Commits
    without any bump marker keep the version core and count up the numeric
    build metadata instead.
    """
    if agg.objects_visited == 0:
        return None

    if not agg.any_bump:
        current = build_number(base)
        nxt = with_build(base, 1 if current is None else current + 1)
        return Resolution(version=nxt, text=render(nxt), bump="build")

    nxt = base
    bump = ""
    # fixed order; later increments zero what earlier ones touched
    if agg.patch:
        nxt, bump = increment_patch(nxt), "patch"
    if agg.minor:
        nxt, bump = increment_minor(nxt), "minor"
    if agg.major:
        nxt, bump = increment_major(nxt), "major"
    return Resolution(version=nxt, text=render(nxt), bump=bump)
