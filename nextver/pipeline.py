import json
import logging

from pydantic import BaseModel, ConfigDict
from semver import Version

from .aggregate import BumpAggregate, aggregate
from .classify import BumpPatterns
from .history import Repository, walk_history
from .resolve import Resolution, resolve_version
from .tags import highest_tag
from .versions import DEFAULT_BASE_VERSION, render

logger = logging.getLogger("nextver")


class Derivation(BaseModel):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    base_tag: str | None = None
    base_version: Version
    aggregate: BumpAggregate
    resolution: Resolution | None = None

    @property
    def release(self) -> bool:
        return self.resolution is not None


def derive_next_version(
    repo: Repository,
    patterns: BumpPatterns | None = None,
    tag_prefix: str = "",
    structured_logging: bool = True,
) -> Derivation:
    patterns = patterns or BumpPatterns()
    tagged = highest_tag(repo.list_tag_names(), tag_prefix)
    base = tagged.version if tagged else DEFAULT_BASE_VERSION

    commits = walk_history(repo, tagged)
    agg = aggregate(commits, patterns)
    result = Derivation(
        base_tag=tagged.name if tagged else None,
        base_version=base,
        aggregate=agg,
        resolution=resolve_version(base, agg),
    )
    if structured_logging:
        logger.info(
            json.dumps(
                {
                    "event": "next_version_derived",
                    "base_tag": result.base_tag,
                    "base_version": render(base),
                    "commits": agg.objects_visited,
                    "major": agg.major,
                    "minor": agg.minor,
                    "patch": agg.patch,
                    "version": result.resolution.text if result.resolution else None,
                }
            )
        )
    return result
