import logging
from collections.abc import Iterable
from typing import NamedTuple

from semver import Version

from .errors import ParseError
from .versions import build_number, parse_version

logger = logging.getLogger("nextver")


class TaggedVersion(NamedTuple):
    name: str
    version: Version


def scan_tags(tag_names: Iterable[str], prefix: str = "") -> list[TaggedVersion]:
    found = []
    for name in tag_names:
        if prefix and not name.startswith(prefix):
            continue
        try:
            found.append(TaggedVersion(name, parse_version(name[len(prefix):])))
        except ParseError:
            # tags are not required to be versions
            logger.debug("skipping non-version tag %s", name)
    return found


def _precedence(tagged: TaggedVersion):
    build = build_number(tagged.version)
    return (tagged.version, -1 if build is None else build, tagged.name)


def highest_tag(tag_names: Iterable[str], prefix: str = "") -> TaggedVersion | None:
    """Return the tag carrying the highest version, or None if no tag parses.

    Equal versions that differ only in build metadata are ordered by their
    numeric build number, then by tag name.
    """
    found = scan_tags(tag_names, prefix)
    if not found:
        return None
    return max(found, key=_precedence)


def highest_version(tag_names: Iterable[str], prefix: str = "") -> Version | None:
    tagged = highest_tag(tag_names, prefix)
    return tagged.version if tagged else None
