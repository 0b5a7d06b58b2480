"""Guess the next semver tag of a git repository from its commit messages.

Usage:
    next-version [REPO | -r REPO] [-M PATTERN] [-m PATTERN] [-p PATTERN] [--tag-prefix P]

Exit codes:
    0  next version written to stdout
    1  repository could not be read
    2  bad arguments (including an invalid pattern)
    3  no commits since the last version tag, no release necessary
"""
import argparse
import sys

from dotenv import find_dotenv, load_dotenv

from .config import TOOL_VERSION, configure_logging, settings_from_env
from .errors import RepositoryAccessError
from .git import GitRepository
from .pipeline import derive_next_version

EXIT_OK = 0
EXIT_REPO_ERROR = 1
EXIT_NO_RELEASE = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="next-version",
        description="Helps guess the next git semver tag",
    )
    parser.add_argument("repo_dir", nargs="?", metavar="DIR", help="git repository (default: .)")
    parser.add_argument("-r", "--repo", dest="repo_opt", metavar="DIR", help="git repository, same as DIR")
    parser.add_argument("-M", "--major", metavar="PATTERN", help="regex marking a major bump")
    parser.add_argument("-m", "--minor", metavar="PATTERN", help="regex marking a minor bump")
    parser.add_argument("-p", "--patch", metavar="PATTERN", help="regex marking a patch bump")
    parser.add_argument("--tag-prefix", metavar="PREFIX", help="only consider tags with this prefix, e.g. v")
    parser.add_argument("--newline", action="store_true", help="end the output with a newline")
    parser.add_argument("-V", "--version", action="version", version=f"%(prog)s {TOOL_VERSION}")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv(find_dotenv(usecwd=True))
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = settings_from_env()
    overrides = {
        "repo_path": args.repo_opt or args.repo_dir,
        "major_pattern": args.major,
        "minor_pattern": args.minor,
        "patch_pattern": args.patch,
        "tag_prefix": args.tag_prefix,
    }
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    logger = configure_logging(settings.log_level)

    try:
        patterns = settings.bump_patterns()
    except ValueError as e:
        parser.error(str(e))

    try:
        repo = GitRepository.open(settings.repo_path)
        result = derive_next_version(
            repo,
            patterns,
            tag_prefix=settings.tag_prefix,
            structured_logging=settings.structured_logging,
        )
    except RepositoryAccessError as e:
        logger.error("next-version: %s", e)
        return EXIT_REPO_ERROR

    if result.resolution is None:
        logger.warning("no commits since %s, no release necessary", result.base_tag or "the root commit")
        return EXIT_NO_RELEASE

    sys.stdout.write(result.resolution.text + ("\n" if args.newline else ""))
    sys.stdout.flush()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
