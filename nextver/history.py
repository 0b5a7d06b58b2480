import logging
from typing import Protocol

from pydantic import BaseModel, ConfigDict

from .tags import TaggedVersion

logger = logging.getLogger("nextver")


class Repository(Protocol):
    def list_tag_names(self) -> list[str]: ...

    def resolve(self, ref: str) -> str: ...

    def current_head(self) -> str: ...

    def root_commit(self, start: str) -> str: ...

    def walk(self, start: str, exclude: str | None = None) -> list[str]: ...

    def read_message(self, commit_id: str) -> str: ...


class CommitRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    message: str


def boundary_commit(repo: Repository, head: str, base_tag: TaggedVersion | None) -> str:
    if base_tag is None:
        return repo.root_commit(head)
    return repo.resolve(f"refs/tags/{base_tag.name}")


def walk_history(repo: Repository, base_tag: TaggedVersion | None) -> list[CommitRecord]:
    """Commits since ``base_tag`` (exclusive) up to HEAD, oldest first.

    Without a tag the walk starts after the repository's root commit. A tag
    that is not an ancestor of HEAD still bounds the walk: only commits that
    trace back to it are left out.
    """
    head = repo.current_head()
    boundary = boundary_commit(repo, head, base_tag)
    ids = repo.walk(head, exclude=boundary)
    logger.debug("walked %d commits from %s to %s", len(ids), boundary, head)
    return [CommitRecord(id=commit_id, message=repo.read_message(commit_id)) for commit_id in ids]
