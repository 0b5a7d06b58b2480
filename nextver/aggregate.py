from collections.abc import Iterable

from pydantic import BaseModel

from .classify import BumpPatterns, BumpSignal, classify
from .history import CommitRecord


class BumpAggregate(BaseModel):
    objects_visited: int = 0
    major: bool = False
    minor: bool = False
    patch: bool = False

    @property
    def any_bump(self) -> bool:
        return self.major or self.minor or self.patch

    def record(self, signal: BumpSignal) -> "BumpAggregate":
        self.objects_visited += 1
        if signal is BumpSignal.MAJOR:
            self.major = True
        elif signal is BumpSignal.MINOR:
            self.minor = True
        elif signal is BumpSignal.PATCH:
            self.patch = True
        return self

    def merge(self, other: "BumpAggregate") -> "BumpAggregate":
        return BumpAggregate(
            objects_visited=self.objects_visited + other.objects_visited,
            major=self.major or other.major,
            minor=self.minor or other.minor,
            patch=self.patch or other.patch,
        )


def aggregate(commits: Iterable[CommitRecord], patterns: BumpPatterns) -> BumpAggregate:
    agg = BumpAggregate()
    for commit in commits:
        agg.record(classify(commit.message, patterns))
    return agg
