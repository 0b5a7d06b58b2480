"""Read-only access to a git repository through the ``git`` command line."""
import logging
import pathlib
import subprocess

from .errors import RepositoryAccessError

logger = logging.getLogger("nextver")


class GitRepository:
    def __init__(self, path: str | pathlib.Path = "."):
        self.path = pathlib.Path(path)

    @classmethod
    def open(cls, path: str | pathlib.Path = ".") -> "GitRepository":
        repo = cls(path)
        if not repo.path.is_dir():
            raise RepositoryAccessError(f"Couldn't open git repository at {repo.path}")
        # bare mirrors have no work tree but walk the same
        repo._git("rev-parse", "--git-dir")
        return repo

    def _git(self, *args: str) -> str:
        cmd = ["git", *args]
        try:
            out = subprocess.run(
                cmd,
                cwd=self.path,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=True,
            )
        except FileNotFoundError as e:
            raise RepositoryAccessError("git executable not found", cmd) from e
        except subprocess.CalledProcessError as e:
            raise RepositoryAccessError(
                f"git {args[0]} failed in {self.path}", cmd, e.stderr
            ) from e
        return out.stdout.strip("\n")

    def list_tag_names(self) -> list[str]:
        out = self._git("tag", "--list")
        return [line for line in out.splitlines() if line]

    def resolve(self, ref: str) -> str:
        # peel annotated tags down to the commit they point at
        return self._git("rev-parse", "--verify", "--quiet", f"{ref}^{{commit}}")

    def current_head(self) -> str:
        return self.resolve("HEAD")

    def root_commit(self, start: str) -> str:
        roots = self._git("rev-list", "--max-parents=0", start).splitlines()
        if not roots:
            raise RepositoryAccessError(f"no root commit reachable from {start}")
        # rev-list lists newest first; the oldest root is the one history started from
        return roots[-1]

    def walk(self, start: str, exclude: str | None = None) -> list[str]:
        """Commits reachable from ``start`` but not from ``exclude``, oldest first.

        Parents always come before their children; otherwise commits follow
        commit-time order.
        """
        args = ["rev-list", "--date-order", "--reverse", start]
        if exclude:
            args.append(f"^{exclude}")
        return [line for line in self._git(*args).splitlines() if line]

    def read_message(self, commit_id: str) -> str:
        return self._git("log", "-1", "--format=%B", commit_id).rstrip("\n")
