"""Repository declarations shared by every module."""

from __future__ import annotations

from typing import TYPE_CHECKING

from logs import get_logger
from project.errors import UnknownRepository
from project.models import RepositoryReference

if TYPE_CHECKING:
    from collections.abc import Iterable

logger = get_logger(__name__)

WELL_KNOWN_REPOSITORIES: dict[str, str] = {
    "jcenter": "https://jcenter.bintray.com/",
    "mavenCentral": "https://repo.maven.apache.org/maven2/",
    "google": "https://dl.google.com/dl/android/maven2/",
    "gradlePluginPortal": "https://plugins.gradle.org/m2/",
    "mavenLocal": "~/.m2/repository/",
}


class RepositorySource:
    """Ordered set of repositories, keyed by name."""

    def __init__(self) -> None:
        self._repositories: dict[str, RepositoryReference] = {}

    def declare_repository(
        self, name: str, url: str | None = None
    ) -> RepositoryReference:
        """Declare a repository for all modules.

        Shorthand names such as ``jcenter`` get their canonical URL when no
        URL is given. Declaring a name again returns the first declaration.
        Reachability is never checked here.
        """
        existing = self._repositories.get(name)
        if existing is not None:
            return existing

        if url is None:
            url = WELL_KNOWN_REPOSITORIES.get(name)

        reference = RepositoryReference(name=name, url=url)
        self._repositories[name] = reference
        logger.debug("declared repository %s (%s)", name, url or "no url")
        return reference

    def names(self) -> tuple[str, ...]:
        return tuple(self._repositories)

    def all(self) -> tuple[RepositoryReference, ...]:
        return tuple(self._repositories.values())

    def resolve(
        self, names: Iterable[str], *, module: str | None = None
    ) -> tuple[RepositoryReference, ...]:
        """Return the declared repositories for ``names``.

        Raises:
            UnknownRepository: If any name was never declared.
        """
        resolved: list[RepositoryReference] = []
        for name in names:
            reference = self._repositories.get(name)
            if reference is None:
                raise UnknownRepository(name, module=module)
            resolved.append(reference)
        return tuple(resolved)

    def __contains__(self, name: object) -> bool:
        return name in self._repositories

    def __len__(self) -> int:
        return len(self._repositories)


__all__ = ["WELL_KNOWN_REPOSITORIES", "RepositorySource"]
