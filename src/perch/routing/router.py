"""First-match-wins lookup over a compiled manifest.

Pages and server routes are tried in manifest order, which is
specificity order, so ``/about`` reaches ``about.html`` before
``[slug].html`` ever sees it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Generic, TypeVar

from perch.errors import NotFound

if TYPE_CHECKING:
    from perch.manifest.types import ManifestData, Page, ServerRoute

logger = logging.getLogger("perch.routing")

R = TypeVar("R")


@dataclass(frozen=True, slots=True)
class RouteMatch(Generic[R]):
    """Result of a successful match: the route and its decoded parameters."""

    route: R
    params: dict[str, str]


class Router:
    """Path matcher over a :class:`ManifestData`.

    Usage::

        router = Router(create_manifest_data("src/routes"))
        match = router.match_page("/blog/hello")
        match.route.file, match.params   # "blog/[slug].svelte", {"slug": "hello"}
    """

    __slots__ = ("_manifest",)

    def __init__(self, manifest: ManifestData) -> None:
        self._manifest = manifest

    @property
    def manifest(self) -> ManifestData:
        return self._manifest

    def match_page(self, path: str) -> RouteMatch[Page]:
        """Return the first page whose pattern matches *path*.

        Raises ``NotFound`` if no page matches.
        """
        for page in self._manifest.pages:
            params = page.pattern.match(path)
            if params is not None:
                logger.debug("%s matched page %s", path, page.file)
                return RouteMatch(route=page, params=params)
        raise NotFound(path)

    def match_server_route(self, path: str) -> RouteMatch[ServerRoute]:
        """Return the first server route whose pattern matches *path*.

        Raises ``NotFound`` if no server route matches.
        """
        for route in self._manifest.server_routes:
            params = route.pattern.match(path)
            if params is not None:
                logger.debug("%s matched server route %s", path, route.file)
                return RouteMatch(route=route, params=params)
        raise NotFound(path)
