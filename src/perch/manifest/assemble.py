"""Post-walk validation and manifest assembly.

Runs once over everything the directory walker emitted:

1. Resolve each page's ancestor chain, failing on the first directory
   level (bottom-up) that has neither a layout nor an index page.
2. Reject two pages, or two server routes, with equal pattern text.
3. Reject two components sharing a generated name.
4. Number pages and server routes in specificity order.
"""

import logging
from collections.abc import Iterable
from dataclasses import replace

from perch.errors import MissingIndexError, RouteClashError
from perch.manifest.types import (
    ManifestData,
    MissingLevel,
    Page,
    PageComponent,
    PagePart,
    PendingPage,
    ServerRoute,
)

logger = logging.getLogger("perch.manifest")


def assemble_manifest(
    *,
    root: PageComponent,
    error: PageComponent,
    components: Iterable[PageComponent],
    pages: Iterable[PendingPage],
    server_routes: Iterable[ServerRoute],
) -> ManifestData:
    """Validate the walk's output and build the final :class:`ManifestData`.

    Raises:
        MissingIndexError: A page's chain contains an unsatisfied level.
        RouteClashError: Duplicate page patterns, server route patterns,
            or component names.
    """
    final_pages: list[Page] = []
    seen_pages: dict[str, Page] = {}
    for pending in pages:
        page = Page(pattern=pending.pattern, parts=resolve_chain(pending), rank=len(final_pages))
        key = str(page.pattern)
        other = seen_pages.get(key)
        if other is not None:
            raise RouteClashError(other.file, page.file, "pages")
        seen_pages[key] = page
        final_pages.append(page)

    final_routes: list[ServerRoute] = []
    seen_routes: dict[str, ServerRoute] = {}
    for route in server_routes:
        key = str(route.pattern)
        other_route = seen_routes.get(key)
        if other_route is not None:
            raise RouteClashError(other_route.file, route.file, "routes")
        route = replace(route, rank=len(final_routes))
        seen_routes[key] = route
        final_routes.append(route)

    final_components = tuple(components)
    _check_unique_names(
        tuple(c for c in (root, error) if not c.default) + final_components
    )
    _check_unique_route_names(final_routes)

    logger.info(
        "Compiled %d pages, %d server routes, %d components",
        len(final_pages),
        len(final_routes),
        len(final_components),
    )

    return ManifestData(
        root=root,
        error=error,
        components=final_components,
        pages=tuple(final_pages),
        server_routes=tuple(final_routes),
    )


def resolve_chain(pending: PendingPage) -> tuple[PagePart, ...]:
    """Turn a walker chain into a gap-free root-to-leaf component chain.

    Placeholders for layout-less directories that do have an index page
    are dropped, and their parameter names move onto the next entry down.
    """
    for entry in reversed(pending.chain):
        if isinstance(entry, MissingLevel) and not entry.has_index:
            raise MissingIndexError(entry.file, pending.file)

    parts: list[PagePart] = []
    carried: tuple[str, ...] = ()
    for entry in pending.chain:
        if isinstance(entry, MissingLevel):
            carried = (*carried, *entry.params)
            continue
        if carried:
            entry = PagePart(entry.component, (*carried, *entry.params))
            carried = ()
        parts.append(entry)
    return tuple(parts)


def _check_unique_names(components: tuple[PageComponent, ...]) -> None:
    seen: dict[str, PageComponent] = {}
    for component in components:
        other = seen.get(component.name)
        if other is not None:
            raise RouteClashError(other.file or other.name, component.file or component.name, "components")
        seen[component.name] = component


def _check_unique_route_names(routes: list[ServerRoute]) -> None:
    seen: dict[str, ServerRoute] = {}
    for route in routes:
        other = seen.get(route.name)
        if other is not None:
            raise RouteClashError(other.file, route.file, "routes")
        seen[route.name] = route
