"""Data models for the compiled route manifest.

Immutable frozen dataclasses representing components, pages, and server
routes.  Built once per compilation by the directory walker and the
manifest assembler, then handed to the bundler and the request router.
"""

from dataclasses import dataclass
from typing import Literal

from perch.routing.pattern import CompiledPattern

ComponentType = Literal["layout", "error", "page"]


@dataclass(frozen=True, slots=True)
class PageComponent:
    """A layout, error, or page component file.

    Attributes:
        name: Unique identifier-safe slug.
        file: Path relative to the routes directory, ``None`` for defaults.
        has_preload: Whether the component exports a ``preload`` function.
        default: True for the built-in root layout/error stand-ins.
        type: ``"layout"``, ``"error"`` or ``"page"``.
    """

    name: str
    file: str | None
    has_preload: bool = False
    default: bool = False
    type: ComponentType = "page"


DEFAULT_LAYOUT = PageComponent(
    name="_default_layout",
    file=None,
    has_preload=False,
    default=True,
    type="layout",
)

DEFAULT_ERROR = PageComponent(
    name="_default_error",
    file=None,
    has_preload=False,
    default=True,
    type="error",
)


@dataclass(frozen=True, slots=True)
class PagePart:
    """One level of a page's ancestor chain.

    ``params`` are the parameter names introduced by this level's path
    segment, left to right.
    """

    component: PageComponent
    params: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class MissingLevel:
    """Placeholder for a directory with no ``_layout`` component.

    The level is valid only if the directory has its own index page
    (``has_index``); otherwise pages in its subdirectories are orphaned.
    Pages directly inside the directory replace the placeholder.
    """

    file: str
    has_index: bool
    params: tuple[str, ...] = ()


ChainEntry = PagePart | MissingLevel


@dataclass(frozen=True, slots=True)
class PendingPage:
    """A page as emitted by the walker, before chain validation."""

    pattern: CompiledPattern
    chain: tuple[ChainEntry, ...]

    @property
    def file(self) -> str:
        leaf = self.chain[-1]
        if isinstance(leaf, PagePart):
            return leaf.component.file or ""
        return leaf.file


@dataclass(frozen=True, slots=True)
class Page:
    """A routable page with its root-to-leaf component chain.

    Attributes:
        pattern: Compiled URL pattern.
        parts: Ancestor chain, outermost layout first, page component last.
        rank: Position in specificity order (0 = tried first).
    """

    pattern: CompiledPattern
    parts: tuple[PagePart, ...]
    rank: int = 0

    @property
    def component(self) -> PageComponent:
        return self.parts[-1].component

    @property
    def file(self) -> str:
        return self.component.file or ""

    @property
    def params(self) -> tuple[str, ...]:
        return self.pattern.params


@dataclass(frozen=True, slots=True)
class ServerRoute:
    """A non-component file under the routes directory (an endpoint)."""

    name: str
    pattern: CompiledPattern
    file: str
    params: tuple[str, ...]
    rank: int = 0


@dataclass(frozen=True, slots=True)
class ManifestData:
    """The compiled route table.

    ``pages`` and ``server_routes`` are in specificity order: a router
    must try them in sequence and take the first match.
    """

    root: PageComponent
    error: PageComponent
    components: tuple[PageComponent, ...]
    pages: tuple[Page, ...]
    server_routes: tuple[ServerRoute, ...]

    def entry_points(self) -> list[str]:
        """Component files a client bundle must include, root first."""
        files = [c.file for c in (self.root, self.error, *self.components)]
        return [f for f in files if f is not None]
