"""Filesystem route discovery for the routes/ directory.

Walks the routes directory tree and discovers:
- ``_layout.<ext>`` files as per-directory wrapping components
- ``_error.<ext>`` at the root as the error component
- component files (``.svelte``, ``.html`` by default) as pages
- every other file as a server route

Bracketed names (``[slug]``, ``[id(\\d+)]``) become path parameters.
``index.<ext>`` maps to the directory URL; ``index.json.py`` extends the
directory segment (``/blog.json``).  Siblings are visited
most-specific-first, so emission order is matching order.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from perch.config import ManifestConfig
from perch.errors import ConfigurationError
from perch.manifest.assemble import assemble_manifest
from perch.manifest.preload import PreloadDetector, has_preload
from perch.manifest.types import (
    DEFAULT_ERROR,
    DEFAULT_LAYOUT,
    ChainEntry,
    ManifestData,
    MissingLevel,
    PageComponent,
    PagePart,
    PendingPage,
    ServerRoute,
)
from perch.routing.compare import sort_entries
from perch.routing.parts import Part, param_names, parse_segment
from perch.routing.pattern import compile_pattern
from perch.routing.slug import get_slug, posixify

logger = logging.getLogger("perch.manifest")

# Filters out editor temp files and extension-less files
_EXT_RE = re.compile(r"^\.[a-z]+$", re.IGNORECASE)

# "index", "index.json", "index-foo"
_INDEX_RE = re.compile(r"^index(?=$|[.\-])")


@dataclass(frozen=True, slots=True)
class FileEntry:
    """One item of a directory listing, parsed for routing.

    Attributes:
        basename: Name as listed, including any extension.
        ext: Extension (``""`` for directories).
        parts: Parsed segment of the extension-less name.
        file: POSIX path relative to the routes directory.
        is_dir: Whether the entry is a directory.
        is_index: Whether the entry folds into its parent segment.
        is_page: Whether the entry is a component file.
    """

    basename: str
    ext: str
    parts: tuple[Part, ...]
    file: str
    is_dir: bool
    is_index: bool
    is_page: bool

    @property
    def stem(self) -> str:
        return self.basename[: -len(self.ext)] if self.ext else self.basename


@dataclass(slots=True)
class _Found:
    """Accumulator for everything the walk emits."""

    components: list[PageComponent] = field(default_factory=list)
    pages: list[PendingPage] = field(default_factory=list)
    server_routes: list[ServerRoute] = field(default_factory=list)


def create_manifest_data(
    routes_dir: str | Path,
    config: ManifestConfig | None = None,
    *,
    preload: PreloadDetector = has_preload,
) -> ManifestData:
    """Walk a routes directory and compile its route manifest.

    Args:
        routes_dir: Path to the ``routes/`` directory.
        config: Naming conventions; defaults to :class:`ManifestConfig`.
        preload: Decides whether a component file exports ``preload``.

    Returns:
        The assembled :class:`ManifestData`.

    Raises:
        ConfigurationError: *routes_dir* is not a directory.
        RouteSyntaxError: A file or directory name has invalid brackets.
        MissingIndexError: A page sits below an intermediate directory that
            has neither a layout nor an index page.
        RouteClashError: Two pages, two server routes, or two components
            resolve to the same pattern or name.
    """
    root = Path(routes_dir).resolve()
    if not root.is_dir():
        msg = f"Routes directory not found: {root}"
        raise ConfigurationError(msg)

    config = config or ManifestConfig()

    root_component = _root_component(root, config, config.layout_basename, "main", preload)
    error_component = _root_component(root, config, config.error_basename, "error", preload)

    found = _Found()
    _walk_directory(
        root,
        root,
        config=config,
        preload=preload,
        parent_segments=(),
        parent_params=(),
        stack=(),
        found=found,
    )

    return assemble_manifest(
        root=root_component or DEFAULT_LAYOUT,
        error=error_component or DEFAULT_ERROR,
        components=found.components,
        pages=found.pages,
        server_routes=found.server_routes,
    )


def _root_component(
    root: Path,
    config: ManifestConfig,
    basename: str,
    name: str,
    preload: PreloadDetector,
) -> PageComponent | None:
    """Build the root layout/error component, or None if the file is absent."""
    ext = _find_component(root, basename, config)
    if ext is None:
        return None
    file = f"{basename}{ext}"
    return PageComponent(
        name=name,
        file=file,
        has_preload=preload(root / file),
        type="layout" if basename == config.layout_basename else "error",
    )


def _find_component(directory: Path, stem: str, config: ManifestConfig) -> str | None:
    """Return the first component extension for which ``<stem><ext>`` exists."""
    for ext in config.component_extensions:
        if (directory / f"{stem}{ext}").is_file():
            return ext
    return None


def _walk_directory(
    directory: Path,
    root: Path,
    *,
    config: ManifestConfig,
    preload: PreloadDetector,
    parent_segments: tuple[tuple[Part, ...], ...],
    parent_params: tuple[str, ...],
    stack: tuple[ChainEntry, ...],
    found: _Found,
) -> None:
    """Recursively walk a directory, emitting pages, routes, and layouts.

    Accumulators are tuples, so each recursive call receives its own
    copy and siblings never see each other's contributions.

    Args:
        directory: Current directory being walked.
        root: Root routes directory (for computing relative paths).
        config: Naming conventions.
        preload: Preload detector for component files.
        parent_segments: Path segments accumulated so far.
        parent_params: Parameter names accumulated so far.
        stack: Ancestor chain from the outermost directory down.
        found: Accumulator for emitted components, pages, and routes.
    """
    for entry in _list_entries(directory, root, config):
        segments = list(parent_segments)

        if entry.is_index and segments:
            suffix = _index_suffix(entry.parts)
            if suffix:
                segments[-1] = _extend_segment(segments[-1], suffix)
        else:
            segments.append(entry.parts)

        level_params = param_names(entry.parts)
        params = (*parent_params, *level_params)

        if entry.is_dir:
            subdir = directory / entry.basename
            level = _directory_level(subdir, entry, root, config, preload, level_params, found)
            _walk_directory(
                subdir,
                root,
                config=config,
                preload=preload,
                parent_segments=tuple(segments),
                parent_params=params,
                stack=(*stack, level),
                found=found,
            )

        elif entry.is_page:
            component = PageComponent(
                name=get_slug(entry.file),
                file=entry.file,
                has_preload=preload(root / entry.file),
                type="page",
            )
            found.components.append(component)

            # The directory URL itself: compiled from the parent segments
            is_directory_page = entry.stem in ("index", config.default_basename)

            if stack and isinstance(stack[-1], MissingLevel):
                # A page stands in for its own directory's missing layout;
                # only intermediate directories must have an index page.
                absent = stack[-1]
                chain = (*stack[:-1], PagePart(component, (*absent.params, *level_params)))
            else:
                chain = (*stack, PagePart(component, level_params))

            pattern = compile_pattern(
                list(parent_segments) if is_directory_page else segments,
                trailing_slash=True,
            )
            found.pages.append(PendingPage(pattern=pattern, chain=chain))
            logger.debug("page %s -> %s", entry.file, pattern)

        else:
            pattern = compile_pattern(segments, trailing_slash=False)
            found.server_routes.append(
                ServerRoute(
                    name=f"route_{get_slug(entry.file)}",
                    pattern=pattern,
                    file=entry.file,
                    params=params,
                )
            )
            logger.debug("server route %s -> %s", entry.file, pattern)


def _directory_level(
    subdir: Path,
    entry: FileEntry,
    root: Path,
    config: ManifestConfig,
    preload: PreloadDetector,
    level_params: tuple[str, ...],
    found: _Found,
) -> ChainEntry:
    """The ancestor-chain entry a subdirectory contributes.

    Its ``_layout`` component if it has one, otherwise a placeholder
    recording whether the directory at least has an index page.
    """
    ext = _find_component(subdir, config.layout_basename, config)
    if ext is not None:
        file = f"{entry.file}/{config.layout_basename}{ext}"
        component = PageComponent(
            name=f"{get_slug(entry.file)}__layout",
            file=file,
            has_preload=preload(root / file),
            type="layout",
        )
        found.components.append(component)
        return PagePart(component, level_params)

    index_ext = _find_component(subdir, "index", config)
    return MissingLevel(
        file=f"{entry.file}/index{index_ext or config.component_extensions[0]}",
        has_index=index_ext is not None,
        params=level_params,
    )


def _index_suffix(parts: tuple[Part, ...]) -> tuple[Part, ...]:
    """The parts of an index name after the leading ``index``.

    ``index.json`` -> ``(".json",)``; ``index-[x].json`` -> ``("-", [x], ".json")``.
    ``_default`` and bare ``index`` have no suffix.
    """
    if not parts or parts[0].dynamic or not parts[0].content.startswith("index"):
        return ()
    rest = parts[0].content[len("index") :]
    head = (Part(rest),) if rest else ()
    return (*head, *parts[1:])


def _extend_segment(segment: tuple[Part, ...], suffix: tuple[Part, ...]) -> tuple[Part, ...]:
    """Merge *suffix* onto the end of *segment*.

    A leading static suffix part joins a trailing static part; dynamic
    parts stay dynamic.
    """
    last = segment[-1]
    first = suffix[0]
    if not last.dynamic and not first.dynamic:
        return (*segment[:-1], Part(last.content + first.content), *suffix[1:])
    return (*segment, *suffix)


def _list_entries(directory: Path, root: Path, config: ManifestConfig) -> list[FileEntry]:
    """List, filter, parse, and sort the routable entries of *directory*."""
    entries: list[FileEntry] = []
    for item in sorted(directory.iterdir()):
        entry = _make_entry(item, root, config)
        if entry is not None:
            entries.append(entry)
    return sort_entries(entries)


def _make_entry(item: Path, root: Path, config: ManifestConfig) -> FileEntry | None:
    """Build a FileEntry for *item*, or None if it is not routable."""
    basename = item.name
    is_dir = item.is_dir()
    ext = "" if is_dir else item.suffix

    if not is_dir and not _EXT_RE.match(ext):
        return None

    stem = basename[: -len(ext)] if ext else basename
    is_page = not is_dir and config.is_component(ext)

    if basename.startswith("_"):
        # _default/ and _default.<ext> are the only walked underscore names
        if stem != config.default_basename or not (is_dir or is_page):
            return None

    if basename.startswith(".") and basename not in config.allowed_dotfiles:
        return None

    file = posixify(str(item.relative_to(root)))
    parts = parse_segment(basename if is_dir else stem, file=file)

    return FileEntry(
        basename=basename,
        ext=ext,
        parts=parts,
        file=file,
        is_dir=is_dir,
        is_index=not is_dir and (bool(_INDEX_RE.match(stem)) or stem == config.default_basename),
        is_page=is_page,
    )
