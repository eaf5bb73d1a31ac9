"""Manifest compiler configuration.

ManifestConfig is a frozen dataclass: immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

from dataclasses import dataclass

from perch.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class ManifestConfig:
    """Naming conventions used when walking a routes directory.

    All fields have sensible defaults. Override what you need::

        config = ManifestConfig(component_extensions=(".svelte",))
    """

    # Files with these extensions are page/layout/error components;
    # anything else under the routes tree is a server route.
    component_extensions: tuple[str, ...] = (".svelte", ".html")

    # Per-directory wrapping components
    layout_basename: str = "_layout"
    error_basename: str = "_error"

    # The one underscore-prefixed name that is still walked
    default_basename: str = "_default"

    # Dotfiles that are routed rather than ignored
    allowed_dotfiles: tuple[str, ...] = (".well-known",)

    def __post_init__(self) -> None:
        if not self.component_extensions:
            msg = "component_extensions must name at least one extension."
            raise ConfigurationError(msg)
        for ext in self.component_extensions:
            if not ext.startswith(".") or len(ext) < 2:
                msg = f"Component extension {ext!r} must look like '.html'."
                raise ConfigurationError(msg)
        for name in (self.layout_basename, self.error_basename, self.default_basename):
            if not name.startswith("_"):
                msg = f"Special basename {name!r} must start with '_'."
                raise ConfigurationError(msg)

    def is_component(self, ext: str) -> bool:
        """Return True if *ext* names a page/layout/error component file."""
        return ext in self.component_extensions
