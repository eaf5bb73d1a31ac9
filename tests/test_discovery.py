"""Tests for perch.manifest.discovery — filesystem route discovery."""

from pathlib import Path

import pytest

from perch.config import ManifestConfig
from perch.errors import ConfigurationError, MissingIndexError, RouteClashError, RouteSyntaxError
from perch.manifest.discovery import create_manifest_data
from perch.manifest.types import DEFAULT_ERROR, DEFAULT_LAYOUT, ManifestData
from perch.routing.router import Router

# ---------------------------------------------------------------------------
# Test helpers
# ---------------------------------------------------------------------------


def _tree(root: Path, *files: str) -> Path:
    """Create empty files (and their parent directories) under *root*."""
    for file in files:
        path = root / file
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("", encoding="utf-8")
    return root


def _compile(root: Path, *files: str, **kwargs: object) -> ManifestData:
    return create_manifest_data(_tree(root, *files), **kwargs)  # type: ignore[arg-type]


def _page_files(manifest: ManifestData) -> list[str]:
    return [page.file for page in manifest.pages]


def _chain(manifest: ManifestData, file: str) -> list[str]:
    page = next(p for p in manifest.pages if p.file == file)
    return [part.component.name for part in page.parts]


# ---------------------------------------------------------------------------
# End-to-end scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_static_beats_catch_all(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "index.html", "about.html", "[slug].html")

        assert _page_files(manifest) == ["index.html", "about.html", "[slug].html"]
        router = Router(manifest)
        assert router.match_page("/").route.file == "index.html"
        assert router.match_page("/about").route.file == "about.html"
        assert router.match_page("/about/").route.file == "about.html"
        match = router.match_page("/anything-else")
        assert match.route.file == "[slug].html"
        assert match.params == {"slug": "anything-else"}

    def test_qualified_param_ranks_first(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, r"posts/[id(\d+)].html", "posts/[slug].html")

        assert _page_files(manifest) == [r"posts/[id(\d+)].html", "posts/[slug].html"]
        router = Router(manifest)
        numeric = router.match_page("/posts/42")
        assert numeric.route.file == r"posts/[id(\d+)].html"
        assert numeric.params == {"id": "42"}
        word = router.match_page("/posts/hello")
        assert word.route.file == "posts/[slug].html"
        assert word.params == {"slug": "hello"}

    def test_nested_layout_chain(self, tmp_path: Path) -> None:
        manifest = _compile(
            tmp_path,
            "outer/_layout.html",
            "outer/inner/_layout.html",
            "outer/inner/page.html",
        )

        page = manifest.pages[0]
        assert [part.component.type for part in page.parts] == ["layout", "layout", "page"]
        assert [part.component.file for part in page.parts] == [
            "outer/_layout.html",
            "outer/inner/_layout.html",
            "outer/inner/page.html",
        ]
        assert _chain(manifest, "outer/inner/page.html") == [
            "outer__layout",
            "outer_inner__layout",
            "outer_inner_page",
        ]

    def test_clashing_pages(self, tmp_path: Path) -> None:
        with pytest.raises(RouteClashError) as exc_info:
            _compile(tmp_path, "blog.html", "blog/index.html")
        assert set(exc_info.value.files) == {"blog.html", "blog/index.html"}
        assert "blog.html" in str(exc_info.value)
        assert "blog/index.html" in str(exc_info.value)

    def test_renaming_breaks_the_clash(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "blog.html", "blog/index-archive.html")
        assert len(manifest.pages) == 2

    def test_adjacent_params_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(RouteSyntaxError) as exc_info:
            _compile(tmp_path, "[a][b].html")
        assert exc_info.value.file == "[a][b].html"


# ---------------------------------------------------------------------------
# Root components
# ---------------------------------------------------------------------------


class TestRootComponents:
    def test_defaults_when_absent(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "index.html")
        assert manifest.root is DEFAULT_LAYOUT
        assert manifest.error is DEFAULT_ERROR
        assert manifest.root.default is True
        assert manifest.error.default is True

    def test_explicit_root_layout_and_error(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "_layout.svelte", "_error.svelte", "index.svelte")
        assert manifest.root.name == "main"
        assert manifest.root.file == "_layout.svelte"
        assert manifest.root.type == "layout"
        assert manifest.root.default is False
        assert manifest.error.name == "error"
        assert manifest.error.file == "_error.svelte"
        assert manifest.error.type == "error"

    def test_root_components_not_in_registry(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "_layout.html", "index.html")
        assert [c.file for c in manifest.components] == ["index.html"]
        assert _chain(manifest, "index.html") == ["index"]

    def test_entry_points(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "_layout.html", "index.html", "api.py")
        assert manifest.entry_points() == ["_layout.html", "index.html"]


# ---------------------------------------------------------------------------
# Filtering
# ---------------------------------------------------------------------------


class TestFiltering:
    def test_underscore_files_ignored(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "_private.html", "_helpers.py", "_components/x.html", "a.html")
        assert _page_files(manifest) == ["a.html"]
        assert manifest.server_routes == ()

    def test_default_page_kept(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "blog/_default.html")
        page = manifest.pages[0]
        assert page.file == "blog/_default.html"
        assert page.component.name == "blog_index"
        assert page.pattern.match("/blog") == {}

    def test_default_directory_walked(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "_default/x.html", "_other/y.html", "_default.py")
        assert _page_files(manifest) == ["_default/x.html"]
        assert manifest.pages[0].pattern.match("/_default/x") == {}
        assert manifest.server_routes == ()

    def test_dotfiles_ignored(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, ".hidden.html", ".cache/x.html", "a.html")
        assert _page_files(manifest) == ["a.html"]

    def test_well_known_kept(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, ".well-known/security.txt")
        router = Router(manifest)
        assert router.match_server_route("/.well-known/security.txt").route.file == (
            ".well-known/security.txt"
        )

    def test_temp_files_ignored(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "a.html", "a.html~", "a.html.swp1", "README")
        assert _page_files(manifest) == ["a.html"]
        assert manifest.server_routes == ()


# ---------------------------------------------------------------------------
# Index handling and server routes
# ---------------------------------------------------------------------------


class TestIndexAndServerRoutes:
    def test_index_maps_to_directory(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "blog/index.html", "blog/[slug].html")
        assert _page_files(manifest) == ["blog/index.html", "blog/[slug].html"]
        assert Router(manifest).match_page("/blog").route.file == "blog/index.html"

    def test_index_suffix_extends_parent_segment(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "blog/index.json.py", "blog/[slug].json.py")
        router = Router(manifest)
        assert router.match_server_route("/blog.json").route.file == "blog/index.json.py"
        match = router.match_server_route("/blog/hello.json")
        assert match.route.file == "blog/[slug].json.py"
        assert match.params == {"slug": "hello"}

    def test_index_suffix_after_dynamic_segment(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "[user]/index.json.py")
        match = Router(manifest).match_server_route("/alice.json")
        assert match.params == {"user": "alice"}
        assert match.route.params == ("user",)

    def test_index_suffix_with_param(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "blog/index-[x].json.py")
        route = manifest.server_routes[0]
        assert route.params == ("x",)
        assert route.pattern.params == ("x",)
        assert route.pattern.match("/blog-hello.json") == {"x": "hello"}
        assert route.pattern.match("/blog.json") is None

    def test_root_index_server_route(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "index.json.py")
        assert Router(manifest).match_server_route("/index.json").route.file == "index.json.py"

    def test_server_route_names(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "api/items.py", "api/[id].py")
        assert [r.name for r in manifest.server_routes] == ["route_api_items", "route_api_$id"]

    def test_server_route_has_no_trailing_slash(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "api/items.py")
        router = Router(manifest)
        assert router.match_server_route("/api/items").route.file == "api/items.py"
        assert manifest.server_routes[0].pattern.match("/api/items/") is None

    def test_clashing_server_routes(self, tmp_path: Path) -> None:
        with pytest.raises(RouteClashError, match="routes clash"):
            _compile(tmp_path, "api/[a].py", "api/[b].py")

    def test_custom_extensions(self, tmp_path: Path) -> None:
        manifest = _compile(
            tmp_path,
            "a.svelte",
            "b.html",
            config=ManifestConfig(component_extensions=(".svelte",)),
        )
        assert _page_files(manifest) == ["a.svelte"]
        assert [r.file for r in manifest.server_routes] == ["b.html"]


# ---------------------------------------------------------------------------
# Ancestor chains and parameters
# ---------------------------------------------------------------------------


class TestChains:
    def test_missing_intermediate_index(self, tmp_path: Path) -> None:
        with pytest.raises(MissingIndexError) as exc_info:
            _compile(tmp_path, "a/b/index.html", "a/b/[id].html")
        assert exc_info.value.missing.startswith("a/index")
        assert exc_info.value.dependent == "a/b/index.html"

    def test_adding_intermediate_index_fixes_it(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "a/index.html", "a/b/index.html", "a/b/[id].html")
        assert _page_files(manifest) == ["a/index.html", "a/b/index.html", "a/b/[id].html"]
        assert _chain(manifest, "a/b/[id].html") == ["a_b_$id"]

    def test_intermediate_layout_also_satisfies(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "a/_layout.html", "a/b/[id].html")
        assert _chain(manifest, "a/b/[id].html") == ["a__layout", "a_b_$id"]

    def test_page_in_layoutless_directory(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "blog/[slug].html")
        page = manifest.pages[0]
        assert len(page.parts) == 1
        assert page.parts[0].params == ("slug",)

    def test_params_per_level(self, tmp_path: Path) -> None:
        manifest = _compile(
            tmp_path,
            "[org]/_layout.html",
            "[org]/[repo]/_layout.html",
            "[org]/[repo]/issues/[num(\\d+)].html",
            "[org]/[repo]/issues/index.html",
        )
        page = next(p for p in manifest.pages if p.file.endswith("].html") and "num" in p.file)
        assert [part.params for part in page.parts] == [("org",), ("repo",), ("num",)]
        assert page.params == ("org", "repo", "num")
        match = Router(manifest).match_page("/acme/rocket/issues/7")
        assert match.params == {"org": "acme", "repo": "rocket", "num": "7"}

    def test_params_carried_past_removed_levels(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "[org]/index.html", "[org]/[repo]/index.html")
        page = next(p for p in manifest.pages if p.file == "[org]/[repo]/index.html")
        assert len(page.parts) == 1
        assert page.parts[0].params == ("org", "repo")
        assert page.params == ("org", "repo")

    def test_siblings_do_not_share_params(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "[a]/x.html", "b/y.html")
        pages = {p.file: p for p in manifest.pages}
        assert pages["[a]/x.html"].params == ("a",)
        assert pages["b/y.html"].params == ()


# ---------------------------------------------------------------------------
# Components and determinism
# ---------------------------------------------------------------------------


class TestComponents:
    def test_preload_flag(self, tmp_path: Path) -> None:
        manifest = _compile(
            tmp_path,
            "about.html",
            "contact.html",
            preload=lambda path: path.name == "about.html",
        )
        flags = {c.file: c.has_preload for c in manifest.components}
        assert flags == {"about.html": True, "contact.html": False}

    def test_default_preload_detector_reads_source(self, tmp_path: Path) -> None:
        _tree(tmp_path, "index.svelte")
        (tmp_path / "index.svelte").write_text(
            '<script context="module">export function preload() {}</script>',
            encoding="utf-8",
        )
        manifest = create_manifest_data(tmp_path)
        assert manifest.components[0].has_preload is True

    def test_component_name_clash(self, tmp_path: Path) -> None:
        with pytest.raises(RouteClashError, match="components clash"):
            _compile(tmp_path, "a.b.html", "a_b.html")

    def test_root_layout_name_clash(self, tmp_path: Path) -> None:
        with pytest.raises(RouteClashError, match="The _layout.html and main.html components clash"):
            _compile(tmp_path, "_layout.html", "main.html")

    def test_root_error_name_clash(self, tmp_path: Path) -> None:
        with pytest.raises(RouteClashError, match="components clash"):
            _compile(tmp_path, "_error.html", "error.html")

    def test_default_root_does_not_clash(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "main.html", "error.html")
        assert sorted(c.name for c in manifest.components) == ["error", "main"]

    def test_ranks_follow_order(self, tmp_path: Path) -> None:
        manifest = _compile(tmp_path, "index.html", "about.html", "[slug].html", "x.py", "y.py")
        assert [p.rank for p in manifest.pages] == [0, 1, 2]
        assert [r.rank for r in manifest.server_routes] == [0, 1]

    def test_identical_trees_compile_identically(self, tmp_path: Path) -> None:
        files = ("index.html", "blog/index.html", "blog/[slug].html", "[a]-[b].html", "api/[id].py")
        first = _compile(tmp_path / "one", *files)
        second = _compile(tmp_path / "two", *files)
        assert [str(p.pattern) for p in first.pages] == [str(p.pattern) for p in second.pages]
        assert [str(r.pattern) for r in first.server_routes] == [
            str(r.pattern) for r in second.server_routes
        ]

    def test_missing_routes_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Routes directory not found"):
            create_manifest_data(tmp_path / "nope")
