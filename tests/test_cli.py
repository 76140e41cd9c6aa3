"""Tests for the marketgen command line."""

import pytest

from marketgen.cli import build_parser, main


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    monkeypatch.delenv("MARKETGEN_REPO_ROOT", raising=False)
    monkeypatch.delenv("MARKETGEN_CATALOG_PATH", raising=False)


def _run(*argv) -> int:
    with pytest.raises(SystemExit) as exc:
        main(list(argv))
    return exc.value.code


class TestParser:
    """Tests for argument parsing."""

    def test_no_command(self):
        args = build_parser().parse_args([])
        assert args.subcmd is None
        assert args.workers == 1

    def test_rejects_zero_workers(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--workers", "0"])


class TestMain:
    """Tests for exit codes."""

    def test_default_generates(self, repo):
        """Test running with no command regenerates the catalog."""
        repo.catalog(version="1.0.0")
        repo.plugin("alpha", {"name": "alpha"})

        assert _run("--root", str(repo.root)) == 0
        assert repo.read_catalog()["version"] == "1.0.1"

    def test_no_changes_exits_zero(self, repo):
        repo.catalog(version="1.0.0")
        repo.plugin("alpha", {"name": "alpha"})

        assert _run("--root", str(repo.root), "generate") == 0
        assert _run("--root", str(repo.root), "generate") == 0
        assert repo.read_catalog()["version"] == "1.0.1"

    def test_missing_name_exits_zero(self, repo):
        repo.catalog(version="1.0.0")
        repo.plugin("alpha", {"name": "alpha"})
        repo.plugin("wip", {})

        assert _run("--root", str(repo.root), "--quiet") == 0
        assert [p["name"] for p in repo.read_catalog()["plugins"]] == ["alpha"]

    @pytest.mark.parametrize(
        "plugins",
        [
            {},
            {"one": {"name": "foo"}, "two": {"name": "foo"}},
            {"bad": "{"},
        ],
    )
    def test_fatal_exits_one(self, repo, plugins):
        """Test no manifests, duplicates and parse errors exit 1 without writing."""
        original = repo.catalog(version="1.0.0").read_bytes()
        for directory, manifest in plugins.items():
            repo.plugin(directory, manifest)

        assert _run("--root", str(repo.root)) == 1
        assert repo.catalog_file.read_bytes() == original

    def test_bad_version_exits_one(self, repo):
        repo.catalog(version="1.0")
        repo.plugin("alpha", {"name": "alpha"})

        assert _run("--root", str(repo.root)) == 1

    def test_check(self, repo):
        """Test check fails when stale and passes after generate."""
        repo.catalog(version="1.0.0")
        repo.plugin("alpha", {"name": "alpha"})

        assert _run("--root", str(repo.root), "check") == 1
        assert _run("--root", str(repo.root), "generate") == 0
        assert _run("--root", str(repo.root), "check") == 0

    def test_list_and_status(self, repo):
        repo.catalog(version="1.0.0")
        repo.plugin("alpha", {"name": "alpha", "description": "Alpha"})

        assert _run("--root", str(repo.root), "list") == 0
        assert _run("--root", str(repo.root), "status") == 0
        assert "plugins" not in repo.read_catalog()

    def test_custom_catalog_path(self, repo):
        from marketgen.catalog.models import Catalog

        path = repo.root / "meta" / "catalog.json"
        path.parent.mkdir()
        path.write_bytes(Catalog(header={"name": "m", "version": "0.1.0"}).serialize())
        repo.plugin("alpha", {"name": "alpha"})

        assert _run("--root", str(repo.root), "--catalog", "meta/catalog.json") == 0
        assert b'"version": "0.1.1"' in path.read_bytes()


class TestMarkupInValues:
    """Catalog and manifest text is printed literally, never as console markup."""

    @pytest.fixture
    def wide_console(self, monkeypatch):
        from marketgen.catalog import commands

        monkeypatch.setattr(commands.console, "width", 500)
        return commands.console

    def test_status_with_bracketed_name(self, repo, wide_console):
        repo.catalog(name="[/x] market", version="[/y]")

        with wide_console.capture() as captured:
            assert _run("--root", str(repo.root), "status") == 0

        assert "[/x] market" in captured.get()
        assert "[/y]" in captured.get()

    def test_list_with_bracketed_fields(self, repo, wide_console):
        repo.catalog(version="1.0.0")
        repo.plugin("[red]alpha", {"name": "alpha", "description": "[/bold] docs"})

        with wide_console.capture() as captured:
            assert _run("--root", str(repo.root), "list") == 0

        assert "[/bold] docs" in captured.get()
        assert "./[red]alpha" in captured.get()

    def test_check_with_bracketed_root(self, repo, wide_console):
        repo = type(repo)(repo.root / "[red]repo")
        repo.catalog(version="1.0.0")
        repo.plugin("alpha", {"name": "alpha"})

        with wide_console.capture() as captured:
            assert _run("--root", str(repo.root), "check") == 1
        assert "[red]repo" in captured.get()

        assert _run("--root", str(repo.root), "generate") == 0
        with wide_console.capture() as captured:
            assert _run("--root", str(repo.root), "check") == 0
        assert "[red]repo" in captured.get()
