"""Tests for the dagpath command line interface."""

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from dagpath import Edge, ShortestPathRequest, dump_request, load_request
from dagpath._cli.main import app

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run inside an empty project so no outer pyproject.toml is picked up."""
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'maps'\n")
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def request_file(workdir: Path) -> Path:
    path = workdir / "map.bin"
    request = ShortestPathRequest(
        source=1,
        destination=3,
        edges=(
            Edge(source=1, target=2, weight=1),
            Edge(source=2, target=3, weight=2),
            Edge(source=1, target=3, weight=9),
        ),
    )
    dump_request(request, path)
    return path


@pytest.fixture
def cyclic_file(workdir: Path) -> Path:
    path = workdir / "cycle.bin"
    request = ShortestPathRequest(
        source=0,
        destination=2,
        edges=(
            Edge(source=0, target=1, weight=1),
            Edge(source=1, target=2, weight=2),
            Edge(source=2, target=1, weight=3),
        ),
    )
    dump_request(request, path)
    return path


class TestSolveCommand:
    def test_exports_toml(self, request_file: Path, workdir: Path) -> None:
        output = workdir / "out" / "result.toml"
        result = runner.invoke(app, ["solve", str(request_file), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            data = tomllib.load(f)
        assert data == {"source": 1, "destination": 3, "reachable": True, "path": [1, 2, 3], "cost": 3}

    def test_json_output(self, request_file: Path) -> None:
        result = runner.invoke(app, ["solve", str(request_file), "--json"])

        assert result.exit_code == 0, result.output
        assert '"cost": 3' in result.output

    def test_unreachable_is_not_an_error(self, workdir: Path) -> None:
        path = workdir / "empty.bin"
        path.write_bytes(b"\x00\x00\x02\x00\x00\x00")

        result = runner.invoke(app, ["solve", str(path)])

        assert result.exit_code == 0, result.output
        assert "No path" in result.output

    def test_cycle_fails(self, cyclic_file: Path) -> None:
        result = runner.invoke(app, ["solve", str(cyclic_file)])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output

    def test_input_is_directory(self, workdir: Path) -> None:
        (workdir / "maps").mkdir()

        result = runner.invoke(app, ["solve", str(workdir / "maps")])

        assert result.exit_code == 1
        assert "Input file not found" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)

    def test_truncated_input_fails(self, workdir: Path) -> None:
        path = workdir / "short.bin"
        path.write_bytes(b"\x01\x00\x05")

        result = runner.invoke(app, ["solve", str(path)])

        assert result.exit_code == 1

    def test_capacity_too_small_fails(self, request_file: Path) -> None:
        result = runner.invoke(app, ["solve", str(request_file), "--capacity", "2"])

        assert result.exit_code == 1

    def test_missing_input_file(self, workdir: Path) -> None:
        result = runner.invoke(app, ["solve", str(workdir / "nope.bin")])

        assert result.exit_code == 1

    def test_uses_configured_paths(self, request_file: Path, workdir: Path) -> None:
        (workdir / "pyproject.toml").write_text(
            f'[tool.dagpath]\ninput = "{request_file.name}"\noutput = "result.toml"\n',
        )

        result = runner.invoke(app, ["solve"])

        assert result.exit_code == 0, result.output
        assert (workdir / "result.toml").is_file()

    def test_no_input_configured(self, workdir: Path) -> None:
        result = runner.invoke(app, ["solve"])

        assert result.exit_code == 1

    def test_invalid_config(self, request_file: Path, workdir: Path) -> None:
        (workdir / "pyproject.toml").write_text("[tool.dagpath]\nnode_capacity = 0\n")

        result = runner.invoke(app, ["solve", str(request_file)])

        assert result.exit_code == 1


class TestOrderCommand:
    def test_prints_order(self, request_file: Path) -> None:
        result = runner.invoke(app, ["order", str(request_file)])

        assert result.exit_code == 0, result.output
        assert "0 1 2 3" in result.output

    def test_cycle_fails(self, cyclic_file: Path) -> None:
        result = runner.invoke(app, ["order", str(cyclic_file)])

        assert result.exit_code == 1


class TestInfoCommand:
    def test_shows_graph(self, request_file: Path) -> None:
        result = runner.invoke(app, ["info", str(request_file)])

        assert result.exit_code == 0, result.output
        assert "unreached" in result.output
        assert "4 nodes, 3 edges" in result.output


class TestEncodeCommand:
    def test_encodes_toml(self, workdir: Path) -> None:
        source = workdir / "map.toml"
        source.write_text("source = 1\ndestination = 5\nedges = [[1, 5, 2]]\n")
        output = workdir / "map.bin"

        result = runner.invoke(app, ["encode", str(source), "-o", str(output)])

        assert result.exit_code == 0, result.output
        request = load_request(output)
        assert request.destination == 5
        assert request.edges == (Edge(source=1, target=5, weight=2),)

    def test_missing_source_file(self, workdir: Path) -> None:
        result = runner.invoke(app, ["encode", str(workdir / "nope.toml"), "-o", str(workdir / "map.bin")])

        assert result.exit_code == 1
        assert "Input file not found" in result.output
        assert result.exception is None or isinstance(result.exception, SystemExit)
        assert not (workdir / "map.bin").exists()

    def test_rejects_out_of_range_weight(self, workdir: Path) -> None:
        source = workdir / "map.toml"
        source.write_text("source = 1\ndestination = 5\nedges = [[1, 5, 70000]]\n")

        result = runner.invoke(app, ["encode", str(source), "-o", str(workdir / "map.bin")])

        assert result.exit_code == 1
        assert not (workdir / "map.bin").exists()
