"""Tests for the full pipeline."""

import io
from pathlib import Path

import pytest

from build_sources.models import DependencyDepthError, GeneratorConfig, MissingFileError
from build_sources.pipeline import run_pipeline, run_scan

FIXTURES = Path(__file__).parent / "fixtures"


def _write(root: Path, rel: str, text: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)
    return path


@pytest.fixture
def project(tmp_path, monkeypatch):
    """A small engine-like tree laid out under ./src."""
    _write(tmp_path, "src/main.cc", '#include "sys_main.hh"\n#include <renderer/gl.hh>\n#include <cstdio>\n')
    _write(tmp_path, "src/sys_main.hh", '#include "config.hh"\n')
    _write(tmp_path, "src/config.hh")
    _write(tmp_path, "src/renderer/gl.hh", '#include "../config.hh"\n')
    _write(tmp_path, "src/renderer/gl_state.c", '#include "gl.hh"\n')
    _write(tmp_path, "src/platform.windows/win_main.cc")
    _write(tmp_path, "src/platform.linux/x11_main.cc")
    _write(tmp_path, "src/old/exclude")
    _write(tmp_path, "src/old/legacy.cc")
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_scan(project):
    sources = run_scan(GeneratorConfig(targets=["linux"]))
    names = sorted(s.path.as_posix() for s in sources)
    assert names == [
        "src/main.cc",
        "src/platform.linux/x11_main.cc",
        "src/renderer/gl_state.c",
    ]


def test_full_pipeline(project):
    out = io.StringIO()
    config = GeneratorConfig(targets=["linux"], relative_to=project)
    sources = run_pipeline(config, out)
    text = out.getvalue()

    assert len(sources) == 3
    assert "SOURCES:=\\\n" in text
    assert "OBJECTS:=\\\n" in text
    assert "src/main.o: src/main.cc src/sys_main.hh src/config.hh src/renderer/gl.hh\n" in text
    assert "src/renderer/gl_state.o: src/renderer/gl_state.c src/renderer/gl.hh src/config.hh\n" in text
    assert "src/platform.linux/x11_main.o: src/platform.linux/x11_main.cc\n" in text
    assert "win_main" not in text
    assert "legacy" not in text


def test_progress_reports_each_stage(project):
    stages = []
    run_pipeline(GeneratorConfig(), io.StringIO(), progress=lambda s, c, t: stages.append(s))
    assert stages[0] == "Scanning"
    assert stages[-1] == "Resolving"


def test_missing_root(project):
    with pytest.raises(MissingFileError):
        run_pipeline(GeneratorConfig(source_root=Path("nope")), io.StringIO())


def test_depth_error_leaves_stream_empty(project):
    _write(project, "src/deep.c", '#include "d1.h"\n')
    _write(project, "src/d1.h", '#include "d2.h"\n')
    _write(project, "src/d2.h")
    out = io.StringIO()
    with pytest.raises(DependencyDepthError):
        run_pipeline(GeneratorConfig(max_depth=2), out)
    assert out.getvalue() == ""


def _rules(text: str) -> dict[str, list[str]]:
    rules = {}
    for line in text.splitlines():
        if ": " in line and not line.startswith("\t"):
            target, prerequisites = line.split(": ", 1)
            rules[Path(target).name] = prerequisites.split()[1:]
    return rules


class TestEngineFixture:
    def _run(self, targets):
        engine = FIXTURES / "engine"
        config = GeneratorConfig(
            source_root=engine / "src",
            targets=targets,
            search_paths=[engine / "src"],
            relative_to=engine,
        )
        out = io.StringIO()
        sources = run_pipeline(config, out)
        return sources, out.getvalue()

    def test_linux_build(self):
        sources, text = self._run(["linux"])
        assert sorted(s.path.name for s in sources) == [
            "draw.cc", "main.cc", "netevent.c", "sys_main_linux.cc",
        ]
        rules = _rules(text)
        assert rules["main.o"] == [
            "src/sys_main.hh",
            "src/config.hh",
            "src/renderer/draw.hh",
            "src/renderer/gl_state.hh",
        ]
        assert sorted(rules["draw.o"]) == [
            "src/config.hh", "src/renderer/draw.hh", "src/renderer/gl_state.hh",
        ]
        assert rules["netevent.o"] == ["src/net/netevent.h"]
        assert rules["sys_main_linux.o"] == ["src/sys_main.hh", "src/config.hh"]
        assert "vendored" not in text

    def test_macos_build_uses_cxx_for_objective_cpp(self):
        _, text = self._run(["macos"])
        lines = text.splitlines()
        rule = next(i for i, line in enumerate(lines) if line.startswith(
            (FIXTURES / "engine/src/platform.macos/sys_main_macos.o").as_posix()))
        assert lines[rule + 1] == "\t$(CXX) $(CFLAGS) $(CXXFLAGS) -c $< -o $@"
        assert "sys_main_linux" not in text
