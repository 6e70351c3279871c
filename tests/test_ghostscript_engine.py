import shutil
import subprocess
from pathlib import Path

import fitz
import pytest

from pdf_optimize.engines import ghostscript
from pdf_optimize.engines.ghostscript import GhostscriptOptimizer, find_ghostscript
from pdf_optimize.errors import OptimizationError


def test_command_for_profile_without_dpi():
    engine = GhostscriptOptimizer("in.pdf", executable="/usr/bin/gs").for_print()
    cmd = engine.build_command(Path("/tmp/out.pdf"))
    assert cmd[0] == "/usr/bin/gs"
    assert "-sDEVICE=pdfwrite" in cmd
    assert "-dPDFSETTINGS=/printer" in cmd
    assert not any("ImageResolution" in arg for arg in cmd)
    assert cmd[-2:] == ["-sOutputFile=/tmp/out.pdf", "in.pdf"]


def test_command_with_dpi_override():
    engine = GhostscriptOptimizer("in.pdf", executable="gs").for_ebook().image_dpi(96)
    cmd = engine.build_command(Path("out.pdf"))
    assert "-dPDFSETTINGS=/ebook" in cmd
    for kind in ("Color", "Gray", "Mono"):
        assert f"-dDownsample{kind}Images=true" in cmd
        assert f"-d{kind}ImageResolution=96" in cmd


def test_missing_executable_reported(tmp_path, sample_pdf, monkeypatch):
    monkeypatch.setattr(ghostscript.shutil, "which", lambda name: None)
    engine = GhostscriptOptimizer(str(sample_pdf))
    assert engine.executable is None
    with pytest.raises(OptimizationError, match="'ghostscript' is not available"):
        engine.optimize(str(tmp_path / "out.pdf"))
    assert not (tmp_path / "out.pdf").exists()


def test_process_failure_surfaces_stderr(tmp_path, sample_pdf, monkeypatch):
    def failing_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(1, cmd, output="", stderr="Unrecoverable error\n")

    monkeypatch.setattr(ghostscript.subprocess, "run", failing_run)
    engine = GhostscriptOptimizer(str(sample_pdf), executable="gs")
    with pytest.raises(OptimizationError, match="Error optimizing PDF: Unrecoverable error$"):
        engine.optimize(str(tmp_path / "out.pdf"))
    assert not (tmp_path / "out.pdf").exists()


def test_process_failure_without_output(tmp_path, sample_pdf, monkeypatch):
    def failing_run(cmd, **kwargs):
        raise subprocess.CalledProcessError(3, cmd, output="", stderr="")

    monkeypatch.setattr(ghostscript.subprocess, "run", failing_run)
    with pytest.raises(OptimizationError, match="exited with status 3"):
        GhostscriptOptimizer(str(sample_pdf), executable="gs").optimize_inplace()


def test_successful_run_moves_result(tmp_path, sample_pdf, monkeypatch):
    seen = {}

    def fake_run(cmd, **kwargs):
        seen["cmd"] = cmd
        seen["kwargs"] = kwargs
        target = Path(cmd[-2].removeprefix("-sOutputFile="))
        target.write_bytes(b"%PDF-1.4 small")
        return subprocess.CompletedProcess(cmd, 0, "", "")

    monkeypatch.setattr(ghostscript.subprocess, "run", fake_run)
    target = tmp_path / "out.pdf"
    GhostscriptOptimizer(str(sample_pdf), executable="gs").optimize(str(target))
    assert target.read_bytes() == b"%PDF-1.4 small"
    assert seen["kwargs"]["check"] is True
    assert "-dPDFSETTINGS=/screen" in seen["cmd"]


def test_find_ghostscript_prefers_configured_file(tmp_path):
    exe = tmp_path / "gs-custom"
    exe.write_text("")
    assert find_ghostscript(str(exe)) == str(exe)


def test_find_ghostscript_searches_known_names(monkeypatch):
    monkeypatch.setattr(
        ghostscript.shutil, "which", lambda name: "/opt/gs/gswin64c" if name == "gswin64c" else None
    )
    assert find_ghostscript() == "/opt/gs/gswin64c"
    assert GhostscriptOptimizer.is_available()


def test_configured_path_used_by_default(isolated_config, tmp_path):
    exe = tmp_path / "my-gs"
    exe.write_text("")
    isolated_config.write_text(f'{{"ghostscript": "{exe.as_posix()}"}}')
    assert GhostscriptOptimizer("in.pdf").executable == exe.as_posix()


@pytest.mark.ghostscript
@pytest.mark.skipif(shutil.which("gs") is None, reason="Ghostscript not installed")
def test_real_ghostscript(sample_pdf, tmp_path):
    target = tmp_path / "out.pdf"
    GhostscriptOptimizer(str(sample_pdf)).for_screen().optimize(str(target))
    with fitz.open(target) as doc:
        assert len(doc) == 3
