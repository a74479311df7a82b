"""Tests for main.py: command line options and exit status."""
from __future__ import annotations

import subprocess
import xml.etree.ElementTree as ET

import pytest

import main
from models import SVG_NS

TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" id="svg1" width="300" height="300">'
    '<rect id="rect1" width="300" height="300"/></svg>'
)


@pytest.fixture()
def workdir(tmp_path, monkeypatch):
    """Run in an empty directory with a template and private settings file."""
    monkeypatch.chdir(tmp_path)
    (tmp_path / "template.svg").write_text(TEMPLATE, encoding="utf-8")
    return tmp_path


def _run(workdir, *args):
    return main.main(["--config", str(workdir / "settings.toml"), "--rasterizer", "none", *args])


def _label(svg_path):
    [label] = ET.parse(svg_path).getroot().findall(f"{{{SVG_NS}}}text")
    return label


class TestExitStatus:
    def test_literal_name(self, workdir):
        assert _run(workdir, "-n", "Misaka Mikoto") == 0
        assert _label(workdir / "out" / "MisakaMikoto.svg").text == "Misaka Mikoto"

    def test_name_file(self, workdir):
        (workdir / "names.txt").write_text("# guests\nAlice\n\nBob\n", encoding="utf-8")
        assert _run(workdir) == 0
        assert sorted(p.name for p in (workdir / "out").iterdir()) == ["Alice.svg", "Bob.svg"]

    def test_missing_name_file(self, workdir):
        assert _run(workdir, "-n", "guests.txt") == 2
        assert not (workdir / "out").exists()

    def test_missing_default_name_file(self, workdir):
        assert _run(workdir) == 2

    def test_missing_template(self, workdir):
        assert _run(workdir, "-n", "Alice", "-t", "nope.svg") == 2
        assert not (workdir / "out").exists()

    def test_per_name_failure(self, workdir):
        (workdir / "names.txt").write_text("a/b\nCarol\n", encoding="utf-8")
        assert _run(workdir) == 1
        assert (workdir / "out" / "Carol.svg").is_file()

    def test_missing_inkscape_is_not_an_error(self, workdir, monkeypatch):
        monkeypatch.setattr("raster.find_inkscape", lambda config: None)
        rc = main.main(["--config", str(workdir / "settings.toml"), "-n", "Alice"])
        assert rc == 0
        assert (workdir / "out" / "Alice.svg").is_file()
        assert not (workdir / "out" / "Alice.png").exists()


class TestOptions:
    def test_font_options(self, workdir):
        assert _run(workdir, "-n", "Li", "--font-size", "14", "--font-scale", "0.92", "--font-style", "Serif") == 0
        label = _label(workdir / "out" / "Li.svg")
        assert float(label.get("x")) == pytest.approx(137.12)
        assert "font-family:Serif" in label.get("style")

    def test_output_dir(self, workdir):
        assert _run(workdir, "-n", "Alice", "-o", "build/names") == 0
        assert (workdir / "build" / "names" / "Alice.svg").is_file()

    def test_baseline_y(self, workdir):
        assert _run(workdir, "-n", "Alice", "--baseline-y", "100") == 0
        assert _label(workdir / "out" / "Alice.svg").get("y") == "100"

    def test_settings_file_used(self, workdir):
        (workdir / "settings.toml").write_text('[font]\nfamily = "FromFile"\n', encoding="utf-8")
        assert _run(workdir, "-n", "Alice") == 0
        assert "font-family:FromFile" in _label(workdir / "out" / "Alice.svg").get("style")

    def test_show_config(self, workdir, capsys):
        assert _run(workdir, "--show-config") == 0
        assert "[font]" in capsys.readouterr().out
        assert not (workdir / "out").exists()

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            main.main(["--version"])
        assert exc.value.code == 0
        assert main.__version__ in capsys.readouterr().out

    def test_bad_choice(self, workdir):
        with pytest.raises(SystemExit) as exc:
            main.main(["--rasterizer", "cairo"])
        assert exc.value.code == 2


class TestZeroMeansOff:
    def test_zero_baseline_ratio_keeps_fixed_baseline(self, workdir):
        assert _run(workdir, "-n", "Li", "--baseline-ratio", "0") == 0
        assert _label(workdir / "out" / "Li.svg").get("y") == "214.18192"

    def test_zero_timeout_waits_forever(self, workdir, monkeypatch):
        seen = []

        def fake_run(cmd, **kwargs):
            seen.append(kwargs["timeout"])
            if "--export-type=png" in cmd:
                png = next(a for a in cmd if a.startswith("--export-filename="))
                with open(png.split("=", 1)[1], "wb") as f:
                    f.write(b"\x89PNG")
            return subprocess.CompletedProcess(cmd, 0, stdout="", stderr="")

        monkeypatch.setattr("raster.find_inkscape", lambda config: "/usr/bin/inkscape")
        monkeypatch.setattr("raster.inkscape.subprocess.run", fake_run)
        rc = main.main(["--config", str(workdir / "settings.toml"), "-n", "Li", "--timeout", "0"])
        assert rc == 0
        assert seen == [None, None]
        assert (workdir / "out" / "Li.png").is_file()


class TestSaveConfig:
    def test_options_become_defaults(self, workdir):
        assert _run(workdir, "--font-style", "Serif", "-o", "build", "--save-config") == 0
        assert not (workdir / "build").exists()

        assert main.main(["--config", str(workdir / "settings.toml"), "-n", "Alice"]) == 0
        assert "font-family:Serif" in _label(workdir / "build" / "Alice.svg").get("style")
