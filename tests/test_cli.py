"""Tests for the command-line interface."""

from pathlib import Path
from unittest.mock import patch

import pytest
from pagedistill.cli import EXIT_CLEANUP_FAILED, EXIT_FATAL, EXIT_OK, build_config, create_parser, main
from pagedistill.errors import ArgumentError, CleanupError
from pagedistill.models.config import ConverterBackend


@pytest.fixture
def site(tmp_path):
    root = tmp_path / "site"
    root.mkdir()
    (root / "shibuya-nightlife.html").write_text("<h1>Shibuya</h1><p>Bars.</p>", encoding="utf-8")
    return root


class TestArguments:
    """Tests for argument parsing and config building."""

    def test_positionals(self, tmp_path):
        """Test the four positional arguments."""
        args = create_parser().parse_args([str(tmp_path / "in"), str(tmp_path / "out"), "Travel", "Tokyo"])

        config = build_config(args)

        assert config.input_dir == tmp_path / "in"
        assert config.output_dir == tmp_path / "out"
        assert config.category == "Travel"
        assert config.tag == "Tokyo"
        assert config.cleanup is True
        assert config.converter.backend == ConverterBackend.PANDOC

    def test_missing_positionals_raise(self):
        """Test that fewer than four positionals is a usage error."""
        args = create_parser().parse_args(["in", "out"])

        with pytest.raises(ArgumentError):
            build_config(args)

    def test_extra_positionals_raise(self):
        """Test that more than four positionals is a usage error."""
        with pytest.raises(ArgumentError):
            create_parser().parse_args(["in", "out", "c", "t", "extra"])

    def test_converter_options(self):
        """Test converter flags."""
        args = create_parser().parse_args(
            ["in", "out", "c", "t", "--converter", "html2text", "--pandoc", "/opt/pandoc", "--timeout", "5"]
        )

        config = build_config(args)

        assert config.converter.backend == ConverterBackend.HTML2TEXT
        assert config.converter.pandoc_path == "/opt/pandoc"
        assert config.converter.timeout == 5.0

    def test_output_flags(self):
        """Test cleanup, dry-run and verbosity flags."""
        args = create_parser().parse_args(["in", "out", "c", "t", "--no-cleanup", "--dry-run", "-v"])

        config = build_config(args)

        assert config.cleanup is False
        assert config.dry_run is True
        assert config.log_level == "DEBUG"

    def test_config_file_supplies_values(self, tmp_path):
        """Test that a YAML file can stand in for positionals."""
        config_file = tmp_path / "pagedistill.yaml"
        config_file.write_text(
            "input_dir: ./site\n"
            "output_dir: ./content\n"
            "category: Travel\n"
            "tag: Kyoto\n"
            "converter:\n"
            "  backend: html2text\n",
            encoding="utf-8",
        )
        args = create_parser().parse_args(["--config", str(config_file)])

        config = build_config(args)

        assert config.input_dir == Path("./site")
        assert config.tag == "Kyoto"
        assert config.converter.backend == ConverterBackend.HTML2TEXT

    def test_positionals_override_config_file(self, tmp_path):
        """Test that command-line values win over file values."""
        config_file = tmp_path / "pagedistill.yaml"
        config_file.write_text("input_dir: a\noutput_dir: b\ncategory: X\ntag: Y\n", encoding="utf-8")
        args = create_parser().parse_args(["in", "out", "Travel", "Tokyo", "--config", str(config_file)])

        config = build_config(args)

        assert config.category == "Travel"
        assert config.tag == "Tokyo"


class TestMain:
    """Tests for main() exit codes."""

    def test_successful_run(self, site, tmp_path):
        """Test a complete run with the in-process converter."""
        out = tmp_path / "out"

        code = main([str(site), str(out), "Nightlife", "Tokyo", "--converter", "html2text", "--quiet"])

        assert code == EXIT_OK
        document = (out / "shibuya-nightlife.md").read_text(encoding="utf-8")
        assert document.startswith('---\ntitle: "Shibuya Nightlife"\n')
        assert 'tags: ["Tokyo"]' in document
        assert "Bars." in document
        assert not list(site.rglob("*processed*"))

    def test_progress_and_results_output(self, site, tmp_path, capsys):
        """Test a run with progress display and the results summary."""
        code = main([str(site), str(tmp_path / "out"), "Nightlife", "Tokyo", "--converter", "html2text"])

        assert code == EXIT_OK
        output = capsys.readouterr().out
        assert "Files discovered: 1" in output
        assert "Files converted: 1" in output
        assert "Files failed: 0" in output

    def test_wrong_argument_count(self, tmp_path):
        """Test that a usage error exits 1 without touching the file system."""
        assert main([str(tmp_path / "in"), str(tmp_path / "out")]) == EXIT_FATAL
        assert not (tmp_path / "out").exists()

    def test_missing_input_dir(self, tmp_path):
        """Test that an unwalkable input tree exits 1."""
        code = main([str(tmp_path / "missing"), str(tmp_path / "out"), "c", "t", "--converter", "html2text", "-q"])

        assert code == EXIT_FATAL

    def test_output_path_is_file(self, site, tmp_path):
        """Test that an unusable output directory exits 1."""
        blocker = tmp_path / "blocker"
        blocker.write_text("x")

        code = main([str(site), str(blocker), "c", "t", "--converter", "html2text", "-q"])

        assert code == EXIT_FATAL

    def test_cleanup_failure(self, site, tmp_path):
        """Test that a failed cleanup exits 2 after outputs are written."""
        out = tmp_path / "out"

        with patch(
            "pagedistill.core.distiller.remove_intermediates",
            side_effect=CleanupError("error deleting processed files: denied"),
        ):
            code = main([str(site), str(out), "c", "t", "--converter", "html2text", "-q"])

        assert code == EXIT_CLEANUP_FAILED
        assert (out / "shibuya-nightlife.md").exists()

    def test_per_file_failure_still_exits_zero(self, site, tmp_path):
        """Test that a failed conversion does not change the exit code."""
        code = main(
            [str(site), str(tmp_path / "out"), "c", "t", "--pandoc", str(tmp_path / "no-pandoc"), "-q"]
        )

        assert code == EXIT_OK
        assert not (tmp_path / "out" / "shibuya-nightlife.md").exists()

    def test_invalid_timeout(self, tmp_path):
        """Test that an invalid option value is a configuration error."""
        code = main(["in", str(tmp_path / "out"), "c", "t", "--timeout", "0"])

        assert code == EXIT_FATAL

    def test_missing_config_file(self, tmp_path):
        """Test that a missing config file exits 1."""
        assert main(["--config", str(tmp_path / "nope.yaml")]) == EXIT_FATAL
