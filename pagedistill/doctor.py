"""Diagnostic tool for verifying pagedistill installation and the pandoc binary."""

import shutil
import subprocess
import sys
from importlib import import_module
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


def check_dependency(module_name: str, package_name: Optional[str] = None) -> tuple[bool, str]:
    """
    Check if a Python module is importable.

    Args:
        module_name: Name of the module to import
        package_name: Display name of the package (defaults to module_name)

    Returns:
        Tuple of (success: bool, message: str)
    """
    display_name = package_name or module_name

    try:
        import_module(module_name)
        return True, f"[OK] {display_name}"
    except ImportError:
        return False, f"[MISSING] {display_name}"


def check_pandoc(executable: str = "pandoc") -> tuple[bool, str]:
    """
    Check that the pandoc executable can be found and run.

    Returns:
        Tuple of (success: bool, message: str)
    """
    resolved = shutil.which(executable)
    if resolved is None:
        return False, f"[MISSING] {executable} (not on PATH; use --converter html2text)"

    try:
        result = subprocess.run([resolved, "--version"], capture_output=True, text=True, timeout=30)
    except subprocess.TimeoutExpired:
        return False, f"[FAIL] {executable} --version timed out"
    except OSError as e:
        return False, f"[FAIL] {executable} - {e}"

    if result.returncode != 0:
        return False, f"[FAIL] {executable} --version exited with status {result.returncode}"

    first_line = result.stdout.splitlines()[0] if result.stdout else executable
    return True, f"[OK] {first_line} ({resolved})"


def check_output_dir(output_dir: Optional[Path] = None) -> tuple[bool, str]:
    """
    Check if output directory is writable.

    Args:
        output_dir: Directory to check (defaults to ./content)

    Returns:
        Tuple of (success: bool, message: str)
    """
    test_dir = output_dir or Path("./content")

    try:
        test_dir.mkdir(parents=True, exist_ok=True)

        test_file = test_dir / ".pagedistill_test"
        test_file.write_text("test")
        test_file.unlink()

        return True, f"[OK] Output directory writable ({test_dir})"
    except PermissionError:
        return False, f"[FAIL] Output directory - permission denied ({test_dir})"
    except OSError as e:
        return False, f"[FAIL] Output directory - {e} ({test_dir})"


def run_doctor(
    output_dir: Optional[Path] = None,
    pandoc_path: str = "pandoc",
    console: Optional[Console] = None,
) -> int:
    """
    Run diagnostic checks and display results.

    Args:
        output_dir: Output directory to check for writability
        pandoc_path: Name or path of the pandoc executable
        console: Console to print to (a new one if None)

    Returns:
        Exit code (0 if all core dependencies OK, 1 otherwise)
    """
    console = console or Console()
    console.print("Running pagedistill diagnostics...\n")

    core_checks = [
        ("bs4", "beautifulsoup4"),
        ("html2text", "html2text"),
        ("html5lib", "html5lib"),
        ("pydantic", "pydantic"),
        ("rich", "rich"),
        ("yaml", "pyyaml"),
    ]

    core_results = [check_dependency(mod, pkg) for mod, pkg in core_checks]
    pandoc_result = check_pandoc(pandoc_path)

    all_checks = {
        "Core Dependencies": core_results,
        "Converter": [pandoc_result],
        "System": [check_output_dir(output_dir)],
    }

    for category, results in all_checks.items():
        table = Table(title=category, show_header=False, box=None)
        table.add_column("Status", style="bold")

        for success, message in results:
            table.add_row(escape(message), style="green" if success else "red")

        console.print(table)
        console.print()

    core_failed = any(not success for success, _ in core_results)

    if core_failed:
        console.print("\nWARNING: Some core dependencies are missing!")
        console.print("\nRecommended fix: pip install --upgrade --force-reinstall pagedistill")
        return 1

    console.print("\nAll core dependencies installed correctly!")
    if not pandoc_result[0]:
        console.print("\npandoc was not found; only the html2text converter backend is usable.")

    return 0


if __name__ == "__main__":
    sys.exit(run_doctor())
