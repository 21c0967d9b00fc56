import logging
import os
import shutil
import subprocess
from pathlib import Path

logger = logging.getLogger("BenchmarkRunner.Error")

RULES_CLI_PACKAGE = "github.com/BattlesnakeOfficial/rules/cli/battlesnake@latest"


def _is_executable(path):
    return path is not None and os.path.exists(path) and os.access(path, os.X_OK)


def _go_bin_path():
    return str(Path(os.environ.get("GOPATH", Path.home() / "go")) / "bin" / "battlesnake")


def find_rules_cli(cli_path="rules/battlesnake"):
    """
    Look for the Battlesnake rules CLI: the configured path first, then PATH, then the Go
    bin directory. Returns the path or None.
    """
    for candidate in (cli_path, shutil.which("battlesnake"), _go_bin_path()):
        if _is_executable(candidate):
            return candidate
    return None


def check_and_install_rules_cli(cli_path="rules/battlesnake"):
    """
    Return the path of a usable rules CLI, installing it with `go install` when missing.
    Raises RuntimeError when no CLI can be found or built.
    """
    found = find_rules_cli(cli_path)
    if found:
        return found

    logger.warning(f"Battlesnake CLI not found at {cli_path}, trying `go install`")
    if shutil.which("go") is None:
        raise RuntimeError(
            "Battlesnake CLI is not available and Go is not installed. Install Go "
            "(https://golang.org/doc/install) or pass the CLI location with --cli."
        )

    try:
        result = subprocess.run(
            ["go", "install", RULES_CLI_PACKAGE],
            capture_output=True,
            text=True,
            timeout=300,
        )
    except subprocess.TimeoutExpired:
        raise RuntimeError("`go install` of the Battlesnake CLI timed out after 5 minutes")

    if result.returncode != 0:
        raise RuntimeError(f"`go install` of the Battlesnake CLI failed:\n{result.stderr}")

    found = find_rules_cli(cli_path)
    if not found:
        raise RuntimeError("Battlesnake CLI was installed but is not on PATH or in the Go bin")
    return found
