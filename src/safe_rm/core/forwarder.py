"""Hand-off of the filtered arguments to the real rm binary."""

from __future__ import annotations

import logging
import subprocess
from collections.abc import Sequence
from pathlib import Path
from typing import Optional

from rich.console import Console

from safe_rm.ui.console import print_error, print_warning

logger = logging.getLogger(__name__)

# Exit code when rm cannot be run at all
FAILURE_EXIT_CODE = 1


class ForwarderError(Exception):
    """The real rm binary cannot be used."""

    pass


class RecursionGuardError(ForwarderError):
    """The configured rm binary is safe-rm itself."""

    pass


def ensure_real_rm_is_callable(
    rm_binary: str,
    current_exe: str,
    console: Optional[Console] = None,
) -> None:
    """
    Make sure we are not about to call ourselves recursively.

    When either path cannot be canonicalized the check is reported as
    inconclusive and the run continues; spawning rm will then fail on
    its own if it really is missing.

    Args:
        rm_binary: Binary the filtered arguments will be forwarded to
        current_exe: Path of the running safe-rm executable
        console: Console for diagnostics

    Raises:
        RecursionGuardError: If both paths resolve to the same file
    """
    console = console or Console()
    try:
        real_rm = Path(rm_binary).resolve(strict=True)
        ourselves = Path(current_exe).resolve(strict=True)
    except (OSError, RuntimeError, ValueError) as e:
        print_warning(
            console, f'Cannot check that the real "{rm_binary}" binary is callable: {e}'
        )
        return

    if real_rm == ourselves:
        print_error(console, f'Cannot find the real "{rm_binary}" binary.')
        raise RecursionGuardError(f"{rm_binary} resolves to {ourselves}")


def run_binary(
    rm_binary: str,
    args: Sequence[str],
    console: Optional[Console] = None,
) -> int:
    """
    Run the real rm command, returning with the same exit code.

    Args:
        rm_binary: Path of the real rm binary
        args: Arguments that survived filtering
        console: Console for diagnostics

    Returns:
        rm's exit code, or FAILURE_EXIT_CODE if it could not be run or was
        killed by a signal
    """
    console = console or Console()
    logger.debug("Forwarding %d arguments to %s", len(args), rm_binary)
    try:
        result = subprocess.run([rm_binary, *args], check=False)
    except (OSError, ValueError) as e:
        logger.debug("Cannot spawn %s: %s", rm_binary, e)
        print_error(console, f"Failed to run the {rm_binary} command.")
        return FAILURE_EXIT_CODE

    if result.returncode < 0:
        logger.debug("%s killed by signal %d", rm_binary, -result.returncode)
        return FAILURE_EXIT_CODE
    return result.returncode
