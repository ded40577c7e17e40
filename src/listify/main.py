from __future__ import annotations

"""
Main Entry Point and Global Supervisor.

Routes execution to the CLI (arguments present) or the GUI (no arguments)
and installs a global exception hook so fatal crashes are logged and
reported on the active interface.
"""

import logging
import sys
import traceback
from typing import Any

from listify.utils.i18n import i18n

# -----------------------------------------------------------------------------
# GLOBAL SUPERVISOR (EXCEPTION HANDLING)
# -----------------------------------------------------------------------------

def global_exception_handler(exctype: type[BaseException], value: BaseException, tb: Any) -> None:
    """
    Log an unhandled exception and report it to the user.

    CLI runs get the full trace on stderr; GUI runs get a message box, with
    stderr as the last resort if Tk itself is unusable.
    """
    stack_trace = "".join(traceback.format_exception(exctype, value, tb))
    error_msg = str(value)

    logger = logging.getLogger("listify.supervisor")
    logger.critical(f"FATAL EXCEPTION DETECTED: {error_msg}\n{stack_trace}")

    if len(sys.argv) > 1:
        print("\n" + "=" * 80, file=sys.stderr)
        print("CRITICAL ERROR (LISTIFY CLI)", file=sys.stderr)
        print("=" * 80, file=sys.stderr)
        print(stack_trace, file=sys.stderr)
        return

    try:
        import tkinter.messagebox as mb
        from tkinter import Tk

        root = Tk()
        root.withdraw()
        mb.showerror(
            i18n.t("gui.dialogs.fatal_title"),
            i18n.t("gui.dialogs.fatal_body", error=error_msg),
        )
        root.destroy()
    except Exception:
        print(f"CRITICAL SYSTEM ERROR: {error_msg}\n{stack_trace}", file=sys.stderr)

# -----------------------------------------------------------------------------
# EXECUTION ROUTING
# -----------------------------------------------------------------------------

def main() -> int:
    """
    Detect the execution context and delegate to the matching interface.

    Returns:
        int: Process exit code.
    """
    sys.excepthook = global_exception_handler

    try:
        if len(sys.argv) > 1:
            from listify.interface.cli.app import main as cli_main
            return cli_main()

        from listify.interface.gui.app import main as gui_main
        gui_main()
        return 0

    except Exception as e:
        global_exception_handler(type(e), e, e.__traceback__)
        return 1


if __name__ == "__main__":
    sys.exit(main())
