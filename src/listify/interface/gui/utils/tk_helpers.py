from __future__ import annotations

"""
Tkinter Technical Utilities.

Native directory selection dialog for the GUI window.
"""

import logging
from typing import Any, Optional

import customtkinter as ctk

from listify.utils.i18n import i18n

logger = logging.getLogger(__name__)


def pick_directory(parent: Any = None) -> Optional[str]:
    """
    Prompt the user for a directory.

    Returns:
        Optional[str]: Selected absolute path, or None if the dialog was
        cancelled.
    """
    path = ctk.filedialog.askdirectory(parent=parent, title=i18n.t("gui.dialogs.select_directory"))
    if not path:
        logger.debug("UI Action: Directory selection cancelled.")
        return None
    return path
