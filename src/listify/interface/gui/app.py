from __future__ import annotations

"""
GUI Entrypoint and Application Lifecycle.

Initializes the CustomTkinter window, restores the last session, binds the
widgets to the AppController and persists the session on close.
"""

import logging
from typing import Any, Dict

import customtkinter as ctk

from listify.domain import config as cfg
from listify.domain import constants as const
from listify.infra.logging import LoggingConfig, configure_logging, get_default_gui_log_path
from listify.interface.gui.controllers.main_controller import AppController
from listify.utils.i18n import i18n

logger = logging.getLogger(__name__)


class MainWindow(ctk.CTk):
    """Single-page window: configuration card, generate button, status line."""

    def __init__(self) -> None:
        super().__init__()
        self.title(i18n.t("gui.title"))
        self.geometry("720x320")
        self.minsize(560, 280)
        self.grid_columnconfigure(0, weight=1)

        card = ctk.CTkFrame(self)
        card.grid(row=0, column=0, sticky="ew", padx=16, pady=(16, 8))
        card.grid_columnconfigure(0, weight=1)

        ctk.CTkLabel(
            card,
            text=i18n.t("gui.labels.configuration"),
            font=ctk.CTkFont(size=14, weight="bold"),
        ).grid(row=0, column=0, columnspan=2, padx=10, pady=(10, 0), sticky="w")

        # --- Base path ---
        self.entry_path = ctk.CTkEntry(card, placeholder_text=i18n.t("gui.labels.base_path"))
        self.entry_path.grid(row=1, column=0, padx=10, pady=10, sticky="ew")

        self.btn_browse = ctk.CTkButton(card, text=i18n.t("gui.buttons.browse"), width=90)
        self.btn_browse.grid(row=1, column=1, padx=10, pady=10)

        # --- Prefix filter ---
        self.sw_filter = ctk.CTkSwitch(card, text=i18n.t("gui.labels.filter"))
        self.sw_filter.grid(row=2, column=0, columnspan=2, padx=10, pady=(0, 5), sticky="w")

        self.entry_filter = ctk.CTkEntry(
            card, placeholder_text=i18n.t("gui.labels.filter_placeholder")
        )
        self.entry_filter.grid(row=3, column=0, columnspan=2, padx=10, pady=(0, 10), sticky="ew")

        self.sw_tree = ctk.CTkSwitch(card, text=i18n.t("gui.labels.tree"))
        self.sw_tree.grid(row=4, column=0, columnspan=2, padx=10, pady=(0, 10), sticky="w")

        # --- Actions ---
        actions = ctk.CTkFrame(self, fg_color="transparent")
        actions.grid(row=1, column=0, padx=16, pady=8, sticky="ew")
        actions.grid_columnconfigure(0, weight=1)

        self.btn_generate = ctk.CTkButton(actions, text=i18n.t("gui.buttons.generate"), height=36)
        self.btn_generate.grid(row=0, column=0, sticky="ew")

        self.btn_clear = ctk.CTkButton(
            actions, text=i18n.t("gui.buttons.clear"), width=90, height=36, fg_color="gray"
        )
        self.btn_clear.grid(row=0, column=1, padx=(10, 0))

        self.lbl_status = ctk.CTkLabel(self, text="", wraplength=660, justify="left")
        self.lbl_status.grid(row=2, column=0, padx=16, pady=(0, 16), sticky="w")


def main() -> None:
    """Initialize and launch the graphical user interface."""
    configure_logging(LoggingConfig(level="INFO", console=True, log_file=get_default_gui_log_path()))
    logger.info(f"GUI Lifecycle: Initializing v{const.CURRENT_CONFIG_VERSION}")

    app_state: Dict[str, Any] = cfg.load_app_state()
    session = app_state["last_session"]

    ctk.set_appearance_mode(app_state["app_settings"].get("appearance_mode", "System"))
    locale = app_state["app_settings"].get("locale", "en")
    if locale != i18n.locale:
        i18n.load_locale(locale)

    window = MainWindow()
    controller = AppController(window, session, app_state)
    controller.register_view(window)
    controller.sync_view_from_config()

    window.btn_browse.configure(command=controller.select_directory)
    window.sw_filter.configure(command=controller.on_filter_toggled)
    window.btn_generate.configure(command=controller.parse_and_create_file)
    window.btn_clear.configure(command=controller.clear_message)

    def on_closing() -> None:
        controller.sync_config_from_view()
        app_state["last_session"] = controller.config
        cfg.save_app_state(app_state)
        window.destroy()

    window.protocol("WM_DELETE_WINDOW", on_closing)
    window.mainloop()


if __name__ == "__main__":
    main()
