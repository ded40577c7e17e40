from __future__ import annotations

"""
Main GUI Controller.

Bridges the window widgets with the aggregation engine. Holds the UI state
(loading flag, success and error messages), scrapes widget values into the
session configuration, and runs aggregations on a background thread. Widget
toolkits are never imported here, so the logic can be driven by mocks.
"""

import logging
import threading
from dataclasses import dataclass, replace
from typing import Any, Callable, Dict, Optional

from listify.domain.aggregation_models import AggregationResult
from listify.domain.errors import ErrorKind
from listify.interface.gui import threads
from listify.utils.i18n import i18n

logger = logging.getLogger(__name__)

Spawner = Callable[[Callable[..., None], tuple], None]
DirectoryPicker = Callable[[Any], Optional[str]]

ERROR_COLOR = "#d9534f"
SUCCESS_COLOR = "#2e8b57"


@dataclass(frozen=True)
class UiState:
    is_loading: bool = False
    success_message: Optional[str] = None
    error: Optional[str] = None


def _spawn_daemon(target: Callable[..., None], args: tuple) -> None:
    threading.Thread(target=target, args=args, daemon=True).start()


def _default_picker(parent: Any) -> Optional[str]:
    from listify.interface.gui.utils.tk_helpers import pick_directory
    return pick_directory(parent)


class AppController:
    """
    View-model of the main window.

    Args:
        app: Root window; only ``after`` is used, to marshal callbacks onto
            the UI thread.
        config: Session configuration (mutated in place).
        app_state: Persistent application state holding ``config``.
        spawn: Starts the background worker (a daemon thread by default).
        picker: Interactive directory selector (a native dialog by default).
    """

    def __init__(
            self,
            app: Any,
            config: Dict[str, Any],
            app_state: Dict[str, Any],
            spawn: Spawner = _spawn_daemon,
            picker: DirectoryPicker = _default_picker,
    ) -> None:
        self.app = app
        self.config = config
        self.app_state = app_state
        self.state = UiState()
        self.view: Any = None
        self._spawn = spawn
        self._picker = picker

    def register_view(self, view: Any) -> None:
        self.view = view

    # -------------------------------------------------------------------------
    # CONFIG <-> VIEW SYNCHRONIZATION
    # -------------------------------------------------------------------------

    def sync_config_from_view(self) -> None:
        """Scrape widget values into the session configuration."""
        if self.view is None:
            return
        self.config["input_path"] = self.view.entry_path.get().strip()
        self.config["prefix_filter"] = self.view.entry_filter.get()
        self.config["filter_enabled"] = bool(self.view.sw_filter.get())
        self.config["include_tree"] = bool(self.view.sw_tree.get())

    def sync_view_from_config(self) -> None:
        if self.view is None:
            return
        self._set_entry(self.view.entry_path, self.config.get("input_path", ""))
        self.view.entry_filter.configure(state="normal")
        self._set_entry(self.view.entry_filter, self.config.get("prefix_filter", ""))
        self._set_switch(self.view.sw_filter, self.config.get("filter_enabled", False))
        self._set_switch(self.view.sw_tree, self.config.get("include_tree", True))
        self.on_filter_toggled()

    def on_filter_toggled(self) -> None:
        """Enable the prefix entry only while the filter switch is on."""
        if self.view is None:
            return
        enabled = bool(self.view.sw_filter.get())
        self.view.entry_filter.configure(state="normal" if enabled else "disabled")

    # -------------------------------------------------------------------------
    # ACTIONS
    # -------------------------------------------------------------------------

    def select_directory(self) -> str:
        """
        Ask the user for a base directory and copy it into the path entry.

        Returns:
            str: Selected path, or "" when cancelled or the dialog failed.
        """
        try:
            path = self._picker(self.app)
        except Exception as e:
            logger.error(f"UI Action: Directory selection failed: {e}")
            self._set_state(error=i18n.t("gui.status.unexpected", error=str(e)), is_loading=False)
            return ""

        if not path:
            return ""
        self.config["input_path"] = path
        if self.view is not None:
            self._set_entry(self.view.entry_path, path)
        return path

    def parse_and_create_file(self) -> None:
        """Validate the form and start an aggregation in the background."""
        self.sync_config_from_view()
        base_path = (self.config.get("input_path") or "").strip()

        if not base_path:
            self._set_state(error=i18n.t("gui.status.empty_path"))
            return

        if self.state.is_loading:
            logger.debug("UI Action: Aggregation already running, request ignored.")
            return

        prefix_spec = self.config.get("prefix_filter", "") if self.config.get("filter_enabled") else ""
        self._set_state(is_loading=True, error=None, success_message=None)
        logger.info(f"UI Action: Aggregation requested for {base_path}")

        self._spawn(
            threads.run_aggregation_task,
            (base_path, prefix_spec, bool(self.config.get("include_tree", True)), self._on_worker_done),
        )

    def handle_result(self, outcome: Any) -> None:
        """Translate a worker outcome into UI state (runs on the UI thread)."""
        if isinstance(outcome, AggregationResult):
            if outcome.ok:
                self._set_state(
                    is_loading=False,
                    success_message=i18n.t("gui.status.completed", path=outcome.output_path),
                )
            elif outcome.error_kind is ErrorKind.INVALID_INPUT:
                self._set_state(
                    is_loading=False,
                    error=i18n.t("gui.status.invalid_path", error=outcome.error),
                )
            else:
                self._set_state(
                    is_loading=False,
                    error=i18n.t("gui.status.file_error", error=outcome.error),
                )
            return

        self._set_state(is_loading=False, error=i18n.t("gui.status.unexpected", error=str(outcome)))

    def clear_message(self) -> None:
        self._set_state(is_loading=False, success_message=None, error=None)

    # -------------------------------------------------------------------------
    # INTERNALS
    # -------------------------------------------------------------------------

    def _on_worker_done(self, outcome: Any) -> None:
        self.app.after(0, lambda: self.handle_result(outcome))

    def _set_state(self, **changes: Any) -> None:
        self.state = replace(self.state, **changes)
        self.render()

    def render(self) -> None:
        """Push the current UI state into the widgets."""
        if self.view is None:
            return

        if self.state.is_loading:
            self.view.btn_generate.configure(state="disabled", text=i18n.t("gui.buttons.working"))
        else:
            self.view.btn_generate.configure(state="normal", text=i18n.t("gui.buttons.generate"))

        if self.state.error:
            self.view.lbl_status.configure(text=self.state.error, text_color=ERROR_COLOR)
        elif self.state.success_message:
            self.view.lbl_status.configure(text=self.state.success_message, text_color=SUCCESS_COLOR)
        else:
            self.view.lbl_status.configure(text="")

    @staticmethod
    def _set_entry(entry: Any, value: str) -> None:
        entry.delete(0, "end")
        entry.insert(0, value)

    @staticmethod
    def _set_switch(switch: Any, on: bool) -> None:
        if on:
            switch.select()
        else:
            switch.deselect()
