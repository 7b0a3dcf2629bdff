"""Textual application hosting the dashboard page."""

import logging
from pathlib import Path

from textual.app import App
from textual.binding import Binding

from .models.config import Config
from .pages.dashboard import DashboardPage
from .services.data_source import DataSource, create_data_source

logger = logging.getLogger(__name__)


class DashboardApp(App):
    """Invoice dashboard application."""

    TITLE = "Invoice Dashboard"

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
    ]

    def __init__(
        self,
        config_path: Path | str = "config.json",
        config: Config | None = None,
        data_source: DataSource | None = None,
    ) -> None:
        super().__init__()
        self.app_config = config if config is not None else Config.load_or_default(config_path)
        self.data_source = data_source if data_source is not None else create_data_source(
            self.app_config
        )

    def on_mount(self) -> None:
        logger.debug(
            f"Page delay {self.app_config.page.effective_delay:.2f}s, "
            f"streaming {'on' if self.app_config.page.streaming else 'off'}"
        )
        self.push_screen(DashboardPage())
