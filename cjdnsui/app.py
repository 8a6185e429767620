from enum import Enum, IntEnum
from typing import Any

from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container, VerticalScroll
from textual.message import Message
from textual.theme import BUILTIN_THEMES, Theme
from textual.widgets import Button, Footer, Input, Static, TabbedContent, TabPane, TextArea

from cjdnsui import __version__ as CJDNSUI_VERSION
from cjdnsui.config import DEFAULT_THEME, UiConfig
from cjdnsui.errors import ObserverError, ViewNotRunningError
from cjdnsui.models import (
    Settings,
    Status,
    format_authorized_passwords,
    parse_authorized_passwords,
    parse_port,
)
from cjdnsui.observer import Observable, ObserverFn
from cjdnsui.services.logs import get_logger, setup_logging

logger = get_logger(__name__)

UNKNOWN = "Unknown"

THEME_CJDNSUI_DARK = Theme(
    name="cjdnsui-dark",
    primary="#00d4ff",
    secondary="#00ff88",
    accent="#ff6b00",
    foreground="#e0e0e0",
    background="#0d0d0d",
    surface="#1a1a1a",
    panel="#252525",
    success="#00ff00",
    warning="#ffaa00",
    error="#ff4444",
    dark=True,
)

# All built-in themes + custom theme for cycle
THEME_ORDER = list(BUILTIN_THEMES.keys()) + [THEME_CJDNSUI_DARK.name]


class ViewTopic(IntEnum):
    SAVE_SETTINGS = 0
    STARTED = 1


class ViewState(Enum):
    UNSTARTED = "unstarted"
    RUNNING = "running"
    STOPPED = "stopped"


class StatusBar(Static):
    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.theme_name = DEFAULT_THEME
        self.theme_visible = False

    def render(self) -> str:
        if self.theme_visible:
            return f"Theme: {self.theme_name}"
        return ""


class StatusField(Static):
    """Read-only value cell; keeps the displayed text so it can be read back."""

    def __init__(self, value: str = UNKNOWN, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._value = value

    @property
    def value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value
        self.update(self.render())

    def render(self) -> Text:
        style = "dim" if self._value == UNKNOWN else "bold"
        return Text(self._value, style=style)


class StatusPanel(VerticalScroll):
    """Peering information reported by the node."""

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self.border_title = "Peering information"
        self.border_title_align = ("left", "top")
        self.add_class("card")
        self.add_class("node")
        self._cjdns_ip = StatusField(id="status-cjdns-ip")
        self._public_key = StatusField(id="status-public-key")
        self._port = StatusField(id="status-port")

    def compose(self) -> ComposeResult:
        with Container(id="status-grid"):
            yield Static("Cjdns IP:", classes="status-label")
            yield self._cjdns_ip
            yield Static("Public Key:", classes="status-label")
            yield self._public_key
            yield Static("Port:", classes="status-label")
            yield self._port

    def set_status(self, status: Status) -> None:
        self._cjdns_ip.set_value(status.cjdns_ip)
        self._public_key.set_value(status.public_key)
        self._port.set_value(str(status.port))

    def get_status(self) -> Status:
        """Read the displayed values back.

        Raises StatusParseError when the port cell does not hold an integer,
        which includes the initial ``Unknown``.
        """
        return Status(
            cjdns_ip=self._cjdns_ip.value,
            public_key=self._public_key.value,
            port=parse_port(self._port.value),
        )


class SettingsPanel(VerticalScroll):
    """Admin login and authorized passwords editor with a Save trigger."""

    class SaveRequested(Message):
        """Posted when the user asks to save; carries no settings."""

    def __init__(self, **kwargs: object) -> None:
        super().__init__(**kwargs)
        self._admin_address_input = Input(
            placeholder="Address",
            id="settings-admin-address",
        )
        self._admin_password_input = Input(
            placeholder="Password",
            password=True,
            id="settings-admin-password",
        )
        self._passwords_input = TextArea(
            soft_wrap=False,
            id="settings-authorized-passwords",
        )

    @property
    def passwords_input(self) -> TextArea:
        return self._passwords_input

    def compose(self) -> ComposeResult:
        login = Container(id="settings-admin-login", classes="card")
        login.border_title = "Administration login"
        with login:
            yield Static("Address:", classes="settings-label")
            yield self._admin_address_input
            yield Static("Password:", classes="settings-label")
            yield self._admin_password_input
        passwords = Container(id="settings-passwords", classes="card")
        passwords.border_title = "Authorized passwords"
        passwords.border_subtitle = "one password per line"
        with passwords:
            yield self._passwords_input
        with Container(id="settings-actions"):
            yield Button("Save", id="settings-save", variant="primary")

    def set_settings(self, settings: Settings) -> None:
        self._admin_address_input.value = settings.admin_address
        self._admin_password_input.value = settings.admin_password
        self._passwords_input.load_text(
            format_authorized_passwords(settings.authorized_passwords)
        )

    def get_settings(self) -> Settings:
        return Settings(
            authorized_passwords=parse_authorized_passwords(self._passwords_input.text),
            admin_address=self._admin_address_input.value,
            admin_password=self._admin_password_input.value,
        )

    def save(self) -> None:
        self.post_message(self.SaveRequested())

    def on_button_pressed(self, event: Button.Pressed) -> None:
        if event.button.id != "settings-save":
            return
        event.stop()
        self.save()


class View(App):
    """Tabbed Status/Settings front-end for a cjdns node.

    External code subscribes to ``ViewTopic`` topics through ``add_observer``
    and pushes or pulls records with the ``set_*``/``get_*`` accessors. The
    panels only exist while the event loop is running, so the accessors raise
    ViewNotRunningError before ``run()`` has mounted them and after exit.
    ``ViewTopic.STARTED`` fires once the panels are ready for initial state.

    Everything runs on the Textual event loop thread. Other threads must go
    through ``call_from_thread``.
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("ctrl+s", "save_settings", "Save"),
        ("t", "cycle_theme", "Theme"),
    ]

    CSS = """
    Screen {
        layout: vertical;
    }
    #body {
        layout: vertical;
        width: 1fr;
        height: 1fr;
    }
    TabbedContent,
    TabPane {
        width: 1fr;
    }
    #status-bar {
        height: 1;
    }
    .card {
        padding: 1 1;
        border: round $primary-darken-2;
        height: auto;
        min-height: 6;
    }
    .card.node {
        color: $primary-lighten-2;
    }
    #status-grid {
        layout: grid;
        grid-size: 2;
        grid-columns: 14 1fr;
        grid-gutter: 0 1;
        height: auto;
    }
    .status-label {
        text-style: bold;
    }
    #settings-admin-login Input {
        width: 60;
        max-width: 60;
        margin-bottom: 1;
    }
    #settings-passwords TextArea {
        height: 10;
        width: 1fr;
    }
    #settings-actions {
        height: auto;
        padding: 0 1;
    }
    #settings-save {
        min-width: 8;
        width: auto;
        padding: 0 2;
    }
    """

    def __init__(self, config: UiConfig | None = None) -> None:
        super().__init__()
        self.config = config or UiConfig()
        self.observable = Observable()
        self.status_panel: StatusPanel | None = None
        self.settings_panel: SettingsPanel | None = None
        self.status_bar = StatusBar(id="status-bar")
        self._lifecycle = ViewState.UNSTARTED
        self.title = self.config.title
        self.sub_title = f"v{CJDNSUI_VERSION}"

    @property
    def lifecycle(self) -> ViewState:
        return self._lifecycle

    def compose(self) -> ComposeResult:
        self.status_panel = StatusPanel(id="status-panel")
        self.settings_panel = SettingsPanel(id="settings-panel")
        with Container(id="body"):
            with TabbedContent(initial="status"):
                with TabPane("Status", id="status"):
                    yield self.status_panel
                with TabPane("Settings", id="settings"):
                    yield self.settings_panel
        yield self.status_bar
        yield Footer()

    def on_mount(self) -> None:
        self.register_theme(THEME_CJDNSUI_DARK)
        theme = self.config.theme
        if theme not in self.available_themes:
            logger.warning("unknown theme %r, using %s", theme, DEFAULT_THEME)
            theme = DEFAULT_THEME
        self.theme = theme
        self.status_bar.theme_name = theme
        self.status_bar.refresh()

        self._lifecycle = ViewState.RUNNING
        logger.info("view running")
        self._notify_topic(ViewTopic.STARTED, "Startup")

    def on_unmount(self) -> None:
        self._stop()

    def run(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().run(*args, **kwargs)
        finally:
            self._stop()

    def _stop(self) -> None:
        if self._lifecycle is not ViewState.STOPPED:
            self._lifecycle = ViewState.STOPPED
            logger.info("view stopped")

    def _require_running(self) -> None:
        if self._lifecycle is not ViewState.RUNNING:
            raise ViewNotRunningError(f"view is {self._lifecycle.value}, not running")

    def add_observer(self, topic: ViewTopic, fn: ObserverFn) -> None:
        self.observable.add_observer(topic, fn)

    def notify_observers(self, topic: ViewTopic, data: object = None) -> None:
        self.observable.notify_observers(topic, data)

    def set_status(self, status: Status) -> None:
        self._require_running()
        self.status_panel.set_status(status)

    def get_status(self) -> Status:
        self._require_running()
        return self.status_panel.get_status()

    def set_settings(self, settings: Settings) -> None:
        self._require_running()
        self.settings_panel.set_settings(settings)

    def get_settings(self) -> Settings:
        self._require_running()
        return self.settings_panel.get_settings()

    def _notify_topic(self, topic: ViewTopic, title: str) -> bool:
        try:
            self.notify_observers(topic, None)
        except ObserverError as e:
            logger.error("%s observers failed: %s", topic.name, e, exc_info=e.__cause__)
            msg = str(e.__cause__ or e)
            self.notify(
                msg[:117] + "..." if len(msg) > 120 else msg,
                title=f"{title} failed",
                severity="error",
                timeout=8,
            )
            return False
        return True

    def on_settings_panel_save_requested(self, message: SettingsPanel.SaveRequested) -> None:
        logger.info("save requested, notifying %d observer(s)",
                    len(self.observable.observers(ViewTopic.SAVE_SETTINGS)))
        if self._notify_topic(ViewTopic.SAVE_SETTINGS, "Save"):
            self.notify("Settings saved", title="Settings", timeout=3)

    def action_save_settings(self) -> None:
        self._require_running()
        self.settings_panel.save()

    def action_cycle_theme(self) -> None:
        """Cycle through available themes (t key)."""
        current = getattr(self, "theme", DEFAULT_THEME) or DEFAULT_THEME
        try:
            idx = THEME_ORDER.index(current)
        except ValueError:
            idx = 0
        next_theme = THEME_ORDER[(idx + 1) % len(THEME_ORDER)]
        self.theme = next_theme
        self.status_bar.theme_name = next_theme
        self.status_bar.theme_visible = True
        self.status_bar.refresh()
        self.set_timer(3.0, self._hide_theme_from_status_bar)

    def _hide_theme_from_status_bar(self) -> None:
        self.status_bar.theme_visible = False
        self.status_bar.refresh()


def new_view(config: UiConfig | None = None) -> View:
    return View(config)


def run() -> None:
    config = UiConfig.from_env()
    setup_logging(config)
    view = new_view(config)

    def _log_saved(_: object) -> None:
        settings = view.get_settings()
        logger.info(
            "settings saved: admin_address=%s authorized_passwords=%d",
            settings.admin_address,
            len(settings.authorized_passwords),
        )

    view.add_observer(ViewTopic.SAVE_SETTINGS, _log_saved)
    view.run()
