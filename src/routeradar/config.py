"""Configuration management for RouteRadar.

Supports TOML configuration format with auto-discovery.
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, replace
from pathlib import Path

from routeradar.core.types import SortOrder, ViewMode
from routeradar.devserver import detect_dev_server_port

CONFIG_FILENAME = "routeradar.toml"


@dataclass
class ServerConfig:
    """Server configuration."""

    host: str = "127.0.0.1"
    port: int = 8080


@dataclass
class ProjectConfig:
    """Project layout configuration."""

    root: Path = field(default_factory=lambda: Path("."))
    routes_dir: Path = field(default_factory=lambda: Path("src/routes"))


@dataclass
class ViewConfig:
    """Route view configuration."""

    mode: ViewMode = ViewMode.FLAT
    sorting: SortOrder = SortOrder.NATURAL


@dataclass
class DevServerConfig:
    """Development server configuration.

    port is None when it should be detected from the project's config files.
    """

    port: int | None = None


@dataclass
class LiveReloadConfig:
    """Live reload configuration."""

    enabled: bool = True
    debounce_ms: int = 300
    watch_patterns: list[str] | None = None


@dataclass
class Config:
    """Application configuration."""

    server: ServerConfig
    project: ProjectConfig
    view: ViewConfig
    dev_server: DevServerConfig
    live_reload: LiveReloadConfig
    config_path: Path | None = None

    @property
    def dev_server_port(self) -> int:
        """Configured dev server port, detected when not set."""
        if self.dev_server.port is not None:
            return self.dev_server.port
        return detect_dev_server_port(self.project.root)

    @classmethod
    def load(cls, config_path: Path | None = None) -> Config:
        """Load configuration from file.

        If config_path is provided, loads from that file.
        Otherwise, searches for routeradar.toml in current directory and parents.

        Args:
            config_path: Optional explicit path to config file

        Returns:
            Config instance with defaults for missing sections

        Raises:
            FileNotFoundError: If explicit config_path doesn't exist
            ValueError: If configuration is invalid
        """
        if config_path is not None:
            if not config_path.exists():
                raise FileNotFoundError(f"Configuration file not found: {config_path}")
            return cls._load_from_file(config_path)

        discovered_path = cls._discover_config()
        if discovered_path is None:
            return cls._default()

        return cls._load_from_file(discovered_path)

    @classmethod
    def _discover_config(cls) -> Path | None:
        """Search for config file in current directory and parents."""
        current = Path.cwd()
        while True:
            candidate = current / CONFIG_FILENAME
            if candidate.exists():
                return candidate
            parent = current.parent
            if parent == current:
                return None
            current = parent

    @classmethod
    def _default(cls) -> Config:
        """Create config with all defaults, relative to the current directory."""
        root = Path.cwd()
        return cls(
            server=ServerConfig(),
            project=ProjectConfig(root=root, routes_dir=root / "src" / "routes"),
            view=ViewConfig(),
            dev_server=DevServerConfig(),
            live_reload=LiveReloadConfig(),
        )

    @classmethod
    def _load_from_file(cls, path: Path) -> Config:
        """Load configuration from a specific file.

        Args:
            path: Path to TOML configuration file

        Returns:
            Config instance

        Raises:
            ValueError: If configuration is invalid
        """
        with path.open("rb") as f:
            data = tomllib.load(f)

        if not isinstance(data, dict):
            raise ValueError("Configuration must be a dictionary")

        config_dir = path.parent

        return cls(
            server=cls._parse_server(data.get("server")),
            project=cls._parse_project(data.get("project"), config_dir),
            view=cls._parse_view(data.get("view")),
            dev_server=cls._parse_dev_server(data.get("dev_server")),
            live_reload=cls._parse_live_reload(data.get("live_reload")),
            config_path=path,
        )

    @classmethod
    def _parse_server(cls, data: object) -> ServerConfig:
        if data is None:
            return ServerConfig()

        if not isinstance(data, dict):
            raise ValueError("server section must be a dictionary")

        host = data.get("host", "127.0.0.1")
        if not isinstance(host, str):
            raise ValueError("server.host must be a string")

        port = data.get("port", 8080)
        if not isinstance(port, int):
            raise ValueError("server.port must be an integer")

        return ServerConfig(host=host, port=port)

    @classmethod
    def _parse_project(cls, data: object, config_dir: Path) -> ProjectConfig:
        """Parse project configuration section.

        routes_dir is relative to the project root, which is relative to
        the directory containing the config file.

        Args:
            data: Raw project section data
            config_dir: Directory containing config file (for relative paths)

        Returns:
            ProjectConfig instance
        """
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError("project section must be a dictionary")

        root = data.get("root", ".")
        if not isinstance(root, str):
            raise ValueError("project.root must be a string")
        root_path = config_dir / root

        routes_dir = data.get("routes_dir", "src/routes")
        if not isinstance(routes_dir, str):
            raise ValueError("project.routes_dir must be a string")

        return ProjectConfig(root=root_path, routes_dir=root_path / routes_dir)

    @classmethod
    def _parse_view(cls, data: object) -> ViewConfig:
        if data is None:
            return ViewConfig()

        if not isinstance(data, dict):
            raise ValueError("view section must be a dictionary")

        mode = data.get("mode", ViewMode.FLAT.value)
        if mode not in ViewMode.__members__.values():
            choices = ", ".join(m.value for m in ViewMode)
            raise ValueError(f"view.mode must be one of: {choices}")

        sorting = data.get("sorting", SortOrder.NATURAL.value)
        if sorting not in SortOrder.__members__.values():
            choices = ", ".join(s.value for s in SortOrder)
            raise ValueError(f"view.sorting must be one of: {choices}")

        return ViewConfig(mode=ViewMode(mode), sorting=SortOrder(sorting))

    @classmethod
    def _parse_dev_server(cls, data: object) -> DevServerConfig:
        if data is None:
            return DevServerConfig()

        if not isinstance(data, dict):
            raise ValueError("dev_server section must be a dictionary")

        port = data.get("port")
        if port is not None and not isinstance(port, int):
            raise ValueError("dev_server.port must be an integer")

        return DevServerConfig(port=port)

    @classmethod
    def _parse_live_reload(cls, data: object) -> LiveReloadConfig:
        """Parse live_reload configuration section.

        Args:
            data: Raw live_reload section data

        Returns:
            LiveReloadConfig instance
        """
        if data is None:
            return LiveReloadConfig()

        if not isinstance(data, dict):
            raise ValueError("live_reload section must be a dictionary")

        enabled = data.get("enabled", True)
        if not isinstance(enabled, bool):
            raise ValueError("live_reload.enabled must be a boolean")

        debounce_ms = data.get("debounce_ms", 300)
        if not isinstance(debounce_ms, int) or isinstance(debounce_ms, bool):
            raise ValueError("live_reload.debounce_ms must be an integer")

        watch_patterns_raw = data.get("watch_patterns")
        watch_patterns: list[str] | None = None
        if watch_patterns_raw is not None:
            if not isinstance(watch_patterns_raw, list):
                raise ValueError("live_reload.watch_patterns must be a list")
            watch_patterns = []
            for item in watch_patterns_raw:
                if not isinstance(item, str):
                    raise ValueError("live_reload.watch_patterns items must be strings")
                watch_patterns.append(item)

        return LiveReloadConfig(
            enabled=enabled,
            debounce_ms=debounce_ms,
            watch_patterns=watch_patterns,
        )

    def with_overrides(
        self,
        *,
        host: str | None = None,
        port: int | None = None,
        routes_dir: Path | None = None,
        mode: ViewMode | None = None,
        sorting: SortOrder | None = None,
        dev_server_port: int | None = None,
        live_reload_enabled: bool | None = None,
    ) -> Config:
        """Create a new Config with CLI overrides applied.

        Only non-None values override the existing config. The original
        Config is not modified.

        Args:
            host: Override server.host
            port: Override server.port
            routes_dir: Override project.routes_dir
            mode: Override view.mode
            sorting: Override view.sorting
            dev_server_port: Override dev_server.port
            live_reload_enabled: Override live_reload.enabled

        Returns:
            New Config instance with overrides applied
        """
        server = self.server
        if host is not None or port is not None:
            server = replace(
                self.server,
                host=host if host is not None else self.server.host,
                port=port if port is not None else self.server.port,
            )

        project = self.project
        if routes_dir is not None:
            project = replace(self.project, routes_dir=routes_dir)

        view = self.view
        if mode is not None or sorting is not None:
            view = replace(
                self.view,
                mode=mode if mode is not None else self.view.mode,
                sorting=sorting if sorting is not None else self.view.sorting,
            )

        dev_server = self.dev_server
        if dev_server_port is not None:
            dev_server = replace(self.dev_server, port=dev_server_port)

        live_reload = self.live_reload
        if live_reload_enabled is not None:
            live_reload = replace(self.live_reload, enabled=live_reload_enabled)

        return replace(
            self,
            server=server,
            project=project,
            view=view,
            dev_server=dev_server,
            live_reload=live_reload,
        )
