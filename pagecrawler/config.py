"""Configuration for crawl runs.

Configuration comes from an optional YAML file, overridden by environment
variables:

- ``REMOTE_BROWSER``: host:port of a remote browser; when set the session
  connects to ``http://<host:port>`` instead of launching a browser
- ``EXECUTABLE_PATH``: local browser binary, used only when launching
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from .browser.factory import BrowserConfig, BrowserEngineType
from .errors import ConfigLoadError
from .services.cookies import DEFAULT_CONSENT_ELEMENT_ID
from .services.navigation import DEFAULT_NAVIGATION_TIMEOUT_MS
from .services.pagination import DEFAULT_LINK_SUFFIX, DEFAULT_PAGINATION_SELECTOR

logger = logging.getLogger(__name__)

REMOTE_BROWSER_ENV = "REMOTE_BROWSER"
EXECUTABLE_PATH_ENV = "EXECUTABLE_PATH"


class BrowserSettings(BaseModel):
    """Browser connection and page settings."""

    remote_endpoint: Optional[str] = Field(default=None, description="CDP endpoint to connect to")
    executable_path: Optional[str] = Field(default=None, description="Local browser binary")
    engine: str = Field(default=BrowserEngineType.CHROMIUM, description="Engine used when launching")
    headless: bool = Field(default=True, description="Run launched browser headless")
    ignore_https_errors: bool = Field(default=True, description="Ignore TLS certificate errors")
    viewport: Dict[str, int] = Field(
        default_factory=lambda: {'width': 1920, 'height': 1080},
        description="Viewport size"
    )
    user_agent: Optional[str] = Field(default=None, description="User-Agent override")
    locale: Optional[str] = Field(default=None, description="Page locale")

    @field_validator('engine')
    @classmethod
    def validate_engine(cls, v):
        valid_engines = {BrowserEngineType.CHROMIUM, BrowserEngineType.FIREFOX, BrowserEngineType.WEBKIT}
        if v not in valid_engines:
            raise ValueError(f"Engine must be one of: {sorted(valid_engines)}")
        return v

    def to_browser_config(self) -> BrowserConfig:
        return BrowserConfig(
            remote_endpoint=self.remote_endpoint,
            executable_path=self.executable_path,
            engine=self.engine,
            headless=self.headless,
            viewport=self.viewport,
            user_agent=self.user_agent,
            ignore_https_errors=self.ignore_https_errors,
            locale=self.locale,
        )


class CrawlConfig(BaseModel):
    """Root configuration for a crawl run."""

    target_url: str = Field(description="Page to crawl")
    output_dir: Path = Field(default=Path("output"), description="Directory for snapshot and screenshot")
    snapshot_file: str = Field(default="output.json", description="Event log snapshot file name")
    screenshot_file: str = Field(default="screenshot.png", description="Screenshot file name")
    consent_element_id: str = Field(
        default=DEFAULT_CONSENT_ELEMENT_ID,
        description="DOM id of the consent overlay close control"
    )
    pagination_selector: str = Field(
        default=DEFAULT_PAGINATION_SELECTOR,
        description="Selector of the pagination anchors"
    )
    link_suffix: str = Field(default=DEFAULT_LINK_SUFFIX, description="URL ending of result links")
    navigation_timeout_ms: int = Field(
        default=DEFAULT_NAVIGATION_TIMEOUT_MS,
        gt=0,
        description="Navigation timeout in milliseconds"
    )
    browser: BrowserSettings = Field(default_factory=BrowserSettings)

    @field_validator('target_url')
    @classmethod
    def validate_target_url(cls, v):
        if not v.startswith(('http://', 'https://')):
            raise ValueError("target_url must be an http(s) URL")
        return v

    @property
    def snapshot_path(self) -> Path:
        return self.output_dir / self.snapshot_file

    @property
    def screenshot_path(self) -> Path:
        return self.output_dir / self.screenshot_file


def remote_endpoint_from_env(value: str) -> str:
    """Turn a REMOTE_BROWSER value (host:port) into an endpoint URL."""
    if "://" in value:
        return value
    return f"http://{value}"


def apply_environment(data: Dict[str, Any], environ: Mapping[str, str]) -> Dict[str, Any]:
    """Apply environment variable overrides to raw configuration data."""
    browser = dict(data.get('browser') or {})

    remote = environ.get(REMOTE_BROWSER_ENV)
    if remote:
        browser['remote_endpoint'] = remote_endpoint_from_env(remote)

    executable = environ.get(EXECUTABLE_PATH_ENV)
    if executable:
        browser['executable_path'] = executable

    data = dict(data)
    data['browser'] = browser
    return data


def load_config(
    config_path: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> CrawlConfig:
    """Load crawl configuration.

    Precedence, lowest first: YAML file, environment variables, explicit
    overrides (e.g. from CLI options).

    Args:
        config_path: Optional YAML configuration file
        overrides: Top-level values to set; a ``browser`` dict is merged
        environ: Environment mapping (defaults to ``os.environ``)

    Raises:
        ConfigLoadError: If the file is missing or invalid
    """
    data: Dict[str, Any] = {}

    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise ConfigLoadError(f"Configuration file not found: {path}")
        try:
            with open(path, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigLoadError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigLoadError(f"Configuration in {path} must be a mapping")

    data = apply_environment(data, os.environ if environ is None else environ)

    for key, value in (overrides or {}).items():
        if value is None:
            continue
        if key == 'browser':
            data['browser'] = {**data.get('browser', {}), **{k: v for k, v in value.items() if v is not None}}
        else:
            data[key] = value

    try:
        config = CrawlConfig(**data)
    except ValidationError as e:
        raise ConfigLoadError(f"Configuration validation failed: {e}") from e

    logger.debug(f"Loaded configuration for {config.target_url}")
    return config
