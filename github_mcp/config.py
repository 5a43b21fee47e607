"""
Server configuration.

Values come from the process environment (a local .env is loaded first)
and can be overridden from the command line.
"""

import argparse
import logging
import os
from dataclasses import dataclass, replace
from typing import List, Optional

from dotenv import load_dotenv

from .filters import FilterConfig

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.github.com/"

_TRUTHY = ("1", "true", "yes", "on")


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUTHY


def api_base_url(host: str) -> str:
    """REST base URL for github.com or a GitHub Enterprise host."""
    if not host:
        return DEFAULT_API_URL
    if not host.startswith(("http://", "https://")):
        host = f"https://{host}"
    return f"{host.rstrip('/')}/api/v3/"


@dataclass(frozen=True)
class Settings:
    token: str = ""
    gh_host: str = ""
    read_only: bool = False
    exclude_tools: str = ""
    include_tools: str = ""
    translations_file: str = ""
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        load_dotenv()
        return cls(
            token=os.getenv("GITHUB_PERSONAL_ACCESS_TOKEN", ""),
            gh_host=os.getenv("GITHUB_HOST", ""),
            read_only=_env_flag("GITHUB_READ_ONLY"),
            exclude_tools=os.getenv("GITHUB_EXCLUDE_TOOLS", ""),
            include_tools=os.getenv("GITHUB_INCLUDE_TOOLS", ""),
            translations_file=os.getenv("GITHUB_TRANSLATIONS_FILE", ""),
            host=os.getenv("MCP_HOST", "0.0.0.0"),
            port=int(os.getenv("MCP_PORT", "8000")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def api_url(self) -> str:
        return api_base_url(self.gh_host)

    def filter_config(self) -> FilterConfig:
        return FilterConfig.from_strings(
            exclude_tools=self.exclude_tools,
            include_tools=self.include_tools,
            read_only=self.read_only,
        )


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="github-mcp-server",
        description="GitHub tool server for MCP agents",
    )
    parser.add_argument("--read-only", action="store_true", default=None,
                        help="Only register tools that do not modify GitHub state")
    parser.add_argument("--exclude-tools", default=None,
                        help="Comma-separated tool names to leave out")
    parser.add_argument("--include-tools", default=None,
                        help="Comma-separated tool names to expose (overrides --exclude-tools)")
    parser.add_argument("--gh-host", default=None,
                        help="GitHub Enterprise hostname")
    parser.add_argument("--translations-file", default=None,
                        help="JSON file with description overrides")
    parser.add_argument("--host", default=None)
    parser.add_argument("--port", type=int, default=None)
    parser.add_argument("--log-level", default=None)
    return parser


def load_settings(argv: Optional[List[str]] = None) -> Settings:
    """Environment first, then any command line flag that was given."""
    settings = Settings.from_env()
    args = build_arg_parser().parse_args(argv)

    overrides = {
        "read_only": args.read_only,
        "exclude_tools": args.exclude_tools,
        "include_tools": args.include_tools,
        "gh_host": args.gh_host,
        "translations_file": args.translations_file,
        "host": args.host,
        "port": args.port,
        "log_level": args.log_level,
    }
    settings = replace(settings, **{k: v for k, v in overrides.items() if v is not None})

    if not settings.token:
        logger.warning("GITHUB_PERSONAL_ACCESS_TOKEN not set; requests will be unauthenticated")
    return settings
