import argparse
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml
from dotenv import dotenv_values

from . import TOOL_ID, TOOL_URL
from .errors import EXIT_USAGE, ConfigError
from .xca_client import DEFAULT_PORT, DEFAULT_TIMEOUT

ENV_FILE_NAME = ".xcaenv"
SETTINGS_FILE_NAME = "settings.yaml"

# Settings field -> environment variable.
ENV_KEYS = {
    "host": "XCAHOST",
    "port": "XCAPORT",
    "timeout": "XCATIMEOUT",
    "userid": "XCAUSERID",
    "secret": "XCASECRET",
    "verify_ssl": "XCAVERIFYSSL",
}

DEFAULTS: Dict[str, Any] = {
    "host": "",
    "port": DEFAULT_PORT,
    "timeout": DEFAULT_TIMEOUT,
    "userid": "",
    "secret": "",
    "verify_ssl": False,
}

USAGE_EPILOG = f"""\
All options that take a value can be set via environment variables:
  XCAHOST           -->  -host
  XCAPORT           -->  -port
  XCATIMEOUT        -->  -timeout
  XCAUSERID         -->  -userid
  XCASECRET         -->  -secret
  XCAVERIFYSSL      -->  -verify

Environment variables can also be configured via a file called {ENV_FILE_NAME},
located in the current directory or in the home directory of the current
user. Explicit options win over the environment, the environment wins over
env files, and the current directory wins over the home directory.
"""


def env_bool(value: Any, default: bool = False) -> bool:
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, value: Any) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"invalid value for {name}: {value!r}")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ConfigError(f"invalid value for {name}: {value!r}") from None
    if number < 0:
        raise ConfigError(f"invalid value for {name}: {value!r}")
    return number


class Settings:
    def __init__(
        self,
        host: str = "",
        port: int = DEFAULT_PORT,
        timeout: int = DEFAULT_TIMEOUT,
        userid: str = "",
        secret: str = "",
        verify_ssl: bool = False,
        csv_path: Optional[str] = None,
        verbose: bool = False,
        print_version: bool = False,
    ) -> None:
        self.host = host
        self.port = port
        self.timeout = timeout
        self.userid = userid
        self.secret = secret
        self.verify_ssl = verify_ssl
        self.csv_path = csv_path
        self.verbose = verbose
        self.print_version = print_version

    def __repr__(self) -> str:
        return (
            f"Settings(host={self.host!r}, port={self.port}, timeout={self.timeout}, "
            f"userid={self.userid!r}, verify_ssl={self.verify_ssl})"
        )

    def validate(self) -> None:
        if not self.host:
            raise ConfigError("no XCA host given (use -host or XCAHOST)")
        if not 0 < self.port < 65536:
            raise ConfigError(f"port {self.port} out of range")
        if self.timeout <= 0:
            raise ConfigError("timeout must be a positive number of seconds")


# ---------------------- Configuration sources ---------------------------
def default_env_files(cwd: Optional[Path] = None, home: Optional[Path] = None) -> List[Path]:
    # Lowest precedence first: home directory, then current directory.
    cwd = cwd or Path.cwd()
    if home is None:
        try:
            home = Path.home()
        except RuntimeError:
            return [cwd / ENV_FILE_NAME]
    return [home / ENV_FILE_NAME, cwd / ENV_FILE_NAME]


def load_settings_file(path: Path) -> Dict[str, Any]:
    # Optional YAML file; only the "xca" section is used.
    if not path.is_file():
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ConfigError(f"could not load settings file <{path}>: {exc}") from exc
    section = data.get("xca") if isinstance(data, dict) else None
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError(f"settings file <{path}>: 'xca' must be a mapping")
    return {k: v for k, v in section.items() if k in DEFAULTS and v is not None}


def load_env_file(path: Path) -> Dict[str, str]:
    if not path.is_file():
        return {}
    try:
        values = dotenv_values(path)
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"could not load env file <{path}>: {exc}") from exc
    return _from_env(values)


def _from_env(env: Mapping[str, Optional[str]]) -> Dict[str, str]:
    return {field: env[key] for field, key in ENV_KEYS.items() if env.get(key) is not None}


def collect_sources(
    settings_path: Optional[Path] = None,
    env_files: Optional[Sequence[Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Dict[str, Any]:
    """Merge defaults, settings file, env files and environment (later wins)."""
    settings_path = settings_path if settings_path is not None else Path.cwd() / SETTINGS_FILE_NAME
    env_files = env_files if env_files is not None else default_env_files()
    environ = environ if environ is not None else os.environ

    merged: Dict[str, Any] = dict(DEFAULTS)
    merged.update(load_settings_file(settings_path))
    for env_file in env_files:
        merged.update(load_env_file(env_file))
    merged.update(_from_env(environ))
    return merged


# ---------------------- CLI ---------------------------------------------
class _ArgumentParser(argparse.ArgumentParser):
    # Usage output goes to stderr and exits 1, help included.

    def print_help(self, file=None) -> None:
        super().print_help(file or sys.stderr)

    def exit(self, status: int = 0, message: Optional[str] = None) -> None:
        if message:
            self._print_message(message, sys.stderr)
        sys.exit(EXIT_USAGE)

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="xca-bssidlister",
        description=(
            f"{TOOL_ID}\n{TOOL_URL}\n\n"
            "This tool queries the XCA API, fetches the list of Access Points and\n"
            "associated (B)SSIDs and prints CSV to stdout."
        ),
        epilog=USAGE_EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    # Defaults are None so that only flags actually given override lower sources.
    parser.add_argument("-host", "--host", default=None, help="XCA Hostname / IP")
    parser.add_argument("-port", "--port", type=int, default=None,
                        help=f"HTTP port where XCA is listening (default: {DEFAULT_PORT})")
    parser.add_argument("-timeout", "--timeout", type=int, default=None,
                        help=f"Timeout for HTTP(S) connections in seconds (default: {DEFAULT_TIMEOUT})")
    parser.add_argument("-userid", "--userid", default=None, help="Client ID for authentication")
    parser.add_argument("-secret", "--secret", default=None, help="Client Secret for authentication")
    parser.add_argument("-verify", "--verify", dest="verify_ssl", action="store_true", default=None,
                        help="Verify the XCA TLS certificate")
    parser.add_argument("-csv", "--csv", dest="csv_path", default=None,
                        help="Write CSV to this file instead of stdout")
    parser.add_argument("-verbose", "--verbose", action="store_true", help="Print progress to stderr")
    parser.add_argument("-version", "--version", dest="print_version", action="store_true",
                        help="Print version information and exit")
    return parser


def load_settings(
    argv: Optional[Sequence[str]] = None,
    settings_path: Optional[Path] = None,
    env_files: Optional[Sequence[Path]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> Settings:
    args = build_parser().parse_args(argv)
    if args.print_version:
        # -version never depends on the rest of the configuration.
        return Settings(verbose=args.verbose, print_version=True)

    merged = collect_sources(settings_path, env_files, environ)
    for field in DEFAULTS:
        value = getattr(args, field)
        if value is not None:
            merged[field] = value

    return Settings(
        host=str(merged["host"]).strip(),
        port=_env_int("port", merged["port"]),
        timeout=_env_int("timeout", merged["timeout"]),
        userid=str(merged["userid"]),
        secret=str(merged["secret"]),
        verify_ssl=env_bool(merged["verify_ssl"]),
        csv_path=args.csv_path,
        verbose=args.verbose,
        print_version=args.print_version,
    )
