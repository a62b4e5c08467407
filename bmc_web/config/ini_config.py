########## ini_config.py

import os
from configparser import ConfigParser
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

INI_DEFAULT_NAME = "BMC_Analyst.ini"


@dataclass(frozen=True)
class AppSettings:
    history_dir: Path
    storage_key: str
    history_capacity: int

    gemini_model: str
    timeout_seconds: int
    api_key_env: str
    api_key: Optional[str]

    flask_host: str
    flask_port: int
    flask_debug: bool

    log_level: str


class IniConfig:
    """
    Adapter around ConfigParser and filesystem resolution.
    Keeps INI handling out of your app/service code.
    """

    def __init__(self, ini_path: Path):
        self._ini_path = ini_path
        self._cfg = ConfigParser()
        read_ok = self._cfg.read(str(ini_path), encoding="utf-8-sig")
        if not read_ok:
            raise FileNotFoundError(f"INI file not found or unreadable: {ini_path}")

    @property
    def ini_path(self) -> Path:
        return self._ini_path

    @staticmethod
    def from_env_or_default() -> "IniConfig":
        ini_raw = (os.getenv("APP_INI") or "").strip()
        # If APP_INI is not set, default to repo-root-relative ini location
        ini_path = Path(ini_raw) if ini_raw else (Path(__file__).resolve().parents[2] / INI_DEFAULT_NAME)
        return IniConfig(ini_path)

    def _cfg_path(self, section: str, key: str, fallback: str) -> Path:
        """
        Reads a filesystem path from INI and resolves it.
        Relative paths are taken relative to the INI file's folder.
        """
        raw = (self._cfg.get(section, key, fallback="") or "").strip() or fallback
        raw = os.path.expandvars(os.path.expanduser(raw))
        path = Path(raw)
        if not path.is_absolute():
            path = self._ini_path.resolve().parent / path
        return path.resolve()

    def _cfg_str(self, section: str, key: str, fallback: str) -> str:
        return (self._cfg.get(section, key, fallback=fallback) or "").strip() or fallback

    def load_settings(self) -> AppSettings:
        # History
        history_dir = self._cfg_path("paths", "history_dir", "data")
        storage_key = self._cfg_str("history", "storage_key", "bmc_history")
        history_capacity = self._cfg.getint("history", "capacity", fallback=20)

        # Gemini
        gemini_model = self._cfg_str("gemini", "model", "gemini-2.5-flash")
        timeout_seconds = self._cfg.getint("gemini", "timeout_seconds", fallback=120)
        api_key_env = self._cfg_str("gemini", "api_key_env", "API_KEY")
        api_key = (os.getenv(api_key_env) or "").strip() or None

        # Flask
        flask_host = self._cfg_str("flask", "host", "127.0.0.1")
        flask_port = self._cfg.getint("flask", "port", fallback=5000)
        flask_debug = self._cfg.getboolean("flask", "debug", fallback=False)

        log_level = self._cfg_str("logging", "level", "INFO").upper()

        # Validate
        if history_capacity < 1:
            raise ValueError(f"history.capacity must be >= 1, got {history_capacity}")
        if timeout_seconds < 1:
            raise ValueError(f"gemini.timeout_seconds must be >= 1, got {timeout_seconds}")

        history_dir.mkdir(parents=True, exist_ok=True)

        return AppSettings(
            history_dir=history_dir,
            storage_key=storage_key,
            history_capacity=history_capacity,
            gemini_model=gemini_model,
            timeout_seconds=timeout_seconds,
            api_key_env=api_key_env,
            api_key=api_key,
            flask_host=flask_host,
            flask_port=flask_port,
            flask_debug=flask_debug,
            log_level=log_level,
        )
