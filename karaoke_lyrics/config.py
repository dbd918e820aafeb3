from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

FORMATS = ("enhanced", "standard", "char")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "karaoke-lyrics"
    return Path.home() / ".config" / "karaoke-lyrics"


def _config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Output
    default_format: str  # one of FORMATS
    decode_entities: bool

    # Input files
    encoding: str


def load_config() -> AppConfig:
    config_dir = _config_dir()
    return AppConfig(
        config_dir=config_dir,
        default_format=_load_format(config_dir),
        decode_entities=os.getenv("KARAOKE_LYRICS_DECODE_ENTITIES", "1") not in ("0", "false", "False"),
        encoding=os.getenv("KARAOKE_LYRICS_ENCODING", "utf-8"),
    )


def _read_file(cfg_path: Path) -> dict:
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def _load_format(config_dir: Path) -> str:
    # Priority: config.json -> KARAOKE_LYRICS_FORMAT -> "enhanced"
    cfg_path = config_dir / "config.json"
    if cfg_path.exists():
        raw = str(_read_file(cfg_path).get("format") or "").lower()
        if raw in FORMATS:
            return raw
    env_fmt = (os.getenv("KARAOKE_LYRICS_FORMAT") or "").lower()
    if env_fmt in FORMATS:
        return env_fmt
    return "enhanced"


def save_config_format(fmt: str) -> None:
    fmt = fmt.lower()
    if fmt not in FORMATS:
        raise ValueError(f"format must be one of: {', '.join(FORMATS)}")
    cfg_path = _config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _read_file(cfg_path) if cfg_path.exists() else {}
    data["format"] = fmt
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
