from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


def _project_root_from_this_file(this_file: Path) -> Path:
    # dashboard/settings.py -> project root is parent of "dashboard"
    return this_file.resolve().parents[1]


def project_root() -> Path:
    return _project_root_from_this_file(Path(__file__))


def load_settings(root: Optional[Path] = None) -> dict:
    root = root or project_root()
    cfg_path = root / "config" / "settings.yaml"
    if not cfg_path.exists():
        raise FileNotFoundError(f"Missing config file: {cfg_path}")
    with cfg_path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def configure_logging(cfg: dict) -> None:
    level = str(cfg.get("logging", {}).get("level", "INFO")).upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@dataclass(frozen=True)
class DataPaths:
    project_root: Path
    raw_dir: Path
    marts_dir: Path

    @staticmethod
    def from_config(root: Path, cfg: dict) -> "DataPaths":
        out = cfg.get("output", {})
        return DataPaths(
            project_root=root,
            raw_dir=root / out.get("raw_dir", "data/raw"),
            marts_dir=root / out.get("marts_dir", "data/marts"),
        )

    @staticmethod
    def default() -> "DataPaths":
        root = project_root()
        return DataPaths.from_config(root, load_settings(root))

    @property
    def campaigns_csv(self) -> Path:
        return self.raw_dir / "campaigns.csv"

    @property
    def benchmarks_csv(self) -> Path:
        return self.marts_dir / "mart_benchmarks.csv"

    def ensure(self) -> None:
        self.raw_dir.mkdir(parents=True, exist_ok=True)
        self.marts_dir.mkdir(parents=True, exist_ok=True)
