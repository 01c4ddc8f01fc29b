from pathlib import Path

from . import config


def ensure_data_dirs():
    for p in [config.storage_dir(), config.exports_dir()]:
        Path(p).mkdir(parents=True, exist_ok=True)
