import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DEBUG_DIR: Path = field(init=False)

    NTFY_TOPIC: str = "grid-trie"
    NTFY_URL: str = "https://ntfy.sh"
    NOTIFY: bool = False

    # Simple paths grow exponentially with the cell count: 12 cells (3x4) is
    # about 200k strings, 16 cells (4x4) is about 12M and exhausts memory.
    MAX_GRID_CELLS: int = 12
    MAX_PATH_LENGTH: int = 0
    MAX_QUERIES: int = 1000

    MAX_UPLOAD_BYTES: int = 100_000
    DEBUG: bool = False

    PORT: int = 10001

    def __post_init__(self):
        self.DEBUG_DIR = self.BASE_DIR / "debug"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                setattr(self, fld, _coerce(env_val, type(current)))


# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_GRID_CELLS": int,
    "MAX_PATH_LENGTH": int,
    "MAX_QUERIES": int,
    "NOTIFY": bool,
    "NTFY_TOPIC": str,
    "DEBUG": bool,
}


def _coerce(value, target: type):
    if target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected bool, got {value!r}")
    if target is int:
        if isinstance(value, bool) or isinstance(value, float):
            raise ValueError(f"expected int, got {value!r}")
        return int(value)
    if target is float:
        return float(value)
    if issubclass(target, Path):
        return Path(value)
    return str(value)


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, /, **values) -> dict[str, str]:
    """Apply editable values to cfg. Returns {field: error} for rejected ones.

    Valid fields are applied even when others in the same call fail.
    """
    errors: dict[str, str] = {}
    for name, value in values.items():
        if not hasattr(cfg, name):
            errors[name] = "unknown setting"
            continue
        if name not in EDITABLE_FIELDS:
            errors[name] = "not editable"
            continue
        try:
            coerced = _coerce(value, EDITABLE_FIELDS[name])
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        if EDITABLE_FIELDS[name] is int and coerced < 0:
            errors[name] = "must be >= 0"
            continue
        setattr(cfg, name, coerced)
    return errors


settings = Settings()
