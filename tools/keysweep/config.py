from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, Optional, Union

import orjson
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .errors import InvalidConfigError, NotFoundError
from .scanner import DEFAULT_TEMPLATE, validate_template
from .walker import DEFAULT_MASK, build_mask_pattern, parse_mask


class ScanConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    mask: str = DEFAULT_MASK
    template: str = DEFAULT_TEMPLATE
    max_workers: Optional[int] = None
    follow_symlinks: bool = True

    @field_validator("mask")
    @classmethod
    def mask_is_extension_list(cls, value: str) -> str:
        try:
            parse_mask(value)
        except InvalidConfigError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("template")
    @classmethod
    def template_has_placeholder(cls, value: str) -> str:
        try:
            validate_template(value)
        except InvalidConfigError as exc:
            raise ValueError(str(exc)) from exc
        return value

    @field_validator("max_workers")
    @classmethod
    def workers_positive(cls, value: Optional[int]) -> Optional[int]:
        if value is not None and value < 1:
            raise ValueError("max_workers must be at least 1")
        return value

    def file_pattern(self) -> re.Pattern[str]:
        return build_mask_pattern(self.mask)


def _validate(data: Dict[str, Any], source: str) -> ScanConfig:
    try:
        return ScanConfig.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}" for err in exc.errors()
        )
        raise InvalidConfigError(f"Invalid configuration ({source}): {problems}") from exc


def load_config(path: Optional[Union[str, Path]] = None) -> ScanConfig:
    if path is None:
        return ScanConfig()
    cfg_path = Path(path)
    if not cfg_path.is_file():
        raise NotFoundError(f'Config file "{cfg_path.resolve()}" does not exist', cfg_path)
    try:
        data = orjson.loads(cfg_path.read_bytes())
    except orjson.JSONDecodeError as exc:
        raise InvalidConfigError(f"{cfg_path}: unable to parse json: {exc}", cfg_path) from exc
    if not isinstance(data, dict):
        raise InvalidConfigError(f"{cfg_path}: configuration must be a JSON object", cfg_path)
    return _validate(data, str(cfg_path))


def with_overrides(base: ScanConfig, **overrides: Any) -> ScanConfig:
    """Return ``base`` with every non-None override applied and re-validated."""
    data = base.model_dump()
    data.update({name: value for name, value in overrides.items() if value is not None})
    return _validate(data, "command line")
