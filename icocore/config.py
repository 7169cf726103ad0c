"""
Builder configuration

Defaults can be overridden from the environment:

    ICOBUILDER_SIZES    comma separated sizes, e.g. "16,32,48,256"
    ICOBUILDER_FILTER   resampling filter name, e.g. "lanczos"
    ICOBUILDER_WORKERS  number of worker threads
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional

from .build_system import DEFAULT_OUT_DIR_VAR
from .codecs import DEFAULT_FILTER, FilterType
from .sizes import IconSizes

ENV_SIZES = "ICOBUILDER_SIZES"
ENV_FILTER = "ICOBUILDER_FILTER"
ENV_WORKERS = "ICOBUILDER_WORKERS"


@dataclass
class BuilderConfig:
    """Icon builder settings."""
    sizes: IconSizes = field(default_factory=IconSizes.default)
    filter_type: FilterType = DEFAULT_FILTER
    max_workers: int = 1
    out_dir_var: str = DEFAULT_OUT_DIR_VAR

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BuilderConfig":
        """
        Build a config from ICOBUILDER_* variables, falling back to defaults.

        Raises:
            InvalidIconSizeError: If ICOBUILDER_SIZES has a non-integer item
            ValueError: If ICOBUILDER_FILTER or ICOBUILDER_WORKERS is invalid
        """
        env = os.environ if environ is None else environ
        config = cls()

        if env.get(ENV_SIZES):
            config.sizes = IconSizes.parse(env[ENV_SIZES])
        if env.get(ENV_FILTER):
            config.filter_type = FilterType.parse(env[ENV_FILTER])
        if env.get(ENV_WORKERS):
            try:
                config.max_workers = int(env[ENV_WORKERS])
            except ValueError:
                raise ValueError(f"{ENV_WORKERS} must be an integer, got {env[ENV_WORKERS]!r}") from None

        return config
