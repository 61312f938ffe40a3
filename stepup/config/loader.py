import os
import yaml
from pathlib import Path
from pydantic import ValidationError

from stepup.models.config_model import CounterConfig
from stepup.utils.logger import log

CONFIG_PATH = Path(__file__).parent / "counter.yaml"
CONFIG_ENV = "STEPUP_CONFIG"


class ConfigError(ValueError):
    pass


def _merge(base, extra):
    out = dict(base)
    for k, v in extra.items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _merge(out[k], v)
        else:
            out[k] = v
    return out


def load_config(path=None, **overrides) -> CounterConfig:
    """
    Load counter configuration.

    Resolution: explicit path, then $STEPUP_CONFIG, then the bundled
    counter.yaml. Keyword overrides are merged per section, e.g.
    load_config(thresholds={"down_deg": 120}).
    """
    path = Path(path or os.environ.get(CONFIG_ENV) or CONFIG_PATH)

    try:
        with open(path, "r") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Unable to read config {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"Config {path} must be a mapping")

    try:
        cfg = CounterConfig.model_validate(_merge(raw, overrides))
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e

    log(
        f"[INFO] Config: loaded {path.name} "
        f"(up>{cfg.thresholds.up_deg:g}, down<{cfg.thresholds.down_deg:g})"
    )
    return cfg
