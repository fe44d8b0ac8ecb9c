"""
Loading of the JSON configuration file.
"""

import json
import logging
from typing import Any, Dict

from .errors import ConfigError
from .values import NonFiniteFloats

DEFAULTS: Dict[str, Any] = {
    "loglevel": "INFO",
    "hosts": {},
    "nonfinite_floats": "throw",
    "nonfinite_strings": {},
}

FLOAT_POLICIES = ("throw", "convert")


def load_config(configfile: str) -> Dict[str, Any]:
    try:
        with open(configfile, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except (OSError, ValueError) as err:
        raise ConfigError(f"cannot read {configfile}: {err}") from err
    return check_config(loaded)


def check_config(loaded: Any) -> Dict[str, Any]:
    if not isinstance(loaded, dict):
        raise ConfigError("top level must be an object")
    cfg = dict(DEFAULTS)
    cfg.update(loaded)

    lvl = cfg["loglevel"]
    if not isinstance(lvl, int) and not isinstance(
        logging.getLevelName(lvl), int
    ):
        raise ConfigError(f'unknown loglevel "{lvl}"')

    hosts = cfg["hosts"]
    if not isinstance(hosts, dict) or not all(
        isinstance(v, str) for v in hosts.values()
    ):
        raise ConfigError("hosts must map keys to host strings")

    if cfg["nonfinite_floats"] not in FLOAT_POLICIES:
        raise ConfigError(
            f'nonfinite_floats must be one of {", ".join(FLOAT_POLICIES)}, '
            f'not "{cfg["nonfinite_floats"]}"'
        )
    strings = cfg["nonfinite_strings"]
    if not isinstance(strings, dict):
        raise ConfigError("nonfinite_strings must be an object")
    unknown = set(strings) - {"positive_infinity", "negative_infinity", "nan"}
    if unknown:
        raise ConfigError(
            "unknown nonfinite_strings: " + ", ".join(sorted(unknown))
        )
    return cfg


def float_policy(cfg: Dict[str, Any]) -> NonFiniteFloats:
    return NonFiniteFloats(
        throw=cfg["nonfinite_floats"] == "throw",
        **cfg["nonfinite_strings"],
    )
