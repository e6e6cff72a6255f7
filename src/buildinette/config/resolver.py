"""Collects BUILDINETTE_CONFIG__* environment overrides."""

from __future__ import annotations

import os
from collections.abc import Mapping

import yaml

from buildinette.common import JsonDict
from buildinette.constants import ENV_PREFIX


def env_overrides(environ: Mapping[str, str] | None = None) -> JsonDict:
    """Nested mapping built from the environment.

    ``BUILDINETTE_CONFIG__LOGGING__LOG_LEVEL=DEBUG`` becomes
    ``{"logging": {"log_level": "DEBUG"}}``. Values are parsed as YAML scalars
    so ``false`` and ``3`` keep their types; unparsable values stay strings.
    """
    environ = os.environ if environ is None else environ
    overrides: JsonDict = {}

    for key, value in sorted(environ.items()):
        if not key.startswith(ENV_PREFIX):
            continue
        path = key[len(ENV_PREFIX) :].strip("_")
        segments = [segment.lower() for segment in path.split("__") if segment]
        if not segments:
            continue

        cursor = overrides
        for segment in segments[:-1]:
            child = cursor.setdefault(segment, {})
            if not isinstance(child, dict):
                child = cursor[segment] = {}
            cursor = child
        cursor[segments[-1]] = _parse_scalar(value)

    return overrides


def _parse_scalar(raw: str) -> object:
    try:
        return yaml.safe_load(raw)
    except yaml.YAMLError:
        return raw
