"""Environment variable lookup that keeps non-UTF-8 values usable.

A variable is either set to text, set to bytes that do not decode as UTF-8
(still usable as an opaque path), or not set at all.
"""

from __future__ import annotations

import dataclasses
import os
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping


class EnvState(StrEnum):
    TEXT = "text"
    OPAQUE = "opaque"
    ABSENT = "absent"


@dataclasses.dataclass(frozen=True)
class EnvLookup:
    state: EnvState
    value: str | bytes | None = None


def lookup_env(name: str, environ: Mapping[str, str] | Mapping[bytes, bytes] | None = None) -> EnvLookup:
    """Look up *name*, distinguishing unset from set-but-undecodable.

    Args:
        name: Variable name.
        environ: Mapping to read from. Defaults to ``os.environb`` where the
            platform has a bytes environment, ``os.environ`` otherwise.
            Bytes-keyed and str-keyed mappings are both accepted.
    """
    if environ is None:
        environ = os.environb if os.supports_bytes_environ else os.environ

    key: str | bytes = name
    if any(isinstance(k, bytes) for k in environ):
        key = os.fsencode(name)

    raw = environ.get(key)  # type: ignore[call-overload]
    if raw is None:
        return EnvLookup(EnvState.ABSENT)
    if isinstance(raw, str):
        return EnvLookup(EnvState.TEXT, raw)

    try:
        return EnvLookup(EnvState.TEXT, raw.decode("utf-8"))
    except UnicodeDecodeError:
        return EnvLookup(EnvState.OPAQUE, raw)
