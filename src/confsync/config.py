"""Runtime configuration for confsync."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from confsync.exceptions import ConfsyncConfigError

_VALID_URL_PARAM_SOURCES = frozenset({"search", "hash"})


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _parse_sources(value: str) -> tuple[str, ...]:
    sources = tuple(part.strip().lower() for part in value.split(",") if part.strip())
    unknown = [source for source in sources if source not in _VALID_URL_PARAM_SOURCES]
    if unknown:
        raise ConfsyncConfigError(f"Unknown URL parameter source(s): {', '.join(unknown)}")
    return sources


@dataclasses.dataclass(frozen=True)
class SyncConfig:
    """Store and propagation configuration.

    Parameters
    ----------
    max_dispatch_depth : int
        Maximum nesting of re-entrant dispatch calls before the store
        gives up with :class:`~confsync.exceptions.ConfsyncDispatchLoopError`.
    trace_dispatch : bool
        Emit a redacted DEBUG log line for every event entering the store.
    url_param_sources : tuple of str
        URL parts scanned for parameters, in increasing precedence.
        ``"search"`` is the query string, ``"hash"`` the fragment.
    """

    max_dispatch_depth: int = 32
    trace_dispatch: bool = False
    url_param_sources: tuple[str, ...] = ("search", "hash")

    def __post_init__(self) -> None:
        if self.max_dispatch_depth < 1:
            raise ConfsyncConfigError("max_dispatch_depth must be at least 1")
        unknown = [source for source in self.url_param_sources if source not in _VALID_URL_PARAM_SOURCES]
        if unknown:
            raise ConfsyncConfigError(f"Unknown URL parameter source(s): {', '.join(unknown)}")

    @classmethod
    def from_env(cls, **overrides: Any) -> SyncConfig:
        """Create configuration from ``CONFSYNC_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        depth_env = env.get("CONFSYNC_MAX_DISPATCH_DEPTH")
        if depth_env is not None and "max_dispatch_depth" not in overrides:
            try:
                config_kwargs["max_dispatch_depth"] = int(depth_env)
            except ValueError as exc:
                raise ConfsyncConfigError(f"CONFSYNC_MAX_DISPATCH_DEPTH is not an integer: {depth_env!r}") from exc

        if "trace_dispatch" not in overrides:
            config_kwargs["trace_dispatch"] = _env_bool(env.get("CONFSYNC_TRACE_DISPATCH"), False)

        sources_env = env.get("CONFSYNC_URL_PARAM_SOURCES")
        if sources_env is not None and "url_param_sources" not in overrides:
            config_kwargs["url_param_sources"] = _parse_sources(sources_env)

        config_kwargs.update(overrides)
        return cls(**config_kwargs)
