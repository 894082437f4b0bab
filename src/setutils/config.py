"""
Runtime configuration for setutils.

Defines UtilsSettings, a frozen dataclass carrying the few knobs that are
deployment-specific: the EIP-712 domain an issuance digest is bound to, the
default order lifetime, the signer timeout, and the log level. Defaults come from
setutils.core.constants (the single source of truth).

Precedence: environment > TOML > defaults.

Recognized sources
- Environment variables prefixed ``SETUTILS_``.
- ``./setutils.toml`` (``[setutils]`` table or top-level keys).
- ``./pyproject.toml`` under ``[tool.setutils]``.

Notes
- Invalid values raise ConfigError instead of being ignored; a typo in a signer
  timeout should not silently turn into "wait forever".
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

try:  # Python 3.11+ stdlib TOML parser
    import tomllib  # type: ignore
except Exception:  # pragma: no cover - environments without tomllib
    tomllib = None  # type: ignore[assignment]

from setutils.core.constants import EIP712_DOMAIN_NAME, EIP712_DOMAIN_VERSION
from setutils.core.errors import ConfigError

__all__ = ["UtilsSettings"]

logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


@dataclass(frozen=True)
class UtilsSettings:
    """
    Runtime settings for order generation, hashing, and signing.

    Attributes:
        eip712_domain_name (str): Domain name bound into issuance digests.
        eip712_domain_version (str): Domain version bound into issuance digests.
        default_expiration_minutes (int): Lifetime used by generate_timestamp when
            no explicit value is given (>= 0).
        signer_timeout_seconds (float | None): Upper bound on a signer call; None
            waits indefinitely.
        log_level (str): Level for the ``setutils`` logger.

    Examples:
        >>> from setutils.config import UtilsSettings
        >>> UtilsSettings().eip712_domain_name
        'Set Protocol'
    """

    eip712_domain_name: str = EIP712_DOMAIN_NAME
    eip712_domain_version: str = EIP712_DOMAIN_VERSION
    default_expiration_minutes: int = 60
    signer_timeout_seconds: float | None = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        if self.default_expiration_minutes < 0:
            raise ConfigError(
                f"default_expiration_minutes must be >= 0, got {self.default_expiration_minutes}"
            )
        if self.signer_timeout_seconds is not None and self.signer_timeout_seconds <= 0:
            raise ConfigError(
                f"signer_timeout_seconds must be > 0, got {self.signer_timeout_seconds}"
            )
        if self.log_level.upper() not in _LOG_LEVELS:
            raise ConfigError(f"unknown log_level {self.log_level!r}")

    @classmethod
    def _apply_mapping(cls, base: UtilsSettings, cfg: dict[str, Any] | None) -> UtilsSettings:
        """Apply a loose config mapping onto UtilsSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "eip712_domain_name" in cfg:
            s = replace(s, eip712_domain_name=str(cfg["eip712_domain_name"]))
        if "eip712_domain_version" in cfg:
            s = replace(s, eip712_domain_version=str(cfg["eip712_domain_version"]))

        if "default_expiration_minutes" in cfg:
            try:
                minutes = int(cfg["default_expiration_minutes"])
            except (TypeError, ValueError) as exc:
                raise ConfigError(
                    f"default_expiration_minutes must be an integer, "
                    f"got {cfg['default_expiration_minutes']!r}"
                ) from exc
            s = replace(s, default_expiration_minutes=minutes)

        if "signer_timeout_seconds" in cfg:
            raw = cfg["signer_timeout_seconds"]
            if raw is None or (isinstance(raw, str) and raw.strip().lower() in {"", "none"}):
                timeout = None
            else:
                try:
                    timeout = float(raw)
                except (TypeError, ValueError) as exc:
                    raise ConfigError(
                        f"signer_timeout_seconds must be a number, got {raw!r}"
                    ) from exc
            s = replace(s, signer_timeout_seconds=timeout)

        if "log_level" in cfg:
            s = replace(s, log_level=str(cfg["log_level"]).strip().upper())

        return s

    @classmethod
    def from_env(
        cls, base: UtilsSettings | None = None, prefix: str = "SETUTILS_"
    ) -> UtilsSettings:
        """
        Build UtilsSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - SETUTILS_EIP712_DOMAIN_NAME
            - SETUTILS_EIP712_DOMAIN_VERSION
            - SETUTILS_DEFAULT_EXPIRATION_MINUTES
            - SETUTILS_SIGNER_TIMEOUT_SECONDS ("none" clears it)
            - SETUTILS_LOG_LEVEL
        """
        s = base or cls()
        mapping: dict[str, Any] = {}
        for key in (
            "eip712_domain_name",
            "eip712_domain_version",
            "default_expiration_minutes",
            "signer_timeout_seconds",
            "log_level",
        ):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> UtilsSettings:
        """
        Build UtilsSettings from a TOML file.

        Search order when `path` is None:
            1) ./setutils.toml (with either top-level [setutils] or direct keys)
            2) ./pyproject.toml under [tool.setutils]

        Returns defaults if no file is present or tomllib is unavailable.

        Raises:
            ConfigError: If the file exists but is not valid TOML.
        """
        s = cls()
        if tomllib is None:
            return s

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "setutils.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except tomllib.TOMLDecodeError as exc:
                raise ConfigError(f"invalid TOML in {p}: {exc}") from exc
            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("setutils") if isinstance(tool, dict) else None
            elif isinstance(data.get("setutils"), dict):
                cfg = data["setutils"]
            else:
                cfg = data
            if cfg:
                logger.debug("loaded settings from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> UtilsSettings:
        """
        Load UtilsSettings applying precedence: environment > TOML > defaults.

        Args:
            path: Optional explicit TOML path. If None, search defaults
                (setutils.toml, pyproject.toml).
        """
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s
