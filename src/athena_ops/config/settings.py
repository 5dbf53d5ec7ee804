from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml
from dotenv import load_dotenv

from athena_ops.db.poller import PollPolicy


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)

def _env_float(key: str, default: Optional[float]) -> Optional[float]:
    val = os.environ.get(key)
    if val is None or not val.strip():
        return default
    return float(val)

def _env_int(key: str, default: Optional[int]) -> Optional[int]:
    val = os.environ.get(key)
    if val is None or not val.strip():
        return default
    return int(val)

def _opt_str(val: Any, default: str = "") -> str:
    return default if val is None else str(val)

def _opt_float(val: Any, default: Optional[float] = None) -> Optional[float]:
    return default if val is None or val == "" else float(val)

def _opt_int(val: Any) -> Optional[int]:
    return None if val is None or val == "" else int(val)

@dataclass(frozen=True)
class Settings:
    env: str = "dev"
    log_level: str = "INFO"

    # Static connection values handed to boto3; empty means "let boto3 resolve it".
    aws_region: str = ""
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""

    # Submission defaults
    athena_workgroup: str = ""
    athena_database: str = ""
    athena_output_location: str = ""
    athena_catalog: str = "AwsDataCatalog"

    # Polling. Defaults keep the unbounded doubling backoff.
    poll_base_seconds: float = 1.0
    poll_multiplier: float = 2.0
    poll_max_interval_seconds: Optional[float] = None
    poll_max_attempts: Optional[int] = None
    poll_jitter_seconds: float = 0.0

    def poll_policy(self) -> PollPolicy:
        return PollPolicy(
            base_interval=self.poll_base_seconds,
            multiplier=self.poll_multiplier,
            max_interval=self.poll_max_interval_seconds,
            max_attempts=self.poll_max_attempts,
            jitter=self.poll_jitter_seconds,
        )

def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Build Settings from an optional YAML file overlaid with environment variables.

    Without an explicit ``path`` the file is ``config/<APP_ENV>.yaml`` and may be
    absent; an explicit path that does not exist raises FileNotFoundError.

    YAML layout::

        app:
          log_level: INFO
        aws:
          region: eu-west-1
        athena:
          workgroup: primary
          database: analytics
          output_location: s3://my-results/athena/
          catalog: AwsDataCatalog
          poll:
            base_seconds: 1
            multiplier: 2
            max_interval_seconds: null
            max_attempts: null
            jitter_seconds: 0
    """
    load_dotenv()

    app_env = _env("APP_ENV", "dev") or "dev"
    cfg_path = Path(path) if path is not None else Path("config") / f"{app_env}.yaml"

    cfg: Dict[str, Any] = {}
    if cfg_path.exists():
        cfg = yaml.safe_load(cfg_path.read_text(encoding="utf-8")) or {}
    elif path is not None:
        raise FileNotFoundError(f"Config not found: {cfg_path}")

    app_cfg = cfg.get("app") or {}
    aws_cfg = cfg.get("aws") or {}
    ath_cfg = cfg.get("athena") or {}
    poll_cfg = ath_cfg.get("poll") or {}

    return Settings(
        env=app_env,
        log_level=_env("LOG_LEVEL", _opt_str(app_cfg.get("log_level"), "INFO")) or "INFO",
        aws_region=_env("AWS_REGION", _opt_str(aws_cfg.get("region"))) or "",
        aws_access_key_id=_env("AWS_ACCESS_KEY_ID", _opt_str(aws_cfg.get("access_key_id"))) or "",
        aws_secret_access_key=_env("AWS_SECRET_ACCESS_KEY", _opt_str(aws_cfg.get("secret_access_key"))) or "",
        athena_workgroup=_env("ATHENA_WORKGROUP", _opt_str(ath_cfg.get("workgroup"))) or "",
        athena_database=_env("ATHENA_DATABASE", _opt_str(ath_cfg.get("database"))) or "",
        athena_output_location=_env("ATHENA_OUTPUT_LOCATION", _opt_str(ath_cfg.get("output_location"))) or "",
        athena_catalog=_env("ATHENA_CATALOG", _opt_str(ath_cfg.get("catalog"), "AwsDataCatalog")) or "AwsDataCatalog",
        poll_base_seconds=_env_float("ATHENA_POLL_BASE_SECONDS", _opt_float(poll_cfg.get("base_seconds"), 1.0)),
        poll_multiplier=_env_float("ATHENA_POLL_MULTIPLIER", _opt_float(poll_cfg.get("multiplier"), 2.0)),
        poll_max_interval_seconds=_env_float(
            "ATHENA_POLL_MAX_INTERVAL_SECONDS", _opt_float(poll_cfg.get("max_interval_seconds"))
        ),
        poll_max_attempts=_env_int("ATHENA_POLL_MAX_ATTEMPTS", _opt_int(poll_cfg.get("max_attempts"))),
        poll_jitter_seconds=_env_float("ATHENA_POLL_JITTER_SECONDS", _opt_float(poll_cfg.get("jitter_seconds"), 0.0)),
    )
