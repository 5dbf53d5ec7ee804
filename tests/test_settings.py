import pytest

from athena_ops.config.settings import Settings, load_settings
from athena_ops.db.poller import PollPolicy

ENV_KEYS = [
    "APP_ENV",
    "LOG_LEVEL",
    "AWS_REGION",
    "AWS_ACCESS_KEY_ID",
    "AWS_SECRET_ACCESS_KEY",
    "ATHENA_WORKGROUP",
    "ATHENA_DATABASE",
    "ATHENA_OUTPUT_LOCATION",
    "ATHENA_CATALOG",
    "ATHENA_POLL_BASE_SECONDS",
    "ATHENA_POLL_MULTIPLIER",
    "ATHENA_POLL_MAX_INTERVAL_SECONDS",
    "ATHENA_POLL_MAX_ATTEMPTS",
    "ATHENA_POLL_JITTER_SECONDS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    # keep load_dotenv() away from any .env in the repo
    monkeypatch.chdir(tmp_path)


def test_defaults_keep_unbounded_backoff():
    policy = Settings().poll_policy()
    assert policy == PollPolicy(base_interval=1.0, multiplier=2.0, max_interval=None, max_attempts=None, jitter=0.0)


def test_missing_default_file_is_fine():
    settings = load_settings()
    assert settings.env == "dev"
    assert settings.athena_workgroup == ""
    assert settings.athena_catalog == "AwsDataCatalog"


def test_explicit_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "nope.yaml")


def test_yaml_values(tmp_path):
    path = tmp_path / "athena.yaml"
    path.write_text(
        """
app:
  log_level: DEBUG
aws:
  region: eu-west-1
athena:
  workgroup: primary
  database: analytics
  output_location: s3://results/athena/
  poll:
    base_seconds: 0.5
    max_interval_seconds: 30
    max_attempts: 100
""",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.log_level == "DEBUG"
    assert settings.aws_region == "eu-west-1"
    assert settings.athena_workgroup == "primary"
    assert settings.athena_database == "analytics"
    assert settings.athena_output_location == "s3://results/athena/"
    assert settings.poll_policy() == PollPolicy(base_interval=0.5, max_interval=30.0, max_attempts=100)


def test_app_env_selects_config_file(tmp_path, monkeypatch):
    (tmp_path / "config").mkdir()
    (tmp_path / "config" / "prod.yaml").write_text("athena:\n  workgroup: prod-wg\n", encoding="utf-8")
    monkeypatch.setenv("APP_ENV", "prod")

    settings = load_settings()

    assert settings.env == "prod"
    assert settings.athena_workgroup == "prod-wg"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    path = tmp_path / "athena.yaml"
    path.write_text("athena:\n  workgroup: primary\n  poll:\n    max_attempts: 5\n", encoding="utf-8")
    monkeypatch.setenv("ATHENA_WORKGROUP", "etl")
    monkeypatch.setenv("ATHENA_POLL_MAX_ATTEMPTS", "7")
    monkeypatch.setenv("ATHENA_POLL_BASE_SECONDS", "2")

    settings = load_settings(path)

    assert settings.athena_workgroup == "etl"
    assert settings.poll_max_attempts == 7
    assert settings.poll_base_seconds == 2.0


def test_empty_and_null_yaml_values_fall_back_to_defaults(tmp_path):
    path = tmp_path / "athena.yaml"
    path.write_text(
        """
app:
  log_level:
aws:
  region:
athena:
  workgroup: null
  database:
  output_location: null
  catalog:
  poll:
    base_seconds: null
    multiplier:
    jitter_seconds: null
    max_interval_seconds: null
    max_attempts:
""",
        encoding="utf-8",
    )

    settings = load_settings(path)

    assert settings.log_level == "INFO"
    assert settings.aws_region == ""
    assert settings.athena_workgroup == ""
    assert settings.athena_database == ""
    assert settings.athena_output_location == ""
    assert settings.athena_catalog == "AwsDataCatalog"
    assert settings.poll_policy() == PollPolicy()


def test_zero_poll_values_are_kept(tmp_path):
    path = tmp_path / "athena.yaml"
    path.write_text("athena:\n  poll:\n    base_seconds: 0\n    jitter_seconds: 0\n", encoding="utf-8")

    settings = load_settings(path)

    assert settings.poll_base_seconds == 0.0
    assert settings.poll_jitter_seconds == 0.0
