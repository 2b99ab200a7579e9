"""Configuration for linkshelf"""

from dynaconf import Dynaconf, Validator

# Validators for linkshelf settings.
_validators = [
    Validator("deployment.canary", is_type_of=bool),
    Validator("logging.format", is_in=["mozlog", "pretty"]),
    Validator("logging.level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    Validator("logging.favicon_level", is_in=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]),
    Validator("logging.can_propagate", is_type_of=bool),
    Validator("metrics.dev_logger", is_type_of=bool),
    Validator("metrics.host", is_type_of=str),
    Validator("metrics.port", gte=0, is_type_of=int),
    # Upper bounds cap a single resolution at one page fetch plus two probes.
    Validator("favicon.probe_timeout_sec", is_type_of=float, gt=0, lte=3.0),
    Validator("favicon.page_timeout_sec", is_type_of=float, gt=0, lte=5.0),
    Validator("favicon.max_redirects", is_type_of=int, gte=0, lte=3),
    Validator("favicon.max_connections", is_type_of=int, gte=1),
    Validator("favicon.fallback_icon_size", is_type_of=int, gte=16, lte=256),
    Validator("favicon.user_agent", is_type_of=str, must_exist=True),
    Validator("favicon.accept", is_type_of=str, must_exist=True),
    Validator("runtime.shutdown_grace_sec", is_type_of=float, gte=0),
    Validator("store.backend", is_in=["memory"]),
    Validator("web.cors.allow_origins", is_type_of=list),
    Validator("web.api.v1.url_character_max", is_type_of=int, gt=10, lte=8192),
    Validator("web.api.v1.title_character_max", is_type_of=int, gt=0, lte=1000),
    Validator("web.api.v1.header_character_max", is_type_of=int, gt=0, lte=1024),
    Validator("sentry.env", is_in=["prod", "stage", "dev"]),
    Validator("sentry.mode", is_in=["disabled", "release", "debug"]),
    Validator("sentry.traces_sample_rate", gte=0, lte=1),
]

# `root_path` = The root path for Dynaconf, DO NOT CHANGE.
# `envvar_prefix` = Export envvars with `export LINKSHELF_FOO=bar`.
# `settings_files` = Load these files in the order.
# `environments` = Enable layered environments such as `development`, `production`, `testing` etc.
# `env_switcher` = Switch environments by `export LINKSHELF_ENV=production`. Default: `development`.
# `merge_enabled` = Environment tables only override the keys they set, e.g. `[testing.favicon]`.
# `validators` = Define validators for linkshelf settings.

settings = Dynaconf(
    root_path="linkshelf",
    envvar_prefix="LINKSHELF",
    settings_files=[
        "configs/default.toml",
        "configs/development.toml",
        "configs/production.toml",
        "configs/ci.toml",
        "configs/testing.toml",
    ],
    environments=True,
    env_switcher="LINKSHELF_ENV",
    merge_enabled=True,
    validators=_validators,
)
