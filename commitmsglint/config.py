"""Configuration management for commit-msg-lint."""
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import tomli
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError
from .models import CompiledRule, RuleType, Scope

DEFAULT_CONFIG_FILENAMES = (
    ".commit-msg-lint.yml",
    ".commit-msg-lint.yaml",
    ".commit-msg-lint.toml",
)
DEFAULT_MAIN_REF = "main"


class RuleSpec(BaseModel):
    """A single linting rule as written in the config file."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(description="Unique name of the rule")
    type: RuleType = Field(description="deny fails on a match, require fails without one")
    scope: Scope = Field(description="Part of the message to search")
    pattern: str = Field(description="Regular expression searched in the scope")
    message: Optional[str] = Field(
        default=None,
        description="Message shown instead of the generated default when the rule fails"
    )

    @field_validator("name", "pattern")
    @classmethod
    def check_not_empty(cls, value: str, info) -> str:
        if not value or not value.strip():
            raise ValueError(f"{info.field_name} is required")
        return value

    @field_validator("type", mode="before")
    @classmethod
    def check_type(cls, value):
        if not isinstance(value, RuleType) and value not in [t.value for t in RuleType]:
            raise ValueError(f"type must be 'deny' or 'require', got {value!r}")
        return value

    @field_validator("scope", mode="before")
    @classmethod
    def check_scope(cls, value):
        if not isinstance(value, Scope) and value not in [s.value for s in Scope]:
            raise ValueError(
                f"scope must be 'title', 'body', 'footer', or 'message', got {value!r}"
            )
        return value

    def compile(self) -> CompiledRule:
        """Compile the pattern into an immutable rule.

        Raises:
            ConfigError: If the pattern is not a valid regular expression
        """
        try:
            regex = re.compile(self.pattern)
        except re.error as e:
            raise ConfigError(f"rule '{self.name}': invalid regex pattern: {e}") from e
        return CompiledRule(
            name=self.name,
            type=self.type,
            scope=self.scope,
            pattern=self.pattern,
            regex=regex,
            message=self.message,
        )


class Settings(BaseModel):
    """Global options controlling which commits are checked and how."""

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    fail_fast: Optional[bool] = Field(
        default=None,
        description="Stop at the first violating commit (unset means true)"
    )

    skip_merge_commits: Optional[bool] = Field(
        default=None,
        description="Skip commits with more than one parent (unset means true)"
    )

    main_ref: str = Field(
        default=DEFAULT_MAIN_REF,
        description="Ref new branches and --head-ref are compared against"
    )

    skip_authors: List[str] = Field(
        default_factory=list,
        description="Regular expressions; commits whose author name or email matches are skipped"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Path to a file that receives a log of every validation run"
    )

    def __init__(self, **data):
        """Initialize settings with environment variable support."""
        env_data = {}

        env_mapping = {
            'COMMIT_MSG_LINT_MAIN_REF': 'main_ref',
            'COMMIT_MSG_LINT_FAIL_FAST': 'fail_fast',
            'COMMIT_MSG_LINT_SKIP_MERGE_COMMITS': 'skip_merge_commits',
            'COMMIT_MSG_LINT_LOG_FILE': 'log_file',
        }

        for env_var, field_name in env_mapping.items():
            if env_var in os.environ:
                value = os.environ[env_var].strip()

                if field_name in ['fail_fast', 'skip_merge_commits']:
                    value = value.lower() in ['true', '1', 'yes', 'on']

                env_data[field_name] = value

        # values from the config file win over the environment
        merged_data = {**env_data, **data}

        super().__init__(**merged_data)

    @field_validator("main_ref")
    @classmethod
    def check_main_ref(cls, value: str) -> str:
        return value.strip() or DEFAULT_MAIN_REF

    @property
    def effective_fail_fast(self) -> bool:
        return True if self.fail_fast is None else self.fail_fast

    @property
    def effective_skip_merge_commits(self) -> bool:
        return True if self.skip_merge_commits is None else self.skip_merge_commits


@dataclass(frozen=True)
class RuleSet:
    """Compiled rules and effective settings, ready for evaluation."""

    rules: Tuple[CompiledRule, ...]
    skip_authors: Tuple["re.Pattern", ...] = ()
    fail_fast: bool = True
    skip_merge_commits: bool = True
    main_ref: str = DEFAULT_MAIN_REF
    log_file: Optional[str] = None


class Config(BaseModel):
    """Configuration for commit-msg-lint.

    Holds the rules in declaration order and the global settings. Use
    ``Config.load`` to read the config file from a repository and
    ``compile`` to obtain the ``RuleSet`` the validator works with.
    """

    model_config = ConfigDict(extra="forbid")

    rules: List[RuleSpec] = Field(default_factory=list, description="Linting rules")
    settings: Settings = Field(default_factory=Settings, description="Global settings")

    @model_validator(mode="after")
    def check_rules(self) -> 'Config':
        if not self.rules:
            raise ValueError("no rules defined in config")
        seen = set()
        for rule in self.rules:
            if rule.name in seen:
                raise ValueError(f"duplicate rule name '{rule.name}'")
            seen.add(rule.name)
        return self

    @staticmethod
    def find(repo_path: Path) -> Optional[Path]:
        """Return the first default config file present in the repository root."""
        for filename in DEFAULT_CONFIG_FILENAMES:
            candidate = repo_path / filename
            if candidate.is_file():
                return candidate
        return None

    @classmethod
    def load(cls, repo_path: Path, config_path: Optional[Path] = None) -> 'Config':
        """Load and validate configuration.

        Args:
            repo_path: Path to the git repository
            config_path: Explicit config file, overriding discovery

        Returns:
            Config: The validated configuration

        Raises:
            ConfigError: If the file is missing, cannot be parsed or is invalid
        """
        if config_path is None:
            config_path = cls.find(repo_path)
            if config_path is None:
                raise ConfigError(
                    f"config file not found: {repo_path / DEFAULT_CONFIG_FILENAMES[0]}\n"
                    f"Create {DEFAULT_CONFIG_FILENAMES[0]} in repository root with linting rules"
                )
        elif not config_path.is_file():
            raise ConfigError(f"config file not found: {config_path}")

        data = cls._read(config_path)
        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict) -> 'Config':
        """Validate an already parsed configuration mapping."""
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("invalid config: top level must be a mapping")

        data = dict(data)
        # an empty "settings:" key in YAML parses as None
        settings_data = data.pop("settings", None) or {}
        if not isinstance(settings_data, dict):
            raise ConfigError("invalid config: settings must be a mapping")
        for section, mapping in (("top level", data), ("settings", settings_data)):
            for key in mapping:
                if not isinstance(key, str):
                    raise ConfigError(f"invalid config: {section} key {key!r} is not a string")

        try:
            # built explicitly so environment overrides apply
            settings = Settings(**settings_data)
            return cls(settings=settings, **data)
        except ValidationError as e:
            raise ConfigError(f"invalid config: {e}") from e

    @staticmethod
    def _read(config_path: Path) -> dict:
        try:
            with config_path.open('rb') as f:
                if config_path.suffix == ".toml":
                    return tomli.load(f)
                return yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"failed to read config file: {e}") from e
        except (yaml.YAMLError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"failed to parse config {config_path.name}: {e}") from e

    def compile(self) -> RuleSet:
        """Compile every pattern once and resolve setting defaults.

        Raises:
            ConfigError: If a rule or skip_authors pattern is invalid
        """
        rules = tuple(rule.compile() for rule in self.rules)

        skip_authors = []
        for i, pattern in enumerate(self.settings.skip_authors):
            try:
                skip_authors.append(re.compile(pattern))
            except re.error as e:
                raise ConfigError(
                    f"skip_authors[{i}]: invalid regex pattern '{pattern}': {e}"
                ) from e

        return RuleSet(
            rules=rules,
            skip_authors=tuple(skip_authors),
            fail_fast=self.settings.effective_fail_fast,
            skip_merge_commits=self.settings.effective_skip_merge_commits,
            main_ref=self.settings.main_ref,
            log_file=self.settings.log_file,
        )
