from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping
import yaml
from pydantic import ValidationError
from dispatch_analytics.custom_exceptions.configuration_exceptions import (
    ConfigurationFileNotFoundException,
    ConfigurationLoadException,
    ConfigurationValidationException,
    FirmConfigurationNotFoundException,
)
from dispatch_analytics.environment import environment_configuration
from dispatch_analytics.logger import logger
from dispatch_analytics.models.custom_models import (
    FirmConfiguration,
    NormalizationRule,
)

DEFAULT_CONFIGURATION_PATH: Path = (
    Path(__file__).parent.parent / "configuration" / "firm_configuration.yaml"
)


class FirmRegistry:
    """
    Immutable lookup of firm pay-cycle configuration and name aliases.
    """

    def __init__(
        self,
        firms: list[FirmConfiguration],
        normalization_rules: list[NormalizationRule],
    ) -> None:
        self._firms: Mapping[str, FirmConfiguration] = MappingProxyType(
            {firm.name: firm for firm in firms}
        )
        self._canonical_by_upper: Mapping[str, str] = MappingProxyType(
            {firm.name.upper(): firm.name for firm in firms}
        )
        self._rules: tuple[NormalizationRule, ...] = tuple(normalization_rules)

    @property
    def firms(self) -> Mapping[str, FirmConfiguration]:
        return self._firms

    @property
    def normalization_rules(self) -> tuple[NormalizationRule, ...]:
        return self._rules

    def canonical_name(self, upper_name: str) -> str | None:
        """Canonical spelling of an upper-cased firm name, if it is one."""
        return self._canonical_by_upper.get(upper_name)

    def get_firm(self, canonical_name: str) -> FirmConfiguration | None:
        return self._firms.get(canonical_name)


class ConfigurationLoader:
    """
    Loader class for firm configuration from YAML files.
    """

    def __init__(self, config_file_path: Path | str | None = None) -> None:
        """
        Initialize the ConfigurationLoader and load the firm configuration.

        Params:
            config_file_path: YAML file to read. Defaults to the packaged configuration.
        """
        self.config_file_path: Path = Path(config_file_path or DEFAULT_CONFIGURATION_PATH)
        self.registry: FirmRegistry = self._load_configuration(self.config_file_path)

    @staticmethod
    def _load_configuration(config_file_path: Path) -> FirmRegistry:
        """
        Loads the firms and normalization rules from a YAML file.

        Returns:
            FirmRegistry: Registry populated with data from the YAML file.

        Raises:
            ConfigurationFileNotFoundException: If the file does not exist.
            ConfigurationLoadException: If the file is not valid YAML.
            ConfigurationValidationException: If required keys or values are missing.
        """
        data: dict[str, Any] | None = None

        try:
            with open(config_file_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except FileNotFoundError:
            raise ConfigurationFileNotFoundException(config_file_path)
        except yaml.YAMLError as e:
            raise ConfigurationLoadException(f"Failed to parse firm configuration YAML: {e}", config_file_path)
        except OSError as e:
            raise ConfigurationLoadException(f"Could not read firm configuration: {e}", config_file_path)

        if data is None:
            raise ConfigurationValidationException("Firm configuration is empty", config_file_path)

        for key in ("firms", "normalization_rules"):
            if key not in data:
                raise ConfigurationValidationException(
                    f"Firm configuration must define '{key}' at the root level", config_file_path
                )

        try:
            firms = [FirmConfiguration(**firm_data) for firm_data in data["firms"]]
            rules = [
                NormalizationRule(
                    canonical_name=rule_data["canonical_name"],
                    equals=tuple(pattern.upper() for pattern in rule_data.get("equals", [])),
                    contains=tuple(pattern.upper() for pattern in rule_data.get("contains", [])),
                )
                for rule_data in data["normalization_rules"]
            ]
        except (ValidationError, KeyError, TypeError) as e:
            raise ConfigurationValidationException(f"Invalid firm or normalization rule: {e}", config_file_path)

        firm_names = {firm.name for firm in firms}
        if len(firm_names) != len(firms):
            raise ConfigurationValidationException("Firm names must be unique", config_file_path)

        for rule in rules:
            if rule.canonical_name not in firm_names:
                raise FirmConfigurationNotFoundException(rule.canonical_name, config_file_path)

        logger.info(
            f"Loaded {len(firms)} firm(s) and {len(rules)} normalization rule(s) from {config_file_path}"
        )
        return FirmRegistry(firms=firms, normalization_rules=rules)


@lru_cache(maxsize=1)
def get_firm_registry() -> FirmRegistry:
    """
    Load the firm registry once per process.

    Honours the FIRM_CONFIGURATION_PATH setting when present.
    """
    return ConfigurationLoader(environment_configuration.firm_configuration_path).registry
