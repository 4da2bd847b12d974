"""
Configuration Validator Service

This service provides validation logic for the runtime configuration,
separating validation concerns from the code that reads the environment.
"""
from exceptions import ConfigurationError, ValidationError
import logging

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


class ConfigValidator:
    """Validator for application configurations"""

    @staticmethod
    def validate_app_config(config) -> None:
        """
        Validate an AppConfig instance.

        Args:
            config: AppConfig built from the environment

        Raises:
            ConfigurationError: If required configuration is missing
            ValidationError: If configuration values are out of range
        """
        if not config.database_url or config.database_url.strip() == '':
            raise ConfigurationError(
                "Database URL cannot be empty",
                missing_keys=['DATABASE_URL']
            )

        ConfigValidator.validate_query_limits(
            autocomplete_max=config.autocomplete_max,
            max_page_size=config.max_page_size,
            interested_users_max=config.interested_users_max,
        )

        if config.log_level not in VALID_LOG_LEVELS:
            raise ValidationError(
                f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}",
                invalid_fields={'log_level': config.log_level}
            )

        logger.debug(f"Configuration validated for {config.database_url}")

    @staticmethod
    def validate_query_limits(**limits: int) -> None:
        """
        Validate that every query limit is a positive integer.

        Raises:
            ValidationError: If any limit is not a positive integer
        """
        invalid = {
            name: value for name, value in limits.items()
            if not isinstance(value, int) or value < 1
        }
        if invalid:
            raise ValidationError(
                "Query limits must be positive integers",
                invalid_fields=invalid
            )
