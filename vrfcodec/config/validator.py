"""Configuration validation."""

from typing import Dict, Any, List


class ValidationError(Exception):
    """Configuration validation errors."""
    pass


def validate_config(config: Dict[str, Any]) -> None:
    """
    Validate configuration structure and values.

    Args:
        config: Configuration dictionary from loader

    Raises:
        ValidationError: If configuration is invalid
    """
    errors = []

    sections = {
        'site': _validate_site,
        'api': _validate_api,
        'logging': _validate_logging,
    }
    for name, validate_section in sections.items():
        section = config.get(name, {})
        if not isinstance(section, dict):
            errors.append(f"{name} must be a mapping")
            continue
        errors.extend(validate_section(section))

    if errors:
        raise ValidationError(
            "Configuration validation failed:\n  - " + "\n  - ".join(errors)
        )


def _validate_site(section: Dict[str, Any]) -> List[str]:
    """Validate site section."""
    errors = []

    host = section.get('host')
    if not isinstance(host, str) or not host:
        errors.append("site.host is required")
    elif '://' in host or '/' in host:
        errors.append("site.host must be a bare hostname (no scheme or path)")

    if 'dub' in section and not isinstance(section['dub'], bool):
        errors.append("site.dub must be a boolean")

    return errors


def _validate_api(section: Dict[str, Any]) -> List[str]:
    """Validate API options section."""
    errors = []

    # Validate timeout
    timeout = section.get('request_timeout', 30)
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        errors.append("api.request_timeout must be a positive number")

    if 'max_retries' in section:
        retries = section['max_retries']
        if isinstance(retries, bool) or not isinstance(retries, int):
            errors.append("api.max_retries must be an integer")
        elif retries < 1 or retries > 10:
            errors.append("api.max_retries must be between 1 and 10")

    # Validate backoff
    backoff = section.get('retry_backoff_seconds', 5)
    if isinstance(backoff, bool) or not isinstance(backoff, (int, float)) or backoff < 0:
        errors.append("api.retry_backoff_seconds must be non-negative")

    return errors


def _validate_logging(section: Dict[str, Any]) -> List[str]:
    """Validate logging options section."""
    errors = []

    # Validate level
    level = section.get('level', 'INFO')
    valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
    if not isinstance(level, str) or level.upper() not in valid_levels:
        errors.append(f"logging.level must be one of: {', '.join(valid_levels)}")

    # Validate console flag
    console = section.get('console', True)
    if not isinstance(console, bool):
        errors.append("logging.console must be a boolean")

    # Validate optional log file
    if 'file' in section and section['file'] is not None:
        if not isinstance(section['file'], str):
            errors.append("logging.file must be a string path or null")

    return errors
