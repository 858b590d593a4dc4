"""
YAML configuration loader.

Loads the site definition from YAML files with:
- Environment variable substitution
- Default values
"""

import os
import re
from pathlib import Path
from typing import Optional

import yaml
import structlog

from jlpt_scraper.navigators.base import SiteConfig

logger = structlog.get_logger(__name__)

DEFAULT_SITE_FILE = "site.yml"


def substitute_env_vars(text: str) -> str:
    """
    Substitute environment variables in text.

    Supports formats:
    - ${VAR_NAME} - empty string (with warning) if missing
    - ${VAR_NAME:-default} - optional with default

    Args:
        text: Text with env var placeholders

    Returns:
        Text with substituted values
    """
    def replace(match):
        var_expr = match.group(1)
        if ":-" in var_expr:
            var_name, default = var_expr.split(":-", 1)
            return os.getenv(var_name, default)
        else:
            value = os.getenv(var_expr)
            if value is None:
                logger.warning("env_var_not_set", var=var_expr)
                return ""
            return value

    return re.sub(r"\$\{([^}]+)\}", replace, text)


class ConfigLoader:
    """
    Configuration loader for the grammar site.

    Loads YAML config files and checks required fields.
    """

    def __init__(self, config_dir: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_dir: Directory containing config files
                       (defaults to package config directory)
        """
        if config_dir:
            self.config_dir = Path(config_dir)
        else:
            self.config_dir = Path(__file__).parent

    def load_file(self, filename: str) -> dict:
        """
        Load YAML config file.

        Args:
            filename: Config file name (relative to config_dir)

        Returns:
            Parsed config dict
        """
        filepath = self.config_dir / filename

        if not filepath.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.info("loading_config", file=str(filepath))

        with open(filepath, "r", encoding="utf-8") as f:
            content = f.read()

        content = substitute_env_vars(content)
        config = yaml.safe_load(content)

        return config or {}

    def load_site(self, filename: str = DEFAULT_SITE_FILE) -> SiteConfig:
        """
        Load the site definition from YAML.

        Args:
            filename: Site config file name

        Returns:
            SiteConfig object

        Raises:
            ValueError: If required fields are missing
        """
        data = self.load_file(filename)

        if not isinstance(data, dict):
            raise ValueError(f"Config must be a mapping: {filename}")
        if not data.get("base_url"):
            raise ValueError("Missing required field: base_url")

        site = SiteConfig.from_dict(data)
        logger.info("site_loaded", base_url=site.base_url, levels=sorted(site.level_pages))
        return site


def load_site(config_path: Optional[str] = None) -> SiteConfig:
    """
    Convenience function to load the site config.

    Args:
        config_path: Optional path to a site YAML file

    Returns:
        SiteConfig object
    """
    if config_path:
        loader = ConfigLoader(str(Path(config_path).parent))
        return loader.load_site(Path(config_path).name)

    return ConfigLoader().load_site()
