"""yaml-verify -- duplicate-entry checks for YAML configuration files."""

__version__ = "1.1.0"
