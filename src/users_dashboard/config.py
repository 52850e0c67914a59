"""
Configuration constants for the Users Dashboard.

This module centralizes all configurable parameters so the API endpoints,
dashboard defaults and logging can be tuned in one place.
"""

from pathlib import Path
from dataclasses import dataclass, field
from typing import List


@dataclass
class APIConfig:
    """API configuration settings."""
    base_url: str = "https://jsonplaceholder.typicode.com"
    users_endpoint: str = "/users"
    posts_endpoint: str = "/posts"
    timeout_seconds: float = 10.0


@dataclass
class DashboardConfig:
    """Dashboard behaviour and user-visible messages."""
    default_sort_key: str = "name"
    sort_keys: List[str] = field(default_factory=lambda: [
        "name",
        "company.name",
    ])

    # Messages shown in the panels
    users_error_message: str = "Failed to load users"
    posts_error_message: str = "Failed to load posts"
    address_missing_text: str = "Address not available"
    company_missing_text: str = "Company not available"


@dataclass
class LogConfig:
    """Logging configuration."""
    log_directory: Path = field(default_factory=lambda: Path("logs"))
    log_filename: str = "dashboard.log"
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @property
    def log_file_path(self) -> Path:
        """Get full path to the log file."""
        return self.log_directory / self.log_filename


@dataclass
class Config:
    """Master configuration combining all sub-configurations."""
    api: APIConfig = field(default_factory=APIConfig)
    dashboard: DashboardConfig = field(default_factory=DashboardConfig)
    log: LogConfig = field(default_factory=LogConfig)


# Global configuration instance
config = Config()
