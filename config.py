"""Configuration management for the Hadoop JMX exporter"""
from pathlib import Path
from typing import List, Literal, Optional
from pydantic import Field, validator
from pydantic_settings import BaseSettings
from collectors.region_server import DEFAULT_REGION_SERVER_BEANS


class Config(BaseSettings):
    """Configuration class with Pydantic validation and environment-based settings"""

    # Scrape defaults, overridden per request by ?target= and ?module=
    target_url: str = Field(default="", description="Default Hadoop JMX URL")
    module_type: str = Field(default="", description="Default module appended to metric prefixes")
    request_timeout: float = Field(default=10.0, gt=0, description="JMX fetch timeout in seconds")
    scrape_workers: int = Field(default=4, ge=1, description="Worker threads for concurrent scrapes")

    # Bean identities handled by the region server translator (semicolon-separated)
    region_server_beans_str: str = Field(
        default=";".join(DEFAULT_REGION_SERVER_BEANS),
        description="Region server bean identities (semicolon-separated)"
    )

    # Server settings
    metrics_port: int = Field(default=8288, ge=1, le=65535, description="Metrics server port")
    metrics_host: str = Field(default="0.0.0.0", description="Metrics server host")
    enable_request_logging: bool = Field(default=True, description="Enable HTTP request logging")

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(default="INFO", description="Log level")
    log_file: Optional[Path] = Field(default=None, description="Log file path")

    # Service settings
    service_name: str = Field(default="hadoop-jmx-exporter", description="Service name")
    service_version: str = Field(default="1.0.0", description="Service version")

    class Config:
        env_prefix = ""
        case_sensitive = False

    @validator('log_level', pre=True)
    def normalize_log_level(cls, v):
        """Accept lowercase log levels from the environment"""
        if isinstance(v, str):
            return v.upper()
        return v

    @validator('log_file')
    def ensure_log_directory(cls, v):
        """Ensure parent directory exists for the log file"""
        if isinstance(v, Path):
            v.parent.mkdir(parents=True, exist_ok=True)
        return v

    @property
    def region_server_beans(self) -> List[str]:
        """Get region server bean identities as a list"""
        return [item.strip() for item in self.region_server_beans_str.split(';') if item.strip()]
