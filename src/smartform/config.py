"""
Configuration module for SmartForm.

Handles environment variables and default settings.
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _optional_float(raw: str | None) -> float | None:
    if raw is None or not raw.strip():
        return None
    return float(raw)


@dataclass
class SmartFormConfig:
    """Configuration settings for SmartForm."""

    # Form API settings
    backend_url: str = "http://localhost:8000"
    public_base_url: str = "http://localhost:3000"
    id_token: str = ""
    request_timeout: float | None = None  # No timeout unless configured

    # Builder defaults
    default_form_title: str = "Untitled Form"

    # Browser UI settings
    ui_port: int = 7860

    # MCP Server settings
    mcp_transport: str = "stdio"  # stdio or sse
    mcp_port: int = 8080

    # Output settings
    indent_json_output: int = 2

    @classmethod
    def from_env(cls) -> "SmartFormConfig":
        """
        Create configuration from environment variables.

        If an environment variable is not set, uses the class field default value.
        """
        _defaults = cls()

        return cls(
            backend_url=os.getenv("SMARTFORM_BACKEND_URL", _defaults.backend_url),
            public_base_url=os.getenv("SMARTFORM_PUBLIC_BASE_URL", _defaults.public_base_url),
            id_token=os.getenv("SMARTFORM_ID_TOKEN", _defaults.id_token),
            request_timeout=_optional_float(os.getenv("SMARTFORM_REQUEST_TIMEOUT")),
            ui_port=int(os.getenv("SMARTFORM_UI_PORT", str(_defaults.ui_port))),
            mcp_transport=os.getenv("MCP_TRANSPORT", _defaults.mcp_transport),
            mcp_port=int(os.getenv("MCP_PORT", str(_defaults.mcp_port))),
        )


config = SmartFormConfig.from_env()


def get_config() -> SmartFormConfig:
    """Get the current configuration."""
    return config


def update_config(**kwargs) -> SmartFormConfig:
    """Update configuration settings."""
    global config
    for key, value in kwargs.items():
        if hasattr(config, key):
            setattr(config, key, value)
    return config
