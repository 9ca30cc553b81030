"""
Authentication module for Microsoft Graph credential flow selection.
"""

from .credentials import (
    ClientCertificateConfig,
    ClientSecretConfig,
    CredentialConfig,
    DeviceCodeConfig,
    InteractiveBrowserConfig,
    build_credential,
    create_graph_client,
    credential_config_from_environment,
    credential_config_from_settings,
)

__all__ = [
    "ClientCertificateConfig",
    "ClientSecretConfig",
    "CredentialConfig",
    "DeviceCodeConfig",
    "InteractiveBrowserConfig",
    "build_credential",
    "create_graph_client",
    "credential_config_from_environment",
    "credential_config_from_settings",
]
