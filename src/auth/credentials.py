"""
Credential flow selection for Microsoft Graph.

Each supported OAuth flow is one CredentialConfig case. A single factory turns
the active case into an azure-identity credential, and the Graph client only
ever sees the resulting TokenCredential.

Supported flows:
1. Interactive browser (delegated) - prompts a user agent on first token request.
2. Client secret (app-only).
3. Client certificate (app-only, recommended over secrets for production).
4. Device code (delegated) - prints a verification URL and user code.
5. Environment - client secret flow read from AZURE_* variables, optional.
"""

import logging
import sys
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

from azure.core.credentials import TokenCredential
from azure.identity import (
    CertificateCredential,
    ClientSecretCredential,
    DeviceCodeCredential,
    InteractiveBrowserCredential,
)

from config.settings import MCPServerConfig
from core.exceptions import AuthSetupError, ConfigurationError
from graph.client import GraphClient

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InteractiveBrowserConfig:
    tenant_id: str
    client_id: str
    redirect_uri: str


@dataclass(frozen=True)
class ClientSecretConfig:
    tenant_id: str
    client_id: str
    client_secret: str


@dataclass(frozen=True)
class ClientCertificateConfig:
    tenant_id: str
    client_id: str
    certificate_path: str
    certificate_password: Optional[str] = None


@dataclass(frozen=True)
class DeviceCodeConfig:
    tenant_id: str
    client_id: str


CredentialConfig = Union[
    InteractiveBrowserConfig,
    ClientSecretConfig,
    ClientCertificateConfig,
    DeviceCodeConfig,
]


def print_device_code_prompt(
    verification_uri: str, user_code: str, expires_on: datetime
) -> None:
    """Tell the operator where to complete the device code sign-in."""
    print(f"Go to {verification_uri} and enter code: {user_code}", file=sys.stderr)


def build_credential(config: CredentialConfig) -> TokenCredential:
    """Create the azure-identity credential for a flow.

    Args:
        config: One CredentialConfig case.

    Returns:
        A TokenCredential usable by GraphClient.

    Raises:
        TypeError: If config is not a known CredentialConfig case.
    """
    if isinstance(config, InteractiveBrowserConfig):
        return InteractiveBrowserCredential(
            tenant_id=config.tenant_id,
            client_id=config.client_id,
            redirect_uri=config.redirect_uri,
        )
    if isinstance(config, ClientSecretConfig):
        return ClientSecretCredential(
            config.tenant_id, config.client_id, config.client_secret
        )
    if isinstance(config, ClientCertificateConfig):
        return CertificateCredential(
            config.tenant_id,
            config.client_id,
            certificate_path=config.certificate_path,
            password=config.certificate_password,
            send_certificate_chain=True,
        )
    if isinstance(config, DeviceCodeConfig):
        return DeviceCodeCredential(
            client_id=config.client_id,
            tenant_id=config.tenant_id,
            prompt_callback=print_device_code_prompt,
        )
    raise TypeError(f"Unsupported credential config: {type(config).__name__}")


def credential_config_from_environment(
    config: MCPServerConfig,
) -> Optional[ClientSecretConfig]:
    """Build a client secret flow from AZURE_TENANT_ID, AZURE_CLIENT_ID, AZURE_CLIENT_SECRET.

    The values come from the loaded settings, so process variables and the
    .env file are both honoured.

    Returns:
        The config, or None if any value is missing or empty.
    """
    tenant_id = config.tenant_id
    client_id = config.client_id
    client_secret = (
        config.client_secret.get_secret_value() if config.client_secret else None
    )

    if not tenant_id or not client_id or not client_secret:
        return None

    return ClientSecretConfig(tenant_id, client_id, client_secret)


def credential_config_from_settings(
    config: MCPServerConfig,
) -> Optional[CredentialConfig]:
    """Map the active AUTH_FLOW and identity settings to a CredentialConfig.

    Args:
        config: The MCP server configuration.

    Returns:
        The flow config, or None for the environment flow when its variables are unset.

    Raises:
        ConfigurationError: If values required by the active flow are missing.
    """
    flow = config.auth_flow

    if flow == "environment":
        env_config = credential_config_from_environment(config)
        if env_config is None:
            logger.warning(
                "AUTH_FLOW=environment but AZURE_TENANT_ID, AZURE_CLIENT_ID or "
                "AZURE_CLIENT_SECRET is unset; Graph tools will report not_configured"
            )
        return env_config

    secret = config.client_secret.get_secret_value() if config.client_secret else None
    password = (
        config.certificate_password.get_secret_value()
        if config.certificate_password
        else None
    )

    missing = []
    if not config.tenant_id:
        missing.append("AZURE_TENANT_ID")
    if not config.client_id:
        missing.append("AZURE_CLIENT_ID")
    if flow == "interactive" and not config.redirect_uri:
        missing.append("REDIRECT_URI")
    if flow == "client_secret" and not secret:
        missing.append("AZURE_CLIENT_SECRET")
    if flow == "certificate" and not config.certificate_path:
        missing.append("AZURE_CLIENT_CERTIFICATE_PATH")

    if missing:
        logger.error(
            f"AUTH_FLOW={flow} but required config missing",
            extra={"missing_config": missing},
        )
        raise ConfigurationError(
            f"Credential flow '{flow}' missing required configuration: {', '.join(missing)}"
        )

    tenant_id, client_id = config.tenant_id, config.client_id
    if flow == "interactive":
        return InteractiveBrowserConfig(tenant_id, client_id, config.redirect_uri)
    if flow == "client_secret":
        return ClientSecretConfig(tenant_id, client_id, secret)
    if flow == "certificate":
        return ClientCertificateConfig(
            tenant_id, client_id, config.certificate_path, password
        )
    if flow == "device_code":
        return DeviceCodeConfig(tenant_id, client_id)
    raise ConfigurationError(f"Unknown AUTH_FLOW: {flow}")


def create_graph_client(
    credential_config: Optional[CredentialConfig],
    scopes: Optional[list[str]] = None,
) -> Optional[GraphClient]:
    """Build a GraphClient for a flow, or None when no flow is available.

    Raises:
        AuthSetupError: If the credential cannot be constructed.
    """
    if credential_config is None:
        return None

    try:
        credential = build_credential(credential_config)
    except Exception as e:
        logger.error("Failed to create Graph credential", extra={"error": str(e)})
        raise AuthSetupError(f"Failed to create Graph credential: {e}") from e

    logger.info(
        "Graph credential created",
        extra={
            "flow": type(credential_config).__name__,
            "tenant_id": credential_config.tenant_id,
            "client_id": credential_config.client_id,
        },
    )
    return GraphClient(credential, scopes=scopes)
