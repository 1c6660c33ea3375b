# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Management Activity API token manager.

Tokens are requested using the OAuth2 client credentials flow, with a certificate
based client assertion. The certificate (and its private key) must be registered
against the application in Azure AD, and provided as a PKCS#12 file.
"""

import datetime
import logging
import threading
from typing import Optional

from azure.core.exceptions import AzureError
from azure.identity import CertificateCredential
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.serialization import pkcs12

from o365activity.constants import API_HOST, API_SCOPE, TOKEN_SAFETY_MARGIN
from o365activity.exceptions import ConfigurationException
from o365activity.models import CollectorConfig, Credential


def load_certificate(path: str, passphrase: Optional[str]) -> bytes:
    """Loads and validates a PKCS#12 certificate bundle from disk.

    :param path: The path to the PKCS#12 (PFX) file.
    :param passphrase: The passphrase protecting the bundle, if any.

    :raises ConfigurationException: The bundle could not be read, or decrypted, or
        does not contain both a certificate and a private key.

    :return: The raw PKCS#12 bundle.
    """
    try:
        with open(path, "rb") as fin:
            bundle = fin.read()
    except OSError as err:
        raise ConfigurationException(f"Unable to read certificate '{path}'. {err}")

    password = None
    if passphrase:
        password = bytes(passphrase, "utf-8")

    try:
        key, certificate, _ = pkcs12.load_key_and_certificates(bundle, password)
    except (ValueError, TypeError) as err:
        raise ConfigurationException(
            f"Provided certificate, or associated passphrase, is not valid. {err}"
        )

    if key is None or certificate is None:
        raise ConfigurationException(
            f"Certificate '{path}' must contain both a certificate and a private key."
        )

    return bundle


def thumbprint(bundle: bytes, passphrase: Optional[str]) -> str:
    """Returns the SHA1 thumbprint of the certificate in a PKCS#12 bundle.

    This is the value displayed against the certificate in the Azure portal, so it is
    logged to assist with troubleshooting authentication issues.
    """
    password = bytes(passphrase, "utf-8") if passphrase else None
    _, certificate, _ = pkcs12.load_key_and_certificates(bundle, password)

    return certificate.fingerprint(hashes.SHA1()).hex().upper()  # noqa: S303


class TokenManager:
    def __init__(
        self,
        config: CollectorConfig,
        margin: int = TOKEN_SAFETY_MARGIN,
    ):
        """Setup a new token manager, loading the configured certificate.

        No token is requested until the first call to ensure_fresh.

        :param config: The collector configuration to authenticate for.
        :param margin: The number of seconds before expiry that a token is refreshed.

        :raises ConfigurationException: The configured certificate could not be loaded.
        """
        self.logger = logging.getLogger(__name__)
        self.margin = margin
        self.scope = API_SCOPE.format(host=config.api_host or API_HOST)

        self.log_context = {
            "collector": config.name,
            "tenant_id": config.tenant_id,
            "client_id": config.client_id,
        }

        bundle = load_certificate(config.certificate_path, config.passphrase)
        self.logger.info(
            "Loaded client certificate.",
            extra={
                "thumbprint": thumbprint(bundle, config.passphrase),
                **self.log_context,
            },
        )

        self._lock = threading.Lock()
        self._credential = Credential(
            tenant_id=config.tenant_id,
            publisher_id=config.publisher_id or config.tenant_id,
            client_id=config.client_id,
            certificate=bundle,
            passphrase=config.passphrase or None,
        )

        try:
            self._client = CertificateCredential(
                config.tenant or config.tenant_id,
                config.client_id,
                certificate_data=bundle,
                password=config.passphrase or None,
            )
        except ValueError as err:
            raise ConfigurationException(
                f"Unable to create client credential from certificate. {err}"
            )

    @property
    def credential(self) -> Credential:
        """Returns the current credential, without checking its validity."""
        return self._credential

    def ensure_fresh(self) -> Credential:
        """Returns a credential with a token valid for at least the safety margin.

        If the cached token is expired, or expires within the safety margin, a new
        token is requested. If this request fails the failure is logged and the
        previous token is returned as-is. The next request made with it will likely
        fail to authenticate, which is resolved by a later successful refresh.

        :return: The current credential.
        """
        with self._lock:
            now = datetime.datetime.now(datetime.timezone.utc)
            if self._credential.valid(now, self.margin):
                return self._credential

            self.logger.info(
                "Token has expired or will expire soon, acquiring new token.",
                extra={"expiry": self._credential.expiry, **self.log_context},
            )

            try:
                result = self._client.get_token(self.scope)
            except AzureError as err:
                self.logger.error(
                    "Failed to acquire token with client credentials.",
                    extra={"exception": err, **self.log_context},
                )
                return self._credential

            expiry = datetime.datetime.fromtimestamp(
                result.expires_on, tz=datetime.timezone.utc
            )
            self._credential = self._credential.model_copy(
                update={"token": result.token, "expiry": expiry}
            )

            self.logger.info(
                "Successfully acquired token.",
                extra={"expiry": expiry, **self.log_context},
            )

            return self._credential
