# Copyright (c) HashiCorp, Inc.
# SPDX-License-Identifier: MPL-2.0

"""Generates certificates for use in tests."""

import datetime
import os
from typing import Optional

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import rsa
from cryptography.hazmat.primitives.serialization import pkcs12
from cryptography.x509.oid import NameOID


def generate_pkcs12(passphrase: Optional[str] = None) -> bytes:
    """Generates a PKCS#12 bundle containing a self-signed certificate and key.

    :param passphrase: An optional passphrase to encrypt the bundle with.

    :return: The PKCS#12 bundle.
    """
    key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    name = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, "o365activity-test")])
    now = datetime.datetime.now(datetime.timezone.utc)

    certificate = (
        x509.CertificateBuilder()
        .subject_name(name)
        .issuer_name(name)
        .public_key(key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - datetime.timedelta(days=1))
        .not_valid_after(now + datetime.timedelta(days=1))
        .sign(key, hashes.SHA256())
    )

    encryption = serialization.NoEncryption()
    if passphrase:
        encryption = serialization.BestAvailableEncryption(bytes(passphrase, "utf-8"))

    return pkcs12.serialize_key_and_certificates(
        b"o365activity-test", key, certificate, None, encryption
    )


def write_pkcs12(directory: str, passphrase: Optional[str] = None) -> str:
    """Writes a generated PKCS#12 bundle to the given directory.

    :return: The path to the written bundle.
    """
    path = os.path.join(directory, "o365.pfx")

    with open(path, "wb") as fout:
        fout.write(generate_pkcs12(passphrase))

    return path
