"""RS256 bearer assertions for the service-account JWT-bearer grant."""

from __future__ import annotations

import jwt
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from ..errors import CryptoError
from ..models.datatypes import ServiceAccountKey

ASSERTION_LIFETIME_SECONDS = 3600


def load_rsa_private_key(private_key_pem: str) -> RSAPrivateKey:
    """Parse PEM private key material and require an RSA key."""

    try:
        key = serialization.load_pem_private_key(
            private_key_pem.encode("utf-8"),
            password=None,
        )
    except (ValueError, TypeError, UnsupportedAlgorithm) as exc:
        raise CryptoError(
            "invalid RSA private key in service account",
            hint="Re-download the service account JSON key; `private_key` must be PEM.",
        ) from exc
    if not isinstance(key, RSAPrivateKey):
        raise CryptoError("service account private key is not an RSA key")
    return key


def sign_assertion(
    key: ServiceAccountKey,
    scope: str,
    audience: str,
    issued_at: int,
) -> str:
    """Build and sign a one-hour JWT assertion for a service account.

    The token depends only on its inputs: no nonce or `jti` is added, so two
    assertions differ only when `issued_at` differs.
    """

    signing_key = load_rsa_private_key(key.private_key)
    claims = {
        "iss": key.client_email,
        "scope": scope,
        "aud": audience,
        "iat": issued_at,
        "exp": issued_at + ASSERTION_LIFETIME_SECONDS,
    }
    try:
        return jwt.encode(
            claims,
            signing_key,
            algorithm="RS256",
            headers={"typ": "JWT"},
        )
    except (ValueError, TypeError, jwt.PyJWTError) as exc:
        raise CryptoError(f"failed to sign service account assertion: {exc}") from exc
