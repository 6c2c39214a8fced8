"""Access-token acquisition for the primary provider.

This package discovers credentials, signs service-account assertions, and
performs the OAuth2 token exchanges.
"""

from .jwt_signer import sign_assertion
from .resolver import CredentialResolver
from .token_exchange import CLOUD_PLATFORM_SCOPE, TokenExchanger

__all__ = ["CLOUD_PLATFORM_SCOPE", "CredentialResolver", "TokenExchanger", "sign_assertion"]
