"""OAuth2 token-endpoint exchanges for the primary provider.

Responsibilities:
- Exchange a signed JWT assertion for an access token (JWT-bearer grant).
- Exchange a cached refresh token for an access token (refresh-token grant).
- Map rejected exchanges to `AuthError` and transport failures to `HttpError`.
"""

from __future__ import annotations

from ..errors import AuthError, HttpError, ProviderError
from ..http_client import HttpTransport
from ..models.datatypes import DEFAULT_TOKEN_URI

CLOUD_PLATFORM_SCOPE = "https://www.googleapis.com/auth/cloud-platform"
JWT_BEARER_GRANT = "urn:ietf:params:oauth:grant-type:jwt-bearer"
REFRESH_TOKEN_GRANT = "refresh_token"


class TokenExchanger:
    """Perform form-encoded grants against an OAuth2 token endpoint."""

    def __init__(
        self,
        transport: HttpTransport | None = None,
        token_uri: str = DEFAULT_TOKEN_URI,
    ) -> None:
        self.transport = transport if transport is not None else HttpTransport()
        self.token_uri = token_uri

    def exchange_jwt(self, token_uri: str, assertion: str) -> str:
        """Exchange a signed assertion for a bearer token."""

        return self._post_grant(
            token_uri,
            {"grant_type": JWT_BEARER_GRANT, "assertion": assertion},
            label="service account token exchange",
        )

    def exchange_refresh(self, client_id: str, client_secret: str, refresh_token: str) -> str:
        """Exchange an application-default refresh token for a bearer token."""

        return self._post_grant(
            self.token_uri,
            {
                "grant_type": REFRESH_TOKEN_GRANT,
                "client_id": client_id,
                "client_secret": client_secret,
                "refresh_token": refresh_token,
            },
            label="application default credentials token exchange",
        )

    def _post_grant(self, token_uri: str, form: dict[str, str], *, label: str) -> str:
        """POST a grant and extract `access_token` from the JSON response."""

        try:
            payload = self.transport.post(token_uri, label=label, form=form)
        except HttpError as exc:
            if exc.status_code is None:
                raise
            raise AuthError(
                f"{label} was rejected: {exc.detail}",
                reason="exchange_rejected",
            ) from exc

        try:
            decoded = self.transport.decode_json(payload, label=label)
        except ProviderError as exc:
            raise AuthError(f"{label} returned invalid JSON.") from exc

        access_token = decoded.get("access_token")
        if not isinstance(access_token, str) or not access_token.strip():
            raise AuthError(f"{label} response missing `access_token`.")
        return access_token
