"""Model for the body of a registry token endpoint response."""

from typing import Annotated

from pydantic import BaseModel, Field


class TokenResponse(BaseModel):
    """Token endpoint answer.

    https://distribution.github.io/distribution/spec/auth/token/

    Servers populate ``token``, ``access_token`` or both.  ``token`` wins
    when it is non-empty.  Other fields (``expires_in``, ``issued_at``) are
    ignored, whatever their type.
    """

    token: Annotated[
        str | None,
        Field(title="Token", description="Opaque bearer token."),
    ] = None

    access_token: Annotated[
        str | None,
        Field(
            title="Access token",
            description="OAuth 2.0 compatible alias for the token.",
        ),
    ] = None

    @property
    def bearer(self) -> str:
        """``Authorization`` header value; ``"Bearer "`` if no token came
        back.
        """
        return f"Bearer {self.token or self.access_token or ''}"
