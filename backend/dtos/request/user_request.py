"""
User Request DTOs

DTOs for signup submissions.
"""

from pydantic import BaseModel, Field

from utils.openid_helper import normalize_openid


class CreateUserRequestCommand(BaseModel):
    """
    A signup attempt as submitted by the signup form.

    Exactly one of ``standard`` (username/password) and ``openID`` is
    expected to be set; the validator reports both other combinations.
    This object is never persisted.
    """

    username: str = Field("", description="Requested username (standard signup)")
    password: str = Field("", description="Password (standard signup)")
    password2: str = Field("", description="Password confirmation (standard signup)")
    openid_username: str = Field("", alias="openIDusername", description="OpenID identifier")
    openid_nickname: str = Field("", alias="openIDnickname", description="Display name for OpenID members")
    randomkey: str = Field("", description="Invitation key")
    email: str = Field("", description="Contact address")
    standard: bool = Field(False, description="Standard username/password signup")
    openid: bool = Field(False, alias="openID", description="OpenID signup")

    class Config:
        """Pydantic configuration."""
        populate_by_name = True
        json_schema_extra = {
            "example": {
                "username": "valid_user-1",
                "password": "secret",
                "password2": "secret",
                "randomkey": "3f2c9a0e6b8d4c51",
                "standard": True,
                "openID": False
            }
        }

    @property
    def is_standard(self) -> bool:
        return self.standard

    @property
    def is_openid(self) -> bool:
        return self.openid

    def normalized_openid_username(self) -> str:
        """
        The OpenID identifier in canonical form.

        Raises:
            ValidationError: If the identifier cannot be normalized
        """
        return normalize_openid(self.openid_username)

    def __repr__(self) -> str:
        # Passwords stay out of logs and tracebacks
        return (
            f"CreateUserRequestCommand(username={self.username!r}, "
            f"openIDusername={self.openid_username!r}, randomkey={self.randomkey!r}, "
            f"standard={self.standard}, openID={self.openid})"
        )
