"""Account schemas."""

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from roombnb.models.account import Account


class Photo(BaseModel):
    """Image stored on the image host."""

    url: str
    picture_id: str


class AccountSignup(BaseModel):
    """Signup request. Presence of required fields is checked by the route."""

    model_config = ConfigDict(populate_by_name=True)

    email: EmailStr | None = Field(None, max_length=255)
    username: str | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)
    confirm_password: str | None = Field(None, alias="confirmPassword", max_length=128)
    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)


class AccountLogin(BaseModel):
    """Login request. The email is normalized like at signup so lookups match."""

    email: EmailStr | None = Field(None, max_length=255)
    password: str | None = Field(None, max_length=128)


class AccountUpdate(BaseModel):
    """Partial profile update."""

    email: EmailStr | None = Field(None, max_length=255)
    username: str | None = Field(None, max_length=255)
    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None, max_length=2000)


class AccountProfile(BaseModel):
    """Public part of an account."""

    model_config = ConfigDict(from_attributes=True)

    username: str
    name: str | None = None
    description: str | None = None
    photo: Photo | None = None


class AccountSummary(BaseModel):
    """Owner summary embedded in room responses."""

    id: int
    account: AccountProfile

    @classmethod
    def from_model(cls, account: Account) -> "AccountSummary":
        return cls(id=account.id, account=AccountProfile.model_validate(account))


class AccountPublic(AccountSummary):
    """Public profile with owned room ids."""

    rooms: list[int] = []

    @classmethod
    def from_model(cls, account: Account) -> "AccountPublic":
        return cls(
            id=account.id,
            account=AccountProfile.model_validate(account),
            rooms=list(account.room_ids),
        )


class AccountResponse(AccountPublic):
    """Account as seen by its owner."""

    email: str

    @classmethod
    def from_model(cls, account: Account) -> "AccountResponse":
        return cls(
            id=account.id,
            email=account.email,
            account=AccountProfile.model_validate(account),
            rooms=list(account.room_ids),
        )


class AuthResponse(BaseModel):
    """Signup/login response carrying the bearer token."""

    id: int
    email: str
    account: AccountProfile
    token: str

    @classmethod
    def from_model(cls, account: Account) -> "AuthResponse":
        return cls(
            id=account.id,
            email=account.email,
            account=AccountProfile.model_validate(account),
            token=account.token,
        )
