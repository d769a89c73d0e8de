from typing import Annotated, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, EmailStr, Field


def _blank_to_none(value):
    """Treat an empty string as an absent value."""
    return None if value == "" else value


Text100 = Annotated[str, Field(min_length=1, max_length=100)]

OptionalText20 = Annotated[
    Optional[Annotated[str, Field(max_length=20)]], BeforeValidator(_blank_to_none)
]
OptionalText100 = Annotated[
    Optional[Annotated[str, Field(max_length=100)]], BeforeValidator(_blank_to_none)
]
OptionalText200 = Annotated[
    Optional[Annotated[str, Field(max_length=200)]], BeforeValidator(_blank_to_none)
]
OptionalPostalCode = Annotated[
    Optional[Annotated[str, Field(max_length=10)]], BeforeValidator(_blank_to_none)
]
OptionalEmail = Annotated[Optional[EmailStr], BeforeValidator(_blank_to_none)]


class UserCreate(BaseModel):
    """Payload for registering a new user."""

    username: Text100
    password: Text100
    name: Text100


class UserLogin(BaseModel):
    """Credentials submitted to the login endpoint."""

    username: Text100
    password: Text100


class UserUpdate(BaseModel):
    """Profile changes; only supplied fields are applied."""

    name: OptionalText100 = None
    password: OptionalText100 = None


class UserOut(BaseModel):
    """Public user representation. The password hash is never exposed."""

    username: str
    name: str

    model_config = ConfigDict(from_attributes=True)


class UserTokenOut(UserOut):
    """User representation returned on login, carrying the issued token."""

    token: str


class UserResponse(BaseModel):
    data: UserOut


class UserTokenResponse(BaseModel):
    data: UserTokenOut


class ContactBase(BaseModel):
    """Shared fields for contact schemas."""

    first_name: Text100
    last_name: OptionalText100 = None
    email: OptionalEmail = None
    phone: OptionalText20 = None


class ContactCreate(ContactBase):
    """Schema for creating a new contact."""

    pass


class ContactUpdate(ContactBase):
    """Schema for replacing a contact; omitted optional fields are cleared."""

    pass


class ContactOut(BaseModel):
    """Schema for returning a contact with its ID."""

    id: int
    first_name: str
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class ContactResponse(BaseModel):
    data: ContactOut


class PageMeta(BaseModel):
    """Pagination metadata for contact searches."""

    current_page: int
    per_page: int
    last_page: int
    total: int


class ContactListResponse(BaseModel):
    data: List[ContactOut]
    meta: PageMeta


class AddressBase(BaseModel):
    """Shared fields for address schemas."""

    street: OptionalText200 = None
    city: OptionalText100 = None
    province: OptionalText100 = None
    country: Text100
    postal_code: OptionalPostalCode = None


class AddressCreate(AddressBase):
    pass


class AddressUpdate(AddressBase):
    pass


class AddressOut(BaseModel):
    id: int
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: str
    postal_code: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class AddressResponse(BaseModel):
    data: AddressOut


class AddressListResponse(BaseModel):
    data: List[AddressOut]


class TrueResponse(BaseModel):
    """Acknowledgement body for logout and delete operations."""

    data: List[bool] = [True]
