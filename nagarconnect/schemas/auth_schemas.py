import re
from typing import Literal, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator


def normalize_phone(v):
    if v is None or v == "":
        return None
    if not isinstance(v, str):
        raise ValueError("Phone number must be a string")

    phone = v.strip()
    phone = re.sub(r"[ \-\(\)]", "", phone)

    # E.164: + followed by 8–15 digits
    if not re.fullmatch(r"\+[1-9]\d{7,14}", phone):
        raise ValueError(
            "Invalid phone number. Use format: +<countrycode><number>"
        )

    return phone


class SignupPayload(BaseModel):
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)
    phone: Optional[str] = None
    full_name: Optional[str] = Field(None, max_length=120)
    language: Literal["en", "hi"] = "en"

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)


class LoginPayload(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: str
    is_admin: bool


class ProfileUpdatePayload(BaseModel):
    full_name: Optional[str] = Field(None, max_length=120)
    phone: Optional[str] = None
    language: Optional[Literal["en", "hi"]] = None

    @field_validator("phone", mode="before")
    @classmethod
    def validate_phone(cls, v):
        return normalize_phone(v)
