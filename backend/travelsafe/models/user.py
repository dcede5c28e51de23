# backend/travelsafe/models/user.py
from typing import Callable, List, Optional, Tuple

from pydantic import BaseModel, EmailStr, Field, model_validator

PASSWORD_MIN_LENGTH = 12

# (check, message) pairs, first failure wins
_CHARACTER_CLASSES: List[Tuple[Callable[[str], bool], str]] = [
    (lambda c: c.islower(), "lowercase"),
    (lambda c: c.isupper(), "uppercase"),
    (lambda c: c.isdigit(), "number"),
    (lambda c: not c.isalnum(), "special character"),
]


def password_problem(password: str, email: Optional[str] = None) -> Optional[str]:
    """
    Why `password` is too weak, or None. At least 12 characters, one of each
    character class, and no copy of the email name (the part before '@').
    """
    if len(password) < PASSWORD_MIN_LENGTH:
        return f"Password must be at least {PASSWORD_MIN_LENGTH} characters long."
    missing = [name for check, name in _CHARACTER_CLASSES if not any(check(c) for c in password)]
    if missing:
        return "Password must include " + ", ".join(missing) + "."
    name = (email or "").split("@", 1)[0].lower()
    if name and name in password.lower():
        return "Password must not contain your email name."
    return None


class UserSignUp(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=256)
    full_name: Optional[str] = Field(None, max_length=120)
    # E.164, travellers sign up from anywhere
    phone: Optional[str] = Field(None, pattern=r"^\+\d{7,15}$")

    @model_validator(mode="after")
    def _strong_password(self) -> "UserSignUp":
        problem = password_problem(self.password, self.email)
        if problem:
            raise ValueError(problem)
        return self


class UserSignIn(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8, max_length=256)


class UserConfirm(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=1, max_length=16)


class ResendCode(BaseModel):
    email: EmailStr


class UserToken(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    id_token: str
    expires_in: int


class UserProfile(BaseModel):
    # current-session snapshot, read back from the access token
    user_sub: str
    email: Optional[EmailStr] = None
    full_name: Optional[str] = None
    phone: Optional[str] = None
    email_verified: bool = False
