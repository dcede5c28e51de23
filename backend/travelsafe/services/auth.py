# backend/travelsafe/services/auth.py
import os
from typing import Optional

import boto3
from botocore.exceptions import ClientError
from fastapi import Header, HTTPException, status

from travelsafe.models.user import UserProfile, UserSignIn, UserSignUp, UserToken

AWS_REGION = os.getenv("AWS_REGION", "eu-north-1")

cognito = boto3.client("cognito-idp", region_name=AWS_REGION)


def _client_id() -> str:
    # REQUIRED for sign up / initiate_auth; checked per call so the app still boots without it
    client_id = os.getenv("COGNITO_APP_CLIENT_ID")
    if not client_id:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="COGNITO_APP_CLIENT_ID is not set. Define it in backend/.env.",
        )
    return client_id


def _error_message(e: ClientError, default: str) -> str:
    return e.response.get("Error", {}).get("Message", default)


def sign_up(user: UserSignUp) -> str:
    """
    Register a user in Cognito using email as the username.
    The user will receive a verification code depending on pooled settings.
    """
    attributes = [
        {"Name": "email", "Value": user.email},
        {"Name": "name", "Value": user.full_name or ""},
    ]
    if user.phone:
        attributes.append({"Name": "phone_number", "Value": user.phone})

    try:
        resp = cognito.sign_up(
            ClientId=_client_id(),
            Username=user.email,   # using email as the Cognito username
            Password=user.password,
            UserAttributes=attributes,
        )
        return resp.get("UserSub", "")
    except ClientError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=_error_message(e, str(e)))


def confirm_sign_up(email: str, code: str) -> None:
    """Confirm a newly registered user with the verification code."""
    try:
        cognito.confirm_sign_up(ClientId=_client_id(), Username=email, ConfirmationCode=code)
    except ClientError as e:
        raise HTTPException(status_code=400, detail=_error_message(e, str(e)))


def resend_confirmation_code(email: str) -> None:
    try:
        cognito.resend_confirmation_code(ClientId=_client_id(), Username=email)
    except ClientError as e:
        raise HTTPException(status_code=400, detail=_error_message(e, str(e)))


def sign_in(credentials: UserSignIn) -> UserToken:
    """
    USER_PASSWORD_AUTH flow (be sure your App Client enables this flow).
    """
    try:
        resp = cognito.initiate_auth(
            ClientId=_client_id(),
            AuthFlow="USER_PASSWORD_AUTH",
            AuthParameters={
                "USERNAME": credentials.email,   # we use email as username
                "PASSWORD": credentials.password,
            },
        )
    except ClientError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_error_message(e, "Authentication failed"),
        )
    tokens = resp.get("AuthenticationResult", {})
    return UserToken(
        access_token=tokens.get("AccessToken", ""),
        refresh_token=tokens.get("RefreshToken", ""),
        id_token=tokens.get("IdToken", ""),
        expires_in=tokens.get("ExpiresIn", 3600),
    )


def sign_out(access_token: str) -> None:
    """Invalidate every token issued for this session."""
    try:
        cognito.global_sign_out(AccessToken=access_token)
    except ClientError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=_error_message(e, "Sign out failed"))


def get_current_user(access_token: str) -> UserProfile:
    """Current-session snapshot for an access token."""
    try:
        resp = cognito.get_user(AccessToken=access_token)
    except ClientError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=_error_message(e, "Invalid or expired session"),
        )
    attrs = {a["Name"]: a["Value"] for a in resp.get("UserAttributes", [])}
    return UserProfile(
        user_sub=attrs.get("sub") or resp.get("Username", ""),
        email=attrs.get("email"),
        full_name=attrs.get("name") or None,
        phone=attrs.get("phone_number"),
        email_verified=attrs.get("email_verified") == "true",
    )


# ---------------- route guard ----------------
def bearer_token(authorization: Optional[str] = Header(None)) -> str:
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing bearer token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return authorization.split(" ", 1)[1].strip()


def require_user(authorization: Optional[str] = Header(None)) -> str:
    """FastAPI dependency: the signed-in user's sub, or 401."""
    return get_current_user(bearer_token(authorization)).user_sub
