from fastapi import APIRouter, Depends

from travelsafe.models.user import ResendCode, UserConfirm, UserProfile, UserSignIn, UserSignUp, UserToken
from travelsafe.services import auth as auth_service

router = APIRouter(prefix="/user", tags=["user"])


@router.post("/signup", status_code=201)
def register_user(user: UserSignUp):
    user_sub = auth_service.sign_up(user)
    return {
        "message": "User registered successfully - Check email for confirmation code",
        "user_sub": user_sub,
    }


@router.post("/confirm", status_code=204, summary="Confirm a newly registered user")
def confirm_user(body: UserConfirm):
    auth_service.confirm_sign_up(body.email, body.code)


@router.post("/resend-code", status_code=204, summary="Resend the confirmation code")
def resend_code(body: ResendCode):
    auth_service.resend_confirmation_code(body.email)


@router.post("/login", response_model=UserToken)
def login(credentials: UserSignIn):
    return auth_service.sign_in(credentials)


@router.post("/logout", status_code=204, summary="Sign out of every session")
def logout(access_token: str = Depends(auth_service.bearer_token)):
    auth_service.sign_out(access_token)


@router.get("/me", response_model=UserProfile)
def me(access_token: str = Depends(auth_service.bearer_token)):
    return auth_service.get_current_user(access_token)
