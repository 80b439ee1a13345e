"""Tests for authentication and the login/signup forms."""

import pytest

from smartmatcher.exceptions import AuthApiError
from smartmatcher.forms import LoginForm, SignupForm
from smartmatcher.models import LoginCredentials, SignupRequest, UserRole
from smartmatcher.services.auth_service import AuthService, decode_token_claims
from smartmatcher.storage import TOKEN_KEY, USER_EMAIL_KEY, USER_ROLE_KEY
from smartmatcher.utils.http_client import HTTPRequestError
from utils import make_token


@pytest.fixture
def auth(api, storage):
    api.storage = storage
    return AuthService(api)


def test_decode_token_claims():
    token = make_token({"sub": "r@x.io", "role": 1})
    assert decode_token_claims(token) == {"sub": "r@x.io", "role": 1}


@pytest.mark.parametrize("token", ["", "no-dots", "a.!!!.c"])
def test_decode_malformed_token(token):
    with pytest.raises(AuthApiError):
        decode_token_claims(token)


@pytest.mark.parametrize("claims", [[1, 2], "role", 2, None])
def test_decode_non_object_payload(claims):
    with pytest.raises(AuthApiError, match="Malformed access token"):
        decode_token_claims(make_token(claims))


class TestAuthService:
    @pytest.mark.asyncio
    async def test_login_stores_session(self, auth, api, storage):
        token = make_token({"role": 2})
        api.post_form.return_value = {"access_token": token, "token_type": "bearer"}

        role = await auth.login(LoginCredentials(email="ar@x.io", password="secret"))

        api.post_form.assert_awaited_once_with(
            "/user/token", {"username": "ar@x.io", "password": "secret"}
        )
        assert role is UserRole.AR
        assert storage.get_item(TOKEN_KEY) == token
        assert storage.get_item(USER_EMAIL_KEY) == "ar@x.io"
        assert storage.get_item(USER_ROLE_KEY) == "2"
        assert auth.is_authenticated()
        assert auth.current_role() is UserRole.AR

    @pytest.mark.asyncio
    async def test_login_unknown_role(self, auth, api, storage):
        api.post_form.return_value = {"access_token": make_token({"role": 9})}

        role = await auth.login(LoginCredentials(email="x@x.io", password="p"))

        assert role is None
        assert storage.get_item(USER_ROLE_KEY) is None

    @pytest.mark.asyncio
    async def test_login_failure_uses_backend_detail(self, auth, api, storage):
        api.post_form.side_effect = HTTPRequestError(
            "HTTP 401", status=401, data={"detail": "Incorrect email or password"}
        )

        with pytest.raises(AuthApiError) as exc_info:
            await auth.login(LoginCredentials(email="x@x.io", password="bad"))

        assert exc_info.value.message == "Incorrect email or password"
        assert storage.get_token() is None

    @pytest.mark.asyncio
    async def test_login_token_with_list_payload(self, auth, api, storage):
        api.post_form.return_value = {"access_token": make_token(["role", 1])}

        with pytest.raises(AuthApiError):
            await auth.login(LoginCredentials(email="x@x.io", password="p"))

        assert storage.get_token() is None

    @pytest.mark.asyncio
    async def test_signup_sends_integer_role(self, auth, api):
        api.post.return_value = {"id": 1}

        await auth.signup(
            SignupRequest(name="R", email="r@x.io", password="pw", role=UserRole.RECRUITER)
        )

        payload = api.post.await_args.kwargs["json_data"]
        assert api.post.await_args.args[0] == "/user/user_details"
        assert payload["role"] == 1

    def test_logout(self, auth, storage):
        storage.set_item(TOKEN_KEY, "t")
        storage.set_item(USER_EMAIL_KEY, "e@x.io")
        storage.set_item(USER_ROLE_KEY, 1)

        auth.logout()

        assert not auth.is_authenticated()
        assert auth.current_user() is None
        assert auth.current_role() is None


class TestLoginForm:
    @pytest.mark.asyncio
    async def test_blocked_without_password(self, auth, api, notifier):
        form = LoginForm(auth, notifier)
        form.email = "r@x.io"

        result = await form.submit()

        assert not result.submitted
        assert "password" in result.errors
        api.post_form.assert_not_called()

    @pytest.mark.asyncio
    async def test_success_routes_by_role(self, auth, api, notifier):
        api.post_form.return_value = {"access_token": make_token({"role": 1})}
        form = LoginForm(auth, notifier)
        form.email = "r@x.io"
        form.password = "pw"

        result = await form.submit()

        assert result.ok
        assert result.value == "recruiter"
        assert notifier.history[-1].title == "Login Successful"
        assert notifier.history[-1].description == "Redirecting to your dashboard..."

    @pytest.mark.asyncio
    async def test_failure_toast(self, auth, api, notifier):
        api.post_form.side_effect = HTTPRequestError("HTTP 401", status=401)
        form = LoginForm(auth, notifier)
        form.email = "r@x.io"
        form.password = "pw"

        result = await form.submit()

        assert not result.ok
        toast = notifier.errors[-1]
        assert toast.title == "Login Failed"
        assert toast.description == "Please check your credentials and try again."


class TestSignupForm:
    def fill(self, form, **overrides):
        values = dict(
            name="Rita", email="rita@x.io", password="pw1", confirm_password="pw1", role="1"
        )
        values.update(overrides)
        for key, value in values.items():
            setattr(form, key, value)

    @pytest.mark.asyncio
    async def test_password_mismatch(self, auth, api, notifier):
        form = SignupForm(auth, notifier)
        self.fill(form, confirm_password="other")

        result = await form.submit()

        assert result.errors["confirm_password"] == "Passwords do not match"
        assert notifier.errors[-1].description == "Passwords do not match"
        api.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_role_required(self, auth, api, notifier):
        form = SignupForm(auth, notifier)
        self.fill(form, role=None)

        result = await form.submit()

        assert result.errors["role"] == "Please select a role"
        api.post.assert_not_called()

    @pytest.mark.asyncio
    async def test_success(self, auth, api, notifier):
        api.post.return_value = {"id": 5}
        form = SignupForm(auth, notifier)
        self.fill(form, role="2")

        result = await form.submit()

        assert result.ok
        assert api.post.await_args.kwargs["json_data"]["role"] == 2
        assert notifier.history[-1].title == "Signup Successful"

    @pytest.mark.asyncio
    async def test_backend_failure(self, auth, api, notifier):
        api.post.side_effect = HTTPRequestError("HTTP 500", status=500)
        form = SignupForm(auth, notifier)
        self.fill(form)

        result = await form.submit()

        assert not result.ok
        assert notifier.errors[-1].title == "Signup Failed"
        assert (
            notifier.errors[-1].description
            == "An error occurred during signup. Please try again."
        )
