"""
Snippetbox Backend — User Route Tests
=======================================

What:  Signup, login and logout through the full middleware stack.
How:   The test client keeps the session cookie between requests, so flash
       messages and the logged-in state can be followed across redirects.

What we test:
    ✅ Signup: form page, validation errors, duplicate email, success + flash
    ✅ Login: wrong credentials → generic error, success → redirect home
    ✅ Logout: clears the session and flashes a confirmation
"""

import pytest


async def signup(client, name="Alice", email="alice@example.com", password="pa55word-long"):
    return await client.post(
        "/user/signup",
        data={"name": name, "email": email, "password": password},
    )


async def login(client, email="alice@example.com", password="pa55word-long"):
    return await client.post("/user/login", data={"email": email, "password": password})


class TestSignup:

    @pytest.mark.asyncio
    async def test_signup_form(self, test_client):
        response = await test_client.get("/user/signup")
        assert response.status_code == 200
        assert 'action="/user/signup"' in response.text

    @pytest.mark.asyncio
    async def test_successful_signup_redirects_with_flash(self, test_client):
        response = await signup(test_client)
        assert response.status_code == 303
        assert response.headers["location"] == "/user/login"

        login_page = await test_client.get("/user/login")
        assert "Your signup was successful. Please log in." in login_page.text

        # One-shot: gone on the next page
        home = await test_client.get("/")
        assert "Your signup was successful" not in home.text

    @pytest.mark.asyncio
    async def test_blank_fields(self, test_client):
        response = await signup(test_client, name="", email="", password="")
        assert response.status_code == 200
        assert response.text.count("This field cannot be blank") == 3

    @pytest.mark.asyncio
    async def test_invalid_email_keeps_entered_values(self, test_client):
        response = await signup(test_client, email="not-an-email")
        assert response.status_code == 200
        assert "This field is invalid" in response.text
        assert 'value="Alice"' in response.text
        assert 'value="not-an-email"' in response.text

    @pytest.mark.asyncio
    async def test_email_with_trailing_newline_is_rejected(self, test_client):
        await signup(test_client)
        response = await signup(test_client, email="alice@example.com\n")
        assert response.status_code == 200
        assert "This field is invalid" in response.text

    @pytest.mark.asyncio
    async def test_short_password(self, test_client):
        response = await signup(test_client, password="short")
        assert response.status_code == 200
        assert "This field is too short (minimum is 10 characters)" in response.text

    @pytest.mark.asyncio
    async def test_duplicate_email(self, test_client):
        await signup(test_client)
        response = await signup(test_client, name="Other Alice")
        assert response.status_code == 200
        assert "Address is already in use" in response.text


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_form(self, test_client):
        response = await test_client.get("/user/login")
        assert response.status_code == 200
        assert 'action="/user/login"' in response.text

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_client):
        await signup(test_client)
        response = await login(test_client, password="wrong-password")
        assert response.status_code == 200
        assert "Email or Password is incorrect" in response.text

    @pytest.mark.asyncio
    async def test_unknown_email(self, test_client):
        response = await login(test_client, email="nobody@example.com")
        assert response.status_code == 200
        assert "Email or Password is incorrect" in response.text

    @pytest.mark.asyncio
    async def test_successful_login(self, test_client):
        await signup(test_client)
        response = await login(test_client)
        assert response.status_code == 303
        assert response.headers["location"] == "/"

        home = await test_client.get("/")
        assert "Logout" in home.text
        assert 'href="/user/login"' not in home.text


class TestLogout:

    @pytest.mark.asyncio
    async def test_logout(self, test_client):
        await signup(test_client)
        await login(test_client)

        response = await test_client.post("/user/logout")
        assert response.status_code == 303
        assert response.headers["location"] == "/"

        home = await test_client.get("/")
        assert "logged out successfully!" in home.text
        assert 'href="/user/login"' in home.text

    @pytest.mark.asyncio
    async def test_logout_requires_post(self, test_client):
        response = await test_client.get("/user/logout")
        assert response.status_code == 405
