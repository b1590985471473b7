"""
Snippetbox Backend — User Route Handlers
==========================================

What:  Signup, login and logout pages.
How:   Form posts are read with `request.form()`, validated with
       `snippetbox.forms.Form`, and handed to UserService. The sentinel
       errors from the service become form errors on a re-rendered page.

Request Flow (POST /user/signup):
    1. Validate name / email / password
    2. Invalid          → re-render signup page with field errors
    3. UserService.insert
       DuplicateEmail   → re-render with "Address is already in use"
    4. Flash + 303 redirect to /user/login
"""

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from snippetbox import session
from snippetbox.database import get_db_session
from snippetbox.exceptions import DuplicateEmailError, InvalidCredentialsError
from snippetbox.forms import GENERIC_ERROR, Form
from snippetbox.rendering import render
from snippetbox.services.user_service import MAX_PASSWORD_BYTES, user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])

PASSWORD_MIN_LENGTH = 10


@router.get("/signup", response_class=HTMLResponse, summary="Signup form")
async def signup_user_form(request: Request) -> HTMLResponse:
    return render(request, "signup.page.html", {"form": Form()})


@router.post("/signup", summary="Register a new user")
async def signup_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    form = Form(await request.form())
    form.required("name", "email", "password")
    form.max_length("name", 255)
    form.max_length("email", 255)
    form.valid_email("email")
    form.min_length("password", PASSWORD_MIN_LENGTH)
    form.max_bytes("password", MAX_PASSWORD_BYTES)

    if not form.valid:
        return render(request, "signup.page.html", {"form": form})

    try:
        await user_service.insert(
            db,
            name=form.get("name"),
            email=form.get("email"),
            password=form.get("password"),
        )
    except DuplicateEmailError:
        form.errors.add("email", "Address is already in use")
        return render(request, "signup.page.html", {"form": form})

    session.flash(request, "Your signup was successful. Please log in.")
    return RedirectResponse("/user/login", status_code=303)


@router.get("/login", response_class=HTMLResponse, summary="Login form")
async def login_user_form(request: Request) -> HTMLResponse:
    return render(request, "login.page.html", {"form": Form()})


@router.post("/login", summary="Authenticate a user")
async def login_user(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    form = Form(await request.form())

    try:
        user_id = await user_service.authenticate(
            db, email=form.get("email"), password=form.get("password")
        )
    except InvalidCredentialsError:
        form.errors.add(GENERIC_ERROR, "Email or Password is incorrect")
        return render(request, "login.page.html", {"form": form})

    session.login(request, user_id)
    logger.info("User %d logged in", user_id)
    return RedirectResponse("/", status_code=303)


@router.post("/logout", summary="Log the current user out")
async def logout_user(request: Request) -> Response:
    session.logout(request)
    session.flash(request, "You've been logged out successfully!")
    return RedirectResponse("/", status_code=303)
