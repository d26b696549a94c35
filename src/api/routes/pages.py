"""Server-rendered pages.

The route guard middleware decides redirects before these handlers run.
The dashboard checks the session again itself, so a navigation whose
session could not be resolved by the middleware is still covered.
"""

import html
from typing import Optional

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from api.security import get_session
from domain.model.session import AuthSession

router = APIRouter(tags=["pages"], include_in_schema=False)

SIGN_IN_FORM = """
<form method="post" action="/api/auth/sign-in/email" data-redirect="/dashboard">
  <input name="email" type="email" placeholder="Email" required>
  <input name="password" type="password" placeholder="Password" required>
  <button type="submit">Sign in</button>
  <p class="error" role="alert"></p>
</form>
<p><a href="/sign-up">Create an account</a></p>
"""

SIGN_UP_FORM = """
<form method="post" action="/api/auth/sign-up/email" data-redirect="/dashboard">
  <input name="name" placeholder="Name" required>
  <input name="email" type="email" placeholder="Email" required>
  <input name="password" type="password" placeholder="Password" minlength="8" required>
  <button type="submit">Sign up</button>
  <p class="error" role="alert"></p>
</form>
<p><a href="/sign-in">Already have an account?</a></p>
"""

SIGN_OUT_FORM = """
<form method="post" action="/api/auth/sign-out" data-redirect="/sign-in">
  <button type="submit">Sign out</button>
  <p class="error" role="alert"></p>
</form>
"""

# Forms post JSON to the API and follow data-redirect on success
FORM_SCRIPT = """
<script>
for (const form of document.querySelectorAll("form[data-redirect]")) {
  form.addEventListener("submit", async (event) => {
    event.preventDefault();
    const response = await fetch(form.action, {
      method: "POST",
      headers: {"Content-Type": "application/json"},
      body: JSON.stringify(Object.fromEntries(new FormData(form))),
    });
    if (response.ok) {
      window.location.href = form.dataset.redirect;
      return;
    }
    const data = await response.json().catch(() => ({}));
    form.querySelector(".error").textContent =
      typeof data.detail === "string" ? data.detail : "Request failed";
  });
}
</script>
"""


def _render(title: str, body: str) -> HTMLResponse:
    return HTMLResponse(
        "<!doctype html><html><head><meta charset=\"utf-8\">"
        f"<title>{html.escape(title)}</title></head>"
        f"<body><main><h1>{html.escape(title)}</h1>{body}</main>{FORM_SCRIPT}</body></html>"
    )


@router.get("/", response_class=HTMLResponse)
async def home():
    return _render("Welcome", '<p><a href="/sign-in">Sign in</a> or <a href="/sign-up">sign up</a>.</p>')


@router.get("/sign-in", response_class=HTMLResponse)
async def sign_in_page():
    return _render("Sign in", SIGN_IN_FORM)


@router.get("/sign-up", response_class=HTMLResponse)
async def sign_up_page():
    return _render("Sign up", SIGN_UP_FORM)


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard(request: Request, auth: Optional[AuthSession] = Depends(get_session)):
    if auth is None:
        return RedirectResponse(request.app.state.route_table.sign_in_route, status_code=302)

    user = auth.user
    avatar = f'<img src="{html.escape(user.image)}" alt="" width="64">' if user.image else ""
    return _render(
        "Dashboard",
        f"{avatar}<p>Signed in as {html.escape(user.name)} ({html.escape(user.email)})</p>"
        + SIGN_OUT_FORM,
    )
