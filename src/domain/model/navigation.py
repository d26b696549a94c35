"""Route classification and redirect rules for page navigation.

Every navigable path falls into one of three classes:

- PROTECTED: requires a session, otherwise redirect to the sign-in route
- AUTH_ONLY: only meaningful without a session (sign-in/up), otherwise
  redirect to the landing route
- PUBLIC: always rendered

The rules are evaluated once per navigation, before the page renders.
"""

from dataclasses import dataclass
from enum import Enum


class RouteClass(str, Enum):
    PROTECTED = 'protected'
    AUTH_ONLY = 'auth-only'
    PUBLIC = 'public'


class SessionState(str, Enum):
    """Outcome of resolving the caller's session for a navigation."""
    PRESENT = 'present'
    ABSENT = 'absent'
    UNKNOWN = 'unknown'


def normalize_path(path: str) -> str:
    """Strip query/fragment and trailing slashes ('/dashboard/' -> '/dashboard')."""
    path = path.split('?', 1)[0].split('#', 1)[0] or '/'
    if len(path) > 1:
        path = path.rstrip('/') or '/'
    return path


def _matches(path: str, route: str) -> bool:
    if route == '/':
        return path == '/'
    return path == route or path.startswith(route + '/')


@dataclass(frozen=True)
class RouteTable:
    """Route lists plus the two redirect targets."""
    protected: tuple[str, ...] = ('/dashboard',)
    auth_only: tuple[str, ...] = ('/sign-in', '/sign-up')
    sign_in_route: str = '/sign-in'
    landing_route: str = '/dashboard'

    def __post_init__(self):
        # Redirect targets must be reachable in the state that sends users there.
        if self.classify(self.sign_in_route) == RouteClass.PROTECTED:
            raise ValueError(f"Sign-in route {self.sign_in_route!r} cannot be protected")
        if self.classify(self.landing_route) == RouteClass.AUTH_ONLY:
            raise ValueError(f"Landing route {self.landing_route!r} cannot be auth-only")

    def classify(self, path: str) -> RouteClass:
        path = normalize_path(path)
        if any(_matches(path, route) for route in self.protected):
            return RouteClass.PROTECTED
        if any(_matches(path, route) for route in self.auth_only):
            return RouteClass.AUTH_ONLY
        return RouteClass.PUBLIC

    def is_guarded(self, path: str) -> bool:
        return self.classify(path) != RouteClass.PUBLIC

    def resolve_redirect(self, path: str, state: SessionState) -> str | None:
        """Return the redirect target for a navigation, or None to proceed.

        UNKNOWN never redirects: the decision is deferred to a later check
        rather than guessed.
        """
        if state == SessionState.UNKNOWN:
            return None

        route_class = self.classify(path)
        if route_class == RouteClass.PROTECTED and state == SessionState.ABSENT:
            return self.sign_in_route
        if route_class == RouteClass.AUTH_ONLY and state == SessionState.PRESENT:
            return self.landing_route
        return None


DEFAULT_ROUTE_TABLE = RouteTable()
