import pytest

from application import SessionState, SessionStateError, UserEditSession, render_form
from domain.errors import MalformedTaxonomyError, MembershipInvariantError
from domain.schemas import CallerIdentity, Role
from infrastructure.config.models import EditorConfig
from infrastructure.directory import (
    DirectoryApiError,
    InMemoryUserDirectory,
    TransportError,
    UnauthorizedError,
)
from infrastructure.session import InMemorySessionStore, RecordingNavigator

DIVISIONS = [
    {"_id": "1", "name": "Finances", "ou": {"_id": "A", "name": "News"}},
    {"_id": "2", "name": "IT", "ou": {"_id": "A", "name": "News"}},
    {"_id": "3", "name": "Lab", "ou": {"_id": "B", "name": "Hardware"}},
]

USERS = {
    "u-admin": {"_id": "u-admin", "username": "admin", "role": "Admin", "divisions": [], "ous": [], "__v": 4},
    "u-jane": {
        "_id": "u-jane",
        "username": "jane",
        "password": "hash",
        "role": "Normal",
        "divisions": ["1"],
        "ous": ["A"],
        "__v": 11,
    },
}


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def _session(caller_role=Role.ADMIN, caller_id="u-admin", client=None, users=None):
    directory = client or InMemoryUserDirectory(users=users or USERS, divisions=DIVISIONS)
    store = InMemorySessionStore(CallerIdentity(id=caller_id, username="op", role=caller_role))
    navigator = RecordingNavigator()
    clock = FakeClock()
    session = UserEditSession(
        cfg=EditorConfig(),
        client=directory,
        session_store=store,
        navigator=navigator,
        clock=clock,
    )
    return session, directory, store, navigator, clock


def test_start_loads_user_and_taxonomy() -> None:
    session, *_ = _session()

    assert session.start("u-jane") is SessionState.READY
    assert session.user is not None
    assert session.user.divisions == ["1"]
    assert session.user.ous == ["A"]
    assert session.user.revision == 0
    assert list(session.index) == ["A", "B"]


def test_non_admin_is_redirected_before_loading() -> None:
    class CountingDirectory(InMemoryUserDirectory):
        calls = 0

        def fetch_user(self, user_id):
            CountingDirectory.calls += 1
            return super().fetch_user(user_id)

    directory = CountingDirectory(users=USERS, divisions=DIVISIONS)
    session, _, _, navigator, _ = _session(caller_role=Role.MANAGEMENT, client=directory)

    assert session.start("u-jane") is SessionState.REDIRECTED
    assert navigator.history == ["/user-page"]
    assert CountingDirectory.calls == 0
    assert session.user is None
    assert render_form(session) == "Redirected to /user-page"


def test_non_admin_is_redirected_even_for_own_record() -> None:
    session, _, _, navigator, _ = _session(caller_role=Role.NORMAL, caller_id="u-jane")

    session.start("u-jane")

    assert navigator.current == "/user-page"


def test_toggle_and_role_edits_flow_into_payload() -> None:
    session, *_ = _session()
    session.start("u-jane")

    session.toggle_division("2", "A")
    session.toggle_division("3", "B")
    session.set_role("Management")

    payload = session.build_payload()
    assert payload["divisions"] == ["1", "2", "3"]
    assert payload["ous"] == ["A", "B"]
    assert payload["role"] == "Management"
    assert payload["__v"] == 0
    assert payload["password"] == "hash"


def test_submit_success_shows_notice_and_keeps_identity_for_other_user() -> None:
    session, directory, store, _, clock = _session()
    session.start("u-jane")
    session.toggle_division("1", "A")

    assert session.submit() is True
    assert session.state is SessionState.SUBMITTED_OK
    assert session.user is None
    assert directory.updates[-1][1]["divisions"] == []
    assert directory.updates[-1][1]["ous"] == []
    assert store.get().id == "u-admin"
    assert store.get().username == "op"

    assert "User successfully updated." in render_form(session)
    clock.now += 2.5
    assert "User successfully updated." not in render_form(session)


def test_render_after_success_keeps_username() -> None:
    session, _, _, _, clock = _session()
    session.start("u-jane")
    session.submit()

    lines = render_form(session).splitlines()
    assert lines[:2] == ["Update User", "jane"]
    assert lines[-1] == "* User successfully updated."

    clock.now += 2.5
    assert render_form(session) == "Update User\njane"


def test_ready_session_without_loaded_user_refuses_edits() -> None:
    session, *_ = _session()
    session.start("u-jane")
    session.user = None

    with pytest.raises(SessionStateError):
        session.set_role("Admin")
    with pytest.raises(SessionStateError):
        session.toggle_division("2", "A")
    with pytest.raises(SessionStateError):
        session.build_payload()


def test_owner_of_resolves_division_to_ou() -> None:
    session, *_ = _session()
    session.start("u-jane")

    assert session.owner_of("3") == "B"
    assert session.owner_of("missing") is None


def test_self_edit_replaces_session_identity() -> None:
    session, _, store, _, _ = _session()
    session.start("u-admin")
    session.toggle_division("3", "B")

    assert session.submit() is True

    identity = store.get()
    assert identity.id == "u-admin"
    assert identity.username == "admin"
    assert identity.model_extra["ous"] == [{"_id": "B", "name": "Hardware"}]


def test_submit_failure_returns_to_ready_with_edits() -> None:
    directory = InMemoryUserDirectory(
        users=USERS,
        divisions=DIVISIONS,
        failures={"update_user": DirectoryApiError("boom", status_code=500)},
    )
    session, _, store, _, _ = _session(client=directory)
    session.start("u-jane")
    session.toggle_division("2", "A")

    assert session.submit() is False
    assert session.state is SessionState.READY
    assert session.user.divisions == ["1", "2"]
    assert session.notice is None
    assert isinstance(session.last_error, DirectoryApiError)
    assert "! boom" in render_form(session)
    assert store.get().id == "u-admin"


def test_unauthorized_on_load_redirects_to_landing() -> None:
    directory = InMemoryUserDirectory(users=USERS, divisions=DIVISIONS, failures={"fetch_user": UnauthorizedError()})
    session, _, _, navigator, _ = _session(client=directory)

    assert session.start("u-jane") is SessionState.REDIRECTED
    assert navigator.history == ["/"]
    assert session.index is None


def test_unauthorized_on_submit_discards_edits() -> None:
    directory = InMemoryUserDirectory(users=USERS, divisions=DIVISIONS)
    session, *_, navigator, _ = _session(client=directory)
    session.start("u-jane")
    session.toggle_division("2", "A")
    directory.failures["update_user"] = UnauthorizedError()

    assert session.submit() is False
    assert session.state is SessionState.REDIRECTED
    assert session.user is None
    assert navigator.current == "/"


def test_load_failure_stays_loading() -> None:
    directory = InMemoryUserDirectory(
        users=USERS,
        divisions=DIVISIONS,
        failures={"fetch_divisions": TransportError("connection refused")},
    )
    session, *_ = _session(client=directory)

    assert session.start("u-jane") is SessionState.LOADING
    assert session.user is not None
    assert session.index is None
    assert render_form(session) == "Loading..."
    with pytest.raises(SessionStateError):
        session.toggle_division("1", "A")


def test_unknown_user_stays_loading() -> None:
    session, *_ = _session()

    assert session.start("nobody") is SessionState.LOADING
    assert session.last_error.status_code == 404


def test_division_without_ou_is_fatal() -> None:
    broken = [*DIVISIONS, {"_id": "9", "name": "Orphan"}]
    directory = InMemoryUserDirectory(users=USERS, divisions=broken)
    session, *_ = _session(client=directory)

    with pytest.raises(MalformedTaxonomyError):
        session.start("u-jane")


def test_stale_response_after_redirect_is_dropped() -> None:
    class RedirectingDirectory(InMemoryUserDirectory):
        session = None

        def fetch_user(self, user_id):
            record = super().fetch_user(user_id)
            # the operator navigates away while the request is in flight
            self.session.redirect("/elsewhere")
            return record

    directory = RedirectingDirectory(users=USERS, divisions=DIVISIONS)
    session, *_, navigator, _ = _session(client=directory)
    directory.session = session

    state = session.start("u-jane")

    assert state is SessionState.REDIRECTED
    assert session.user is None
    assert navigator.history == ["/elsewhere"]


def test_inconsistent_record_must_be_reconciled_before_submit() -> None:
    users = {**USERS, "u-odd": {"_id": "u-odd", "username": "odd", "role": "Normal", "divisions": ["3"], "ous": ["A"]}}
    session, *_ = _session(users=users)
    session.start("u-odd")

    with pytest.raises(MembershipInvariantError):
        session.submit()
    assert session.state is SessionState.READY

    session.reconcile_memberships()
    assert session.user.ous == ["B"]
    assert session.submit() is True


def test_edits_before_ready_are_rejected() -> None:
    session, *_ = _session()

    with pytest.raises(SessionStateError):
        session.set_role("Admin")
    with pytest.raises(SessionStateError):
        session.submit()


def test_render_lists_divisions_under_ou_headers() -> None:
    session, *_ = _session()
    session.start("u-jane")

    text = render_form(session)

    assert text.splitlines()[0] == "Update User"
    assert "(*) Normal" in text
    assert "News\n  [x] Finances\n  [ ] IT" in text
    assert "Hardware\n  [ ] Lab" in text
    assert "[ Update ]" in text
