"""Edit session for one user's role and division memberships."""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import ValidationError

from application.ports import Navigator, SessionStore
from application.serialize import build_update_payload, project_user
from domain.membership import check_membership, membership_violations, reconcile_ous
from domain.membership import toggle_division as apply_toggle
from domain.schemas import EditableUser, Identifier, Role
from domain.taxonomy import TaxonomyIndex, build_taxonomy_index
from infrastructure.config.models import EditorConfig
from infrastructure.directory import DirectoryApiError, UnauthorizedError, UserDirectoryClient
from infrastructure.observability import clear_user_context, set_log_context

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Lifecycle of an edit session."""

    LOADING = "loading"
    READY = "ready"
    SUBMITTING = "submitting"
    SUBMITTED_OK = "submitted_ok"
    REDIRECTED = "redirected"


class SessionStateError(RuntimeError):
    """Operation attempted in a state that does not allow it."""


@dataclass(frozen=True)
class Notice:
    """Transient confirmation shown after a successful update."""

    message: str
    duration_s: float
    shown_at: float

    def is_visible(self, now: float) -> bool:
        return self.shown_at <= now < self.shown_at + self.duration_s


class UserEditSession:
    """
    Owns one edit of one user.

    States: LOADING -> READY -> SUBMITTING -> READY | SUBMITTED_OK, and
    REDIRECTED from anywhere once the session is abandoned.

    Every request records the session generation before it is sent. A redirect
    or a new start() bumps the generation, and responses that come back for an
    older generation are dropped instead of being applied.
    """

    def __init__(
        self,
        *,
        cfg: EditorConfig,
        client: UserDirectoryClient,
        session_store: SessionStore,
        navigator: Navigator,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.cfg = cfg
        self.client = client
        self.session_store = session_store
        self.navigator = navigator
        self.clock = clock

        self.state = SessionState.LOADING
        self.user_id: str | None = None
        self.user: EditableUser | None = None
        self.index: TaxonomyIndex | None = None
        self.notice: Notice | None = None
        self.last_error: Exception | None = None
        self.redirect_target: str | None = None
        self.submitted_username: str | None = None
        self._generation = 0

    @property
    def generation(self) -> int:
        return self._generation

    def _require(self, *states: SessionState) -> None:
        if self.state not in states:
            expected = " or ".join(s.value for s in states)
            raise SessionStateError(f"Session is {self.state.value}; expected {expected}")

    def _is_current(self, generation: int, what: str) -> bool:
        if generation != self._generation:
            logger.debug(
                "Dropping %s response from generation %d (current generation %d)",
                what,
                generation,
                self._generation,
            )
            return False
        return True

    def _mark_ready_if_loaded(self) -> None:
        if self.user is None or self.index is None:
            return

        violations = membership_violations(self.user, self.index)
        if violations:
            logger.warning(
                "User %s was loaded with inconsistent OU memberships %s; submission is refused until reconciled",
                self.user.id,
                violations,
            )
        self.state = SessionState.READY
        logger.info("Session ready (%d OUs, %d divisions selected)", len(self.index), len(self.user.divisions))

    # ---- lifecycle ----

    def start(self, user_id: str) -> SessionState:
        """
        Open the session for `user_id` and load the user and the division taxonomy.

        Non-Admin callers are redirected before anything is fetched.
        """
        self._generation += 1
        self.state = SessionState.LOADING
        self.user_id = user_id
        self.user = None
        self.index = None
        self.notice = None
        self.last_error = None
        self.redirect_target = None
        self.submitted_username = None

        caller = self.session_store.get()
        set_log_context(
            session_id_full=f"{caller.id}:{user_id}:{self._generation}:{datetime.now().isoformat()}",
            user_id=user_id,
        )

        if not caller.is_admin:
            logger.warning("Caller %s has role %s; only Admin may edit users", caller.id, caller.role.value)
            self.redirect(self.cfg.navigation.forbidden_target)
            return self.state

        logger.info("Starting edit session for user %s", user_id)
        self.load_user(user_id)
        if self.state is SessionState.LOADING:
            self.load_taxonomy()
        return self.state

    def redirect(self, target: str) -> None:
        """Abandon the session: drop all loaded data and navigate to `target`."""
        self._generation += 1
        self.user = None
        self.index = None
        self.notice = None
        self.state = SessionState.REDIRECTED
        self.redirect_target = target
        clear_user_context()
        self.navigator.redirect(target)

    def load_user(self, user_id: str) -> None:
        """Fetch the user and keep the flattened, editable copy."""
        self._require(SessionState.LOADING)
        generation = self._generation

        try:
            record = self.client.fetch_user(user_id)
        except UnauthorizedError:
            if self._is_current(generation, "user"):
                self.redirect(self.cfg.navigation.unauthenticated_target)
            return
        except DirectoryApiError as err:
            if self._is_current(generation, "user"):
                logger.error("Failed to load user %s: %s", user_id, err)
                self.last_error = err
            return

        if not self._is_current(generation, "user"):
            return

        self.user = project_user(record, revision_baseline=self.cfg.revision_baseline)
        logger.info(
            "Loaded user %s (%s, role=%s, %d divisions, %d OUs)",
            self.user.id,
            self.user.username,
            self.user.role.value,
            len(self.user.divisions),
            len(self.user.ous),
        )
        self._mark_ready_if_loaded()

    def load_taxonomy(self) -> None:
        """
        Fetch every division and build the taxonomy index.

        A division without an OU raises MalformedTaxonomyError; that is not
        treated as a load failure and propagates to the caller.
        """
        self._require(SessionState.LOADING)
        generation = self._generation

        try:
            divisions = self.client.fetch_divisions()
        except UnauthorizedError:
            if self._is_current(generation, "divisions"):
                self.redirect(self.cfg.navigation.unauthenticated_target)
            return
        except DirectoryApiError as err:
            if self._is_current(generation, "divisions"):
                logger.error("Failed to load divisions: %s", err)
                self.last_error = err
            return

        if not self._is_current(generation, "divisions"):
            return

        self.index = build_taxonomy_index(divisions)
        self._mark_ready_if_loaded()

    # ---- edits ----

    def _loaded(self) -> tuple[EditableUser, TaxonomyIndex]:
        self._require(SessionState.READY)
        if self.user is None or self.index is None:
            raise SessionStateError("Session is ready but the user or the taxonomy is missing")
        return self.user, self.index

    def set_role(self, role: Role | str) -> EditableUser:
        user, _ = self._loaded()
        self.user = user.model_copy(update={"role": Role(role)})
        logger.debug("Role set to %s", self.user.role.value)
        return self.user

    def toggle_division(self, division_id: Identifier, ou_id: Identifier) -> EditableUser:
        user, index = self._loaded()
        self.user = apply_toggle(user, index, division_id, ou_id)
        logger.debug("Toggled division %s (OU %s): ous=%s", division_id, ou_id, self.user.ous)
        return self.user

    def owner_of(self, division_id: Identifier) -> Identifier | None:
        """OU id owning `division_id`, or None when the taxonomy does not know it."""
        _, index = self._loaded()
        return index.owner_of(division_id)

    def reconcile_memberships(self) -> EditableUser:
        """Recompute the OU list from the selected divisions."""
        user, index = self._loaded()
        before = list(user.ous)
        self.user = reconcile_ous(user, index)
        if before != self.user.ous:
            logger.info("Reconciled OU memberships: %s -> %s", before, self.user.ous)
        return self.user

    def is_selected(self, division_id: Identifier) -> bool:
        return self.user is not None and division_id in self.user.divisions

    # ---- submission ----

    def build_payload(self) -> dict[str, Any]:
        """
        Serialize the current edit for the update request.

        Raises:
            SessionStateError: If the session is not READY
            MembershipInvariantError: If OU memberships disagree with the divisions
        """
        user, index = self._loaded()
        check_membership(user, index)
        return build_update_payload(user, revision_baseline=self.cfg.revision_baseline)

    def submit(self) -> bool:
        """
        Send the edit to the backend.

        Returns True on success. On failure the session goes back to READY with
        the edits intact and `last_error` set; a 401 redirects instead.
        """
        payload = self.build_payload()
        user, _ = self._loaded()
        if self.user_id is None:
            raise SessionStateError("Session has no user id; call start() first")

        self.state = SessionState.SUBMITTING
        self.notice = None
        self.last_error = None
        generation = self._generation

        try:
            record = self.client.update_user(self.user_id, payload)
        except UnauthorizedError:
            if self._is_current(generation, "update"):
                self.redirect(self.cfg.navigation.unauthenticated_target)
            return False
        except DirectoryApiError as err:
            if self._is_current(generation, "update"):
                logger.error("Error updating user %s: %s", self.user_id, err)
                self.last_error = err
                self.state = SessionState.READY
            return False

        if not self._is_current(generation, "update"):
            return False

        self.state = SessionState.SUBMITTED_OK
        self.submitted_username = user.username
        self.user = None
        self.notice = Notice(
            message=self.cfg.notice.message,
            duration_s=self.cfg.notice.duration_s,
            shown_at=self.clock(),
        )
        logger.info("User %s updated", self.user_id)

        caller = self.session_store.get()
        if caller.id == self.user_id:
            try:
                self.session_store.replace(record)
            except ValidationError as err:
                logger.error("Updated record for %s could not replace the session identity: %s", self.user_id, err)
                self.last_error = err

        return True
