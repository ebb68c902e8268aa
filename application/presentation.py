"""Plain-text rendering of the edit form."""

from application.constants import FORM_TITLE, LOADING_TEXT, SUBMIT_LABEL
from application.session import SessionState, UserEditSession
from domain.schemas import Role


def _checkbox(checked: bool) -> str:
    return "[x]" if checked else "[ ]"


def render_form(session: UserEditSession, *, now: float | None = None) -> str:
    """
    Render the session as text.

    - REDIRECTED: where the operator was sent
    - SUBMITTED_OK: the title and the updated username
    - LOADING (or anything missing): the loading line
    - otherwise: role selector, one checkbox per division under its OU header,
      the submit action, and any visible notice or submit error
    """
    if session.state is SessionState.REDIRECTED:
        return f"Redirected to {session.redirect_target}"

    lines: list[str] = []

    if session.state is SessionState.SUBMITTED_OK:
        lines.append(FORM_TITLE)
        if session.submitted_username is not None:
            lines.append(session.submitted_username)
    elif session.user is None or session.index is None:
        return LOADING_TEXT
    else:
        user = session.user
        lines.append(FORM_TITLE)
        lines.append(user.username)
        lines.append("")
        options = "  ".join(f"({'*' if role is user.role else ' '}) {role.value}" for role in Role)
        lines.append(f"Role: {options}")

        for group in session.index.groups():
            lines.append("")
            lines.append(group.ou.name or str(group.ou.id))
            for division in group.divisions:
                label = division.name or str(division.id)
                lines.append(f"  {_checkbox(session.is_selected(division.id))} {label}")
            lines.append("-" * 40)

        lines.append(f"[ {SUBMIT_LABEL} ]")

        if session.last_error is not None:
            lines.append(f"! {session.last_error}")

    notice = session.notice
    if notice is not None and notice.is_visible(session.clock() if now is None else now):
        lines.append("")
        lines.append(f"* {notice.message}")

    return "\n".join(lines)
