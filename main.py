"""
CLI entrypoint for editing a user's role and division memberships.

This script performs the following steps:
- loads .env (optional) and configs/editor.yaml
- reads the caller's session identity from a JSON file
- opens an edit session for --user-id (Admin callers only)
- applies --role, --toggle and --reconcile edits
- prints the form as text
- submits the update, or writes the payload in --dry-run mode
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

from application import SessionState, UserEditSession, render_form
from application.constants import PAYLOAD_FILENAME
from domain.errors import MembershipError
from domain.schemas import Role
from infrastructure.config import load_editor_config
from infrastructure.constants import EDITOR_CONFIG_FILE, IDENTITY_FILE
from infrastructure.directory import make_client
from infrastructure.io import ensure_exists, write_json
from infrastructure.observability import configure_logging
from infrastructure.session import FileSessionStore, RecordingNavigator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_REDIRECTED = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Edit a user's role and division memberships")
    p.add_argument("--user-id", required=True, help="Id of the user to edit")
    p.add_argument(
        "--identity",
        type=str,
        default=str(IDENTITY_FILE),
        help="JSON file holding the caller's session identity (default: configs/identity.json)",
    )
    p.add_argument(
        "--config",
        type=str,
        default=str(EDITOR_CONFIG_FILE),
        help="Path to editor.yaml (default: configs/editor.yaml)",
    )
    p.add_argument(
        "--env",
        type=str,
        default=None,
        help="Optional .env file with USER_EDITOR_API_URL / USER_EDITOR_API_TOKEN",
    )
    p.add_argument("--role", choices=[r.value for r in Role], help="New role for the user")
    p.add_argument(
        "--toggle",
        action="append",
        default=[],
        metavar="DIVISION_ID",
        help="Toggle membership of a division (repeatable; applied in order)",
    )
    p.add_argument(
        "--reconcile",
        action="store_true",
        help="Recompute OU memberships from the selected divisions before submitting",
    )
    p.add_argument(
        "--dry-run",
        type=str,
        nargs="?",
        const=PAYLOAD_FILENAME,
        default=None,
        metavar="PATH",
        help=f"Write the update payload to PATH (default: {PAYLOAD_FILENAME}) instead of submitting",
    )
    p.add_argument(
        "--mock",
        action="store_true",
        help="Use the in-memory demo directory instead of the backend.",
    )
    p.add_argument(
        "--console-level",
        type=str,
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Console log level",
    )
    p.add_argument(
        "--file-level",
        type=str,
        default="DEBUG",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="File log level",
    )
    p.add_argument("--log-file", type=str, default=None, help="Optional rotating log file")
    return p.parse_args(argv)


def _apply_edits(session: UserEditSession, args: argparse.Namespace) -> None:
    if args.role:
        session.set_role(args.role)

    for division_id in args.toggle:
        ou_id = session.owner_of(division_id)
        if ou_id is None:
            raise MembershipError(f"Unknown division: {division_id!r}")
        session.toggle_division(division_id, ou_id)

    if args.reconcile:
        session.reconcile_memberships()


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)

    if args.env is not None:
        env_file = Path(args.env)
        ensure_exists(env_file, "environment variables file")
        load_dotenv(env_file, override=True)

    configure_logging(
        log_file=Path(args.log_file) if args.log_file else None,
        console_level=getattr(logging, args.console_level),
        file_level=getattr(logging, args.file_level),
    )

    config_path = Path(args.config)
    ensure_exists(config_path, "editor.yaml")
    cfg = load_editor_config(config_path)

    store = FileSessionStore(Path(args.identity))
    navigator = RecordingNavigator()
    client = make_client(cfg, use_mock=bool(args.mock))

    try:
        session = UserEditSession(cfg=cfg, client=client, session_store=store, navigator=navigator)
        state = session.start(args.user_id)

        if state is SessionState.REDIRECTED:
            print(render_form(session))
            return EXIT_REDIRECTED
        if state is not SessionState.READY:
            print(render_form(session))
            logger.error("Session did not become ready: %s", session.last_error)
            return EXIT_FAILED

        try:
            _apply_edits(session, args)
        except MembershipError as err:
            logger.error("Edit rejected: %s", err)
            return EXIT_FAILED

        print(render_form(session))

        if args.dry_run is not None:
            try:
                payload = session.build_payload()
            except MembershipError as err:
                logger.error("Payload not built: %s", err)
                return EXIT_FAILED
            payload_path = write_json(Path(args.dry_run), payload)
            logger.info("Dry run: payload written to %s", payload_path)
            return EXIT_OK

        try:
            ok = session.submit()
        except MembershipError as err:
            logger.error("Submission refused: %s", err)
            return EXIT_FAILED

        print(render_form(session))
        if session.state is SessionState.REDIRECTED:
            return EXIT_REDIRECTED
        return EXIT_OK if ok else EXIT_FAILED
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
