#!/usr/bin/env python3
"""Command line entry point for the permissioned voting workflow.

Each invocation runs one operation against the configured SQLite store::

    permissioned-voting --caller admin open
    permissioned-voting --caller admin register-voter alice
    permissioned-voting --caller admin start-proposals
    permissioned-voting --caller alice submit-proposal "Plant more trees"
    permissioned-voting results
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import logging.config
import sys
from collections.abc import Awaitable, Callable
from pathlib import Path
from typing import TYPE_CHECKING

from pydantic import ValidationError as PydanticValidationError

from permissioned_voting.domain.shared.constants import ExitCodes
from permissioned_voting.domain.shared.enums import OutputFormat
from permissioned_voting.domain.shared.exceptions import DomainError
from permissioned_voting.domain.shared.messages import CliMessages, LogTemplates

if TYPE_CHECKING:
    from permissioned_voting.config.container import Container
    from permissioned_voting.config.settings import Settings

_LOGGING_CONFIG_PATH = Path(__file__).resolve().parents[2] / "logging_config.json"

ActionHandler = Callable[["Container", argparse.Namespace], Awaitable[str]]


def setup_logging(log_level: str = "INFO") -> None:
    resolved_level = getattr(logging, log_level.upper(), logging.INFO)

    try:
        with open(_LOGGING_CONFIG_PATH) as f:
            config = json.load(f)
        logging.config.dictConfig(config)
    except (FileNotFoundError, json.JSONDecodeError, ValueError):
        logging.basicConfig(
            level=resolved_level,
            format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
        logging.getLogger(__name__).warning(
            LogTemplates.LOGGING_CONFIG_FALLBACK, _LOGGING_CONFIG_PATH
        )

    logging.getLogger().setLevel(resolved_level)


# === Actions ===


async def _open(container: Container, args: argparse.Namespace) -> str:
    administrator = args.administrator or args.caller
    session = await container.voting_service.open_session(args.session, administrator)
    return CliMessages.SESSION_OPENED.format(session_id=session.session_id, administrator=session.owner)


async def _register_voter(container: Container, args: argparse.Namespace) -> str:
    await container.voting_service.register_voter(args.session, args.caller, args.identity)
    return CliMessages.VOTER_REGISTERED.format(identity=args.identity)


async def _voter(container: Container, args: argparse.Namespace) -> str:
    voter = await container.voting_service.get_voter(args.session, args.caller, args.identity)
    return CliMessages.VOTER_INFO.format(identity=args.identity, **voter.model_dump())


async def _submit_proposal(container: Container, args: argparse.Namespace) -> str:
    index = await container.voting_service.submit_proposal(args.session, args.caller, args.description)
    return CliMessages.PROPOSAL_SUBMITTED.format(index=index, description=args.description)


async def _proposal(container: Container, args: argparse.Namespace) -> str:
    proposal = await container.voting_service.get_proposal(args.session, args.caller, args.index)
    return CliMessages.PROPOSAL_INFO.format(index=args.index, **proposal.model_dump())


async def _vote(container: Container, args: argparse.Namespace) -> str:
    await container.voting_service.cast_vote(args.session, args.caller, args.index)
    return CliMessages.VOTE_CAST.format(index=args.index)


def _transition(method_name: str) -> ActionHandler:
    async def handler(container: Container, args: argparse.Namespace) -> str:
        await getattr(container.voting_service, method_name)(args.session, args.caller)
        session = await container.voting_service.get_session(args.session)
        return CliMessages.STATUS_CHANGED.format(status=session.status.value)

    return handler


async def _tally(container: Container, args: argparse.Namespace) -> str:
    result = await container.voting_service.tally_votes(args.session, args.caller)
    return CliMessages.TALLIED.format(**result.model_dump())


async def _reset(container: Container, args: argparse.Namespace) -> str:
    await container.voting_service.reset_voting(args.session, args.caller)
    session = await container.voting_service.get_session(args.session)
    return CliMessages.RESET.format(status=session.status.value)


async def _transfer_ownership(container: Container, args: argparse.Namespace) -> str:
    await container.voting_service.transfer_ownership(args.session, args.caller, args.new_owner)
    return CliMessages.OWNERSHIP_TRANSFERRED.format(owner=args.new_owner)


async def _results(container: Container, args: argparse.Namespace) -> str:
    from permissioned_voting.application.queries.get_results import GetResultsQuery

    results = await container.get_results_handler.handle(GetResultsQuery(session_id=args.session))
    if args.format == OutputFormat.JSON:
        return results.model_dump_json()

    lines = [
        CliMessages.TALLIED.format(
            winning_proposal_id=results.winning_proposal_id, is_tie=results.is_tie
        )
    ]
    lines.extend(
        CliMessages.RESULT_LINE.format(**standing.model_dump()) for standing in results.standings
    )
    return "\n".join(lines)


async def _history(container: Container, args: argparse.Namespace) -> str:
    from permissioned_voting.application.queries.get_audit_trail import GetAuditTrailQuery

    records = await container.get_audit_trail_handler.handle(
        GetAuditTrailQuery(session_id=args.session, after_sequence=args.after)
    )
    if args.format == OutputFormat.JSON:
        return json.dumps(
            [
                {"sequence": r.sequence, "type": r.event.event_type, **r.event.model_dump(mode="json")}
                for r in records
            ]
        )

    return "\n".join(
        CliMessages.HISTORY_LINE.format(
            sequence=r.sequence,
            occurred_at=r.event.occurred_at.isoformat(),
            event_type=r.event.event_type,
            details=" ".join(f"{k}={v}" for k, v in r.event.details().items()),
        )
        for r in records
    )


async def _status(container: Container, args: argparse.Namespace) -> str:
    session = await container.voting_service.get_session(args.session)
    return CliMessages.STATUS_INFO.format(
        session_id=session.session_id,
        status=session.status.value,
        owner=session.owner,
        voters=len(session.registered_voters),
        proposals=session.proposal_count,
    )


ACTIONS: dict[str, ActionHandler] = {
    "open": _open,
    "register-voter": _register_voter,
    "voter": _voter,
    "submit-proposal": _submit_proposal,
    "proposal": _proposal,
    "vote": _vote,
    "start-proposals": _transition("start_proposals_registering"),
    "end-proposals": _transition("end_proposals_registering"),
    "start-voting": _transition("start_voting_session"),
    "end-voting": _transition("end_voting_session"),
    "tally": _tally,
    "reset": _reset,
    "transfer-ownership": _transfer_ownership,
    "results": _results,
    "history": _history,
    "status": _status,
}


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="permissioned-voting",
        description="Run a permissioned voting session stored in SQLite.",
    )
    parser.add_argument("--session", "-s", default=None, help="election name (default: from settings)")
    parser.add_argument(
        "--caller", "-c", default=None, help="identity of the caller (default: the configured administrator)"
    )
    parser.add_argument("--database", "-d", default=None, help="database URL, e.g. sqlite:///votes.db")
    parser.add_argument(
        "--format",
        "-f",
        type=OutputFormat,
        choices=list(OutputFormat),
        default=OutputFormat.TEXT,
        help="output format for results and history",
    )

    subparsers = parser.add_subparsers(dest="action", required=True)

    open_parser = subparsers.add_parser("open", help="create a session; the caller becomes administrator")
    open_parser.add_argument("--administrator", "-a", default=None)

    subparsers.add_parser("register-voter", help="register a voter").add_argument("identity")
    subparsers.add_parser("voter", help="show a voter").add_argument("identity")
    subparsers.add_parser("submit-proposal", help="submit a proposal").add_argument("description")
    subparsers.add_parser("proposal", help="show a proposal").add_argument("index", type=int)
    subparsers.add_parser("vote", help="vote for a proposal").add_argument("index", type=int)
    subparsers.add_parser("start-proposals", help="open proposal registration")
    subparsers.add_parser("end-proposals", help="close proposal registration")
    subparsers.add_parser("start-voting", help="open the voting session")
    subparsers.add_parser("end-voting", help="close the voting session")
    subparsers.add_parser("tally", help="tally the votes")
    subparsers.add_parser("reset", help="reset a tallied session")
    subparsers.add_parser("transfer-ownership", help="hand over the administrator role").add_argument(
        "new_owner"
    )
    subparsers.add_parser("results", help="show tallied results")
    subparsers.add_parser("history", help="show the audit trail").add_argument(
        "--after", type=int, default=0, help="only events after this sequence number"
    )
    subparsers.add_parser("status", help="show the session status")

    return parser


def _apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    from permissioned_voting.config.settings import DatabaseSettings

    if args.database:
        database = DatabaseSettings.model_validate(
            {**settings.database.model_dump(), "url": args.database}
        )
        settings = settings.model_copy(update={"database": database})
    args.session = args.session or settings.election.session_id
    args.caller = args.caller or settings.election.administrator
    return settings


async def run(args: argparse.Namespace, settings: Settings) -> int:
    from permissioned_voting.config.container import create_container

    container = create_container(settings)
    try:
        await container.initialize()
        text = await ACTIONS[args.action](container, args)
    except DomainError as e:
        print(CliMessages.ERR.format(code=e.code, message=e.message))
        return ExitCodes.REJECTED
    except PydanticValidationError as e:
        print(CliMessages.ERR.format(code="InvalidInput", message=e))
        return ExitCodes.USAGE
    finally:
        await container.shutdown()

    if args.format == OutputFormat.JSON and args.action in {"results", "history"}:
        print(text)
    else:
        print(CliMessages.OK.format(text=text))
    return ExitCodes.OK


def main(argv: list[str] | None = None) -> int:
    from permissioned_voting.config.settings import get_settings

    args = build_parser().parse_args(argv)
    try:
        settings = _apply_overrides(get_settings(), args)
    except PydanticValidationError as e:
        print(CliMessages.ERR.format(code="InvalidInput", message=e))
        return ExitCodes.USAGE
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    logger = logging.getLogger(__name__)
    logger.debug(LogTemplates.CLI_STARTING, args.action, args.session, settings.environment)

    return asyncio.run(run(args, settings))


def cli() -> None:
    """Console script entry point (used by pyproject.toml [project.scripts])."""
    sys.exit(main())


if __name__ == "__main__":
    cli()  # pragma: no cover
