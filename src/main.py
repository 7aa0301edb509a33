# src/main.py - v1
"""CLI entry point for operators and local development.

Usage:
    jurados locations
    jurados counts
    jurados who <location_id>
    jurados status <location_id>
    jurados check-in <location_id>
    jurados check-out
    jurados profile show
    jurados profile save --name NAME --profession JOB --bio TEXT [--avatar FILE]
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from jurados.version import __version__

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from jurados.config.settings import load_settings

    settings = load_settings()
    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="jurados",
        description=f"Jurado's Burger v{__version__} - locations, profiles and check-ins",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    p_locations = subparsers.add_parser("locations", help="List restaurant locations")
    p_locations.set_defaults(func=_cmd_locations)

    p_counts = subparsers.add_parser("counts", help="Checked-in count per location")
    p_counts.set_defaults(func=_cmd_counts)

    p_who = subparsers.add_parser("who", help="Who is checked in at a location")
    p_who.add_argument("location_id")
    p_who.set_defaults(func=_cmd_who)

    p_status = subparsers.add_parser("status", help="Am I checked in at a location?")
    p_status.add_argument("location_id")
    p_status.set_defaults(func=_cmd_status)

    p_check_in = subparsers.add_parser("check-in", help="Check in at a location")
    p_check_in.add_argument("location_id")
    p_check_in.set_defaults(func=_cmd_check_in)

    p_check_out = subparsers.add_parser("check-out", help="Check out")
    p_check_out.set_defaults(func=_cmd_check_out)

    p_profile = subparsers.add_parser("profile", help="Show or save your profile")
    profile_sub = p_profile.add_subparsers(dest="profile_command")

    p_show = profile_sub.add_parser("show", help="Show your profile")
    p_show.set_defaults(func=_cmd_profile_show)

    p_save = profile_sub.add_parser("save", help="Create or update your profile")
    p_save.add_argument("--name", required=True, help="Full name")
    p_save.add_argument("--profession", required=True, help="Profession")
    p_save.add_argument("--bio", required=True, help="Biography (at least 90 characters)")
    p_save.add_argument("--avatar", type=Path, default=None, help="Avatar image file")
    p_save.set_defaults(func=_cmd_profile_save)

    return parser


def _app(settings):
    from jurados.api.facade import build_app
    return build_app(settings)


def _report(outcome) -> int:
    """Print the outcome's alert, if any. Returns the exit code."""
    if outcome.alert is not None:
        print(f"{outcome.alert.title}: {outcome.alert.message}")
    return 0 if outcome.ok else 1


async def _cmd_locations(args: argparse.Namespace, settings) -> int:
    app = _app(settings)
    outcome = await app.locations.list_locations()
    for location in outcome.locations:
        print(f"{location.location_id}  {location.name}  ({location.address})")
    return _report(outcome)


async def _cmd_counts(args: argparse.Namespace, settings) -> int:
    app = _app(settings)
    outcome = await app.presence.checked_in_counts()
    for location_id, count in sorted(outcome.counts.items()):
        print(f"{location_id}  {count}")
    return _report(outcome)


async def _cmd_who(args: argparse.Namespace, settings) -> int:
    app = _app(settings)
    outcome = await app.presence.checked_in_profiles(args.location_id)
    for profile in outcome.profiles_for(args.location_id):
        print(f"{profile.initials:3s} {profile.full_name} - {profile.profession}")
    return _report(outcome)


async def _cmd_status(args: argparse.Namespace, settings) -> int:
    app = _app(settings)
    outcome = await app.presence.query_status(args.location_id)
    if outcome.ok:
        print("checked in" if outcome.is_present else "checked out")
    return _report(outcome)


async def _cmd_check_in(args: argparse.Namespace, settings) -> int:
    app = _app(settings)
    outcome = await app.presence.check_in(args.location_id)
    if outcome.event is not None:
        print(f"{outcome.event.profile.full_name} checked in at {args.location_id}")
    return _report(outcome)


async def _cmd_check_out(args: argparse.Namespace, settings) -> int:
    app = _app(settings)
    outcome = await app.presence.check_out()
    if outcome.event is not None:
        print(f"{outcome.event.profile.full_name} checked out")
    return _report(outcome)


async def _cmd_profile_show(args: argparse.Namespace, settings) -> int:
    app = _app(settings)
    outcome = await app.profiles.load_profile()
    if outcome.profile is not None:
        profile = outcome.profile
        print(f"Name:       {profile.full_name}")
        print(f"Profession: {profile.profession}")
        print(f"Biography:  {profile.biography}")
        print(f"Checked in: {profile.present_at or '-'}")
    elif outcome.ok is False and outcome.alert is None:
        print("No profile yet. Create one with 'jurados profile save'.")
    return _report(outcome)


async def _cmd_profile_save(args: argparse.Namespace, settings) -> int:
    from jurados.profiles.validation import ProfileDraft

    avatar = None
    if args.avatar is not None:
        if not args.avatar.exists():
            logger.error("File not found: %s", args.avatar)
            return 1
        avatar = args.avatar.read_bytes()

    app = _app(settings)
    outcome = await app.profiles.save_profile(
        ProfileDraft(
            full_name=args.name,
            profession=args.profession,
            biography=args.bio,
            avatar_image=avatar,
        )
    )
    for error in outcome.errors:
        print(f"  - {error}")
    return _report(outcome)


def _setup_logging(settings, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from jurados.logging.logger import setup_logging

    setup_logging(
        level="DEBUG" if verbose else settings.log_level,
        log_format="text",
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )


if __name__ == "__main__":
    sys.exit(main())
