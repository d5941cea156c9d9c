"""CLI for school configuration management.

Writes the static config files the pages load, in whichever layout
``CONFIG_SOURCE`` selects (one combined ``schools.json`` or one file per
school). This is the back end of the setup flow.

Usage::

    uv run python -m scripts.manage_school <command> [options]

Commands:
    create-school       Add or replace a school's branding config
    list-schools        List configured schools
    remove-school       Delete a school's config
"""

from __future__ import annotations

import argparse
import json
import sys
from collections.abc import Callable
from pathlib import Path

from school_branding.config import ConfigSource, settings
from school_branding.models.school import (
    DEMO_TENANT,
    ColorScheme,
    ContactInfo,
    TenantConfig,
)


def combined_path() -> Path:
    return settings.config_dir / "schools.json"


def per_tenant_path(school_id: str) -> Path:
    return settings.config_dir / "schools" / f"{school_id}.json"


def load_schools() -> dict[str, TenantConfig]:
    """Read every configured school from disk."""
    if settings.config_source == ConfigSource.PER_TENANT:
        directory = settings.config_dir / "schools"
        if not directory.is_dir():
            return {}
        return {
            path.stem: TenantConfig.model_validate_json(path.read_text("utf-8"))
            for path in sorted(directory.glob("*.json"))
        }

    path = combined_path()
    if not path.is_file():
        return {}
    raw = json.loads(path.read_text("utf-8"))
    return {key: TenantConfig.model_validate(value) for key, value in raw.items()}


def _write_json(path: Path, payload: object) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", "utf-8")


def save_school(school_id: str, config: TenantConfig) -> Path:
    """Persist ``config`` under ``school_id``; returns the file written."""
    record = config.model_dump(exclude_none=True)
    if settings.config_source == ConfigSource.PER_TENANT:
        path = per_tenant_path(school_id)
        _write_json(path, record)
        return path

    path = combined_path()
    schools = json.loads(path.read_text("utf-8")) if path.is_file() else {}
    schools[school_id] = record
    _write_json(path, schools)
    return path


def delete_school(school_id: str) -> bool:
    """Remove ``school_id``; False if it was not configured."""
    if settings.config_source == ConfigSource.PER_TENANT:
        path = per_tenant_path(school_id)
        if not path.is_file():
            return False
        path.unlink()
        return True

    path = combined_path()
    if not path.is_file():
        return False
    schools = json.loads(path.read_text("utf-8"))
    if school_id not in schools:
        return False
    del schools[school_id]
    _write_json(path, schools)
    return True


def create_school(args: argparse.Namespace) -> None:
    """Add or replace a school's branding config."""
    if not args.id or "." in args.id or "/" in args.id:
        print(f"Invalid school id: {args.id!r}", file=sys.stderr)
        sys.exit(1)

    contact = None
    if args.phone or args.email:
        contact = ContactInfo(phone=args.phone, email=args.email)

    config = TenantConfig(
        name=args.name,
        logo=args.logo,
        colors=ColorScheme(primary=args.primary, secondary=args.secondary),
        contact=contact,
    )
    path = save_school(args.id, config)
    print(f"School saved: {args.id} ({args.name}) -> {path}")


def list_schools(_args: argparse.Namespace) -> None:
    """List configured schools."""
    schools = load_schools()
    if not schools:
        print("No schools configured.")
        return

    print("Schools:")
    for i, (school_id, config) in enumerate(sorted(schools.items()), 1):
        marker = " (demo)" if school_id == DEMO_TENANT else ""
        print(
            f"  {i}. {school_id}{marker}: {config.name} "
            f"[{config.colors.primary} / {config.colors.secondary}]"
        )


def remove_school(args: argparse.Namespace) -> None:
    """Delete a school's config."""
    if not delete_school(args.id):
        print(f"School not found: {args.id}", file=sys.stderr)
        sys.exit(1)
    print(f"School removed: {args.id}")


def main() -> None:
    """Parse arguments and dispatch to command handler."""
    parser = argparse.ArgumentParser(description="School configuration CLI")
    sub = parser.add_subparsers(dest="command", required=True)

    # create-school
    p = sub.add_parser("create-school", help="Add or replace a school")
    p.add_argument("--id", required=True, help="Subdomain label, e.g. sdn1")
    p.add_argument("--name", required=True, help="Display name")
    p.add_argument("--logo", default="assets/images/logo.png", help="Logo path/URL")
    p.add_argument("--primary", default="#3b82f6", help="Primary hex color")
    p.add_argument("--secondary", default="#10b981", help="Secondary hex color")
    p.add_argument("--phone", default=None, help="Contact phone")
    p.add_argument("--email", default=None, help="Contact email")

    # list-schools
    sub.add_parser("list-schools", help="List configured schools")

    # remove-school
    p = sub.add_parser("remove-school", help="Delete a school's config")
    p.add_argument("--id", required=True, help="School id")

    args = parser.parse_args()
    commands: dict[str, Callable[[argparse.Namespace], None]] = {
        "create-school": create_school,
        "list-schools": list_schools,
        "remove-school": remove_school,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
