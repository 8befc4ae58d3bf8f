from __future__ import annotations

import argparse
import signal
import sys
from dataclasses import replace
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from featurepulse.api.errors import FeaturePulseError
from featurepulse.config.sdk_config import SDKConfig
from featurepulse.models.payment import PaymentType, normalize
from featurepulse.sdk import FeaturePulse
from featurepulse.validation import FeatureRequestValidationError

console = Console()

DEFAULT_STORAGE_PATH = ".featurepulse/state.json"


def _handle_sigint(signum, frame) -> None:
    console.print("\n[yellow][INTERRUPTED][/yellow] featurepulse terminated by user (Ctrl+C).")
    raise SystemExit(130)  # 130 is the conventional exit code for SIGINT


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="featurepulse",
        description="FeaturePulse – browse, submit and vote on feature requests",
    )
    parser.add_argument(
        "--env-file",
        type=str,
        default=None,
        help="Path to a .env file with FEATUREPULSE_* settings. Default: ./.env",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a JSON SDK config. Overrides environment variables.",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List feature requests in this device's order")

    submit_p = sub.add_parser("submit", help="Submit a new feature request")
    submit_p.add_argument("title", type=str)
    submit_p.add_argument("description", type=str)
    submit_p.add_argument("--email", type=str, default=None)

    vote_p = sub.add_parser("vote", help="Vote for a feature request")
    vote_p.add_argument("id", type=str)

    unvote_p = sub.add_parser("unvote", help="Remove your vote from a feature request")
    unvote_p.add_argument("id", type=str)

    sync_p = sub.add_parser("sync-user", help="Send user metadata and payment tier")
    sync_p.add_argument("--custom-id", type=str, default=None)
    sync_p.add_argument("--email", type=str, default=None)
    sync_p.add_argument("--name", type=str, default=None)
    sync_p.add_argument(
        "--plan",
        type=str,
        choices=[p.value for p in PaymentType],
        default=None,
        help="Payment plan to report with the user",
    )
    sync_p.add_argument("--price", type=str, default="0", help="Plan price in major units, e.g. 7.99")
    sync_p.add_argument("--currency", type=str, default="USD")
    sync_p.add_argument("--lifetime-months", type=int, default=None)

    sub.add_parser("app-open", help="Report an app open if a new session started")

    return parser


def _load_config(args: argparse.Namespace) -> SDKConfig:
    if args.config:
        return SDKConfig.from_file(args.config)

    config = SDKConfig.from_env(args.env_file)
    if config.storage_path:
        return config
    # The CLI needs a stable device id across invocations
    return replace(config, storage_path=DEFAULT_STORAGE_PATH)


def _print_requests(sdk: FeaturePulse) -> None:
    store = sdk.store
    server_config = sdk.server_config

    table = Table(title="Feature requests")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="bold")
    table.add_column("Votes", justify="right")
    table.add_column("Voted", justify="center")
    if server_config.show_status:
        table.add_column("Status")

    for request in store.feature_requests:
        row = [
            request.id,
            request.title,
            str(request.vote_count),
            "✔" if store.has_voted(request.id) else "",
        ]
        if server_config.show_status:
            appearance = server_config.appearance_for(request.status)
            row.append(f"[{appearance.color}]{request.status.value}[/]")
        table.add_row(*row)

    console.print(table)
    if not server_config.permissions.can_create_feature_request:
        console.print("[dim]Submitting new requests requires a subscription.[/dim]")


def _run(sdk: FeaturePulse, args: argparse.Namespace) -> int:
    if args.command == "list":
        if not sdk.store.load_feature_requests():
            raise sdk.store.error  # type: ignore[misc]
        _print_requests(sdk)
        return 0

    if args.command == "submit":
        sdk.store.load_feature_requests()
        draft = sdk.store.submit_feature_request(args.title, args.description, email=args.email, reload=False)
        console.print(Panel.fit(f"[bold green]Submitted:[/bold green] {draft.title}", border_style="green"))
        return 0

    if args.command in ("vote", "unvote"):
        if not sdk.store.load_feature_requests():
            raise sdk.store.error  # type: ignore[misc]
        wants_vote = args.command == "vote"
        if sdk.store.has_voted(args.id) == wants_vote:
            console.print(f"[yellow]Nothing to do: already {'voted' if wants_vote else 'not voted'}.[/yellow]")
            return 0
        if not sdk.store.toggle_vote(args.id):
            raise sdk.store.vote_error  # type: ignore[misc]
        request = sdk.store.get(args.id)
        votes = request.vote_count if request else "?"
        console.print(f"[green]{args.command.capitalize()} recorded[/green] ({votes} votes)")
        return 0

    if args.command == "sync-user":
        if args.plan:
            lifetime_months = args.lifetime_months
            if lifetime_months is None:
                lifetime_months = sdk.config.default_lifetime_months
            sdk.user.payment = normalize(args.plan, args.price, args.currency, lifetime_months)
        if not sdk.update_user(custom_id=args.custom_id, email=args.email, name=args.name):
            console.print("[red]User sync failed; see log output.[/red]")
            return 1
        console.print("[green]User synced.[/green]")
        return 0

    if args.command == "app-open":
        tracked = sdk.track_app_open_if_new_session()
        console.print("[green]New session tracked.[/green]" if tracked else "[dim]No new session.[/dim]")
        return 0

    return 2


def main(argv: Optional[List[str]] = None) -> int:
    # Register Ctrl+C handler as early as possible
    signal.signal(signal.SIGINT, _handle_sigint)

    args = _build_parser().parse_args(argv)

    try:
        sdk = FeaturePulse(_load_config(args))
        return _run(sdk, args)
    except FeatureRequestValidationError as e:
        console.print(f"[red]Invalid {e.field}:[/red] {e.message}")
        return 1
    except FeaturePulseError as e:
        console.print(f"[red]Error:[/red] {e.message}")
        if e.recovery_suggestion:
            console.print(f"[dim]{e.recovery_suggestion}[/dim]")
        return 1
    except ValueError as e:
        console.print(f"[red]Invalid input:[/red] {e}")
        return 2


if __name__ == "__main__":
    sys.exit(main())
