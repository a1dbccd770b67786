from __future__ import annotations

import argparse
import logging
import sys
from signal import SIGINT, signal
from typing import TYPE_CHECKING

from dotenv import load_dotenv

from pushreg.adapters.memory import (
    demo_backend,
    demo_credential_source,
    demo_session_source,
)
from pushreg.app import (
    Command,
    RegistrationServices,
    build_http_services,
    execute_command,
    log_state_change,
)
from pushreg.config import OrchestratorConfig, configure_logging, get_orchestrator_config
from pushreg.domain.status import RegistrationStatus

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

DEMO_DEVICE_ID = "demo-device"


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--device-id",
        type=str,
        help="Device identity (defaults to PUSHREG_DEVICE_ID)",
    )
    common.add_argument(
        "--settle-delay",
        type=float,
        help="Seconds to wait after each session fetch (defaults to config)",
    )
    common.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    demo = common.add_argument_group("demo mode")
    demo.add_argument(
        "--fake",
        action="store_true",
        help="Use in-memory backends instead of the configured HTTP services",
    )
    demo.add_argument(
        "--push-status",
        choices=[status.value for status in RegistrationStatus],
        default=RegistrationStatus.UNREGISTERED.value,
        help="Initial push-auth backend status in demo mode (default: %(default)s)",
    )
    demo.add_argument(
        "--vendor-status",
        choices=[status.value for status in RegistrationStatus],
        default=RegistrationStatus.UNREGISTERED.value,
        help="Initial vendor backend status in demo mode (default: %(default)s)",
    )
    demo.add_argument(
        "--deny-permission",
        action="store_true",
        help="Refuse notification permission in demo mode",
    )
    demo.add_argument(
        "--reject",
        action="store_true",
        help="Make the demo backends decline register/deregister requests",
    )

    parser = argparse.ArgumentParser(description="Manage push notification registration")
    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser(
        Command.STATUS.value, parents=[common], help="Show the effective registration"
    )
    subparsers.add_parser(
        Command.ENABLE.value, parents=[common], help="Register this device for push"
    )
    subparsers.add_parser(
        Command.DISABLE.value, parents=[common], help="De-register this device from push"
    )
    return parser.parse_args(list(argv))


def _build_config(args: argparse.Namespace) -> OrchestratorConfig:
    if args.settle_delay is not None and args.settle_delay < 0:
        raise ValueError("Settle delay must be non-negative")
    if args.fake:
        base = OrchestratorConfig(device_id=args.device_id or DEMO_DEVICE_ID)
    else:
        base = get_orchestrator_config(device_id=args.device_id)
    if args.settle_delay is None:
        return base
    return OrchestratorConfig(device_id=base.device_id, settle_delay_seconds=args.settle_delay)


def _build_services(args: argparse.Namespace) -> RegistrationServices:
    if not args.fake:
        return build_http_services()
    succeed = not args.reject
    return RegistrationServices(
        session_source=demo_session_source(),
        credential_source=demo_credential_source(allow=not args.deny_permission),
        push_backend=demo_backend(
            "push_auth", status=RegistrationStatus(args.push_status), succeed=succeed
        ),
        vendor_backend=demo_backend(
            "vendor", status=RegistrationStatus(args.vendor_status), succeed=succeed
        ),
    )


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    configure_logging()
    try:
        parsed_args = _parse_args(args_list)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)

    if parsed_args.verbose:
        configure_logging(level=logging.DEBUG, force=True)

    try:
        command = Command(parsed_args.command)
        config = _build_config(parsed_args)
        services = _build_services(parsed_args)
    except ValueError:
        log.exception("CLI validation error")
        sys.exit(2)
    except Exception:
        log.exception("Fatal configuration error")
        sys.exit(1)

    try:
        snapshot = execute_command(
            command,
            services=services,
            config=config,
            subscriber=log_state_change,
        )
    except Exception:
        log.exception("Fatal error while running %s", command)
        sys.exit(1)

    log.info(
        "Push notifications %s (%s)",
        "enabled" if snapshot.is_registered else "disabled",
        snapshot.toggle_label,
    )
    if snapshot.info_message:
        log.info(snapshot.info_message)
    if snapshot.error_message:
        log.error(snapshot.error_message)
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
