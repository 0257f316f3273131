"""
AirDropPro - Entry Point

Advertises this machine on the LAN and serves an HTTP API for pushing and
pulling files and clipboard content.

Commands:
    airdroppro                      Start the service (tray icon)
    airdroppro start --no-tray      Start without the tray (headless)
    airdroppro config               Show/edit configuration
    airdroppro autostart on|off     Start on login
"""
import sys
import signal
import logging
import argparse
import threading

from airdroppro import config
from airdroppro.common.autostart import set_auto_startup
from airdroppro.common.clipboard import ClipboardBridge
from airdroppro.common.discovery import ServiceAdvertiser
from airdroppro.common.errors import AirDropError, ErrorCode, format_error, get_error_from_exception
from airdroppro.common.notifications import LogNotifier, Notifier
from airdroppro.common.singleton import SingletonLock
from airdroppro.common.user_config import ConfigManager, ServiceConfig, print_config
from airdroppro.platform import get_autolaunch, get_clipboard_backend_class, get_platform_info
from airdroppro.server import TransferServer

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False):
    """Log to stdout and to a log file that is truncated on every start"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.StreamHandler(sys.stdout),
            logging.FileHandler(config.get_log_file(), mode='w', encoding='utf-8')
        ]
    )
    # Requests are already logged by the server
    logging.getLogger('werkzeug').setLevel(logging.WARNING)
    logger.info("Logger has been initialized")


def log_and_exit(prompt: str, exc: BaseException):
    """Report a startup failure and terminate the process."""
    logger.error(f"{prompt} : {exc}", exc_info=exc)
    print(f"\n[ERROR] {prompt}: {exc}")
    print(get_error_from_exception(exc))
    sys.exit(1)


class AirDropService:
    """
    Wires the advertiser and the transfer server around one ServiceConfig.

    Raises startup errors instead of exiting; the caller decides what a
    failure means for the process.
    """

    def __init__(self, service_config: ServiceConfig, notifier: Notifier,
                 bridge: ClipboardBridge = None, advertiser: ServiceAdvertiser = None):
        self.config = service_config

        if bridge is None:
            bridge = ClipboardBridge(
                get_clipboard_backend_class(),
                normalizer=get_platform_info().link_normalizer,
            )

        self.advertiser = advertiser or ServiceAdvertiser()
        self.server = TransferServer(service_config, bridge, notifier)

    def advertise(self):
        self.advertiser.publish(self.config.name, self.config.port)

    def serve(self):
        self.server.start()

    def stop(self):
        logger.info("Shutting down...")
        self.server.stop()
        self.advertiser.close()


def _apply_autostart(enabled: bool):
    try:
        set_auto_startup(enabled)
    except OSError as e:
        logger.warning(f"Could not update autostart: {e}")


def _run_headless():
    """Block until SIGINT/SIGTERM"""
    stop_event = threading.Event()

    def signal_handler(sig, frame):
        stop_event.set()

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    print("Press Ctrl+C to stop.\n")
    while not stop_event.wait(0.5):
        pass


def cmd_start(args):
    """Start advertising and serving"""
    setup_logging(args.verbose)

    lock = SingletonLock()
    if not lock.acquire():
        print(f"\n{format_error(ErrorCode.ALREADY_RUNNING, f'PID {lock.get_existing_pid()}')}")
        sys.exit(1)

    try:
        try:
            settings = ConfigManager().load()
            service_config = settings.to_service_config()
        except AirDropError as e:
            log_and_exit("Failed to load config", e)

        _apply_autostart(settings.autostart)

        tray = None
        if not args.no_tray:
            try:
                from airdroppro.ui import TrayApp
            except ImportError as e:
                log_and_exit("Failed to start tray", e)
            tray = TrayApp()

        sink = tray.notification_sink() if tray else LogNotifier()
        notifier = Notifier(sink, enabled=settings.show_notifications)
        service = AirDropService(service_config, notifier)

        try:
            service.advertise()
        except AirDropError as e:
            log_and_exit("Failed to publish mDNS service", e)

        try:
            service.serve()
        except AirDropError as e:
            service.advertiser.close()
            log_and_exit("Failed to publish API server", e)

        print("\n" + "=" * 50)
        print(f"  {config.APP_NAME} - {get_platform_info().display_name}")
        print("=" * 50)
        print(f"  Name:      {service_config.name}")
        print(f"  Port:      {service.server.port}")
        print(f"  Downloads: {service_config.root_directory}")
        print("=" * 50 + "\n")

        if tray:
            tray.run(service_config.name, service.server.port, on_quit=service.stop)
        else:
            try:
                _run_headless()
            finally:
                service.stop()
    finally:
        lock.release()


def cmd_config(args):
    """Show or modify configuration"""
    manager = ConfigManager()

    if args.reset:
        manager.reset()
        print("[OK] Configuration reset to defaults.")
        print_config(manager)
        return

    try:
        manager.load()
    except AirDropError as e:
        print(f"[ERROR] {e}")
        print("Run 'airdroppro config --reset' to restore defaults.")
        sys.exit(1)

    if args.set:
        key, value = args.set
        # Convert value to appropriate type
        if value.lower() in ('true', 'on', 'yes'):
            value = True
        elif value.lower() in ('false', 'off', 'no'):
            value = False
        elif value.isdigit():
            value = int(value)

        if manager.set(key, value):
            print(f"[OK] Set {key} = {value}")
        else:
            print(f"[ERROR] Could not set {key} = {value!r}")
            print("\nAvailable keys:")
            for k in manager.get().to_dict():
                print(f"  - {k}")
            sys.exit(1)
        return

    print_config(manager)


def cmd_autostart(args):
    """Enable, disable or show start on login"""
    from airdroppro.common.autostart import get_app_args

    launcher = get_autolaunch(get_app_args())

    if args.action == 'status':
        print(f"Autostart: {'ON' if launcher.is_enabled() else 'OFF'}")
        return

    enable = args.action == 'on'
    try:
        changed = set_auto_startup(enable, launcher)
    except OSError as e:
        print(f"[ERROR] Failed to {'enable' if enable else 'disable'} autostart: {e}")
        sys.exit(1)

    # Keep the setting in sync so the next start does not undo it
    manager = ConfigManager()
    try:
        manager.load()
        manager.set('autostart', enable)
    except AirDropError as e:
        logger.warning(f"Could not store autostart setting: {e}")

    state = 'ON' if enable else 'OFF'
    print(f"[OK] Autostart {state}" if changed else f"Autostart already {state}")


def main():
    parser = argparse.ArgumentParser(
        description=f'{config.APP_NAME} - LAN file and clipboard exchange',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  start       Start the service (default)
  config      Show/edit configuration
  autostart   Start on login (on/off/status)

Examples:
  airdroppro                              Start with tray icon
  airdroppro start --no-tray -v           Headless, verbose logging
  airdroppro config --set port 9000       Change the port
  airdroppro config --set download_path desktop
  airdroppro autostart on                 Start on login
"""
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    start_parser = subparsers.add_parser('start', help='Start the service')
    start_parser.add_argument('-v', '--verbose', action='store_true', help='Verbose logging')
    start_parser.add_argument('--no-tray', action='store_true', help='Run without the tray icon')

    config_parser = subparsers.add_parser('config', help='Show/edit configuration')
    config_parser.add_argument('--show', action='store_true', help='Show current configuration')
    config_parser.add_argument('--reset', action='store_true', help='Reset to default configuration')
    config_parser.add_argument('--set', nargs=2, metavar=('KEY', 'VALUE'), help='Set a configuration value')

    autostart_parser = subparsers.add_parser('autostart', help='Start on login')
    autostart_parser.add_argument('action', choices=['on', 'off', 'status'])

    args = parser.parse_args()

    # Default to start if no command
    if args.command is None:
        args.command = 'start'
        args.verbose = False
        args.no_tray = False

    if args.command == 'start':
        cmd_start(args)
    elif args.command == 'config':
        cmd_config(args)
    elif args.command == 'autostart':
        cmd_autostart(args)
    else:
        parser.print_help()


if __name__ == '__main__':
    main()
