"""
Hardware Test - command line entry point

Runs the connectivity test of each requested module, prints a pass/fail
line per module and a final tally. Exit status is 1 if anything failed.
"""

import argparse
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable

from hardware_test import __version__
from hardware_test.core.app_logging import get_logger, setup_logging
from hardware_test.core.config import AppConfig, DEFAULT_ANTENNAS, load_config
from hardware_test.devices import CardReader, LockController, RfidReader, ScreenController
from hardware_test.devices.base import DeviceController
from hardware_test.transport import SerialEndpoint, SocketEndpoint
from hardware_test.transport.base import TransportError

logger = get_logger(__name__)

MODULES = ("rfid", "lock", "screen", "cardreader", "all")

EXAMPLES = """\
examples:
  # RFID reader over TCP
  hardware-test --module rfid --host 192.168.1.100 --port 8086

  # lock board on the default serial port, or a specific one
  hardware-test --module lock
  hardware-test --module lock --serial /dev/ttyUSB0 --baud 9600

  # display panel over TCP
  hardware-test --module screen --host 192.168.1.101 --port 8080

  # USB card reader with explicit ids
  hardware-test --module cardreader --vid 0x1234 --pid 0x5678

  # everything
  hardware-test --module all --host 192.168.1.100 --port 8086
"""


class UnknownModule(ValueError):
    """Module selector not recognized."""

    code = "UNKNOWN_MODULE"


@dataclass
class RunOptions:
    """Resolved command-line and configuration parameters."""

    host: str = ""
    port: int = 0
    serial_path: str = ""
    baud_rate: int = 115200
    vid: int = 0
    pid: int = 0
    antennas: list[int] = field(default_factory=lambda: list(DEFAULT_ANTENNAS))
    config: AppConfig = field(default_factory=AppConfig)

    @property
    def has_socket(self) -> bool:
        return bool(self.host) and self.port > 0

    def socket_endpoint(self) -> SocketEndpoint:
        return SocketEndpoint(self.host, self.port, self.config.timeouts.connect)

    def serial_endpoint(self) -> SerialEndpoint:
        return SerialEndpoint(self.serial_path, self.baud_rate, self.config.serial.read_timeout)


def parse_antennas(value: str) -> list[int]:
    """Parse "1,2,3,4"; bad or non-positive entries are dropped."""
    antennas = []
    for part in value.split(","):
        try:
            antenna = int(part.strip())
        except ValueError:
            continue
        if antenna > 0:
            antennas.append(antenna)
    return antennas or list(DEFAULT_ANTENNAS)


def _hex_int(value: str) -> int:
    return int(value, 0)


def _tcp_port(value: str) -> int:
    port = int(value)
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hardware-test",
        description="Peripheral connectivity test tool",
        epilog=EXAMPLES,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-m", "--module", default="",
        help="modules to test, comma separated: rfid, lock, screen, cardreader, all",
    )
    parser.add_argument("--host", default="", help="device address for socket connections")
    parser.add_argument("--port", type=_tcp_port, default=0, help="TCP port for socket connections")
    parser.add_argument("--serial", default=None, help="serial port path (lock, screen)")
    parser.add_argument("--baud", type=int, default=None, help="serial baud rate")
    parser.add_argument("--vid", type=_hex_int, default=None, help="card reader VID, e.g. 0x1A86")
    parser.add_argument("--pid", type=_hex_int, default=None, help="card reader PID, e.g. 0xE000")
    parser.add_argument("--antennas", default=None, help="RFID antenna list, e.g. 1,2,3,4")
    parser.add_argument("--config", type=Path, default=None, help="configuration file (YAML or JSON)")
    parser.add_argument("--log-dir", type=Path, default=None, help="directory for JSONL session logs")
    parser.add_argument("--debug", action="store_true", help="log raw frames")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def resolve_options(args: argparse.Namespace, config: AppConfig) -> RunOptions:
    """Merge command-line arguments over configuration defaults."""
    return RunOptions(
        host=args.host,
        port=args.port,
        serial_path=args.serial or config.serial.path,
        baud_rate=args.baud or config.serial.baud_rate,
        vid=config.cardreader.vid if args.vid is None else args.vid,
        pid=config.cardreader.pid if args.pid is None else args.pid,
        antennas=parse_antennas(args.antennas) if args.antennas else list(config.rfid.antennas),
        config=config,
    )


def _require(controller: DeviceController | CardReader) -> None:
    if not controller.test_connection():
        raise controller.last_error or TransportError("test failed")


def check_rfid(options: RunOptions) -> None:
    if not options.has_socket:
        raise ValueError("RFID test requires --host and --port")

    timeouts = options.config.timeouts
    reader = RfidReader(
        options.socket_endpoint(),
        antennas=options.antennas,
        probe_timeout=timeouts.probe,
        settle_delay=timeouts.rfid_settle,
    )
    print(f"Connecting to RFID reader: {options.host}:{options.port} (antennas: {options.antennas})")
    _require(reader)


def _lock_controller(options: RunOptions, use_socket: bool) -> LockController:
    timeouts = options.config.timeouts
    if use_socket:
        endpoint = options.socket_endpoint()
        print(f"Connecting to lock board (socket): {options.host}:{options.port}")
    else:
        endpoint = options.serial_endpoint()
        print(f"Connecting to lock board (serial): {options.serial_path} (baud: {options.baud_rate})")
    return LockController(
        endpoint,
        probe_timeout=timeouts.probe,
        board_read_timeout=timeouts.board_poll,
        board_settle_delay=timeouts.board_settle,
    )


def check_lock(options: RunOptions, use_socket: bool | None = None) -> None:
    controller = _lock_controller(
        options, options.has_socket if use_socket is None else use_socket
    )
    _require(controller)

    with controller:
        statuses = controller.query_all()

    print("\n========== Lock status report ==========")
    for status in statuses:
        print(f"Board address: 0x{status.board_address:02X}")
        print(f"  Length: {status.length} bytes")
        print(f"  Raw: {status.data.hex().upper()}")
        print(f"  Hex: {status.data.hex(' ').upper()}")


def check_screen(options: RunOptions, use_socket: bool | None = None) -> None:
    timeouts = options.config.timeouts
    if options.has_socket if use_socket is None else use_socket:
        endpoint = options.socket_endpoint()
        print(f"Connecting to screen (socket): {options.host}:{options.port}")
    else:
        endpoint = options.serial_endpoint()
        print(f"Connecting to screen (serial): {options.serial_path} (baud: {options.baud_rate})")

    controller = ScreenController(
        endpoint, probe_timeout=timeouts.probe, settle_delay=timeouts.screen_settle
    )
    _require(controller)


def check_cardreader(options: RunOptions) -> None:
    if options.vid == 0 or options.pid == 0:
        raise ValueError("card reader test requires --vid and --pid")

    reader = CardReader(options.vid, options.pid, options.config.cardreader.read_timeout)
    print(f"Connecting to card reader: VID=0x{options.vid:04X}, PID=0x{options.pid:04X}")
    _require(reader)
    print(f"Device info: {reader.product} - {reader.manufacturer}")


def check_all(options: RunOptions) -> None:
    """Socket modules when host/port are given, the card reader when ids are set."""
    steps: list[Callable[[], None]] = []
    if options.has_socket:
        steps += [
            lambda: check_rfid(options),
            lambda: check_lock(options, use_socket=True),
            lambda: check_screen(options, use_socket=True),
        ]
    if options.vid != 0 and options.pid != 0:
        steps.append(lambda: check_cardreader(options))

    last_error: Exception | None = None
    for step in steps:
        try:
            step()
        except (TransportError, ValueError) as e:
            logger.error(f"Module failed: {e}")
            last_error = e

    if last_error is not None:
        raise last_error


MODULE_CHECKS: dict[str, Callable[[RunOptions], None]] = {
    "rfid": check_rfid,
    "lock": check_lock,
    "screen": check_screen,
    "cardreader": check_cardreader,
    "all": check_all,
}


def run_module(module: str, options: RunOptions) -> None:
    """
    Run one module test.

    Raises:
        UnknownModule: for an unrecognized selector
        TransportError: when the device test fails
    """
    check = MODULE_CHECKS.get(module)
    if check is None:
        raise UnknownModule(f"unknown module: {module}")
    check(options)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(
        log_dir=args.log_dir or Path(config.logging.log_dir),
        debug=args.debug or config.logging.log_level.upper() == "DEBUG",
    )

    if not args.module:
        parser.print_help()
        return 1

    options = resolve_options(args, config)

    passed = 0
    failed = 0
    for module in args.module.split(","):
        module = module.strip()
        print(f"\n========== Testing {module.upper()} ==========")
        try:
            run_module(module, options)
        except (TransportError, ValueError) as e:
            print(f"✗ {module.upper()} failed: {e}")
            failed += 1
        else:
            print(f"✓ {module.upper()} passed")
            passed += 1

    print("\n========== Results ==========")
    print(f"Passed: {passed}, Failed: {failed}, Total: {passed + failed}")

    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
