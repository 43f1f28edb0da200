"""Playback daemon: ticks the playback loop against the wall clock.

Runs in the foreground as a single-threaded timer loop: every tick reads the
clock, interpolates the current values and, at 23:59:59, regenerates the
next day's forecast.

Usage:
    python -m wxsim play                 # tick every second (default)
    python -m wxsim play --interval 0.5
    python -m wxsim stop                 # stop running daemon
"""

import json
import logging
import os
import signal
import sys
import time
from collections.abc import Callable
from datetime import UTC, datetime
from pathlib import Path

from wxsim.config.schema import SimulatorConfig
from wxsim.models.common import local_now
from wxsim.playback.builder import build_loop
from wxsim.playback.loop import PlaybackLoop
from wxsim.reporting.formatters import format_snapshot_line
from wxsim.storage.database import connect

logger = logging.getLogger(__name__)

MAX_BACKOFF = 60  # seconds
STATE_SAVE_EVERY = 30  # ticks
PID_DIR = Path("data")
PID_FILE = PID_DIR / "daemon.pid"
STATE_FILE = PID_DIR / "daemon_state.json"
LOG_DIR = Path("logs")
MAX_LOG_FILES = 100  # Keep last 100 session logs


class PlaybackDaemon:
    """Runs the playback loop with crash recovery and signal handling."""

    def __init__(
        self,
        config: SimulatorConfig,
        db_path: str = "data/wxsim.db",
        interval: float | None = None,
        clock: Callable[[], datetime] = local_now,
        echo: bool = True,
    ):
        self.config = config
        self.db_path = db_path
        self.interval = interval or config.playback.tick_interval_seconds
        self.clock = clock
        self.echo = echo
        self.loop: PlaybackLoop | None = None
        self._running = False
        self._consecutive_failures = 0
        self._total_ticks = 0
        self._total_failures = 0
        self._started_at: str | None = None
        self._last_line = ""

    def start(self) -> None:
        """Start the daemon loop."""
        self._check_not_already_running()
        self._write_pid()
        self._setup_signals()
        self._running = True
        self._started_at = datetime.now(UTC).isoformat()

        file_handler = self._open_session_log()
        conn = connect(self.db_path)
        try:
            self.loop = build_loop(self.config, conn)
            self.loop.start(self.clock())
            logger.info(
                "Daemon started — interval=%.1fs pid=%d forecast=v%d",
                self.interval, os.getpid(), self.loop.state.version,
            )
            print(f"🔄 Playback started (pid {os.getpid()}, every {self.interval:g}s)")
            print("   Stop: python -m wxsim stop")
            self._loop()
        except KeyboardInterrupt:
            logger.info("Daemon interrupted by keyboard")
        finally:
            self._cleanup()
            conn.close()
            logging.getLogger().removeHandler(file_handler)
            file_handler.close()
            self._rotate_logs()

    def _loop(self) -> None:
        """Main tick loop with backoff on failures."""
        while self._running:
            tick_start = time.monotonic()

            if self._run_one_tick():
                self._consecutive_failures = 0
                wait = self.interval
            else:
                self._consecutive_failures += 1
                wait = min(
                    self.interval * (2 ** self._consecutive_failures), MAX_BACKOFF
                )
                logger.warning(
                    "Tick failed (%d consecutive), backing off %.1fs",
                    self._consecutive_failures, wait,
                )
                self._save_state()

            if self._total_ticks % STATE_SAVE_EVERY == 0:
                self._save_state()

            sleep_until = tick_start + wait
            while self._running and time.monotonic() < sleep_until:
                time.sleep(min(1.0, max(0.0, sleep_until - time.monotonic())))

    def _run_one_tick(self) -> bool:
        """Execute a single tick. Returns True on success."""
        assert self.loop is not None
        self._total_ticks += 1
        try:
            snapshot = self.loop.tick(self.clock())
        except Exception:
            self._total_failures += 1
            logger.exception("Tick #%d crashed", self._total_ticks)
            return False

        if snapshot is not None and self.echo:
            line = format_snapshot_line(snapshot)
            # Skip the HH:MM:SS prefix so unchanged values print once
            if line[9:] != self._last_line[9:]:
                print(line)
            self._last_line = line
        return True

    def _open_session_log(self) -> logging.Handler:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now(UTC).strftime("%Y%m%dT%H%M%SZ")
        file_handler = logging.FileHandler(LOG_DIR / f"playback_{timestamp}.log")
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logging.getLogger().addHandler(file_handler)
        return file_handler

    def _rotate_logs(self) -> None:
        """Keep only the most recent log files."""
        if not LOG_DIR.exists():
            return
        logs = sorted(LOG_DIR.glob("playback_*.log"))
        if len(logs) > MAX_LOG_FILES:
            for old in logs[: len(logs) - MAX_LOG_FILES]:
                old.unlink(missing_ok=True)

    def _setup_signals(self) -> None:
        """Handle SIGTERM and SIGINT for graceful shutdown."""
        def _stop(signum: int, frame: object) -> None:
            sig_name = signal.Signals(signum).name
            logger.info("Received %s, shutting down gracefully...", sig_name)
            self._running = False

        signal.signal(signal.SIGTERM, _stop)
        signal.signal(signal.SIGINT, _stop)

    def _check_not_already_running(self) -> None:
        """Prevent duplicate daemons."""
        if not PID_FILE.exists():
            return
        try:
            pid = int(PID_FILE.read_text().strip())
            os.kill(pid, 0)
            print(f"❌ Daemon already running (pid {pid}). Stop it first:")
            print("   python -m wxsim stop")
            sys.exit(1)
        except (ProcessLookupError, ValueError):
            # Stale PID file
            PID_FILE.unlink(missing_ok=True)
        except PermissionError:
            print("❌ Daemon may be running, can't verify.")
            sys.exit(1)

    def _write_pid(self) -> None:
        PID_DIR.mkdir(parents=True, exist_ok=True)
        PID_FILE.write_text(str(os.getpid()))

    def _save_state(self) -> None:
        """Persist daemon stats for status reporting."""
        loop_state = self.loop.state if self.loop is not None else None
        state = {
            "pid": os.getpid(),
            "started_at": self._started_at,
            "interval": self.interval,
            "playback": self.loop.status.value if self.loop is not None else "idle",
            "forecast_version": loop_state.version if loop_state else None,
            "forecast_date": loop_state.forecast_date.isoformat() if loop_state else None,
            "front": loop_state.front.value if loop_state else None,
            "total_ticks": self._total_ticks,
            "total_failures": self._total_failures,
            "consecutive_failures": self._consecutive_failures,
            "last_update": datetime.now(UTC).isoformat(),
        }
        PID_DIR.mkdir(parents=True, exist_ok=True)
        STATE_FILE.write_text(json.dumps(state, indent=2))

    def _cleanup(self) -> None:
        """Remove PID file on exit."""
        PID_FILE.unlink(missing_ok=True)
        self._save_state()
        logger.info(
            "Daemon stopped — %d ticks (%d failed)",
            self._total_ticks, self._total_failures,
        )
        print(f"⏹️  Playback stopped — {self._total_ticks} ticks ({self._total_failures} failed)")


def stop_daemon() -> int:
    """Stop a running daemon by sending SIGTERM."""
    if not PID_FILE.exists():
        print("No daemon running (no PID file found)")
        return 1

    try:
        pid = int(PID_FILE.read_text().strip())
    except ValueError:
        print("Corrupt PID file, removing")
        PID_FILE.unlink(missing_ok=True)
        return 1

    try:
        os.kill(pid, 0)
    except ProcessLookupError:
        print(f"Daemon not running (stale pid {pid}), cleaning up")
        PID_FILE.unlink(missing_ok=True)
        STATE_FILE.unlink(missing_ok=True)
        return 0

    print(f"Stopping daemon (pid {pid})...")
    os.kill(pid, signal.SIGTERM)

    for _ in range(30):
        time.sleep(1)
        try:
            os.kill(pid, 0)
        except ProcessLookupError:
            print("✅ Daemon stopped")
            PID_FILE.unlink(missing_ok=True)
            return 0

    print("⚠️  Daemon didn't stop in 30s, sending SIGKILL")
    os.kill(pid, signal.SIGKILL)
    PID_FILE.unlink(missing_ok=True)
    return 0


def daemon_status() -> int:
    """Print daemon status from state file."""
    if not STATE_FILE.exists():
        print("No daemon state found")
        return 1

    state = json.loads(STATE_FILE.read_text())
    pid = state.get("pid", "?")

    running = False
    try:
        os.kill(int(pid), 0)
        running = True
    except (ProcessLookupError, ValueError, TypeError):
        pass

    status_icon = "🟢" if running else "🔴"
    print(f"{status_icon} Daemon {'running' if running else 'stopped'}")
    print(f"  PID: {pid}")
    print(f"  Interval: {state.get('interval', '?')}s")
    print(f"  Playback: {state.get('playback', '?')}")
    print(f"  Forecast: v{state.get('forecast_version', '?')} for {state.get('forecast_date', '?')}")
    print(f"  Front: {state.get('front', '?')}")
    print(f"  Started: {state.get('started_at', '?')}")
    print(f"  Total ticks: {state.get('total_ticks', 0)}")
    print(f"  Failures: {state.get('total_failures', 0)}")
    print(f"  Consecutive failures: {state.get('consecutive_failures', 0)}")
    print(f"  Last update: {state.get('last_update', '?')}")
    return 0
