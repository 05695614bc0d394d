"""Discovery executor - runs one discovery from configuration.

Coordinates the full run:
1. Open a UDP transport
2. Run the discovery session
3. Time it and collect the outcome
4. Generate report
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional

from ..config.schema import DiscoveryConfig
from ..discovery.cancellation import CancellationToken
from ..discovery.models import ServerRecord
from ..discovery.session import DiscoverySession
from ..reporting.json_reporter import JsonReporter
from ..transport.base import Transport
from ..transport.udp import UdpTransport

logger = logging.getLogger(__name__)


@dataclass
class ExecutionResult:
    """Complete result of a discovery run."""
    port: int
    servers: set[ServerRecord] = field(default_factory=set)
    outcome: Optional[str] = None
    duration_ms: int = 0
    error: Optional[str] = None
    report_path: Optional[str] = None

    @property
    def found(self) -> bool:
        return len(self.servers) > 0

    def to_report(self) -> dict:
        """Full JSON report for this run."""
        return JsonReporter().generate(
            servers=self.servers,
            port=self.port,
            duration_ms=self.duration_ms,
            outcome=self.outcome,
            error=self.error,
        )

    def to_flow_json(self) -> dict:
        """Convert to command output envelope."""
        return JsonReporter().generate_flow_output(self.to_report(), self.report_path)


class DiscoveryExecutor:
    """Runs a discovery session described by a DiscoveryConfig."""

    def __init__(
        self,
        config: Optional[DiscoveryConfig] = None,
        transport_factory: Callable[[], Transport] = UdpTransport,
        save_report: Optional[Path] = None,
    ):
        """Initialize discovery executor.

        Args:
            config: Discovery configuration. Default: DiscoveryConfig().
            transport_factory: Builds the transport for the session.
            save_report: Path to write the JSON report to. None = don't save.
        """
        self.config = config or DiscoveryConfig()
        self.transport_factory = transport_factory
        self.save_report = save_report
        self.cancellation: Optional[CancellationToken] = None
        self._cancel_requested = False
        self._reporter = JsonReporter()

    def cancel(self) -> None:
        """Ask the running session to stop at its next checkpoint.

        Called before execute(), the next run stops before its first receive.
        """
        if self.cancellation is not None:
            self.cancellation.cancel()
        else:
            self._cancel_requested = True

    def execute(self) -> ExecutionResult:
        """Run discovery.

        Returns:
            ExecutionResult with discovered servers or the error that stopped the run.
        """
        start_time = time.time()
        result = ExecutionResult(port=self.config.port)

        # The deadline clock starts with each run
        self.cancellation = CancellationToken(timeout=self.config.deadline)
        if self._cancel_requested:
            self.cancellation.cancel()
            self._cancel_requested = False

        try:
            session = DiscoverySession(
                self.transport_factory(),
                self.config.timeout,
                cancellation=self.cancellation,
                port=self.config.port,
                broadcast_address=self.config.broadcast_address,
                bind_address=self.config.bind_address,
            )
            result.servers = session.run()
            result.outcome = session.outcome.value if session.outcome else None

        except OSError as e:
            result.error = f"Socket error: {e}"
            logger.error(result.error)

        except Exception as e:
            result.error = f"Unexpected error: {type(e).__name__}: {e}"
            logger.error(result.error)

        finally:
            result.duration_ms = int((time.time() - start_time) * 1000)
            self.cancellation = None

        if self.save_report:
            result.report_path = self._save_report(result)

        return result

    def _save_report(self, result: ExecutionResult) -> Optional[str]:
        """Save discovery report to file."""
        try:
            saved_path = self._reporter.save(result.to_report(), self.save_report)
            logger.info("Report saved: %s", saved_path)
            return str(saved_path)

        except OSError as e:
            logger.warning("Failed to save report: %s", e)
            return None
