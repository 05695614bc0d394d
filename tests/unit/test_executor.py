"""
Unit tests for the discovery executor and JSON reporting.
"""

import ipaddress
import json
import time
import uuid

from lms_discovery.config import DiscoveryConfig
from lms_discovery.discovery import ServerRecord
from lms_discovery.reporting import JsonReporter
from lms_discovery.runner import DiscoveryExecutor, ExecutionResult

from conftest import MEDIA_SERVER_RESPONSE, PROBE, ScriptedTransport


def make_record(address: str = "107.70.178.215", name: str = "MEDIA-SERVER") -> ServerRecord:
    return ServerRecord(
        name=name,
        version=(9, 0, 2),
        uuid=uuid.UUID("b34f68fa-e9ae-4238-b2ce-18bb48fa26a6"),
        json_port=9000,
        clip_port=9090,
        source_address=ipaddress.ip_address(address),
    )


class TestJsonReporter:
    """Test cases for JsonReporter."""

    def test_generate(self):
        report = JsonReporter().generate(
            [make_record("10.0.0.9", "B"), make_record("10.0.0.1", "A")],
            port=3483,
            duration_ms=1200,
            outcome="timed_out",
        )

        assert report["status"] == "completed"
        assert report["summary"] == {"count": 2, "duration_ms": 1200}
        assert [s["name"] for s in report["servers"]] == ["A", "B"]
        assert report["error"] is None

    def test_flow_output_found(self):
        reporter = JsonReporter()
        report = reporter.generate([make_record()], port=3483)

        output = reporter.generate_flow_output(report, report_path="out.json")

        assert output["success"] is True
        assert output["command"] == "discover"
        assert output["message"] == "Found 1 server"
        assert output["data"]["report_path"] == "out.json"

    def test_flow_output_none_found(self):
        reporter = JsonReporter()
        output = reporter.generate_flow_output(reporter.generate([], port=3483))

        assert output["success"] is False
        assert output["message"] == "No servers found on UDP port 3483"

    def test_flow_output_error(self):
        reporter = JsonReporter()
        report = reporter.generate([], port=3483, error="Socket error: denied")

        output = reporter.generate_flow_output(report)

        assert output["success"] is False
        assert output["message"] == "Discovery failed: Socket error: denied"

    def test_save_writes_indented_json(self, tmp_path):
        reporter = JsonReporter()
        report = reporter.generate([make_record()], port=3483)

        path = reporter.save(report, tmp_path / "reports" / "discovery.json")

        text = path.read_text(encoding="utf-8")
        assert json.loads(text) == report
        assert text.startswith("{\n  ")

    def test_to_json_string(self):
        reporter = JsonReporter()
        output = {"message": "Found 1 server", "name": "Küche"}

        assert reporter.to_json_string(output) == '{"message": "Found 1 server", "name": "Küche"}'
        assert reporter.to_json_string(output, pretty=True).startswith("{\n  \"message\"")


class TestDiscoveryExecutor:
    """Test cases for DiscoveryExecutor."""

    def test_execute_collects_servers(self):
        transport = ScriptedTransport([("107.70.178.215", MEDIA_SERVER_RESPONSE)])
        config = DiscoveryConfig(port=4000, timeout=0.5, broadcast_address="192.168.1.255")

        result = DiscoveryExecutor(config, transport_factory=lambda: transport).execute()

        assert result.servers == {make_record()}
        assert result.outcome == "timed_out"
        assert result.error is None
        assert transport.sent == [(PROBE, ("192.168.1.255", 4000))]
        assert transport.wait_bound == 0.5
        assert transport.close_count == 1

    def test_cancel_before_execute(self):
        transport = ScriptedTransport([("107.70.178.215", MEDIA_SERVER_RESPONSE)])
        executor = DiscoveryExecutor(transport_factory=lambda: transport)

        executor.cancel()
        result = executor.execute()

        assert result.outcome == "cancelled"
        assert result.servers == set()

    def test_deadline_starts_at_execute(self):
        transport = ScriptedTransport([("107.70.178.215", MEDIA_SERVER_RESPONSE)])
        executor = DiscoveryExecutor(
            DiscoveryConfig(deadline=0.2), transport_factory=lambda: transport
        )

        time.sleep(0.3)
        result = executor.execute()

        assert result.outcome == "timed_out"
        assert result.servers == {make_record()}
        assert transport.receive_calls >= 1

    def test_execute_twice(self):
        executor = DiscoveryExecutor(
            DiscoveryConfig(deadline=30.0),
            transport_factory=lambda: ScriptedTransport(
                [("107.70.178.215", MEDIA_SERVER_RESPONSE)]
            ),
        )

        first = executor.execute()
        second = executor.execute()

        assert first.servers == second.servers == {make_record()}
        assert first.outcome == second.outcome == "timed_out"
        assert executor.cancellation is None

    def test_cancel_during_run_does_not_carry_over(self):
        def cancel_then_reply():
            executor.cancel()
            return ("107.70.178.215", MEDIA_SERVER_RESPONSE)

        transports = iter([
            ScriptedTransport([cancel_then_reply]),
            ScriptedTransport([("107.70.178.215", MEDIA_SERVER_RESPONSE)]),
        ])
        executor = DiscoveryExecutor(transport_factory=lambda: next(transports))

        first = executor.execute()
        second = executor.execute()

        assert first.outcome == "cancelled"
        assert first.servers == {make_record()}
        assert second.outcome == "timed_out"
        assert second.servers == {make_record()}

    def test_socket_error_reported(self):
        transport = ScriptedTransport([PermissionError("broadcast not permitted")])

        result = DiscoveryExecutor(transport_factory=lambda: transport).execute()

        assert result.error.startswith("Socket error:")
        assert result.outcome is None
        assert transport.close_count == 1
        assert result.to_flow_json()["success"] is False

    def test_transport_factory_failure_reported(self):
        def factory():
            raise OSError("no sockets left")

        result = DiscoveryExecutor(transport_factory=factory).execute()

        assert result.error == "Socket error: no sockets left"

    def test_save_report(self, tmp_path):
        transport = ScriptedTransport([("107.70.178.215", MEDIA_SERVER_RESPONSE)])
        path = tmp_path / "report.json"

        result = DiscoveryExecutor(
            transport_factory=lambda: transport, save_report=path
        ).execute()

        assert result.report_path == str(path)
        saved = json.loads(path.read_text(encoding="utf-8"))
        assert saved["servers"][0]["address"] == "107.70.178.215"

    def test_flow_json(self):
        result = ExecutionResult(port=3483, servers={make_record()}, outcome="timed_out")

        output = result.to_flow_json()

        assert output["success"] is True
        assert output["data"]["count"] == 1
        assert output["data"]["servers"][0]["uuid"] == "b34f68fa-e9ae-4238-b2ce-18bb48fa26a6"
