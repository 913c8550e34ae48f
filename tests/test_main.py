"""Tests for the command line entry point."""

from unittest.mock import Mock

import pytest

from tracequery import main as cli
from tracequery.errors import NoEntriesError
from tracequery.service.provider import ObservabilityProvider
from tracequery.service.trace.trace_client import TraceClient


@pytest.fixture
def trace_client(monkeypatch):
    client = Mock(spec=TraceClient)
    monkeypatch.setattr(
        ObservabilityProvider,
        "create_cloud_trace_provider",
        classmethod(lambda cls, **kwargs: cls(trace_client=client)),
    )
    return client


class TestParseCliArgs:
    """Tests for argument parsing."""

    def test_values_and_flags(self):
        assert cli._parse_cli_args(["--filter", "Method:GET", "--check", "--limit", "5"]) == {
            "filter": "Method:GET",
            "check": True,
            "limit": "5",
        }

    def test_positional_rejected(self):
        with pytest.raises(SystemExit):
            cli._parse_cli_args(["oops"])


class TestMain:
    """Tests for main()."""

    def test_filter_query(self, trace_client, capsys):
        trace_client.list_traces.return_value = []

        assert cli.main(["--filter", "Method:GET", "--limit", "5", "--project", "p"]) == 0

        query = trace_client.list_traces.call_args.args[0]
        assert query.filter == "method:GET"
        assert query.limit == 5
        assert query.project_id == "p"
        assert "traceTable" in capsys.readouterr().out
        trace_client.close.assert_called_once()

    def test_bad_filter_exit_code(self, trace_client, capsys):
        assert cli.main(["--filter", "oops"]) == 1
        assert "bad filter [oops]" in capsys.readouterr().out

    def test_projects(self, trace_client, capsys):
        trace_client.list_projects.return_value = ["alpha", "beta"]

        assert cli.main(["--projects"]) == 0
        out = capsys.readouterr().out
        assert "alpha" in out and "beta" in out

    def test_check_failure(self, trace_client, capsys):
        trace_client.test_connection.side_effect = NoEntriesError("no entries")

        assert cli.main(["--check", "--project", "p"]) == 1
        assert "failed to run test query: no entries" in capsys.readouterr().out
