# main.py
# Operator entry point - runs one query against Cloud Trace and prints the result views.
#
# Usage:
#     python -m tracequery.main --filter "MinLatency:100ms Service:checkout" --limit 20 --hours 6
#     python -m tracequery.main --trace-id 5f1a... [--project my-project]
#     python -m tracequery.main --projects
#     python -m tracequery.main --check [--project my-project]
import logging
import sys
from datetime import datetime, timedelta, timezone

from tracequery.config import DEFAULT_PROJECT, LOG_LEVEL
from tracequery.models.query import TimeRange
from tracequery.routing.datasource import TraceDatasource
from tracequery.routing.types import QUERY_TYPE_TRACE_ID, DataResponse, HealthStatus, QueryModel
from tracequery.service.provider import ObservabilityProvider


def print_section(title: str, width: int = 60):
    """Helper to print formatted section headers."""
    print("\n" + "=" * width)
    print(f"  {title}")
    print("=" * width)


def _parse_cli_args(args: list[str]) -> dict:
    """Parse --flag value pairs; bare flags become True."""
    options: dict = {}
    idx = 0
    while idx < len(args):
        arg = args[idx]
        if not arg.startswith("--"):
            raise SystemExit(f"unexpected argument: {arg}")
        name = arg[2:]
        # Next arg is either a value or another flag (or missing)
        if idx + 1 < len(args) and not args[idx + 1].startswith("--"):
            options[name] = args[idx + 1]
            idx += 2
        else:
            options[name] = True
            idx += 1
    return options


def print_response(response: DataResponse) -> int:
    if response.error:
        print(f"❌ {response.error}")
        return 1

    for warning in response.warnings:
        print(f"⚠️  {warning}")

    for frame in response.frames:
        print_section(f"{frame.name}  ({frame.preferred_visualization}, {len(frame.rows)} rows)")
        for row in frame.rows:
            print("  " + "  |  ".join(f"{k}={v}" for k, v in row.to_dict().items()))
    return 0


def main(argv: list[str] | None = None) -> int:
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s  %(name)s  %(levelname)s  %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    options = _parse_cli_args(sys.argv[1:] if argv is None else argv)
    project = options.get("project") or DEFAULT_PROJECT

    provider = ObservabilityProvider.create_cloud_trace_provider()
    datasource = TraceDatasource(provider.trace_client, default_project=project)

    try:
        if options.get("projects"):
            print_section("Projects")
            for project_id in datasource.list_projects():
                print(f"  {project_id}")
            return 0

        if options.get("check"):
            result = datasource.check_health()
            print(f"[{result.status.value}] {result.message}")
            return 0 if result.status == HealthStatus.OK else 1

        if options.get("trace-id"):
            query = QueryModel(query_type=QUERY_TYPE_TRACE_ID, trace_id=options["trace-id"])
        else:
            now = datetime.now(timezone.utc)
            hours = float(options.get("hours", 1))
            query = QueryModel(
                query_text=options.get("filter", "") if options.get("filter") is not True else "",
                max_data_points=int(options.get("limit", 20)),
                time_range=TimeRange(from_=now - timedelta(hours=hours), to=now),
            )

        return print_response(datasource.query(query))
    finally:
        datasource.dispose()


if __name__ == "__main__":
    sys.exit(main())
