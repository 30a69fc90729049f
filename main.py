"""CLI entry point for the careers E2E suite."""

import argparse
import logging
import sys

from careers_e2e.core.config import Settings
from careers_e2e.core.errors import ConfigurationError, SessionError
from careers_e2e.core.schemas import ScenarioReport, StepStatus


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Insider careers end-to-end scenario",
    )
    subparsers = parser.add_subparsers(dest="command")

    # --- run subcommand (default) ---
    run_parser = subparsers.add_parser("run", help="Run the careers scenario in a browser")
    run_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    run_parser.add_argument(
        "--headless",
        action="store_true",
        help="Force headless mode regardless of the config file",
    )
    run_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Show the steps and resolved settings without launching a browser",
    )
    run_parser.add_argument(
        "--log-file",
        help="Also write logs to this file",
    )
    run_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    # --- check-config subcommand ---
    check_parser = subparsers.add_parser(
        "check-config",
        help="Validate a settings file and print the resolved values",
    )
    check_parser.add_argument(
        "--config",
        default="config/settings.yaml",
        help="Path to settings YAML file (default: config/settings.yaml)",
    )
    check_parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose (DEBUG) logging",
    )

    argv = list(sys.argv[1:] if argv is None else argv)

    # Default to run when no subcommand given; run flags are only known to run_parser
    if not argv or argv[0] not in (*subparsers.choices, "-h", "--help"):
        argv = ["run", *argv]

    return parser.parse_args(argv)


def setup_logging(verbose: bool, log_file: str | None = None) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=handlers,
    )
    for noisy in ("patchright", "asyncio", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def load_settings(path: str) -> Settings:
    try:
        return Settings.from_yaml(path)
    except (FileNotFoundError, ConfigurationError) as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        sys.exit(1)


def print_settings(settings: Settings) -> None:
    print(f"Home URL:        {settings.urls.base}")
    print(f"Careers URL:     {settings.urls.careers}")
    print(f"QA careers URL:  {settings.urls.qa_careers}")
    print(f"Filters:         location='{settings.filters.location}', "
          f"department='{settings.filters.department}'")
    print(f"Expected:        {settings.expected.model_dump()}")
    print(f"Timeouts:        {settings.timeouts.model_dump()}")
    print(f"Browser:         {settings.browser.model_dump()}")
    print(f"Screenshots dir: {settings.diagnostics.screenshots_dir}")


def dry_run(settings: Settings) -> None:
    """Print what would happen without launching a browser."""
    from careers_e2e.scenario.careers import SCENARIO_NAME

    print(f"[DRY RUN] {SCENARIO_NAME}")
    print_settings(settings)
    for i, line in enumerate(
        (
            "Open home page and verify it is loaded",
            "Open Careers via the Company menu, verify Locations/Teams/Life at Insider",
            "Open QA careers, see all jobs, filter by location and department",
            "Validate position/department/location of every listed job",
            "Click the first View Role and verify the Lever application form",
        ),
        start=1,
    ):
        print(f"[DRY RUN] Step {i}: {line}")


def print_report(report: ScenarioReport) -> None:
    print(f"\n{report.name}: {'PASSED' if report.passed else 'FAILED'}")
    for step in report.steps:
        print(f"  [{step.status.value:7}] Step {step.index}: {step.description} "
              f"({step.duration_s:.1f}s)")
        if step.status != StepStatus.PASSED:
            print(f"            {step.reason}")
        for path in step.screenshots:
            print(f"            screenshot: {path}")


def run(settings: Settings) -> ScenarioReport:
    """Run the careers scenario with a real browser."""
    from careers_e2e.browser.session import BrowserSession
    from careers_e2e.scenario.careers import build_careers_scenario

    with BrowserSession(settings.browser, settings.timeouts) as session:
        runner = build_careers_scenario(session, settings)
        return runner.run()


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    setup_logging(args.verbose, getattr(args, "log_file", None))

    settings = load_settings(args.config)

    if args.command == "check-config":
        print_settings(settings)
        print("Configuration OK")
        return

    if args.headless:
        settings = settings.model_copy(
            update={"browser": settings.browser.model_copy(update={"headless": True})},
        )

    if args.dry_run:
        dry_run(settings)
        return

    try:
        report = run(settings)
    except SessionError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    print_report(report)
    if not report.passed:
        sys.exit(1)


if __name__ == "__main__":
    main()
