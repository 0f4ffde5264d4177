"""
testrail-cli — CLI tool for reading and updating a TestRail instance
"""

import argparse
import json
import sys

from testrail_cli import config
from testrail_cli.commands import (
    cmd_add_result,
    cmd_add_run,
    cmd_case,
    cmd_cases,
    cmd_close_plan,
    cmd_close_run,
    cmd_delete_run,
    cmd_milestones,
    cmd_plan,
    cmd_plans,
    cmd_priorities,
    cmd_project,
    cmd_projects,
    cmd_results,
    cmd_run,
    cmd_runs,
    cmd_sections,
    cmd_statuses,
    cmd_suites,
    cmd_tests,
    cmd_user,
    cmd_users,
)
from testrail_cli.exceptions import CliError

HELP_TEXT = """\
Usage: testrail <command> [args...]

Global flags:
  --format table          Output as readable text instead of JSON (default: json)
  --quiet, -q             Suppress mutation confirmations in table mode
  --verbose, -v           Enable HTTP request logging
  --version               Show version number

Configuration (.env or environment):
  TESTRAIL_URL, TESTRAIL_USER, TESTRAIL_PASSWORD (password or API key)

Commands:
  projects                - List all projects
  project <id>            - Show one project
  suites <project_id>     - List suites of a project
  sections <project_id>   - List sections of a suite
    --suite <id>            (required) Suite to list
  cases <project_id>      - List test cases
    --suite <id>            (required) Suite to list
    --section <id>          Only cases of one section
  case <id>               - Show one case with its custom fields
  runs <project_id>       - List test runs
  run <id>                - Show one run with result counts
  tests <run_id>          - List tests of a run
  plans <project_id>      - List test plans
  plan <id>               - Show one plan with its entries
  milestones <project_id> - List milestones
  users                   - List users
  user --email <address>  - Find a user by email
  statuses                - List result statuses
  priorities              - List case priorities
  results <test_id>       - List results of a test (latest first)
    --limit <n>             Return at most n results
  add-result <test_id>    - Record a result for a test
    --status <s>            (required) passed, blocked, untested, retest, failed
                            or a numeric status id
    --comment <text>        Result comment
    --build <version>       Version or build tested
    --defects <ids>         Comma-separated defect ids
    --custom <json>         Custom fields, e.g. '{"custom_env": "staging"}'
  add-run <project_id>    - Create a test run
    --suite <id>            (required) Suite of the run
    --name <text>           (required) Run name
    --description <text>    Run description
    --milestone <id>        Milestone to link
    --case <id>             Only include this case (repeatable); without it
                            the run includes every case of the suite
    --custom <json>         Custom fields
  close-run <id>          - Close a run (cannot be undone)
  close-plan <id>         - Close a plan (cannot be undone)
  delete-run <id> --confirm
                          - PERMANENTLY delete a run (requires --confirm)
"""


# ---------------------------------------------------------------------------
# Global flag extraction (before argparse, so --format works after subcommand)
# ---------------------------------------------------------------------------


def _extract_global_flags(argv):
    """Extract global flags from argv regardless of position.

    Returns (format_str, quiet, verbose, remaining_argv).
    Handles --version directly.
    """
    fmt = "json"
    quiet = False
    verbose = False
    remaining = []
    i = 0
    while i < len(argv):
        if argv[i] == "--version":
            print(f"testrail-cli {config.VERSION}")
            sys.exit(0)
        elif argv[i] in ("--quiet", "-q"):
            quiet = True
            i += 1
            continue
        elif argv[i] in ("--verbose", "-v"):
            verbose = True
            i += 1
            continue
        elif argv[i] == "--format" and i + 1 < len(argv):
            fmt = argv[i + 1]
            if fmt not in config.VALID_FORMATS:
                raise CliError(f"[ERROR] Invalid format '{fmt}'. Use: json, table")
            i += 2
            continue
        else:
            remaining.append(argv[i])
        i += 1
    if quiet and verbose:
        raise CliError("[ERROR] --quiet and --verbose are mutually exclusive.")
    return fmt, quiet, verbose, remaining


# ---------------------------------------------------------------------------
# Argument parser
# ---------------------------------------------------------------------------


class _SubcommandParser(argparse.ArgumentParser):
    """Subparser that raises CliError instead of printing full help text."""

    def error(self, message):
        raise CliError(f"[ERROR] {message}")


def _positive_int(value):
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("must be a positive integer") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer")
    return parsed


def build_parser():
    parser = _SubcommandParser(
        prog="testrail",
        description="CLI tool for reading and updating a TestRail instance",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", "-h", action="store_true", dest="show_help")
    sub = parser.add_subparsers(dest="command", parser_class=_SubcommandParser)

    # --- instance-wide listings ---
    sub.add_parser("projects").set_defaults(func=cmd_projects)
    sub.add_parser("users").set_defaults(func=cmd_users)
    sub.add_parser("statuses").set_defaults(func=cmd_statuses)
    sub.add_parser("priorities").set_defaults(func=cmd_priorities)

    # --- per-project listings ---
    for name, handler in (
        ("suites", cmd_suites),
        ("runs", cmd_runs),
        ("plans", cmd_plans),
        ("milestones", cmd_milestones),
    ):
        p = sub.add_parser(name)
        p.add_argument("project_id", type=_positive_int)
        p.set_defaults(func=handler)

    # --- single records ---
    for name, dest, handler in (
        ("project", "project_id", cmd_project),
        ("case", "case_id", cmd_case),
        ("run", "run_id", cmd_run),
        ("plan", "plan_id", cmd_plan),
    ):
        p = sub.add_parser(name)
        p.add_argument(dest, type=_positive_int)
        p.set_defaults(func=handler)

    # --- sections / cases ---
    p = sub.add_parser("sections")
    p.add_argument("project_id", type=_positive_int)
    p.add_argument("--suite", type=_positive_int, required=True)
    p.set_defaults(func=cmd_sections)

    p = sub.add_parser("cases")
    p.add_argument("project_id", type=_positive_int)
    p.add_argument("--suite", type=_positive_int, required=True)
    p.add_argument("--section", type=_positive_int)
    p.set_defaults(func=cmd_cases)

    # --- tests ---
    p = sub.add_parser("tests")
    p.add_argument("run_id", type=_positive_int)
    p.set_defaults(func=cmd_tests)

    # --- user ---
    p = sub.add_parser("user")
    p.add_argument("--email", required=True)
    p.set_defaults(func=cmd_user)

    # --- results ---
    p = sub.add_parser("results")
    p.add_argument("test_id", type=_positive_int)
    p.add_argument("--limit", type=_positive_int)
    p.set_defaults(func=cmd_results)

    # --- add-result ---
    p = sub.add_parser("add-result")
    p.add_argument("test_id", type=_positive_int)
    p.add_argument("--status", required=True)
    p.add_argument("--comment")
    p.add_argument("--build")
    p.add_argument("--defects")
    p.add_argument("--custom")
    p.set_defaults(func=cmd_add_result)

    # --- add-run ---
    p = sub.add_parser("add-run")
    p.add_argument("project_id", type=_positive_int)
    p.add_argument("--suite", type=_positive_int, required=True)
    p.add_argument("--name", required=True)
    p.add_argument("--description")
    p.add_argument("--milestone", type=_positive_int)
    p.add_argument("--case", type=_positive_int, action="append")
    p.add_argument("--custom")
    p.set_defaults(func=cmd_add_run)

    # --- close-run / close-plan ---
    p = sub.add_parser("close-run")
    p.add_argument("run_id", type=_positive_int)
    p.set_defaults(func=cmd_close_run)
    p = sub.add_parser("close-plan")
    p.add_argument("plan_id", type=_positive_int)
    p.set_defaults(func=cmd_close_plan)

    # --- delete-run ---
    p = sub.add_parser("delete-run")
    p.add_argument("run_id", type=_positive_int)
    p.add_argument("--confirm", action="store_true")
    p.set_defaults(func=cmd_delete_run)

    # --- version (bare word) ---
    sub.add_parser("version").set_defaults(func=None)

    return parser


# ---------------------------------------------------------------------------
# Command dispatch
# ---------------------------------------------------------------------------


def _error_type_from_message(message):
    if message.startswith("[SETUP_NEEDED]"):
        return "setup_needed"
    if message.startswith("[ERROR]"):
        return "error"
    return "cli_error"


def _emit_cli_error(err, fmt):
    msg = str(err)
    if fmt == "json":
        payload = {
            "ok": False,
            "schema_version": config.CONTRACT_SCHEMA_VERSION,
            "error": {
                "type": _error_type_from_message(msg),
                "message": msg,
                "exit_code": getattr(err, "exit_code", 1),
            },
        }
        print(json.dumps(payload, ensure_ascii=False), file=sys.stderr)
        return
    print(msg, file=sys.stderr)


def main():
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8", errors="replace")

    if len(sys.argv) < 2:
        print(HELP_TEXT)
        sys.exit(0)

    fmt = "json"
    try:
        # Extract global flags from anywhere in argv
        fmt, quiet, verbose, remaining_argv = _extract_global_flags(sys.argv[1:])
        config.RUNTIME_QUIET = quiet
        config.RUNTIME_VERBOSE = verbose
        if verbose:
            config.HTTP_LOG_ENABLED = True

        if not remaining_argv:
            print(HELP_TEXT)
            sys.exit(0)

        parser = build_parser()
        ns = parser.parse_args(remaining_argv)
        ns.format = fmt  # inject global format flag

        if ns.show_help or not ns.command:
            print(HELP_TEXT)
            sys.exit(0)

        cmd = ns.command

        if cmd == "version":
            print(f"testrail-cli {config.VERSION}")
            sys.exit(0)

        if cmd == "delete-run" and not ns.confirm:
            raise CliError(
                "[ERROR] Permanent deletion requires --confirm flag.\n"
                f"Did you mean: testrail close-run {ns.run_id}"
            )

        handler = getattr(ns, "func", None)
        if handler:
            handler(ns)
        else:
            raise CliError(f"[ERROR] Unknown command: {cmd}")

    except CliError as e:
        _emit_cli_error(e, fmt)
        sys.exit(e.exit_code)


if __name__ == "__main__":
    main()
